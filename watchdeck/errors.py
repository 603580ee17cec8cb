"""Structured service errors and the result type services return."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import ValidationError

T = TypeVar("T")

NO_PERMISSIONS_MESSAGE = "No permissions to referred object or it does not exist!"


class ErrorKind(str, Enum):
    PARAMETERS = "parameters"
    PERMISSIONS = "permissions"


@dataclass(frozen=True)
class ApiError:
    kind: ErrorKind
    message: str
    path: Optional[str] = None

    @classmethod
    def parameters(cls, message: str, path: str | None = None) -> "ApiError":
        return cls(ErrorKind.PARAMETERS, message, path)

    @classmethod
    def no_permissions(cls) -> "ApiError":
        # Unknown and forbidden objects are reported identically.
        return cls(ErrorKind.PERMISSIONS, NO_PERMISSIONS_MESSAGE)


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> "Result[T]":
        return cls(error=error)


def format_path(loc: tuple) -> str:
    """Render a pydantic error location as a 1-based parameter path.

    ``(0, "widgets", 1, "row")`` becomes ``/1/widgets/2/row``.
    """
    parts = [str(part + 1) if isinstance(part, int) else str(part) for part in loc]
    return "/" + "/".join(parts)


def from_validation_error(exc: ValidationError) -> ApiError:
    """Convert the first pydantic error into a parameter error."""
    first = exc.errors()[0]
    path = format_path(tuple(first["loc"]))
    reason = first["msg"]
    if reason.startswith("Value error, "):
        reason = reason[len("Value error, "):]
    reason = reason[:1].lower() + reason[1:]
    return ApiError.parameters(f'Invalid parameter "{path}": {reason}.', path)
