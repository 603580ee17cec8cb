"""Audit sink for dashboard changes."""

from enum import Enum
from typing import Any, Optional, Protocol

from .utils.logging import get_logger

logger = get_logger("audit")

AUDIT_RESOURCE_DASHBOARD = "dashboard"


class AuditAction(str, Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class AuditSink(Protocol):
    def record(
        self,
        action: AuditAction,
        resource: str,
        resourceid: int,
        name: str,
        before: Optional[dict[str, Any]] = None,
        after: Optional[dict[str, Any]] = None,
    ) -> None: ...


class LogAuditSink:
    """Writes each audit record as a structured log event."""

    def __init__(self, actor: int | None = None):
        self._actor = actor

    def record(self, action, resource, resourceid, name, before=None, after=None) -> None:
        logger.info(
            "audit_record",
            action=action.value,
            resource=resource,
            resourceid=resourceid,
            name=name,
            actor=self._actor,
            before=before,
            after=after,
        )
