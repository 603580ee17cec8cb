"""Data assembly for the "new action condition" popup."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import Result, from_validation_error
from ..identity import Identity
from ..models.profile import PROFILE_TYPE_INT
from ..preferences import ProfileStore
from ..utils.logging import get_logger
from .catalog import (
    ACTION_CONDITION_TYPES,
    CONDITION_OPERATORS,
    DEFAULT_CONDITION_TYPE_BY_SOURCE,
    EVENT_SOURCES,
    POPUP_CONDITION_TYPE_ACTION,
    condition_type_name,
    get_conditions_by_eventsource,
    get_operators_by_conditiontype,
    operator_name,
)
from .validator import ConditionValidator

logger = get_logger("conditions.popup")

PROFILE_IDX_LAST_TYPE = "popup.condition.actions_last_type"
POPUP_ACTION = "popup.condition.actions"


def _one_of(value, allowed, field: str):
    if value is not None and value not in allowed:
        raise ValueError(f"{field} must be one of {', '.join(str(a) for a in allowed)}")
    return value


class ConditionPopupInput(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: int
    source: int
    validate_: Optional[int] = Field(None, alias="validate")
    condition_type: Optional[int] = None
    operator: Optional[int] = None
    value: Union[str, list[str], None] = None
    value2: Optional[str] = None

    @field_validator("type")
    @classmethod
    def _known_type(cls, v):
        return _one_of(v, (POPUP_CONDITION_TYPE_ACTION,), "type")

    @field_validator("source")
    @classmethod
    def _known_source(cls, v):
        return _one_of(v, EVENT_SOURCES, "source")

    @field_validator("validate_")
    @classmethod
    def _flag(cls, v):
        return _one_of(v, (1,), "validate")

    @field_validator("condition_type")
    @classmethod
    def _known_condition_type(cls, v):
        return _one_of(v, ACTION_CONDITION_TYPES, "condition_type")

    @field_validator("operator")
    @classmethod
    def _known_operator(cls, v):
        return _one_of(v, CONDITION_OPERATORS, "operator")


class ConditionPopupData(BaseModel):
    title: str = "New condition"
    command: str = ""
    message: str = ""
    errors: Optional[list[str]] = None
    action: str = POPUP_ACTION
    type: int
    last_type: int
    source: int
    allowed_conditions: list[int]
    condition_labels: list[dict[str, Any]] = []
    operators: list[dict[str, Any]] = []
    user: dict[str, Any]
    form: Optional[dict[str, str]] = None
    inputs: Optional[dict[str, Any]] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_response(self) -> dict[str, Any]:
        """``errors`` is always sent; ``form`` and ``inputs`` only once validated."""
        return self.model_dump(exclude={"form", "inputs"} if self.form is None else None)


class ConditionPopupAssembler:
    """Builds the popup record for one request.

    Only a supplied ``condition_type`` triggers operator/value validation
    and may overwrite the user's stored last type for the event source.
    """

    def __init__(self, profiles: ProfileStore, validator: ConditionValidator):
        self._profiles = profiles
        self._validator = validator

    async def assemble(self, identity: Identity, params: dict[str, Any]) -> Result[ConditionPopupData]:
        try:
            request = ConditionPopupInput.model_validate(params)
        except ValidationError as exc:
            return Result.failure(from_validation_error(exc))

        last_type = await self._resolve_last_type(identity, request)

        errors: list[str] = []
        if request.condition_type is not None:
            error = self._validator.validate(
                request.condition_type, request.operator, request.value, request.value2
            )
            if error is not None:
                errors.append(error)
                logger.info(
                    "condition_validation_failed",
                    userid=identity.userid,
                    condition_type=request.condition_type,
                    error=error,
                )

        allowed = get_conditions_by_eventsource(request.source)
        data = ConditionPopupData(
            errors=errors or None,
            type=request.type,
            last_type=last_type,
            source=request.source,
            allowed_conditions=allowed,
            condition_labels=[
                {"conditiontype": t, "name": condition_type_name(t)} for t in allowed
            ],
            operators=[
                {"operator": o, "name": operator_name(o)}
                for o in get_operators_by_conditiontype(last_type)
            ],
            user={"debug_mode": identity.debug_mode},
        )

        if request.validate_ and request.condition_type is not None and not errors:
            data.form = {
                "name": "action.edit",
                "param": "add_condition",
                "input_name": "new_condition",
            }
            data.inputs = {
                "conditiontype": request.condition_type,
                "operator": request.operator,
                "value": request.value,
                "value2": request.value2,
            }

        return Result.success(data)

    async def _resolve_last_type(self, identity: Identity, request: ConditionPopupInput) -> int:
        last_type = await self._profiles.get(
            identity.userid,
            PROFILE_IDX_LAST_TYPE,
            DEFAULT_CONDITION_TYPE_BY_SOURCE[request.source],
            idx2=request.source,
        )

        if request.condition_type is not None and request.condition_type != last_type:
            await self._profiles.update(
                identity.userid,
                PROFILE_IDX_LAST_TYPE,
                request.condition_type,
                PROFILE_TYPE_INT,
                idx2=request.source,
            )
            logger.info(
                "condition_preference_updated",
                userid=identity.userid,
                source=request.source,
                previous=last_type,
                condition_type=request.condition_type,
            )
            last_type = request.condition_type

        return last_type
