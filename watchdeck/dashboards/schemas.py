"""Request schemas for dashboard create, update and delete."""

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from ..models.dashboard import (
    DASHBOARD_NAME_LENGTH,
    PERM_READ,
    PERM_READ_WRITE,
    PRIVATE_SHARING,
    PUBLIC_SHARING,
    WIDGET_NAME_LENGTH,
    WIDGET_TYPE_LENGTH,
)
from .grid import MAX_COL, MAX_ROW

Permission = Literal[PERM_READ, PERM_READ_WRITE]
Sharing = Literal[PUBLIC_SHARING, PRIVATE_SHARING]
ObjectId = Annotated[int, Field(gt=0)]


def find_duplicate(items: list, attr: str | None = None) -> tuple[int, object] | None:
    """Return ``(index, value)`` of the first repeated value across objects.

    ``attr=None`` compares the items themselves; unset (``None``) values are
    never duplicates.
    """
    seen = set()
    for index, item in enumerate(items):
        value = item if attr is None else getattr(item, attr)
        if value is None:
            continue
        if value in seen:
            return index, value
        seen.add(value)
    return None


def _reject_duplicates(items: list, attr: str) -> list:
    duplicate = find_duplicate(items, attr)
    if duplicate is not None:
        raise ValueError(f"value ({attr})=({duplicate[1]}) already exists")
    return items


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class UserShare(_Strict):
    userid: ObjectId
    permission: Permission


class UserGroupShare(_Strict):
    usrgrpid: ObjectId
    permission: Permission


class WidgetInput(_Strict):
    type: str = Field(min_length=1, max_length=WIDGET_TYPE_LENGTH)
    name: str = Field("", max_length=WIDGET_NAME_LENGTH)
    row: int = Field(0, ge=0, le=MAX_ROW)
    col: int = Field(0, ge=0, le=MAX_COL)
    height: int = Field(2, ge=1, le=32)
    width: int = Field(1, ge=1, le=12)


class _DashboardChildren(_Strict):
    users: Optional[list[UserShare]] = None
    user_groups: Optional[list[UserGroupShare]] = Field(None, alias="userGroups")
    widgets: Optional[list[WidgetInput]] = None

    @field_validator("users")
    @classmethod
    def _unique_users(cls, v):
        return v if v is None else _reject_duplicates(v, "userid")

    @field_validator("user_groups")
    @classmethod
    def _unique_groups(cls, v):
        return v if v is None else _reject_duplicates(v, "usrgrpid")


class DashboardCreate(_DashboardChildren):
    name: str = Field(min_length=1, max_length=DASHBOARD_NAME_LENGTH)
    userid: Optional[ObjectId] = None
    private: Sharing = PRIVATE_SHARING


class DashboardUpdate(_DashboardChildren):
    """Patch of an existing dashboard: ``None`` means the field was not sent."""

    dashboardid: ObjectId
    name: Optional[str] = Field(None, min_length=1, max_length=DASHBOARD_NAME_LENGTH)
    userid: Optional[ObjectId] = None
    private: Optional[Sharing] = None

    @model_validator(mode="after")
    def _reject_nulls(self):
        # An explicit null is not "absent".
        for name in ("name", "userid", "private", "users", "user_groups", "widgets"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"field {name} cannot be null")
        return self


CreateRequest = Annotated[list[DashboardCreate], Field(min_length=1)]
UpdateRequest = Annotated[list[DashboardUpdate], Field(min_length=1)]
DeleteRequest = Annotated[list[ObjectId], Field(min_length=1)]

create_adapter = TypeAdapter(CreateRequest)
update_adapter = TypeAdapter(UpdateRequest)
delete_adapter = TypeAdapter(DeleteRequest)
