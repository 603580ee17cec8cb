"""Storage primitives for dashboards and their child relations.

All methods run inside the caller's session; nothing here commits.
"""

from typing import Any, Iterable

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.dashboard import Dashboard, DashboardUser, DashboardUserGroup, Widget
from ..models.user import User, UserGroup
from .sync import ChangeSet

Row = dict[str, Any]

DASHBOARD_COLUMNS = ("id", "name", "userid", "private")

RELATIONS = {
    "dashboard_user": DashboardUser,
    "dashboard_usrgrp": DashboardUserGroup,
    "widget": Widget,
}


def _as_row(obj, columns: Iterable[str]) -> Row:
    return {name: getattr(obj, name) for name in columns}


def _columns(model) -> list[str]:
    return [column.key for column in model.__table__.columns]


class DashboardRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def select_dashboards(self, dashboardids: Iterable[int] | None = None) -> dict[int, Row]:
        query = select(Dashboard).order_by(Dashboard.id).execution_options(populate_existing=True)
        if dashboardids is not None:
            query = query.where(Dashboard.id.in_(list(dashboardids)))
        result = await self._session.execute(query)
        return {d.id: _as_row(d, DASHBOARD_COLUMNS) for d in result.scalars().all()}

    async def find_existing_name(self, names: Iterable[str]) -> str | None:
        result = await self._session.execute(
            select(Dashboard.name).where(Dashboard.name.in_(list(names))).limit(1)
        )
        return result.scalar_one_or_none()

    async def insert_dashboards(self, rows: list[Row]) -> list[int]:
        dashboards = [Dashboard(**row) for row in rows]
        self._session.add_all(dashboards)
        await self._session.flush()
        return [d.id for d in dashboards]

    async def update_dashboards(self, patches: list[Row]) -> None:
        if patches:
            await self._session.execute(update(Dashboard), patches)

    async def delete_dashboards(self, dashboardids: list[int]) -> None:
        await self._session.execute(delete(Dashboard).where(Dashboard.id.in_(dashboardids)))

    async def select_children(self, relation: str, dashboardids: Iterable[int]) -> list[Row]:
        model = RELATIONS[relation]
        query = (
            select(model)
            .where(model.dashboardid.in_(list(dashboardids)))
            .execution_options(populate_existing=True)
        )
        if model is Widget:
            query = query.order_by(Widget.dashboardid, Widget.row, Widget.col)
        else:
            query = query.order_by(model.id)
        result = await self._session.execute(query)
        columns = _columns(model)
        return [_as_row(obj, columns) for obj in result.scalars().all()]

    async def apply_changes(self, relation: str, changes: ChangeSet) -> None:
        """Write a relation's change set: deletes, then patches, then inserts."""
        model = RELATIONS[relation]
        if changes.deletes:
            await self._session.execute(delete(model).where(model.id.in_(changes.deletes)))
        if changes.patches:
            await self._session.execute(update(model), changes.patches)
        if changes.inserts:
            await self._session.execute(insert(model), changes.inserts)

    async def existing_user_ids(self, userids: Iterable[int]) -> set[int]:
        result = await self._session.execute(select(User.id).where(User.id.in_(list(userids))))
        return set(result.scalars().all())

    async def existing_usrgrp_ids(self, usrgrpids: Iterable[int]) -> set[int]:
        result = await self._session.execute(
            select(UserGroup.id).where(UserGroup.id.in_(list(usrgrpids)))
        )
        return set(result.scalars().all())
