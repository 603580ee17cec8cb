"""Dashboard CRUD service.

Every operation validates its whole input before the first write and
reports failures as a ``Result`` carrying an ``ApiError``. Writes happen in
the caller's transaction; committing is the caller's job.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ..audit import AUDIT_RESOURCE_DASHBOARD, AuditAction, AuditSink
from ..errors import ApiError, Result, from_validation_error
from ..identity import Identity
from ..utils.logging import get_logger
from .grid import check_widget_grid
from .repository import DashboardRepository
from .schemas import (
    DashboardCreate,
    DashboardUpdate,
    create_adapter,
    delete_adapter,
    find_duplicate,
    update_adapter,
)
from .sync import WIDGET_FIELDS, ChangeSet, diff_grants, diff_widgets

logger = get_logger("dashboards.service")

Row = dict[str, Any]


class Operation(str, Enum):
    CREATE = "create"
    UPDATE = "update"


@dataclass
class DashboardChanges:
    """Child relations requested for one dashboard; ``None`` leaves one alone."""

    dashboardid: int
    users: Optional[list[Row]] = None
    user_groups: Optional[list[Row]] = None
    widgets: Optional[list[Row]] = None

    @classmethod
    def from_input(cls, dashboardid: int, dashboard: DashboardCreate | DashboardUpdate) -> "DashboardChanges":
        def dump(items):
            return None if items is None else [item.model_dump() for item in items]

        return cls(
            dashboardid=dashboardid,
            users=dump(dashboard.users),
            user_groups=dump(dashboard.user_groups),
            widgets=dump(dashboard.widgets),
        )


def _duplicate_error(items: list, attr: str | None) -> ApiError | None:
    duplicate = find_duplicate(items, attr)
    if duplicate is None:
        return None
    index, value = duplicate
    path = f"/{index + 1}"
    detail = f"value ({value}) already exists" if attr is None else f"value ({attr})=({value}) already exists"
    return ApiError.parameters(f'Invalid parameter "{path}": {detail}.', path)


class DashboardService:
    """Create, update, delete and read dashboards for one request identity."""

    def __init__(self, repository: DashboardRepository, audit: AuditSink, identity: Identity):
        self._repo = repository
        self._audit = audit
        self._identity = identity

    # --- Read ---

    async def get(self, dashboardids: Optional[list[int]] = None) -> list[Row]:
        """Return dashboards with their grants and widgets."""
        db_dashboards = await self._repo.select_dashboards(dashboardids)
        if not db_dashboards:
            return []

        ids = list(db_dashboards)
        result = {
            dashboardid: {
                "dashboardid": dashboardid,
                "name": row["name"],
                "userid": row["userid"],
                "private": row["private"],
                "users": [],
                "userGroups": [],
                "widgets": [],
            }
            for dashboardid, row in db_dashboards.items()
        }
        for row in await self._repo.select_children("dashboard_user", ids):
            result[row["dashboardid"]]["users"].append(
                {"userid": row["userid"], "permission": row["permission"]}
            )
        for row in await self._repo.select_children("dashboard_usrgrp", ids):
            result[row["dashboardid"]]["userGroups"].append(
                {"usrgrpid": row["usrgrpid"], "permission": row["permission"]}
            )
        for row in await self._repo.select_children("widget", ids):
            widget = {"widgetid": row["id"]}
            widget.update((name, row[name]) for name in WIDGET_FIELDS)
            result[row["dashboardid"]]["widgets"].append(widget)

        return list(result.values())

    async def _snapshots(self, dashboardids: list[int]) -> dict[int, Row]:
        """Full dashboards (grants and widgets included) for audit records."""
        return {d["dashboardid"]: d for d in await self.get(dashboardids)}

    # --- Create ---

    async def create(self, payload: Any) -> Result[dict]:
        try:
            dashboards = create_adapter.validate_python(payload)
        except ValidationError as exc:
            return Result.failure(from_validation_error(exc))

        for dashboard in dashboards:
            if dashboard.userid is None:
                dashboard.userid = self._identity.userid

        error = await self._validate_create(dashboards)
        if error is not None:
            return Result.failure(error)

        dashboardids = await self._repo.insert_dashboards([
            {"name": d.name, "userid": d.userid, "private": d.private} for d in dashboards
        ])

        changes = [DashboardChanges.from_input(dashboardid, d) for dashboardid, d in zip(dashboardids, dashboards)]
        await self._sync_children(changes, Operation.CREATE)

        created = await self._snapshots(dashboardids)
        for dashboardid in dashboardids:
            self._audit.record(
                AuditAction.ADD, AUDIT_RESOURCE_DASHBOARD, dashboardid, created[dashboardid]["name"],
                after=created[dashboardid],
            )

        logger.info("dashboards_created", dashboardids=dashboardids, userid=self._identity.userid)
        return Result.success({"dashboardids": dashboardids})

    async def _validate_create(self, dashboards: list[DashboardCreate]) -> ApiError | None:
        error = _duplicate_error(dashboards, "name")
        if error is not None:
            return error

        return (
            await self._check_duplicate_names([d.name for d in dashboards])
            or await self._check_users(dashboards)
            or await self._check_user_groups(dashboards)
            or self._check_widgets((d.name, d.widgets) for d in dashboards)
        )

    # --- Update ---

    async def update(self, payload: Any) -> Result[dict]:
        try:
            dashboards = update_adapter.validate_python(payload)
        except ValidationError as exc:
            return Result.failure(from_validation_error(exc))

        for attr in ("dashboardid", "name"):
            error = _duplicate_error(dashboards, attr)
            if error is not None:
                return Result.failure(error)

        db_dashboards = await self._repo.select_dashboards(d.dashboardid for d in dashboards)
        if any(d.dashboardid not in db_dashboards for d in dashboards):
            return Result.failure(ApiError.no_permissions())

        error = await self._validate_update(dashboards, db_dashboards)
        if error is not None:
            return Result.failure(error)

        dashboardids = [d.dashboardid for d in dashboards]
        before = await self._snapshots(dashboardids)

        patches = []
        for dashboard in dashboards:
            db_dashboard = db_dashboards[dashboard.dashboardid]
            values = {
                name: getattr(dashboard, name)
                for name in ("name", "userid", "private")
                if getattr(dashboard, name) is not None and getattr(dashboard, name) != db_dashboard[name]
            }
            if values:
                patches.append({"id": dashboard.dashboardid, **values})
        await self._repo.update_dashboards(patches)

        changes = [DashboardChanges.from_input(d.dashboardid, d) for d in dashboards]
        await self._sync_children(changes, Operation.UPDATE)

        after = await self._snapshots(dashboardids)
        for dashboardid in dashboardids:
            self._audit.record(
                AuditAction.UPDATE, AUDIT_RESOURCE_DASHBOARD, dashboardid,
                after[dashboardid]["name"], before=before[dashboardid], after=after[dashboardid],
            )

        logger.info(
            "dashboards_updated",
            dashboardids=dashboardids,
            patched=len(patches),
            userid=self._identity.userid,
        )
        return Result.success({"dashboardids": dashboardids})

    async def _validate_update(self, dashboards: list[DashboardUpdate], db_dashboards: dict[int, Row]) -> ApiError | None:
        names = [
            d.name for d in dashboards
            if d.name is not None and d.name != db_dashboards[d.dashboardid]["name"]
        ]
        if names:
            error = await self._check_duplicate_names(names)
            if error is not None:
                return error

        return (
            await self._check_users(dashboards)
            or await self._check_user_groups(dashboards)
            or self._check_widgets(
                (d.name or db_dashboards[d.dashboardid]["name"], d.widgets) for d in dashboards
            )
        )

    # --- Delete ---

    async def delete(self, payload: Any) -> Result[dict]:
        try:
            dashboardids = delete_adapter.validate_python(payload)
        except ValidationError as exc:
            return Result.failure(from_validation_error(exc))

        error = _duplicate_error(dashboardids, None)
        if error is not None:
            return Result.failure(error)

        db_dashboards = await self._repo.select_dashboards(dashboardids)
        if any(dashboardid not in db_dashboards for dashboardid in dashboardids):
            return Result.failure(ApiError.no_permissions())

        before = await self._snapshots(dashboardids)
        await self._repo.delete_dashboards(dashboardids)

        for dashboardid in dashboardids:
            self._audit.record(
                AuditAction.DELETE, AUDIT_RESOURCE_DASHBOARD, dashboardid, before[dashboardid]["name"],
                before=before[dashboardid],
            )

        logger.info("dashboards_deleted", dashboardids=dashboardids, userid=self._identity.userid)
        return Result.success({"dashboardids": dashboardids})

    # --- Checks ---

    async def _check_duplicate_names(self, names: list[str]) -> ApiError | None:
        existing = await self._repo.find_existing_name(names)
        if existing is not None:
            return ApiError.parameters(f'Dashboard "{existing}" already exists.')
        return None

    async def _check_users(self, dashboards: Iterable[DashboardCreate | DashboardUpdate]) -> ApiError | None:
        userids: dict[int, None] = {}

        for dashboard in dashboards:
            if dashboard.userid is not None:
                if dashboard.userid != self._identity.userid and not self._identity.is_admin:
                    return ApiError.parameters("Only administrators can set dashboard owner.")
                userids[dashboard.userid] = None

            for user in dashboard.users or []:
                userids[user.userid] = None

        userids.pop(self._identity.userid, None)
        if not userids:
            return None

        existing = await self._repo.existing_user_ids(userids)
        for userid in userids:
            if userid not in existing:
                return ApiError.parameters(f'User with ID "{userid}" is not available.')
        return None

    async def _check_user_groups(self, dashboards: Iterable[DashboardCreate | DashboardUpdate]) -> ApiError | None:
        usrgrpids: dict[int, None] = {}
        for dashboard in dashboards:
            for group in dashboard.user_groups or []:
                usrgrpids[group.usrgrpid] = None

        if not usrgrpids:
            return None

        existing = await self._repo.existing_usrgrp_ids(usrgrpids)
        for usrgrpid in usrgrpids:
            if usrgrpid not in existing:
                return ApiError.parameters(f'User group with ID "{usrgrpid}" is not available.')
        return None

    @staticmethod
    def _check_widgets(named_widgets) -> ApiError | None:
        for name, widgets in named_widgets:
            if widgets is None:
                continue
            error = check_widget_grid(name, widgets)
            if error is not None:
                return error
        return None

    # --- Child relations ---

    async def _sync_children(self, changes: list[DashboardChanges], operation: Operation) -> None:
        await self._sync_relation(
            "dashboard_user",
            {c.dashboardid: c.users for c in changes if c.users is not None},
            operation,
            lambda desired, persisted: diff_grants(desired, persisted, "userid"),
        )
        await self._sync_relation(
            "dashboard_usrgrp",
            {c.dashboardid: c.user_groups for c in changes if c.user_groups is not None},
            operation,
            lambda desired, persisted: diff_grants(desired, persisted, "usrgrpid"),
        )
        await self._sync_relation(
            "widget",
            {c.dashboardid: c.widgets for c in changes if c.widgets is not None},
            operation,
            diff_widgets,
        )

    async def _sync_relation(self, relation: str, desired: dict[int, list[Row]], operation: Operation, differ) -> ChangeSet:
        if not desired:
            return ChangeSet()

        # Freshly created dashboards have nothing persisted yet.
        persisted = (
            await self._repo.select_children(relation, desired)
            if operation is Operation.UPDATE
            else []
        )
        changes: ChangeSet = differ(desired, persisted)
        if changes:
            await self._repo.apply_changes(relation, changes)
            logger.debug("relation_synced", relation=relation, **changes.counts())
        return changes
