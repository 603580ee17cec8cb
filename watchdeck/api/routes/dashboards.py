"""Dashboard CRUD routes."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...dashboards.service import DashboardService
from ...dependencies import get_dashboard_service, get_db
from ...middleware.error_handler import api_error_to_http

router = APIRouter(prefix="/dashboards", tags=["dashboards"])


async def _commit_or_raise(result, db: AsyncSession) -> dict:
    if not result.ok:
        await db.rollback()
        raise api_error_to_http(result.error)
    await db.commit()
    return result.value


@router.get("")
async def get_dashboards(
    dashboardids: Optional[list[int]] = Query(None),
    service: DashboardService = Depends(get_dashboard_service),
):
    """List dashboards with their sharing grants and widgets."""
    return await service.get(dashboardids)


@router.post("")
async def create_dashboards(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Create one or more dashboards."""
    return await _commit_or_raise(await service.create(payload), db)


@router.put("")
async def update_dashboards(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Update one or more dashboards; omitted fields stay untouched."""
    return await _commit_or_raise(await service.update(payload), db)


@router.post("/delete")
async def delete_dashboards(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Delete dashboards along with their grants and widgets."""
    return await _commit_or_raise(await service.delete(payload), db)
