"""Master API router: includes all sub-routers."""

from fastapi import APIRouter

from .routes.conditions import router as conditions_router
from .routes.dashboards import router as dashboards_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(conditions_router)
api_router.include_router(dashboards_router)
