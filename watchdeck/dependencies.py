"""FastAPI dependency injection providers."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .audit import LogAuditSink
from .conditions.popup import ConditionPopupAssembler
from .conditions.validator import ActionConditionValidator
from .config import WatchdeckConfig, get_config
from .dashboards.repository import DashboardRepository
from .dashboards.service import DashboardService
from .database import get_session, get_session_factory
from .identity import Identity
from .models.user import User
from .preferences import ProfileStore
from .utils.logging import get_logger
from .utils.security import decode_access_token

_dep_logger = get_logger("dependencies")

security_scheme = HTTPBearer(auto_error=False)

_config_instance: WatchdeckConfig | None = None
_condition_validator: ActionConditionValidator | None = None


def get_app_config() -> WatchdeckConfig:
    """Get the application config singleton."""
    global _config_instance
    if _config_instance is None:
        _config_instance = get_config()
    return _config_instance


async def get_db(config: WatchdeckConfig = Depends(get_app_config)):
    """Get an async database session."""
    async for session in get_session(config):
        yield session


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    config: WatchdeckConfig = Depends(get_app_config),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """Resolve the bearer token to the request identity."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials, config.secret_key, config.jwt_algorithm)
    if payload is None or not str(payload.get("sub", "")).isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = (await db.execute(
        select(User).where(User.id == int(payload["sub"]))
    )).scalar_one_or_none()
    if user is None:
        _dep_logger.info("identity_unknown_user", sub=payload["sub"])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Identity(userid=user.id, user_type=user.type, debug_mode=user.debug_mode)


def get_condition_validator() -> ActionConditionValidator:
    """Get the action condition validator singleton."""
    global _condition_validator
    if _condition_validator is None:
        _condition_validator = ActionConditionValidator()
    return _condition_validator


def get_profile_store(config: WatchdeckConfig = Depends(get_app_config)) -> ProfileStore:
    return ProfileStore(get_session_factory(config))


def get_condition_popup(
    profiles: ProfileStore = Depends(get_profile_store),
    validator: ActionConditionValidator = Depends(get_condition_validator),
) -> ConditionPopupAssembler:
    return ConditionPopupAssembler(profiles, validator)


def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> DashboardService:
    """Request-scoped dashboard service bound to the request session."""
    return DashboardService(DashboardRepository(db), LogAuditSink(actor=identity.userid), identity)
