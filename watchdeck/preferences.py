"""Per-user preference store backed by the profiles table."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models.profile import PROFILE_TYPE_INT, PROFILE_TYPE_STR, Profile
from .utils.logging import get_logger

logger = get_logger("preferences")


class ProfileStore:
    """Reads and writes single named values scoped to ``(user, idx2)``.

    Writes run in their own short session and commit immediately, so they
    never join (or roll back with) the caller's transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, userid: int, idx: str, default=None, idx2: int = 0):
        async with self._session_factory() as session:
            profile = (await session.execute(
                select(Profile).where(
                    Profile.userid == userid,
                    Profile.idx == idx,
                    Profile.idx2 == idx2,
                )
            )).scalar_one_or_none()

        if profile is None:
            return default
        return profile.value_int if profile.type == PROFILE_TYPE_INT else profile.value_str

    async def update(self, userid: int, idx: str, value, value_type: int = PROFILE_TYPE_INT, idx2: int = 0) -> None:
        async with self._session_factory() as session:
            profile: Optional[Profile] = (await session.execute(
                select(Profile).where(
                    Profile.userid == userid,
                    Profile.idx == idx,
                    Profile.idx2 == idx2,
                )
            )).scalar_one_or_none()

            if profile is None:
                profile = Profile(userid=userid, idx=idx, idx2=idx2)
                session.add(profile)

            profile.type = value_type
            if value_type == PROFILE_TYPE_STR:
                profile.value_str, profile.value_int = str(value), None
            else:
                profile.value_int, profile.value_str = int(value), None

            await session.commit()

        logger.debug("profile_updated", userid=userid, idx=idx, idx2=idx2, value=value)
