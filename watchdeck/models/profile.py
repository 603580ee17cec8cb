"""Per-user preference values."""

from typing import Optional

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

PROFILE_TYPE_INT = 2
PROFILE_TYPE_STR = 3


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (UniqueConstraint("userid", "idx", "idx2", name="uq_profile_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    userid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    idx: Mapped[str] = mapped_column(String(96), nullable=False)
    idx2: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    value_int: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    value_str: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    type: Mapped[int] = mapped_column(Integer, default=PROFILE_TYPE_INT, nullable=False)
