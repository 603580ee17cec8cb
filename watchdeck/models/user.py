"""User and user group models."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

USER_TYPE_ZABBIX_USER = 1
USER_TYPE_ZABBIX_ADMIN = 2
USER_TYPE_SUPER_ADMIN = 3

ADMIN_USER_TYPES = (USER_TYPE_ZABBIX_ADMIN, USER_TYPE_SUPER_ADMIN)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    alias: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    type: Mapped[int] = mapped_column(Integer, default=USER_TYPE_ZABBIX_USER, nullable=False)
    debug_mode: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class UserGroup(Base):
    __tablename__ = "usrgrp"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
