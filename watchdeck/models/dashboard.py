"""Dashboard, sharing grant and widget models."""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

PUBLIC_SHARING = 0
PRIVATE_SHARING = 1

PERM_READ = 2
PERM_READ_WRITE = 3

DASHBOARD_NAME_LENGTH = 255
WIDGET_TYPE_LENGTH = 255
WIDGET_NAME_LENGTH = 255


class Dashboard(Base):
    __tablename__ = "dashboard"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(DASHBOARD_NAME_LENGTH), unique=True, nullable=False)
    userid: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    private: Mapped[int] = mapped_column(Integer, default=PRIVATE_SHARING, nullable=False)


class DashboardUser(Base):
    __tablename__ = "dashboard_user"
    __table_args__ = (UniqueConstraint("dashboardid", "userid", name="uq_dashboard_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dashboardid: Mapped[int] = mapped_column(
        Integer, ForeignKey("dashboard.id", ondelete="CASCADE"), nullable=False, index=True
    )
    userid: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission: Mapped[int] = mapped_column(Integer, default=PERM_READ, nullable=False)


class DashboardUserGroup(Base):
    __tablename__ = "dashboard_usrgrp"
    __table_args__ = (UniqueConstraint("dashboardid", "usrgrpid", name="uq_dashboard_usrgrp"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dashboardid: Mapped[int] = mapped_column(
        Integer, ForeignKey("dashboard.id", ondelete="CASCADE"), nullable=False, index=True
    )
    usrgrpid: Mapped[int] = mapped_column(
        Integer, ForeignKey("usrgrp.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission: Mapped[int] = mapped_column(Integer, default=PERM_READ, nullable=False)


class Widget(Base):
    __tablename__ = "widget"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dashboardid: Mapped[int] = mapped_column(
        Integer, ForeignKey("dashboard.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(WIDGET_TYPE_LENGTH), nullable=False)
    name: Mapped[str] = mapped_column(String(WIDGET_NAME_LENGTH), default="", nullable=False)
    row: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    col: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    height: Mapped[int] = mapped_column(Integer, default=2, nullable=False)
    width: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
