"""SQLAlchemy models package."""

from .base import Base
from .user import User, UserGroup
from .dashboard import Dashboard, DashboardUser, DashboardUserGroup, Widget
from .profile import Profile

__all__ = [
    "Base",
    "User",
    "UserGroup",
    "Dashboard",
    "DashboardUser",
    "DashboardUserGroup",
    "Widget",
    "Profile",
]
