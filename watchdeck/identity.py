"""Request-scoped identity passed explicitly into services."""

from dataclasses import dataclass

from .models.user import ADMIN_USER_TYPES, USER_TYPE_ZABBIX_USER


@dataclass(frozen=True)
class Identity:
    userid: int
    user_type: int = USER_TYPE_ZABBIX_USER
    debug_mode: bool = False

    @property
    def is_admin(self) -> bool:
        return self.user_type in ADMIN_USER_TYPES
