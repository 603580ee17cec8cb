"""Operator and value validation for action conditions."""

import ipaddress
import re
from typing import Optional, Protocol, Sequence, Union

from .catalog import (
    CONDITION_TYPE_DHOST_IP,
    CONDITION_TYPE_DOBJECT,
    CONDITION_TYPE_DSERVICE_PORT,
    CONDITION_TYPE_DSERVICE_TYPE,
    CONDITION_TYPE_DSTATUS,
    CONDITION_TYPE_DUPTIME,
    CONDITION_TYPE_DVALUE,
    CONDITION_TYPE_EVENT_ACKNOWLEDGED,
    CONDITION_TYPE_EVENT_TAG_VALUE,
    CONDITION_TYPE_EVENT_TYPE,
    CONDITION_TYPE_SUPPRESSED,
    CONDITION_TYPE_TIME_PERIOD,
    CONDITION_TYPE_TRIGGER_SEVERITY,
    get_operators_by_conditiontype,
)

ConditionValue = Union[str, Sequence[str], None]

SEC_PER_MONTH = 2_592_000

TRIGGER_SEVERITIES = range(0, 6)
DISCOVERY_SERVICE_TYPES = range(0, 16)
DISCOVERY_OBJECTS = (1, 2)
DISCOVERY_STATUSES = (0, 1, 2, 3)
INTERNAL_EVENT_TYPES = range(0, 6)
ACKNOWLEDGED_VALUES = (0, 1)

_TIME_PERIOD_RE = re.compile(
    r"^([1-7])(?:-([1-7]))?,([0-2]?\d):([0-5]\d)-([0-2]?\d):([0-5]\d)$"
)
_LAST_OCTET_RANGE_RE = re.compile(r"^(\d{1,3}\.\d{1,3}\.\d{1,3}\.)(\d{1,3})-(\d{1,3})$")

# Types whose value may legitimately be empty.
_EMPTY_VALUE_ALLOWED = (CONDITION_TYPE_SUPPRESSED, CONDITION_TYPE_DVALUE)


class ConditionValidator(Protocol):
    def validate(
        self,
        condition_type: int,
        operator: Optional[int],
        value: ConditionValue,
        value2: Optional[str] = None,
    ) -> Optional[str]: ...


def _is_int_in(value: str, allowed) -> bool:
    return value.strip().isdigit() and int(value) in allowed


def _valid_time_period(value: str) -> bool:
    for period in value.split(";"):
        match = _TIME_PERIOD_RE.match(period.strip())
        if not match:
            return False
        day_from, day_to, h_from, m_from, h_to, m_to = match.groups()
        if day_to is not None and int(day_to) < int(day_from):
            return False
        start = int(h_from) * 60 + int(m_from)
        end = int(h_to) * 60 + int(m_to)
        if int(h_from) > 24 or int(h_to) > 24 or end > 24 * 60 or start >= end:
            return False
    return True


def _valid_ip_range(value: str) -> bool:
    for item in value.split(","):
        item = item.strip()
        if not item:
            return False
        match = _LAST_OCTET_RANGE_RE.match(item)
        if match:
            prefix, first, last = match.groups()
            try:
                ipaddress.ip_address(prefix + first)
            except ValueError:
                return False
            if not (int(first) <= int(last) <= 255):
                return False
            continue
        try:
            if "/" in item:
                ipaddress.ip_network(item, strict=False)
            else:
                ipaddress.ip_address(item)
        except ValueError:
            return False
    return True


def _valid_port_range(value: str) -> bool:
    for item in value.split(","):
        bounds = item.strip().split("-")
        if len(bounds) > 2 or not all(b.isdigit() for b in bounds):
            return False
        ports = [int(b) for b in bounds]
        if any(p > 65535 for p in ports) or ports != sorted(ports):
            return False
    return True


class ActionConditionValidator:
    """Checks an action condition's operator and value for its type.

    ``validate`` returns ``None`` for a sound condition and an error message
    otherwise. List values (multiselect inputs) are checked element-wise.
    """

    def validate(self, condition_type, operator, value, value2=None):
        if condition_type is None:
            return "Incorrect action condition type."

        if operator not in get_operators_by_conditiontype(condition_type):
            return "Incorrect action condition operator."

        values = [value] if value is None or isinstance(value, str) else list(value)
        if not values:
            values = [None]

        for item in values:
            error = self._validate_value(condition_type, item or "", value2)
            if error is not None:
                return error
        return None

    def _validate_value(self, condition_type: int, value: str, value2: Optional[str]) -> Optional[str]:
        if value == "" and condition_type not in _EMPTY_VALUE_ALLOWED:
            return "Empty action condition."

        if condition_type == CONDITION_TYPE_TRIGGER_SEVERITY:
            if not _is_int_in(value, TRIGGER_SEVERITIES):
                return "Incorrect action condition trigger severity."
        elif condition_type == CONDITION_TYPE_TIME_PERIOD:
            if not _valid_time_period(value):
                return f'Invalid time period "{value}".'
        elif condition_type == CONDITION_TYPE_DHOST_IP:
            if not _valid_ip_range(value):
                return f'Invalid action condition: incorrect IP range "{value}".'
        elif condition_type == CONDITION_TYPE_DSERVICE_TYPE:
            if not _is_int_in(value, DISCOVERY_SERVICE_TYPES):
                return "Incorrect action condition discovery check."
        elif condition_type == CONDITION_TYPE_DSERVICE_PORT:
            if not _valid_port_range(value):
                return f'Incorrect action condition port "{value}".'
        elif condition_type == CONDITION_TYPE_DSTATUS:
            if not _is_int_in(value, DISCOVERY_STATUSES):
                return "Incorrect action condition discovery status."
        elif condition_type == CONDITION_TYPE_DOBJECT:
            if not _is_int_in(value, DISCOVERY_OBJECTS):
                return "Incorrect action condition discovery object."
        elif condition_type == CONDITION_TYPE_DUPTIME:
            if not _is_int_in(value, range(0, SEC_PER_MONTH + 1)):
                return "Incorrect value for discovery uptime/downtime."
        elif condition_type == CONDITION_TYPE_EVENT_TYPE:
            if not _is_int_in(value, INTERNAL_EVENT_TYPES):
                return "Incorrect action condition event type."
        elif condition_type == CONDITION_TYPE_EVENT_ACKNOWLEDGED:
            if not _is_int_in(value, ACKNOWLEDGED_VALUES):
                return "Incorrect action condition acknowledge status."
        elif condition_type == CONDITION_TYPE_EVENT_TAG_VALUE:
            if not value2:
                return "Empty action condition."

        return None
