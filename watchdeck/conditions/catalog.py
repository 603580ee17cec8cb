"""Action condition catalog: event sources, condition types and operators."""

POPUP_CONDITION_TYPE_ACTION = 0

EVENT_SOURCE_TRIGGERS = 0
EVENT_SOURCE_DISCOVERY = 1
EVENT_SOURCE_AUTO_REGISTRATION = 2
EVENT_SOURCE_INTERNAL = 3

EVENT_SOURCES = (
    EVENT_SOURCE_TRIGGERS,
    EVENT_SOURCE_DISCOVERY,
    EVENT_SOURCE_AUTO_REGISTRATION,
    EVENT_SOURCE_INTERNAL,
)

CONDITION_TYPE_HOST_GROUP = 0
CONDITION_TYPE_HOST = 1
CONDITION_TYPE_TRIGGER = 2
CONDITION_TYPE_TRIGGER_NAME = 3
CONDITION_TYPE_TRIGGER_SEVERITY = 4
CONDITION_TYPE_TIME_PERIOD = 6
CONDITION_TYPE_DHOST_IP = 7
CONDITION_TYPE_DSERVICE_TYPE = 8
CONDITION_TYPE_DSERVICE_PORT = 9
CONDITION_TYPE_DSTATUS = 10
CONDITION_TYPE_DUPTIME = 11
CONDITION_TYPE_DVALUE = 12
CONDITION_TYPE_TEMPLATE = 13
CONDITION_TYPE_EVENT_ACKNOWLEDGED = 14
CONDITION_TYPE_APPLICATION = 15
CONDITION_TYPE_SUPPRESSED = 16
CONDITION_TYPE_DRULE = 18
CONDITION_TYPE_DCHECK = 19
CONDITION_TYPE_PROXY = 20
CONDITION_TYPE_DOBJECT = 21
CONDITION_TYPE_HOST_NAME = 22
CONDITION_TYPE_EVENT_TYPE = 23
CONDITION_TYPE_HOST_METADATA = 24
CONDITION_TYPE_EVENT_TAG = 25
CONDITION_TYPE_EVENT_TAG_VALUE = 26

CONDITION_OPERATOR_EQUAL = 0
CONDITION_OPERATOR_NOT_EQUAL = 1
CONDITION_OPERATOR_LIKE = 2
CONDITION_OPERATOR_NOT_LIKE = 3
CONDITION_OPERATOR_IN = 4
CONDITION_OPERATOR_MORE_EQUAL = 5
CONDITION_OPERATOR_LESS_EQUAL = 6
CONDITION_OPERATOR_NOT_IN = 7
CONDITION_OPERATOR_REGEXP = 8
CONDITION_OPERATOR_NOT_REGEXP = 9
CONDITION_OPERATOR_YES = 10
CONDITION_OPERATOR_NO = 11

CONDITION_TYPE_NAMES = {
    CONDITION_TYPE_HOST_GROUP: "Host group",
    CONDITION_TYPE_TEMPLATE: "Template",
    CONDITION_TYPE_HOST: "Host",
    CONDITION_TYPE_TRIGGER: "Trigger",
    CONDITION_TYPE_TRIGGER_NAME: "Trigger name",
    CONDITION_TYPE_TRIGGER_SEVERITY: "Trigger severity",
    CONDITION_TYPE_TIME_PERIOD: "Time period",
    CONDITION_TYPE_SUPPRESSED: "Problem is suppressed",
    CONDITION_TYPE_DRULE: "Discovery rule",
    CONDITION_TYPE_DCHECK: "Discovery check",
    CONDITION_TYPE_DOBJECT: "Discovery object",
    CONDITION_TYPE_PROXY: "Proxy",
    CONDITION_TYPE_DHOST_IP: "Host IP",
    CONDITION_TYPE_DSERVICE_TYPE: "Service type",
    CONDITION_TYPE_DSERVICE_PORT: "Service port",
    CONDITION_TYPE_DSTATUS: "Discovery status",
    CONDITION_TYPE_DUPTIME: "Uptime/Downtime",
    CONDITION_TYPE_DVALUE: "Received value",
    CONDITION_TYPE_EVENT_ACKNOWLEDGED: "Event acknowledged",
    CONDITION_TYPE_APPLICATION: "Application",
    CONDITION_TYPE_HOST_NAME: "Host name",
    CONDITION_TYPE_EVENT_TYPE: "Event type",
    CONDITION_TYPE_HOST_METADATA: "Host metadata",
    CONDITION_TYPE_EVENT_TAG: "Tag",
    CONDITION_TYPE_EVENT_TAG_VALUE: "Tag value",
}

# Condition types accepted by the action condition popup.
ACTION_CONDITION_TYPES = tuple(CONDITION_TYPE_NAMES)

OPERATOR_NAMES = {
    CONDITION_OPERATOR_EQUAL: "=",
    CONDITION_OPERATOR_NOT_EQUAL: "<>",
    CONDITION_OPERATOR_LIKE: "contains",
    CONDITION_OPERATOR_NOT_LIKE: "does not contain",
    CONDITION_OPERATOR_IN: "in",
    CONDITION_OPERATOR_MORE_EQUAL: ">=",
    CONDITION_OPERATOR_LESS_EQUAL: "<=",
    CONDITION_OPERATOR_NOT_IN: "not in",
    CONDITION_OPERATOR_YES: "Yes",
    CONDITION_OPERATOR_NO: "No",
    CONDITION_OPERATOR_REGEXP: "matches",
    CONDITION_OPERATOR_NOT_REGEXP: "does not match",
}

CONDITION_OPERATORS = tuple(OPERATOR_NAMES)

_EQUALITY = (CONDITION_OPERATOR_EQUAL, CONDITION_OPERATOR_NOT_EQUAL)
_SUBSTRING = (CONDITION_OPERATOR_LIKE, CONDITION_OPERATOR_NOT_LIKE)
_RANGE = (CONDITION_OPERATOR_MORE_EQUAL, CONDITION_OPERATOR_LESS_EQUAL)
_PATTERN = _SUBSTRING + (CONDITION_OPERATOR_REGEXP, CONDITION_OPERATOR_NOT_REGEXP)

OPERATORS_BY_CONDITION_TYPE = {
    CONDITION_TYPE_HOST_GROUP: _EQUALITY,
    CONDITION_TYPE_TEMPLATE: _EQUALITY,
    CONDITION_TYPE_HOST: _EQUALITY,
    CONDITION_TYPE_TRIGGER: _EQUALITY,
    CONDITION_TYPE_TRIGGER_NAME: _SUBSTRING,
    CONDITION_TYPE_TRIGGER_SEVERITY: _EQUALITY + _RANGE,
    CONDITION_TYPE_TIME_PERIOD: (CONDITION_OPERATOR_IN, CONDITION_OPERATOR_NOT_IN),
    CONDITION_TYPE_SUPPRESSED: (CONDITION_OPERATOR_YES, CONDITION_OPERATOR_NO),
    CONDITION_TYPE_DRULE: _EQUALITY,
    CONDITION_TYPE_DCHECK: _EQUALITY,
    CONDITION_TYPE_DOBJECT: (CONDITION_OPERATOR_EQUAL,),
    CONDITION_TYPE_PROXY: _EQUALITY,
    CONDITION_TYPE_DHOST_IP: _EQUALITY,
    CONDITION_TYPE_DSERVICE_TYPE: _EQUALITY,
    CONDITION_TYPE_DSERVICE_PORT: _EQUALITY,
    CONDITION_TYPE_DSTATUS: (CONDITION_OPERATOR_EQUAL,),
    CONDITION_TYPE_DUPTIME: _RANGE,
    CONDITION_TYPE_DVALUE: _EQUALITY + _RANGE + _SUBSTRING,
    CONDITION_TYPE_EVENT_ACKNOWLEDGED: (CONDITION_OPERATOR_EQUAL,),
    CONDITION_TYPE_APPLICATION: (CONDITION_OPERATOR_EQUAL,) + _SUBSTRING,
    CONDITION_TYPE_HOST_NAME: _PATTERN,
    CONDITION_TYPE_EVENT_TYPE: (CONDITION_OPERATOR_EQUAL,),
    CONDITION_TYPE_HOST_METADATA: _PATTERN,
    CONDITION_TYPE_EVENT_TAG: _EQUALITY + _SUBSTRING,
    CONDITION_TYPE_EVENT_TAG_VALUE: _EQUALITY + _SUBSTRING,
}

CONDITIONS_BY_EVENT_SOURCE = {
    EVENT_SOURCE_TRIGGERS: (
        CONDITION_TYPE_APPLICATION,
        CONDITION_TYPE_TRIGGER_NAME,
        CONDITION_TYPE_TRIGGER,
        CONDITION_TYPE_TRIGGER_SEVERITY,
        CONDITION_TYPE_HOST,
        CONDITION_TYPE_HOST_GROUP,
        CONDITION_TYPE_SUPPRESSED,
        CONDITION_TYPE_EVENT_TAG,
        CONDITION_TYPE_EVENT_TAG_VALUE,
        CONDITION_TYPE_TEMPLATE,
        CONDITION_TYPE_TIME_PERIOD,
    ),
    EVENT_SOURCE_DISCOVERY: (
        CONDITION_TYPE_DHOST_IP,
        CONDITION_TYPE_DCHECK,
        CONDITION_TYPE_DOBJECT,
        CONDITION_TYPE_DRULE,
        CONDITION_TYPE_DSTATUS,
        CONDITION_TYPE_PROXY,
        CONDITION_TYPE_DVALUE,
        CONDITION_TYPE_DSERVICE_PORT,
        CONDITION_TYPE_DSERVICE_TYPE,
        CONDITION_TYPE_DUPTIME,
    ),
    EVENT_SOURCE_AUTO_REGISTRATION: (
        CONDITION_TYPE_HOST_NAME,
        CONDITION_TYPE_PROXY,
        CONDITION_TYPE_HOST_METADATA,
    ),
    EVENT_SOURCE_INTERNAL: (
        CONDITION_TYPE_APPLICATION,
        CONDITION_TYPE_EVENT_TYPE,
        CONDITION_TYPE_HOST,
        CONDITION_TYPE_HOST_GROUP,
        CONDITION_TYPE_TEMPLATE,
    ),
}

# Preselected condition type when the user has no stored preference.
DEFAULT_CONDITION_TYPE_BY_SOURCE = {
    EVENT_SOURCE_TRIGGERS: CONDITION_TYPE_TRIGGER_NAME,
    EVENT_SOURCE_DISCOVERY: CONDITION_TYPE_DHOST_IP,
    EVENT_SOURCE_AUTO_REGISTRATION: CONDITION_TYPE_HOST_NAME,
    EVENT_SOURCE_INTERNAL: CONDITION_TYPE_APPLICATION,
}


def get_conditions_by_eventsource(source: int) -> list[int]:
    """Condition types an action of the given event source may use."""
    return list(CONDITIONS_BY_EVENT_SOURCE[source])


def get_operators_by_conditiontype(condition_type: int) -> list[int]:
    return list(OPERATORS_BY_CONDITION_TYPE.get(condition_type, ()))


def condition_type_name(condition_type: int) -> str:
    return CONDITION_TYPE_NAMES.get(condition_type, "Unknown")


def operator_name(operator: int) -> str:
    return OPERATOR_NAMES.get(operator, "Unknown")
