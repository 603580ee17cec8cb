"""Tests for ActionConditionValidator."""

import pytest

from watchdeck.conditions.catalog import (
    CONDITION_OPERATOR_EQUAL,
    CONDITION_OPERATOR_IN,
    CONDITION_OPERATOR_LIKE,
    CONDITION_OPERATOR_MORE_EQUAL,
    CONDITION_OPERATOR_YES,
    CONDITION_TYPE_DHOST_IP,
    CONDITION_TYPE_DOBJECT,
    CONDITION_TYPE_DSERVICE_PORT,
    CONDITION_TYPE_DUPTIME,
    CONDITION_TYPE_DVALUE,
    CONDITION_TYPE_EVENT_TAG_VALUE,
    CONDITION_TYPE_HOST_GROUP,
    CONDITION_TYPE_SUPPRESSED,
    CONDITION_TYPE_TIME_PERIOD,
    CONDITION_TYPE_TRIGGER_NAME,
    CONDITION_TYPE_TRIGGER_SEVERITY,
)
from watchdeck.conditions.validator import ActionConditionValidator


@pytest.fixture
def validator():
    return ActionConditionValidator()


class TestOperators:
    def test_operator_must_fit_type(self, validator):
        error = validator.validate(CONDITION_TYPE_TRIGGER_NAME, CONDITION_OPERATOR_EQUAL, "cpu")
        assert error == "Incorrect action condition operator."

    def test_missing_operator(self, validator):
        assert validator.validate(CONDITION_TYPE_TRIGGER_NAME, None, "cpu") == (
            "Incorrect action condition operator."
        )

    def test_missing_type(self, validator):
        assert validator.validate(None, 0, "x") == "Incorrect action condition type."


class TestValues:
    def test_empty_value(self, validator):
        assert validator.validate(CONDITION_TYPE_HOST_GROUP, CONDITION_OPERATOR_EQUAL, "") == (
            "Empty action condition."
        )

    def test_empty_allowed_for_suppressed(self, validator):
        assert validator.validate(CONDITION_TYPE_SUPPRESSED, CONDITION_OPERATOR_YES, None) is None

    def test_empty_allowed_for_received_value(self, validator):
        assert validator.validate(CONDITION_TYPE_DVALUE, CONDITION_OPERATOR_LIKE, "") is None

    @pytest.mark.parametrize("value, ok", [("0", True), ("5", True), ("6", False), ("high", False)])
    def test_trigger_severity(self, validator, value, ok):
        error = validator.validate(CONDITION_TYPE_TRIGGER_SEVERITY, CONDITION_OPERATOR_MORE_EQUAL, value)
        assert (error is None) is ok

    def test_severity_list_checked_per_element(self, validator):
        assert validator.validate(CONDITION_TYPE_TRIGGER_SEVERITY, CONDITION_OPERATOR_EQUAL, ["1", "3"]) is None
        assert validator.validate(CONDITION_TYPE_TRIGGER_SEVERITY, CONDITION_OPERATOR_EQUAL, ["1", "9"]) is not None

    @pytest.mark.parametrize("value", ["1-5,09:00-18:00", "1-7,00:00-24:00", "6,10:00-12:00;7,10:00-12:00"])
    def test_valid_time_period(self, validator, value):
        assert validator.validate(CONDITION_TYPE_TIME_PERIOD, CONDITION_OPERATOR_IN, value) is None

    @pytest.mark.parametrize("value", ["8,09:00-18:00", "5-1,09:00-18:00", "1,18:00-09:00", "always"])
    def test_invalid_time_period(self, validator, value):
        assert validator.validate(CONDITION_TYPE_TIME_PERIOD, CONDITION_OPERATOR_IN, value) == (
            f'Invalid time period "{value}".'
        )

    @pytest.mark.parametrize("value", ["192.168.1.1", "10.0.0.0/24", "192.168.1.1-254", "::1, 10.1.1.1"])
    def test_valid_ip_ranges(self, validator, value):
        assert validator.validate(CONDITION_TYPE_DHOST_IP, CONDITION_OPERATOR_EQUAL, value) is None

    @pytest.mark.parametrize("value", ["300.1.1.1", "192.168.1.10-5", "example.com"])
    def test_invalid_ip_ranges(self, validator, value):
        assert validator.validate(CONDITION_TYPE_DHOST_IP, CONDITION_OPERATOR_EQUAL, value) == (
            f'Invalid action condition: incorrect IP range "{value}".'
        )

    @pytest.mark.parametrize("value, ok", [("80", True), ("1-1024,8080", True), ("70000", False), ("90-10", False)])
    def test_service_port(self, validator, value, ok):
        error = validator.validate(CONDITION_TYPE_DSERVICE_PORT, CONDITION_OPERATOR_EQUAL, value)
        assert (error is None) is ok

    def test_discovery_object(self, validator):
        assert validator.validate(CONDITION_TYPE_DOBJECT, CONDITION_OPERATOR_EQUAL, "2") is None
        assert validator.validate(CONDITION_TYPE_DOBJECT, CONDITION_OPERATOR_EQUAL, "3") == (
            "Incorrect action condition discovery object."
        )

    def test_uptime_limited_to_a_month(self, validator):
        assert validator.validate(CONDITION_TYPE_DUPTIME, CONDITION_OPERATOR_MORE_EQUAL, "2592000") is None
        assert validator.validate(CONDITION_TYPE_DUPTIME, CONDITION_OPERATOR_MORE_EQUAL, "2592001") == (
            "Incorrect value for discovery uptime/downtime."
        )

    def test_tag_value_needs_tag(self, validator):
        assert validator.validate(CONDITION_TYPE_EVENT_TAG_VALUE, CONDITION_OPERATOR_EQUAL, "prod") == (
            "Empty action condition."
        )
        assert validator.validate(CONDITION_TYPE_EVENT_TAG_VALUE, CONDITION_OPERATOR_EQUAL, "prod", "env") is None
