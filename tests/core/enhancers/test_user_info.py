"""Tests for the user info enhancer."""

import pytest

from error_enhanced.core.enhancers import UserInfoEnhancer
from error_enhanced.core.exceptions import FieldValidationError


@pytest.fixture
def user_info():
    return UserInfoEnhancer()


def test_defaults(user_info):
    assert user_info.user == ""
    assert user_info.session_id == ""
    assert user_info.roles == []
    assert user_info.auth_token == ""
    assert user_info.ip_address == ""
    assert user_info.user_agent == ""
    assert user_info.action_history == []


def test_string_setters_round_trip(user_info):
    user_info.set_user("ada").set_session_id("sess-1").set_auth_token("tok").set_user_agent("curl/8.0")

    assert user_info.user == "ada"
    assert user_info.session_id == "sess-1"
    assert user_info.auth_token == "tok"
    assert user_info.user_agent == "curl/8.0"


@pytest.mark.parametrize("setter", ["set_user", "set_session_id", "set_auth_token", "set_user_agent"])
def test_string_setters_reject_empty(user_info, setter):
    with pytest.raises(FieldValidationError):
        getattr(user_info, setter)("")


def test_roles(user_info):
    assert user_info.set_roles(["admin", "billing"]).roles == ["admin", "billing"]

    with pytest.raises(FieldValidationError):
        user_info.set_roles(["admin", ""])
    with pytest.raises(FieldValidationError):
        user_info.set_roles("admin")
    assert user_info.roles == ["admin", "billing"]


def test_ip_address(user_info):
    assert user_info.set_ip_address("fe80::1").ip_address == "fe80::1"

    with pytest.raises(FieldValidationError) as exc_info:
        user_info.set_ip_address("not-an-ip")
    assert exc_info.value.field == "ip_address"
    assert user_info.ip_address == "fe80::1"


def test_action_history_is_unbounded(user_info):
    for index in range(25):
        user_info.add_action_to_history(f"click-{index}")

    assert len(user_info.action_history) == 25
    assert user_info.action_history[0] == "click-0"

    with pytest.raises(FieldValidationError):
        user_info.add_action_to_history("")
    assert len(user_info.action_history) == 25
