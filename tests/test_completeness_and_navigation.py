"""
tests.test_completeness_and_navigation

Pure views over a user: profile completeness and role-aware destinations.
"""

from __future__ import annotations

from conftest import chef_payload, customer_payload
from tiffin_session.domain.completeness import is_profile_incomplete, missing_profile_fields
from tiffin_session.domain.users import user_from_wire
from tiffin_session.session.navigation import (
    CHEF_HOME_PATH,
    DEFAULT_HOME_PATH,
    LOGIN_PATH,
    HistoryNavigator,
    landing_redirect,
    post_auth_destination,
)
from tiffin_session.session.state import SessionState, SessionStatus


def test_customer_with_empty_address_is_incomplete() -> None:
    user = user_from_wire(customer_payload(address="", phone="555"))

    assert is_profile_incomplete(user)
    assert missing_profile_fields(user) == ["address"]


def test_chef_with_all_required_fields_is_complete() -> None:
    user = user_from_wire(chef_payload())

    assert not is_profile_incomplete(user)


def test_chef_missing_fields_are_reported_in_order() -> None:
    data = chef_payload(specialties=[], kitchenName="")
    del data["experience"]
    user = user_from_wire(data)

    assert missing_profile_fields(user) == ["kitchenName", "specialties", "experience"]


def test_admin_uses_the_kitchen_field_set() -> None:
    user = user_from_wire(
        {"id": "a1", "name": "Root", "email": "root@example.com", "phone": "1", "role": "admin"}
    )

    assert missing_profile_fields(user) == [
        "kitchenName",
        "kitchenAddress",
        "specialties",
        "experience",
    ]


def test_session_state_tracks_completeness_of_current_user() -> None:
    state = SessionState(loading=False)
    assert state.status is SessionStatus.unauthenticated
    assert state.profile_incomplete is False

    state.user = user_from_wire(customer_payload(address=""))
    assert state.status is SessionStatus.authenticated
    assert state.profile_incomplete is True

    state.user = user_from_wire(customer_payload())
    assert state.profile_incomplete is False


def test_fresh_state_is_loading() -> None:
    assert SessionState().status is SessionStatus.loading


def test_post_auth_destination_by_role() -> None:
    assert post_auth_destination(user_from_wire(chef_payload())) == CHEF_HOME_PATH
    assert post_auth_destination(user_from_wire(customer_payload())) == DEFAULT_HOME_PATH


def test_landing_redirect() -> None:
    assert landing_redirect(None) == LOGIN_PATH
    assert landing_redirect(user_from_wire(chef_payload())) == CHEF_HOME_PATH
    assert landing_redirect(user_from_wire(customer_payload())) is None


def test_history_navigator_records_pushes() -> None:
    nav = HistoryNavigator()
    assert nav.current is None

    nav.push("/login")
    nav.push("/chef")

    assert nav.history == ["/login", "/chef"]
    assert nav.current == "/chef"
