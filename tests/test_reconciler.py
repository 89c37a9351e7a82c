"""
tests.test_reconciler

Field precedence of `reconcile_profile` (server → patch → previous).
"""

from __future__ import annotations

from conftest import chef_payload, customer_payload
from tiffin_session.domain.users import Role, SpiceLevel, user_from_wire
from tiffin_session.session.reconciler import reconcile_profile


def test_untouched_fields_survive_an_empty_server_echo() -> None:
    previous = user_from_wire(chef_payload(kitchenName="Old"))

    merged = reconcile_profile(previous, {"phone": "111"}, {})

    assert merged.profile.kitchen_name == "Old"
    assert merged.base.phone == "111"
    assert merged.profile.specialties == previous.profile.specialties


def test_server_value_beats_patch_and_previous() -> None:
    previous = user_from_wire(chef_payload(kitchenName="Old"))

    merged = reconcile_profile(
        previous, {"kitchenName": "Patched"}, {"kitchenName": "Server"}
    )

    assert merged.profile.kitchen_name == "Server"


def test_numeric_placeholders_never_win() -> None:
    previous = user_from_wire(chef_payload(experience=6, maxOrdersPerDay=40))

    merged = reconcile_profile(
        previous,
        {"experience": "", "maxOrdersPerDay": 25, "deliveryRadius": None},
        {"experience": None, "maxOrdersPerDay": ""},
    )

    assert merged.profile.experience == 6
    assert merged.profile.max_orders_per_day == 25
    assert merged.profile.delivery_radius == 5.5


def test_empty_text_from_patch_clears_the_field() -> None:
    previous = user_from_wire(customer_payload(address="12 Curry Lane"))

    merged = reconcile_profile(previous, {"address": ""}, {})

    assert merged.base.address == ""


def test_preferences_resolve_per_nested_field() -> None:
    previous = user_from_wire(customer_payload())

    merged = reconcile_profile(
        previous,
        {"preferences": {"spiceLevel": "hot"}},
        {"preferences": {"dietaryRestrictions": ["vegan"]}},
    )

    prefs = merged.profile.preferences
    assert prefs.dietary_restrictions == frozenset({"vegan"})
    assert prefs.spice_level is SpiceLevel.hot


def test_preferences_default_when_no_tier_supplies_them() -> None:
    previous = user_from_wire(customer_payload(preferences=None))

    merged = reconcile_profile(previous, {}, {})

    assert merged.profile.preferences.dietary_restrictions == frozenset()
    assert merged.profile.preferences.spice_level is None


def test_server_managed_fields_ignore_the_patch() -> None:
    previous = user_from_wire(chef_payload(rating=4.5, isVerified=False))

    merged = reconcile_profile(
        previous,
        {"rating": 5, "isVerified": True, "id": "other"},
        {"updatedAt": "2024-02-02T00:00:00.000Z"},
    )

    assert merged.profile.rating == 4.5
    assert merged.profile.is_verified is False
    assert merged.id == "chef-1"
    assert merged.base.updated_at == "2024-02-02T00:00:00.000Z"


def test_role_and_foreign_fields_are_never_mutated() -> None:
    previous = user_from_wire(customer_payload())

    merged = reconcile_profile(
        previous,
        {"kitchenName": "Sneaky"},
        {"role": "chef", "kitchenName": "Sneaky", "_id": "cust-1"},
    )

    assert merged.role is Role.customer
    assert not hasattr(merged.profile, "kitchen_name")


def test_previous_record_is_not_modified() -> None:
    previous = user_from_wire(chef_payload(kitchenName="Old"))

    reconcile_profile(previous, {"kitchenName": "New"}, {"kitchenName": "New"})

    assert previous.profile.kitchen_name == "Old"


def test_unusable_server_ids_keep_the_known_id() -> None:
    previous = user_from_wire(chef_payload())

    for echo in ({"id": ""}, {"_id": ""}, {"id": None, "_id": ""}):
        assert reconcile_profile(previous, {}, echo).id == "chef-1"

    assert reconcile_profile(previous, {}, {"id": 0}).id == "0"
    assert reconcile_profile(previous, {}, {"id": "", "_id": "mongo-9"}).id == "mongo-9"


def test_blank_email_echo_keeps_the_known_address() -> None:
    previous = user_from_wire(customer_payload())

    merged = reconcile_profile(previous, {}, {"email": ""})

    assert merged.base.email == "asha@example.com"
