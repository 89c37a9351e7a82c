"""
tests.test_validation

Local validation of signup data and profile patches.
"""

from __future__ import annotations

from typing import Any

import pytest

from tiffin_session.domain.users import Role
from tiffin_session.errors import ValidationError
from tiffin_session.session.validation import validate_profile_patch, validate_signup


def _signup(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": "Ravi",
        "email": "ravi@example.com",
        "password": "s3cret!",
        "phone": "555-0202",
        "role": "customer",
    }
    data.update(overrides)
    return data


def test_chef_with_empty_required_fields_is_rejected() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_signup(
            _signup(role="chef", experience="", specialties=[], kitchenAddress="")
        )

    assert "experience" in exc.value.message
    assert "specialties" in exc.value.message
    assert "kitchenAddress" in exc.value.message


def test_chef_specialties_accept_comma_separated_text() -> None:
    request = validate_signup(
        _signup(
            role="chef",
            experience="4",
            specialties="Thali, South Indian, ,Sweets",
            kitchenAddress="4 Spice Road",
        )
    )

    assert request.role is Role.chef
    assert request.specialties == ["Thali", "South Indian", "Sweets"]
    assert request.experience == 4


def test_signup_wire_body_only_carries_the_role_fields() -> None:
    request = validate_signup(
        _signup(kitchenAddress="ignored", preferences={"spiceLevel": "mild"})
    )

    body = request.to_wire()

    assert body["role"] == "customer"
    assert body["preferences"] == {"dietaryRestrictions": [], "spiceLevel": "mild"}
    assert "kitchenAddress" not in body
    assert "specialties" not in body


@pytest.mark.parametrize(
    "overrides",
    [{"email": "not-an-email"}, {"password": "   "}, {"name": ""}, {"role": "waiter"}],
)
def test_invalid_common_fields(overrides: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        validate_signup(_signup(**overrides))


def test_profile_patch_rejects_read_only_fields() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_profile_patch({"phone": "1", "role": "admin", "rating": 5})

    assert exc.value.message == "Read-only fields cannot be updated: rating, role"


def test_profile_patch_numeric_and_spice_checks() -> None:
    assert validate_profile_patch({"experience": "", "deliveryRadius": None}) == {
        "experience": "",
        "deliveryRadius": None,
    }
    with pytest.raises(ValidationError):
        validate_profile_patch({"maxOrdersPerDay": "lots"})
    with pytest.raises(ValidationError):
        validate_profile_patch({"preferences": {"spiceLevel": "volcanic"}})
