"""
tiffin_session.domain.completeness

Profile-completeness check used by profile and onboarding views.
"""

from __future__ import annotations

from typing import Any

from tiffin_session.domain.users import Role, User, user_to_wire

_KITCHEN_FIELDS: tuple[str, ...] = (
    "phone",
    "kitchenName",
    "kitchenAddress",
    "specialties",
    "experience",
)

REQUIRED_PROFILE_FIELDS: dict[Role, tuple[str, ...]] = {
    Role.customer: ("address", "phone"),
    Role.chef: _KITCHEN_FIELDS,
    Role.admin: _KITCHEN_FIELDS,
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, list | tuple | set | frozenset):
        return len(value) == 0
    return False


def missing_profile_fields(user: User) -> list[str]:
    """
    Required fields (wire names) that are absent, empty strings or empty sequences.
    """

    wire = user_to_wire(user)
    return [name for name in REQUIRED_PROFILE_FIELDS[user.role] if _is_blank(wire.get(name))]


def is_profile_incomplete(user: User) -> bool:
    return bool(missing_profile_fields(user))
