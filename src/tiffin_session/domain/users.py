"""
tiffin_session.domain.users

User data model and its JSON wire codec.

Responsibilities:
- Represent a user as a tagged variant: a shared `UserBase` record plus exactly one
  role profile (`CustomerProfile`, `ChefProfile` or `AdminProfile`).
- Decode credential-store payloads (camelCase JSON) into that model, tolerating
  partially filled records.
- Encode the model back into the wire shape.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar


class Role(enum.StrEnum):
    customer = "customer"
    chef = "chef"
    admin = "admin"


class SpiceLevel(enum.StrEnum):
    mild = "mild"
    medium = "medium"
    hot = "hot"


class MalformedUserError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class UserBase:
    # Fields shared by every role.
    id: str
    name: str
    email: str
    phone: str = ""
    address: str | None = None
    # Opaque server timestamps (ISO strings); never interpreted client-side.
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True, slots=True)
class Preferences:
    dietary_restrictions: frozenset[str] = frozenset()
    spice_level: SpiceLevel | None = None


@dataclass(frozen=True, slots=True)
class CustomerProfile:
    role: ClassVar[Role] = Role.customer

    preferences: Preferences = field(default_factory=Preferences)


@dataclass(frozen=True, slots=True)
class ChefProfile:
    role: ClassVar[Role] = Role.chef

    kitchen_name: str | None = None
    kitchen_address: str | None = None
    specialties: tuple[str, ...] = ()
    experience: float | None = None
    max_orders_per_day: int | None = None
    delivery_radius: float | None = None
    # Server-managed
    rating: float = 0
    total_orders: int = 0
    is_verified: bool = False


@dataclass(frozen=True, slots=True)
class AdminProfile:
    role: ClassVar[Role] = Role.admin

    permissions: frozenset[str] = frozenset()


RoleProfile = CustomerProfile | ChefProfile | AdminProfile


@dataclass(frozen=True, slots=True)
class User:
    """
    Authenticated user. The profile variant is the role tag: fields belonging to
    other roles cannot be represented.
    """

    base: UserBase
    profile: RoleProfile

    @property
    def role(self) -> Role:
        return self.profile.role

    @property
    def id(self) -> str:
        return self.base.id

    @property
    def is_chef(self) -> bool:
        return self.profile.role is Role.chef


def coerce_number(value: Any) -> int | float | None:
    """
    Interpret a wire value as a number.

    Numbers and numeric strings are accepted (integral values come back as `int`).
    `None`, booleans, empty/blank strings and anything non-finite count as "not supplied".
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def coerce_spice_level(value: Any) -> SpiceLevel | None:
    if not isinstance(value, str):
        return None
    try:
        return SpiceLevel(value)
    except ValueError:
        return None


def string_items(value: Any) -> tuple[str, ...] | None:
    # Returns None unless `value` is a sequence/set made only of strings.
    if isinstance(value, str) or not isinstance(value, list | tuple | set | frozenset):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return tuple(value)


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _timestamp(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _decode_customer(data: Mapping[str, Any]) -> CustomerProfile:
    prefs = data.get("preferences")
    if not isinstance(prefs, Mapping):
        prefs = {}
    return CustomerProfile(
        preferences=Preferences(
            dietary_restrictions=frozenset(string_items(prefs.get("dietaryRestrictions")) or ()),
            spice_level=coerce_spice_level(prefs.get("spiceLevel")),
        )
    )


def _decode_chef(data: Mapping[str, Any]) -> ChefProfile:
    max_orders = coerce_number(data.get("maxOrdersPerDay"))
    return ChefProfile(
        kitchen_name=_text(data.get("kitchenName")),
        kitchen_address=_text(data.get("kitchenAddress")),
        specialties=string_items(data.get("specialties")) or (),
        experience=coerce_number(data.get("experience")),
        max_orders_per_day=int(max_orders) if max_orders is not None else None,
        delivery_radius=coerce_number(data.get("deliveryRadius")),
        rating=coerce_number(data.get("rating")) or 0,
        total_orders=int(coerce_number(data.get("totalOrders")) or 0),
        is_verified=data.get("isVerified") is True,
    )


def _decode_admin(data: Mapping[str, Any]) -> AdminProfile:
    return AdminProfile(permissions=frozenset(string_items(data.get("permissions")) or ()))


_PROFILE_DECODERS = {
    Role.customer: _decode_customer,
    Role.chef: _decode_chef,
    Role.admin: _decode_admin,
}


def user_from_wire(data: Any) -> User:
    """
    Decode a credential-store user payload.

    Only the fields of the payload's role are read; everything else is ignored.
    Raises `MalformedUserError` when the identity fields or the role are unusable.
    """

    if not isinstance(data, Mapping):
        raise MalformedUserError("user payload must be a JSON object")

    # Document stores expose the primary key as `_id`; 0 is a valid key.
    user_id = data.get("id")
    if user_id is None or user_id == "":
        user_id = data.get("_id")
    if user_id is None or user_id == "" or isinstance(user_id, bool):
        raise MalformedUserError("user payload has no id")
    name = data.get("name")
    email = data.get("email")
    if not isinstance(name, str) or not isinstance(email, str):
        raise MalformedUserError("user payload is missing name or email")
    try:
        role = Role(data.get("role"))
    except (ValueError, TypeError):
        raise MalformedUserError(f"unknown role: {data.get('role')!r}") from None

    base = UserBase(
        id=str(user_id),
        name=name,
        email=email,
        phone=_text(data.get("phone")) or "",
        address=_text(data.get("address")),
        created_at=_timestamp(data.get("createdAt")),
        updated_at=_timestamp(data.get("updatedAt")),
    )
    return User(base=base, profile=_PROFILE_DECODERS[role](data))


def user_to_wire(user: User) -> dict[str, Any]:
    """
    Encode a user into the camelCase wire shape. Optional fields that are unset are omitted.
    """

    base = user.base
    out: dict[str, Any] = {
        "id": base.id,
        "name": base.name,
        "email": base.email,
        "phone": base.phone,
        "role": user.role.value,
    }
    optional: dict[str, Any] = {
        "address": base.address,
        "createdAt": base.created_at,
        "updatedAt": base.updated_at,
    }

    profile = user.profile
    if isinstance(profile, CustomerProfile):
        prefs = profile.preferences
        out["preferences"] = {
            "dietaryRestrictions": sorted(prefs.dietary_restrictions),
            "spiceLevel": prefs.spice_level.value if prefs.spice_level else None,
        }
    elif isinstance(profile, ChefProfile):
        out["specialties"] = list(profile.specialties)
        out["rating"] = profile.rating
        out["totalOrders"] = profile.total_orders
        out["isVerified"] = profile.is_verified
        optional.update(
            kitchenName=profile.kitchen_name,
            kitchenAddress=profile.kitchen_address,
            experience=profile.experience,
            maxOrdersPerDay=profile.max_orders_per_day,
            deliveryRadius=profile.delivery_radius,
        )
    else:
        out["permissions"] = sorted(profile.permissions)

    out.update({k: v for k, v in optional.items() if v is not None})
    return out


# --- Module Notes -----------------------------------------------------------
# `session.reconciler` merges at the wire level (camelCase keys) and decodes the
# result through `user_from_wire`, so the role invariant is enforced in one place.
