"""
tiffin_session.session.reconciler

Profile reconciliation after a partial update.

Why reconcile:
- The profile-update endpoint may echo back only the fields it touched.
- Replacing the session user with that raw response would erase fields the UI
  still depends on.

`reconcile_profile` resolves every field independently through the chain
server response → patch → previous record.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from tiffin_session.domain.users import (
    Role,
    User,
    coerce_number,
    coerce_spice_level,
    string_items,
    user_from_wire,
    user_to_wire,
)

Tier = Mapping[str, Any]
Accept = Callable[[Any], bool]

_TIMESTAMPS = ("createdAt", "updatedAt")
_BASE_TEXT = ("name", "phone", "address")
_CHEF_TEXT = ("kitchenName", "kitchenAddress")
_CHEF_NUMERIC = ("experience", "maxOrdersPerDay", "deliveryRadius")
_CHEF_SERVER_MANAGED: tuple[tuple[str, Accept], ...] = (
    ("rating", lambda v: coerce_number(v) is not None),
    ("totalOrders", lambda v: coerce_number(v) is not None),
    ("isVerified", lambda v: isinstance(v, bool)),
)


def _supplied(value: Any) -> bool:
    return value is not None


def _is_text(value: Any) -> bool:
    # Empty strings count: they are how a caller clears a field.
    return isinstance(value, str)


def _is_identifier(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, str) and value != "")


def _is_filled_text(value: Any) -> bool:
    # Identity fields can never be cleared.
    return isinstance(value, str) and value.strip() != ""


def _is_number(value: Any) -> bool:
    return coerce_number(value) is not None


def _is_string_seq(value: Any) -> bool:
    return string_items(value) is not None


def _is_spice_level(value: Any) -> bool:
    return coerce_spice_level(value) is not None


def resolve(key: str, tiers: Sequence[Tier], accept: Accept = _supplied) -> Any:
    """
    First value for `key` that a tier actually supplies (per `accept`), else None.
    """

    for tier in tiers:
        if key in tier and accept(tier[key]):
            return tier[key]
    return None


def _nested(tier: Tier, key: str) -> Tier:
    value = tier.get(key)
    return value if isinstance(value, Mapping) else {}


def _with_id(server: Tier) -> Tier:
    # Document stores answer with `_id`.
    if not _is_identifier(server.get("id")) and _is_identifier(server.get("_id")):
        return {**server, "id": server["_id"]}
    return server


def reconcile_profile(previous: User, patch: Tier, server: Tier) -> User:
    """
    Merge a profile update into the next authoritative user record.

    - Regular fields: server value, else patch value, else previous value.
    - Numeric fields only accept real numbers (or numeric strings), never empty placeholders.
    - `preferences` is resolved per nested field; `dietaryRestrictions` defaults to empty and
      `spiceLevel` to absent.
    - Server-managed fields (ids, timestamps, rating, order totals, verification) ignore the patch.
    - `email` only accepts non-blank text; an empty echo keeps the known address.
    - The role never changes here, and fields that belong to other roles are ignored.
    """

    prior = user_to_wire(previous)
    server = _with_id(server)
    chain: tuple[Tier, ...] = (server, patch, prior)
    authoritative: tuple[Tier, ...] = (server, prior)

    merged: dict[str, Any] = {"role": previous.role.value}
    merged["id"] = resolve("id", authoritative, _is_identifier)
    for key in _TIMESTAMPS:
        merged[key] = resolve(key, authoritative)
    merged["email"] = resolve("email", chain, _is_filled_text)
    for key in _BASE_TEXT:
        merged[key] = resolve(key, chain, _is_text)

    role = previous.role
    if role is Role.customer:
        prefs = tuple(_nested(tier, "preferences") for tier in chain)
        merged["preferences"] = {
            "dietaryRestrictions": resolve("dietaryRestrictions", prefs, _is_string_seq) or [],
            "spiceLevel": resolve("spiceLevel", prefs, _is_spice_level),
        }
    elif role is Role.chef:
        for key in _CHEF_TEXT:
            merged[key] = resolve(key, chain, _is_text)
        merged["specialties"] = resolve("specialties", chain, _is_string_seq)
        for key in _CHEF_NUMERIC:
            merged[key] = resolve(key, chain, _is_number)
        for key, accept in _CHEF_SERVER_MANAGED:
            merged[key] = resolve(key, authoritative, accept)
    else:
        merged["permissions"] = resolve("permissions", chain, _is_string_seq)

    return user_from_wire(merged)


# --- Module Notes -----------------------------------------------------------
# Kept free of I/O so the precedence rules are unit-testable without the network layer;
# `session.controller.SessionController.update_user` is the only caller at runtime.
