"""
tiffin_session.credential_store.routers.auth

Authentication and profile endpoints.

Responsibilities:
- Signup and login, answering `{token, user}`.
- Profile fetch and partial profile update for the token's owner.
- Serve users in the wire shape, restricted to the owner's role fields.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_401_UNAUTHORIZED, HTTP_409_CONFLICT

from tiffin_session.credential_store.auth.deps import get_current_user
from tiffin_session.credential_store.auth.jwt import JwtConfig, issue_session_token
from tiffin_session.credential_store.auth.passwords import hash_password, verify_password
from tiffin_session.credential_store.db.models import UserRecord
from tiffin_session.credential_store.db.repositories.users import UserRepo
from tiffin_session.credential_store.deps import db_session, settings_dep
from tiffin_session.domain.users import Role, user_from_wire, user_to_wire
from tiffin_session.observability.logging import get_logger
from tiffin_session.session.validation import PreferencesInput, SignupRequest
from tiffin_session.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

_COMMON_PROFILE_FIELDS = {"name", "phone", "address"}
_ROLE_PROFILE_FIELDS: dict[Role, set[str]] = {
    Role.customer: {"preferences"},
    Role.chef: {
        "kitchen_name",
        "kitchen_address",
        "specialties",
        "experience",
        "max_orders_per_day",
        "delivery_radius",
    },
    # Admin permissions are not self-service.
    Role.admin: set(),
}


class AuthResponse(BaseModel):
    token: str
    user: dict[str, Any]


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    phone: str | None = Field(default=None, max_length=32)
    address: str | None = None
    kitchen_name: str | None = Field(default=None, max_length=200)
    kitchen_address: str | None = None
    specialties: list[str] | None = None
    experience: float | None = Field(default=None, ge=0)
    max_orders_per_day: int | None = Field(default=None, ge=1)
    delivery_radius: float | None = Field(default=None, ge=0)
    preferences: PreferencesInput | None = None

    @field_validator("experience", "max_orders_per_day", "delivery_radius", mode="before")
    @classmethod
    def _blank_number_is_unset(cls, v: Any) -> Any:
        # Profile forms send "" for untouched numeric inputs.
        if isinstance(v, str) and not v.strip():
            return None
        return v


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"


def public_user(user: UserRecord) -> dict[str, Any]:
    raw = {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role.value,
        "address": user.address,
        "createdAt": _iso(user.created_at),
        "updatedAt": _iso(user.updated_at),
        "kitchenName": user.kitchen_name,
        "kitchenAddress": user.kitchen_address,
        "specialties": user.specialties,
        "experience": user.experience,
        "maxOrdersPerDay": user.max_orders_per_day,
        "deliveryRadius": user.delivery_radius,
        "rating": user.rating,
        "totalOrders": user.total_orders,
        "isVerified": user.is_verified,
        "preferences": user.preferences,
        "permissions": user.permissions,
    }
    # Round-trip through the domain codec so only the owner's role fields are served.
    return user_to_wire(user_from_wire(raw))


def _issue(settings: Settings, user: UserRecord) -> str:
    return issue_session_token(
        cfg=JwtConfig.from_settings(settings),
        user_id=user.id,
        role=user.role,
        ttl=timedelta(minutes=settings.token_ttl_minutes),
    )


@router.post("/signup", response_model=AuthResponse, status_code=HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    users = UserRepo(session)
    if await users.get_by_email(body.email) is not None:
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Email already registered")

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await asyncio.to_thread(
        hash_password, body.password, rounds=settings.password_hash_rounds
    )
    try:
        user = await users.create(request=body, password_hash=password_hash)
        await session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same email.
        await session.rollback()
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Email already registered") from e

    log.info("store.signup", user_id=str(user.id), role=user.role.value)
    return AuthResponse(token=_issue(settings, user), user=public_user(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    user = await UserRepo(session).get_by_email(body.email)
    if user is None or not await asyncio.to_thread(
        verify_password, body.password, user.password_hash
    ):
        log.info("store.login_rejected")
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    log.info("store.login", user_id=str(user.id), role=user.role.value)
    return AuthResponse(token=_issue(settings, user), user=public_user(user))


@router.get("/profile")
async def get_profile(user: UserRecord = Depends(get_current_user)) -> dict[str, Any]:
    return public_user(user)


@router.put("/profile")
async def update_profile(
    body: ProfileUpdateRequest,
    user: UserRecord = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    # Fields of other roles are dropped; None means "leave unchanged".
    changes = body.model_dump(
        exclude_unset=True,
        exclude_none=True,
        include=_COMMON_PROFILE_FIELDS | _ROLE_PROFILE_FIELDS[user.role],
    )
    prefs = changes.pop("preferences", None)
    if prefs is not None:
        merged = dict(user.preferences or {})
        if "dietary_restrictions" in prefs:
            merged["dietaryRestrictions"] = list(prefs["dietary_restrictions"])
        if "spice_level" in prefs:
            merged["spiceLevel"] = prefs["spice_level"].value
        changes["preferences"] = merged

    UserRepo(session).apply_profile_changes(user, changes)
    await session.commit()
    log.info("store.profile_updated", user_id=str(user.id), fields=sorted(changes))
    return public_user(user)
