from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tiffin_session.credential_store.db.models import UserRecord
from tiffin_session.domain.users import Role
from tiffin_session.session.validation import SignupRequest


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: uuid.UUID) -> UserRecord | None:
        return await self._session.get(UserRecord, user_id)

    async def get_by_email(self, email: str) -> UserRecord | None:
        stmt = select(UserRecord).where(UserRecord.email == normalize_email(email))
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, request: SignupRequest, password_hash: str) -> UserRecord:
        user = UserRecord(
            name=request.name,
            email=normalize_email(request.email),
            password_hash=password_hash,
            phone=request.phone,
            role=request.role,
            address=request.address,
            specialties=[],
            preferences={},
            permissions=[],
        )
        # Only the signing-up role's own columns are filled.
        if request.role is Role.chef:
            user.kitchen_name = request.kitchen_name
            user.kitchen_address = request.kitchen_address
            user.specialties = list(request.specialties)
            user.experience = request.experience
            user.max_orders_per_day = request.max_orders_per_day
            user.delivery_radius = request.delivery_radius
        elif request.role is Role.customer and request.preferences is not None:
            prefs = request.preferences
            user.preferences = {
                "dietaryRestrictions": list(prefs.dietary_restrictions),
                "spiceLevel": prefs.spice_level.value if prefs.spice_level else None,
            }
        elif request.role is Role.admin:
            user.permissions = list(request.permissions)

        self._session.add(user)
        await self._session.flush()
        return user

    def apply_profile_changes(self, user: UserRecord, changes: dict[str, Any]) -> None:
        # `changes` uses column names; JSON columns are replaced, never mutated in place.
        for column, value in changes.items():
            setattr(user, column, value)
        user.updated_at = datetime.utcnow()
