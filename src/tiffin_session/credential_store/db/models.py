"""
tiffin_session.credential_store.db.models

Persistence schema for the development credential store.

Responsibilities:
- Define the `users` table: shared identity columns plus every role's optional
  columns (only the owner's role columns are ever filled or served).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from tiffin_session.credential_store.db.base import Base
from tiffin_session.domain.users import Role


def _utcnow() -> datetime:
    # Naive UTC timestamps, serialized with a trailing "Z".
    return datetime.utcnow()


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, index=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Chef
    kitchen_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    kitchen_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialties: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[float | None] = mapped_column(nullable=True)
    max_orders_per_day: Mapped[int | None] = mapped_column(nullable=True)
    delivery_radius: Mapped[float | None] = mapped_column(nullable=True)
    rating: Mapped[float] = mapped_column(nullable=False, default=0)
    total_orders: Mapped[int] = mapped_column(nullable=False, default=0)
    is_verified: Mapped[bool] = mapped_column(nullable=False, default=False)

    # Customer; stored in wire shape {"dietaryRestrictions": [...], "spiceLevel": ...}
    preferences: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Admin
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)
