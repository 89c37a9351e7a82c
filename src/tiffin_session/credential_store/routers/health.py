"""
tiffin_session.credential_store.routers.health

Liveness and readiness probes for the development credential store.

Responsibilities:
- `/healthz`: process is up; reports service name and version.
- `/readyz`: the `users` table is reachable, so auth endpoints can serve.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tiffin_session import __version__
from tiffin_session.credential_store.db.models import UserRecord
from tiffin_session.credential_store.deps import db_session, settings_dep
from tiffin_session.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name, "version": __version__}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str | int]:
    users = await session.scalar(select(func.count()).select_from(UserRecord))
    return {"status": "ready", "users": int(users or 0)}
