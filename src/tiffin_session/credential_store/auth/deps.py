"""
tiffin_session.credential_store.auth.deps

FastAPI dependency resolving a bearer token into the calling user.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from tiffin_session.credential_store.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    read_session_token,
)
from tiffin_session.credential_store.db.models import UserRecord
from tiffin_session.credential_store.db.repositories.users import UserRepo
from tiffin_session.credential_store.deps import db_session, settings_dep
from tiffin_session.settings import Settings

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> UserRecord:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        claims = read_session_token(
            cfg=JwtConfig.from_settings(settings), token=creds.credentials
        )
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    # Tokens outlive deleted accounts; the record must still exist.
    user = await UserRepo(session).get(claims.user_id)
    if user is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="User not found")
    if user.role is not claims.role:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token: role mismatch"
        )
    return user
