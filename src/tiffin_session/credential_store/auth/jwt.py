"""
tiffin_session.credential_store.auth.jwt

Session tokens handed out at signup/login and presented back as bearer credentials.
The session core stores them without looking inside; only this module reads claims.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError

from tiffin_session.domain.users import Role
from tiffin_session.settings import Settings

_REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud", "sub", "role"]


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


@dataclass(frozen=True, slots=True)
class SessionClaims:
    user_id: uuid.UUID
    role: Role
    expires_at: datetime


class JwtValidationError(Exception):
    pass


def issue_session_token(
    *,
    cfg: JwtConfig,
    user_id: uuid.UUID,
    role: Role,
    ttl: timedelta = timedelta(days=7),
) -> str:
    issued = datetime.now(tz=UTC)
    return jwt.encode(
        {
            "iss": cfg.issuer,
            "aud": cfg.audience,
            "sub": str(user_id),
            "role": role.value,
            "iat": int(issued.timestamp()),
            "exp": int((issued + ttl).timestamp()),
        },
        cfg.secret,
        algorithm=cfg.alg,
    )


def read_session_token(*, cfg: JwtConfig, token: str) -> SessionClaims:
    """
    Verify signature, issuer, audience and expiry, then type the claims.
    Every failure is a `JwtValidationError` whose text is safe to show the caller.
    """

    try:
        claims = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={"require": _REQUIRED_CLAIMS},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    try:
        user_id = uuid.UUID(str(claims["sub"]))
    except ValueError:
        raise JwtValidationError("subject is not a user id") from None
    try:
        role = Role(claims["role"])
    except ValueError:
        raise JwtValidationError("unknown role claim") from None
    return SessionClaims(
        user_id=user_id,
        role=role,
        expires_at=datetime.fromtimestamp(claims["exp"], tz=UTC),
    )
