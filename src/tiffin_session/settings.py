"""
tiffin_session.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the session core and the
  development credential store.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    One settings object shared by:
    - the client-side session core (API base url, timeouts, token persistence)
    - the development credential store (DB, JWT, password hashing)
    """

    model_config = SettingsConfigDict(env_prefix="TIFFIN_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "tiffin-session"
    log_level: str = "INFO"

    # Session core
    api_base_url: str = "http://localhost:5000/api"
    request_timeout_seconds: float = 10.0
    # None keeps the token in memory only (lost on restart).
    token_store_path: Path | None = None
    token_storage_key: str = "token"

    # Development credential store
    store_host: str = "0.0.0.0"
    store_port: int = 5000
    database_url: str = "sqlite+aiosqlite:///./tiffin.db"

    jwt_alg: str = "HS256"
    jwt_issuer: str = "tiffin-credential-store"
    jwt_audience: str = "tiffin-app"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_minutes: int = 7 * 24 * 60

    # bcrypt work factor; tests lower this to keep hashing fast.
    password_hash_rounds: int = Field(default=12, ge=4, le=31)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each dependency lookup.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The session core only reads the first block of fields; the remaining fields are
# consumed by `tiffin_session.credential_store`.
