"""
tiffin_session.credentials.token_store

Persistence for the opaque bearer token.

Responsibilities:
- Keep a single token under a well-known key, surviving process restarts when
  backed by a file (the client-side counterpart of browser local storage).
- Offer an in-memory store for tests and ephemeral sessions.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

from tiffin_session.observability.logging import get_logger
from tiffin_session.settings import Settings

log = get_logger(__name__)


class TokenStore(Protocol):
    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def remove(self) -> None: ...


class MemoryTokenStore:
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def remove(self) -> None:
        self._token = None


class FileTokenStore:
    """
    JSON key/value file; only `key` is owned by this store, other keys are preserved.
    """

    def __init__(self, path: Path, *, key: str = "token") -> None:
        self._path = path
        self._key = key

    def _read(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            log.warning("token_store.corrupt", path=str(self._path))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a crash never leaves a truncated file behind.
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self) -> str | None:
        token = self._read().get(self._key)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        data = self._read()
        data[self._key] = token
        self._write(data)

    def remove(self) -> None:
        data = self._read()
        if self._key not in data:
            return
        del data[self._key]
        self._write(data)


def token_store_from_settings(settings: Settings) -> TokenStore:
    if settings.token_store_path is None:
        return MemoryTokenStore()
    return FileTokenStore(settings.token_store_path, key=settings.token_storage_key)
