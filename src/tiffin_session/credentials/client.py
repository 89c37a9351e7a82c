"""
tiffin_session.credentials.client

HTTP client boundary used by the session core to call the credential store.

Responsibilities:
- Call the `/auth/*` endpoints (login, signup, profile fetch/update).
- Attach the bearer token to authenticated requests.
- Turn transport failures into `NetworkError` and non-2xx responses into
  `CredentialStoreError` carrying the server's `message`.
"""

from __future__ import annotations

from typing import Any

import httpx

from tiffin_session.errors import NetworkError


class CredentialStoreError(Exception):
    """
    Non-2xx answer from the credential store. `message` is None when the body had none.
    """

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message or 'no message'}")


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class CredentialStoreClient:
    """
    The session controller depends on this interface, never on httpx directly.
    `http` must be configured with the API base url (e.g. `http://host/api`).
    """

    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    @staticmethod
    def _authz(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = self._authz(token) if token else {}
        try:
            r = await self._http.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as e:
            # Timeouts land here too; the core treats them as ordinary network failures.
            raise NetworkError() from e

        body = _json_or_none(r)
        if r.is_error:
            raise CredentialStoreError(r.status_code, _error_message(body))
        if not isinstance(body, dict):
            raise NetworkError("Unexpected response from the server")
        return body

    async def fetch_profile(self, *, token: str) -> dict[str, Any]:
        return await self._request("GET", "/auth/profile", token=token)

    async def login(self, *, email: str, password: str) -> dict[str, Any]:
        # Success shape: {"token": ..., "user": {...}}
        return await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )

    async def signup(self, *, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/auth/signup", json=payload)

    async def update_profile(self, *, token: str, patch: dict[str, Any]) -> dict[str, Any]:
        # The response may echo only the fields the server touched.
        return await self._request("PUT", "/auth/profile", token=token, json=patch)


# --- Module Notes -----------------------------------------------------------
# No retries happen here; failures surface once and the caller decides.
