"""
tiffin_session.session.context

Composition root for the client-side session core.

Responsibilities:
- Build the single session context (state + controller) from settings.
- Expose the consumer contract (`SessionHandle`) that view code is allowed to use.
- Own the HTTP client lifecycle for applications that want a ready-made session.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import httpx

from tiffin_session.credentials.client import CredentialStoreClient
from tiffin_session.credentials.token_store import TokenStore, token_store_from_settings
from tiffin_session.domain.users import User
from tiffin_session.observability.logging import configure_from_settings
from tiffin_session.session.controller import SessionController
from tiffin_session.session.navigation import Navigator
from tiffin_session.session.state import SessionState, SessionStatus
from tiffin_session.session.validation import SignupRequest
from tiffin_session.settings import Settings


class SessionHandle:
    """
    What view code sees: `user`, `loading`, `login`, `signup`, `logout`, `update_user`,
    plus the read-only `status` and `profile_incomplete` views.
    """

    def __init__(self, controller: SessionController) -> None:
        self._controller = controller

    @property
    def user(self) -> User | None:
        return self._controller.user

    @property
    def loading(self) -> bool:
        return self._controller.loading

    @property
    def status(self) -> SessionStatus:
        return self._controller.status

    @property
    def profile_incomplete(self) -> bool:
        return self._controller.state.profile_incomplete

    async def login(self, email: str, password: str) -> User:
        return await self._controller.login(email, password)

    async def signup(self, user_data: Mapping[str, Any] | SignupRequest) -> User:
        return await self._controller.signup(user_data)

    async def logout(self) -> None:
        await self._controller.logout()

    async def update_user(self, patch: Mapping[str, Any]) -> User:
        return await self._controller.update_user(patch)


@dataclass(frozen=True, slots=True)
class SessionContext:
    # One per process; passed explicitly to whatever needs the session.
    settings: Settings
    controller: SessionController
    handle: SessionHandle

    @property
    def state(self) -> SessionState:
        return self.controller.state


def init_session(
    *,
    settings: Settings,
    http: httpx.AsyncClient,
    navigator: Navigator,
    tokens: TokenStore | None = None,
) -> SessionContext:
    """
    Build the session context. The state starts LOADING; call `controller.bootstrap()` next.
    """

    controller = SessionController(
        client=CredentialStoreClient(http=http),
        tokens=tokens if tokens is not None else token_store_from_settings(settings),
        navigator=navigator,
    )
    return SessionContext(
        settings=settings, controller=controller, handle=SessionHandle(controller)
    )


@asynccontextmanager
async def open_session(
    *,
    settings: Settings,
    navigator: Navigator,
    tokens: TokenStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[SessionContext]:
    """
    Configure client logging, create the HTTP client, build the context, bootstrap it,
    and close the client on exit. `transport` lets tests route requests in-process.
    """

    configure_from_settings(settings, component="client")
    async with httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    ) as http:
        ctx = init_session(settings=settings, http=http, navigator=navigator, tokens=tokens)
        await ctx.controller.bootstrap()
        yield ctx


# --- Module Notes -----------------------------------------------------------
# Nothing here is global: tests build their own context with fake transports and stores.
