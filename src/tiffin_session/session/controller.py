"""
tiffin_session.session.controller

Session state machine (UNAUTHENTICATED / LOADING / AUTHENTICATED).

Responsibilities:
- Bootstrap the session from a stored token.
- Login, signup and logout, including token persistence and post-auth navigation.
- Apply profile updates through the reconciler without partial commits.
- Drop stale responses: every operation starts a new generation, and a response that
  resumes after a newer generation has started never touches the session.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tiffin_session.credentials.client import CredentialStoreClient, CredentialStoreError
from tiffin_session.credentials.token_store import TokenStore
from tiffin_session.domain.users import MalformedUserError, User, user_from_wire
from tiffin_session.errors import (
    AuthenticationError,
    NetworkError,
    NotAuthenticatedError,
    ProfileUpdateError,
    SessionSupersededError,
    ValidationError,
)
from tiffin_session.observability.logging import get_logger
from tiffin_session.session.navigation import LOGIN_PATH, Navigator, post_auth_destination
from tiffin_session.session.reconciler import reconcile_profile
from tiffin_session.session.state import SessionState, SessionStatus
from tiffin_session.session.validation import (
    SignupRequest,
    validate_profile_patch,
    validate_signup,
)

log = get_logger(__name__)

# Signup rejections that describe a bad payload rather than bad credentials.
_SIGNUP_VALIDATION_STATUSES = frozenset({400, 409, 422})


def _parse_auth_response(body: Mapping[str, Any]) -> tuple[str, User]:
    token = body.get("token")
    if not isinstance(token, str) or not token:
        raise NetworkError("Unexpected response from the server")
    try:
        user = user_from_wire(body.get("user"))
    except MalformedUserError as e:
        raise NetworkError("Unexpected response from the server") from e
    return token, user


class SessionController:
    """
    Sole writer of the session state and the stored token.

    Callers must not start a second session-mutating call while `state.loading` is
    true; the controller does not serialize calls, it only discards superseded results.
    """

    def __init__(
        self,
        *,
        client: CredentialStoreClient,
        tokens: TokenStore,
        navigator: Navigator,
        state: SessionState | None = None,
    ) -> None:
        self._client = client
        self._tokens = tokens
        self._navigator = navigator
        self._state = state if state is not None else SessionState()
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    # -- generation bookkeeping ------------------------------------------------

    def _begin(self) -> int:
        self._generation += 1
        self._state.loading = True
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _finish(self, generation: int) -> None:
        if self._is_current(generation):
            self._state.loading = False

    def cancel_pending(self) -> None:
        """
        Invalidate every in-flight operation; their late responses are dropped.
        """

        self._generation += 1
        self._state.loading = False
        log.info("session.cancelled")

    # -- side effects that must never fail outward -----------------------------

    def _discard_token(self) -> None:
        try:
            self._tokens.remove()
        except Exception:
            log.exception("session.token_discard_failed")

    def _navigate(self, path: str) -> None:
        try:
            self._navigator.push(path)
        except Exception:
            log.exception("session.navigation_failed", path=path)

    # -- operations --------------------------------------------------------------

    async def bootstrap(self) -> None:
        """
        Restore the session from a stored token. Never raises and never navigates.
        """

        generation = self._begin()
        try:
            token = self._tokens.get()
            if not token:
                self._state.user = None
                log.info("session.bootstrap_anonymous")
                return

            body = await self._client.fetch_profile(token=token)
            user = user_from_wire(body)
        except Exception as e:
            if not self._is_current(generation):
                log.info("session.stale_response_dropped", operation="bootstrap")
                return
            # Any failure (401, network, malformed body) means the token is unusable.
            log.info("session.bootstrap_rejected", reason=type(e).__name__)
            self._discard_token()
            self._state.user = None
        else:
            if not self._is_current(generation):
                log.info("session.stale_response_dropped", operation="bootstrap")
                return
            self._state.user = user
            log.info("session.bootstrap_restored", user_id=user.id, role=user.role.value)
        finally:
            self._finish(generation)

    def _commit_authentication(
        self, generation: int, body: Mapping[str, Any], *, operation: str
    ) -> User:
        token, user = _parse_auth_response(body)
        if not self._is_current(generation):
            log.info("session.stale_response_dropped", operation=operation)
            raise SessionSupersededError()

        self._tokens.set(token)
        self._state.user = user
        self._state.loading = False
        log.info(f"session.{operation}_succeeded", user_id=user.id, role=user.role.value)
        self._navigate(post_auth_destination(user))
        return user

    async def login(self, email: str, password: str) -> User:
        if not email or not email.strip() or not password:
            raise ValidationError("Email and password are required")

        generation = self._begin()
        try:
            body = await self._client.login(email=email.strip(), password=password)
            return self._commit_authentication(generation, body, operation="login")
        except CredentialStoreError as e:
            log.info("session.login_failed", status_code=e.status_code)
            raise AuthenticationError(e.message or "Login failed") from e
        finally:
            self._finish(generation)

    async def signup(self, user_data: Mapping[str, Any] | SignupRequest) -> User:
        # Validation happens before any network call.
        request = validate_signup(user_data)

        generation = self._begin()
        try:
            body = await self._client.signup(payload=request.to_wire())
            return self._commit_authentication(generation, body, operation="signup")
        except CredentialStoreError as e:
            log.info("session.signup_failed", status_code=e.status_code, role=request.role.value)
            if e.status_code in _SIGNUP_VALIDATION_STATUSES:
                raise ValidationError(e.message or "Signup failed") from e
            raise AuthenticationError(e.message or "Signup failed") from e
        finally:
            self._finish(generation)

    async def logout(self) -> None:
        """
        Clear the session and go to the login surface. Never raises.
        """

        generation = self._begin()
        previous = self._state.user
        self._discard_token()
        self._state.user = None
        self._finish(generation)
        log.info("session.logout", user_id=previous.id if previous else None)
        self._navigate(LOGIN_PATH)

    async def update_user(self, patch: Mapping[str, Any]) -> User:
        """
        Send a partial profile update and commit the reconciled record.

        On any failure the session user is left untouched (same object).
        """

        previous = self._state.user
        token = self._tokens.get()
        if previous is None or not token:
            raise NotAuthenticatedError()
        cleaned = validate_profile_patch(patch)

        generation = self._begin()
        try:
            body = await self._client.update_profile(token=token, patch=cleaned)
            if not self._is_current(generation):
                log.info("session.stale_response_dropped", operation="update_user")
                raise SessionSupersededError()
            user = reconcile_profile(previous, cleaned, body)
        except MalformedUserError as e:
            log.info("session.profile_update_malformed", user_id=previous.id)
            raise NetworkError("Unexpected response from the server") from e
        except CredentialStoreError as e:
            log.info(
                "session.profile_update_rejected",
                status_code=e.status_code,
                user_id=previous.id,
            )
            raise ProfileUpdateError(e.message) from e
        finally:
            self._finish(generation)

        self._state.user = user
        log.info("session.profile_updated", user_id=user.id, fields=sorted(cleaned))
        return user


# --- Module Notes -----------------------------------------------------------
# Whether a user-triggered login should cancel an in-flight bootstrap is decided by
# generations: the later operation wins and the bootstrap result is dropped.
