"""
tiffin_session.errors

Error taxonomy surfaced by the session core.

Responsibilities:
- One exception type per failure kind the view layer may need to render.
- Guarantee a non-empty, human-readable message (falls back per kind).
"""

from __future__ import annotations


class SessionError(Exception):
    """
    Base class for every failure propagated by the session core.
    `message` is what the view layer renders as-is.
    """

    default_message = "Session operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = (message or "").strip() or self.default_message
        super().__init__(self.message)


class AuthenticationError(SessionError):
    # Bad credentials, invalid or expired token.
    default_message = "Authentication failed"


class ValidationError(SessionError):
    # Malformed signup/update payload, detected locally or by the server.
    default_message = "Invalid request data"


class ProfileUpdateError(SessionError):
    default_message = "Failed to update profile"


class NotAuthenticatedError(SessionError):
    default_message = "Not authenticated"


class NetworkError(SessionError):
    # Transport failure or a response body that cannot be interpreted.
    default_message = "Unable to reach the server"


class SessionSupersededError(SessionError):
    # A newer session operation (or an explicit cancel) started while this one was in flight.
    default_message = "Superseded by a newer session operation"


# --- Module Notes -----------------------------------------------------------
# HTTP-level failures are raised as `credentials.client.CredentialStoreError` and
# translated into this taxonomy by `session.controller`.
