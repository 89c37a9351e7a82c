"""
tiffin_session.session.state

Process-wide session state container.

Responsibilities:
- Hold the current authenticated user and the loading flag.
- Derive the session status and the profile-completeness view from them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tiffin_session.domain.completeness import is_profile_incomplete
from tiffin_session.domain.users import User


class SessionStatus(enum.StrEnum):
    unauthenticated = "UNAUTHENTICATED"
    loading = "LOADING"
    authenticated = "AUTHENTICATED"


@dataclass(slots=True)
class SessionState:
    """
    Only `SessionController` writes these fields; everything else reads them.
    A fresh state is LOADING because bootstrap runs at startup.
    """

    user: User | None = None
    loading: bool = True

    @property
    def status(self) -> SessionStatus:
        if self.loading:
            return SessionStatus.loading
        if self.user is None:
            return SessionStatus.unauthenticated
        return SessionStatus.authenticated

    @property
    def profile_incomplete(self) -> bool:
        # Recomputed on every access so it always tracks the current user.
        return self.user is not None and is_profile_incomplete(self.user)
