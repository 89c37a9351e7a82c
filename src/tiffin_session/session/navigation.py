"""
tiffin_session.session.navigation

Role-aware navigation policy.

Responsibilities:
- Decide where a freshly authenticated user lands (chefs go to the kitchen surface).
- Provide the home-page guard used by landing views.
- Define the `Navigator` seam the controller pushes destinations through.
"""

from __future__ import annotations

from typing import Protocol

from tiffin_session.domain.users import User

LOGIN_PATH = "/login"
CHEF_HOME_PATH = "/chef"
DEFAULT_HOME_PATH = "/"


class Navigator(Protocol):
    def push(self, path: str) -> None: ...


class HistoryNavigator:
    """
    Records every pushed path; used headless and in tests.
    """

    def __init__(self) -> None:
        self.history: list[str] = []

    def push(self, path: str) -> None:
        self.history.append(path)

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None


def post_auth_destination(user: User) -> str:
    # Called once per successful login/signup; bootstrap never navigates.
    return CHEF_HOME_PATH if user.is_chef else DEFAULT_HOME_PATH


def landing_redirect(user: User | None) -> str | None:
    """
    Guard for the default landing surface: anonymous visitors go to login, chefs to
    their kitchen. None means "stay".
    """

    if user is None:
        return LOGIN_PATH
    if user.is_chef:
        return CHEF_HOME_PATH
    return None
