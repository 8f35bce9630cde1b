"""Session gate dependency for protected screens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse

from food_diary.domain.users import SessionUser
from food_diary.services.sessions import SessionState, Unauthenticated, check_session

if TYPE_CHECKING:
    from food_diary.containers import AppContainer

LOGIN_PATH = "/login"


class LoginRequired(Exception):
    """Raised when a protected screen is requested without a session."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def current_session(request: Request) -> SessionState:
    """Run the gate on the session cookie of the request."""
    container: AppContainer = request.app.state.container
    return check_session(request.cookies.get(container.settings.session_cookie_name))


async def require_user(
    state: SessionState = Depends(current_session),
) -> SessionUser:
    """Return the logged-in user or abort with a redirect to the login screen."""
    if isinstance(state, Unauthenticated):
        raise LoginRequired(state.reason)
    return state.user


async def redirect_to_login(_request: Request, _exc: Exception) -> RedirectResponse:
    """Exception handler sending unauthenticated visitors to the login screen."""
    return RedirectResponse(LOGIN_PATH, status_code=303)
