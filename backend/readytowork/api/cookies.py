"""
Session cookie helpers.
"""

from fastapi import Response

from readytowork.core.config import settings
from readytowork.services.session import SessionGrant

# Set by older frontend builds; cleared on logout as well
LEGACY_SESSION_COOKIE = "user-session"


def set_session_cookie(response: Response, grant: SessionGrant) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=grant.token,
        max_age=grant.max_age,
        expires=grant.expires_at,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.is_production,
    )


def clear_auth_cookies(response: Response) -> None:
    for name in (settings.SESSION_COOKIE_NAME, LEGACY_SESSION_COOKIE):
        response.delete_cookie(
            key=name,
            path="/",
            httponly=True,
            samesite="strict",
            secure=settings.is_production,
        )
