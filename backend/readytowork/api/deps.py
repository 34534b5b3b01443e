"""
Request dependencies: database session and the authenticated principal.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from readytowork.core.config import settings
from readytowork.db.session import get_db
from readytowork.services.session import Principal, resolve_principal

# Bearer tokens are accepted as a fallback for non-browser clients
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_optional_principal(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[Principal]:
    """
    Resolve the session cookie (or bearer token) into a Principal.

    Returns None for anonymous requests; actions decide how to answer those.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME) or bearer_token
    return resolve_principal(db, token)


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """
    Dependency for routes that require a session.

    Raises HTTPException if there is no valid session.
    """
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
