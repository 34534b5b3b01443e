"""
Authentication API endpoints.

Session login/logout, generic registration, password reset and email
verification. The session token travels in the ``payload-token`` cookie.
"""

from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from readytowork.api.cookies import clear_auth_cookies, set_session_cookie
from readytowork.api.deps import get_current_principal
from readytowork.api.responses import action_response
from readytowork.core.config import settings
from readytowork.core.errors import ActionResult, ErrorCode
from readytowork.db.session import get_db
from readytowork.schemas import CamelModel
from readytowork.services import auth as auth_service
from readytowork.services.session import Principal, serialize_profile

router = APIRouter()


# ============== Pydantic Schemas ==============


class LoginRequest(CamelModel):
    email: str
    password: str = ""
    remember_me: bool = False
    collection: str = "users"


class RegisterRequest(CamelModel):
    email: str
    password: str


class ForgotPasswordRequest(CamelModel):
    email: str


class ResetPasswordRequest(CamelModel):
    token: str = ""
    email: str
    password: str
    type: Optional[str] = None  # 'candidate' | 'employer'


class ResendVerificationRequest(CamelModel):
    email: str


# ============== Helper Functions ==============


def session_response(result: auth_service.LoginResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Render a login-style result and attach the session cookie on success."""
    response = action_response(result, success_status)
    if result.success and result.session is not None:
        set_session_cookie(response, result.session)
    return response


def login_redirect(params: dict) -> RedirectResponse:
    url = f"{settings.app_url}/{settings.DEFAULT_LOCALE}/login?{urlencode(params)}"
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


# ============== API Endpoints ==============


@router.post("/login")
async def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Log in against one account collection (users, candidates or employers).

    Sets an HTTP-only session cookie valid for 24 hours, or 30 days with
    ``rememberMe``.
    """
    result = auth_service.login_user(
        db,
        email=payload.email,
        password=payload.password,
        remember_me=payload.remember_me,
        collection=payload.collection,
    )
    return session_response(result)


@router.post("/logout")
async def logout():
    """Clear the session cookies. Always succeeds."""
    response = action_response(ActionResult.ok())
    clear_auth_cookies(response)
    return response


@router.post("/register")
async def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    result = auth_service.register_user(db, payload.email, payload.password)
    return session_response(result, status.HTTP_201_CREATED)


@router.post("/forgot-password")
async def forgot_password(payload: ForgotPasswordRequest, db: Session = Depends(get_db)):
    return action_response(auth_service.forgot_password(db, payload.email))


@router.post("/reset-password")
async def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    result = auth_service.reset_password(
        db,
        token=payload.token,
        email=payload.email,
        new_password=payload.password,
        user_type=payload.type,
    )
    return action_response(result)


@router.post("/resend-verification")
async def resend_verification(payload: ResendVerificationRequest, db: Session = Depends(get_db)):
    return action_response(auth_service.resend_verification(db, payload.email))


@router.get("/verify-email")
async def verify_email(
    token: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    type: str = Query("candidate"),
    db: Session = Depends(get_db),
):
    """
    Target of the link in the verification email.

    Redirects to the login page with a success or error flag.
    """
    result = auth_service.verify_email(db, token or "", email or "", type)

    if result.success:
        params = {"success": "email-verified"}
        if type == "employer":
            params["collection"] = "employers"
        return login_redirect(params)

    if result.error_code == ErrorCode.INVALID_TOKEN:
        return login_redirect({"error": "invalid-verification-link"})
    if result.error_code == ErrorCode.INVALID_OR_EXPIRED_TOKEN:
        return login_redirect({"error": "verification-link-expired"})
    return login_redirect({"error": "verification-failed"})


@router.get("/me")
async def get_me(principal: Principal = Depends(get_current_principal)):
    """Current session owner and their profile."""
    return action_response(
        ActionResult.ok({"kind": principal.kind, "profile": serialize_profile(principal.record)})
    )
