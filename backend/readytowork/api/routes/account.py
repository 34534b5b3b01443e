"""
Account settings API endpoints, shared by candidates and employers.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from readytowork.api.cookies import clear_auth_cookies
from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.db.session import get_db
from readytowork.schemas import CamelModel
from readytowork.services import account_settings
from readytowork.services.session import Principal

router = APIRouter()


# ============== Pydantic Schemas ==============


class ChangePasswordRequest(CamelModel):
    current_password: str = ""
    new_password: str = ""


class ChangeEmailRequest(CamelModel):
    email: str


class PhoneRequest(CamelModel):
    phone: str


class WhatsAppRequest(CamelModel):
    whatsapp: Optional[str] = None


class DeleteAccountRequest(CamelModel):
    password: str = ""


# ============== API Endpoints ==============


@router.post("/password")
async def change_password(
    payload: ChangePasswordRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    result = account_settings.change_password(db, principal, payload.current_password, payload.new_password)
    return action_response(result)


@router.post("/email")
async def change_email(
    payload: ChangeEmailRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(account_settings.change_email(db, principal, payload.email))


@router.post("/phone")
async def update_phone(
    payload: PhoneRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(account_settings.update_phone(db, principal, payload.phone))


@router.post("/whatsapp")
async def update_whatsapp(
    payload: WhatsAppRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(account_settings.update_whatsapp(db, principal, payload.whatsapp))


@router.post("/resend-verification")
async def resend_email_verification(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(account_settings.resend_email_verification(db, principal))


@router.delete("")
async def delete_account(
    payload: DeleteAccountRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    """Delete the account after re-checking the password, then end the session."""
    result = account_settings.delete_account(db, principal, payload.password)
    response = action_response(result)
    if result.success:
        clear_auth_cookies(response)
    return response
