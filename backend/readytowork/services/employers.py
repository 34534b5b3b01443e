"""
Employer registration and company profile actions.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from readytowork.core.errors import (
    ActionResult,
    ErrorCode,
    PASSWORD_RULES_ERROR,
    error_message,
    not_authenticated,
)
from readytowork.core.security import get_password_hash
from readytowork.models import Employer
from readytowork.schemas import EmployerOut, EmployerUpdate, RegisterEmployerData
from readytowork.services.auth import LoginResult, issue_verification_token, record_login, send_verification_email
from readytowork.services.session import Principal, issue_session
from readytowork.services.validation import validate_email, validate_password

logger = logging.getLogger(__name__)

REQUIRED_COMPANY_FIELDS = ("responsible_person", "company_name")


def register_employer(db: Session, data: RegisterEmployerData) -> LoginResult:
    """
    Create an unverified employer with an empty wallet and log them in.
    """
    if not data.responsible_person or not data.company_name:
        return LoginResult(
            success=False,
            error="Responsible person and company name are required",
            error_code=ErrorCode.VALIDATION_ERROR,
        )

    if not validate_email(data.email).valid:
        return LoginResult(success=False, error="Invalid email address", error_code=ErrorCode.INVALID_EMAIL)

    if not validate_password(data.password).valid:
        return LoginResult(success=False, error=PASSWORD_RULES_ERROR, error_code=ErrorCode.INVALID_PASSWORD)

    if data.password != data.confirm_password:
        return LoginResult(success=False, error="Passwords do not match", error_code=ErrorCode.VALIDATION_ERROR)

    if not data.terms_accepted:
        return LoginResult(
            success=False,
            error="You must accept the terms and conditions",
            error_code=ErrorCode.VALIDATION_ERROR,
        )

    if db.query(Employer).filter(Employer.email == data.email).first():
        return LoginResult(
            success=False,
            error="An account with this email already exists. Please log in or use a different email.",
            error_code=ErrorCode.EMAIL_EXISTS,
        )

    employer = Employer(
        responsible_person=data.responsible_person,
        company_name=data.company_name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        terms_accepted=True,
        interview_credits=0,
        contact_unlock_credits=0,
    )
    token = issue_verification_token(employer)

    try:
        db.add(employer)
        db.commit()
        db.refresh(employer)
    except IntegrityError:
        db.rollback()
        return LoginResult(
            success=False,
            error="An account with this email already exists. Please log in or use a different email.",
            error_code=ErrorCode.EMAIL_EXISTS,
        )
    except Exception as e:
        db.rollback()
        logger.error("Employer registration error: %s", error_message(e))
        return LoginResult(
            success=False,
            error="We couldn't create your account. Please try again later.",
            error_code=ErrorCode.SYSTEM_ERROR,
        )

    logger.info("Employer registered: id=%s", employer.id)

    send_verification_email(employer.email, token, "employer").log_failure(
        logger, "Failed to send verification email"
    )

    grant = issue_session(employer)
    record_login(db, employer)
    return LoginResult(success=True, session=grant, data=EmployerOut.model_validate(employer))


def get_current_employer(principal: Optional[Principal]) -> Optional[Employer]:
    """The session's employer record, or None for any other kind of session."""
    if principal is None or principal.kind != "employer":
        return None
    return principal.record


def update_employer(db: Session, principal: Optional[Principal], data: EmployerUpdate) -> ActionResult:
    """Partially update the signed-in employer's company profile."""
    employer = get_current_employer(principal)
    if employer is None:
        return not_authenticated()

    changes = data.model_dump(exclude_unset=True)
    for field in REQUIRED_COMPANY_FIELDS:
        if field in changes:
            value = (changes[field] or "").strip()
            if not value:
                return ActionResult.fail(f"{field} cannot be empty", ErrorCode.VALIDATION_ERROR)
            changes[field] = value

    try:
        for field, value in changes.items():
            setattr(employer, field, value)
        db.commit()
        db.refresh(employer)
    except Exception as e:
        db.rollback()
        logger.error("Employer update error: %s", error_message(e))
        return ActionResult.system_error("Failed to update company profile. Please try again.")

    return ActionResult.ok(EmployerOut.model_validate(employer))
