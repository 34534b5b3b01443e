"""
Account settings shared by candidates and employers.

Every action here re-reads nothing from the client about identity: the
principal is the only source of who is being changed.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from readytowork.core.errors import (
    ActionResult,
    ErrorCode,
    PASSWORD_RULES_ERROR,
    error_message,
    not_authenticated,
)
from readytowork.core.security import get_password_hash, verify_password
from readytowork.services.auth import (
    issue_verification_token,
    send_password_changed_email,
    send_verification_email,
)
from readytowork.services.session import COLLECTION_MODELS, Principal
from readytowork.services.validation import normalize_email, normalize_phone, validate_email, validate_password

logger = logging.getLogger(__name__)

SETTINGS_KINDS = ("candidate", "employer")


def _settings_principal(principal: Optional[Principal]) -> Optional[Principal]:
    if principal is None or principal.kind not in SETTINGS_KINDS:
        return None
    return principal


def change_password(
    db: Session,
    principal: Optional[Principal],
    current_password: str,
    new_password: str,
) -> ActionResult:
    principal = _settings_principal(principal)
    if principal is None:
        return not_authenticated()

    if not current_password:
        return ActionResult.fail("Current password is required", ErrorCode.MISSING_PASSWORD)

    if not validate_password(new_password).valid:
        return ActionResult.fail(PASSWORD_RULES_ERROR, ErrorCode.INVALID_PASSWORD)

    record = principal.record
    if not verify_password(current_password, record.hashed_password):
        return ActionResult.fail("Current password is incorrect", ErrorCode.INVALID_CURRENT_PASSWORD)

    try:
        record.hashed_password = get_password_hash(new_password)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Change password error: %s", error_message(e))
        return ActionResult.system_error("Failed to change password. Please try again.")

    send_password_changed_email(record.email).log_failure(logger, "Failed to send password changed email")
    return ActionResult.ok()


def change_email(db: Session, principal: Optional[Principal], new_email: str) -> ActionResult:
    """
    Move the account to a new address and start verification over.

    The new email is saved before the verification email is sent. If the
    send fails the change still stands and EMAIL_SEND_FAILED tells the user
    to request a new link.
    """
    principal = _settings_principal(principal)
    if principal is None:
        return not_authenticated()

    new_email = normalize_email(new_email)
    if not validate_email(new_email).valid:
        return ActionResult.fail("Invalid email address", ErrorCode.INVALID_EMAIL)

    record = principal.record
    model = COLLECTION_MODELS[principal.collection]

    try:
        taken = (
            db.query(model)
            .filter(model.email == new_email, model.id != record.id)
            .first()
        )
        if taken:
            return ActionResult.fail("This email is already in use", ErrorCode.EMAIL_ALREADY_EXISTS)

        record.email = new_email
        token = issue_verification_token(record)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Change email error: %s", error_message(e))
        return ActionResult.system_error("Failed to change email. Please try again.")

    sent = send_verification_email(new_email, token, principal.user_type).log_failure(
        logger, "Failed to send verification email"
    )
    if not sent.success:
        return ActionResult.fail(
            "Your email was updated but we couldn't send the verification email. Please request a new one.",
            ErrorCode.EMAIL_SEND_FAILED,
        )

    return ActionResult.ok({"email": new_email, "emailVerified": False})


def update_phone(db: Session, principal: Optional[Principal], phone: str) -> ActionResult:
    """Store a normalized phone number. A changed number must be verified again."""
    principal = _settings_principal(principal)
    if principal is None:
        return not_authenticated()

    try:
        phone = normalize_phone(phone)
    except ValueError as e:
        return ActionResult.fail(str(e), ErrorCode.VALIDATION_ERROR)

    record = principal.record
    try:
        if record.phone != phone:
            record.phone_verified = False
        record.phone = phone
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Update phone error: %s", error_message(e))
        return ActionResult.system_error("Failed to update phone number. Please try again.")

    return ActionResult.ok({"phone": phone, "phoneVerified": record.phone_verified})


def update_whatsapp(db: Session, principal: Optional[Principal], whatsapp: Optional[str]) -> ActionResult:
    """Candidates only. An empty value clears the number."""
    if principal is None or principal.kind != "candidate":
        return not_authenticated()

    try:
        whatsapp = normalize_phone(whatsapp) if whatsapp and whatsapp.strip() else None
    except ValueError as e:
        return ActionResult.fail(str(e), ErrorCode.VALIDATION_ERROR)

    try:
        principal.record.whatsapp = whatsapp
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Update WhatsApp error: %s", error_message(e))
        return ActionResult.system_error("Failed to update WhatsApp number. Please try again.")

    return ActionResult.ok({"whatsapp": whatsapp})


def resend_email_verification(db: Session, principal: Optional[Principal]) -> ActionResult:
    principal = _settings_principal(principal)
    if principal is None:
        return not_authenticated()

    record = principal.record
    if record.email_verified:
        return ActionResult.fail("Your email is already verified", ErrorCode.ALREADY_VERIFIED)

    try:
        token = issue_verification_token(record)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Resend email verification error: %s", error_message(e))
        return ActionResult.system_error()

    sent = send_verification_email(record.email, token, principal.user_type).log_failure(
        logger, "Failed to send verification email"
    )
    if not sent.success:
        return ActionResult.fail(
            "We couldn't send the verification email. Please try again later.",
            ErrorCode.EMAIL_SEND_FAILED,
        )
    return ActionResult.ok()


def delete_account(db: Session, principal: Optional[Principal], password: str) -> ActionResult:
    """Delete the account after re-checking the password. Notifications go with it."""
    principal = _settings_principal(principal)
    if principal is None:
        return not_authenticated()

    if not password:
        return ActionResult.fail("Password is required", ErrorCode.MISSING_PASSWORD)

    record = principal.record
    if not verify_password(password, record.hashed_password):
        return ActionResult.fail("Password is incorrect", ErrorCode.INVALID_CURRENT_PASSWORD)

    try:
        db.delete(record)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Delete account error: %s", error_message(e))
        return ActionResult.system_error("Failed to delete account. Please try again.")

    logger.info("Deleted %s account id=%s", principal.kind, principal.id)
    return ActionResult.ok()
