"""
Authentication actions.

Login, generic registration, forgot/reset password, email verification and
resending verification. Each action validates, looks the account up in one of
the three account tables, mutates it, and triggers its side effect (email or
session). Expected failures come back as ActionResult, never as exceptions.
"""

import logging
from datetime import timedelta
from typing import Optional

from pydantic import Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from readytowork.core.config import settings
from readytowork.core.errors import (
    ActionResult,
    ErrorCode,
    PASSWORD_RULES_ERROR,
    error_message,
)
from readytowork.core.security import generate_token, get_password_hash, utcnow, verify_password
from readytowork.models import Employer, User
from readytowork.services import email_templates
from readytowork.services.mailer import SendResult, send_email
from readytowork.services.session import (
    COLLECTION_MODELS,
    AccountRecord,
    Principal,
    SessionGrant,
    issue_session,
    serialize_profile,
)
from readytowork.services.validation import normalize_email, validate_email, validate_password

logger = logging.getLogger(__name__)

# Lookup order when the caller gives no hint
DEFAULT_SEARCH_ORDER = ("employers", "candidates", "users")
SEARCH_ORDER_BY_HINT = {
    "employer": ("employers", "candidates", "users"),
    "candidate": ("candidates", "users", "employers"),
}
VERIFY_COLLECTION_BY_TYPE = {
    "candidate": "candidates",
    "employer": "employers",
    "user": "users",
}


class LoginResult(ActionResult):
    """ActionResult carrying the session to set as a cookie. The token never reaches the body."""

    session: Optional[SessionGrant] = Field(default=None, exclude=True)


# ============== Helper Functions ==============


def find_by_email(db: Session, collection: str, email: str) -> Optional[AccountRecord]:
    model = COLLECTION_MODELS[collection]
    return db.query(model).filter(model.email == email).first()


def authenticate(db: Session, collection: str, email: str, password: str) -> Optional[AccountRecord]:
    """Return the record if the credentials match, otherwise None."""
    record = find_by_email(db, collection, email)
    if not record:
        return None
    if not verify_password(password, record.hashed_password):
        return None
    return record


def issue_verification_token(record: AccountRecord) -> str:
    """Reset the record to unverified with a fresh 24h token. Caller commits."""
    token = generate_token()
    record.email_verified = False
    record.email_verification_token = token
    record.email_verification_expires = utcnow() + timedelta(hours=settings.EMAIL_VERIFICATION_TTL_HOURS)
    return token


def send_verification_email(email: str, token: str, user_type: str) -> SendResult:
    return send_email(
        to=email,
        subject="Verify your email address - Ready to Work",
        html=email_templates.verification_email_template(email, token, user_type),
    )


def send_password_changed_email(email: str) -> SendResult:
    return send_email(
        to=email,
        subject="Your password was changed",
        html=email_templates.password_changed_email_template(),
    )


def record_login(db: Session, record: AccountRecord) -> None:
    """
    Bump last_login_at. Best-effort: a failed write never fails the login.
    """
    try:
        record.last_login_at = utcnow()
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning("Could not record last login: %s", error_message(e))


# ============== Actions ==============


def login_user(
    db: Session,
    email: str,
    password: str,
    remember_me: bool = False,
    collection: str = "users",
) -> LoginResult:
    """
    Authenticate against one account table and issue a session.

    The session lasts 24 hours, or 30 days when ``remember_me`` is set.
    """
    email = normalize_email(email)
    if not validate_email(email).valid:
        return LoginResult(success=False, error="Invalid email address", error_code=ErrorCode.INVALID_EMAIL)

    if not password:
        return LoginResult(success=False, error="Password is required", error_code=ErrorCode.MISSING_PASSWORD)

    if collection not in COLLECTION_MODELS:
        return LoginResult(success=False, error="Unknown account type", error_code=ErrorCode.VALIDATION_ERROR)

    try:
        record = authenticate(db, collection, email, password)
    except Exception as e:
        # SECURITY: log the message only, never the credentials
        logger.error("Login system error: %s", error_message(e))
        return LoginResult(
            success=False,
            error="We encountered a system error. Please try again later.",
            error_code=ErrorCode.SYSTEM_ERROR,
        )

    if record is None:
        logger.info("Failed login attempt for collection=%s", collection)
        return LoginResult(
            success=False,
            error="The email or password you entered is incorrect",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )

    grant = issue_session(record, remember_me=remember_me)
    record_login(db, record)

    return LoginResult(
        success=True,
        session=grant,
        data={"kind": Principal.of(record).kind, "id": record.id},
    )


def register_user(db: Session, email: str, password: str) -> LoginResult:
    """
    Register a generic account in the users table and log it in.

    The account can be used straight away with limited access until verified.
    """
    email = normalize_email(email)
    if not validate_email(email).valid:
        return LoginResult(success=False, error="Invalid email address", error_code=ErrorCode.INVALID_EMAIL)

    if not validate_password(password).valid:
        return LoginResult(success=False, error=PASSWORD_RULES_ERROR, error_code=ErrorCode.INVALID_PASSWORD)

    if find_by_email(db, "users", email):
        return LoginResult(
            success=False,
            error="An account with this email already exists. Please log in or use a different email.",
            error_code=ErrorCode.EMAIL_EXISTS,
        )

    user = User(email=email, hashed_password=get_password_hash(password), role="user")
    token = issue_verification_token(user)

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        return LoginResult(
            success=False,
            error="An account with this email already exists. Please log in or use a different email.",
            error_code=ErrorCode.EMAIL_EXISTS,
        )
    except Exception as e:
        db.rollback()
        logger.error("Registration system error: %s", error_message(e))
        return LoginResult(
            success=False,
            error="We couldn't create your account. Please try again later.",
            error_code=ErrorCode.SYSTEM_ERROR,
        )

    send_verification_email(email, token, "candidate").log_failure(logger, "Failed to send verification email")

    grant = issue_session(user)
    record_login(db, user)
    return LoginResult(success=True, session=grant, data=serialize_profile(user))


def forgot_password(db: Session, email: str) -> ActionResult:
    """
    Issue a one-hour password reset token and email it.

    Always reports success for a well-formed email, whether or not an account
    exists and whether or not the write or the send worked, so the response
    never reveals which addresses are registered.
    """
    email = normalize_email(email)
    if not validate_email(email).valid:
        return ActionResult.fail("Invalid email address", ErrorCode.INVALID_EMAIL)

    try:
        record = None
        collection = None
        for collection in DEFAULT_SEARCH_ORDER:
            record = find_by_email(db, collection, email)
            if record is not None:
                break

        if record is None:
            return ActionResult.ok()

        token = generate_token()
        record.password_reset_token = token
        record.password_reset_expires = utcnow() + timedelta(minutes=settings.PASSWORD_RESET_TTL_MINUTES)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Forgot password error: %s", error_message(e))
        return ActionResult.ok()

    user_type = "employer" if collection == "employers" else "candidate"
    send_email(
        to=email,
        subject="Reset your password - Ready to Work",
        html=email_templates.password_reset_email_template(email, token, user_type),
    ).log_failure(logger, "Failed to send password reset email")

    return ActionResult.ok()


def reset_password(
    db: Session,
    token: str,
    email: str,
    new_password: str,
    user_type: Optional[str] = None,
) -> ActionResult:
    """
    Consume a reset token and set a new password.

    The token must match the stored one and be unexpired. The password change
    and the token clearing happen in one write, so a token works only once.
    """
    email = normalize_email(email)
    if not validate_email(email).valid:
        return ActionResult.fail("Invalid email address", ErrorCode.INVALID_EMAIL)

    if not validate_password(new_password).valid:
        return ActionResult.fail(PASSWORD_RULES_ERROR, ErrorCode.INVALID_PASSWORD)

    if not token:
        return ActionResult.fail("Invalid reset token", ErrorCode.INVALID_TOKEN)

    try:
        now = utcnow()
        record = None
        for collection in SEARCH_ORDER_BY_HINT.get(user_type or "", DEFAULT_SEARCH_ORDER):
            model = COLLECTION_MODELS[collection]
            record = (
                db.query(model)
                .filter(
                    model.email == email,
                    model.password_reset_token == token,
                    model.password_reset_expires > now,
                )
                .first()
            )
            if record is not None:
                break

        if record is None:
            return ActionResult.fail("Invalid or expired reset token", ErrorCode.INVALID_OR_EXPIRED_TOKEN)

        record.hashed_password = get_password_hash(new_password)
        record.password_reset_token = None
        record.password_reset_expires = None
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Reset password error: %s", error_message(e))
        return ActionResult.system_error("We encountered an error. Please try again later.")

    # The password is already changed; a failed confirmation email doesn't undo it
    send_password_changed_email(email).log_failure(logger, "Failed to send password changed email")

    return ActionResult.ok()


def verify_email(db: Session, token: str, email: str, user_type: str = "candidate") -> ActionResult:
    """Exchange a verification token for ``email_verified=True`` and send the welcome email."""
    email = normalize_email(email)
    if not token or not email:
        return ActionResult.fail("Invalid verification link", ErrorCode.INVALID_TOKEN)

    collection = VERIFY_COLLECTION_BY_TYPE.get(user_type, "candidates")
    model = COLLECTION_MODELS[collection]

    try:
        record = (
            db.query(model)
            .filter(
                model.email == email,
                model.email_verification_token == token,
                model.email_verification_expires > utcnow(),
            )
            .first()
        )
        if record is None:
            return ActionResult.fail("Verification link is invalid or has expired", ErrorCode.INVALID_OR_EXPIRED_TOKEN)

        record.email_verified = True
        record.email_verification_token = None
        record.email_verification_expires = None
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Email verification error: %s", error_message(e))
        return ActionResult.system_error()

    if isinstance(record, Employer):
        send_email(
            to=email,
            subject="Welcome to Ready to Work!",
            html=email_templates.employer_welcome_email_template(record.company_name, record.responsible_person),
        ).log_failure(logger, "Failed to send welcome email")
    else:
        send_email(
            to=email,
            subject="Welcome! Your email has been verified",
            html=email_templates.welcome_email_template(email, "candidate"),
        ).log_failure(logger, "Failed to send welcome email")

    return ActionResult.ok({"type": user_type})


def resend_verification(db: Session, email: str) -> ActionResult:
    """
    Send a fresh verification link to an unverified account.

    Reports success whether or not an unverified account exists.
    """
    email = normalize_email(email)
    if not validate_email(email).valid:
        return ActionResult.fail("Invalid email address", ErrorCode.INVALID_EMAIL)

    try:
        record = None
        for collection in ("candidates", "employers", "users"):
            model = COLLECTION_MODELS[collection]
            record = (
                db.query(model)
                .filter(model.email == email, model.email_verified.is_(False))
                .first()
            )
            if record is not None:
                break

        if record is None:
            return ActionResult.ok()

        token = issue_verification_token(record)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Resend verification error: %s", error_message(e))
        return ActionResult.ok()

    user_type = Principal.of(record).user_type
    send_verification_email(email, token, user_type).log_failure(logger, "Failed to send verification email")
    return ActionResult.ok()
