"""
Candidate registration and profile actions.
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
from readytowork.models import Candidate, Media
from readytowork.schemas import CandidateOut, CandidateUpdate, RegisterCandidateData
from readytowork.services.auth import LoginResult, issue_verification_token, record_login, send_verification_email
from readytowork.services.session import Principal, issue_session
from readytowork.services.validation import normalize_phone, parse_date, validate_email, validate_password

logger = logging.getLogger(__name__)

DATE_FIELDS = ("dob", "availability_date", "visa_expiry")
MEDIA_FIELDS = ("profile_picture_id", "resume_id")
LIST_FIELDS = ("education", "preferred_benefits")


def register_candidate(db: Session, data: RegisterCandidateData) -> LoginResult:
    """
    Create an unverified candidate, send the verification email and log them in.
    """
    if not data.terms_accepted:
        return LoginResult(
            success=False,
            error="You must accept the terms and conditions",
            error_code=ErrorCode.VALIDATION_ERROR,
        )

    if not validate_email(data.email).valid:
        return LoginResult(success=False, error="Invalid email address", error_code=ErrorCode.INVALID_EMAIL)

    if not validate_password(data.password).valid:
        return LoginResult(success=False, error=PASSWORD_RULES_ERROR, error_code=ErrorCode.INVALID_PASSWORD)

    dob = parse_date(data.dob)
    if dob is None:
        return LoginResult(success=False, error="Invalid date of birth", error_code=ErrorCode.VALIDATION_ERROR)

    availability_date = parse_date(data.availability_date)
    if availability_date is None:
        return LoginResult(success=False, error="Invalid availability date", error_code=ErrorCode.VALIDATION_ERROR)

    visa_expiry = parse_date(data.visa_expiry)
    if data.visa_expiry and visa_expiry is None:
        return LoginResult(success=False, error="Invalid visa expiry date", error_code=ErrorCode.VALIDATION_ERROR)

    try:
        phone = normalize_phone(data.phone)
        whatsapp = normalize_phone(data.whatsapp) if data.whatsapp else phone
    except ValueError as e:
        return LoginResult(success=False, error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

    if db.query(Candidate).filter(Candidate.email == data.email).first():
        return LoginResult(
            success=False,
            error="An account with this email already exists. Please log in or use a different email.",
            error_code=ErrorCode.EMAIL_EXISTS,
        )

    candidate = Candidate(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        phone=phone,
        whatsapp=whatsapp,
        primary_skill=data.primary_skill,
        gender=data.gender,
        dob=dob,
        nationality=data.nationality,
        languages=data.languages,
        job_title=data.job_title,
        experience_years=data.experience_years,
        saudi_experience=data.saudi_experience,
        current_employer=data.current_employer,
        availability_date=availability_date,
        location=data.location,
        visa_status=data.visa_status,
        visa_expiry=visa_expiry,
        visa_profession=data.visa_profession,
        education=data.education,
        preferred_benefits=data.preferred_benefits,
        terms_accepted=True,
    )
    token = issue_verification_token(candidate)

    try:
        db.add(candidate)
        db.commit()
        db.refresh(candidate)
    except IntegrityError:
        db.rollback()
        return LoginResult(
            success=False,
            error="An account with this email already exists. Please log in or use a different email.",
            error_code=ErrorCode.EMAIL_EXISTS,
        )
    except Exception as e:
        db.rollback()
        logger.error("Candidate registration error: %s", error_message(e))
        return LoginResult(
            success=False,
            error="We couldn't create your account. Please try again later.",
            error_code=ErrorCode.SYSTEM_ERROR,
        )

    logger.info("Candidate registered: id=%s", candidate.id)

    # Registration stands even if the email doesn't go out; they can resend it
    send_verification_email(candidate.email, token, "candidate").log_failure(
        logger, "Failed to send verification email"
    )

    grant = issue_session(candidate)
    record_login(db, candidate)
    return LoginResult(success=True, session=grant, data=CandidateOut.model_validate(candidate))


def get_current_candidate(principal: Optional[Principal]) -> Optional[Candidate]:
    """The session's candidate record, or None for any other kind of session."""
    if principal is None or principal.kind != "candidate":
        return None
    return principal.record


def update_candidate(db: Session, principal: Optional[Principal], data: CandidateUpdate) -> ActionResult:
    """
    Partially update the signed-in candidate's profile.

    Only fields present in ``data`` are written. Date fields are stored as
    calendar dates; an empty ``visa_expiry`` clears it.
    """
    candidate = get_current_candidate(principal)
    if candidate is None:
        return not_authenticated()

    changes = data.model_dump(exclude_unset=True)

    for field in ("first_name", "last_name"):
        if field not in changes:
            continue
        value = (changes[field] or "").strip()
        if not value:
            return ActionResult.fail(f"{field} cannot be empty", ErrorCode.VALIDATION_ERROR)
        changes[field] = value

    # An explicit null empties the list
    for field in LIST_FIELDS:
        if field in changes and changes[field] is None:
            changes[field] = []

    for field in DATE_FIELDS:
        if field not in changes:
            continue
        raw = changes[field]
        if not raw:
            if field != "visa_expiry":
                return ActionResult.fail(f"{field} cannot be empty", ErrorCode.VALIDATION_ERROR)
            changes[field] = None
            continue
        parsed = parse_date(raw)
        if parsed is None:
            return ActionResult.fail(f"Invalid date for {field}", ErrorCode.VALIDATION_ERROR)
        changes[field] = parsed

    try:
        if "phone" in changes:
            new_phone = normalize_phone(changes["phone"])
            if new_phone != candidate.phone:
                changes["phone_verified"] = False
            changes["phone"] = new_phone
        if "whatsapp" in changes:
            changes["whatsapp"] = normalize_phone(changes["whatsapp"]) if changes["whatsapp"] else None
    except ValueError as e:
        return ActionResult.fail(str(e), ErrorCode.VALIDATION_ERROR)

    for field in MEDIA_FIELDS:
        media_id = changes.get(field)
        if media_id is not None and db.get(Media, media_id) is None:
            return ActionResult.fail("Uploaded file not found", ErrorCode.VALIDATION_ERROR)

    try:
        for field, value in changes.items():
            setattr(candidate, field, value)
        db.commit()
        db.refresh(candidate)
    except Exception as e:
        db.rollback()
        logger.error("Candidate update error: %s", error_message(e))
        return ActionResult.system_error("Failed to update profile. Please try again.")

    return ActionResult.ok(CandidateOut.model_validate(candidate))
