"""
Validation helpers for form inputs.

Results carry a translation key (and params) rather than a display string,
so the frontend can render the message in the visitor's locale.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
DATE_ONLY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

# Fallback formats accepted by the registration forms
DATE_FORMATS = ("%Y/%m/%d", "%m/%d/%Y", "%d.%m.%Y")

SAUDI_COUNTRY_CODE = "966"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error_key: Optional[str] = None
    error_params: dict[str, Any] = field(default_factory=dict)


def validate_password(password: Optional[str]) -> ValidationResult:
    if not password:
        return ValidationResult(False, "validation.passwordRequired")
    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationResult(
            False,
            "validation.passwordMinLength",
            {"minLength": PASSWORD_MIN_LENGTH},
        )
    if not re.search(r"[A-Z]", password):
        return ValidationResult(False, "validation.passwordUppercase")
    if not re.search(r"[a-z]", password):
        return ValidationResult(False, "validation.passwordLowercase")
    if not re.search(r"[0-9]", password):
        return ValidationResult(False, "validation.passwordNumber")
    if not re.search(r"[^A-Za-z0-9]", password):
        return ValidationResult(False, "validation.passwordSpecialChar")
    return ValidationResult(True)


def validate_email(email: Optional[str]) -> ValidationResult:
    if not email:
        return ValidationResult(False, "validation.required")
    if not EMAIL_PATTERN.fullmatch(email):
        return ValidationResult(False, "validation.invalidEmail")
    return ValidationResult(True)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse a calendar date from user input.

    Accepts ``YYYY-MM-DD``, full ISO-8601 timestamps (converted to UTC first,
    so ``2024-01-05T00:00:00Z`` is 2024-01-05) and a few slash/dot formats.
    Returns None for empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    if DATE_ONLY_PATTERN.fullmatch(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def format_date(value: Optional[date]) -> Optional[str]:
    """``YYYY-MM-DD`` or None."""
    return value.isoformat() if value else None


def normalize_phone(phone: Optional[str]) -> str:
    """
    Normalize a phone number to E.164.

    Local Saudi mobiles (``05XXXXXXXX``) are rewritten with the 966 prefix.

    Raises:
        ValueError: If the number is empty or has an invalid length.
    """
    raw = (phone or "").strip()
    if not raw:
        raise ValueError("Phone number is required")

    digits = re.sub(r"[\s\-().]", "", raw)
    if digits.startswith("+"):
        digits = digits[1:]
    elif digits.startswith("00"):
        digits = digits[2:]
    elif digits.startswith("05") and len(digits) == 10:
        digits = SAUDI_COUNTRY_CODE + digits[1:]
    elif digits.startswith("5") and len(digits) == 9:
        digits = SAUDI_COUNTRY_CODE + digits

    if not digits.isdigit() or not 8 <= len(digits) <= 15:
        raise ValueError("Invalid phone number format")

    return f"+{digits}"
