from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import field_validator

from readytowork.schemas.base import CamelModel

Gender = Literal["male", "female"]
VisaStatus = Literal["active", "expired", "nearly_expired", "none"]


class RegisterCandidateData(CamelModel):
    """Flat registration payload from the candidate sign-up wizard."""

    # Identity
    first_name: str
    last_name: str
    email: str
    password: str
    phone: str
    whatsapp: Optional[str] = None

    # Smart matrix
    primary_skill: Optional[int] = None  # Skill ID

    # Demographics
    gender: Gender
    dob: Optional[str] = None
    nationality: str
    languages: str

    # Work
    job_title: str
    experience_years: int = 0
    saudi_experience: int = 0
    current_employer: Optional[str] = None
    availability_date: Optional[str] = None

    # Visa
    location: str
    visa_status: VisaStatus = "none"
    visa_expiry: Optional[str] = None
    visa_profession: Optional[str] = None

    education: list[dict[str, Any]] = []
    preferred_benefits: list[str] = []

    terms_accepted: bool = False

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("first_name", "last_name", "job_title", "nationality", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class CandidateUpdate(CamelModel):
    """Partial profile update. Only keys present in the request are written."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    primary_skill: Optional[int] = None
    gender: Optional[Gender] = None
    dob: Optional[str] = None
    nationality: Optional[str] = None
    languages: Optional[str] = None
    job_title: Optional[str] = None
    experience_years: Optional[int] = None
    saudi_experience: Optional[int] = None
    current_employer: Optional[str] = None
    availability_date: Optional[str] = None
    location: Optional[str] = None
    visa_status: Optional[VisaStatus] = None
    visa_expiry: Optional[str] = None
    visa_profession: Optional[str] = None
    education: Optional[list[dict[str, Any]]] = None
    preferred_benefits: Optional[list[str]] = None
    profile_picture_id: Optional[int] = None
    resume_id: Optional[int] = None


class CandidateOut(CamelModel):
    """Candidate profile as returned to the dashboard (no secrets)."""

    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email_verified: bool
    phone_verified: bool
    primary_skill: Optional[int] = None
    gender: Optional[str] = None
    dob: Optional[date] = None
    nationality: Optional[str] = None
    languages: Optional[str] = None
    job_title: Optional[str] = None
    experience_years: Optional[int] = None
    saudi_experience: Optional[int] = None
    current_employer: Optional[str] = None
    availability_date: Optional[date] = None
    location: Optional[str] = None
    visa_status: Optional[str] = None
    visa_expiry: Optional[date] = None
    visa_profession: Optional[str] = None
    education: list[dict[str, Any]] = []
    preferred_benefits: list[str] = []
    profile_picture_id: Optional[int] = None
    resume_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("education", "preferred_benefits", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v
