from datetime import datetime
from typing import Optional

from pydantic import field_validator

from readytowork.schemas.base import CamelModel


class RegisterEmployerData(CamelModel):
    responsible_person: str
    company_name: str
    email: str
    password: str
    confirm_password: str
    terms_accepted: bool = False

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("responsible_person", "company_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class EmployerUpdate(CamelModel):
    """Partial company profile update."""

    responsible_person: Optional[str] = None
    company_name: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None


class Wallet(CamelModel):
    interview_credits: int = 0
    contact_unlock_credits: int = 0


class Features(CamelModel):
    basic_filters: bool = False
    nationality_restriction: str = "NONE"


class EmployerOut(CamelModel):
    id: int
    email: str
    responsible_person: str
    company_name: str
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    email_verified: bool
    phone_verified: bool
    wallet: Wallet
    features: Features
    active_plan_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
