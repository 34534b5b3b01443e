from datetime import datetime
from typing import Optional

from pydantic import Field

from readytowork.schemas.base import CamelModel


class InterviewRequestData(CamelModel):
    candidate_id: int
    scheduled_at: datetime
    job_position: str
    job_location: str
    salary: str
    accommodation_included: bool = False
    transportation: bool = False


class InterviewApproval(CamelModel):
    """Optional adjustments a moderator makes when approving."""

    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class InterviewDecision(CamelModel):
    reason: Optional[str] = None


class InterviewOut(CamelModel):
    id: int
    employer_id: int
    candidate_id: int
    status: str
    scheduled_at: datetime
    duration: int
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    job_position: Optional[str] = None
    job_location: Optional[str] = None
    salary: Optional[str] = None
    accommodation_included: bool = False
    transportation: bool = False
    requested_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


class CandidateContact(CamelModel):
    """Contact details an employer sees after spending an unlock credit."""

    candidate_id: int
    email: str
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
