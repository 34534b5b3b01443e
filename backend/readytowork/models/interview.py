from datetime import datetime

from sqlalchemy import JSON, Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from readytowork.db.base import Base

INTERVIEW_STATUSES = ("pending", "scheduled", "rejected", "cancelled", "completed")
INTERACTION_TYPES = ("view", "interview_requested", "interviewed", "declined", "contact_unlocked")


class Interview(Base):
    """
    Interview between an employer and a candidate.

    Starts as a pending request. A moderator approves it (``scheduled``) or
    rejects it; the candidate can then decline a scheduled interview
    (``cancelled``).
    """

    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True)
    employer_id = Column(Integer, ForeignKey("employers.id", ondelete="CASCADE"), index=True, nullable=False)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), index=True, nullable=False)

    status = Column(String, default="pending", nullable=False, index=True)
    scheduled_at = Column(DateTime, nullable=False)
    duration = Column(Integer, default=30, nullable=False)  # minutes
    meeting_link = Column(String)
    notes = Column(Text)

    # Offer details entered with the request
    job_position = Column(String)
    job_location = Column(String)
    salary = Column(String)
    accommodation_included = Column(Boolean, default=False, nullable=False)
    transportation = Column(Boolean, default=False, nullable=False)

    # Moderation
    requested_at = Column(DateTime, default=datetime.utcnow)
    approved_at = Column(DateTime)
    approved_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    rejection_reason = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    employer = relationship("Employer", back_populates="interviews")
    candidate = relationship("Candidate", back_populates="interviews")


class CandidateInteraction(Base):
    """Log of what an employer did with a candidate (viewed, unlocked, ...)."""

    __tablename__ = "candidate_interactions"

    id = Column(Integer, primary_key=True)
    employer_id = Column(Integer, ForeignKey("employers.id", ondelete="CASCADE"), index=True, nullable=False)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), index=True, nullable=False)
    interaction_type = Column(String, nullable=False)
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    employer = relationship("Employer", back_populates="interactions")
    candidate = relationship("Candidate", back_populates="interactions")
