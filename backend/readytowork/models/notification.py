from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from readytowork.db.base import Base

NOTIFICATION_TYPES = (
    "interview_scheduled",
    "interview_reminder",
    "interview_request_received",
    "interview_request_approved",
    "interview_request_rejected",
    "candidate_applied",
    "credit_low",
    "system",
)


class Notification(Base):
    """
    In-app notification for a single candidate or a single employer.

    Append-only: only the ``read`` flag changes after creation.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), index=True, nullable=True)
    employer_id = Column(Integer, ForeignKey("employers.id", ondelete="CASCADE"), index=True, nullable=True)

    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False, index=True)
    action_url = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    candidate = relationship("Candidate", back_populates="notifications")
    employer = relationship("Employer", back_populates="notifications")
