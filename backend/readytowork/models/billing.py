from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from readytowork.db.base import Base


class Plan(Base):
    """Subscription plan and the credits it grants."""

    __tablename__ = "plans"

    id = Column(Integer, primary_key=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    title = Column(String, nullable=False)
    price = Column(Float, nullable=True)  # None for custom plans
    currency = Column(String, default="SAR", nullable=False)

    # Entitlements
    interview_credits_granted = Column(Integer, default=0, nullable=False)
    contact_unlock_credits_granted = Column(Integer, default=0, nullable=False)
    basic_filters = Column(Boolean, default=False, nullable=False)
    nationality_restriction = Column(String, default="NONE", nullable=False)
    is_custom = Column(Boolean, default=False, nullable=False)


class Purchase(Base):
    """
    Record of an employer buying a plan.

    Credits granted are snapshotted so later plan edits do not rewrite history.
    """

    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True)
    employer_id = Column(Integer, ForeignKey("employers.id", ondelete="CASCADE"), index=True, nullable=False)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    status = Column(String, default="active", nullable=False)  # 'active' | 'cancelled'

    interview_credits_granted = Column(Integer, default=0, nullable=False)
    contact_unlock_credits_granted = Column(Integer, default=0, nullable=False)

    source = Column(String, default="mock_checkout")
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    employer = relationship("Employer", back_populates="purchases")
    plan = relationship("Plan")
