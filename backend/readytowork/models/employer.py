from sqlalchemy import Column, Integer, String, ForeignKey, Boolean
from sqlalchemy.orm import relationship

from readytowork.db.base import Base
from readytowork.models.account import AccountMixin


class Employer(AccountMixin, Base):
    """Company profile with a credit wallet and an active subscription plan."""

    __tablename__ = "employers"

    responsible_person = Column(String, nullable=False)
    company_name = Column(String, nullable=False)
    phone = Column(String)
    phone_verified = Column(Boolean, default=False, nullable=False)
    website = Column(String)
    address = Column(String)
    industry = Column(String)
    company_size = Column(String)  # '1-10' | '11-50' | '51-200' | '201-500' | '500+'
    terms_accepted = Column(Boolean, default=False, nullable=False)

    # Wallet
    interview_credits = Column(Integer, default=0, nullable=False)
    contact_unlock_credits = Column(Integer, default=0, nullable=False)

    # Subscription
    active_plan_id = Column(Integer, ForeignKey("plans.id", ondelete="SET NULL"), nullable=True)

    # Features unlocked by the active plan
    basic_filters = Column(Boolean, default=False, nullable=False)
    nationality_restriction = Column(String, default="NONE", nullable=False)  # 'NONE' | 'SAUDI'

    # Relationships
    active_plan = relationship("Plan")
    purchases = relationship("Purchase", back_populates="employer", cascade="all, delete-orphan")
    notifications = relationship(
        "Notification",
        back_populates="employer",
        cascade="all, delete-orphan",
    )
    interviews = relationship("Interview", back_populates="employer", cascade="all, delete-orphan")
    interactions = relationship("CandidateInteraction", back_populates="employer", cascade="all, delete-orphan")

    @property
    def wallet(self) -> dict:
        return {
            "interview_credits": self.interview_credits or 0,
            "contact_unlock_credits": self.contact_unlock_credits or 0,
        }

    @property
    def features(self) -> dict:
        return {
            "basic_filters": bool(self.basic_filters),
            "nationality_restriction": self.nationality_restriction or "NONE",
        }
