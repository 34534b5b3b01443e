from sqlalchemy import Column, Integer, String, ForeignKey, JSON, Boolean, Date
from sqlalchemy.orm import relationship

from readytowork.db.base import Base
from readytowork.models.account import AccountMixin


class Candidate(AccountMixin, Base):
    """Job seeker profile. Also an auth collection in its own right."""

    __tablename__ = "candidates"

    # 1. Identity
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String)
    whatsapp = Column(String)
    phone_verified = Column(Boolean, default=False, nullable=False)

    # 2. Demographics
    gender = Column(String)  # 'male' | 'female'
    dob = Column(Date)
    nationality = Column(String)
    languages = Column(String)

    # 3. Work
    primary_skill = Column(Integer, nullable=True)
    job_title = Column(String)
    experience_years = Column(Integer, default=0)
    saudi_experience = Column(Integer, default=0)
    current_employer = Column(String, nullable=True)
    availability_date = Column(Date)

    # 4. Visa
    location = Column(String)
    visa_status = Column(String, default="none")  # 'active' | 'expired' | 'nearly_expired' | 'none'
    visa_expiry = Column(Date, nullable=True)
    visa_profession = Column(String, nullable=True)

    # 5. Free-form lists
    # Example: [{"degree": "Diploma", "institution": "TVTC", "year": 2019}]
    education = Column(JSON, default=list)
    preferred_benefits = Column(JSON, default=list)

    # 6. Uploads
    profile_picture_id = Column(Integer, ForeignKey("media.id", ondelete="SET NULL"), nullable=True)
    resume_id = Column(Integer, ForeignKey("media.id", ondelete="SET NULL"), nullable=True)

    terms_accepted = Column(Boolean, default=False, nullable=False)

    # Relationships
    profile_picture = relationship("Media", foreign_keys=[profile_picture_id])
    resume = relationship("Media", foreign_keys=[resume_id])
    notifications = relationship(
        "Notification",
        back_populates="candidate",
        cascade="all, delete-orphan",
    )
    interviews = relationship("Interview", back_populates="candidate", cascade="all, delete-orphan")
    interactions = relationship("CandidateInteraction", back_populates="candidate", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
