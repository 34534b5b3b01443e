from sqlalchemy import Column, String

from readytowork.db.base import Base
from readytowork.models.account import AccountMixin


class User(AccountMixin, Base):
    """Generic account for staff and general users."""

    __tablename__ = "users"

    role = Column(String, default="user", nullable=False)  # 'admin' | 'moderator' | 'user'
