from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime

from readytowork.db.base import Base


class Media(Base):
    """Uploaded file (profile picture, resume) stored under MEDIA_ROOT."""

    __tablename__ = "media"

    id = Column(Integer, primary_key=True)
    alt = Column(String, nullable=False)
    filename = Column(String, nullable=False)
    mime_type = Column(String)
    filesize = Column(Integer)

    # Who uploaded it: "<collection>:<id>"
    uploaded_by = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
