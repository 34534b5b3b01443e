"""
Session principal resolution.

A session token names both the record id and the table it lives in. It is
resolved once per request into a Principal, which is then passed explicitly
into every action.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from readytowork.core.security import create_session_token, decode_session_token, session_lifetime
from readytowork.models import Candidate, Employer, User
from readytowork.schemas import CandidateOut, EmployerOut, UserOut

logger = logging.getLogger(__name__)

PrincipalKind = Literal["candidate", "employer", "user"]
AccountRecord = Union[Candidate, Employer, User]

COLLECTION_MODELS = {
    "users": User,
    "candidates": Candidate,
    "employers": Employer,
}
KIND_BY_COLLECTION: dict[str, PrincipalKind] = {
    "users": "user",
    "candidates": "candidate",
    "employers": "employer",
}
COLLECTION_BY_KIND = {kind: collection for collection, kind in KIND_BY_COLLECTION.items()}


@dataclass(frozen=True)
class Principal:
    """The authenticated owner of a request."""

    kind: PrincipalKind
    record: AccountRecord

    @property
    def id(self) -> int:
        return self.record.id

    @property
    def email(self) -> str:
        return self.record.email

    @property
    def collection(self) -> str:
        return COLLECTION_BY_KIND[self.kind]

    @property
    def user_type(self) -> str:
        """Audience used in email links: employers get employer pages, everyone else candidate pages."""
        return "employer" if self.kind == "employer" else "candidate"

    @classmethod
    def of(cls, record: AccountRecord) -> "Principal":
        return cls(kind=KIND_BY_COLLECTION[record.__tablename__], record=record)


@dataclass(frozen=True)
class SessionGrant:
    token: str
    expires_at: datetime
    max_age: int


def issue_session(record: AccountRecord, remember_me: bool = False) -> SessionGrant:
    """Sign a session token for a record: 24h, or 30 days with remember-me."""
    lifetime: timedelta = session_lifetime(remember_me)
    token = create_session_token(record.id, record.__tablename__, lifetime)
    return SessionGrant(
        token=token,
        expires_at=datetime.now(timezone.utc) + lifetime,
        max_age=int(lifetime.total_seconds()),
    )


def resolve_principal(db: Session, token: Optional[str]) -> Optional[Principal]:
    """
    Turn a session token into a Principal.

    The lookup goes to the table named in the token, never by bare id across
    tables, so a candidate id can't be mistaken for an employer with the same id.
    """
    if not token:
        return None

    payload = decode_session_token(token)
    if payload is None:
        return None

    collection = payload["col"]
    try:
        record_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None

    record = db.get(COLLECTION_MODELS[collection], record_id)
    if record is None:
        logger.info("Session refers to a missing %s record", collection)
        return None

    return Principal(kind=KIND_BY_COLLECTION[collection], record=record)


def serialize_profile(record: AccountRecord) -> BaseModel:
    if isinstance(record, Candidate):
        return CandidateOut.model_validate(record)
    if isinstance(record, Employer):
        return EmployerOut.model_validate(record)
    return UserOut.model_validate(record)
