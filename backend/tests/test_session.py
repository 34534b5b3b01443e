from datetime import timedelta

import jwt
import pytest

from readytowork.core.config import settings
from readytowork.core.security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    session_lifetime,
    verify_password,
)
from readytowork.services.session import Principal, issue_session, resolve_principal

from conftest import make_candidate, make_employer, make_user


def test_password_hashing_round_trip():
    hashed = get_password_hash("Abcdef1!")

    assert hashed != "Abcdef1!"
    assert verify_password("Abcdef1!", hashed) is True
    assert verify_password("wrong", hashed) is False
    assert verify_password("", hashed) is False
    assert verify_password("Abcdef1!", None) is False


def test_session_lifetime():
    assert session_lifetime() == timedelta(hours=24)
    assert session_lifetime(remember_me=True) == timedelta(days=30)


def test_session_token_carries_collection():
    payload = decode_session_token(create_session_token(7, "employers"))

    assert payload["sub"] == "7"
    assert payload["col"] == "employers"


def test_unknown_collection_is_refused():
    with pytest.raises(ValueError):
        create_session_token(1, "admins")


def test_forged_and_expired_tokens_are_rejected():
    forged = jwt.encode({"sub": "1", "col": "users"}, "not-the-secret", algorithm=settings.ALGORITHM)
    expired = create_session_token(1, "users", timedelta(seconds=-5))
    wrong_col = jwt.encode({"sub": "1", "col": "admins"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    assert decode_session_token(forged) is None
    assert decode_session_token(expired) is None
    assert decode_session_token(wrong_col) is None
    assert decode_session_token("garbage") is None


def test_principal_is_resolved_from_the_tagged_table(db):
    candidate = make_candidate(db)
    employer = make_employer(db)
    assert candidate.id == employer.id

    as_employer = resolve_principal(db, issue_session(employer).token)
    as_candidate = resolve_principal(db, issue_session(candidate).token)

    assert as_employer.kind == "employer"
    assert as_employer.record is employer
    assert as_candidate.kind == "candidate"
    assert as_candidate.record is candidate


def test_missing_record_resolves_to_nobody(db):
    user = make_user(db)
    token = issue_session(user).token
    db.delete(user)
    db.commit()

    assert resolve_principal(db, token) is None
    assert resolve_principal(db, None) is None


def test_principal_user_type_for_links(db):
    assert Principal.of(make_employer(db)).user_type == "employer"
    assert Principal.of(make_candidate(db)).user_type == "candidate"
    assert Principal.of(make_user(db)).user_type == "candidate"


def test_remember_me_grant():
    class Record:
        id = 3
        __tablename__ = "users"

    grant = issue_session(Record(), remember_me=True)

    assert grant.max_age == 30 * 24 * 3600
    assert decode_session_token(grant.token)["sub"] == "3"
