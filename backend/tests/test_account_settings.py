from readytowork.core.errors import ErrorCode
from readytowork.core.security import verify_password
from readytowork.models import Candidate, Notification
from readytowork.services import account_settings
from readytowork.services.notifications import create_notification
from readytowork.services.session import Principal

from conftest import PASSWORD, login_as, make_candidate, make_employer, make_user

NEW_PASSWORD = "N3w-Secret!"


def test_settings_require_candidate_or_employer(db):
    user = Principal.of(make_user(db))

    for principal in (None, user):
        assert account_settings.change_password(db, principal, PASSWORD, NEW_PASSWORD).error_code == (
            ErrorCode.NOT_AUTHENTICATED
        )
        assert account_settings.change_email(db, principal, "x@example.com").error_code == (
            ErrorCode.NOT_AUTHENTICATED
        )
        assert account_settings.delete_account(db, principal, PASSWORD).error_code == ErrorCode.NOT_AUTHENTICATED


# ============== Password ==============


def test_change_password_checks_current_password(db, outbox):
    employer = make_employer(db)

    result = account_settings.change_password(db, Principal.of(employer), "Wrong1!x", NEW_PASSWORD)

    assert result.error_code == ErrorCode.INVALID_CURRENT_PASSWORD
    assert verify_password(PASSWORD, employer.hashed_password)
    assert outbox.sent == []


def test_change_password(client, db, outbox):
    candidate = make_candidate(db)
    login_as(client, candidate)

    response = client.post(
        "/api/account/password",
        json={"currentPassword": PASSWORD, "newPassword": NEW_PASSWORD},
    )

    assert response.status_code == 200
    db.refresh(candidate)
    assert verify_password(NEW_PASSWORD, candidate.hashed_password)
    assert outbox.subjects == ["Your password was changed"]


def test_change_password_rejects_weak_new_password(db):
    candidate = make_candidate(db)

    result = account_settings.change_password(db, Principal.of(candidate), PASSWORD, "weakpass")

    assert result.error_code == ErrorCode.INVALID_PASSWORD


# ============== Email ==============


def test_change_email_restarts_verification(client, db, outbox):
    candidate = make_candidate(db, email_verified=True)
    login_as(client, candidate)

    response = client.post("/api/account/email", json={"email": "New.Address@Example.com"})

    assert response.status_code == 200
    db.refresh(candidate)
    assert candidate.email == "new.address@example.com"
    assert candidate.email_verified is False
    assert candidate.email_verification_token
    [email] = outbox.to("new.address@example.com")
    assert candidate.email_verification_token in email["html"]


def test_change_email_to_taken_address(client, db):
    make_candidate(db, email="taken@example.com")
    candidate = make_candidate(db)
    login_as(client, candidate)

    response = client.post("/api/account/email", json={"email": "taken@example.com"})

    assert response.status_code == 409
    assert response.json()["errorCode"] == "EMAIL_ALREADY_EXISTS"


def test_change_email_to_address_used_in_another_table(db, outbox):
    make_employer(db, email="shared@example.com")
    candidate = make_candidate(db)

    result = account_settings.change_email(db, Principal.of(candidate), "shared@example.com")

    assert result.success is True


def test_change_email_send_failure_keeps_the_change(db, outbox):
    employer = make_employer(db)
    outbox.fail = True

    result = account_settings.change_email(db, Principal.of(employer), "ops@gulfbuilders.com")

    assert result.error_code == ErrorCode.EMAIL_SEND_FAILED
    db.refresh(employer)
    assert employer.email == "ops@gulfbuilders.com"
    assert employer.email_verified is False


def test_resend_email_verification(db, outbox):
    candidate = make_candidate(db)
    principal = Principal.of(candidate)

    assert account_settings.resend_email_verification(db, principal).success is True
    assert len(outbox.to("ahmed@example.com")) == 1

    candidate.email_verified = True
    db.commit()
    result = account_settings.resend_email_verification(db, principal)
    assert result.error_code == ErrorCode.ALREADY_VERIFIED


# ============== Phone / WhatsApp ==============


def test_update_phone_resets_verification(client, db):
    employer = make_employer(db, phone="+966501234567", phone_verified=True)
    login_as(client, employer)

    response = client.post("/api/account/phone", json={"phone": "0559876543"})

    assert response.json()["data"] == {"phone": "+966559876543", "phoneVerified": False}


def test_update_phone_rejects_garbage(db):
    employer = make_employer(db)

    result = account_settings.update_phone(db, Principal.of(employer), "call me")

    assert result.error_code == ErrorCode.VALIDATION_ERROR


def test_update_whatsapp_is_for_candidates(db):
    employer = make_employer(db)
    candidate = make_candidate(db)

    assert account_settings.update_whatsapp(db, Principal.of(employer), "0501234567").error_code == (
        ErrorCode.NOT_AUTHENTICATED
    )

    result = account_settings.update_whatsapp(db, Principal.of(candidate), "")
    assert result.success is True
    assert candidate.whatsapp is None


# ============== Delete ==============


def test_delete_account_checks_password(db):
    candidate = make_candidate(db)

    result = account_settings.delete_account(db, Principal.of(candidate), "Wrong1!x")

    assert result.error_code == ErrorCode.INVALID_CURRENT_PASSWORD
    assert db.query(Candidate).count() == 1


def test_delete_account_removes_notifications(client, db):
    candidate = make_candidate(db)
    create_notification(db, candidate, "system", "Welcome", "Hello")
    db.commit()
    login_as(client, candidate)

    response = client.request("DELETE", "/api/account", json={"password": PASSWORD})

    assert response.status_code == 200
    assert db.query(Candidate).count() == 0
    assert db.query(Notification).count() == 0
    assert any(h.startswith("payload-token=") for h in response.headers.get_list("set-cookie"))
    assert client.get("/api/auth/me").status_code == 401
