from readytowork.core.errors import ErrorCode
from readytowork.models import Employer
from readytowork.schemas import EmployerUpdate, RegisterEmployerData
from readytowork.services import employers
from readytowork.services.session import Principal

from conftest import PASSWORD, login_as, make_candidate, make_employer


def registration_payload(**overrides):
    payload = {
        "responsiblePerson": "Fatimah Al-Harbi",
        "companyName": "Gulf Builders",
        "email": " HR@GulfBuilders.com ",
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "termsAccepted": True,
    }
    payload.update(overrides)
    return payload


def register(db, **overrides):
    return employers.register_employer(db, RegisterEmployerData.model_validate(registration_payload(**overrides)))


def test_register_employer(client, db, outbox):
    response = client.post("/api/employers/register", json=registration_payload())

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "hr@gulfbuilders.com"
    assert data["wallet"] == {"interviewCredits": 0, "contactUnlockCredits": 0}
    assert data["features"] == {"basicFilters": False, "nationalityRestriction": "NONE"}
    assert data["emailVerified"] is False
    assert "payload-token" in response.cookies

    [email] = outbox.to("hr@gulfbuilders.com")
    assert "type=employer" in email["html"]
    assert client.get("/api/employers/me").json()["data"]["companyName"] == "Gulf Builders"


def test_register_employer_validation(db):
    assert register(db, companyName="  ").error_code == ErrorCode.VALIDATION_ERROR
    assert register(db, email="hr@").error_code == ErrorCode.INVALID_EMAIL
    assert register(db, password="short", confirmPassword="short").error_code == ErrorCode.INVALID_PASSWORD
    assert register(db, confirmPassword="Abcdef1?").error_code == ErrorCode.VALIDATION_ERROR
    assert register(db, termsAccepted=False).error_code == ErrorCode.VALIDATION_ERROR
    assert db.query(Employer).count() == 0


def test_register_employer_duplicate_is_case_insensitive(db):
    make_employer(db, email="hr@gulfbuilders.com")

    result = register(db)

    assert result.error_code == ErrorCode.EMAIL_EXISTS


def test_candidate_email_can_register_as_employer(db):
    make_candidate(db, email="hr@gulfbuilders.com")

    assert register(db).success is True


def test_update_company_profile(client, db):
    employer = make_employer(db, industry="Construction")
    login_as(client, employer)

    response = client.patch("/api/employers/me", json={"companyName": "Gulf Builders Co.", "website": "https://gb.sa"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["companyName"] == "Gulf Builders Co."
    assert data["website"] == "https://gb.sa"
    assert data["industry"] == "Construction"


def test_update_company_rejects_blank_name(db):
    employer = make_employer(db)

    result = employers.update_employer(db, Principal.of(employer), EmployerUpdate(company_name=" "))

    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert employer.company_name == "Gulf Builders"


def test_update_company_requires_employer_session(client, db):
    login_as(client, make_candidate(db))

    response = client.patch("/api/employers/me", json={"companyName": "Hijacked"})

    assert response.status_code == 401
    assert employers.get_current_employer(None) is None
