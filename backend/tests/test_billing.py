from readytowork.core.errors import ErrorCode
from readytowork.models import Notification, Purchase
from readytowork.services import billing
from readytowork.services.session import Principal

from conftest import login_as, make_candidate, make_employer


def test_seed_plans_is_idempotent(db):
    assert billing.seed_plans(db) == 5
    assert billing.seed_plans(db) == 0


def test_plans_are_listed_cheapest_first(client, db):
    billing.seed_plans(db)

    response = client.get("/api/billing/plans")

    plans = response.json()["data"]
    assert [p["slug"] for p in plans] == ["skilled", "specialty", "elite-specialty", "top-picks", "custom"]
    assert plans[0]["entitlements"] == {
        "interviewCreditsGranted": 5,
        "contactUnlockCreditsGranted": 1,
        "basicFilters": True,
        "nationalityRestriction": "NONE",
        "isCustom": False,
    }
    assert plans[-1]["price"] is None


def test_purchase_requires_an_employer(db):
    billing.seed_plans(db)

    anonymous = billing.mock_purchase(db, None, "skilled")
    candidate = billing.mock_purchase(db, Principal.of(make_candidate(db)), "skilled")

    assert anonymous.error_code == ErrorCode.NOT_AUTHENTICATED
    assert anonymous.error == "Not authenticated. Please log in as an employer."
    assert candidate.error_code == ErrorCode.UNAUTHORIZED
    assert candidate.error == "Only employers can make purchases."


def test_purchase_unknown_and_custom_plans(db):
    billing.seed_plans(db)
    principal = Principal.of(make_employer(db))

    assert billing.mock_purchase(db, principal, "platinum").error_code == ErrorCode.PLAN_NOT_FOUND
    assert billing.mock_purchase(db, principal, "custom").error_code == ErrorCode.CUSTOM_PLAN
    assert db.query(Purchase).count() == 0


def test_purchase_grants_credits_and_features(client, db):
    billing.seed_plans(db)
    employer = make_employer(db)
    login_as(client, employer)

    response = client.post("/api/billing/purchase", json={"planSlug": "top-picks"})

    assert response.status_code == 200
    assert response.json()["data"] == {"interviewCredits": 5, "contactUnlockCredits": 1}

    db.refresh(employer)
    assert employer.active_plan.slug == "top-picks"
    assert employer.features == {"basic_filters": True, "nationality_restriction": "SAUDI"}

    purchase = db.query(Purchase).one()
    assert purchase.status == "active"
    assert purchase.source == "mock_checkout"
    assert purchase.interview_credits_granted == 5

    notification = db.query(Notification).one()
    assert notification.employer_id == employer.id
    assert notification.type == "system"


def test_purchases_accumulate_credits(client, db):
    billing.seed_plans(db)
    login_as(client, make_employer(db))

    client.post("/api/billing/purchase", json={"planSlug": "skilled"})
    client.post("/api/billing/purchase", json={"planSlug": "specialty"})

    wallet = client.get("/api/billing/wallet").json()["data"]
    assert wallet == {"interviewCredits": 10, "contactUnlockCredits": 2}


def test_wallet_is_employer_only(client, db):
    login_as(client, make_candidate(db))

    response = client.get("/api/billing/wallet")

    assert response.status_code == 403


def test_billing_classes_are_listed(client):
    response = client.get("/api/billing/classes")

    classes = response.json()["data"]
    assert [c["billingClass"] for c in classes] == ["A", "B", "C", "D"]
    assert classes[3]["price"] == "SAR 700"


def test_billing_class_lookup(client):
    response = client.get("/api/billing/classes/b")

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Specialty"
    assert client.get("/api/billing/classes/Z").status_code == 404
    assert billing.get_billing_class_info(" c ").subtitle == "Expert Licensed staff"
    assert billing.get_billing_class_info(None) is None
