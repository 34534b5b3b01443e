from datetime import datetime

from readytowork.core.errors import ErrorCode
from readytowork.models import CandidateInteraction, Interview, Notification
from readytowork.schemas import InterviewRequestData
from readytowork.services import interviews
from readytowork.services.session import Principal

from conftest import login_as, make_candidate, make_employer, make_user


def request_payload(candidate_id, **overrides):
    payload = {
        "candidateId": candidate_id,
        "scheduledAt": "2025-03-04T14:30:00Z",
        "jobPosition": "Site Electrician",
        "jobLocation": "Riyadh",
        "salary": "SAR 4,500",
        "accommodationIncluded": True,
        "transportation": False,
    }
    payload.update(overrides)
    return payload


def pending_interview(db, employer, candidate):
    interview = Interview(
        employer_id=employer.id,
        candidate_id=candidate.id,
        status="pending",
        scheduled_at=datetime(2025, 3, 4, 14, 30),
        job_position="Site Electrician",
        job_location="Riyadh",
        salary="SAR 4,500",
        accommodation_included=True,
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


def notifications_for(db, record):
    column = Notification.candidate_id if record.__tablename__ == "candidates" else Notification.employer_id
    return db.query(Notification).filter(column == record.id).order_by(Notification.id).all()


# ============== Requests ==============


def test_employer_requests_an_interview(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db, interview_credits=2)
    login_as(client, employer)

    response = client.post("/api/interviews", json=request_payload(candidate.id))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["scheduledAt"] == "2025-03-04T14:30:00"
    assert data["duration"] == 30

    # Credits are only spent on approval
    db.refresh(employer)
    assert employer.interview_credits == 2
    assert notifications_for(db, candidate) == []
    [notification] = notifications_for(db, employer)
    assert notification.type == "interview_request_received"
    interaction = db.query(CandidateInteraction).one()
    assert interaction.interaction_type == "interview_requested"
    assert interaction.metadata_ == {"interviewId": data["id"]}


def test_request_needs_an_employer_with_credits(db):
    candidate = make_candidate(db)
    broke = make_employer(db)

    data = InterviewRequestData.model_validate(request_payload(candidate.id))

    assert interviews.request_interview(db, None, data).error_code == ErrorCode.NOT_AUTHENTICATED
    assert interviews.request_interview(db, Principal.of(candidate), data).error_code == ErrorCode.NOT_AUTHENTICATED
    assert interviews.request_interview(db, Principal.of(broke), data).error_code == ErrorCode.INSUFFICIENT_CREDITS
    assert db.query(Interview).count() == 0


def test_request_for_unknown_candidate(client, db):
    login_as(client, make_employer(db, interview_credits=1))

    response = client.post("/api/interviews", json=request_payload(999))

    assert response.status_code == 404


# ============== Moderation ==============


def test_approval_spends_a_credit_and_invites_the_candidate(client, db, outbox):
    candidate = make_candidate(db)
    employer = make_employer(db, interview_credits=3)
    interview = pending_interview(db, employer, candidate)
    login_as(client, make_user(db, email="admin@readytowork.sa", role="admin"))

    response = client.post(
        f"/api/interviews/{interview.id}/approve",
        json={"meetingLink": "https://meet.example.com/abc", "duration": 45},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "scheduled"
    assert data["meetingLink"] == "https://meet.example.com/abc"
    assert data["duration"] == 45
    assert data["approvedAt"] is not None

    db.refresh(employer)
    assert employer.interview_credits == 2

    [invite] = notifications_for(db, candidate)
    assert invite.type == "interview_request_approved"
    assert "Gulf Builders" in invite.message
    assert [n.type for n in notifications_for(db, employer)] == ["interview_scheduled"]

    [email] = outbox.to("ahmed@example.com")
    assert email["subject"] == "New interview invitation from Gulf Builders"
    assert "Site Electrician" in email["html"]
    assert "Tuesday, March 4, 2025" in email["html"]


def test_approval_warns_when_credits_run_low(db, outbox):
    candidate = make_candidate(db)
    employer = make_employer(db, interview_credits=1)
    interview = pending_interview(db, employer, candidate)
    moderator = Principal.of(make_user(db, email="mod@readytowork.sa", role="moderator"))

    result = interviews.approve_interview_request(db, moderator, interview.id)

    assert result.success is True
    assert employer.interview_credits == 0
    assert [n.type for n in notifications_for(db, employer)] == ["interview_scheduled", "credit_low"]


def test_approval_survives_email_failure(db, outbox):
    candidate = make_candidate(db)
    employer = make_employer(db, interview_credits=2)
    interview = pending_interview(db, employer, candidate)
    outbox.fail = True

    result = interviews.approve_interview_request(
        db, Principal.of(make_user(db, email="admin@readytowork.sa", role="admin")), interview.id
    )

    assert result.success is True
    db.refresh(interview)
    assert interview.status == "scheduled"


def test_approval_requires_credits_and_a_pending_request(db):
    candidate = make_candidate(db)
    employer = make_employer(db)
    interview = pending_interview(db, employer, candidate)
    moderator = Principal.of(make_user(db, email="admin@readytowork.sa", role="admin"))

    result = interviews.approve_interview_request(db, moderator, interview.id)
    assert result.error_code == ErrorCode.INSUFFICIENT_CREDITS

    interview.status = "rejected"
    db.commit()
    assert interviews.approve_interview_request(db, moderator, interview.id).error_code == ErrorCode.INVALID_STATE
    assert interviews.approve_interview_request(db, moderator, 999).error_code == ErrorCode.NOT_FOUND


def test_only_moderators_review_requests(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db, interview_credits=2)
    interview = pending_interview(db, employer, candidate)

    assert client.post(f"/api/interviews/{interview.id}/approve").status_code == 401

    login_as(client, make_user(db))
    assert client.post(f"/api/interviews/{interview.id}/approve").status_code == 403

    login_as(client, employer)
    assert client.post(f"/api/interviews/{interview.id}/reject").status_code == 403

    db.refresh(employer)
    assert employer.interview_credits == 2


def test_rejection_keeps_credits_and_tells_the_employer(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db, interview_credits=2)
    interview = pending_interview(db, employer, candidate)
    login_as(client, make_user(db, email="admin@readytowork.sa", role="admin"))

    response = client.post(f"/api/interviews/{interview.id}/reject", json={"reason": "Salary below minimum"})

    assert response.json()["data"]["status"] == "rejected"
    assert response.json()["data"]["rejectionReason"] == "Salary below minimum"
    db.refresh(employer)
    assert employer.interview_credits == 2
    [notification] = notifications_for(db, employer)
    assert notification.type == "interview_request_rejected"
    assert notification.message.endswith("Reason: Salary below minimum")
    assert notifications_for(db, candidate) == []


# ============== Candidate answers ==============


def scheduled_interview(db, employer, candidate):
    interview = pending_interview(db, employer, candidate)
    interview.status = "scheduled"
    db.commit()
    return interview


def test_candidate_accepts_a_scheduled_interview(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db)
    interview = scheduled_interview(db, employer, candidate)
    login_as(client, candidate)

    response = client.post(f"/api/interviews/{interview.id}/accept")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "scheduled"
    [notification] = notifications_for(db, employer)
    assert notification.title == "Interview Accepted"


def test_candidate_declines_a_scheduled_interview(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db)
    interview = scheduled_interview(db, employer, candidate)
    login_as(client, candidate)

    response = client.post(f"/api/interviews/{interview.id}/decline", json={"reason": "Accepted another offer"})

    assert response.json()["data"]["status"] == "cancelled"
    [notification] = notifications_for(db, employer)
    assert notification.type == "interview_request_rejected"
    assert db.query(CandidateInteraction).one().interaction_type == "declined"


def test_candidates_only_answer_their_own_scheduled_interviews(db):
    candidate = make_candidate(db)
    other = make_candidate(db, email="other@example.com")
    employer = make_employer(db)
    pending = pending_interview(db, employer, candidate)
    scheduled = scheduled_interview(db, employer, candidate)

    assert interviews.accept_interview(db, Principal.of(candidate), pending.id).error_code == ErrorCode.INVALID_STATE
    assert interviews.accept_interview(db, Principal.of(other), scheduled.id).error_code == ErrorCode.NOT_FOUND
    assert interviews.decline_interview(db, Principal.of(employer), scheduled.id).error_code == (
        ErrorCode.NOT_AUTHENTICATED
    )


def test_listing_is_scoped_to_the_caller(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db)
    pending_interview(db, employer, candidate)
    scheduled = scheduled_interview(db, employer, candidate)

    login_as(client, employer)
    assert len(client.get("/api/interviews").json()["data"]) == 2
    assert len(client.get("/api/interviews", params={"status": "pending"}).json()["data"]) == 1

    login_as(client, candidate)
    assert [i["id"] for i in client.get("/api/interviews").json()["data"]] == [scheduled.id]

    login_as(client, make_user(db))
    assert client.get("/api/interviews").status_code == 403


# ============== Contact unlocks ==============


def test_unlocking_a_contact_spends_one_credit(client, db):
    candidate = make_candidate(db)
    employer = make_employer(db, contact_unlock_credits=1)
    login_as(client, employer)

    first = client.post(f"/api/interviews/contacts/{candidate.id}/unlock")
    second = client.post(f"/api/interviews/contacts/{candidate.id}/unlock")

    assert first.status_code == 200
    assert first.json()["data"] == {
        "candidateId": candidate.id,
        "email": "ahmed@example.com",
        "phone": "+966501234567",
        "whatsapp": "+966501234567",
    }
    assert second.status_code == 200
    db.refresh(employer)
    assert employer.contact_unlock_credits == 0
    assert db.query(CandidateInteraction).count() == 1


def test_unlock_without_credits(db):
    candidate = make_candidate(db)
    employer = make_employer(db)

    result = interviews.unlock_contact(db, Principal.of(employer), candidate.id)

    assert result.error_code == ErrorCode.INSUFFICIENT_CREDITS
    assert interviews.unlock_contact(db, Principal.of(candidate), candidate.id).error_code == (
        ErrorCode.NOT_AUTHENTICATED
    )
