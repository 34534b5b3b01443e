"""
Interview requests, moderation and contact unlocks.

An employer requests an interview (pending). A moderator approves it, which
spends one interview credit, notifies both sides and emails the candidate an
invitation, or rejects it. The candidate can accept or decline a scheduled
interview. Unlocking a candidate's contact details spends one contact
unlock credit.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from readytowork.core.errors import ActionResult, ErrorCode, error_message, not_authenticated
from readytowork.core.security import utcnow
from readytowork.models import Candidate, CandidateInteraction, Employer, Interview
from readytowork.schemas import (
    CandidateContact,
    InterviewApproval,
    InterviewOut,
    InterviewRequestData,
)
from readytowork.services import email_templates
from readytowork.services.mailer import SendResult, send_email
from readytowork.services.notifications import create_notification
from readytowork.services.session import Principal

logger = logging.getLogger(__name__)

MODERATOR_ROLES = ("admin", "moderator")
# A credit_low notice goes out once the wallet drops to this many interview credits
LOW_CREDIT_THRESHOLD = 1


def _as_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _is_moderator(principal: Optional[Principal]) -> bool:
    return principal is not None and principal.kind == "user" and principal.record.role in MODERATOR_ROLES


def _record_interaction(
    db: Session,
    employer: Employer,
    candidate_id: int,
    interaction_type: str,
    metadata: Optional[dict] = None,
) -> CandidateInteraction:
    interaction = CandidateInteraction(
        employer_id=employer.id,
        candidate_id=candidate_id,
        interaction_type=interaction_type,
        metadata_=metadata,
    )
    db.add(interaction)
    return interaction


def send_interview_invitation_email(candidate: Candidate, employer: Employer, interview: Interview) -> SendResult:
    return send_email(
        to=candidate.email,
        subject=f"New interview invitation from {employer.company_name}",
        html=email_templates.interview_invitation_email_template(
            candidate.first_name,
            employer.company_name or employer.email,
            interview.scheduled_at,
            job_position=interview.job_position,
            job_location=interview.job_location,
            salary=interview.salary,
            accommodation_included=interview.accommodation_included,
            transportation=interview.transportation,
        ),
    )


def request_interview(db: Session, principal: Optional[Principal], data: InterviewRequestData) -> ActionResult:
    """
    Create a pending interview request for moderation.

    The employer needs at least one interview credit; it is only spent on
    approval. The candidate hears nothing until then.
    """
    if principal is None or principal.kind != "employer":
        return not_authenticated("Authentication required as an employer.")

    employer = principal.record
    if (employer.interview_credits or 0) <= 0:
        return ActionResult.fail("Insufficient interview credits.", ErrorCode.INSUFFICIENT_CREDITS)

    candidate = db.get(Candidate, data.candidate_id)
    if candidate is None:
        return ActionResult.fail("Candidate not found.", ErrorCode.NOT_FOUND)

    try:
        interview = Interview(
            employer_id=employer.id,
            candidate_id=candidate.id,
            status="pending",
            scheduled_at=_as_utc_naive(data.scheduled_at),
            duration=30,
            requested_at=utcnow(),
            job_position=data.job_position,
            job_location=data.job_location,
            salary=data.salary,
            accommodation_included=data.accommodation_included,
            transportation=data.transportation,
        )
        db.add(interview)
        db.flush()

        _record_interaction(db, employer, candidate.id, "interview_requested", {"interviewId": interview.id})
        create_notification(
            db,
            employer,
            type="interview_request_received",
            title="Interview Request Submitted",
            message=(
                f"Your interview request with {candidate.full_name} was received and is awaiting review."
            ),
            action_url=f"/employer/dashboard/interviews/{interview.id}",
        )
        db.commit()
        db.refresh(interview)
    except Exception as e:
        db.rollback()
        logger.error("Interview request error: %s", error_message(e))
        return ActionResult.system_error("Failed to request interview.")

    logger.info("Interview %s requested by employer %s", interview.id, employer.id)
    return ActionResult.ok(InterviewOut.model_validate(interview))


def approve_interview_request(
    db: Session,
    principal: Optional[Principal],
    interview_id: int,
    data: Optional[InterviewApproval] = None,
) -> ActionResult:
    """
    Schedule a pending request and spend one of the employer's interview credits.

    Notifies the candidate and the employer, warns the employer when credits
    run low and emails the candidate the invitation. A failed email does not
    undo the approval.
    """
    if principal is None:
        return not_authenticated("Authentication required.")
    if not _is_moderator(principal):
        return ActionResult.fail("Only moderators can review interview requests.", ErrorCode.UNAUTHORIZED)

    interview = db.get(Interview, interview_id)
    if interview is None:
        return ActionResult.fail("Interview request not found.", ErrorCode.NOT_FOUND)
    if interview.status != "pending":
        return ActionResult.fail("Interview request is not pending approval.", ErrorCode.INVALID_STATE)

    employer = interview.employer
    candidate = interview.candidate
    if (employer.interview_credits or 0) <= 0:
        return ActionResult.fail("Employer has insufficient interview credits.", ErrorCode.INSUFFICIENT_CREDITS)

    try:
        interview.status = "scheduled"
        interview.approved_at = utcnow()
        interview.approved_by_id = principal.id
        if data is not None:
            if data.scheduled_at:
                interview.scheduled_at = _as_utc_naive(data.scheduled_at)
            if data.duration:
                interview.duration = data.duration
            if data.meeting_link:
                interview.meeting_link = data.meeting_link
            if data.notes:
                interview.notes = data.notes

        employer.interview_credits = max(0, (employer.interview_credits or 0) - 1)

        create_notification(
            db,
            candidate,
            type="interview_request_approved",
            title="New Interview Invitation",
            message=(
                f"You have received a new interview invitation from "
                f"{employer.company_name or employer.email}. Please review and respond."
            ),
            action_url="/dashboard/interviews",
        )
        create_notification(
            db,
            employer,
            type="interview_scheduled",
            title="Interview Approved",
            message=f"Your interview request with {candidate.full_name} has been approved.",
            action_url=f"/employer/dashboard/interviews/{interview.id}",
        )
        if employer.interview_credits <= LOW_CREDIT_THRESHOLD:
            create_notification(
                db,
                employer,
                type="credit_low",
                title="Interview credits running low",
                message=(
                    f"You have {employer.interview_credits} interview credit(s) left. "
                    "Buy a plan to keep requesting interviews."
                ),
                action_url="/employer/dashboard",
            )
        db.commit()
        db.refresh(interview)
    except Exception as e:
        db.rollback()
        logger.error("Interview approval error: %s", error_message(e))
        return ActionResult.system_error("Failed to approve interview request.")

    logger.info("Interview %s approved by user %s", interview.id, principal.id)

    send_interview_invitation_email(candidate, employer, interview).log_failure(
        logger, "Failed to send interview invitation email"
    )

    return ActionResult.ok(InterviewOut.model_validate(interview))


def reject_interview_request(
    db: Session,
    principal: Optional[Principal],
    interview_id: int,
    reason: Optional[str] = None,
) -> ActionResult:
    """Reject a pending request. No credit is spent."""
    if principal is None:
        return not_authenticated("Authentication required.")
    if not _is_moderator(principal):
        return ActionResult.fail("Only moderators can review interview requests.", ErrorCode.UNAUTHORIZED)

    interview = db.get(Interview, interview_id)
    if interview is None:
        return ActionResult.fail("Interview request not found.", ErrorCode.NOT_FOUND)
    if interview.status != "pending":
        return ActionResult.fail("Interview request is not pending approval.", ErrorCode.INVALID_STATE)

    reason = (reason or "").strip() or None
    candidate = interview.candidate

    try:
        interview.status = "rejected"
        interview.rejection_reason = reason or "Interview request rejected by moderator."

        create_notification(
            db,
            interview.employer,
            type="interview_request_rejected",
            title="Interview Request Rejected",
            message=(
                f"Your interview request with {candidate.full_name} has been rejected."
                + (f" Reason: {reason}" if reason else "")
            ),
            action_url=f"/employer/dashboard/interviews/{interview.id}",
        )
        db.commit()
        db.refresh(interview)
    except Exception as e:
        db.rollback()
        logger.error("Interview rejection error: %s", error_message(e))
        return ActionResult.system_error("Failed to reject interview request.")

    return ActionResult.ok(InterviewOut.model_validate(interview))


def _candidate_interview(db: Session, principal: Optional[Principal], interview_id: int):
    """Returns (interview, None) or (None, failure)."""
    if principal is None or principal.kind != "candidate":
        return None, not_authenticated("Authentication required as a candidate.")

    interview = db.get(Interview, interview_id)
    if interview is None or interview.candidate_id != principal.id:
        return None, ActionResult.fail("Interview not found.", ErrorCode.NOT_FOUND)
    if interview.status != "scheduled":
        return None, ActionResult.fail("Only scheduled interviews can be answered.", ErrorCode.INVALID_STATE)
    return interview, None


def accept_interview(db: Session, principal: Optional[Principal], interview_id: int) -> ActionResult:
    """Candidate confirms a scheduled interview. The status stays ``scheduled``."""
    interview, failure = _candidate_interview(db, principal, interview_id)
    if failure is not None:
        return failure

    try:
        create_notification(
            db,
            interview.employer,
            type="interview_scheduled",
            title="Interview Accepted",
            message=f"{principal.record.full_name} has accepted your interview request.",
            action_url=f"/employer/dashboard/interviews/{interview.id}",
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Accept interview error: %s", error_message(e))
        return ActionResult.system_error("Failed to accept interview.")

    return ActionResult.ok(InterviewOut.model_validate(interview))


def decline_interview(
    db: Session,
    principal: Optional[Principal],
    interview_id: int,
    reason: Optional[str] = None,
) -> ActionResult:
    """Candidate turns down a scheduled interview, which cancels it."""
    interview, failure = _candidate_interview(db, principal, interview_id)
    if failure is not None:
        return failure

    reason = (reason or "").strip() or None

    try:
        interview.status = "cancelled"
        interview.rejection_reason = reason or "Interview rejected by candidate."
        _record_interaction(db, interview.employer, interview.candidate_id, "declined", {"interviewId": interview.id})
        create_notification(
            db,
            interview.employer,
            type="interview_request_rejected",
            title="Interview Rejected",
            message="The candidate has rejected your interview request." + (f" Reason: {reason}" if reason else ""),
            action_url=f"/employer/dashboard/interviews/{interview.id}",
        )
        db.commit()
        db.refresh(interview)
    except Exception as e:
        db.rollback()
        logger.error("Decline interview error: %s", error_message(e))
        return ActionResult.system_error("Failed to decline interview.")

    return ActionResult.ok(InterviewOut.model_validate(interview))


def list_interviews(db: Session, principal: Optional[Principal], status: Optional[str] = None) -> ActionResult:
    """
    Interviews visible to the caller, soonest first.

    Candidates only see interviews that have passed moderation.
    """
    if principal is None:
        return not_authenticated()

    query = db.query(Interview)
    if principal.kind == "employer":
        query = query.filter(Interview.employer_id == principal.id)
    elif principal.kind == "candidate":
        query = query.filter(
            Interview.candidate_id == principal.id,
            Interview.status.notin_(("pending", "rejected")),
        )
    elif _is_moderator(principal):
        pass
    else:
        return ActionResult.fail("You don't have access to interviews.", ErrorCode.UNAUTHORIZED)

    if status:
        query = query.filter(Interview.status == status)

    interviews = query.order_by(Interview.scheduled_at.asc(), Interview.id.asc()).all()
    return ActionResult.ok([InterviewOut.model_validate(i) for i in interviews])


def unlock_contact(db: Session, principal: Optional[Principal], candidate_id: int) -> ActionResult:
    """
    Reveal a candidate's contact details to an employer.

    The first unlock of a candidate spends one contact unlock credit; later
    calls for the same candidate are free.
    """
    if principal is None or principal.kind != "employer":
        return not_authenticated("Authentication required as an employer.")

    employer = principal.record
    candidate = db.get(Candidate, candidate_id)
    if candidate is None:
        return ActionResult.fail("Candidate not found.", ErrorCode.NOT_FOUND)

    already_unlocked = (
        db.query(CandidateInteraction)
        .filter(
            CandidateInteraction.employer_id == employer.id,
            CandidateInteraction.candidate_id == candidate.id,
            CandidateInteraction.interaction_type == "contact_unlocked",
        )
        .first()
        is not None
    )

    if not already_unlocked:
        if (employer.contact_unlock_credits or 0) <= 0:
            return ActionResult.fail("Insufficient contact unlock credits.", ErrorCode.INSUFFICIENT_CREDITS)
        try:
            employer.contact_unlock_credits = max(0, (employer.contact_unlock_credits or 0) - 1)
            _record_interaction(db, employer, candidate.id, "contact_unlocked")
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error("Contact unlock error: %s", error_message(e))
            return ActionResult.system_error("Failed to unlock contact details.")

    return ActionResult.ok(
        CandidateContact(
            candidate_id=candidate.id,
            email=candidate.email,
            phone=candidate.phone,
            whatsapp=candidate.whatsapp,
        )
    )
