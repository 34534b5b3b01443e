"""
Interview API endpoints: requests, moderation, candidate answers and contact unlocks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.db.session import get_db
from readytowork.schemas import InterviewApproval, InterviewDecision, InterviewRequestData
from readytowork.services import interviews as interview_service
from readytowork.services.session import Principal

router = APIRouter()


@router.get("")
async def list_interviews(
    status_filter: Optional[str] = Query(None, alias="status"),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(interview_service.list_interviews(db, principal, status=status_filter))


@router.post("")
async def request_interview(
    payload: InterviewRequestData,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    result = interview_service.request_interview(db, principal, payload)
    return action_response(result, success_status=status.HTTP_201_CREATED)


@router.post("/{interview_id}/approve")
async def approve_interview(
    interview_id: int,
    payload: Optional[InterviewApproval] = None,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    """Moderators only. Spends one of the employer's interview credits."""
    return action_response(interview_service.approve_interview_request(db, principal, interview_id, payload))


@router.post("/{interview_id}/reject")
async def reject_interview(
    interview_id: int,
    payload: Optional[InterviewDecision] = None,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    reason = payload.reason if payload else None
    return action_response(interview_service.reject_interview_request(db, principal, interview_id, reason))


@router.post("/{interview_id}/accept")
async def accept_interview(
    interview_id: int,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(interview_service.accept_interview(db, principal, interview_id))


@router.post("/{interview_id}/decline")
async def decline_interview(
    interview_id: int,
    payload: Optional[InterviewDecision] = None,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    reason = payload.reason if payload else None
    return action_response(interview_service.decline_interview(db, principal, interview_id, reason))


@router.post("/contacts/{candidate_id}/unlock")
async def unlock_contact(
    candidate_id: int,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(interview_service.unlock_contact(db, principal, candidate_id))
