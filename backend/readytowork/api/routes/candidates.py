"""
Candidate API endpoints: sign-up and the candidate's own profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.api.routes.auth import session_response
from readytowork.core.errors import ActionResult, not_authenticated
from readytowork.db.session import get_db
from readytowork.schemas import CandidateOut, CandidateUpdate, RegisterCandidateData
from readytowork.services import candidates as candidate_service
from readytowork.services.session import Principal

router = APIRouter()


@router.post("/register")
async def register_candidate(payload: RegisterCandidateData, db: Session = Depends(get_db)):
    """
    Register a candidate from the sign-up wizard and start a session.

    A verification email is sent; the account works before it is verified.
    """
    result = candidate_service.register_candidate(db, payload)
    return session_response(result, status.HTTP_201_CREATED)


@router.get("/me")
async def get_my_profile(principal: Optional[Principal] = Depends(get_optional_principal)):
    candidate = candidate_service.get_current_candidate(principal)
    if candidate is None:
        return action_response(not_authenticated())
    return action_response(ActionResult.ok(CandidateOut.model_validate(candidate)))


@router.patch("/me")
async def update_my_profile(
    payload: CandidateUpdate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    """Partial update: only the keys sent are changed."""
    return action_response(candidate_service.update_candidate(db, principal, payload))
