"""
Employer API endpoints: sign-up and the company profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.api.routes.auth import session_response
from readytowork.core.errors import ActionResult, not_authenticated
from readytowork.db.session import get_db
from readytowork.schemas import EmployerOut, EmployerUpdate, RegisterEmployerData
from readytowork.services import employers as employer_service
from readytowork.services.session import Principal

router = APIRouter()


@router.post("/register")
async def register_employer(payload: RegisterEmployerData, db: Session = Depends(get_db)):
    result = employer_service.register_employer(db, payload)
    return session_response(result, status.HTTP_201_CREATED)


@router.get("/me")
async def get_my_company(principal: Optional[Principal] = Depends(get_optional_principal)):
    employer = employer_service.get_current_employer(principal)
    if employer is None:
        return action_response(not_authenticated())
    return action_response(ActionResult.ok(EmployerOut.model_validate(employer)))


@router.patch("/me")
async def update_my_company(
    payload: EmployerUpdate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(employer_service.update_employer(db, principal, payload))
