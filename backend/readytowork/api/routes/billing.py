"""
Billing API endpoints: plans, mock checkout and the credit wallet.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.db.session import get_db
from readytowork.schemas import CamelModel
from readytowork.services import billing as billing_service
from readytowork.services.session import Principal

router = APIRouter()


class PurchaseRequest(CamelModel):
    plan_slug: str


@router.get("/plans")
async def list_plans(db: Session = Depends(get_db)):
    return action_response(billing_service.list_plans(db))


@router.get("/classes")
async def list_billing_classes():
    """Display tiers (A-D) candidates are priced at."""
    return action_response(billing_service.list_billing_classes())


@router.get("/classes/{billing_class}")
async def get_billing_class(billing_class: str):
    return action_response(billing_service.get_billing_class(billing_class))


@router.post("/purchase")
async def purchase(
    payload: PurchaseRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    """Mock checkout: grants the plan's credits immediately."""
    return action_response(billing_service.mock_purchase(db, principal, payload.plan_slug))


@router.get("/wallet")
async def wallet(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(billing_service.get_wallet(db, principal))
