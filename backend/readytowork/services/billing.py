"""
Plans, mock checkout and the employer credit wallet.

Billing classes (A-D) are the display tiers candidates are priced at.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from sqlalchemy.orm import Session

from readytowork.core.errors import ActionResult, ErrorCode, error_message, not_authenticated
from readytowork.models import Plan, Purchase
from readytowork.schemas import PlanOut, Wallet
from readytowork.schemas.common import BillingClassOut, PlanEntitlements
from readytowork.services.notifications import create_notification
from readytowork.services.session import Principal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillingClassInfo:
    billing_class: str
    name: str
    subtitle: str
    price: str
    description: str


BILLING_CLASSES = {
    "A": BillingClassInfo("A", "Skilled", "Skilled Workers", "SAR 350", "Skilled workers"),
    "B": BillingClassInfo(
        "B", "Specialty", "Certified Technical", "SAR 450", "Specialty / Certified Technical workers"
    ),
    "C": BillingClassInfo(
        "C", "Elite Specialty", "Expert Licensed staff", "SAR 600", "Elite Specialty / Expert Licensed staff"
    ),
    "D": BillingClassInfo("D", "Saudi Nationals", "N/A", "SAR 700", "Saudi Nationals"),
}


# Catalogue seeded into the plans table
DEFAULT_PLANS = [
    {
        "slug": "skilled",
        "title": "Skilled",
        "price": 350,
        "interview_credits_granted": 5,
        "contact_unlock_credits_granted": 1,
        "basic_filters": True,
        "nationality_restriction": "NONE",
    },
    {
        "slug": "specialty",
        "title": "Specialty",
        "price": 450,
        "interview_credits_granted": 5,
        "contact_unlock_credits_granted": 1,
        "basic_filters": True,
        "nationality_restriction": "NONE",
    },
    {
        "slug": "elite-specialty",
        "title": "Elite Specialty",
        "price": 600,
        "interview_credits_granted": 5,
        "contact_unlock_credits_granted": 1,
        "basic_filters": True,
        "nationality_restriction": "NONE",
    },
    {
        "slug": "top-picks",
        "title": "Top Picks",
        "price": 700,
        "interview_credits_granted": 5,
        "contact_unlock_credits_granted": 1,
        "basic_filters": True,
        "nationality_restriction": "SAUDI",
    },
    {
        "slug": "custom",
        "title": "Custom",
        "price": None,
        "interview_credits_granted": 0,
        "contact_unlock_credits_granted": 0,
        "basic_filters": False,
        "nationality_restriction": "NONE",
        "is_custom": True,
    },
]


def seed_plans(db: Session) -> int:
    """Insert any missing default plans. Returns how many were created."""
    existing = {slug for (slug,) in db.query(Plan.slug).all()}
    created = 0
    for spec in DEFAULT_PLANS:
        if spec["slug"] in existing:
            continue
        db.add(Plan(currency="SAR", **spec))
        created += 1
    db.commit()
    return created


def get_billing_class_info(billing_class: Optional[str]) -> Optional[BillingClassInfo]:
    if not billing_class:
        return None
    return BILLING_CLASSES.get(str(billing_class).strip().upper())


def list_billing_classes() -> ActionResult:
    return ActionResult.ok([BillingClassOut(**asdict(info)) for info in BILLING_CLASSES.values()])


def get_billing_class(billing_class: Optional[str]) -> ActionResult:
    info = get_billing_class_info(billing_class)
    if info is None:
        return ActionResult.fail("Unknown billing class", ErrorCode.NOT_FOUND)
    return ActionResult.ok(BillingClassOut(**asdict(info)))


def serialize_plan(plan: Plan) -> PlanOut:
    return PlanOut(
        id=plan.id,
        slug=plan.slug,
        title=plan.title,
        price=plan.price,
        currency=plan.currency,
        entitlements=PlanEntitlements(
            interview_credits_granted=plan.interview_credits_granted or 0,
            contact_unlock_credits_granted=plan.contact_unlock_credits_granted or 0,
            basic_filters=bool(plan.basic_filters),
            nationality_restriction=plan.nationality_restriction or "NONE",
            is_custom=bool(plan.is_custom),
        ),
    )


def list_plans(db: Session) -> ActionResult:
    """All plans, cheapest first. Custom (unpriced) plans sort last."""
    try:
        plans = db.query(Plan).order_by(Plan.price.is_(None), Plan.price.asc(), Plan.id.asc()).all()
    except Exception as e:
        logger.error("List plans error: %s", error_message(e))
        return ActionResult.system_error()
    return ActionResult.ok([serialize_plan(p) for p in plans])


def get_wallet(db: Session, principal: Optional[Principal]) -> ActionResult:
    if principal is None:
        return not_authenticated()
    if principal.kind != "employer":
        return ActionResult.fail("Only employers have a credit wallet.", ErrorCode.UNAUTHORIZED)

    return ActionResult.ok(Wallet.model_validate(principal.record.wallet))


def mock_purchase(db: Session, principal: Optional[Principal], plan_slug: str) -> ActionResult:
    """
    Buy a plan without a payment gateway.

    Records an active purchase with a snapshot of the credits granted, adds
    those credits to the wallet and switches the employer to the plan's
    features. Returns the new wallet.
    """
    if principal is None:
        return not_authenticated("Not authenticated. Please log in as an employer.")
    if principal.kind != "employer":
        return ActionResult.fail("Only employers can make purchases.", ErrorCode.UNAUTHORIZED)

    employer = principal.record

    try:
        plan = db.query(Plan).filter(Plan.slug == plan_slug).first()
        if plan is None:
            return ActionResult.fail("Plan not found", ErrorCode.PLAN_NOT_FOUND)

        if plan.is_custom:
            return ActionResult.fail(
                "Custom plans require a request form. Please contact support.",
                ErrorCode.CUSTOM_PLAN,
            )

        interview_granted = plan.interview_credits_granted or 0
        unlock_granted = plan.contact_unlock_credits_granted or 0

        db.add(
            Purchase(
                employer_id=employer.id,
                plan_id=plan.id,
                status="active",
                interview_credits_granted=interview_granted,
                contact_unlock_credits_granted=unlock_granted,
                source="mock_checkout",
            )
        )

        employer.interview_credits = (employer.interview_credits or 0) + interview_granted
        employer.contact_unlock_credits = (employer.contact_unlock_credits or 0) + unlock_granted
        employer.active_plan_id = plan.id
        employer.basic_filters = bool(plan.basic_filters)
        employer.nationality_restriction = plan.nationality_restriction or "NONE"

        create_notification(
            db,
            employer,
            type="system",
            title="Plan activated",
            message=(
                f"Your {plan.title} plan is active. {interview_granted} interview credits and "
                f"{unlock_granted} contact unlock credits were added to your wallet."
            ),
            action_url="/employer/dashboard",
        )
        db.commit()
        db.refresh(employer)
    except Exception as e:
        db.rollback()
        logger.error("Mock purchase error: %s", error_message(e))
        return ActionResult.system_error("Failed to process purchase. Please try again.")

    logger.info("Employer %s purchased plan %s", employer.id, plan.slug)
    return ActionResult.ok(Wallet.model_validate(employer.wallet))
