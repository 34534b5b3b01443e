from datetime import datetime
from typing import Optional

from readytowork.schemas.base import CamelModel


class UserOut(CamelModel):
    id: int
    email: str
    role: str
    email_verified: bool
    created_at: Optional[datetime] = None


class NotificationOut(CamelModel):
    id: int
    type: str
    title: str
    message: str
    read: bool
    action_url: Optional[str] = None
    created_at: datetime


class MediaOut(CamelModel):
    id: int
    alt: str
    filename: str
    mime_type: Optional[str] = None
    filesize: Optional[int] = None
    url: str


class PlanEntitlements(CamelModel):
    interview_credits_granted: int = 0
    contact_unlock_credits_granted: int = 0
    basic_filters: bool = False
    nationality_restriction: str = "NONE"
    is_custom: bool = False


class PlanOut(CamelModel):
    id: int
    slug: str
    title: str
    price: Optional[float] = None
    currency: str = "SAR"
    entitlements: PlanEntitlements


class BillingClassOut(CamelModel):
    billing_class: str
    name: str
    subtitle: str
    price: str
    description: str
