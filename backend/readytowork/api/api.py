"""
API Router Aggregator.

Combines all routers into a single router for the main app.
"""

from fastapi import APIRouter

from readytowork.api.routes import account, auth, billing, candidates, employers, interviews, media, notifications

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
)

api_router.include_router(
    employers.router,
    prefix="/employers",
    tags=["Employers"],
)

api_router.include_router(
    account.router,
    prefix="/account",
    tags=["Account"],
)

api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["Notifications"],
)

api_router.include_router(
    billing.router,
    prefix="/billing",
    tags=["Billing"],
)

api_router.include_router(
    interviews.router,
    prefix="/interviews",
    tags=["Interviews"],
)

api_router.include_router(
    media.router,
    prefix="/media",
    tags=["Media"],
)
