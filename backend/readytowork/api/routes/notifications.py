"""
Notification API endpoints for the dashboards.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.db.session import get_db
from readytowork.services import notifications as notification_service
from readytowork.services.session import Principal

router = APIRouter()


@router.get("")
async def list_notifications(
    read: Optional[bool] = Query(None),
    type: Optional[str] = Query(None),
    limit: int = Query(notification_service.MAX_LIMIT, ge=1, le=notification_service.MAX_LIMIT),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    result = notification_service.list_notifications(db, principal, read=read, type=type, limit=limit)
    return action_response(result)


@router.get("/unread-count")
async def unread_count(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(notification_service.unread_count(db, principal))


@router.post("/read-all")
async def mark_all_read(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(notification_service.mark_all_notifications_read(db, principal))


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    return action_response(notification_service.mark_notification_as_read(db, principal, notification_id))
