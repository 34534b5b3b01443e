"""
Notification actions for the candidate and employer dashboards.
"""

import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from readytowork.core.errors import ActionResult, ErrorCode, error_message, not_authenticated
from readytowork.models import NOTIFICATION_TYPES, Candidate, Employer, Notification
from readytowork.schemas import NotificationOut
from readytowork.services.session import Principal

logger = logging.getLogger(__name__)

MAX_LIMIT = 100


def _owner_column(principal: Principal):
    if principal.kind == "candidate":
        return Notification.candidate_id
    return Notification.employer_id


def _can_receive(principal: Optional[Principal]) -> bool:
    return principal is not None and principal.kind in ("candidate", "employer")


def _owned_by(notification: Notification, principal: Principal) -> bool:
    if principal.kind == "candidate":
        return notification.candidate_id == principal.id
    return notification.employer_id == principal.id


def list_notifications(
    db: Session,
    principal: Optional[Principal],
    read: Optional[bool] = None,
    type: Optional[str] = None,
    limit: int = MAX_LIMIT,
) -> ActionResult:
    """Newest first, optionally filtered by read state and type."""
    if not _can_receive(principal):
        return not_authenticated()

    limit = max(1, min(limit, MAX_LIMIT))

    try:
        query = db.query(Notification).filter(_owner_column(principal) == principal.id)
        if read is not None:
            query = query.filter(Notification.read.is_(read))
        if type:
            query = query.filter(Notification.type == type)

        notifications = (
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )
    except Exception as e:
        logger.error("List notifications error: %s", error_message(e))
        return ActionResult.system_error()

    return ActionResult.ok([NotificationOut.model_validate(n) for n in notifications])


def unread_count(db: Session, principal: Optional[Principal]) -> ActionResult:
    if not _can_receive(principal):
        return not_authenticated()

    try:
        count = (
            db.query(Notification)
            .filter(_owner_column(principal) == principal.id, Notification.read.is_(False))
            .count()
        )
    except Exception as e:
        logger.error("Unread count error: %s", error_message(e))
        return ActionResult.system_error()

    return ActionResult.ok({"count": count})


def mark_notification_as_read(db: Session, principal: Optional[Principal], notification_id: int) -> ActionResult:
    if not _can_receive(principal):
        return not_authenticated()

    try:
        notification = db.get(Notification, notification_id)
        if notification is None:
            return ActionResult.fail("Notification not found", ErrorCode.NOT_FOUND)

        if not _owned_by(notification, principal):
            return ActionResult.fail("You cannot modify this notification", ErrorCode.UNAUTHORIZED)

        notification.read = True
        db.commit()
        db.refresh(notification)
    except Exception as e:
        db.rollback()
        logger.error("Mark notification read error: %s", error_message(e))
        return ActionResult.system_error()

    return ActionResult.ok(NotificationOut.model_validate(notification))


def mark_all_notifications_read(db: Session, principal: Optional[Principal]) -> ActionResult:
    """Mark every unread notification read in one update. Safe to repeat."""
    if not _can_receive(principal):
        return not_authenticated()

    try:
        updated = (
            db.query(Notification)
            .filter(_owner_column(principal) == principal.id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Mark all notifications read error: %s", error_message(e))
        return ActionResult.system_error()

    # Loaded instances may still hold the old flag
    db.expire_all()
    return ActionResult.ok({"updated": updated})


def create_notification(
    db: Session,
    recipient: Union[Candidate, Employer],
    type: str,
    title: str,
    message: str,
    action_url: Optional[str] = None,
) -> Notification:
    """
    Append a notification for one candidate or one employer.

    Flushes but does not commit, so it joins the caller's transaction.

    Raises:
        ValueError: If the type is unknown or the recipient can't receive notifications.
    """
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {type}")

    notification = Notification(type=type, title=title, message=message, action_url=action_url, read=False)
    if isinstance(recipient, Candidate):
        notification.candidate_id = recipient.id
    elif isinstance(recipient, Employer):
        notification.employer_id = recipient.id
    else:
        raise ValueError("Notifications can only be sent to candidates or employers")

    db.add(notification)
    db.flush()
    return notification
