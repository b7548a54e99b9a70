# apps/api/turnus/services/notifications_service.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from turnus.core.config import settings
from turnus.core.exceptions import NotFoundError, ValidationError
from turnus.core.permissions import Action, Caller, authorize, authorize_team
from turnus.db.models_notifications import Notification, NotificationSettings, NotificationType
from turnus.models.models import User
from turnus.services.delivery import send_email, send_sms

log = logging.getLogger(__name__)


def notify(
    db: Session,
    *,
    team_id: int,
    type: NotificationType | str,
    title: str,
    message: str,
    user_id: Optional[int] = None,
) -> Optional[Notification]:
    """
    Record a notification after the triggering change has been committed.

    Best-effort: a store failure here is rolled back and logged, the caller's
    change stays committed.
    """
    try:
        row = Notification(
            team_id=team_id,
            user_id=user_id,
            type=getattr(type, "value", type),
            title=title,
            message=message,
            read=False,
        )
        db.add(row)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.exception("[notify] could not record %s for team=%s user=%s", type, team_id, user_id)
        return None
    _deliver(db, row)
    return row


def _deliver(db: Session, row: Notification) -> None:
    try:
        cfg = get_settings_row(db, row.team_id, create=False)
        recipient = db.get(User, row.user_id) if row.user_id else None
        if recipient and (cfg is None or cfg.email_enabled):
            send_email(recipient.email, row.title, row.message)
        if cfg and cfg.sms_endpoint:
            send_sms(cfg.sms_endpoint, row.message, row.team_id, row.user_id)
    except SQLAlchemyError:
        db.rollback()
        log.exception("[notify] delivery lookup failed for notification %s", row.id)


def list_notifications(
    db: Session,
    user_id: Optional[int] = None,
    team_id: Optional[int] = None,
    limit: Optional[int] = None,
):
    if user_id is None and team_id is None:
        raise ValidationError("user_id or team_id is required")
    q = db.query(Notification)
    if user_id is not None:
        q = q.filter(Notification.user_id == user_id)
    if team_id is not None:
        q = q.filter(Notification.team_id == team_id)
    q = q.order_by(Notification.created_at.desc(), Notification.id.desc())
    return q.limit(limit or settings.NOTIFICATIONS_PAGE_SIZE).all()


def list_for_caller(
    db: Session,
    caller: Caller,
    user_id: Optional[int] = None,
    team_id: Optional[int] = None,
    limit: Optional[int] = None,
):
    """
    Inbox as seen by ``caller``: their own notifications by default, their
    team's feed, or (managers only) another member's inbox.
    """
    if user_id is None and team_id is None:
        user_id = caller.user_id
    if team_id is not None:
        authorize_team(caller, team_id)
    if user_id is not None and user_id != caller.user_id:
        authorize(caller, Action.VIEW_MEMBER_NOTIFICATIONS)
        member = db.get(User, user_id)
        if not member:
            raise NotFoundError("User not found")
        authorize_team(caller, member.team_id)
    return list_notifications(db, user_id, team_id, limit)


def mark_read(db: Session, notification_id: int, caller: Optional[Caller] = None) -> Notification:
    row = db.get(Notification, notification_id)
    if not row:
        raise NotFoundError("Notification not found")
    # başkasının bildirimi görünmez
    if caller is not None and (
        row.user_id not in (None, caller.user_id) or row.team_id != caller.team_id
    ):
        raise NotFoundError("Notification not found")
    row.read = True
    db.commit()
    return row


def mark_all_read(db: Session, user_id: int) -> int:
    n = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.read == False)  # noqa: E712
        .update({Notification.read: True}, synchronize_session=False)
    )
    db.commit()
    return n


# ---------------- Settings ----------------

def get_settings_row(db: Session, team_id: int, create: bool = True) -> Optional[NotificationSettings]:
    row = db.query(NotificationSettings).filter(NotificationSettings.team_id == team_id).first()
    if row is None and create:
        row = NotificationSettings(team_id=team_id, email_enabled=True, sms_endpoint=None)
        db.add(row)
        db.commit()
    return row


def upsert_settings(
    db: Session,
    team_id: int,
    email_enabled: Optional[bool] = None,
    sms_endpoint: Optional[str] = None,
) -> NotificationSettings:
    row = get_settings_row(db, team_id, create=False)
    if row is None:
        row = NotificationSettings(team_id=team_id)
        db.add(row)
    row.email_enabled = True if email_enabled is None else bool(email_enabled)
    row.sms_endpoint = (sms_endpoint or "").strip() or None
    db.commit()
    return row
