# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Iterable, List, Optional
import logging

from django.db.models import QuerySet

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import Notification
from tracker.repositories import notification_repository as repo
from tracker.utils.side_effects import SideEffectResult, best_effort

log = logging.getLogger(__name__)


# ====== Dispatch (fire-and-forget) ======
def create_notification(
    *,
    recipient,
    type: str,
    title: str,
    message: str,
    entity_type: str,
    entity_id,
    sender=None,
    link: str = "",
) -> SideEffectResult:
    return best_effort(
        f"notification:{type}",
        repo.create_notification,
        recipient_id=getattr(recipient, "pk", recipient),
        sender_id=getattr(sender, "pk", sender),
        type=type,
        title=title,
        message=message,
        entity_type=entity_type,
        entity_id=entity_id,
        link=link,
    )


def fan_out(
    *,
    recipients: Iterable,
    exclude=None,
    **fields,
) -> List[SideEffectResult]:
    """
    One notification per distinct recipient, in first-seen order.
    ``exclude`` (usually the actor) never receives one.
    """
    excluded = getattr(exclude, "pk", exclude)
    unique_ids = []
    for r in recipients:
        rid = getattr(r, "pk", r)
        if rid is None or rid == excluded or rid in unique_ids:
            continue
        unique_ids.append(rid)

    # sequential on purpose; each failure is isolated by create_notification
    return [create_notification(recipient=rid, **fields) for rid in unique_ids]


def ticket_link(ticket) -> str:
    return f"/tickets/{ticket.pk}"


def project_link(project) -> str:
    return f"/projects/{project.pk}"


def team_link(team) -> str:
    return f"/teams/{team.pk}"


# ====== Recipient-scoped reads / updates ======
def _owned(notification_id, user) -> Notification:
    obj = repo.get_or_none(notification_id)
    if obj is None:
        raise NotFoundError("Notification not found")
    if obj.recipient_id != user.pk:
        raise AuthorizationError("Not authorized to access this notification")
    return obj


def list_for_user(*, user) -> QuerySet:
    return repo.for_recipient(user.pk)


def unread_count(*, user) -> int:
    return repo.unread_count(user.pk)


def mark_as_read(*, notification_id, user) -> Notification:
    obj = _owned(notification_id, user)
    if not obj.read:
        obj.mark_read()
        obj.save(update_fields=["read", "read_at", "updated_at"])
    return obj


def mark_all_as_read(*, user) -> int:
    updated = repo.mark_all_read(user.pk)
    log.info("[notification] user=%s marked %s as read", user.pk, updated)
    return updated


def delete_notification(*, notification_id, user) -> None:
    obj = _owned(notification_id, user)
    obj.delete()


def delete_all(*, user) -> int:
    return repo.delete_all_for(user.pk)
