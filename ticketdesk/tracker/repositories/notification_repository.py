# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Optional

from django.db.models import QuerySet
from django.utils import timezone

from tracker.models import Notification


def create_notification(
    *,
    recipient_id: int,
    type: str,
    title: str,
    message: str,
    entity_type: str,
    entity_id,
    sender_id: Optional[int] = None,
    link: str = "",
) -> Notification:
    obj = Notification(
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=type,
        title=title,
        message=message,
        entity_type=entity_type,
        entity_id=str(entity_id),
        link=link or "",
    )
    obj.full_clean(exclude=["recipient", "sender"])
    obj.save()
    return obj


def get_or_none(notification_id) -> Optional[Notification]:
    return Notification.objects.filter(id=notification_id).first()


def for_recipient(user_id) -> QuerySet[Notification]:
    return (
        Notification.objects
        .select_related("sender")
        .filter(recipient_id=user_id)
        .order_by("-created_at", "-id")
    )


def unread_count(user_id) -> int:
    return Notification.objects.filter(recipient_id=user_id, read=False).count()


def mark_all_read(user_id) -> int:
    return (
        Notification.objects
        .filter(recipient_id=user_id, read=False)
        .update(read=True, read_at=timezone.now())
    )


def delete_all_for(user_id) -> int:
    deleted, _ = Notification.objects.filter(recipient_id=user_id).delete()
    return deleted
