# -*- coding: utf-8 -*-
"""
Repository layer for Activity (DB only, no permission rules).
Activity rows are insert-only.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from django.db.models import QuerySet

from tracker.models import Activity


def base_qs() -> QuerySet[Activity]:
    return Activity.objects.select_related("user", "project", "team")


def create_activity(
    *,
    user_id: int,
    action: str,
    entity_type: str,
    entity_id,
    details: Optional[Dict[str, Any]] = None,
    project_id: Optional[int] = None,
    team_id: Optional[int] = None,
) -> Activity:
    activity = Activity(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        details=details or {},
        project_id=project_id,
        team_id=team_id,
    )
    # choices are not enforced by the DB; reject unknown kinds here
    activity.full_clean(exclude=["user", "project", "team"])
    activity.save()
    return activity


def for_user(user_id) -> QuerySet[Activity]:
    return base_qs().filter(user_id=user_id).order_by("-created_at", "-id")


def for_project(project_id) -> QuerySet[Activity]:
    return base_qs().filter(project_id=project_id).order_by("-created_at", "-id")


def for_team(team_id) -> QuerySet[Activity]:
    return base_qs().filter(team_id=team_id).order_by("-created_at", "-id")


def for_entity(entity_type: str, entity_id) -> QuerySet[Activity]:
    return (
        base_qs()
        .filter(entity_type=entity_type, entity_id=str(entity_id))
        .order_by("-created_at", "-id")
    )
