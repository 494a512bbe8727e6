# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Any, Dict, Optional

from tracker.models import Activity
from tracker.repositories import activity_repository as repo
from tracker.utils.side_effects import SideEffectResult, best_effort


def log_activity(
    *,
    user,
    action: str,
    entity_type: str,
    entity_id,
    details: Optional[Dict[str, Any]] = None,
    project=None,
    team=None,
) -> SideEffectResult:
    """
    Append one audit record. Never raises: a failed write comes back as a
    failed SideEffectResult and is logged by the boundary.
    """
    return best_effort(
        f"activity:{action}:{entity_type}",
        repo.create_activity,
        user_id=getattr(user, "pk", user),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        project_id=getattr(project, "pk", project),
        team_id=getattr(team, "pk", team),
    )


def log_ticket_activity(*, user, ticket, action: str = Activity.Action.UPDATED, ticket_id=None, **details) -> SideEffectResult:
    project = ticket.project
    payload = {"title": ticket.title, "ticket_number": ticket.ticket_number}
    payload.update(details)
    return log_activity(
        user=user,
        action=action,
        entity_type=Activity.EntityType.TICKET,
        entity_id=ticket_id or ticket.pk,
        details=payload,
        project=project,
        team=project.team_id,
    )


def log_project_activity(*, user, project, action: str = Activity.Action.UPDATED, project_id=None, **details) -> SideEffectResult:
    payload = {"name": project.name, "key": project.key}
    payload.update(details)
    return log_activity(
        user=user,
        action=action,
        entity_type=Activity.EntityType.PROJECT,
        entity_id=project_id or project.pk,
        details=payload,
        project=project.pk,
        team=project.team_id,
    )


def log_team_activity(*, user, team, action: str = Activity.Action.UPDATED, team_id=None, **details) -> SideEffectResult:
    payload = {"name": team.name}
    payload.update(details)
    return log_activity(
        user=user,
        action=action,
        entity_type=Activity.EntityType.TEAM,
        entity_id=team_id or team.pk,
        details=payload,
        team=team.pk,
    )
