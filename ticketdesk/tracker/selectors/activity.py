# ============================================
# tracker/selectors/activity.py
# ============================================
"""
Activity feeds with read-side authorization.

- own feed: always
- another user's feed: only when both share a project or a team
- project / team feed: members only
- entity feed: ticket/project/team/user, each with the matching rule

Feeds are newest-first querysets; views page them with ActivityPagination.
"""
from django.db.models import QuerySet

from tracker.exceptions import AuthorizationError, ValidationError
from tracker.models import Activity
from tracker.repositories import activity_repository as repo
from tracker.selectors.project import ProjectSelector
from tracker.selectors.team import TeamSelector
from tracker.selectors.ticket import TicketSelector
from tracker.selectors.user import UserSelector

FEED_ENTITY_TYPES = (
    Activity.EntityType.TICKET,
    Activity.EntityType.PROJECT,
    Activity.EntityType.TEAM,
    Activity.EntityType.USER,
)


class ActivitySelector:

    @staticmethod
    def can_view_user_activity(viewer, user_id) -> bool:
        user_id = UserSelector.normalize_user_id(user_id)
        if viewer.pk == user_id:
            return True
        return (
            ProjectSelector.users_share_project(viewer, user_id) or
            TeamSelector.users_share_team(viewer, user_id)
        )

    @staticmethod
    def _check_user_feed(viewer, user_id) -> None:
        if not ActivitySelector.can_view_user_activity(viewer, user_id):
            raise AuthorizationError("Not authorized to view this user's activity")

    @staticmethod
    def user_feed(viewer, user_id=None) -> QuerySet:
        user_id = user_id or viewer.pk
        UserSelector.get_user_or_404(user_id)
        ActivitySelector._check_user_feed(viewer, user_id)
        return repo.for_user(user_id)

    @staticmethod
    def project_feed(viewer, project_id) -> QuerySet:
        project = ProjectSelector.get_project_for_member(project_id, viewer)
        return repo.for_project(project.pk)

    @staticmethod
    def team_feed(viewer, team_id) -> QuerySet:
        team = TeamSelector.get_team_for_member(team_id, viewer)
        return repo.for_team(team.pk)

    @staticmethod
    def entity_feed(viewer, entity_type: str, entity_id) -> QuerySet:
        if entity_type not in FEED_ENTITY_TYPES:
            raise ValidationError("Invalid entity type")

        if entity_type == Activity.EntityType.TICKET:
            entity_id = TicketSelector.get_ticket_for_member(entity_id, viewer).pk
        elif entity_type == Activity.EntityType.PROJECT:
            entity_id = ProjectSelector.get_project_for_member(entity_id, viewer).pk
        elif entity_type == Activity.EntityType.TEAM:
            entity_id = TeamSelector.get_team_for_member(entity_id, viewer).pk
        else:
            entity_id = UserSelector.normalize_user_id(entity_id)
            ActivitySelector._check_user_feed(viewer, entity_id)

        return repo.for_entity(entity_type, entity_id)
