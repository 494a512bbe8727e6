# ============================================
# tracker/selectors/team.py
# ============================================
from typing import Optional

from django.db.models import QuerySet

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import Team


class TeamSelector:

    @staticmethod
    def get_team_by_id(team_id) -> Optional[Team]:
        try:
            return Team.objects.select_related('owner').get(id=team_id)
        except (Team.DoesNotExist, ValueError, TypeError):
            return None

    @staticmethod
    def get_team_or_404(team_id) -> Team:
        team = TeamSelector.get_team_by_id(team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team

    @staticmethod
    def get_team_for_member(team_id, user) -> Team:
        team = TeamSelector.get_team_or_404(team_id)
        if not team.is_member(user):
            raise AuthorizationError("Not authorized to access this team")
        return team

    @staticmethod
    def get_teams_for_user(user) -> QuerySet:
        """Teams where the user is a member"""
        return (
            Team.objects
            .filter(members__user_id=user.pk)
            .select_related('owner')
            .prefetch_related('members__user')
            .distinct()
        )

    @staticmethod
    def users_share_team(user_a, user_b) -> bool:
        return (
            Team.objects
            .filter(members__user_id=getattr(user_a, 'pk', user_a))
            .filter(members__user_id=getattr(user_b, 'pk', user_b))
            .exists()
        )
