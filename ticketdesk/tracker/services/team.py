# ============================================
# tracker/services/team.py
# ============================================
import logging
from typing import Optional

from django.db import IntegrityError, transaction

from tracker.exceptions import AuthorizationError, ValidationError
from tracker.models import Activity, MemberRole, Notification, Team, User
from tracker.selectors.user import UserSelector
from tracker.services import activity_service, notification_service

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'avatar', 'is_active')


class TeamService:

    @staticmethod
    def _check_admin(team: Team, user, message: str) -> None:
        if not team.is_admin(user):
            raise AuthorizationError(message)

    @staticmethod
    def create_team(*, name: str, creator: User, description: str = '', avatar: str = '') -> Team:
        """Create team; the creator becomes owner and admin member"""

        name = (name or '').strip()
        if not name:
            raise ValidationError("Please add a team name")

        if Team.objects.filter(name=name).exists():
            raise ValidationError(f"Team '{name}' already exists")

        try:
            with transaction.atomic():
                team = Team.objects.create(
                    name=name,
                    description=description or '',
                    avatar=avatar or '',
                    owner=creator,
                )
                team.add_member(creator, MemberRole.ADMIN)
        except IntegrityError:
            raise ValidationError(f"Team '{name}' already exists")

        logger.info("[team] %s created by user=%s", team.pk, creator.pk)
        activity_service.log_team_activity(user=creator, team=team, action=Activity.Action.CREATED)
        return team

    @staticmethod
    def update_team(*, team: Team, user, **data) -> Team:
        """Update team details (team admins only)"""

        TeamService._check_admin(team, user, "Not authorized to update this team")

        new_name = (data.get('name') or '').strip()
        if new_name and new_name != team.name and Team.objects.filter(name=new_name).exists():
            raise ValidationError(f"Team '{new_name}' already exists")

        changed = []
        for field in UPDATABLE_FIELDS:
            if field in data and data[field] is not None and getattr(team, field) != data[field]:
                setattr(team, field, data[field])
                changed.append(field)

        if changed:
            team.save(update_fields=changed + ['updated_at'])

        activity_service.log_team_activity(user=user, team=team, fields=changed)
        return team

    @staticmethod
    def delete_team(*, team: Team, user) -> None:
        """Delete team (owner only); linked projects are detached, not deleted"""

        if team.owner_id != user.pk:
            raise AuthorizationError("Only the team owner can delete the team")

        team_id = team.pk
        team.delete()
        logger.info("[team] %s deleted by user=%s", team_id, user.pk)

        activity_service.log_team_activity(
            user=user, team=team, action=Activity.Action.DELETED, team_id=team_id
        )

    # ====== Membership ======
    @staticmethod
    def add_member(*, team: Team, user, member_id, role: Optional[str] = None) -> Team:
        TeamService._check_admin(team, user, "Not authorized to add members to this team")
        member = UserSelector.get_user_or_404(member_id)
        role = role or MemberRole.DEVELOPER

        if role not in MemberRole.values:
            raise ValidationError(f"Invalid role '{role}'")

        if team.is_member(member):
            raise ValidationError("User is already a member of this team")

        team.add_member(member, role)

        activity_service.log_team_activity(
            user=user, team=team, change='added_member', member=member.display_name, role=role,
        )
        notification_service.create_notification(
            recipient=member,
            sender=user,
            type=Notification.Type.TEAM_INVITE,
            title='Added to Team',
            message=f"You have been added to the team {team.name} as a {role}.",
            entity_type=Notification.EntityType.TEAM,
            entity_id=team.pk,
            link=notification_service.team_link(team),
        )
        return team

    @staticmethod
    def remove_member(*, team: Team, user, member_id) -> Team:
        is_self = str(user.pk) == str(member_id)
        if not is_self and not team.is_admin(user):
            raise AuthorizationError("Not authorized to remove members from this team")

        if str(team.owner_id) == str(member_id):
            raise ValidationError("Cannot remove the team owner")

        if not team.is_member(member_id):
            raise ValidationError("User is not a member of this team")

        member = UserSelector.get_user_by_id(member_id)
        team.remove_member(member_id)

        activity_service.log_team_activity(
            user=user, team=team,
            action=Activity.Action.LEFT if is_self else Activity.Action.UPDATED,
            change='removed_member', member=member.display_name if member else str(member_id),
        )
        return team

    @staticmethod
    def update_member_role(*, team: Team, user, member_id, role: str) -> Team:
        TeamService._check_admin(team, user, "Not authorized to update member roles in this team")

        if str(team.owner_id) == str(member_id):
            raise ValidationError("Cannot change the role of the team owner")

        if role not in MemberRole.values:
            raise ValidationError(f"Invalid role '{role}'")

        if not team.is_member(member_id):
            raise ValidationError("User is not a member of this team")

        team.update_member_role(member_id, role)
        member = UserSelector.get_user_by_id(member_id)

        activity_service.log_team_activity(
            user=user, team=team,
            change='updated_member_role', member=member.display_name if member else str(member_id), role=role,
        )
        notification_service.create_notification(
            recipient=member_id,
            sender=user,
            type=Notification.Type.TEAM_UPDATE,
            title='Role Updated',
            message=f"Your role in the team {team.name} has been updated to {role}.",
            entity_type=Notification.EntityType.TEAM,
            entity_id=team.pk,
            link=notification_service.team_link(team),
        )
        return team
