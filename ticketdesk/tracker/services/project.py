# ============================================
# tracker/services/project.py
# ============================================
import logging
from typing import Dict, List, Optional

from django.db import transaction

from tracker.conf import tracker_setting
from tracker.exceptions import AuthorizationError, ValidationError
from tracker.models import Activity, MemberRole, Notification, Project, User
from tracker.selectors.team import TeamSelector
from tracker.selectors.user import UserSelector
from tracker.services import activity_service, notification_service
from tracker.utils import config_registry as registry
from tracker.utils.keys import derive_project_key

logger = logging.getLogger(__name__)

PROJECT_CREATOR_ROLES = (User.Role.ADMIN, User.Role.DEVELOPER)
UPDATABLE_FIELDS = ('name', 'description', 'category', 'status', 'start_date', 'end_date')


class ProjectService:

    @staticmethod
    def _check_admin(project: Project, user, message: str) -> None:
        if not project.is_admin(user):
            raise AuthorizationError(message)

    @staticmethod
    def _normalize_config(kind: str, entries) -> Optional[List[Dict]]:
        if entries is None:
            return None
        try:
            return registry.normalize_entries(kind, entries)
        except (ValueError, TypeError, AttributeError) as ex:
            raise ValidationError(str(ex))

    @staticmethod
    def _resolve_key(name: str, key: Optional[str]) -> str:
        key = (key or '').strip().upper() or derive_project_key(name)
        min_len = tracker_setting('PROJECT_KEY_MIN_LENGTH')
        max_len = tracker_setting('PROJECT_KEY_MAX_LENGTH')
        if not (min_len <= len(key) <= max_len):
            raise ValidationError(f"Project key must be {min_len}-{max_len} characters")
        if Project.objects.filter(key=key).exists():
            raise ValidationError(f"Project with key '{key}' already exists")
        return key

    @staticmethod
    def create_project(
        *,
        name: str,
        creator: User,
        description: str = '',
        key: Optional[str] = None,
        team_id=None,
        category: Optional[str] = None,
        start_date=None,
        end_date=None,
        ticket_types=None,
        ticket_statuses=None,
        ticket_priorities=None,
    ) -> Project:
        """Create a project; the creator becomes owner and admin member"""

        if creator.role not in PROJECT_CREATOR_ROLES:
            raise AuthorizationError("Only admin or developer users can create projects")

        if not (name or '').strip():
            raise ValidationError("Please add a project name")

        team = None
        if team_id:
            team = TeamSelector.get_team_or_404(team_id)
            if not team.is_member(creator):
                raise AuthorizationError("You must be a member of the team to create a project")

        key = ProjectService._resolve_key(name, key)

        fields = {
            'name': name.strip(),
            'key': key,
            'description': description or '',
            'owner': creator,
            'team': team,
            'category': category or Project.Category.SOFTWARE,
            'end_date': end_date,
            # empty lists get the defaults in Project.save()
            'ticket_types': ProjectService._normalize_config(registry.TYPE, ticket_types) or [],
            'ticket_statuses': ProjectService._normalize_config(registry.STATUS, ticket_statuses) or [],
            'ticket_priorities': ProjectService._normalize_config(registry.PRIORITY, ticket_priorities) or [],
        }
        if start_date:
            fields['start_date'] = start_date

        with transaction.atomic():
            project = Project.objects.create(**fields)
            project.add_member(creator, MemberRole.ADMIN)

        logger.info("[project] %s created by user=%s", project.key, creator.pk)

        activity_service.log_project_activity(
            user=creator, project=project, action=Activity.Action.CREATED
        )

        if team is not None:
            notification_service.fan_out(
                recipients=team.member_ids(),
                exclude=creator,
                sender=creator,
                type=Notification.Type.PROJECT_UPDATE,
                title='New Project Created',
                message=f"A new project {project.name} ({project.key}) has been created in team {team.name}.",
                entity_type=Notification.EntityType.PROJECT,
                entity_id=project.pk,
                link=notification_service.project_link(project),
            )

        return project

    @staticmethod
    def update_project(*, project: Project, user, **data) -> Project:
        """Update descriptive fields (project admins only)"""

        ProjectService._check_admin(project, user, "Not authorized to update this project")

        if data.get('status') and data['status'] not in Project.Status.values:
            raise ValidationError(f"Invalid project status '{data['status']}'")
        if data.get('category') and data['category'] not in Project.Category.values:
            raise ValidationError(f"Invalid project category '{data['category']}'")

        changed = []
        for field in UPDATABLE_FIELDS:
            if field in data and data[field] is not None and getattr(project, field) != data[field]:
                setattr(project, field, data[field])
                changed.append(field)

        if changed:
            project.save(update_fields=changed + ['updated_at'])

        activity_service.log_project_activity(user=user, project=project, fields=changed)
        return project

    @staticmethod
    def delete_project(*, project: Project, user) -> None:
        """Delete project (owner only); tickets, comments and history go with it"""

        if project.owner_id != user.pk:
            raise AuthorizationError("Only the project owner can delete the project")

        project_id = project.pk
        project.delete()
        logger.info("[project] %s deleted by user=%s", project.key, user.pk)

        activity_service.log_project_activity(
            user=user, project=project, action=Activity.Action.DELETED, project_id=project_id
        )

    # ====== Membership ======
    @staticmethod
    def add_member(*, project: Project, user, member_id, role: str = MemberRole.DEVELOPER) -> Project:
        """Add member to project (project admins only)"""

        ProjectService._check_admin(project, user, "Not authorized to add members to this project")
        member = UserSelector.get_user_or_404(member_id)
        role = role or MemberRole.DEVELOPER

        if role not in MemberRole.values:
            raise ValidationError(f"Invalid role '{role}'")

        if project.is_member(member):
            raise ValidationError("User is already a member of this project")

        if project.team_id and not project.team.is_member(member):
            raise ValidationError("User must be a member of the team to join the project")

        project.add_member(member, role)

        activity_service.log_project_activity(
            user=user, project=project, action='updated',
            change='added_member', member=member.display_name, role=role,
        )
        notification_service.create_notification(
            recipient=member,
            sender=user,
            type=Notification.Type.PROJECT_INVITE,
            title='Added to Project',
            message=f"You have been added to the project {project.name} ({project.key}) as a {role}.",
            entity_type=Notification.EntityType.PROJECT,
            entity_id=project.pk,
            link=notification_service.project_link(project),
        )
        return project

    @staticmethod
    def remove_member(*, project: Project, user, member_id) -> Project:
        """Remove member (project admins, or the member leaving)"""

        is_self = str(user.pk) == str(member_id)
        if not is_self and not project.is_admin(user):
            raise AuthorizationError("Not authorized to remove members from this project")

        if str(project.owner_id) == str(member_id):
            raise ValidationError("Cannot remove the project owner")

        if not project.is_member(member_id):
            raise ValidationError("User is not a member of this project")

        member = UserSelector.get_user_by_id(member_id)
        project.remove_member(member_id)

        activity_service.log_project_activity(
            user=user, project=project,
            action=Activity.Action.LEFT if is_self else Activity.Action.UPDATED,
            change='removed_member', member=member.display_name if member else str(member_id),
        )
        return project

    @staticmethod
    def update_member_role(*, project: Project, user, member_id, role: str) -> Project:
        """Change a member's project role (project admins only)"""

        ProjectService._check_admin(project, user, "Not authorized to update member roles in this project")

        if str(project.owner_id) == str(member_id):
            raise ValidationError("Cannot change the role of the project owner")

        if role not in MemberRole.values:
            raise ValidationError(f"Invalid role '{role}'")

        if not project.is_member(member_id):
            raise ValidationError("User is not a member of this project")

        project.update_member_role(member_id, role)
        member = UserSelector.get_user_by_id(member_id)

        activity_service.log_project_activity(
            user=user, project=project,
            change='updated_member_role', member=member.display_name if member else str(member_id), role=role,
        )
        notification_service.create_notification(
            recipient=member_id,
            sender=user,
            type=Notification.Type.PROJECT_UPDATE,
            title='Role Updated',
            message=f"Your role in the project {project.name} ({project.key}) has been updated to {role}.",
            entity_type=Notification.EntityType.PROJECT,
            entity_id=project.pk,
            link=notification_service.project_link(project),
        )
        return project

    # ====== Configuration registry ======
    @staticmethod
    def update_ticket_config(*, project: Project, user, kind: str, entries) -> Project:
        """
        Replace one configuration list wholesale (project admins only).
        Existing tickets are not re-validated against the new list.
        """

        ProjectService._check_admin(project, user, "Not authorized to update this project")

        if kind not in registry.KINDS:
            raise ValidationError(f"Unknown configuration kind '{kind}'")

        normalized = ProjectService._normalize_config(kind, entries)
        if not normalized:
            raise ValidationError(f"At least one ticket {kind} is required")

        field = registry.FIELD_BY_KIND[kind]
        setattr(project, field, normalized)
        project.save(update_fields=[field, 'updated_at'])

        activity_service.log_project_activity(
            user=user, project=project, change=f"updated_{field}",
        )
        return project

    @staticmethod
    def update_ticket_types(*, project: Project, user, ticket_types) -> Project:
        return ProjectService.update_ticket_config(
            project=project, user=user, kind=registry.TYPE, entries=ticket_types
        )

    @staticmethod
    def update_ticket_statuses(*, project: Project, user, ticket_statuses) -> Project:
        return ProjectService.update_ticket_config(
            project=project, user=user, kind=registry.STATUS, entries=ticket_statuses
        )

    @staticmethod
    def update_ticket_priorities(*, project: Project, user, ticket_priorities) -> Project:
        return ProjectService.update_ticket_config(
            project=project, user=user, kind=registry.PRIORITY, entries=ticket_priorities
        )
