# ============================================
# tracker/selectors/project.py
# ============================================
from typing import Optional

from django.db.models import Q, QuerySet

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import Project, User


def project_visibility_filter(actor_role: str, actor_id) -> Q:
    """
    Which projects a user may list, by global role:
    - admin:     every project
    - developer: projects they own or are a member of
    - user:      projects they are a member of
    """
    if actor_role == User.Role.ADMIN:
        return Q()
    if actor_role == User.Role.DEVELOPER:
        return Q(owner_id=actor_id) | Q(members__user_id=actor_id)
    return Q(members__user_id=actor_id)


class ProjectSelector:

    @staticmethod
    def get_project_by_id(project_id) -> Optional[Project]:
        """Get single project by ID"""
        try:
            return Project.objects.select_related('owner', 'team').get(id=project_id)
        except (Project.DoesNotExist, ValueError, TypeError):
            return None

    @staticmethod
    def get_project_or_404(project_id) -> Project:
        project = ProjectSelector.get_project_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    @staticmethod
    def get_project_for_member(project_id, user) -> Project:
        """Project the user belongs to, or the matching error"""
        project = ProjectSelector.get_project_or_404(project_id)
        if not project.is_member(user):
            raise AuthorizationError("Not authorized to access this project")
        return project

    @staticmethod
    def get_projects_list(user) -> QuerySet:
        """Projects visible to the user, by global role"""
        return (
            Project.objects
            .filter(project_visibility_filter(user.role, user.pk))
            .select_related('owner', 'team')
            .prefetch_related('members__user')
            .distinct()
            .order_by('-created_at', '-id')
        )

    @staticmethod
    def get_member_project_ids(user) -> list:
        return list(
            Project.objects.filter(members__user_id=user.pk).values_list('id', flat=True)
        )

    @staticmethod
    def users_share_project(user_a, user_b) -> bool:
        return (
            Project.objects
            .filter(members__user_id=getattr(user_a, 'pk', user_a))
            .filter(members__user_id=getattr(user_b, 'pk', user_b))
            .exists()
        )
