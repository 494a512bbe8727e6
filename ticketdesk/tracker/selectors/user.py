# ============================================
# tracker/selectors/user.py
# ============================================
from typing import Optional

from django.db.models import Q, QuerySet

from tracker.exceptions import NotFoundError, ValidationError
from tracker.models import Project, User


class UserSelector:

    @staticmethod
    def normalize_user_id(user_id) -> int:
        """Coerce a path/query user id (or a User) to int; anything else is a 400"""
        try:
            return int(getattr(user_id, 'pk', user_id))
        except (TypeError, ValueError):
            raise ValidationError('Invalid user id')

    @staticmethod
    def get_user_by_id(user_id) -> Optional[User]:
        """Get single user"""
        try:
            return User.objects.get(id=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            return None

    @staticmethod
    def get_user_or_404(user_id) -> User:
        user = UserSelector.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def search_users(name: str, project_id=None) -> QuerySet:
        """Users whose name/username contains ``name``, optionally only members of a project"""
        queryset = User.objects.filter(
            Q(name__icontains=name) |
            Q(username__icontains=name) |
            Q(first_name__icontains=name) |
            Q(last_name__icontains=name)
        )

        if project_id:
            project = Project.objects.filter(id=project_id).first()
            if project:
                queryset = queryset.filter(project_memberships__project=project)

        return queryset.distinct().order_by('username')
