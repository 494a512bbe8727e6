# ============================================
# tracker/services/user.py
# ============================================
import logging

from django.db.models import ProtectedError

from tracker.exceptions import AuthorizationError, ValidationError
from tracker.models import Activity, User
from tracker.selectors.user import UserSelector
from tracker.services import activity_service

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('name', 'email', 'avatar', 'first_name', 'last_name')


class UserService:

    @staticmethod
    def _check_admin(user) -> None:
        if user.role != User.Role.ADMIN:
            raise AuthorizationError("Not authorized as an admin")

    @staticmethod
    def update_profile(*, user: User, password: str = None, **data) -> User:
        """Update own profile; blank values keep the current ones"""

        changed = []
        for field in PROFILE_FIELDS:
            value = data.get(field)
            if value and getattr(user, field) != value:
                setattr(user, field, value)
                changed.append(field)

        if password:
            user.set_password(password)
            changed.append('password')

        if changed:
            user.save(update_fields=changed)

        activity_service.log_activity(
            user=user,
            action=Activity.Action.UPDATED,
            entity_type=Activity.EntityType.USER,
            entity_id=user.pk,
            details={'name': user.display_name},
        )
        return user

    @staticmethod
    def change_role(*, actor: User, user_id, role: str) -> User:
        """Change a user's global role (admins only)"""

        UserService._check_admin(actor)
        target = UserSelector.get_user_or_404(user_id)

        if role not in User.Role.values:
            raise ValidationError(f"Invalid role '{role}'")

        target.role = role
        target.save(update_fields=['role'])
        logger.info("[user] %s role set to %s by user=%s", target.pk, role, actor.pk)

        activity_service.log_activity(
            user=actor,
            action=Activity.Action.UPDATED,
            entity_type=Activity.EntityType.USER,
            entity_id=target.pk,
            details={'name': target.display_name, 'role': role},
        )
        return target

    @staticmethod
    def delete_user(*, actor: User, user_id) -> None:
        """Delete a user (admins only, never yourself)"""

        UserService._check_admin(actor)
        target = UserSelector.get_user_or_404(user_id)

        if target.pk == actor.pk:
            raise ValidationError("Cannot delete your own account")

        name = target.display_name
        try:
            target.delete()
        except ProtectedError:
            raise ValidationError("User is still referenced by projects, tickets or activity and cannot be deleted")

        logger.info("[user] %s deleted by user=%s", user_id, actor.pk)
        activity_service.log_activity(
            user=actor,
            action=Activity.Action.DELETED,
            entity_type=Activity.EntityType.USER,
            entity_id=user_id,
            details={'name': name},
        )
