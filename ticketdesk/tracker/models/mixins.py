# ============================================
# tracker/models/mixins.py
# ============================================
from django.db import models
from django.utils import timezone


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class MemberRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    MANAGER = 'manager', 'Manager'
    DEVELOPER = 'developer', 'Developer'
    SUBMITTER = 'submitter', 'Submitter'


def user_pk(user):
    """Accept a User instance or a raw id"""
    return getattr(user, 'pk', user)


class MembershipMixin:
    """
    Membership authority shared by Project and Team.

    The owning model exposes its member rows through a ``members``
    related manager (ProjectMember / TeamMember).
    """

    def is_member(self, user) -> bool:
        if user is None:
            return False
        return self.members.filter(user_id=user_pk(user)).exists()

    def is_admin(self, user) -> bool:
        if user is None:
            return False
        return self.members.filter(user_id=user_pk(user), role=MemberRole.ADMIN).exists()

    def add_member(self, user, role: str = MemberRole.DEVELOPER):
        # no-op when already a member
        member, _ = self.members.get_or_create(
            user_id=user_pk(user),
            defaults={'role': role, 'joined_at': timezone.now()},
        )
        return member

    def remove_member(self, user) -> None:
        self.members.filter(user_id=user_pk(user)).delete()

    def update_member_role(self, user, role: str) -> None:
        self.members.filter(user_id=user_pk(user)).update(role=role)

    def member_role(self, user):
        return self.members.filter(user_id=user_pk(user)).values_list('role', flat=True).first()

    def member_ids(self):
        return list(self.members.values_list('user_id', flat=True))
