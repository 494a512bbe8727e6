# ============================================
# tracker/models/team.py
# ============================================
from django.conf import settings
from django.db import models
from django.utils import timezone

from .mixins import MemberRole, MembershipMixin, TimeStampedModel


class Team(MembershipMixin, TimeStampedModel):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default='')
    avatar = models.CharField(max_length=500, blank=True, default='')
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='owned_teams'
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'teams'
        ordering = ['name']

    def __str__(self):
        return self.name


class TeamMember(models.Model):
    team = models.ForeignKey(
        'Team',
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='team_memberships'
    )
    role = models.CharField(max_length=16, choices=MemberRole.choices, default=MemberRole.DEVELOPER)
    joined_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'team_members'
        ordering = ['joined_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['team', 'user'], name='uniq_team_member'),
        ]

    def __str__(self):
        return f"{self.team.name} - {self.user} ({self.role})"
