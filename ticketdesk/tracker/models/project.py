# ============================================
# tracker/models/project.py
# ============================================
from django.conf import settings
from django.db import models
from django.utils import timezone

from tracker.utils import config_registry as registry
from .mixins import MemberRole, MembershipMixin, TimeStampedModel


class Project(MembershipMixin, TimeStampedModel):
    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        ARCHIVED = 'archived', 'Archived'
        COMPLETED = 'completed', 'Completed'

    class Category(models.TextChoices):
        SOFTWARE = 'software', 'Software'
        BUSINESS = 'business', 'Business'
        MARKETING = 'marketing', 'Marketing'
        DESIGN = 'design', 'Design'
        SUPPORT = 'support', 'Support'

    name = models.CharField(max_length=255)
    key = models.CharField(max_length=10, unique=True, db_index=True)
    description = models.TextField(blank=True, default='')
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='owned_projects'
    )
    team = models.ForeignKey(
        'Team',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='projects'
    )
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    category = models.CharField(max_length=16, choices=Category.choices, default=Category.SOFTWARE)
    start_date = models.DateTimeField(default=timezone.now)
    end_date = models.DateTimeField(null=True, blank=True)

    # Configuration registry: ordered lists of {name, color, order|icon}
    ticket_types = models.JSONField(default=list, blank=True)
    ticket_statuses = models.JSONField(default=list, blank=True)
    ticket_priorities = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.key} - {self.name}"

    def save(self, *args, **kwargs):
        # defaults are seeded once, on insert only
        if self._state.adding:
            for kind, field in registry.FIELD_BY_KIND.items():
                if not getattr(self, field):
                    setattr(self, field, registry.default_entries(kind))
        super().save(*args, **kwargs)

    def config_entries(self, kind: str):
        return getattr(self, registry.FIELD_BY_KIND[kind])

    def validate_config(self, kind: str, name) -> bool:
        return registry.is_valid(self.config_entries(kind), name)

    def config_names(self, kind: str):
        return registry.entry_names(self.config_entries(kind))


class ProjectMember(models.Model):
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='project_memberships'
    )
    role = models.CharField(max_length=16, choices=MemberRole.choices, default=MemberRole.DEVELOPER)
    joined_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'project_members'
        ordering = ['joined_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['project', 'user'], name='uniq_project_member'),
        ]

    def __str__(self):
        return f"{self.project.key} - {self.user} ({self.role})"
