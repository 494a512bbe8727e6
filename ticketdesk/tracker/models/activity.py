# ============================================
# tracker/models/activity.py
# ============================================
from django.conf import settings
from django.db import models


class Activity(models.Model):
    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        UPDATED = 'updated', 'Updated'
        DELETED = 'deleted', 'Deleted'
        COMMENTED = 'commented', 'Commented'
        ASSIGNED = 'assigned', 'Assigned'
        STATUS_CHANGED = 'status_changed', 'Status changed'
        PRIORITY_CHANGED = 'priority_changed', 'Priority changed'
        JOINED = 'joined', 'Joined'
        LEFT = 'left', 'Left'
        UPLOADED = 'uploaded', 'Uploaded'
        MENTIONED = 'mentioned', 'Mentioned'
        UPDATED_COMMENT = 'updated_comment', 'Updated comment'
        DELETED_COMMENT = 'deleted_comment', 'Deleted comment'

    class EntityType(models.TextChoices):
        TICKET = 'ticket', 'Ticket'
        PROJECT = 'project', 'Project'
        TEAM = 'team', 'Team'
        USER = 'user', 'User'
        COMMENT = 'comment', 'Comment'
        ATTACHMENT = 'attachment', 'Attachment'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='activities'
    )
    action = models.CharField(max_length=32, choices=Action.choices)
    entity_type = models.CharField(max_length=16, choices=EntityType.choices)
    entity_id = models.CharField(max_length=64)
    details = models.JSONField(default=dict, blank=True)
    project = models.ForeignKey(
        'Project',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities'
    )
    team = models.ForeignKey(
        'Team',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities'
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'activities'
        ordering = ['-created_at', '-id']
        verbose_name_plural = 'activities'
        indexes = [
            models.Index(fields=['user', '-created_at'], name='activity_user_created_idx'),
            models.Index(fields=['entity_type', 'entity_id'], name='activity_entity_idx'),
            models.Index(fields=['project', '-created_at'], name='activity_project_created_idx'),
            models.Index(fields=['team', '-created_at'], name='activity_team_created_idx'),
        ]

    def __str__(self):
        return f"{self.action} {self.entity_type}#{self.entity_id} by {self.user_id}"
