# ============================================
# tracker/models/notification.py
# ============================================
from django.conf import settings
from django.db import models
from django.utils import timezone

from .mixins import TimeStampedModel


class Notification(TimeStampedModel):
    class Type(models.TextChoices):
        TICKET_ASSIGNED = 'ticket_assigned', 'Ticket assigned'
        TICKET_COMMENTED = 'ticket_commented', 'Ticket commented'
        TICKET_UPDATED = 'ticket_updated', 'Ticket updated'
        TICKET_STATUS_CHANGED = 'ticket_status_changed', 'Ticket status changed'
        TICKET_PRIORITY_CHANGED = 'ticket_priority_changed', 'Ticket priority changed'
        TICKET_DUE_SOON = 'ticket_due_soon', 'Ticket due soon'
        TICKET_OVERDUE = 'ticket_overdue', 'Ticket overdue'
        MENTIONED = 'mentioned', 'Mentioned'
        TEAM_INVITE = 'team_invite', 'Team invite'
        PROJECT_INVITE = 'project_invite', 'Project invite'
        PROJECT_UPDATE = 'project_update', 'Project update'
        TEAM_UPDATE = 'team_update', 'Team update'
        SYSTEM = 'system', 'System'

    class EntityType(models.TextChoices):
        TICKET = 'ticket', 'Ticket'
        PROJECT = 'project', 'Project'
        TEAM = 'team', 'Team'
        USER = 'user', 'User'
        COMMENT = 'comment', 'Comment'
        SYSTEM = 'system', 'System'

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    type = models.CharField(max_length=32, choices=Type.choices)
    title = models.CharField(max_length=200)
    message = models.TextField()
    read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    entity_type = models.CharField(max_length=16, choices=EntityType.choices)
    entity_id = models.CharField(max_length=64)
    link = models.CharField(max_length=500, blank=True, default='')

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['recipient', 'read', '-created_at'], name='notif_recipient_read_idx'),
        ]

    def __str__(self):
        state = "read" if self.read else "unread"
        return f"NOTI[{self.type}] to={self.recipient_id} ({state})"

    def mark_read(self) -> None:
        self.read = True
        self.read_at = timezone.now()
