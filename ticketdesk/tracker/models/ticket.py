# ============================================
# tracker/models/ticket.py
# ============================================
from django.conf import settings
from django.db import models

from .mixins import TimeStampedModel, user_pk


class Ticket(TimeStampedModel):
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='tickets'
    )
    ticket_number = models.CharField(max_length=32, unique=True, db_index=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='reported_tickets'
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_tickets'
    )
    # checked against the project's configuration registry by the services
    type = models.CharField(max_length=50)
    status = models.CharField(max_length=50)
    priority = models.CharField(max_length=50)
    due_date = models.DateTimeField(null=True, blank=True)
    estimated_time = models.FloatField(default=0)  # hours
    time_spent = models.FloatField(default=0)  # hours
    labels = models.JSONField(default=list, blank=True)
    # [{id, name, url, size, type, uploaded_by, uploaded_at}]
    attachments = models.JSONField(default=list, blank=True)
    watchers = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='watched_tickets'
    )

    class Meta:
        db_table = 'tickets'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', 'status'], name='tickets_project_status_idx'),
            models.Index(fields=['assignee'], name='tickets_assignee_idx'),
            models.Index(fields=['reporter'], name='tickets_reporter_idx'),
        ]

    def __str__(self):
        return f"{self.ticket_number} - {self.title}"

    def is_watched_by(self, user) -> bool:
        return self.watchers.filter(pk=user_pk(user)).exists()

    def watcher_ids(self):
        return list(self.watchers.values_list('id', flat=True))


class TicketCounter(models.Model):
    """Monotonic ticket-number source, one row per numbering scope"""
    scope = models.CharField(max_length=64, unique=True)
    value = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'ticket_counters'

    def __str__(self):
        return f"{self.scope}: {self.value}"
