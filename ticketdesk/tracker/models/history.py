# ============================================
# tracker/models/history.py
# ============================================
from django.conf import settings
from django.db import models
from django.utils import timezone


class TicketHistory(models.Model):
    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        UPDATED = 'updated', 'Updated'
        COMMENTED = 'commented', 'Commented'

    ticket = models.ForeignKey(
        'Ticket',
        on_delete=models.CASCADE,
        related_name='history'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='+'
    )
    action = models.CharField(max_length=32, choices=Action.choices, default=Action.UPDATED)
    # set when the entry records a single field
    field = models.CharField(max_length=50, null=True, blank=True)
    old_value = models.JSONField(null=True, blank=True)
    new_value = models.JSONField(null=True, blank=True)
    # {field: {"from": old, "to": new}} for every field touched by one call
    changes = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'ticket_history'
        ordering = ['timestamp', 'id']
        indexes = [
            models.Index(fields=['ticket', 'timestamp'], name='history_ticket_ts_idx'),
        ]

    def __str__(self):
        return f"{self.ticket.ticket_number} - {self.action}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Ticket history entries are append-only")
        super().save(*args, **kwargs)
