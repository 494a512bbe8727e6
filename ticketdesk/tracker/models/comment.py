# ============================================
# tracker/models/comment.py
# ============================================
from django.conf import settings
from django.db import models
from django.utils import timezone

from .mixins import TimeStampedModel


class Comment(TimeStampedModel):
    ticket = models.ForeignKey(
        'Ticket',
        on_delete=models.CASCADE,
        related_name='comments'
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='comments'
    )
    content = models.TextField()
    # [{id, name, url, size, type, uploaded_at}]
    attachments = models.JSONField(default=list, blank=True)
    # raw @handles found in the content
    mention_handles = models.JSONField(default=list, blank=True)
    mentions = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='mentioned_in_comments'
    )
    is_edited = models.BooleanField(default=False)
    # [{content, edited_at}]
    edit_history = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'comments'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['ticket', 'created_at'], name='comments_ticket_created_idx'),
        ]

    def __str__(self):
        return f"Comment on {self.ticket.ticket_number}"

    def edit(self, new_content: str) -> None:
        """Snapshot the current content, then overwrite it (caller saves)"""
        self.edit_history = list(self.edit_history or []) + [{
            'content': self.content,
            'edited_at': timezone.now().isoformat(),
        }]
        self.content = new_content
        self.is_edited = True
