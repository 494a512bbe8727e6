# ============================================
# tracker/services/comment.py
# ============================================
import logging
import uuid
from typing import Dict, List, Optional

from django.db import transaction
from django.utils import timezone

from tracker.exceptions import AuthorizationError, NotFoundError, ValidationError
from tracker.models import Activity, Comment, Notification
from tracker.selectors.comment import CommentSelector
from tracker.selectors.ticket import TicketSelector
from tracker.services import activity_service, notification_service
from tracker.utils.mentions import parse_mentions

logger = logging.getLogger(__name__)


def _attachment(name: str, url: str, size=0, type: str = '') -> Dict:
    if not name or not url:
        raise ValidationError("Attachment name and url are required")
    return {
        'id': uuid.uuid4().hex,
        'name': name,
        'url': url,
        'size': size or 0,
        'type': type or '',
        'uploaded_at': timezone.now().isoformat(),
    }


class CommentService:

    @staticmethod
    def _check_author(comment: Comment, user, message: str = "Not authorized to update this comment") -> None:
        if comment.author_id != user.pk:
            raise AuthorizationError(message)

    @staticmethod
    def create(*, ticket_id, author, content: str, attachments: Optional[List[Dict]] = None) -> Comment:
        """
        Post a comment on a ticket.

        The author starts watching the ticket. Reporter, assignee, watchers
        and mentioned users get one notification each; the author gets none.
        """

        ticket = TicketSelector.get_ticket_or_404(ticket_id)
        if not ticket.project.is_member(author):
            raise AuthorizationError("Not authorized to comment on this ticket")

        if not (content or '').strip():
            raise ValidationError("Please add comment content")

        with transaction.atomic():
            comment = Comment.objects.create(
                ticket=ticket,
                author=author,
                content=content,
                attachments=[
                    _attachment(a.get('name'), a.get('url'), a.get('size'), a.get('type'))
                    for a in attachments or []
                ],
                mention_handles=parse_mentions(content),
            )
            if not ticket.is_watched_by(author):
                ticket.watchers.add(author)

        logger.info("[comment] %s on %s by user=%s", comment.pk, ticket.ticket_number, author.pk)

        activity_service.log_ticket_activity(
            user=author, ticket=ticket, action=Activity.Action.COMMENTED, comment_id=comment.pk
        )

        recipients = [ticket.reporter_id, ticket.assignee_id]
        recipients += ticket.watcher_ids()
        recipients += list(comment.mentions.values_list('id', flat=True))
        notification_service.fan_out(
            recipients=recipients,
            exclude=author,
            sender=author,
            type=Notification.Type.TICKET_COMMENTED,
            title='New Comment',
            message=f"New comment on ticket {ticket.ticket_number}: {ticket.title}",
            entity_type=Notification.EntityType.TICKET,
            entity_id=ticket.pk,
            link=notification_service.ticket_link(ticket),
        )

        return comment

    @staticmethod
    def edit(*, comment_id, user, content: str) -> Comment:
        """Author-only edit; the previous content goes to edit_history"""

        comment = CommentSelector.get_comment_or_404(comment_id)
        CommentService._check_author(comment, user)

        if not (content or '').strip():
            raise ValidationError("Please add comment content")

        comment.edit(content)
        comment.mention_handles = parse_mentions(content)
        comment.save(update_fields=['content', 'is_edited', 'edit_history', 'mention_handles', 'updated_at'])

        activity_service.log_ticket_activity(
            user=user, ticket=comment.ticket, action=Activity.Action.UPDATED_COMMENT, comment_id=comment.pk
        )
        return comment

    @staticmethod
    def delete(*, comment_id, user) -> None:
        """Author or project admin"""

        comment = CommentSelector.get_comment_or_404(comment_id)
        ticket = comment.ticket
        if comment.author_id != user.pk and not ticket.project.is_admin(user):
            raise AuthorizationError("Not authorized to delete this comment")

        captured_id = comment.pk
        comment.delete()

        activity_service.log_ticket_activity(
            user=user, ticket=ticket, action=Activity.Action.DELETED_COMMENT, comment_id=captured_id
        )

    @staticmethod
    def add_attachment(*, comment_id, user, name: str, url: str, size: int = 0, type: str = '') -> Comment:
        comment = CommentSelector.get_comment_or_404(comment_id)
        CommentService._check_author(comment, user)

        attachment = _attachment(name=name, url=url, size=size, type=type)
        comment.attachments = list(comment.attachments or []) + [attachment]
        comment.save(update_fields=['attachments', 'updated_at'])

        activity_service.log_ticket_activity(
            user=user, ticket=comment.ticket, action=Activity.Action.UPDATED_COMMENT,
            change='added_attachment', attachment=name,
        )
        return comment

    @staticmethod
    def remove_attachment(*, comment_id, user, attachment_id) -> Comment:
        comment = CommentSelector.get_comment_or_404(comment_id)
        CommentService._check_author(comment, user)

        attachment = next(
            (a for a in comment.attachments or [] if a.get('id') == str(attachment_id)), None
        )
        if attachment is None:
            raise NotFoundError("Attachment not found")

        comment.attachments = [a for a in comment.attachments if a.get('id') != attachment['id']]
        comment.save(update_fields=['attachments', 'updated_at'])

        activity_service.log_ticket_activity(
            user=user, ticket=comment.ticket, action=Activity.Action.UPDATED_COMMENT,
            change='removed_attachment', attachment=attachment['name'],
        )
        return comment
