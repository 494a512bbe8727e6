# ============================================
# tracker/selectors/comment.py
# ============================================
from typing import Optional

from django.db.models import QuerySet

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import Comment


class CommentSelector:

    @staticmethod
    def get_comment_by_id(comment_id) -> Optional[Comment]:
        """Get single comment"""
        try:
            return Comment.objects.select_related(
                'author', 'ticket', 'ticket__project', 'ticket__project__team'
            ).get(id=comment_id)
        except (Comment.DoesNotExist, ValueError, TypeError):
            return None

    @staticmethod
    def get_comment_or_404(comment_id) -> Comment:
        comment = CommentSelector.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    @staticmethod
    def get_comment_for_member(comment_id, user) -> Comment:
        comment = CommentSelector.get_comment_or_404(comment_id)
        if not comment.ticket.project.is_member(user):
            raise AuthorizationError("Not authorized to access this comment")
        return comment

    @staticmethod
    def get_comments_by_ticket(ticket_id) -> QuerySet:
        """Get all comments for a ticket, oldest first"""
        return (
            Comment.objects
            .filter(ticket_id=ticket_id)
            .select_related('author')
            .order_by('created_at', 'id')
        )
