# ============================================
# tracker/selectors/ticket.py
# ============================================
from typing import Optional

from django.db.models import Q, QuerySet

from tracker.exceptions import AuthorizationError, NotFoundError
from tracker.models import Project, Ticket, TicketHistory
from tracker.selectors.project import ProjectSelector
from tracker.selectors.user import UserSelector

SORTABLE_FIELDS = {
    'created_at', 'updated_at', 'title', 'ticket_number',
    'status', 'priority', 'type', 'due_date',
}


class TicketSelector:

    @staticmethod
    def get_ticket_by_id(ticket_id) -> Optional[Ticket]:
        """Get single ticket with related data"""
        try:
            return Ticket.objects.select_related(
                'project', 'project__team', 'reporter', 'assignee'
            ).get(id=ticket_id)
        except (Ticket.DoesNotExist, ValueError, TypeError):
            return None

    @staticmethod
    def get_ticket_or_404(ticket_id) -> Ticket:
        ticket = TicketSelector.get_ticket_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket not found")
        return ticket

    @staticmethod
    def get_ticket_for_member(ticket_id, user) -> Ticket:
        ticket = TicketSelector.get_ticket_or_404(ticket_id)
        if not ticket.project.is_member(user):
            raise AuthorizationError("Not authorized to access this ticket")
        return ticket

    @staticmethod
    def get_tickets_list(
        user,
        project_id=None,
        status: str = None,
        priority: str = None,
        type: str = None,
        assignee: str = None,
        reporter: str = None,
        search: str = None,
        sort_field: str = None,
        sort_order: str = None,
    ) -> QuerySet:
        """Tickets in the user's projects, filtered"""
        queryset = Ticket.objects.select_related('project', 'reporter', 'assignee')

        if project_id:
            project = ProjectSelector.get_project_for_member(project_id, user)
            queryset = queryset.filter(project=project)
        else:
            queryset = queryset.filter(
                project__in=Project.objects.filter(members__user_id=user.pk)
            )

        if status:
            queryset = queryset.filter(status=status)

        if priority:
            queryset = queryset.filter(priority=priority)

        if type:
            queryset = queryset.filter(type=type)

        if assignee == 'me':
            queryset = queryset.filter(assignee_id=user.pk)
        elif assignee == 'unassigned':
            queryset = queryset.filter(assignee__isnull=True)
        elif assignee:
            queryset = queryset.filter(assignee_id=UserSelector.normalize_user_id(assignee))

        if reporter == 'me':
            queryset = queryset.filter(reporter_id=user.pk)
        elif reporter:
            queryset = queryset.filter(reporter_id=UserSelector.normalize_user_id(reporter))

        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) |
                Q(description__icontains=search) |
                Q(ticket_number__icontains=search)
            )

        if sort_field in SORTABLE_FIELDS:
            prefix = '-' if sort_order == 'desc' else ''
            return queryset.order_by(f'{prefix}{sort_field}', '-id')

        return queryset.order_by('-created_at', '-id')

    @staticmethod
    def get_history(ticket: Ticket) -> QuerySet:
        """History entries, oldest first"""
        return TicketHistory.objects.filter(ticket=ticket).select_related('user').order_by('timestamp', 'id')
