# ============================================
# tracker/services/ticket.py
# ============================================
import datetime
import logging
import uuid
from typing import Any, Dict, List, Optional

from django.core.exceptions import ImproperlyConfigured
from django.db import transaction
from django.utils import timezone

from tracker.conf import GLOBAL_SEQUENTIAL, PROJECT_SCOPED, tracker_setting
from tracker.exceptions import AuthorizationError, NotFoundError, ValidationError
from tracker.models import Activity, Notification, Project, Ticket, TicketCounter, TicketHistory
from tracker.selectors.project import ProjectSelector
from tracker.selectors.ticket import TicketSelector
from tracker.selectors.user import UserSelector
from tracker.services import activity_service, notification_service
from tracker.utils import config_registry as registry

logger = logging.getLogger(__name__)

# diffed on update; anything else in the payload is ignored
TRACKED_FIELDS = (
    'title', 'description', 'type', 'status', 'priority', 'assignee',
    'due_date', 'estimated_time', 'time_spent', 'labels',
)

KIND_LABELS = {
    registry.TYPE: 'types',
    registry.STATUS: 'statuses',
    registry.PRIORITY: 'priorities',
}


def _json_value(value):
    """History values are stored as JSON"""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return value


def _change(old, new) -> Dict[str, Any]:
    return {'from': _json_value(old), 'to': _json_value(new)}


class TicketService:

    # ====== Guards ======
    @staticmethod
    def _check_member(project: Project, user, message: str = "Not authorized to modify this ticket") -> None:
        if not project.is_member(user):
            raise AuthorizationError(message)

    @staticmethod
    def _validate_config(project: Project, kind: str, value) -> None:
        if not project.validate_config(kind, value):
            valid = ', '.join(project.config_names(kind))
            raise ValidationError(f"Invalid ticket {kind}. Valid {KIND_LABELS[kind]} are: {valid}")

    @staticmethod
    def _validate_assignee(project: Project, assignee_id) -> Optional[int]:
        """Normalized assignee id, or None to unassign"""
        if assignee_id in (None, ''):
            return None
        try:
            assignee_id = int(getattr(assignee_id, 'pk', assignee_id))
        except (TypeError, ValueError):
            raise ValidationError("Invalid assignee")
        if not project.is_member(assignee_id):
            raise ValidationError("Assignee must be a member of the project")
        return assignee_id

    @staticmethod
    def _ticket_for_member(ticket_id, user, message: str = "Not authorized to modify this ticket") -> Ticket:
        ticket = TicketSelector.get_ticket_or_404(ticket_id)
        TicketService._check_member(ticket.project, user, message)
        return ticket

    @staticmethod
    def _append_history(ticket: Ticket, user, *, changes: Dict[str, Any], action: str = TicketHistory.Action.UPDATED,
                        field: Optional[str] = None, old_value=None, new_value=None) -> TicketHistory:
        return TicketHistory.objects.create(
            ticket=ticket,
            user=user,
            action=action,
            field=field,
            old_value=_json_value(old_value),
            new_value=_json_value(new_value),
            changes=changes,
        )

    # ====== Numbering ======
    @staticmethod
    def _next_ticket_number(project: Project) -> str:
        """
        Next number in the configured scope. Must run inside the
        ticket-create transaction so the counter row stays locked.
        """
        scheme = tracker_setting('TICKET_NUMBERING')
        if scheme == GLOBAL_SEQUENTIAL:
            scope = 'global'
        elif scheme == PROJECT_SCOPED:
            scope = f'project:{project.pk}'
        else:
            raise ImproperlyConfigured(f"Unknown TICKET_NUMBERING scheme '{scheme}'")

        TicketCounter.objects.get_or_create(scope=scope)
        counter = TicketCounter.objects.select_for_update().get(scope=scope)
        counter.value += 1
        counter.save(update_fields=['value'])

        if scheme == PROJECT_SCOPED:
            return f"{project.key}-{counter.value}"
        year = timezone.now().strftime('%y')
        return f"TICK{year}{counter.value:04d}"

    # ====== Lifecycle ======
    @staticmethod
    def create(
        *,
        project_id,
        reporter,
        title: str,
        type: str,
        status: str,
        priority: str,
        description: str = '',
        assignee_id=None,
        due_date=None,
        estimated_time=None,
        labels: Optional[List[str]] = None,
    ) -> Ticket:
        """Create ticket in a project the reporter belongs to"""

        project = ProjectSelector.get_project_or_404(project_id)
        TicketService._check_member(project, reporter, "You must be a member of the project to create a ticket")

        if not (title or '').strip():
            raise ValidationError("Please add a title")

        TicketService._validate_config(project, registry.TYPE, type)
        TicketService._validate_config(project, registry.STATUS, status)
        TicketService._validate_config(project, registry.PRIORITY, priority)
        assignee_id = TicketService._validate_assignee(project, assignee_id)

        with transaction.atomic():
            ticket = Ticket.objects.create(
                project=project,
                ticket_number=TicketService._next_ticket_number(project),
                title=title.strip(),
                description=description or '',
                reporter=reporter,
                assignee_id=assignee_id,
                type=type,
                status=status,
                priority=priority,
                due_date=due_date,
                estimated_time=estimated_time or 0,
                labels=list(labels or []),
            )
            TicketService._append_history(
                ticket, reporter, action=TicketHistory.Action.CREATED, changes={}
            )

        logger.info("[ticket] %s created in %s by user=%s", ticket.ticket_number, project.key, reporter.pk)

        activity_service.log_ticket_activity(user=reporter, ticket=ticket, action=Activity.Action.CREATED)

        if assignee_id is not None:
            notification_service.create_notification(
                recipient=assignee_id,
                sender=reporter,
                type=Notification.Type.TICKET_ASSIGNED,
                title='Ticket Assigned',
                message=f"You have been assigned to ticket {ticket.ticket_number}: {ticket.title}",
                entity_type=Notification.EntityType.TICKET,
                entity_id=ticket.pk,
                link=notification_service.ticket_link(ticket),
            )

        return ticket

    @staticmethod
    def update(*, ticket_id, user, **data) -> Ticket:
        """
        Partial update of the tracked fields.

        All changed fields go into a single history entry. ``project``,
        ``reporter`` and ``ticket_number`` are not tracked, so attempts to
        change them are dropped without error.
        """

        ticket = TicketService._ticket_for_member(ticket_id, user, "Not authorized to update this ticket")
        project = ticket.project
        data = {k: v for k, v in data.items() if k in TRACKED_FIELDS}

        if 'title' in data and not (data['title'] or '').strip():
            raise ValidationError("Title cannot be empty")

        for kind in registry.KINDS:
            if kind in data:
                TicketService._validate_config(project, kind, data[kind])

        if 'assignee' in data:
            data['assignee'] = TicketService._validate_assignee(project, data['assignee'])

        changes: Dict[str, Any] = {}
        for field, new in data.items():
            attr = 'assignee_id' if field == 'assignee' else field
            old = getattr(ticket, attr)
            if field in ('estimated_time', 'time_spent') and new is None:
                new = 0
            if field == 'labels':
                new = list(new or [])
            if old != new:
                setattr(ticket, attr, new)
                changes[field] = _change(old, new)

        if changes:
            with transaction.atomic():
                ticket.save()
                TicketService._append_history(ticket, user, changes=changes)

        activity_service.log_ticket_activity(user=user, ticket=ticket, changes=sorted(changes))

        new_assignee_id = ticket.assignee_id
        assignee_changed = 'assignee' in changes and new_assignee_id is not None
        if assignee_changed:
            notification_service.create_notification(
                recipient=new_assignee_id,
                sender=user,
                type=Notification.Type.TICKET_ASSIGNED,
                title='Ticket Assigned',
                message=f"You have been assigned to ticket {ticket.ticket_number}: {ticket.title}",
                entity_type=Notification.EntityType.TICKET,
                entity_id=ticket.pk,
                link=notification_service.ticket_link(ticket),
            )

        watchers = ticket.watcher_ids()
        if assignee_changed:
            # the new assignee already got the assignment notice
            watchers = [w for w in watchers if w != new_assignee_id]
        notification_service.fan_out(
            recipients=watchers,
            exclude=user,
            sender=user,
            type=Notification.Type.TICKET_UPDATED,
            title='Ticket Updated',
            message=f"Ticket {ticket.ticket_number}: {ticket.title} has been updated",
            entity_type=Notification.EntityType.TICKET,
            entity_id=ticket.pk,
            link=notification_service.ticket_link(ticket),
        )
        return ticket

    @staticmethod
    def assign(*, ticket_id, user, assignee_id=None) -> Ticket:
        """Set or clear the assignee; the new assignee starts watching"""

        ticket = TicketService._ticket_for_member(ticket_id, user, "Not authorized to assign this ticket")
        assignee_id = TicketService._validate_assignee(ticket.project, assignee_id)
        old_assignee_id = ticket.assignee_id

        with transaction.atomic():
            ticket.assignee_id = assignee_id
            ticket.save(update_fields=['assignee', 'updated_at'])
            if assignee_id is not None and not ticket.is_watched_by(assignee_id):
                ticket.watchers.add(assignee_id)
            TicketService._append_history(
                ticket, user,
                field='assignee',
                old_value=old_assignee_id,
                new_value=assignee_id,
                changes={'assignee': _change(old_assignee_id, assignee_id)},
            )

        activity_service.log_ticket_activity(
            user=user, ticket=ticket, action=Activity.Action.ASSIGNED,
            change='assigned_ticket' if assignee_id is not None else 'unassigned_ticket',
            assignee=assignee_id,
        )

        if assignee_id is not None:
            notification_service.create_notification(
                recipient=assignee_id,
                sender=user,
                type=Notification.Type.TICKET_ASSIGNED,
                title='Ticket Assigned',
                message=f"You have been assigned to ticket {ticket.ticket_number}: {ticket.title}",
                entity_type=Notification.EntityType.TICKET,
                entity_id=ticket.pk,
                link=notification_service.ticket_link(ticket),
            )

        return ticket

    @staticmethod
    def transition_status(*, ticket_id, user, status: str) -> Ticket:
        """Move ticket to another status from the project's list"""

        ticket = TicketService._ticket_for_member(ticket_id, user, "Not authorized to update this ticket")
        TicketService._validate_config(ticket.project, registry.STATUS, status)

        old_status = ticket.status
        with transaction.atomic():
            ticket.status = status
            ticket.save(update_fields=['status', 'updated_at'])
            TicketService._append_history(
                ticket, user,
                field='status',
                old_value=old_status,
                new_value=status,
                changes={'status': _change(old_status, status)},
            )

        activity_service.log_ticket_activity(
            user=user, ticket=ticket, action=Activity.Action.STATUS_CHANGED,
            old_status=old_status, new_status=status,
        )

        notification_service.fan_out(
            recipients=[ticket.reporter_id, ticket.assignee_id],
            exclude=user,
            sender=user,
            type=Notification.Type.TICKET_STATUS_CHANGED,
            title='Ticket Status Changed',
            message=f"Ticket {ticket.ticket_number} status changed from {old_status} to {status}",
            entity_type=Notification.EntityType.TICKET,
            entity_id=ticket.pk,
            link=notification_service.ticket_link(ticket),
        )

        return ticket

    @staticmethod
    def delete(*, ticket_id, user) -> None:
        """Delete ticket with its comments (project admin or reporter)"""

        ticket = TicketSelector.get_ticket_or_404(ticket_id)
        project = ticket.project
        if not project.is_admin(user) and ticket.reporter_id != user.pk:
            raise AuthorizationError("Not authorized to delete this ticket")

        captured_id = ticket.pk
        with transaction.atomic():
            ticket.comments.all().delete()
            ticket.delete()

        logger.info("[ticket] %s deleted by user=%s", ticket.ticket_number, user.pk)

        activity_service.log_ticket_activity(
            user=user, ticket=ticket, action=Activity.Action.DELETED, ticket_id=captured_id
        )

    # ====== Watchers ======
    @staticmethod
    def _watcher_target(user, watcher_id) -> int:
        if watcher_id in (None, '', 'me'):
            return user.pk
        return UserSelector.normalize_user_id(watcher_id)

    @staticmethod
    def add_watcher(*, ticket_id, user, watcher_id=None) -> Ticket:
        """Watch the ticket; ``watcher_id`` defaults to the caller"""

        ticket = TicketService._ticket_for_member(ticket_id, user, "Not authorized to access this ticket")

        target = TicketService._watcher_target(user, watcher_id)
        if target != user.pk and not ticket.project.is_member(target):
            raise ValidationError("User must be a member of the project to watch the ticket")

        if not ticket.is_watched_by(target):
            ticket.watchers.add(target)
            activity_service.log_ticket_activity(
                user=user, ticket=ticket, change='added_watcher', watcher=str(target)
            )

        return ticket

    @staticmethod
    def remove_watcher(*, ticket_id, user, watcher_id=None) -> Ticket:
        """Stop watching; removing someone who is not watching is a no-op"""

        ticket = TicketSelector.get_ticket_or_404(ticket_id)
        target = TicketService._watcher_target(user, watcher_id)
        if target != user.pk and not ticket.project.is_member(user):
            raise AuthorizationError("Not authorized to modify watchers for this ticket")

        if ticket.is_watched_by(target):
            ticket.watchers.remove(target)
            activity_service.log_ticket_activity(
                user=user, ticket=ticket, change='removed_watcher', watcher=str(target)
            )

        return ticket

    # ====== Attachments ======
    @staticmethod
    def add_attachment(*, ticket_id, user, name: str, url: str, size: int = 0, type: str = '') -> Ticket:
        """Attach file metadata; storage is handled elsewhere"""

        ticket = TicketService._ticket_for_member(ticket_id, user)
        if not name or not url:
            raise ValidationError("Attachment name and url are required")

        attachment = {
            'id': uuid.uuid4().hex,
            'name': name,
            'url': url,
            'size': size or 0,
            'type': type or '',
            'uploaded_by': user.pk,
            'uploaded_at': timezone.now().isoformat(),
        }

        with transaction.atomic():
            ticket.attachments = list(ticket.attachments or []) + [attachment]
            ticket.save(update_fields=['attachments', 'updated_at'])
            TicketService._append_history(
                ticket, user, changes={'attachments': {'action': 'added', 'name': name}}
            )

        activity_service.log_ticket_activity(
            user=user, ticket=ticket, change='added_attachment', attachment=name
        )
        return ticket

    @staticmethod
    def remove_attachment(*, ticket_id, user, attachment_id) -> Ticket:
        """Remove attachment (uploader or project admin)"""

        ticket = TicketService._ticket_for_member(ticket_id, user)

        attachment = next(
            (a for a in ticket.attachments or [] if a.get('id') == str(attachment_id)), None
        )
        if attachment is None:
            raise NotFoundError("Attachment not found")

        if attachment.get('uploaded_by') != user.pk and not ticket.project.is_admin(user):
            raise AuthorizationError("Not authorized to remove this attachment")

        with transaction.atomic():
            ticket.attachments = [a for a in ticket.attachments if a.get('id') != attachment['id']]
            ticket.save(update_fields=['attachments', 'updated_at'])
            TicketService._append_history(
                ticket, user, changes={'attachments': {'action': 'removed', 'name': attachment['name']}}
            )

        activity_service.log_ticket_activity(
            user=user, ticket=ticket, change='removed_attachment', attachment=attachment['name']
        )
        return ticket
