from unittest.mock import patch

import pytest

from tracker.exceptions import AuditWriteFailure, AuthorizationError, NotFoundError, ValidationError
from tracker.models import Activity, Notification, Ticket
from tracker.selectors.activity import ActivitySelector
from tracker.services import activity_service, notification_service
from tracker.services.project import ProjectService
from tracker.services.ticket import TicketService


def _notify(recipient, sender=None, **overrides):
    fields = dict(
        recipient=recipient,
        sender=sender,
        type=Notification.Type.SYSTEM,
        title="Maintenance",
        message="Scheduled maintenance tonight",
        entity_type=Notification.EntityType.SYSTEM,
        entity_id="0",
    )
    fields.update(overrides)
    return notification_service.create_notification(**fields)


# ====== Activity feeds ======
@pytest.mark.django_db
def test_own_feed_is_always_visible(developer):
    assert list(ActivitySelector.user_feed(developer)) == []


@pytest.mark.django_db
def test_other_user_feed_needs_shared_project(admin_user, developer, outsider):
    with pytest.raises(AuthorizationError):
        ActivitySelector.user_feed(outsider, developer.pk)

    project = ProjectService.create_project(name="Shared Space", creator=admin_user)
    ProjectService.add_member(project=project, user=admin_user, member_id=developer.pk)
    ProjectService.add_member(project=project, user=admin_user, member_id=outsider.pk)

    assert ActivitySelector.user_feed(outsider, developer.pk).count() == 0


@pytest.mark.django_db
def test_user_feed_for_unknown_user(developer):
    with pytest.raises(NotFoundError):
        ActivitySelector.user_feed(developer, 424242)


@pytest.mark.django_db
def test_project_feed_newest_first(project, ticket, developer, outsider):
    TicketService.transition_status(ticket_id=ticket.pk, user=developer, status="In Progress")

    actions = [a.action for a in ActivitySelector.project_feed(developer, project.pk)]
    assert actions[0] == Activity.Action.STATUS_CHANGED
    assert Activity.Action.CREATED in actions

    with pytest.raises(AuthorizationError):
        ActivitySelector.project_feed(outsider, project.pk)


@pytest.mark.django_db
def test_entity_feed(ticket, developer, outsider):
    feed = ActivitySelector.entity_feed(developer, "ticket", ticket.pk)
    assert [a.action for a in feed] == [Activity.Action.CREATED]

    with pytest.raises(AuthorizationError):
        ActivitySelector.entity_feed(outsider, "ticket", ticket.pk)
    with pytest.raises(ValidationError):
        ActivitySelector.entity_feed(developer, "comment", 1)
    with pytest.raises(ValidationError):
        ActivitySelector.entity_feed(developer, "user", "abc")


# ====== Side-effect isolation ======
@pytest.mark.django_db
def test_failed_activity_write_is_reported_not_raised(developer):
    with patch(
        "tracker.repositories.activity_repository.create_activity", side_effect=RuntimeError("disk full")
    ):
        result = activity_service.log_activity(
            user=developer, action=Activity.Action.UPDATED,
            entity_type=Activity.EntityType.USER, entity_id=developer.pk,
        )

    assert result.ok is False
    assert isinstance(result.error, AuditWriteFailure)
    assert not Activity.objects.exists()


@pytest.mark.django_db
def test_unknown_activity_action_is_rejected_by_the_log(developer):
    result = activity_service.log_activity(
        user=developer, action="teleported", entity_type=Activity.EntityType.USER, entity_id=developer.pk
    )
    assert result.ok is False
    assert not Activity.objects.exists()


@pytest.mark.django_db
def test_primary_operation_survives_side_effect_failures(project, developer, member):
    with patch(
        "tracker.repositories.activity_repository.create_activity", side_effect=RuntimeError("boom")
    ), patch(
        "tracker.repositories.notification_repository.create_notification", side_effect=RuntimeError("boom")
    ):
        ticket = TicketService.create(
            project_id=project.pk, reporter=developer, title="Still saved",
            type="Task", status="To Do", priority="Low", assignee_id=member.pk,
        )

    assert Ticket.objects.filter(pk=ticket.pk).exists()
    assert ticket.history.count() == 1
    assert not Activity.objects.filter(entity_type=Activity.EntityType.TICKET).exists()
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_fan_out_skips_actor_and_duplicates(developer, member, watcher):
    results = notification_service.fan_out(
        recipients=[member, developer, member.pk, None, watcher],
        exclude=developer,
        sender=developer,
        type=Notification.Type.TICKET_UPDATED,
        title="Ticket Updated",
        message="updated",
        entity_type=Notification.EntityType.TICKET,
        entity_id=1,
    )
    assert [r.ok for r in results] == [True, True]
    assert list(Notification.objects.order_by("id").values_list("recipient_id", flat=True)) == [member.pk, watcher.pk]


# ====== Notifications ======
@pytest.mark.django_db
def test_unknown_notification_kind_fails_softly(member):
    result = _notify(member, type="carrier_pigeon")
    assert result.ok is False
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_list_and_unread_count(member, developer):
    for _ in range(3):
        _notify(member, developer)
    _notify(developer)

    notifications = notification_service.list_for_user(user=member)
    assert notifications.count() == 3
    assert all(n.recipient_id == member.pk for n in notifications)
    assert notification_service.unread_count(user=member) == 3


@pytest.mark.django_db
def test_mark_as_read_checks_ownership(member, outsider):
    note = _notify(member).value

    with pytest.raises(AuthorizationError):
        notification_service.mark_as_read(notification_id=note.pk, user=outsider)
    with pytest.raises(NotFoundError):
        notification_service.mark_as_read(notification_id=424242, user=member)

    updated = notification_service.mark_as_read(notification_id=note.pk, user=member)
    assert updated.read
    assert updated.read_at is not None
    assert notification_service.unread_count(user=member) == 0


@pytest.mark.django_db
def test_mark_all_as_read_only_touches_own(member, developer):
    _notify(member)
    _notify(member)
    _notify(developer)

    assert notification_service.mark_all_as_read(user=member) == 2
    assert notification_service.unread_count(user=member) == 0
    assert notification_service.unread_count(user=developer) == 1


@pytest.mark.django_db
def test_delete_notifications(member, outsider):
    first = _notify(member).value
    _notify(member)
    _notify(outsider)

    with pytest.raises(AuthorizationError):
        notification_service.delete_notification(notification_id=first.pk, user=outsider)

    notification_service.delete_notification(notification_id=first.pk, user=member)
    assert notification_service.delete_all(user=member) == 1
    assert Notification.objects.count() == 1
