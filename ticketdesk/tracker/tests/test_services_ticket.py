import pytest
from django.utils import timezone

from tracker.exceptions import AuthorizationError, NotFoundError, ValidationError
from tracker.models import Activity, Comment, Notification, Ticket, TicketHistory
from tracker.selectors.ticket import TicketSelector
from tracker.services.comment import CommentService
from tracker.services.project import ProjectService
from tracker.services.ticket import TicketService


def _create(project, reporter, **overrides):
    fields = dict(
        project_id=project.pk,
        reporter=reporter,
        title="Search is slow",
        type="Task",
        status="To Do",
        priority="Medium",
    )
    fields.update(overrides)
    return TicketService.create(**fields)


# ====== Create ======
@pytest.mark.django_db
def test_create_writes_ticket_history_and_activity(project, developer):
    ticket = _create(project, developer)

    assert ticket.project == project
    assert ticket.reporter == developer
    assert ticket.assignee is None
    assert ticket.estimated_time == 0
    assert ticket.labels == []

    history = list(TicketSelector.get_history(ticket))
    assert len(history) == 1
    assert history[0].action == TicketHistory.Action.CREATED
    assert history[0].user == developer

    activity = Activity.objects.get(entity_type=Activity.EntityType.TICKET, entity_id=str(ticket.pk))
    assert activity.action == Activity.Action.CREATED
    assert activity.project_id == project.pk
    assert activity.details["ticket_number"] == ticket.ticket_number


@pytest.mark.django_db
def test_global_numbering_is_sequential(project, developer):
    year = timezone.now().strftime("%y")
    first = _create(project, developer)
    second = _create(project, developer)
    assert first.ticket_number == f"TICK{year}0001"
    assert second.ticket_number == f"TICK{year}0002"


@pytest.mark.django_db
def test_project_scoped_numbering(settings, project, admin_user, developer):
    settings.TRACKER = {"TICKET_NUMBERING": "project_scoped"}
    other = ProjectService.create_project(name="Mobile App", creator=admin_user)

    assert _create(project, developer).ticket_number == "CP-1"
    assert _create(project, developer).ticket_number == "CP-2"
    assert _create(other, admin_user).ticket_number == "MA-1"


@pytest.mark.django_db
def test_ticket_numbers_are_unique(project, developer):
    numbers = {_create(project, developer).ticket_number for _ in range(5)}
    assert len(numbers) == 5


@pytest.mark.django_db
def test_create_rejects_value_outside_registry(project, developer):
    with pytest.raises(ValidationError) as exc:
        _create(project, developer, status="Blocked")

    assert "To Do, In Progress, Review, Done" in str(exc.value)
    assert not Ticket.objects.exists()
    assert not TicketHistory.objects.exists()
    assert not Activity.objects.filter(entity_type=Activity.EntityType.TICKET).exists()
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_registry_match_is_case_sensitive(project, developer):
    with pytest.raises(ValidationError):
        _create(project, developer, type="bug")
    with pytest.raises(ValidationError):
        _create(project, developer, priority="high")


@pytest.mark.django_db
def test_create_requires_membership(project, outsider):
    with pytest.raises(AuthorizationError):
        _create(project, outsider)
    with pytest.raises(NotFoundError):
        TicketService.create(
            project_id=9999, reporter=outsider, title="x", type="Bug", status="To Do", priority="Low"
        )


@pytest.mark.django_db
def test_create_requires_title(project, developer):
    with pytest.raises(ValidationError):
        _create(project, developer, title="   ")


@pytest.mark.django_db
def test_create_with_assignee_notifies_assignee(project, developer, member):
    ticket = _create(project, developer, assignee_id=member.pk)

    assert ticket.assignee_id == member.pk
    note = Notification.objects.get()
    assert note.recipient == member
    assert note.type == Notification.Type.TICKET_ASSIGNED
    assert note.link == f"/tickets/{ticket.pk}"


@pytest.mark.django_db
def test_assignee_must_be_project_member(project, developer, outsider):
    with pytest.raises(ValidationError):
        _create(project, developer, assignee_id=outsider.pk)


@pytest.mark.django_db
def test_assignee_can_stay_after_leaving_project(project, admin_user, developer, member):
    ticket = _create(project, developer, assignee_id=member.pk)
    ProjectService.remove_member(project=project, user=admin_user, member_id=member.pk)

    ticket.refresh_from_db()
    assert ticket.assignee_id == member.pk
    # a fresh assignment to the ex-member is refused
    with pytest.raises(ValidationError):
        TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)


# ====== Update ======
@pytest.mark.django_db
def test_update_records_one_history_entry(ticket, developer):
    TicketService.update(
        ticket_id=ticket.pk, user=developer,
        title="Login button is dead", priority="Critical", labels=["auth"],
    )

    entries = list(TicketSelector.get_history(ticket))
    assert len(entries) == 2
    changes = entries[-1].changes
    assert set(changes) == {"title", "priority", "labels"}
    assert changes["priority"] == {"from": "High", "to": "Critical"}
    assert changes["labels"] == {"from": [], "to": ["auth"]}


@pytest.mark.django_db
def test_update_without_changes_adds_no_history(ticket, developer):
    TicketService.update(ticket_id=ticket.pk, user=developer, status="To Do")
    assert ticket.history.count() == 1


@pytest.mark.django_db
def test_update_ignores_fixed_fields(ticket, project, developer, admin_user):
    other = ProjectService.create_project(name="Mobile App", creator=admin_user)
    original_number = ticket.ticket_number

    TicketService.update(
        ticket_id=ticket.pk, user=developer,
        project=other, reporter=admin_user, ticket_number="HACK-1", description="Steps to reproduce",
    )

    ticket.refresh_from_db()
    assert ticket.project_id == project.pk
    assert ticket.reporter_id == developer.pk
    assert ticket.ticket_number == original_number
    assert ticket.description == "Steps to reproduce"


@pytest.mark.django_db
def test_update_by_non_member_changes_nothing(ticket, outsider):
    with pytest.raises(AuthorizationError):
        TicketService.update(ticket_id=ticket.pk, user=outsider, title="Pwned")

    fresh = Ticket.objects.get(pk=ticket.pk)
    assert fresh.title == "Login button does nothing"
    assert fresh.history.count() == 1


@pytest.mark.django_db
def test_update_validates_registry_values(ticket, developer):
    with pytest.raises(ValidationError):
        TicketService.update(ticket_id=ticket.pk, user=developer, type="Story")
    with pytest.raises(ValidationError):
        TicketService.update(ticket_id=ticket.pk, user=developer, title="")


@pytest.mark.django_db
def test_update_notifies_watchers_but_not_the_actor(ticket, developer, watcher):
    TicketService.add_watcher(ticket_id=ticket.pk, user=watcher)
    TicketService.add_watcher(ticket_id=ticket.pk, user=developer)

    TicketService.update(ticket_id=ticket.pk, user=developer, description="More detail")

    notes = Notification.objects.filter(type=Notification.Type.TICKET_UPDATED)
    assert list(notes.values_list("recipient_id", flat=True)) == [watcher.pk]


@pytest.mark.django_db
def test_update_reassignment_notifies_new_assignee_once(ticket, developer, member, watcher):
    TicketService.add_watcher(ticket_id=ticket.pk, user=developer, watcher_id=member.pk)

    TicketService.update(ticket_id=ticket.pk, user=developer, assignee=member.pk)

    notes = Notification.objects.filter(recipient=member)
    assert list(notes.values_list("type", flat=True)) == [Notification.Type.TICKET_ASSIGNED]


@pytest.mark.django_db
def test_self_assignment_notifies_the_same_way_as_assign(ticket, developer, member):
    TicketService.update(ticket_id=ticket.pk, user=developer, assignee=developer.pk)
    TicketService.assign(ticket_id=ticket.pk, user=member, assignee_id=member.pk)

    assigned = Notification.objects.filter(type=Notification.Type.TICKET_ASSIGNED)
    assert sorted(assigned.values_list("recipient_id", flat=True)) == sorted([developer.pk, member.pk])
    assert assigned.get(recipient=developer).sender == developer


@pytest.mark.django_db
def test_update_serializes_dates_in_history(ticket, developer):
    due = timezone.now()
    TicketService.update(ticket_id=ticket.pk, user=developer, due_date=due)

    last = ticket.history.order_by("-id").first()
    assert last.changes["due_date"] == {"from": None, "to": due.isoformat()}


# ====== Assign ======
@pytest.mark.django_db
def test_reassign_records_history_notifies_and_watches(ticket, admin_user, developer, member, watcher):
    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)
    Notification.objects.all().delete()
    before = ticket.history.count()

    TicketService.assign(ticket_id=ticket.pk, user=admin_user, assignee_id=watcher.pk)

    ticket.refresh_from_db()
    assert ticket.assignee_id == watcher.pk
    assert ticket.history.count() == before + 1

    entry = ticket.history.order_by("-id").first()
    assert entry.field == "assignee"
    assert entry.old_value == member.pk
    assert entry.new_value == watcher.pk

    notes = list(Notification.objects.all())
    assert len(notes) == 1
    assert notes[0].recipient == watcher
    assert notes[0].type == Notification.Type.TICKET_ASSIGNED

    assert ticket.is_watched_by(watcher)


@pytest.mark.django_db
def test_unassign(ticket, developer, member):
    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)
    Notification.objects.all().delete()

    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=None)

    ticket.refresh_from_db()
    assert ticket.assignee is None
    assert not Notification.objects.exists()
    assert Activity.objects.filter(details__change="unassigned_ticket").count() == 1


@pytest.mark.django_db
def test_assign_requires_membership(ticket, outsider, member):
    with pytest.raises(AuthorizationError):
        TicketService.assign(ticket_id=ticket.pk, user=outsider, assignee_id=member.pk)


# ====== Status ======
@pytest.mark.django_db
def test_transition_status_notifies_reporter_and_assignee(ticket, developer, member, admin_user):
    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)
    Notification.objects.all().delete()

    TicketService.transition_status(ticket_id=ticket.pk, user=admin_user, status="In Progress")

    ticket.refresh_from_db()
    assert ticket.status == "In Progress"
    entry = ticket.history.order_by("-id").first()
    assert entry.changes == {"status": {"from": "To Do", "to": "In Progress"}}

    recipients = set(
        Notification.objects.filter(type=Notification.Type.TICKET_STATUS_CHANGED)
        .values_list("recipient_id", flat=True)
    )
    assert recipients == {developer.pk, member.pk}

    activity = Activity.objects.get(action=Activity.Action.STATUS_CHANGED)
    assert activity.details["old_status"] == "To Do"
    assert activity.details["new_status"] == "In Progress"


@pytest.mark.django_db
def test_transition_to_unknown_status_fails(ticket, developer):
    with pytest.raises(ValidationError):
        TicketService.transition_status(ticket_id=ticket.pk, user=developer, status="Blocked")
    ticket.refresh_from_db()
    assert ticket.status == "To Do"


@pytest.mark.django_db
def test_reporter_changing_status_is_not_notified(ticket, developer):
    TicketService.transition_status(ticket_id=ticket.pk, user=developer, status="Done")
    assert not Notification.objects.exists()


# ====== Delete ======
@pytest.mark.django_db
def test_delete_by_plain_member_is_refused(ticket, member):
    with pytest.raises(AuthorizationError):
        TicketService.delete(ticket_id=ticket.pk, user=member)
    assert Ticket.objects.filter(pk=ticket.pk).exists()


@pytest.mark.django_db
def test_delete_by_reporter_removes_comments_and_history(ticket, developer, member):
    CommentService.create(ticket_id=ticket.pk, author=member, content="Same here")
    ticket_id = ticket.pk

    TicketService.delete(ticket_id=ticket_id, user=developer)

    assert not Ticket.objects.filter(pk=ticket_id).exists()
    assert not Comment.objects.filter(ticket_id=ticket_id).exists()
    assert not TicketHistory.objects.filter(ticket_id=ticket_id).exists()
    assert Activity.objects.filter(action=Activity.Action.DELETED, entity_id=str(ticket_id)).exists()


@pytest.mark.django_db
def test_delete_by_project_admin(ticket, admin_user):
    TicketService.delete(ticket_id=ticket.pk, user=admin_user)
    assert not Ticket.objects.exists()


@pytest.mark.django_db
def test_delete_missing_ticket(developer):
    with pytest.raises(NotFoundError):
        TicketService.delete(ticket_id=424242, user=developer)


# ====== Watchers ======
@pytest.mark.django_db
def test_add_watcher_is_idempotent(ticket, watcher):
    TicketService.add_watcher(ticket_id=ticket.pk, user=watcher)
    TicketService.add_watcher(ticket_id=ticket.pk, user=watcher, watcher_id="me")

    assert ticket.watcher_ids() == [watcher.pk]
    assert Activity.objects.filter(details__change="added_watcher").count() == 1


@pytest.mark.django_db
def test_watcher_must_be_member(ticket, developer, outsider):
    with pytest.raises(ValidationError):
        TicketService.add_watcher(ticket_id=ticket.pk, user=developer, watcher_id=outsider.pk)
    with pytest.raises(AuthorizationError):
        TicketService.add_watcher(ticket_id=ticket.pk, user=outsider)


@pytest.mark.django_db
def test_remove_watcher(ticket, developer, watcher, outsider):
    TicketService.add_watcher(ticket_id=ticket.pk, user=watcher)

    with pytest.raises(AuthorizationError):
        TicketService.remove_watcher(ticket_id=ticket.pk, user=outsider, watcher_id=watcher.pk)

    TicketService.remove_watcher(ticket_id=ticket.pk, user=developer, watcher_id=str(watcher.pk))
    assert not ticket.is_watched_by(watcher)

    # removing again is a no-op
    TicketService.remove_watcher(ticket_id=ticket.pk, user=watcher)
    assert Activity.objects.filter(details__change="removed_watcher").count() == 1


# ====== Attachments ======
@pytest.mark.django_db
def test_attachment_lifecycle(ticket, developer, member, admin_user):
    TicketService.add_attachment(
        ticket_id=ticket.pk, user=developer, name="trace.log", url="https://files.example.com/trace.log", size=2048
    )
    ticket.refresh_from_db()
    attachment = ticket.attachments[0]
    assert attachment["name"] == "trace.log"
    assert attachment["uploaded_by"] == developer.pk

    with pytest.raises(AuthorizationError):
        TicketService.remove_attachment(ticket_id=ticket.pk, user=member, attachment_id=attachment["id"])

    TicketService.remove_attachment(ticket_id=ticket.pk, user=admin_user, attachment_id=attachment["id"])
    ticket.refresh_from_db()
    assert ticket.attachments == []

    actions = [h.changes["attachments"]["action"] for h in ticket.history.all() if "attachments" in h.changes]
    assert actions == ["added", "removed"]

    with pytest.raises(NotFoundError):
        TicketService.remove_attachment(ticket_id=ticket.pk, user=admin_user, attachment_id="nope")


@pytest.mark.django_db
def test_attachment_needs_name_and_url(ticket, developer):
    with pytest.raises(ValidationError):
        TicketService.add_attachment(ticket_id=ticket.pk, user=developer, name="", url="https://x")


# ====== History ======
@pytest.mark.django_db
def test_history_only_grows(ticket, developer, member):
    first = list(ticket.history.values_list("id", flat=True))

    TicketService.update(ticket_id=ticket.pk, user=developer, priority="Low")
    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)
    TicketService.transition_status(ticket_id=ticket.pk, user=member, status="Review")

    ids = list(TicketSelector.get_history(ticket).values_list("id", flat=True))
    assert ids[:len(first)] == first
    assert len(ids) == len(first) + 3


@pytest.mark.django_db
def test_history_entries_cannot_be_rewritten(ticket):
    entry = ticket.history.get()
    entry.action = TicketHistory.Action.UPDATED
    with pytest.raises(ValueError):
        entry.save()
