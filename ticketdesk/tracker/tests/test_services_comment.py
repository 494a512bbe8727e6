import pytest

from tracker.exceptions import AuthorizationError, NotFoundError, ValidationError
from tracker.models import Activity, Comment, Notification
from tracker.selectors.comment import CommentSelector
from tracker.services.comment import CommentService
from tracker.services.ticket import TicketService


@pytest.fixture
def assigned_ticket(ticket, developer, member, watcher):
    # reporter: developer, assignee: member, watcher: watcher
    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)
    TicketService.add_watcher(ticket_id=ticket.pk, user=watcher)
    Notification.objects.all().delete()
    return ticket


@pytest.mark.django_db
def test_comment_notifies_each_interested_user_once(assigned_ticket, admin_user, developer, member, watcher):
    CommentService.create(ticket_id=assigned_ticket.pk, author=admin_user, content="Can reproduce on staging")

    notes = Notification.objects.filter(type=Notification.Type.TICKET_COMMENTED)
    recipients = sorted(notes.values_list("recipient_id", flat=True))
    assert recipients == sorted([developer.pk, member.pk, watcher.pk])
    assert all(n.sender_id == admin_user.pk for n in notes)


@pytest.mark.django_db
def test_comment_author_is_not_notified(assigned_ticket, member):
    CommentService.create(ticket_id=assigned_ticket.pk, author=member, content="On it")

    assert not Notification.objects.filter(recipient=member).exists()


@pytest.mark.django_db
def test_comment_author_starts_watching(ticket, member):
    assert not ticket.is_watched_by(member)
    comment = CommentService.create(ticket_id=ticket.pk, author=member, content="Seeing this too")

    assert ticket.is_watched_by(member)
    assert comment.ticket_id == ticket.pk
    assert Activity.objects.filter(action=Activity.Action.COMMENTED, details__comment_id=comment.pk).exists()


@pytest.mark.django_db
def test_comment_records_mention_handles(ticket, member):
    comment = CommentService.create(ticket_id=ticket.pk, author=member, content="@dave @walt please look")
    assert comment.mention_handles == ["dave", "walt"]


@pytest.mark.django_db
def test_comment_with_attachments(ticket, member):
    comment = CommentService.create(
        ticket_id=ticket.pk, author=member, content="Screenshot attached",
        attachments=[{"name": "shot.png", "url": "https://files.example.com/shot.png", "size": 1200}],
    )
    assert comment.attachments[0]["name"] == "shot.png"
    assert comment.attachments[0]["id"]


@pytest.mark.django_db
def test_comment_requires_membership_and_content(ticket, outsider, member):
    with pytest.raises(AuthorizationError):
        CommentService.create(ticket_id=ticket.pk, author=outsider, content="hello")
    with pytest.raises(ValidationError):
        CommentService.create(ticket_id=ticket.pk, author=member, content="  ")
    with pytest.raises(NotFoundError):
        CommentService.create(ticket_id=424242, author=member, content="hello")
    assert not Comment.objects.exists()


@pytest.mark.django_db
def test_edit_keeps_previous_content(ticket, member):
    comment = CommentService.create(ticket_id=ticket.pk, author=member, content="first draft")

    CommentService.edit(comment_id=comment.pk, user=member, content="second draft")
    CommentService.edit(comment_id=comment.pk, user=member, content="final")

    comment.refresh_from_db()
    assert comment.content == "final"
    assert comment.is_edited
    assert [h["content"] for h in comment.edit_history] == ["first draft", "second draft"]


@pytest.mark.django_db
def test_only_author_can_edit(ticket, member, admin_user):
    comment = CommentService.create(ticket_id=ticket.pk, author=member, content="mine")
    with pytest.raises(AuthorizationError):
        CommentService.edit(comment_id=comment.pk, user=admin_user, content="not yours")


@pytest.mark.django_db
def test_delete_by_author_or_project_admin(ticket, member, developer, admin_user):
    first = CommentService.create(ticket_id=ticket.pk, author=member, content="one")
    second = CommentService.create(ticket_id=ticket.pk, author=member, content="two")

    with pytest.raises(AuthorizationError):
        CommentService.delete(comment_id=first.pk, user=developer)

    CommentService.delete(comment_id=first.pk, user=member)
    CommentService.delete(comment_id=second.pk, user=admin_user)
    assert not Comment.objects.exists()
    assert Activity.objects.filter(action=Activity.Action.DELETED_COMMENT).count() == 2


@pytest.mark.django_db
def test_comment_attachment_author_only(ticket, member, developer):
    comment = CommentService.create(ticket_id=ticket.pk, author=member, content="logs")

    with pytest.raises(AuthorizationError):
        CommentService.add_attachment(comment_id=comment.pk, user=developer, name="a.txt", url="https://x/a.txt")

    comment = CommentService.add_attachment(comment_id=comment.pk, user=member, name="a.txt", url="https://x/a.txt")
    attachment_id = comment.attachments[0]["id"]

    CommentService.remove_attachment(comment_id=comment.pk, user=member, attachment_id=attachment_id)
    comment.refresh_from_db()
    assert comment.attachments == []

    with pytest.raises(NotFoundError):
        CommentService.remove_attachment(comment_id=comment.pk, user=member, attachment_id=attachment_id)


@pytest.mark.django_db
def test_comments_listed_oldest_first(ticket, member, developer):
    CommentService.create(ticket_id=ticket.pk, author=member, content="one")
    CommentService.create(ticket_id=ticket.pk, author=developer, content="two")

    contents = [c.content for c in CommentSelector.get_comments_by_ticket(ticket.pk)]
    assert contents == ["one", "two"]
