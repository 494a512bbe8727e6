import pytest
from django.urls import reverse

from tracker.models import Notification, Project, Ticket
from tracker.services.comment import CommentService
from tracker.services.ticket import TicketService


# ====== Auth & error envelope ======
@pytest.mark.django_db
def test_anonymous_request_is_rejected(api_client):
    response = api_client.get(reverse("tracker:project-list-create"))
    assert response.status_code == 401
    assert set(response.json()) == {"message", "stack"}


@pytest.mark.django_db
def test_serializer_errors_use_the_envelope(client_for, developer):
    response = client_for(developer).post(reverse("tracker:project-list-create"), {}, format="json")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert "name" in body["errors"]
    assert body["stack"] is None


# ====== Projects ======
@pytest.mark.django_db
def test_create_project(client_for, developer):
    response = client_for(developer).post(
        reverse("tracker:project-list-create"), {"name": "Customer Portal"}, format="json"
    )

    assert response.status_code == 201
    body = response.json()
    assert body["key"] == "CP"
    assert [m["role"] for m in body["members"]] == ["admin"]
    assert [s["name"] for s in body["ticket_statuses"]] == ["To Do", "In Progress", "Review", "Done"]


@pytest.mark.django_db
def test_plain_user_cannot_create_project(client_for, member):
    response = client_for(member).post(
        reverse("tracker:project-list-create"), {"name": "Side Project"}, format="json"
    )
    assert response.status_code == 403
    assert not Project.objects.exists()


@pytest.mark.django_db
def test_project_list_respects_visibility(client_for, project, member, outsider):
    keys = [p["key"] for p in client_for(member).get(reverse("tracker:project-list-create")).json()]
    assert keys == ["CP"]

    assert client_for(outsider).get(reverse("tracker:project-list-create")).json() == []
    response = client_for(outsider).get(reverse("tracker:project-detail", args=[project.pk]))
    assert response.status_code == 403


@pytest.mark.django_db
def test_missing_project_is_404(client_for, developer):
    response = client_for(developer).get(reverse("tracker:project-detail", args=[424242]))
    assert response.status_code == 404
    assert response.json()["message"] == "Project not found"


@pytest.mark.django_db
def test_replace_ticket_statuses(client_for, project, admin_user, developer):
    url = reverse("tracker:project-ticket-statuses", args=[project.pk])
    payload = {"ticket_statuses": [{"name": "Open"}, {"name": "Closed"}]}

    assert client_for(developer).put(url, payload, format="json").status_code == 403

    response = client_for(admin_user).put(url, payload, format="json")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()["ticket_statuses"]] == ["Open", "Closed"]


@pytest.mark.django_db
def test_add_project_member(client_for, project, admin_user, outsider):
    response = client_for(admin_user).post(
        reverse("tracker:project-member-add", args=[project.pk]),
        {"user_id": outsider.pk, "role": "manager"},
        format="json",
    )
    assert response.status_code == 201
    assert project.member_role(outsider) == "manager"


# ====== Tickets ======
@pytest.mark.django_db
def test_create_ticket(client_for, project, developer, member):
    response = client_for(developer).post(
        reverse("tracker:ticket-list-create"),
        {
            "project_id": project.pk,
            "title": "Checkout fails",
            "type": "Bug",
            "status": "To Do",
            "priority": "Critical",
            "assignee_id": member.pk,
        },
        format="json",
    )

    assert response.status_code == 201
    body = response.json()
    assert body["project"]["key"] == "CP"
    assert body["reporter"]["id"] == developer.pk
    assert body["assignee"]["id"] == member.pk
    assert body["ticket_number"].startswith("TICK")


@pytest.mark.django_db
def test_create_ticket_with_unknown_status(client_for, project, developer):
    response = client_for(developer).post(
        reverse("tracker:ticket-list-create"),
        {"project_id": project.pk, "title": "x", "type": "Bug", "status": "Blocked", "priority": "High"},
        format="json",
    )

    assert response.status_code == 400
    body = response.json()
    assert set(body) == {"message", "stack"}
    assert body["message"].startswith("Invalid ticket status")
    assert not Ticket.objects.exists()


@pytest.mark.django_db
def test_non_member_cannot_touch_ticket(client_for, ticket, outsider):
    client = client_for(outsider)
    url = reverse("tracker:ticket-detail", args=[ticket.pk])

    assert client.get(url).status_code == 403
    assert client.put(url, {"title": "Mine now"}, format="json").status_code == 403
    ticket.refresh_from_db()
    assert ticket.title == "Login button does nothing"


@pytest.mark.django_db
def test_ticket_list_shape(client_for, project, ticket, developer):
    TicketService.create(
        project_id=project.pk, reporter=developer, title="Second", type="Task", status="Done", priority="Low"
    )

    response = client_for(developer).get(reverse("tracker:ticket-list-create"), {"limit": 1})
    body = response.json()
    assert set(body) == {"tickets", "page", "pages", "total"}
    assert body["total"] == 2
    assert body["pages"] == 2
    assert len(body["tickets"]) == 1

    filtered = client_for(developer).get(reverse("tracker:ticket-list-create"), {"status": "Done"}).json()
    assert [t["title"] for t in filtered["tickets"]] == ["Second"]


@pytest.mark.django_db
def test_ticket_list_page_out_of_range_falls_back(client_for, project, ticket, developer):
    TicketService.create(
        project_id=project.pk, reporter=developer, title="Second", type="Task", status="Done", priority="Low"
    )
    url = reverse("tracker:ticket-list-create")

    last = client_for(developer).get(url, {"limit": 1, "page": 99})
    assert last.status_code == 200
    assert {k: last.json()[k] for k in ("page", "pages", "total")} == {"page": 2, "pages": 2, "total": 2}

    first = client_for(developer).get(url, {"limit": 1, "page": "abc"}).json()
    assert first["page"] == 1
    assert len(first["tickets"]) == 1


@pytest.mark.django_db
@pytest.mark.parametrize("param", ["assignee", "reporter"])
def test_ticket_list_rejects_non_numeric_user_filter(client_for, ticket, developer, param):
    response = client_for(developer).get(reverse("tracker:ticket-list-create"), {param: "abc"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user id"


@pytest.mark.django_db
def test_ticket_detail_includes_comments(client_for, ticket, member):
    CommentService.create(ticket_id=ticket.pk, author=member, content="Works on Firefox")

    body = client_for(member).get(reverse("tracker:ticket-detail", args=[ticket.pk])).json()
    assert [c["content"] for c in body["comments"]] == ["Works on Firefox"]
    assert member.pk in body["watchers"]


@pytest.mark.django_db
def test_update_ticket_assignee(client_for, ticket, developer, member):
    response = client_for(developer).patch(
        reverse("tracker:ticket-detail", args=[ticket.pk]), {"assignee_id": member.pk}, format="json"
    )
    assert response.status_code == 200
    assert response.json()["assignee"]["id"] == member.pk


@pytest.mark.django_db
def test_status_and_history_endpoints(client_for, ticket, developer):
    client = client_for(developer)
    response = client.put(reverse("tracker:ticket-status", args=[ticket.pk]), {"status": "Review"}, format="json")
    assert response.status_code == 200

    history = client.get(reverse("tracker:ticket-history", args=[ticket.pk])).json()
    assert [h["action"] for h in history] == ["created", "updated"]


@pytest.mark.django_db
def test_watch_and_unwatch_self(client_for, ticket, watcher):
    client = client_for(watcher)
    body = client.post(reverse("tracker:ticket-watcher-add", args=[ticket.pk]), {}, format="json").json()
    assert body["watchers"] == [watcher.pk]

    body = client.delete(reverse("tracker:ticket-watcher-remove", args=[ticket.pk, "me"])).json()
    assert body["watchers"] == []


@pytest.mark.django_db
def test_unwatch_with_non_numeric_user_is_a_bad_request(client_for, ticket, developer):
    response = client_for(developer).delete(reverse("tracker:ticket-watcher-remove", args=[ticket.pk, "abc"]))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user id"


@pytest.mark.django_db
def test_delete_ticket(client_for, ticket, developer):
    response = client_for(developer).delete(reverse("tracker:ticket-detail", args=[ticket.pk]))
    assert response.status_code == 204
    assert not Ticket.objects.exists()


# ====== Comments ======
@pytest.mark.django_db
def test_post_comment(client_for, ticket, member):
    response = client_for(member).post(
        reverse("tracker:comment-list-create", args=[ticket.pk]), {"content": "Looking into it"}, format="json"
    )
    assert response.status_code == 201
    assert response.json()["content"] == "Looking into it"


# ====== Activity ======
@pytest.mark.django_db
def test_activity_feed_shape(client_for, project, ticket, developer):
    response = client_for(developer).get(reverse("tracker:activity-project", args=[project.pk]), {"limit": 1})

    body = response.json()
    assert set(body) == {"activities", "pagination"}
    assert set(body["pagination"]) == {"page", "limit", "total", "pages"}
    assert len(body["activities"]) == 1


@pytest.mark.django_db
def test_entity_feed_rejects_unknown_type(client_for, developer):
    response = client_for(developer).get(reverse("tracker:activity-entity", args=["widget", "1"]))
    assert response.status_code == 400


@pytest.mark.django_db
def test_user_entity_feed_rejects_non_numeric_id(client_for, developer):
    response = client_for(developer).get(reverse("tracker:activity-entity", args=["user", "abc"]))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user id"


@pytest.mark.django_db
def test_activity_feed_caps_limit(settings, client_for, project, ticket, developer):
    settings.TRACKER = {"MAX_PAGE_SIZE": 1}
    body = client_for(developer).get(reverse("tracker:activity-project", args=[project.pk]), {"limit": 50}).json()
    assert body["pagination"]["limit"] == 1
    assert len(body["activities"]) == 1


@pytest.mark.django_db
def test_user_feed_of_stranger_is_forbidden(client_for, developer, outsider):
    response = client_for(outsider).get(reverse("tracker:activity-user", args=[developer.pk]))
    assert response.status_code == 403


# ====== Notifications ======
@pytest.mark.django_db
def test_notifications_flow(client_for, ticket, developer, member):
    TicketService.assign(ticket_id=ticket.pk, user=developer, assignee_id=member.pk)
    client = client_for(member)

    body = client.get(reverse("tracker:notification-list")).json()
    assert set(body) == {"notifications", "pagination"}
    assert body["notifications"][0]["type"] == "ticket_assigned"

    assert client.get(reverse("tracker:notification-unread-count")).json() == {"count": 1}

    note_id = body["notifications"][0]["id"]
    assert client_for(developer).put(reverse("tracker:notification-read", args=[note_id])).status_code == 403

    response = client.put(reverse("tracker:notification-read-all"))
    assert response.json()["updated"] == 1
    assert client.get(reverse("tracker:notification-unread-count")).json() == {"count": 0}

    assert client.delete(reverse("tracker:notification-detail", args=[note_id])).status_code == 204
    assert not Notification.objects.filter(recipient=member).exists()


# ====== Users ======
@pytest.mark.django_db
def test_user_search_requires_name(client_for, developer):
    response = client_for(developer).get(reverse("tracker:user-search"))
    assert response.status_code == 400
    assert response.json()["message"] == "Name query is required"


@pytest.mark.django_db
def test_me_endpoint(client_for, member):
    body = client_for(member).get(reverse("tracker:user-me")).json()
    assert body["username"] == "mia"
