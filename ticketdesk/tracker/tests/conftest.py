import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from tracker.models import MemberRole
from tracker.services.project import ProjectService
from tracker.services.ticket import TicketService

User = get_user_model()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username="alice", password="pass", name="Alice Admin", role=User.Role.ADMIN)


@pytest.fixture
def developer(db):
    return User.objects.create_user(username="dave", password="pass", name="Dave Dev", role=User.Role.DEVELOPER)


@pytest.fixture
def member(db):
    return User.objects.create_user(username="mia", password="pass", name="Mia Member")


@pytest.fixture
def watcher(db):
    return User.objects.create_user(username="walt", password="pass", name="Walt Watcher")


@pytest.fixture
def outsider(db):
    return User.objects.create_user(username="otto", password="pass", name="Otto Outsider")


@pytest.fixture
def project(admin_user, developer, member, watcher):
    # admin_user owns it; developer, member and watcher are plain members
    project = ProjectService.create_project(name="Customer Portal", creator=admin_user)
    project.add_member(developer, MemberRole.DEVELOPER)
    project.add_member(member, MemberRole.DEVELOPER)
    project.add_member(watcher, MemberRole.SUBMITTER)
    return project


@pytest.fixture
def ticket(project, developer):
    return TicketService.create(
        project_id=project.pk,
        reporter=developer,
        title="Login button does nothing",
        type="Bug",
        status="To Do",
        priority="High",
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _make(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _make
