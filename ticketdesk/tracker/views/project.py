# ============================================
# tracker/views/project.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.exceptions import AuthorizationError
from tracker.models import User
from tracker.selectors.project import ProjectSelector
from tracker.serializers.project import (
    MemberAddSerializer,
    MemberRoleSerializer,
    ProjectCreateSerializer,
    ProjectListOutputSerializer,
    ProjectOutputSerializer,
    ProjectUpdateSerializer,
    TicketPrioritiesSerializer,
    TicketStatusesSerializer,
    TicketTypesSerializer,
)
from tracker.services.project import ProjectService
from tracker.utils import config_registry as registry
from tracker.views.utils import std_errors


def _project_for_viewer(project_id, user):
    """Members see a project; global admins see every project"""
    project = ProjectSelector.get_project_or_404(project_id)
    if user.role != User.Role.ADMIN and not project.is_member(user):
        raise AuthorizationError("Not authorized to access this project")
    return project


class ProjectListCreateAPIView(APIView):
    """
    GET: List projects visible to the caller
    POST: Create a new project

    Request body (POST):
    - name: string (required)
    - key: string (optional, derived from name)
    - description, team_id, category, start_date, end_date (optional)
    - ticket_types / ticket_statuses / ticket_priorities: [{name, color, order|icon}] (optional)
    """

    @extend_schema(tags=["Projects"], responses={200: ProjectListOutputSerializer(many=True)})
    def get(self, request):
        projects = ProjectSelector.get_projects_list(request.user)
        serializer = ProjectListOutputSerializer(projects, many=True)
        return Response(serializer.data)

    @extend_schema(
        tags=["Projects"],
        request=ProjectCreateSerializer,
        responses={201: ProjectOutputSerializer, **std_errors()},
    )
    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.create_project(
            creator=request.user,
            **serializer.validated_data
        )

        output_serializer = ProjectOutputSerializer(project)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


class ProjectDetailAPIView(APIView):
    """
    GET: Retrieve project details
    PUT/PATCH: Update project (project admins)
    DELETE: Delete project (owner)
    """

    @extend_schema(tags=["Projects"], responses={200: ProjectOutputSerializer, **std_errors()})
    def get(self, request, project_id):
        project = _project_for_viewer(project_id, request.user)
        return Response(ProjectOutputSerializer(project).data)

    @extend_schema(
        tags=["Projects"],
        request=ProjectUpdateSerializer,
        responses={200: ProjectOutputSerializer, **std_errors()},
    )
    def put(self, request, project_id):
        project = ProjectSelector.get_project_or_404(project_id)

        serializer = ProjectUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.update_project(
            project=project,
            user=request.user,
            **serializer.validated_data
        )
        return Response(ProjectOutputSerializer(project).data)

    patch = put

    @extend_schema(tags=["Projects"], responses={204: OpenApiResponse(description="Deleted"), **std_errors()})
    def delete(self, request, project_id):
        project = ProjectSelector.get_project_or_404(project_id)
        ProjectService.delete_project(project=project, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProjectMemberListAPIView(APIView):
    """POST: Add a member (project admins)"""

    @extend_schema(
        tags=["Projects"],
        request=MemberAddSerializer,
        responses={201: ProjectOutputSerializer, **std_errors()},
    )
    def post(self, request, project_id):
        project = ProjectSelector.get_project_or_404(project_id)

        serializer = MemberAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.add_member(
            project=project,
            user=request.user,
            member_id=serializer.validated_data['user_id'],
            role=serializer.validated_data['role'],
        )
        return Response(ProjectOutputSerializer(project).data, status=status.HTTP_201_CREATED)


class ProjectMemberDetailAPIView(APIView):
    """
    PUT: Change a member's role (project admins)
    DELETE: Remove a member (project admins, or the member leaving)
    """

    @extend_schema(
        tags=["Projects"],
        request=MemberRoleSerializer,
        responses={200: ProjectOutputSerializer, **std_errors()},
    )
    def put(self, request, project_id, user_id):
        project = ProjectSelector.get_project_or_404(project_id)

        serializer = MemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.update_member_role(
            project=project,
            user=request.user,
            member_id=user_id,
            role=serializer.validated_data['role'],
        )
        return Response(ProjectOutputSerializer(project).data)

    @extend_schema(tags=["Projects"], responses={200: ProjectOutputSerializer, **std_errors()})
    def delete(self, request, project_id, user_id):
        project = ProjectSelector.get_project_or_404(project_id)
        project = ProjectService.remove_member(project=project, user=request.user, member_id=user_id)
        return Response(ProjectOutputSerializer(project).data)


class ProjectConfigAPIView(APIView):
    """PUT: Replace one configuration list (project admins)"""
    kind = None
    input_serializer = None

    def put(self, request, project_id):
        project = ProjectSelector.get_project_or_404(project_id)

        serializer = self.input_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.update_ticket_config(
            project=project,
            user=request.user,
            kind=self.kind,
            entries=serializer.validated_data[registry.FIELD_BY_KIND[self.kind]],
        )
        return Response(ProjectOutputSerializer(project).data)


@extend_schema_view(put=extend_schema(
    tags=["Projects"], request=TicketTypesSerializer, responses={200: ProjectOutputSerializer, **std_errors()},
))
class ProjectTicketTypesAPIView(ProjectConfigAPIView):
    kind = registry.TYPE
    input_serializer = TicketTypesSerializer


@extend_schema_view(put=extend_schema(
    tags=["Projects"], request=TicketStatusesSerializer, responses={200: ProjectOutputSerializer, **std_errors()},
))
class ProjectTicketStatusesAPIView(ProjectConfigAPIView):
    kind = registry.STATUS
    input_serializer = TicketStatusesSerializer


@extend_schema_view(put=extend_schema(
    tags=["Projects"], request=TicketPrioritiesSerializer, responses={200: ProjectOutputSerializer, **std_errors()},
))
class ProjectTicketPrioritiesAPIView(ProjectConfigAPIView):
    kind = registry.PRIORITY
    input_serializer = TicketPrioritiesSerializer
