# ============================================
# tracker/views/team.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.selectors.team import TeamSelector
from tracker.serializers.project import MemberAddSerializer, MemberRoleSerializer
from tracker.serializers.team import TeamCreateSerializer, TeamOutputSerializer, TeamUpdateSerializer
from tracker.services.team import TeamService
from tracker.views.utils import std_errors


class TeamListCreateAPIView(APIView):
    """
    GET: List the caller's teams
    POST: Create a new team
    """

    @extend_schema(tags=["Teams"], responses={200: TeamOutputSerializer(many=True)})
    def get(self, request):
        teams = TeamSelector.get_teams_for_user(request.user)
        return Response(TeamOutputSerializer(teams, many=True).data)

    @extend_schema(tags=["Teams"], request=TeamCreateSerializer, responses={201: TeamOutputSerializer, **std_errors()})
    def post(self, request):
        serializer = TeamCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.create_team(creator=request.user, **serializer.validated_data)
        return Response(TeamOutputSerializer(team).data, status=status.HTTP_201_CREATED)


class TeamDetailAPIView(APIView):
    """
    GET: Retrieve team (members)
    PUT/PATCH: Update team (team admins)
    DELETE: Delete team (owner)
    """

    @extend_schema(tags=["Teams"], responses={200: TeamOutputSerializer, **std_errors()})
    def get(self, request, team_id):
        team = TeamSelector.get_team_for_member(team_id, request.user)
        return Response(TeamOutputSerializer(team).data)

    @extend_schema(tags=["Teams"], request=TeamUpdateSerializer, responses={200: TeamOutputSerializer, **std_errors()})
    def put(self, request, team_id):
        team = TeamSelector.get_team_or_404(team_id)

        serializer = TeamUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.update_team(team=team, user=request.user, **serializer.validated_data)
        return Response(TeamOutputSerializer(team).data)

    patch = put

    @extend_schema(tags=["Teams"], responses={204: OpenApiResponse(description="Deleted"), **std_errors()})
    def delete(self, request, team_id):
        team = TeamSelector.get_team_or_404(team_id)
        TeamService.delete_team(team=team, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TeamMemberListAPIView(APIView):
    """POST: Add a member (team admins)"""

    @extend_schema(tags=["Teams"], request=MemberAddSerializer, responses={201: TeamOutputSerializer, **std_errors()})
    def post(self, request, team_id):
        team = TeamSelector.get_team_or_404(team_id)

        serializer = MemberAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.add_member(
            team=team,
            user=request.user,
            member_id=serializer.validated_data['user_id'],
            role=serializer.validated_data['role'],
        )
        return Response(TeamOutputSerializer(team).data, status=status.HTTP_201_CREATED)


class TeamMemberDetailAPIView(APIView):
    """
    PUT: Change a member's role (team admins)
    DELETE: Remove a member (team admins, or the member leaving)
    """

    @extend_schema(tags=["Teams"], request=MemberRoleSerializer, responses={200: TeamOutputSerializer, **std_errors()})
    def put(self, request, team_id, user_id):
        team = TeamSelector.get_team_or_404(team_id)

        serializer = MemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.update_member_role(
            team=team,
            user=request.user,
            member_id=user_id,
            role=serializer.validated_data['role'],
        )
        return Response(TeamOutputSerializer(team).data)

    @extend_schema(tags=["Teams"], responses={200: TeamOutputSerializer, **std_errors()})
    def delete(self, request, team_id, user_id):
        team = TeamSelector.get_team_or_404(team_id)
        team = TeamService.remove_member(team=team, user=request.user, member_id=user_id)
        return Response(TeamOutputSerializer(team).data)
