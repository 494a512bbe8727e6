# ============================================
# tracker/views/user.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.exceptions import ValidationError
from tracker.selectors.user import UserSelector
from tracker.serializers.user import (
    UserOutputSerializer,
    UserProfileUpdateSerializer,
    UserRoleSerializer,
    UserSummarySerializer,
)
from tracker.services.user import UserService
from tracker.views.utils import q_str, std_errors


class UserMeAPIView(APIView):
    """
    GET: Own profile
    PUT: Update own profile
    """

    @extend_schema(tags=["Users"], responses={200: UserOutputSerializer})
    def get(self, request):
        return Response(UserOutputSerializer(request.user).data)

    @extend_schema(tags=["Users"], request=UserProfileUpdateSerializer, responses={200: UserOutputSerializer, **std_errors()})
    def put(self, request):
        serializer = UserProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = UserService.update_profile(user=request.user, **serializer.validated_data)
        return Response(UserOutputSerializer(user).data)


class UserSearchAPIView(APIView):
    """
    GET: Search users by name

    Query params:
    - name: string (required)
    - project: int (optional, only members of this project)
    """

    @extend_schema(
        tags=["Users"],
        parameters=[q_str("name", "Part of the user's name", required=True), q_str("project", "Project id")],
        responses={200: UserSummarySerializer(many=True), **std_errors()},
    )
    def get(self, request):
        name = (request.query_params.get('name') or '').strip()
        if not name:
            raise ValidationError("Name query is required")

        users = UserSelector.search_users(name, request.query_params.get('project'))
        return Response(UserSummarySerializer(users[:20], many=True).data)


class UserRoleAPIView(APIView):
    """PUT: Change a user's global role (admins)"""

    @extend_schema(tags=["Users"], request=UserRoleSerializer, responses={200: UserOutputSerializer, **std_errors()})
    def put(self, request, user_id):
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = UserService.change_role(
            actor=request.user,
            user_id=user_id,
            role=serializer.validated_data['role'],
        )
        return Response(UserOutputSerializer(user).data)


class UserDetailAPIView(APIView):
    """DELETE: Delete a user (admins, never yourself)"""

    @extend_schema(tags=["Users"], responses={204: OpenApiResponse(description="Deleted"), **std_errors()})
    def delete(self, request, user_id):
        UserService.delete_user(actor=request.user, user_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
