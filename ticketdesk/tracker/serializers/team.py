# ============================================
# tracker/serializers/team.py
# ============================================
from rest_framework import serializers

from tracker.models import Team, TeamMember
from tracker.serializers.user import UserSummarySerializer


class TeamCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    avatar = serializers.CharField(max_length=500, required=False, allow_blank=True)


class TeamUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    avatar = serializers.CharField(max_length=500, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class TeamMemberOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = TeamMember
        fields = ['user', 'role', 'joined_at']


class TeamOutputSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    members = TeamMemberOutputSerializer(many=True, read_only=True)

    class Meta:
        model = Team
        fields = [
            'id', 'name', 'description', 'avatar', 'owner', 'members',
            'is_active', 'created_at', 'updated_at'
        ]
