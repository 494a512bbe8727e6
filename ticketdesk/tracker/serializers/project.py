# ============================================
# tracker/serializers/project.py
# ============================================
from rest_framework import serializers

from tracker.models import MemberRole, Project, ProjectMember
from tracker.serializers.user import UserSummarySerializer


class ConfigEntrySerializer(serializers.Serializer):
    """One ticket type / status / priority entry"""
    name = serializers.CharField(max_length=50)
    color = serializers.CharField(max_length=20, required=False, allow_blank=True)
    order = serializers.IntegerField(required=False, allow_null=True)
    icon = serializers.CharField(max_length=50, required=False, allow_blank=True)


class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    key = serializers.CharField(max_length=10, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    team_id = serializers.IntegerField(required=False, allow_null=True)
    category = serializers.ChoiceField(choices=Project.Category.choices, required=False)
    start_date = serializers.DateTimeField(required=False, allow_null=True)
    end_date = serializers.DateTimeField(required=False, allow_null=True)
    ticket_types = ConfigEntrySerializer(many=True, required=False)
    ticket_statuses = ConfigEntrySerializer(many=True, required=False)
    ticket_priorities = ConfigEntrySerializer(many=True, required=False)


class ProjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Project.Category.choices, required=False)
    status = serializers.ChoiceField(choices=Project.Status.choices, required=False)
    start_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False, allow_null=True)


class MemberAddSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    role = serializers.ChoiceField(choices=MemberRole.choices, default=MemberRole.DEVELOPER)


class MemberRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=MemberRole.choices)


class TicketTypesSerializer(serializers.Serializer):
    ticket_types = ConfigEntrySerializer(many=True, allow_empty=False)


class TicketStatusesSerializer(serializers.Serializer):
    ticket_statuses = ConfigEntrySerializer(many=True, allow_empty=False)


class TicketPrioritiesSerializer(serializers.Serializer):
    ticket_priorities = ConfigEntrySerializer(many=True, allow_empty=False)


class ProjectMemberOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = ProjectMember
        fields = ['user', 'role', 'joined_at']


class ProjectOutputSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    members = ProjectMemberOutputSerializer(many=True, read_only=True)
    team_name = serializers.CharField(source='team.name', read_only=True, default=None)

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'key', 'description', 'owner', 'team', 'team_name',
            'status', 'category', 'start_date', 'end_date', 'members',
            'ticket_types', 'ticket_statuses', 'ticket_priorities',
            'created_at', 'updated_at'
        ]


class ProjectListOutputSerializer(serializers.ModelSerializer):
    """Lighter serializer for list views"""
    owner = UserSummarySerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'key', 'description', 'owner', 'team',
            'status', 'category', 'member_count', 'created_at'
        ]

    def get_member_count(self, obj):
        return len(obj.members.all())
