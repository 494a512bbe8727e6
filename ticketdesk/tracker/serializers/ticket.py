# ============================================
# tracker/serializers/ticket.py
# ============================================
from rest_framework import serializers

from tracker.models import Ticket
from tracker.serializers.comment import CommentOutputSerializer
from tracker.serializers.user import UserSummarySerializer


class TicketCreateSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    # checked against the project's own lists by the service
    type = serializers.CharField(max_length=50)
    status = serializers.CharField(max_length=50)
    priority = serializers.CharField(max_length=50)
    assignee_id = serializers.IntegerField(required=False, allow_null=True)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    estimated_time = serializers.FloatField(required=False, allow_null=True, min_value=0)
    labels = serializers.ListField(child=serializers.CharField(max_length=50), required=False)


class TicketUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    type = serializers.CharField(max_length=50, required=False)
    status = serializers.CharField(max_length=50, required=False)
    priority = serializers.CharField(max_length=50, required=False)
    assignee_id = serializers.IntegerField(required=False, allow_null=True)
    due_date = serializers.DateTimeField(required=False, allow_null=True)
    estimated_time = serializers.FloatField(required=False, allow_null=True, min_value=0)
    time_spent = serializers.FloatField(required=False, allow_null=True, min_value=0)
    labels = serializers.ListField(child=serializers.CharField(max_length=50), required=False)


class TicketAssignSerializer(serializers.Serializer):
    assignee_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class TicketStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=50)


class WatcherSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(required=False, allow_null=True)


class AttachmentInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    url = serializers.CharField(max_length=1000)
    size = serializers.IntegerField(required=False, min_value=0, default=0)
    type = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class ProjectRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    key = serializers.CharField()


class TicketOutputSerializer(serializers.ModelSerializer):
    project = ProjectRefSerializer(read_only=True)
    reporter = UserSummarySerializer(read_only=True)
    assignee = UserSummarySerializer(read_only=True)
    watchers = serializers.SerializerMethodField()

    class Meta:
        model = Ticket
        fields = [
            'id', 'ticket_number', 'title', 'description', 'project',
            'type', 'status', 'priority', 'reporter', 'assignee',
            'due_date', 'estimated_time', 'time_spent', 'labels',
            'attachments', 'watchers', 'created_at', 'updated_at'
        ]

    def get_watchers(self, obj):
        return obj.watcher_ids()


class TicketDetailOutputSerializer(TicketOutputSerializer):
    comments = serializers.SerializerMethodField()

    class Meta(TicketOutputSerializer.Meta):
        fields = TicketOutputSerializer.Meta.fields + ['comments']

    def get_comments(self, obj):
        comments = obj.comments.select_related('author').order_by('created_at', 'id')
        return CommentOutputSerializer(comments, many=True).data


class TicketListOutputSerializer(serializers.ModelSerializer):
    """Lighter serializer for list views"""
    project = ProjectRefSerializer(read_only=True)
    reporter = UserSummarySerializer(read_only=True)
    assignee = UserSummarySerializer(read_only=True)

    class Meta:
        model = Ticket
        fields = [
            'id', 'ticket_number', 'title', 'project', 'type', 'status',
            'priority', 'reporter', 'assignee', 'due_date', 'created_at'
        ]
