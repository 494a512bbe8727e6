# ============================================
# tracker/serializers/comment.py
# ============================================
from rest_framework import serializers

from tracker.models import Comment
from tracker.serializers.user import UserSummarySerializer


class CommentAttachmentSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    url = serializers.CharField(max_length=1000)
    size = serializers.IntegerField(required=False, min_value=0, default=0)
    type = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField()
    attachments = CommentAttachmentSerializer(many=True, required=False)


class CommentUpdateSerializer(serializers.Serializer):
    content = serializers.CharField()


class CommentOutputSerializer(serializers.ModelSerializer):
    author = UserSummarySerializer(read_only=True)

    class Meta:
        model = Comment
        fields = [
            'id', 'ticket', 'author', 'content', 'attachments',
            'mention_handles', 'is_edited', 'edit_history',
            'created_at', 'updated_at'
        ]
