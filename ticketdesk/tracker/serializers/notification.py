# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers

from tracker.models import Notification
from tracker.serializers.user import UserSummarySerializer


class NotificationSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id", "recipient", "sender", "type", "title", "message",
            "read", "read_at", "entity_type", "entity_id", "link",
            "created_at",
        ]
        read_only_fields = fields
