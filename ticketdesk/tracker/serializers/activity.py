# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers

from tracker.models import Activity
from tracker.serializers.user import UserSummarySerializer


class ActivitySerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    project_key = serializers.CharField(source="project.key", read_only=True, default=None)
    team_name = serializers.CharField(source="team.name", read_only=True, default=None)

    class Meta:
        model = Activity
        fields = [
            "id", "user", "action", "entity_type", "entity_id", "details",
            "project", "project_key", "team", "team_name", "created_at",
        ]
        read_only_fields = fields
