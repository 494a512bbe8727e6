# -*- coding: utf-8 -*-
from __future__ import annotations
from drf_spectacular.utils import extend_schema
from rest_framework.views import APIView

from tracker.selectors.activity import ActivitySelector
from tracker.serializers.activity import ActivitySerializer
from tracker.utils.pagination import ActivityPagination
from tracker.views.utils import PAGE_PARAMS, paged, std_errors

ActivityPageSerializer = paged("activities", ActivitySerializer)


class _ActivityFeedView(APIView):
    def page_response(self, queryset):
        paginator = ActivityPagination()
        page = paginator.paginate_queryset(queryset, self.request, view=self)
        return paginator.get_paginated_response(ActivitySerializer(page, many=True).data)


class UserActivityAPIView(_ActivityFeedView):
    # GET /api/activities/user/<user_id>/  (own feed, or users sharing a project/team)
    @extend_schema(tags=["Activity"], parameters=PAGE_PARAMS, responses={200: ActivityPageSerializer, **std_errors()})
    def get(self, request, user_id):
        return self.page_response(ActivitySelector.user_feed(request.user, user_id))


class ProjectActivityAPIView(_ActivityFeedView):
    # GET /api/activities/project/<project_id>/  (members only)
    @extend_schema(tags=["Activity"], parameters=PAGE_PARAMS, responses={200: ActivityPageSerializer, **std_errors()})
    def get(self, request, project_id):
        return self.page_response(ActivitySelector.project_feed(request.user, project_id))


class TeamActivityAPIView(_ActivityFeedView):
    # GET /api/activities/team/<team_id>/  (members only)
    @extend_schema(tags=["Activity"], parameters=PAGE_PARAMS, responses={200: ActivityPageSerializer, **std_errors()})
    def get(self, request, team_id):
        return self.page_response(ActivitySelector.team_feed(request.user, team_id))


class EntityActivityAPIView(_ActivityFeedView):
    # GET /api/activities/entity/<entity_type>/<entity_id>/  (ticket|project|team|user)
    @extend_schema(tags=["Activity"], parameters=PAGE_PARAMS, responses={200: ActivityPageSerializer, **std_errors()})
    def get(self, request, entity_type, entity_id):
        return self.page_response(ActivitySelector.entity_feed(request.user, entity_type, entity_id))
