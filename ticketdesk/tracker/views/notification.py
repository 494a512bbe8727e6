# -*- coding: utf-8 -*-
from __future__ import annotations
from drf_spectacular.utils import OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.serializers.notification import NotificationSerializer
from tracker.services import notification_service as svc
from tracker.utils.pagination import NotificationPagination
from tracker.views.utils import PAGE_PARAMS, paged, std_errors

NotificationPageSerializer = paged("notifications", NotificationSerializer)


class NotificationListAPIView(APIView):
    # GET /api/notifications/?page=&limit=
    @extend_schema(tags=["Notifications"], parameters=PAGE_PARAMS, responses={200: NotificationPageSerializer})
    def get(self, request):
        paginator = NotificationPagination()
        page = paginator.paginate_queryset(svc.list_for_user(user=request.user), request, view=self)
        return paginator.get_paginated_response(NotificationSerializer(page, many=True).data)

    # DELETE /api/notifications/  (all of the caller's)
    @extend_schema(tags=["Notifications"], responses={200: inline_serializer(
        name="NotificationsDeleted", fields={"message": serializers.CharField(), "deleted": serializers.IntegerField()},
    )})
    def delete(self, request):
        deleted = svc.delete_all(user=request.user)
        return Response({"message": "All notifications removed", "deleted": deleted})


class NotificationUnreadCountAPIView(APIView):
    @extend_schema(tags=["Notifications"], responses={200: inline_serializer(
        name="UnreadCount", fields={"count": serializers.IntegerField()},
    )})
    def get(self, request):
        return Response({"count": svc.unread_count(user=request.user)})


class NotificationReadAllAPIView(APIView):
    @extend_schema(tags=["Notifications"], request=None, responses={200: inline_serializer(
        name="NotificationsRead", fields={"message": serializers.CharField(), "updated": serializers.IntegerField()},
    )})
    def put(self, request):
        updated = svc.mark_all_as_read(user=request.user)
        return Response({"message": "All notifications marked as read", "updated": updated})


class NotificationReadAPIView(APIView):
    @extend_schema(tags=["Notifications"], request=None, responses={200: NotificationSerializer, **std_errors()})
    def put(self, request, notification_id):
        obj = svc.mark_as_read(notification_id=notification_id, user=request.user)
        return Response(NotificationSerializer(obj).data)


class NotificationDetailAPIView(APIView):
    @extend_schema(tags=["Notifications"], responses={204: OpenApiResponse(description="Deleted"), **std_errors()})
    def delete(self, request, notification_id):
        svc.delete_notification(notification_id=notification_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
