# ============================================
# tracker/views/ticket.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.selectors.ticket import TicketSelector
from tracker.serializers.history import TicketHistoryOutputSerializer
from tracker.serializers.ticket import (
    AttachmentInputSerializer,
    TicketAssignSerializer,
    TicketCreateSerializer,
    TicketDetailOutputSerializer,
    TicketListOutputSerializer,
    TicketOutputSerializer,
    TicketStatusSerializer,
    TicketUpdateSerializer,
    WatcherSerializer,
)
from tracker.services.ticket import TicketService
from tracker.utils.pagination import TicketPagination
from tracker.views.utils import PAGE_PARAMS, q_str, std_errors

TicketPageSerializer = inline_serializer(
    name="TicketPage",
    fields={
        "tickets": TicketListOutputSerializer(many=True),
        "page": serializers.IntegerField(),
        "pages": serializers.IntegerField(),
        "total": serializers.IntegerField(),
    }
)


class TicketListCreateAPIView(APIView):
    """
    GET: List tickets in the caller's projects
    POST: Create a new ticket

    Query params (GET):
    - project: int (optional)
    - status / priority / type: string (optional)
    - assignee: 'me' | 'unassigned' | user id (optional)
    - reporter: 'me' | user id (optional)
    - search: string (optional)
    - sort_field, sort_order ('asc' | 'desc')
    - page, limit
    """

    @extend_schema(
        tags=["Tickets"],
        parameters=[
            q_str("project", "Project id"),
            q_str("status", "Status name"),
            q_str("priority", "Priority name"),
            q_str("type", "Type name"),
            q_str("assignee", "'me', 'unassigned' or a user id"),
            q_str("reporter", "'me' or a user id"),
            q_str("search", "Title / description / number contains"),
            q_str("sort_field", "Field to sort by"),
            q_str("sort_order", "'asc' or 'desc'"),
            *PAGE_PARAMS,
        ],
        responses={200: TicketPageSerializer, **std_errors()},
    )
    def get(self, request):
        params = request.query_params
        tickets = TicketSelector.get_tickets_list(
            request.user,
            project_id=params.get('project'),
            status=params.get('status'),
            priority=params.get('priority'),
            type=params.get('type'),
            assignee=params.get('assignee'),
            reporter=params.get('reporter'),
            search=params.get('search'),
            sort_field=params.get('sort_field'),
            sort_order=params.get('sort_order'),
        )

        paginator = TicketPagination()
        page = paginator.paginate_queryset(tickets, request, view=self)
        return paginator.get_paginated_response(TicketListOutputSerializer(page, many=True).data)

    @extend_schema(tags=["Tickets"], request=TicketCreateSerializer, responses={201: TicketOutputSerializer, **std_errors()})
    def post(self, request):
        serializer = TicketCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.create(reporter=request.user, **serializer.validated_data)
        return Response(TicketOutputSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketDetailAPIView(APIView):
    """
    GET: Ticket with its comments
    PUT/PATCH: Partial update of tracked fields
    DELETE: Delete ticket (project admin or reporter)
    """

    @extend_schema(tags=["Tickets"], responses={200: TicketDetailOutputSerializer, **std_errors()})
    def get(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_for_member(ticket_id, request.user)
        return Response(TicketDetailOutputSerializer(ticket).data)

    @extend_schema(tags=["Tickets"], request=TicketUpdateSerializer, responses={200: TicketOutputSerializer, **std_errors()})
    def put(self, request, ticket_id):
        serializer = TicketUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        if 'assignee_id' in data:
            data['assignee'] = data.pop('assignee_id')

        ticket = TicketService.update(ticket_id=ticket_id, user=request.user, **data)
        return Response(TicketOutputSerializer(ticket).data)

    patch = put

    @extend_schema(tags=["Tickets"], responses={204: OpenApiResponse(description="Deleted"), **std_errors()})
    def delete(self, request, ticket_id):
        TicketService.delete(ticket_id=ticket_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TicketAssignAPIView(APIView):
    """PUT: Assign ticket; null assignee_id unassigns"""

    @extend_schema(tags=["Tickets"], request=TicketAssignSerializer, responses={200: TicketOutputSerializer, **std_errors()})
    def put(self, request, ticket_id):
        serializer = TicketAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.assign(
            ticket_id=ticket_id,
            user=request.user,
            assignee_id=serializer.validated_data['assignee_id'],
        )
        return Response(TicketOutputSerializer(ticket).data)


class TicketStatusAPIView(APIView):
    """PUT: Move ticket to another status"""

    @extend_schema(tags=["Tickets"], request=TicketStatusSerializer, responses={200: TicketOutputSerializer, **std_errors()})
    def put(self, request, ticket_id):
        serializer = TicketStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.transition_status(
            ticket_id=ticket_id,
            user=request.user,
            status=serializer.validated_data['status'],
        )
        return Response(TicketOutputSerializer(ticket).data)


class TicketHistoryAPIView(APIView):
    """GET: History entries, oldest first"""

    @extend_schema(tags=["Tickets"], responses={200: TicketHistoryOutputSerializer(many=True), **std_errors()})
    def get(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_for_member(ticket_id, request.user)
        history = TicketSelector.get_history(ticket)
        return Response(TicketHistoryOutputSerializer(history, many=True).data)


class TicketWatcherListAPIView(APIView):
    """POST: Add a watcher (defaults to the caller)"""

    @extend_schema(tags=["Tickets"], request=WatcherSerializer, responses={200: TicketOutputSerializer, **std_errors()})
    def post(self, request, ticket_id):
        serializer = WatcherSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.add_watcher(
            ticket_id=ticket_id,
            user=request.user,
            watcher_id=serializer.validated_data.get('user_id'),
        )
        return Response(TicketOutputSerializer(ticket).data)


class TicketWatcherDetailAPIView(APIView):
    """DELETE: Remove a watcher; ``me`` means the caller"""

    @extend_schema(tags=["Tickets"], responses={200: TicketOutputSerializer, **std_errors()})
    def delete(self, request, ticket_id, user_id):
        ticket = TicketService.remove_watcher(ticket_id=ticket_id, user=request.user, watcher_id=user_id)
        return Response(TicketOutputSerializer(ticket).data)


class TicketAttachmentListAPIView(APIView):
    """POST: Attach file metadata"""

    @extend_schema(tags=["Tickets"], request=AttachmentInputSerializer, responses={200: TicketOutputSerializer, **std_errors()})
    def post(self, request, ticket_id):
        serializer = AttachmentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ticket = TicketService.add_attachment(
            ticket_id=ticket_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(TicketOutputSerializer(ticket).data)


class TicketAttachmentDetailAPIView(APIView):
    """DELETE: Remove attachment (uploader or project admin)"""

    @extend_schema(tags=["Tickets"], responses={200: TicketOutputSerializer, **std_errors()})
    def delete(self, request, ticket_id, attachment_id):
        ticket = TicketService.remove_attachment(
            ticket_id=ticket_id,
            user=request.user,
            attachment_id=attachment_id,
        )
        return Response(TicketOutputSerializer(ticket).data)
