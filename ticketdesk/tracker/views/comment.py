# ============================================
# tracker/views/comment.py
# ============================================
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.selectors.comment import CommentSelector
from tracker.selectors.ticket import TicketSelector
from tracker.serializers.comment import (
    CommentAttachmentSerializer,
    CommentCreateSerializer,
    CommentOutputSerializer,
    CommentUpdateSerializer,
)
from tracker.services.comment import CommentService
from tracker.views.utils import std_errors


class CommentListCreateAPIView(APIView):
    """
    GET: List comments for a ticket, oldest first
    POST: Create a new comment

    Path params:
    - ticket_id: int
    """

    @extend_schema(tags=["Comments"], responses={200: CommentOutputSerializer(many=True), **std_errors()})
    def get(self, request, ticket_id):
        ticket = TicketSelector.get_ticket_for_member(ticket_id, request.user)
        comments = CommentSelector.get_comments_by_ticket(ticket.pk)
        return Response(CommentOutputSerializer(comments, many=True).data)

    @extend_schema(tags=["Comments"], request=CommentCreateSerializer, responses={201: CommentOutputSerializer, **std_errors()})
    def post(self, request, ticket_id):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = CommentService.create(
            ticket_id=ticket_id,
            author=request.user,
            **serializer.validated_data
        )
        return Response(CommentOutputSerializer(comment).data, status=status.HTTP_201_CREATED)


class CommentDetailAPIView(APIView):
    """
    GET: Retrieve comment
    PUT: Edit comment (author)
    DELETE: Delete comment (author or project admin)
    """

    @extend_schema(tags=["Comments"], responses={200: CommentOutputSerializer, **std_errors()})
    def get(self, request, comment_id):
        comment = CommentSelector.get_comment_for_member(comment_id, request.user)
        return Response(CommentOutputSerializer(comment).data)

    @extend_schema(tags=["Comments"], request=CommentUpdateSerializer, responses={200: CommentOutputSerializer, **std_errors()})
    def put(self, request, comment_id):
        serializer = CommentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = CommentService.edit(
            comment_id=comment_id,
            user=request.user,
            content=serializer.validated_data['content'],
        )
        return Response(CommentOutputSerializer(comment).data)

    @extend_schema(tags=["Comments"], responses={204: OpenApiResponse(description="Deleted"), **std_errors()})
    def delete(self, request, comment_id):
        CommentService.delete(comment_id=comment_id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CommentAttachmentListAPIView(APIView):
    """POST: Attach file metadata (author)"""

    @extend_schema(tags=["Comments"], request=CommentAttachmentSerializer, responses={200: CommentOutputSerializer, **std_errors()})
    def post(self, request, comment_id):
        serializer = CommentAttachmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = CommentService.add_attachment(
            comment_id=comment_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(CommentOutputSerializer(comment).data)


class CommentAttachmentDetailAPIView(APIView):
    """DELETE: Remove attachment (author)"""

    @extend_schema(tags=["Comments"], responses={200: CommentOutputSerializer, **std_errors()})
    def delete(self, request, comment_id, attachment_id):
        comment = CommentService.remove_attachment(
            comment_id=comment_id,
            user=request.user,
            attachment_id=attachment_id,
        )
        return Response(CommentOutputSerializer(comment).data)
