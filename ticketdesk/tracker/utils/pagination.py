# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Dict

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from tracker.conf import tracker_setting


class TrackerPagination(PageNumberPagination):
    """
    ?page=&limit= pagination.
    Response: {<results_key>: [...], pagination: {page, limit, total, pages}}
    """
    page_query_param = "page"
    page_size_query_param = "limit"   # ?limit=
    page_size_setting = "DEFAULT_PAGE_SIZE"
    results_key = "results"

    def __init__(self):
        # read per request so TRACKER overrides apply
        self.page_size = tracker_setting(self.page_size_setting)
        self.max_page_size = tracker_setting("MAX_PAGE_SIZE")

    def get_page_number(self, request, paginator):
        try:
            number = int(request.query_params.get(self.page_query_param, 1))
        except (TypeError, ValueError):
            return 1
        return max(number, 1)

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        # get_page clamps numbers past the end to the last page instead of raising NotFound
        self.page = paginator.get_page(self.get_page_number(request, paginator))
        return list(self.page)

    def get_pagination_meta(self) -> Dict[str, int]:
        paginator = self.page.paginator
        return {
            "page": self.page.number,
            "limit": paginator.per_page,
            "total": paginator.count,
            "pages": paginator.num_pages if paginator.count else 0,
        }

    def get_paginated_response(self, data):
        return Response({
            self.results_key: data,
            "pagination": self.get_pagination_meta(),
        })


class ActivityPagination(TrackerPagination):
    results_key = "activities"


class NotificationPagination(TrackerPagination):
    results_key = "notifications"


class TicketPagination(TrackerPagination):
    """Flat shape: {tickets, page, pages, total}"""
    page_size_setting = "TICKET_PAGE_SIZE"
    results_key = "tickets"

    def get_paginated_response(self, data):
        meta = self.get_pagination_meta()
        return Response({
            "tickets": data,
            "page": meta["page"],
            "pages": meta["pages"],
            "total": meta["total"],
        })
