import pytest
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from tracker.utils import config_registry as registry
from tracker.utils.keys import derive_project_key
from tracker.utils.mentions import parse_mentions
from tracker.utils.pagination import TicketPagination, TrackerPagination


def test_default_entries_are_fresh_copies():
    first = registry.default_entries(registry.STATUS)
    first[0]["name"] = "Changed"
    assert registry.default_entries(registry.STATUS)[0]["name"] == "To Do"


def test_default_lists_have_four_entries_each():
    assert registry.entry_names(registry.default_entries(registry.TYPE)) == ["Bug", "Feature", "Task", "Epic"]
    assert registry.entry_names(registry.default_entries(registry.STATUS)) == ["To Do", "In Progress", "Review", "Done"]
    assert registry.entry_names(registry.default_entries(registry.PRIORITY)) == ["Low", "Medium", "High", "Critical"]


def test_normalize_fills_order_and_icon():
    statuses = registry.normalize_entries(registry.STATUS, [{"name": "Open"}, {"name": "Closed", "order": 9}])
    assert statuses == [
        {"name": "Open", "color": registry.DEFAULT_COLOR, "order": 0},
        {"name": "Closed", "color": registry.DEFAULT_COLOR, "order": 9},
    ]

    types = registry.normalize_entries(registry.TYPE, [{"name": "Spike", "color": "#000"}])
    assert types == [{"name": "Spike", "color": "#000", "icon": "task"}]


@pytest.mark.parametrize("entries", [
    [{"name": ""}],
    [{"color": "#fff"}],
    [{"name": "Open"}, {"name": "Open"}],
])
def test_normalize_rejects_bad_entries(entries):
    with pytest.raises(ValueError):
        registry.normalize_entries(registry.STATUS, entries)


def test_is_valid_matches_entry_name_case_sensitively():
    statuses = registry.default_entries(registry.STATUS)
    assert registry.is_valid(statuses, "In Progress")
    assert not registry.is_valid(statuses, "in progress")
    assert not registry.is_valid(statuses, "Blocked")
    assert not registry.is_valid(statuses, None)
    # a bare string list is not a registry
    assert not registry.is_valid(statuses, {"name": "To Do"})


@pytest.mark.parametrize("name,expected", [
    ("Customer Portal", "CP"),
    ("Portal", "PO"),
    ("A", "AX"),
    ("mobile app backend", "MAB"),
    ("One Two Three Four Five Six Seven Eight Nine Ten Eleven", "OTTFFSSENT"),
    ("  --  ", "XX"),
])
def test_derive_project_key(name, expected):
    assert derive_project_key(name) == expected


def test_parse_mentions_keeps_order_and_drops_duplicates():
    assert parse_mentions("ping @mia and @dave, again @mia") == ["mia", "dave"]
    assert parse_mentions("no mentions here") == []
    assert parse_mentions(None) == []


def _paginate(pagination_cls, items, **query):
    request = Request(APIRequestFactory().get("/", query))
    paginator = pagination_cls()
    page = paginator.paginate_queryset(items, request)
    return page, paginator.get_paginated_response(page).data


@pytest.mark.parametrize(
    "query, page_items, meta",
    [
        ({}, list(range(20)), {"page": 1, "limit": 20, "total": 45, "pages": 3}),
        ({"page": "3", "limit": "5"}, [10, 11, 12, 13, 14], {"page": 3, "limit": 5, "total": 45, "pages": 9}),
        ({"page": "-1", "limit": "abc"}, list(range(20)), {"page": 1, "limit": 20, "total": 45, "pages": 3}),
        ({"page": "abc", "limit": "0"}, list(range(20)), {"page": 1, "limit": 20, "total": 45, "pages": 3}),
        ({"page": "99", "limit": "20"}, list(range(40, 45)), {"page": 3, "limit": 20, "total": 45, "pages": 3}),
        ({"limit": "1000"}, list(range(45)), {"page": 1, "limit": 50, "total": 45, "pages": 1}),
    ],
)
def test_pagination_falls_back_on_bad_input(settings, query, page_items, meta):
    settings.TRACKER = {"DEFAULT_PAGE_SIZE": 20, "MAX_PAGE_SIZE": 50}
    page, body = _paginate(TrackerPagination, list(range(45)), **query)
    assert page == page_items
    assert body == {"results": page_items, "pagination": meta}


def test_empty_result_reports_zero_pages():
    page, body = _paginate(TrackerPagination, [])
    assert page == []
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 0, "pages": 0}


def test_ticket_pagination_uses_flat_shape(settings):
    settings.TRACKER = {"TICKET_PAGE_SIZE": 4}
    _, body = _paginate(TicketPagination, list(range(10)), page="2")
    assert body == {"tickets": [4, 5, 6, 7], "page": 2, "pages": 3, "total": 10}
