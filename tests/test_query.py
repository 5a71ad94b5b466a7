"""Tests for search query construction."""

import pytest

from mcp_zendesk.models import SearchTicketsByFilterParams
from mcp_zendesk.query import SearchQueryBuilder, build_ticket_filter_query, ensure_ticket_type


class TestSearchQueryBuilder:
    def test_skips_empty_values(self) -> None:
        query = SearchQueryBuilder("type:ticket").add(None).add("").add_filter("status", None).add_phrase("")

        assert query.build() == "type:ticket"

    def test_keeps_insertion_order(self) -> None:
        builder = SearchQueryBuilder().add_filter("priority", "low").add_phrase("refund please").add("assignee:me")

        assert builder.fragments == ["priority:low", '"refund please"', "assignee:me"]
        assert builder.build() == 'priority:low "refund please" assignee:me'

    def test_operator(self) -> None:
        assert SearchQueryBuilder().add_filter("created", "2025-01-01", ">").build() == "created>2025-01-01"

    def test_fragments_is_a_copy(self) -> None:
        builder = SearchQueryBuilder("a")
        builder.fragments.append("b")

        assert builder.build() == "a"


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("webhook", "type:ticket webhook"),
        ("status:open priority:high", "type:ticket status:open priority:high"),
        ("type:ticket status:open", "type:ticket status:open"),
        ("type:user email:jane@example.com", "type:user email:jane@example.com"),
    ],
)
def test_ensure_ticket_type(query: str, expected: str) -> None:
    assert ensure_ticket_type(query) == expected


class TestBuildTicketFilterQuery:
    def test_type_only_when_no_filters(self) -> None:
        assert build_ticket_filter_query(SearchTicketsByFilterParams()) == "type:ticket"

    def test_status_priority_and_tags(self) -> None:
        params = SearchTicketsByFilterParams(status="open", priority="high", tags=["api", "urgent"])

        assert build_ticket_filter_query(params) == "type:ticket status:open priority:high tags:api tags:urgent"

    def test_full_filter_order(self) -> None:
        params = SearchTicketsByFilterParams(
            tags=["billing"],
            updated_before="2025-03-01",
            updated_after="2025-02-01",
            created_before="2025-01-31",
            created_after="2025-01-01",
            priority="urgent",
            status="pending",
            text="card declined",
        )

        assert build_ticket_filter_query(params) == (
            'type:ticket "card declined" status:pending priority:urgent '
            "created>2025-01-01 created<2025-01-31 updated>2025-02-01 updated<2025-03-01 tags:billing"
        )

    def test_sort_and_paging_not_in_query(self) -> None:
        params = SearchTicketsByFilterParams(status="new", sort_by="created_at", sort_order="asc", page=2, per_page=5)

        assert build_ticket_filter_query(params) == "type:ticket status:new"
        assert params.search_options() == {"sort_by": "created_at", "sort_order": "asc", "page": 2, "per_page": 5}
