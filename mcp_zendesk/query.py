"""Zendesk Search API query construction."""

from collections.abc import Iterable

from .models import SearchTicketsByFilterParams

TICKET_TYPE_FILTER = "type:ticket"


class SearchQueryBuilder:
    """Ordered list of ``field:value`` fragments joined into one query string.

    Fragments are kept in the order they were added; empty values are skipped
    so callers can append optional filters unconditionally.
    """

    def __init__(self, *fragments: str) -> None:
        self._fragments: list[str] = [f for f in fragments if f]

    def add(self, fragment: str | None) -> "SearchQueryBuilder":
        """Append a raw fragment if it is non-empty."""
        if fragment:
            self._fragments.append(fragment)
        return self

    def add_filter(self, field: str, value: object, operator: str = ":") -> "SearchQueryBuilder":
        """Append ``<field><operator><value>`` if ``value`` is set."""
        if value is not None and value != "":
            self._fragments.append(f"{field}{operator}{value}")
        return self

    def add_phrase(self, text: str | None) -> "SearchQueryBuilder":
        """Append a quoted free-text phrase."""
        if text:
            self._fragments.append(f'"{text}"')
        return self

    def add_each(self, field: str, values: Iterable[str] | None) -> "SearchQueryBuilder":
        """Append one ``<field>:<value>`` fragment per value, in order."""
        for value in values or ():
            self.add_filter(field, value)
        return self

    @property
    def fragments(self) -> list[str]:
        """Fragments added so far."""
        return list(self._fragments)

    def build(self, separator: str = " ") -> str:
        """Join the fragments into the final query."""
        return separator.join(self._fragments)


def ensure_ticket_type(query: str) -> str:
    """Scope a raw query to tickets unless it already names a type."""
    if "type:" in query:
        return query
    return f"{TICKET_TYPE_FILTER} {query}"


def build_ticket_filter_query(params: SearchTicketsByFilterParams) -> str:
    """Build a ticket search query from structured filters.

    Order: type, free text, status, priority, created/updated ranges, tags.
    """
    status = params.status.value if params.status else None
    priority = params.priority.value if params.priority else None
    return (
        SearchQueryBuilder(TICKET_TYPE_FILTER)
        .add_phrase(params.text)
        .add_filter("status", status)
        .add_filter("priority", priority)
        .add_filter("created", params.created_after, ">")
        .add_filter("created", params.created_before, "<")
        .add_filter("updated", params.updated_after, ">")
        .add_filter("updated", params.updated_before, "<")
        .add_each("tags", params.tags)
        .build()
    )
