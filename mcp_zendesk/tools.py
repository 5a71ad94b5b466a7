"""Zendesk tool adapters.

Every tool is a :class:`ToolOperation`: a pydantic input model plus a
handler that makes exactly one :class:`ZendeskClient` call and wraps the
result in a ``CallToolResult`` envelope. CRUD tools for the standard
resources are generated from the :data:`RESOURCES` table.
"""

import functools
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mcp.types import CallToolResult, TextContent, ToolAnnotations
from pydantic import BaseModel

from .client import ZendeskClient, ZendeskConfigError, ZendeskError
from .models import (
    ArticleCreate,
    ArticleUpdate,
    AutomationCreate,
    AutomationUpdate,
    EmptyParams,
    GroupCreate,
    GroupUpdate,
    ListParams,
    MacroCreate,
    MacroUpdate,
    OrganizationCreate,
    OrganizationUpdate,
    ResourceIdParams,
    ResourcePayload,
    SearchParams,
    SearchTicketsByFilterParams,
    SearchTicketsParams,
    SortedListParams,
    TicketCreate,
    TicketUpdate,
    TriggerCreate,
    TriggerUpdate,
    UserCreate,
    UserListParams,
    UserUpdate,
    ViewCreate,
    ViewUpdate,
)
from .query import build_ticket_filter_query, ensure_ticket_type

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW_LENGTH = 100

Handler = Callable[[Any], CallToolResult]


# ==================== Result envelope ====================


def text_result(text: str) -> CallToolResult:
    """Successful single-text envelope."""
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(text: str) -> CallToolResult:
    """Failed single-text envelope."""
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


def _pretty(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def reports_errors(context: str) -> Callable[[Handler], Handler]:
    """Convert any :class:`ZendeskError` raised by a handler into an error envelope.

    Args:
        context: What was being attempted, e.g. ``"listing tickets"``
    """

    def decorator(handler: Handler) -> Handler:
        @functools.wraps(handler)
        def wrapper(params: Any) -> CallToolResult:
            try:
                return handler(params)
            except ZendeskError as e:
                logger.warning("Error %s: %s", context, e)
                return error_result(f"Error {context}: {e}")

        return wrapper

    return decorator


# ==================== Tool annotations ====================


class OperationKind(str, Enum):
    """How a tool affects Zendesk data; selects its MCP behaviour hints."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# (readOnlyHint, destructiveHint, idempotentHint) per kind
_HINTS: dict[OperationKind, tuple[bool, bool, bool]] = {
    OperationKind.READ: (True, False, True),
    OperationKind.CREATE: (False, False, False),
    OperationKind.UPDATE: (False, False, True),
    OperationKind.DELETE: (False, True, False),
}


def tool_annotations(title: str, kind: OperationKind = OperationKind.READ) -> ToolAnnotations:
    """Build the annotations of a Zendesk tool. Every tool talks to Zendesk, so all are open-world."""
    read_only, destructive, idempotent = _HINTS[kind]
    return ToolAnnotations(
        title=title,
        readOnlyHint=read_only,
        destructiveHint=destructive,
        idempotentHint=idempotent,
        openWorldHint=True,
    )


# ==================== Operation descriptor ====================


@dataclass(frozen=True)
class ToolOperation:
    """A named tool: input schema, handler and MCP annotations."""

    name: str
    description: str
    params_model: type[BaseModel]
    handler: Handler
    annotations: ToolAnnotations

    @property
    def title(self) -> str:
        """Display title, falling back to the tool name."""
        return self.annotations.title or self.name

    def invoke(self, arguments: dict[str, Any]) -> CallToolResult:
        """Validate raw arguments and run the handler.

        Arguments passed as None count as omitted.

        Raises:
            pydantic.ValidationError: If the arguments do not match the schema
        """
        provided = {k: v for k, v in arguments.items() if v is not None}
        params = self.params_model.model_validate(provided)
        return self.handler(params)


# ==================== Resource table ====================


def _default_create(client: ZendeskClient, definition: "ResourceDefinition", params: ResourcePayload) -> Any:
    return client.create_resource(definition.path, definition.name, params.to_body())


def _create_article(client: ZendeskClient, _definition: "ResourceDefinition", params: ResourcePayload) -> Any:
    return client.create_article(params.section_id, params.to_body())  # type: ignore[attr-defined]


@dataclass(frozen=True)
class ResourceDefinition:
    """How one Zendesk resource collection maps onto five CRUD tools.

    Attributes:
        name: Singular name; also the JSON wrapper key and the tool suffix
        plural: Plural name used by the list tool and its error message
        path: Collection path below ``/api/v2``
        title: Display name used in titles and confirmation messages
        label: Noun used in tool descriptions
        list_params: Input model for the list tool
        create_params: Input model for the create tool
        update_params: Input model for the update tool
        create: Client call used by the create tool
    """

    name: str
    plural: str
    path: str
    title: str
    label: str
    list_params: type[ListParams]
    create_params: type[ResourcePayload]
    update_params: type[ResourcePayload]
    create: Callable[[ZendeskClient, "ResourceDefinition", ResourcePayload], Any] = _default_create

    @property
    def title_plural(self) -> str:
        """Plural display name, e.g. ``Tickets``."""
        return f"{self.title}s"

    @property
    def label_plural(self) -> str:
        """Plural noun for descriptions."""
        return f"{self.label}s"

    @property
    def article(self) -> str:
        """Indefinite article for ``label``."""
        return "an" if self.label[0].lower() in "aeiou" else "a"


TICKETS = ResourceDefinition(
    name="ticket",
    plural="tickets",
    path="/tickets",
    title="Ticket",
    label="ticket",
    list_params=SortedListParams,
    create_params=TicketCreate,
    update_params=TicketUpdate,
)
USERS = ResourceDefinition(
    name="user",
    plural="users",
    path="/users",
    title="User",
    label="user",
    list_params=UserListParams,
    create_params=UserCreate,
    update_params=UserUpdate,
)
ORGANIZATIONS = ResourceDefinition(
    name="organization",
    plural="organizations",
    path="/organizations",
    title="Organization",
    label="organization",
    list_params=ListParams,
    create_params=OrganizationCreate,
    update_params=OrganizationUpdate,
)
GROUPS = ResourceDefinition(
    name="group",
    plural="groups",
    path="/groups",
    title="Group",
    label="agent group",
    list_params=ListParams,
    create_params=GroupCreate,
    update_params=GroupUpdate,
)
MACROS = ResourceDefinition(
    name="macro",
    plural="macros",
    path="/macros",
    title="Macro",
    label="macro",
    list_params=ListParams,
    create_params=MacroCreate,
    update_params=MacroUpdate,
)
VIEWS = ResourceDefinition(
    name="view",
    plural="views",
    path="/views",
    title="View",
    label="view",
    list_params=ListParams,
    create_params=ViewCreate,
    update_params=ViewUpdate,
)
TRIGGERS = ResourceDefinition(
    name="trigger",
    plural="triggers",
    path="/triggers",
    title="Trigger",
    label="trigger",
    list_params=ListParams,
    create_params=TriggerCreate,
    update_params=TriggerUpdate,
)
AUTOMATIONS = ResourceDefinition(
    name="automation",
    plural="automations",
    path="/automations",
    title="Automation",
    label="automation",
    list_params=ListParams,
    create_params=AutomationCreate,
    update_params=AutomationUpdate,
)
ARTICLES = ResourceDefinition(
    name="article",
    plural="articles",
    path="/help_center/articles",
    title="Article",
    label="Help Center article",
    list_params=SortedListParams,
    create_params=ArticleCreate,
    update_params=ArticleUpdate,
    create=_create_article,
)

RESOURCES: dict[str, ResourceDefinition] = {
    d.plural: d for d in (TICKETS, USERS, ORGANIZATIONS, GROUPS, MACROS, VIEWS, TRIGGERS, AUTOMATIONS, ARTICLES)
}


def resource_operations(definition: ResourceDefinition, client: ZendeskClient) -> list[ToolOperation]:
    """Generate the list/get/create/update/delete tools for one resource."""
    d = definition

    @reports_errors(f"listing {d.plural}")
    def list_items(params: ListParams) -> CallToolResult:
        result = client.list_resource(d.path, params.model_dump(exclude_none=True, mode="json"))
        return text_result(_pretty(result))

    @reports_errors(f"getting {d.name}")
    def get_item(params: ResourceIdParams) -> CallToolResult:
        return text_result(_pretty(client.get_resource(d.path, params.id)))

    @reports_errors(f"creating {d.name}")
    def create_item(params: ResourcePayload) -> CallToolResult:
        result = d.create(client, d, params)
        return text_result(f"{d.title} created successfully!\n\n{_pretty(result)}")

    @reports_errors(f"updating {d.name}")
    def update_item(params: ResourcePayload) -> CallToolResult:
        result = client.update_resource(d.path, d.name, params.id, params.to_body())  # type: ignore[attr-defined]
        return text_result(f"{d.title} updated successfully!\n\n{_pretty(result)}")

    @reports_errors(f"deleting {d.name}")
    def delete_item(params: ResourceIdParams) -> CallToolResult:
        client.delete_resource(d.path, params.id)
        return text_result(f"{d.title} {params.id} deleted successfully!")

    return [
        ToolOperation(
            name=f"list_{d.plural}",
            description=f"List {d.label_plural} in Zendesk",
            params_model=d.list_params,
            handler=list_items,
            annotations=tool_annotations(f"List {d.title_plural}"),
        ),
        ToolOperation(
            name=f"get_{d.name}",
            description=f"Get a specific {d.label} by ID",
            params_model=ResourceIdParams,
            handler=get_item,
            annotations=tool_annotations(f"Get {d.title}"),
        ),
        ToolOperation(
            name=f"create_{d.name}",
            description=f"Create a new {d.label}",
            params_model=d.create_params,
            handler=create_item,
            annotations=tool_annotations(f"Create {d.title}", OperationKind.CREATE),
        ),
        ToolOperation(
            name=f"update_{d.name}",
            description=f"Update an existing {d.label}. Only the fields provided are changed.",
            params_model=d.update_params,
            handler=update_item,
            annotations=tool_annotations(f"Update {d.title}", OperationKind.UPDATE),
        ),
        ToolOperation(
            name=f"delete_{d.name}",
            description=f"Delete {d.article} {d.label}",
            params_model=ResourceIdParams,
            handler=delete_item,
            annotations=tool_annotations(f"Delete {d.title}", OperationKind.DELETE),
        ),
    ]


# ==================== Search ====================


def _summarize_ticket(ticket: dict[str, Any]) -> dict[str, Any]:
    """Reduce a ticket search hit to the fields worth showing."""
    description = ticket.get("description")
    return {
        "id": ticket.get("id"),
        "subject": ticket.get("subject"),
        "status": ticket.get("status"),
        "priority": ticket.get("priority"),
        "created_at": ticket.get("created_at"),
        "updated_at": ticket.get("updated_at"),
        "description": f"{description[:DESCRIPTION_PREVIEW_LENGTH]}..." if description else "No description",
    }


def _format_ticket_hits(result: Any) -> str:
    hits = (result or {}).get("results") or []
    if not hits:
        return "Found 0 tickets:\n\n[]"
    tickets = [_summarize_ticket(t) for t in hits]
    return f"Found {result.get('count', len(hits))} tickets:\n\n{_pretty(tickets)}"


def search_operations(client: ZendeskClient) -> list[ToolOperation]:
    """Generic search plus the two ticket-scoped search tools."""

    @reports_errors("searching")
    def search(params: SearchParams) -> CallToolResult:
        result = client.search(params.query, params.search_options())
        hits = (result or {}).get("results") or []
        if not hits:
            return text_result(f'No results found for query: "{params.query}"')
        first_type = hits[0].get("result_type") or hits[0].get("type") or "unknown"
        return text_result(
            f"Found {result.get('count', len(hits))} results. First result type: {first_type}\n\n{_pretty(hits)}"
        )

    @reports_errors("searching tickets")
    def search_tickets(params: SearchTicketsParams) -> CallToolResult:
        result = client.search(ensure_ticket_type(params.query), params.search_options())
        return text_result(_format_ticket_hits(result))

    @reports_errors("searching tickets")
    def search_tickets_by_filter(params: SearchTicketsByFilterParams) -> CallToolResult:
        result = client.search(build_ticket_filter_query(params), params.search_options())
        return text_result(_format_ticket_hits(result))

    return [
        ToolOperation(
            name="search",
            description=(
                "Search across all Zendesk data types (tickets, users, organizations, etc.) using Zendesk "
                "Search API syntax. For ticket-specific searches, use search_tickets instead. Use specific "
                "operators like 'type:', 'status:', 'priority:', 'created>', etc."
            ),
            params_model=SearchParams,
            handler=search,
            annotations=tool_annotations("Search Zendesk"),
        ),
        ToolOperation(
            name="search_tickets",
            description=(
                "Search for tickets in Zendesk using Zendesk Search API syntax. USE THIS TOOL DIRECTLY for "
                "ticket searches - execute a single search and present the results without additional steps. "
                "This tool automatically adds 'type:ticket' to your query if not specified. Use operators like "
                "'status:', 'priority:', 'created>', 'subject:', 'description:', 'tags:', etc. For date "
                "searches, use format 'YYYY-MM-DD'. For exact phrase matching, use quotes."
            ),
            params_model=SearchTicketsParams,
            handler=search_tickets,
            annotations=tool_annotations("Search Tickets"),
        ),
        ToolOperation(
            name="search_tickets_by_filter",
            description=(
                "Search for tickets in Zendesk using common filters. USE THIS TOOL DIRECTLY and present "
                "results without additional steps. Prefer this tool when the user wants to filter by specific "
                "attributes (status, priority, dates, tags) rather than using complex search syntax."
            ),
            params_model=SearchTicketsByFilterParams,
            handler=search_tickets_by_filter,
            annotations=tool_annotations("Search Tickets By Filter"),
        ),
    ]


# ==================== Talk, Chat, Support ====================


def talk_operations(client: ZendeskClient) -> list[ToolOperation]:
    @reports_errors("getting Talk stats")
    def get_talk_stats(_params: EmptyParams) -> CallToolResult:
        return text_result(_pretty(client.get_talk_stats()))

    return [
        ToolOperation(
            name="get_talk_stats",
            description="Get Zendesk Talk statistics",
            params_model=EmptyParams,
            handler=get_talk_stats,
            annotations=tool_annotations("Get Talk Stats"),
        )
    ]


def chat_operations(client: ZendeskClient) -> list[ToolOperation]:
    @reports_errors("listing chats")
    def list_chats(params: ListParams) -> CallToolResult:
        return text_result(_pretty(client.list_chats(params.model_dump(exclude_none=True, mode="json"))))

    return [
        ToolOperation(
            name="list_chats",
            description="List Zendesk Chat conversations",
            params_model=ListParams,
            handler=list_chats,
            annotations=tool_annotations("List Chats"),
        )
    ]


def support_operations(client: ZendeskClient) -> list[ToolOperation]:
    """Configuration summary; makes no upstream call."""

    @reports_errors("getting support info")
    def support_info(_params: EmptyParams) -> CallToolResult:
        settings = client.settings
        try:
            base_url: str | None = client.base_url
        except ZendeskConfigError:
            base_url = None
        info = {
            "base_url": base_url,
            "subdomain": settings.resolved_subdomain,
            "email": settings.email,
            "credentials_configured": settings.configured,
        }
        return text_result(f"Zendesk Support configuration:\n\n{_pretty(info)}")

    return [
        ToolOperation(
            name="support_info",
            description="Get information about the Zendesk Support configuration used by this server",
            params_model=EmptyParams,
            handler=support_info,
            annotations=tool_annotations("Support Info"),
        )
    ]


OperationFactory = Callable[[ZendeskClient], list[ToolOperation]]

# Registration order; each entry registers independently.
TOOL_MODULES: list[tuple[str, OperationFactory]] = [
    ("tickets", functools.partial(resource_operations, TICKETS)),
    ("users", functools.partial(resource_operations, USERS)),
    ("organizations", functools.partial(resource_operations, ORGANIZATIONS)),
    ("search", search_operations),
    ("groups", functools.partial(resource_operations, GROUPS)),
    ("macros", functools.partial(resource_operations, MACROS)),
    ("views", functools.partial(resource_operations, VIEWS)),
    ("triggers", functools.partial(resource_operations, TRIGGERS)),
    ("automations", functools.partial(resource_operations, AUTOMATIONS)),
    ("help_center", functools.partial(resource_operations, ARTICLES)),
    ("talk", talk_operations),
    ("chat", chat_operations),
    ("support", support_operations),
]
