"""Static Zendesk API reference served as the ``zendesk://docs/{section}`` resource."""

DOCS: dict[str, str] = {
    "tickets": (
        "Tickets API allows you to create, modify, and manage support tickets.\n"
        "Endpoints: GET /api/v2/tickets, POST /api/v2/tickets, etc."
    ),
    "users": (
        "Users API allows you to create, modify, and manage end users and agents.\n"
        "Endpoints: GET /api/v2/users, POST /api/v2/users, etc."
    ),
    "organizations": (
        "Organizations API allows you to create and manage organizations.\n"
        "Endpoints: GET /api/v2/organizations, POST /api/v2/organizations, etc."
    ),
    "groups": (
        "Groups API allows you to create and manage agent groups.\n"
        "Endpoints: GET /api/v2/groups, POST /api/v2/groups, etc."
    ),
    "macros": (
        "Macros API allows you to create and manage macros for ticket actions.\n"
        "Endpoints: GET /api/v2/macros, POST /api/v2/macros, etc."
    ),
    "views": (
        "Views API allows you to create and manage views for filtering tickets.\n"
        "Endpoints: GET /api/v2/views, POST /api/v2/views, etc."
    ),
    "triggers": (
        "Triggers API allows you to create and manage triggers for automation.\n"
        "Endpoints: GET /api/v2/triggers, POST /api/v2/triggers, etc."
    ),
    "automations": (
        "Automations API allows you to create and manage time-based automations.\n"
        "Endpoints: GET /api/v2/automations, POST /api/v2/automations, etc."
    ),
    "search": (
        "Search API allows you to search across Zendesk data using specific syntax.\n"
        "Endpoints: GET /api/v2/search\n"
        "\n"
        "Search Query Syntax:\n"
        "- Use 'type:ticket' to search for tickets\n"
        "- Use 'status:open', 'status:pending', etc. to filter by status\n"
        "- Use 'priority:high', 'priority:urgent', etc. to filter by priority\n"
        "- Use 'created>2025-01-01' to filter by creation date\n"
        "- Use 'updated<2025-06-01' to filter by update date\n"
        "- Use 'subject:\"exact phrase\"' to search in subject\n"
        "- Use 'description:keyword' to search in description\n"
        "- Use 'tags:webhook' to search by tags\n"
        "- Combine multiple filters with spaces: 'type:ticket status:open webhook'\n"
        "\n"
        "Examples:\n"
        "- 'type:ticket webhook error'\n"
        "- 'type:ticket status:open priority:high'\n"
        "- 'type:ticket created>2025-01-01 tags:api'\n"
        "- 'type:ticket subject:\"500 error\" description:configuration'"
    ),
    "help_center": (
        "Help Center API allows you to manage articles, categories, and sections.\n"
        "Endpoints: GET /api/v2/help_center/articles, etc."
    ),
    "support": (
        "Support API includes core functionality for the Support product.\n"
        "Endpoints: Various endpoints for tickets, users, etc."
    ),
    "talk": (
        "Talk API allows you to manage Zendesk Talk phone calls and settings.\n"
        "Endpoints: GET /api/v2/channels/voice/stats, etc."
    ),
    "chat": "Chat API allows you to manage Zendesk Chat conversations.\nEndpoints: GET /api/v2/chats, etc.",
    "overview": (
        "The Zendesk API is a RESTful API that uses JSON for serialization. "
        "It provides access to Zendesk Support, Talk, Chat, and Guide products."
    ),
}


def render_docs(section: str | None) -> str:
    """Return the documentation text for a section.

    An empty section or ``all`` lists every section with its first line.
    """
    if not section or section == "all":
        summary = "\n".join(f"- {key}: {text.splitlines()[0]}" for key, text in DOCS.items())
        return f"Zendesk API Documentation Overview\n\n{summary}"

    if section in DOCS:
        return f"Zendesk API Documentation: {section}\n\n{DOCS[section]}"

    return f"Documentation section '{section}' not found. Available sections: {', '.join(DOCS)}"
