"""Pydantic input models for Zendesk tools.

Each model is the declarative schema of one tool operation. Field names are
the tool argument names; ``to_body`` turns a validated model into the JSON
body sent to Zendesk.
"""

import re
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class StrictBaseModel(BaseModel):
    """Base model with strict validation that forbids extra fields.

    This ensures that typos or incorrect field names in tool arguments
    are caught early with clear validation errors rather than being silently ignored.
    String fields are automatically stripped of leading/trailing whitespace.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class SortOrder(str, Enum):
    """Sort direction for list and search operations."""

    ASC = "asc"
    DESC = "desc"


class TicketPriority(str, Enum):
    """Zendesk ticket priority."""

    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class TicketStatus(str, Enum):
    """Zendesk ticket status."""

    NEW = "new"
    OPEN = "open"
    PENDING = "pending"
    HOLD = "hold"
    SOLVED = "solved"
    CLOSED = "closed"


class TicketType(str, Enum):
    """Zendesk ticket type."""

    PROBLEM = "problem"
    INCIDENT = "incident"
    QUESTION = "question"
    TASK = "task"


class UserRole(str, Enum):
    """Zendesk user role.

    Attributes:
        END_USER: Customer / requester
        AGENT: Support agent
        ADMIN: Account administrator
    """

    END_USER = "end-user"
    AGENT = "agent"
    ADMIN = "admin"


def _validate_email(v: str | None) -> str | None:
    if v is None:
        return v
    normalized = v.strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise ValueError(f"Invalid email address: {v!r}")
    return normalized


# ==================== Shared parameter models ====================


class ListParams(StrictBaseModel):
    """Pagination parameters passed straight through to Zendesk."""

    page: int | None = Field(None, description="Page number for pagination")
    per_page: int | None = Field(None, description="Number of results per page (max 100)")


class SortedListParams(ListParams):
    """Pagination plus sorting."""

    sort_by: str | None = Field(None, description="Field to sort by")
    sort_order: SortOrder | None = Field(None, description="Sort order (asc or desc)")


class UserListParams(ListParams):
    """User list parameters."""

    role: UserRole | None = Field(None, description="Filter users by role")


class ResourceIdParams(StrictBaseModel):
    """Single resource lookup or deletion by ID."""

    id: int = Field(description="Resource ID")


class EmptyParams(StrictBaseModel):
    """Operations that take no arguments."""


class ResourcePayload(StrictBaseModel):
    """Base class for create/update models.

    Only fields the caller explicitly set are sent upstream, so a partial
    update never overwrites other fields with null.
    """

    body_exclude: ClassVar[set[str]] = {"id"}

    def to_body(self) -> dict[str, Any]:
        """Return the JSON body for the create/update request."""
        return self.model_dump(exclude=self.body_exclude, exclude_unset=True, exclude_none=True, mode="json")


class Condition(StrictBaseModel):
    """A single view/trigger/automation condition."""

    field: str = Field(description="Field to check")
    operator: str = Field(description="Operator for comparison")
    value: Any = Field(description="Value to compare against")


class Conditions(StrictBaseModel):
    """Condition groups: every ``all`` entry must match, at least one ``any`` entry must match."""

    all: list[Condition] | None = Field(None, description="Conditions that must all be met")
    any: list[Condition] | None = Field(None, description="Conditions of which at least one must be met")


class Action(StrictBaseModel):
    """A field change performed by a macro, trigger or automation."""

    field: str = Field(description="Field to modify")
    value: Any = Field(description="Value to set")


# ==================== Tickets ====================


class _TicketBody(ResourcePayload):
    def to_body(self) -> dict[str, Any]:
        """Return the ticket body; the comment text becomes a comment object."""
        body = super().to_body()
        if "comment" in body:
            body["comment"] = {"body": body["comment"]}
        return body


class TicketCreate(_TicketBody):
    """Create ticket request."""

    subject: str = Field(description="Ticket subject")
    comment: str = Field(description="Ticket comment/description")
    priority: TicketPriority | None = Field(None, description="Ticket priority")
    status: TicketStatus | None = Field(None, description="Ticket status")
    requester_id: int | None = Field(None, description="User ID of the requester")
    assignee_id: int | None = Field(None, description="User ID of the assignee")
    group_id: int | None = Field(None, description="Group ID for the ticket")
    type: TicketType | None = Field(None, description="Ticket type")
    tags: list[str] | None = Field(None, description="Tags for the ticket")


class TicketUpdate(_TicketBody):
    """Update ticket request."""

    id: int = Field(description="Ticket ID to update")
    subject: str | None = Field(None, description="Updated ticket subject")
    comment: str | None = Field(None, description="New comment to add")
    priority: TicketPriority | None = Field(None, description="Updated ticket priority")
    status: TicketStatus | None = Field(None, description="Updated ticket status")
    assignee_id: int | None = Field(None, description="User ID of the new assignee")
    group_id: int | None = Field(None, description="New group ID for the ticket")
    type: TicketType | None = Field(None, description="Updated ticket type")
    tags: list[str] | None = Field(None, description="Updated tags for the ticket")


# ==================== Users ====================


class UserCreate(ResourcePayload):
    """Create user request."""

    name: str = Field(description="User's full name", min_length=1)
    email: str = Field(description="User's email address")
    role: UserRole | None = Field(None, description="User's role")
    phone: str | None = Field(None, description="User's phone number")
    organization_id: int | None = Field(None, description="ID of the user's organization")
    tags: list[str] | None = Field(None, description="Tags for the user")
    notes: str | None = Field(None, description="Notes about the user")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a plausible address and normalize it to lowercase."""
        return _validate_email(v)  # type: ignore[return-value]


class UserUpdate(ResourcePayload):
    """Update user request."""

    id: int = Field(description="User ID to update")
    name: str | None = Field(None, description="Updated user's name")
    email: str | None = Field(None, description="Updated email address")
    role: UserRole | None = Field(None, description="Updated user's role")
    phone: str | None = Field(None, description="Updated phone number")
    organization_id: int | None = Field(None, description="Updated organization ID")
    tags: list[str] | None = Field(None, description="Updated tags for the user")
    notes: str | None = Field(None, description="Updated notes about the user")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        """Require a plausible address and normalize it to lowercase."""
        return _validate_email(v)


# ==================== Organizations ====================


class OrganizationCreate(ResourcePayload):
    """Create organization request."""

    name: str = Field(description="Organization name")
    domain_names: list[str] | None = Field(None, description="Domain names for the organization")
    details: str | None = Field(None, description="Details about the organization")
    notes: str | None = Field(None, description="Notes about the organization")
    tags: list[str] | None = Field(None, description="Tags for the organization")


class OrganizationUpdate(ResourcePayload):
    """Update organization request."""

    id: int = Field(description="Organization ID to update")
    name: str | None = Field(None, description="Updated organization name")
    domain_names: list[str] | None = Field(None, description="Updated domain names")
    details: str | None = Field(None, description="Updated details")
    notes: str | None = Field(None, description="Updated notes")
    tags: list[str] | None = Field(None, description="Updated tags")


# ==================== Groups ====================


class GroupCreate(ResourcePayload):
    """Create group request."""

    name: str = Field(description="Group name")
    description: str | None = Field(None, description="Group description")


class GroupUpdate(ResourcePayload):
    """Update group request."""

    id: int = Field(description="Group ID to update")
    name: str | None = Field(None, description="Updated group name")
    description: str | None = Field(None, description="Updated group description")


# ==================== Business rules ====================


class MacroCreate(ResourcePayload):
    """Create macro request."""

    title: str = Field(description="Macro title")
    description: str | None = Field(None, description="Macro description")
    actions: list[Action] = Field(description="Actions to perform when macro is applied")


class MacroUpdate(ResourcePayload):
    """Update macro request."""

    id: int = Field(description="Macro ID to update")
    title: str | None = Field(None, description="Updated macro title")
    description: str | None = Field(None, description="Updated macro description")
    actions: list[Action] | None = Field(None, description="Updated actions")


class ViewCreate(ResourcePayload):
    """Create view request."""

    title: str = Field(description="View title")
    description: str | None = Field(None, description="View description")
    conditions: Conditions = Field(description="Conditions for the view")


class ViewUpdate(ResourcePayload):
    """Update view request."""

    id: int = Field(description="View ID to update")
    title: str | None = Field(None, description="Updated view title")
    description: str | None = Field(None, description="Updated view description")
    conditions: Conditions | None = Field(None, description="Updated conditions")


class TriggerCreate(ResourcePayload):
    """Create trigger request."""

    title: str = Field(description="Trigger title")
    description: str | None = Field(None, description="Trigger description")
    conditions: Conditions = Field(description="Conditions for the trigger")
    actions: list[Action] = Field(description="Actions to perform when trigger conditions are met")


class TriggerUpdate(ResourcePayload):
    """Update trigger request."""

    id: int = Field(description="Trigger ID to update")
    title: str | None = Field(None, description="Updated trigger title")
    description: str | None = Field(None, description="Updated trigger description")
    conditions: Conditions | None = Field(None, description="Updated conditions")
    actions: list[Action] | None = Field(None, description="Updated actions")


class AutomationCreate(ResourcePayload):
    """Create automation request."""

    title: str = Field(description="Automation title")
    description: str | None = Field(None, description="Automation description")
    conditions: Conditions = Field(description="Conditions for the automation")
    actions: list[Action] = Field(description="Actions to perform when automation conditions are met")


class AutomationUpdate(ResourcePayload):
    """Update automation request."""

    id: int = Field(description="Automation ID to update")
    title: str | None = Field(None, description="Updated automation title")
    description: str | None = Field(None, description="Updated automation description")
    conditions: Conditions | None = Field(None, description="Updated conditions")
    actions: list[Action] | None = Field(None, description="Updated actions")


# ==================== Help Center ====================


class ArticleCreate(ResourcePayload):
    """Create Help Center article request. ``section_id`` selects the target section."""

    body_exclude: ClassVar[set[str]] = {"id", "section_id"}

    title: str = Field(description="Article title")
    body: str = Field(description="Article body content (HTML)")
    section_id: int = Field(description="Section ID where the article will be created")
    locale: str | None = Field(None, description="Article locale (e.g., 'en-us')")
    draft: bool | None = Field(None, description="Whether the article is a draft")
    permission_group_id: int | None = Field(None, description="Permission group ID for the article")
    user_segment_id: int | None = Field(None, description="User segment ID for the article")
    label_names: list[str] | None = Field(None, description="Labels for the article")


class ArticleUpdate(ResourcePayload):
    """Update Help Center article request."""

    id: int = Field(description="Article ID to update")
    title: str | None = Field(None, description="Updated article title")
    body: str | None = Field(None, description="Updated article body content (HTML)")
    locale: str | None = Field(None, description="Updated article locale (e.g., 'en-us')")
    draft: bool | None = Field(None, description="Whether the article is a draft")
    permission_group_id: int | None = Field(None, description="Updated permission group ID")
    user_segment_id: int | None = Field(None, description="Updated user segment ID")
    label_names: list[str] | None = Field(None, description="Updated labels")


# ==================== Search ====================


class SearchParams(StrictBaseModel):
    """Generic Zendesk Search API parameters."""

    query: str = Field(
        min_length=1,
        description=(
            "Search query string using Zendesk Search API syntax. Examples: 'type:user email:example.com', "
            "'type:organization name:acme', 'type:ticket status:open'"
        ),
    )
    sort_by: str | None = Field(None, description="Field to sort by (e.g., 'created_at', 'updated_at')")
    sort_order: SortOrder | None = Field(None, description="Sort order (asc or desc)")
    page: int | None = Field(None, description="Page number for pagination")
    per_page: int | None = Field(None, description="Number of results per page (max 100)")

    def search_options(self) -> dict[str, Any]:
        """Query parameters other than the query string itself."""
        return self.model_dump(include={"sort_by", "sort_order", "page", "per_page"}, exclude_none=True, mode="json")


class SearchTicketsParams(SearchParams):
    """Ticket search using raw Zendesk Search API syntax."""

    query: str = Field(
        min_length=1,
        description=(
            "Search query string using Zendesk Search API syntax. Examples: 'status:open webhook', "
            "'priority:high error', 'created>2025-01-01', 'subject:\"500 error\"', 'tags:webhook', "
            "'description:configuration'"
        ),
    )


class SearchTicketsByFilterParams(StrictBaseModel):
    """Ticket search from structured filters."""

    text: str | None = Field(None, description="Free text to search for in the ticket (subject, description, comments)")
    status: TicketStatus | None = Field(None, description="Filter by ticket status")
    priority: TicketPriority | None = Field(None, description="Filter by ticket priority")
    created_after: str | None = Field(None, description="Filter tickets created after this date (format: YYYY-MM-DD)")
    created_before: str | None = Field(None, description="Filter tickets created before this date (format: YYYY-MM-DD)")
    updated_after: str | None = Field(None, description="Filter tickets updated after this date (format: YYYY-MM-DD)")
    updated_before: str | None = Field(None, description="Filter tickets updated before this date (format: YYYY-MM-DD)")
    tags: list[str] | None = Field(None, description="Filter by tags (array of strings)")
    sort_by: str | None = Field(
        None, description="Field to sort by (e.g., 'created_at', 'updated_at', 'priority', 'status')"
    )
    sort_order: SortOrder | None = Field(None, description="Sort order (asc or desc)")
    page: int | None = Field(None, description="Page number for pagination")
    per_page: int | None = Field(None, description="Number of results per page (max 100)")

    def search_options(self) -> dict[str, Any]:
        """Query parameters other than the query string itself."""
        return self.model_dump(include={"sort_by", "sort_order", "page", "per_page"}, exclude_none=True, mode="json")
