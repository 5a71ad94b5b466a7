"""HTTP client for the Zendesk REST API."""

import base64
import json
import logging
import time
from typing import Any

import requests  # type: ignore[import-untyped]

from .config import ZendeskSettings

logger = logging.getLogger(__name__)

JsonObject = dict[str, Any]


class ZendeskError(Exception):
    """Base class for every failure raised by :class:`ZendeskClient`."""


class ZendeskConfigError(ZendeskError):
    """Raised when credentials or the base URL cannot be resolved."""


class ZendeskAPIError(ZendeskError):
    """Raised when Zendesk answers with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response
        body: Parsed JSON error body, or the raw text when it is not JSON
    """

    def __init__(self, status_code: int, body: Any) -> None:
        """Initialize the error from the upstream status and body."""
        self.status_code = status_code
        self.body = body
        detail = body if isinstance(body, str) else json.dumps(body, separators=(",", ":"), ensure_ascii=False)
        super().__init__(f"Zendesk API Error: {status_code} - {detail}")


class ZendeskTransportError(ZendeskError):
    """Raised when no usable response was received (network, timeout, bad JSON)."""

    def __init__(self, original_error: requests.exceptions.RequestException) -> None:
        """Wrap the underlying requests exception."""
        self.original_error = original_error
        super().__init__(str(original_error))


class ZendeskClient:
    """Authenticated access to ``/api/v2`` of a Zendesk account.

    The client holds immutable settings and a ``requests.Session``. Every
    resource operation is a single HTTP call; errors are normalized into the
    :class:`ZendeskError` hierarchy and never retried.
    """

    def __init__(self, settings: ZendeskSettings, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Zendesk credentials and base URL
            session: Optional pre-built HTTP session (mainly for tests)
        """
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """Root of the REST API, without a trailing slash."""
        if self.settings.base_url:
            return f"{self.settings.base_url}/api/v2"
        if self.settings.subdomain:
            return f"https://{self.settings.subdomain}.zendesk.com/api/v2"
        raise ZendeskConfigError("subdomain is required when accessing the Zendesk API!")

    def _auth_header(self) -> str:
        raw = f"{self.settings.email}/token:{self.settings.api_token}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    def request(
        self,
        method: str,
        endpoint: str,
        data: JsonObject | None = None,
        params: JsonObject | None = None,
    ) -> Any:
        """Issue one request and return the parsed JSON body.

        Args:
            method: HTTP method
            endpoint: Path below ``/api/v2``, e.g. ``/tickets/1.json``
            data: Optional JSON body
            params: Optional query parameters; ``None`` values are dropped

        Returns:
            The decoded JSON body, or None when the response has no content

        Raises:
            ZendeskConfigError: Credentials are missing
            ZendeskAPIError: Zendesk returned a non-2xx status
            ZendeskTransportError: No usable response was received
        """
        start = time.perf_counter()
        if not self.settings.configured:
            raise ZendeskConfigError(
                "Zendesk credentials not configured. Please set ZENDESK_SUBDOMAIN (or ZENDESK_BASE_URL), "
                "ZENDESK_EMAIL, and ZENDESK_API_TOKEN."
            )

        url = f"{self.base_url}{endpoint}"
        headers = {"Authorization": self._auth_header(), "Content-Type": "application/json"}
        query = {k: v for k, v in params.items() if v is not None} if params else None

        logger.debug("Zendesk API Request: %s %s params=%s", method, endpoint, query)
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=data,
                params=query,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Zendesk API Error: %s %s - %dms: %s", method, endpoint, _elapsed_ms(start), e)
            raise ZendeskTransportError(e) from e

        if not response.ok:
            body = _error_body(response)
            logger.error(
                "Zendesk API Error: %s %s - %dms: status %s %s",
                method,
                endpoint,
                _elapsed_ms(start),
                response.status_code,
                body,
            )
            raise ZendeskAPIError(response.status_code, body)

        logger.debug(
            "Zendesk API Response: %s %s (%s) - %dms", method, endpoint, response.status_code, _elapsed_ms(start)
        )
        if not response.content:
            return None
        try:
            return response.json()
        except requests.exceptions.JSONDecodeError as e:
            logger.error("Zendesk API Error: %s %s - invalid JSON in response", method, endpoint)
            raise ZendeskTransportError(e) from e

    # Generic resource operations. ``path`` is the collection path without
    # suffix (e.g. "/tickets"), ``wrapper`` the JSON root key (e.g. "ticket").

    def list_resource(self, path: str, params: JsonObject | None = None) -> Any:
        """List a resource collection."""
        return self.request("GET", f"{path}.json", params=params)

    def get_resource(self, path: str, resource_id: int) -> Any:
        """Fetch a single resource by ID."""
        return self.request("GET", f"{path}/{resource_id}.json")

    def create_resource(self, path: str, wrapper: str, body: JsonObject) -> Any:
        """Create a resource."""
        return self.request("POST", f"{path}.json", data={wrapper: body})

    def update_resource(self, path: str, wrapper: str, resource_id: int, body: JsonObject) -> Any:
        """Update a resource with the given fields only."""
        return self.request("PUT", f"{path}/{resource_id}.json", data={wrapper: body})

    def delete_resource(self, path: str, resource_id: int) -> Any:
        """Delete a resource."""
        return self.request("DELETE", f"{path}/{resource_id}.json")

    def search(self, query: str, params: JsonObject | None = None) -> Any:
        """Run a Zendesk Search API query."""
        return self.request("GET", "/search.json", params={"query": query, **(params or {})})

    def create_article(self, section_id: int, body: JsonObject) -> Any:
        """Create a Help Center article inside a section."""
        return self.request("POST", f"/help_center/sections/{section_id}/articles.json", data={"article": body})

    def get_talk_stats(self) -> Any:
        """Fetch Zendesk Talk account statistics."""
        return self.request("GET", "/channels/voice/stats.json")

    def list_chats(self, params: JsonObject | None = None) -> Any:
        """List Zendesk Chat conversations."""
        return self.request("GET", "/chats.json", params=params)

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self.session.close()


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
