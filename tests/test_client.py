"""Tests for the Zendesk HTTP client."""

import base64
import logging
from unittest.mock import Mock

import pytest
import requests

from mcp_zendesk.client import (
    ZendeskAPIError,
    ZendeskClient,
    ZendeskConfigError,
    ZendeskError,
    ZendeskTransportError,
)
from mcp_zendesk.config import ZendeskSettings


class TestBaseUrl:
    """Base URL resolution."""

    def test_from_subdomain(self, client: ZendeskClient) -> None:
        assert client.base_url == "https://acme.zendesk.com/api/v2"

    def test_explicit_base_url_wins(self) -> None:
        settings = ZendeskSettings(subdomain="other", base_url="https://help.acme.com/", email="a@b.c", api_token="t")
        assert ZendeskClient(settings).base_url == "https://help.acme.com/api/v2"

    def test_missing_subdomain_and_base_url(self) -> None:
        client = ZendeskClient(ZendeskSettings(email="a@b.c", api_token="t"))
        with pytest.raises(ZendeskConfigError, match="subdomain is required"):
            _ = client.base_url


class TestRequest:
    """The single request path every operation goes through."""

    def test_sends_basic_auth_and_json(self, client: ZendeskClient, session: Mock, fake_response, sent) -> None:
        session.request.return_value = fake_response(200, {"ticket": {"id": 1}})

        result = client.request("GET", "/tickets/1.json")

        assert result == {"ticket": {"id": 1}}
        method, url, kwargs = sent()
        assert method == "GET"
        assert url == "https://acme.zendesk.com/api/v2/tickets/1.json"
        expected = base64.b64encode(b"agent@acme.com/token:secret-token").decode()
        assert kwargs["headers"]["Authorization"] == f"Basic {expected}"
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_drops_none_query_params(self, client: ZendeskClient, sent) -> None:
        client.request("GET", "/tickets.json", params={"page": 2, "per_page": None, "sort_by": None})

        _, _, kwargs = sent()
        assert kwargs["params"] == {"page": 2}

    def test_passes_timeout_from_settings(self, session: Mock, sent) -> None:
        settings = ZendeskSettings(subdomain="acme", email="a@b.c", api_token="t", timeout=5.0)
        ZendeskClient(settings, session=session).request("GET", "/groups.json")

        _, _, kwargs = sent()
        assert kwargs["timeout"] == 5.0

    def test_empty_body_returns_none(self, client: ZendeskClient, session: Mock, fake_response) -> None:
        session.request.return_value = fake_response(204)

        assert client.request("DELETE", "/tickets/1.json") is None

    def test_http_error_carries_status_and_body(self, client: ZendeskClient, session: Mock, fake_response) -> None:
        session.request.return_value = fake_response(422, {"error": "bad request"})

        with pytest.raises(ZendeskAPIError) as exc_info:
            client.request("POST", "/tickets.json", data={"ticket": {}})

        assert exc_info.value.status_code == 422
        assert exc_info.value.body == {"error": "bad request"}
        assert str(exc_info.value) == 'Zendesk API Error: 422 - {"error":"bad request"}'

    def test_http_error_keeps_non_ascii(self, client: ZendeskClient, session: Mock, fake_response) -> None:
        session.request.return_value = fake_response(400, {"error": "café fermé"})

        with pytest.raises(ZendeskAPIError) as exc_info:
            client.request("GET", "/tickets.json")

        assert str(exc_info.value) == 'Zendesk API Error: 400 - {"error":"café fermé"}'

    def test_http_error_with_text_body(self, client: ZendeskClient, session: Mock, fake_response) -> None:
        session.request.return_value = fake_response(503, text="Service Unavailable")

        with pytest.raises(ZendeskAPIError, match="Zendesk API Error: 503 - Service Unavailable"):
            client.request("GET", "/tickets.json")

    def test_transport_error_has_no_response(self, client: ZendeskClient, session: Mock) -> None:
        session.request.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(ZendeskTransportError, match="connection refused") as exc_info:
            client.request("GET", "/tickets.json")

        assert isinstance(exc_info.value.original_error, requests.exceptions.ConnectionError)
        assert not isinstance(exc_info.value, ZendeskAPIError)

    def test_invalid_json_is_a_transport_error(self, client: ZendeskClient, session: Mock, fake_response) -> None:
        session.request.return_value = fake_response(200, text="<html>oops</html>")

        with pytest.raises(ZendeskTransportError):
            client.request("GET", "/tickets.json")

    def test_missing_credentials_fail_before_any_http_call(
        self, unconfigured_client: ZendeskClient, session: Mock
    ) -> None:
        with pytest.raises(ZendeskConfigError, match="Zendesk credentials not configured"):
            unconfigured_client.request("GET", "/tickets.json")

        session.request.assert_not_called()

    def test_all_errors_share_a_base_class(self) -> None:
        for error_type in (ZendeskConfigError, ZendeskAPIError, ZendeskTransportError):
            assert issubclass(error_type, ZendeskError)

    def test_token_never_logged(
        self, client: ZendeskClient, session: Mock, fake_response, caplog: pytest.LogCaptureFixture
    ) -> None:
        session.request.return_value = fake_response(401, {"error": "Couldn't authenticate you"})

        with caplog.at_level(logging.DEBUG, logger="mcp_zendesk.client"), pytest.raises(ZendeskAPIError):
            client.request("GET", "/users.json")

        assert "secret-token" not in caplog.text
        assert "Zendesk API Error: GET /users.json" in caplog.text


class TestResourceOperations:
    """Paths and bodies of the per-resource helpers."""

    def test_list_resource(self, client: ZendeskClient, sent) -> None:
        client.list_resource("/tickets", {"page": 1})

        method, url, kwargs = sent()
        assert (method, url) == ("GET", "https://acme.zendesk.com/api/v2/tickets.json")
        assert kwargs["params"] == {"page": 1}

    def test_get_resource(self, client: ZendeskClient, sent) -> None:
        client.get_resource("/users", 42)

        assert sent()[:2] == ("GET", "https://acme.zendesk.com/api/v2/users/42.json")

    def test_create_resource_wraps_body(self, client: ZendeskClient, sent) -> None:
        client.create_resource("/groups", "group", {"name": "Tier 2"})

        method, url, kwargs = sent()
        assert (method, url) == ("POST", "https://acme.zendesk.com/api/v2/groups.json")
        assert kwargs["json"] == {"group": {"name": "Tier 2"}}

    def test_update_resource_wraps_body(self, client: ZendeskClient, sent) -> None:
        client.update_resource("/organizations", "organization", 7, {"name": "Acme"})

        method, url, kwargs = sent()
        assert (method, url) == ("PUT", "https://acme.zendesk.com/api/v2/organizations/7.json")
        assert kwargs["json"] == {"organization": {"name": "Acme"}}

    def test_delete_resource(self, client: ZendeskClient, sent) -> None:
        client.delete_resource("/macros", 3)

        assert sent()[:2] == ("DELETE", "https://acme.zendesk.com/api/v2/macros/3.json")

    def test_search_merges_query(self, client: ZendeskClient, sent) -> None:
        client.search("type:ticket status:open", {"per_page": 10})

        _, url, kwargs = sent()
        assert url == "https://acme.zendesk.com/api/v2/search.json"
        assert kwargs["params"] == {"query": "type:ticket status:open", "per_page": 10}

    def test_create_article_uses_section_path(self, client: ZendeskClient, sent) -> None:
        client.create_article(360001, {"title": "FAQ", "body": "<p>Hi</p>"})

        method, url, kwargs = sent()
        assert (method, url) == ("POST", "https://acme.zendesk.com/api/v2/help_center/sections/360001/articles.json")
        assert kwargs["json"] == {"article": {"title": "FAQ", "body": "<p>Hi</p>"}}

    def test_talk_stats_and_chats(self, client: ZendeskClient, session: Mock) -> None:
        client.get_talk_stats()
        client.list_chats({"page": 1})

        urls = [c.args[1] for c in session.request.call_args_list]
        assert urls == [
            "https://acme.zendesk.com/api/v2/channels/voice/stats.json",
            "https://acme.zendesk.com/api/v2/chats.json",
        ]

    def test_close_releases_session(self, client: ZendeskClient, session: Mock) -> None:
        client.close()
        session.close.assert_called_once_with()
