"""Shared fixtures for the Zendesk MCP tests."""

import json
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from mcp_zendesk.client import ZendeskClient
from mcp_zendesk.config import ZendeskSettings


def _make_response(status_code: int = 200, body: Any = None, text: str | None = None) -> Mock:
    """Build a fake ``requests.Response``."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if body is not None:
        response.text = json.dumps(body)
        response.json.return_value = body
    else:
        response.text = text or ""
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", response.text, 0)
    response.content = response.text.encode()
    return response


@pytest.fixture
def fake_response():
    """Factory for fake responses: ``fake_response(status, body=None, text=None)``."""
    return _make_response


@pytest.fixture
def settings() -> ZendeskSettings:
    """Fully configured settings for a test account."""
    return ZendeskSettings(subdomain="acme", email="agent@acme.com", api_token="secret-token")


@pytest.fixture
def session() -> Mock:
    """Fake HTTP session; set ``session.request.return_value`` per test."""
    fake = Mock(spec=requests.Session)
    fake.request.return_value = _make_response(200, {})
    return fake


@pytest.fixture
def client(settings: ZendeskSettings, session: Mock) -> ZendeskClient:
    """Real client wired to the fake session."""
    return ZendeskClient(settings, session=session)


@pytest.fixture
def unconfigured_client(session: Mock) -> ZendeskClient:
    """Client with no credentials at all."""
    return ZendeskClient(ZendeskSettings(), session=session)


@pytest.fixture
def sent(session: Mock):
    """Accessor for the last request sent through the fake session."""

    def _sent() -> tuple[str, str, dict[str, Any]]:
        args, kwargs = session.request.call_args
        method, url = args
        return method, url, kwargs

    return _sent
