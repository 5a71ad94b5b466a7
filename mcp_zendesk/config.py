"""Runtime configuration for the Zendesk MCP server."""

import logging
import os
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

CREDENTIAL_ENV_VARS = ("ZENDESK_SUBDOMAIN", "ZENDESK_BASE_URL", "ZENDESK_EMAIL", "ZENDESK_API_TOKEN")


def load_environment() -> None:
    """Load environment variables from .env files.

    A ``.env`` in the current working directory wins; afterwards the nearest
    ``.env`` found by python-dotenv fills in anything still missing.
    """
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env)
        logger.info("Loaded environment from %s", cwd_env)

    load_dotenv()


def _subdomain_from_url(base_url: str) -> str | None:
    """Return the first host label of a Zendesk base URL, if it has one."""
    hostname = urlparse(base_url).hostname
    if not hostname:
        logger.error("Failed to extract subdomain from base URL: %s", base_url)
        return None
    return hostname.split(".")[0]


def _timeout_from_env() -> float | None:
    """Read ZENDESK_TIMEOUT; an unparseable value disables the timeout."""
    raw = os.getenv("ZENDESK_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid ZENDESK_TIMEOUT '%s', requests will not time out", raw)
        return None


class ZendeskSettings(BaseModel):
    """Zendesk credentials, read once at startup and never mutated."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    subdomain: str | None = None
    base_url: str | None = None
    email: str | None = None
    api_token: str | None = None
    timeout: float | None = None

    @field_validator("subdomain", "base_url", "email", "api_token", mode="before")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        """Treat blank environment values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip("/") if v else v

    @property
    def resolved_subdomain(self) -> str | None:
        """Explicit subdomain, or the one embedded in the base URL."""
        if self.subdomain:
            return self.subdomain
        if self.base_url:
            return _subdomain_from_url(self.base_url)
        return None

    @property
    def configured(self) -> bool:
        """Whether every credential needed for an upstream call is present."""
        return bool(self.resolved_subdomain and self.email and self.api_token)

    @classmethod
    def from_env(cls) -> "ZendeskSettings":
        """Build settings from ``ZENDESK_*`` environment variables."""
        settings = cls(
            subdomain=os.getenv("ZENDESK_SUBDOMAIN"),
            base_url=os.getenv("ZENDESK_BASE_URL"),
            email=os.getenv("ZENDESK_EMAIL"),
            api_token=os.getenv("ZENDESK_API_TOKEN"),
            timeout=_timeout_from_env(),
        )
        if not settings.configured:
            logger.warning(
                "Zendesk credentials not found in environment variables. Please set ZENDESK_SUBDOMAIN "
                "(or ZENDESK_BASE_URL), ZENDESK_EMAIL, and ZENDESK_API_TOKEN."
            )
        return settings


def describe_environment() -> dict[str, str]:
    """Report which credential variables are set, without their values."""
    return {name: "[SET]" if os.getenv(name) else "[NOT SET]" for name in CREDENTIAL_ENV_VARS}
