"""Zendesk MCP Server implementation."""

import logging
import os
import sys
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from .client import ZendeskClient
from .config import ZendeskSettings, describe_environment, load_environment
from .docs import render_docs
from .registry import ToolRegistry
from .tools import TOOL_MODULES, OperationFactory

logger = logging.getLogger(__name__)

VALID_TRANSPORTS = ("stdio", "sse", "streamable-http")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_client() -> ZendeskClient:
    """Build a client from the environment (and .env files)."""
    load_environment()
    logger.info("Zendesk credentials: %s", describe_environment())
    return ZendeskClient(ZendeskSettings.from_env())


class ZendeskMCPServer:
    """Zendesk MCP Server: binds every tool module to one FastMCP instance."""

    def __init__(
        self,
        client: ZendeskClient | None = None,
        host: str = "127.0.0.1",
        port: int = 8000,
        modules: Sequence[tuple[str, OperationFactory]] = TOOL_MODULES,
    ) -> None:
        """Initialize the server.

        Args:
            client: Zendesk client shared by all tools (default: built from the environment)
            host: Host to bind for HTTP transport (default: 127.0.0.1)
            port: Port to bind for HTTP transport (default: 8000)
            modules: Tool modules to register, in order
        """
        self.client = client if client is not None else create_client()
        self.mcp = FastMCP("zendesk_mcp", host=host, port=port, lifespan=self._create_lifespan())
        self.registry = ToolRegistry(self.mcp)
        self.modules = list(modules)
        self.failed_modules: list[str] = []
        self._handlers_initialized = False
        self.setup()

    def _create_lifespan(self) -> Any:
        """Create the lifespan context manager for the server."""

        @asynccontextmanager
        async def lifespan(_app: FastMCP) -> AsyncIterator[None]:
            """Log startup and release HTTP connections on shutdown."""
            logger.info("Zendesk MCP server ready with %d tools", len(self.registry))
            try:
                yield
            finally:
                self.client.close()
                logger.info("Zendesk client cleaned up")

        return lifespan

    def setup(self) -> None:
        """Register tools and resources once; later calls are no-ops."""
        if self._handlers_initialized:
            logger.debug("Tool handlers already initialized")
            return
        self._setup_tools()
        self._setup_resources()
        self._handlers_initialized = True

    def _setup_tools(self) -> None:
        """Register every tool module, isolating failures per module."""
        for name, factory in self.modules:
            try:
                self.registry.register(factory(self.client))
            except Exception:
                logger.exception("Failed to register %s tools", name)
                self.failed_modules.append(name)
                continue
            logger.debug("Registered %s tools", name)

        logger.info("Registered %d tools from %d modules", len(self.registry), len(self.modules))
        if self.failed_modules:
            logger.warning("Tool modules not registered: %s", ", ".join(self.failed_modules))

    def _setup_resources(self) -> None:
        """Register the static documentation resources."""

        @self.mcp.resource("zendesk://docs", name="documentation_overview", mime_type="text/plain")
        def get_documentation_overview() -> str:
            """Overview of the Zendesk API documentation sections."""
            return render_docs(None)

        @self.mcp.resource("zendesk://docs/{section}", name="documentation", mime_type="text/plain")
        def get_documentation(section: str) -> str:
            """Zendesk API documentation for one section ('all' for an overview)."""
            return render_docs(section)


# HTTP transports bind to MCP_HOST:MCP_PORT
_host = os.getenv("MCP_HOST", "127.0.0.1")
_port = int(os.getenv("MCP_PORT", "8000"))
server = ZendeskMCPServer(host=_host, port=_port)

mcp = server.mcp


@mcp.custom_route("/health", methods=["GET"])
async def health_check(_request: Request) -> JSONResponse:
    """Liveness probe served next to the HTTP transports."""
    return JSONResponse({"status": "healthy", "transport": "http"})


def _configure_logging() -> None:
    """Set the root log level from LOG_LEVEL and log to stderr."""
    requested = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(requested) if requested in VALID_LOG_LEVELS else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # stdout carries the stdio transport
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    if requested not in VALID_LOG_LEVELS:
        logger.warning(
            "Invalid LOG_LEVEL '%s', defaulting to INFO. Valid values: %s", requested, ", ".join(VALID_LOG_LEVELS)
        )


def _resolve_transport() -> str:
    """Read MCP_TRANSPORT, falling back to stdio on unknown values."""
    transport = os.getenv("MCP_TRANSPORT", "stdio").lower()
    if transport not in VALID_TRANSPORTS:
        logger.warning(
            "Invalid MCP_TRANSPORT '%s', defaulting to stdio. Valid values: %s",
            transport,
            ", ".join(VALID_TRANSPORTS),
        )
        return "stdio"
    return transport


def main() -> None:
    """Main entry point for the server."""
    _configure_logging()
    transport = _resolve_transport()
    logger.info("Starting Zendesk MCP server (transport: %s)", transport)
    try:
        mcp.run(transport=transport)  # type: ignore[arg-type]
    except Exception:
        logger.exception("Failed to run Zendesk MCP server")
        sys.exit(1)
