"""Zendesk MCP Server - expose the Zendesk REST API as MCP tools."""

__version__ = "0.1.0"
