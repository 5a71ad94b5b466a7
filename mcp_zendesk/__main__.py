"""Entry point for ``python -m mcp_zendesk``."""

from .server import main

if __name__ == "__main__":
    main()
