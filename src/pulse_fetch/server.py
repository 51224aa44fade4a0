"""MCP server exposing the scrape and crawl tools."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from pulse_fetch.admin.router import api_config_get, api_stats, health_check
from pulse_fetch.core.providers import get_providers
from pulse_fetch.tools.router import register_tools

logger = logging.getLogger(__name__)


def create_server() -> FastMCP:
    """Create the MCP server with tools and admin routes registered.

    Stateless mode auto-creates sessions for unknown session IDs, making the
    server resilient to restarts.
    """
    mcp = FastMCP(
        "Pulse Fetch",
        instructions=(
            "Fetches web pages and documents for agents. The scrape tool returns "
            "normalized text from HTML, PDF and text content using either a fast "
            "direct fetch or Firecrawl rendering; the crawl tool starts, checks and "
            "cancels multi-page Firecrawl crawls; the map tool lists a site's URLs "
            "without scraping them."
        ),
        stateless_http=True,
    )

    register_tools(mcp)

    mcp.custom_route("/healthz", methods=["GET"])(health_check)
    mcp.custom_route("/api/stats", methods=["GET"])(api_stats)
    mcp.custom_route("/api/config", methods=["GET"])(api_config_get)

    return mcp


def run_server(transport: str = "streamable-http", host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the MCP server.

    Configuration is validated before the server starts; an invalid
    FIRECRAWL_BASE_URL raises ConfigurationError and aborts startup.

    Args:
        transport: Transport type ('streamable-http', 'sse' or 'stdio')
        host: Host to bind to (default: 0.0.0.0)
        port: Port to bind to (default: 8000)
    """
    get_providers()

    mcp = create_server()
    mcp.settings.host = host
    mcp.settings.port = port

    logger.info(f"Starting Pulse Fetch server on {host}:{port} ({transport})")
    mcp.run(transport=transport)
