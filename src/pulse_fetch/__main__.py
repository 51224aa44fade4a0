"""Main entry point for the pulse-fetch MCP server."""

from __future__ import annotations

import logging
import os
import sys

from pulse_fetch.errors import ConfigurationError
from pulse_fetch.server import run_server


def main() -> None:
    """Main entry point."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Parse command line arguments
    transport = "streamable-http"
    host = "0.0.0.0"
    port = 8000

    if len(sys.argv) > 1:
        transport = sys.argv[1]
    if len(sys.argv) > 2:
        host = sys.argv[2]
    if len(sys.argv) > 3:
        port = int(sys.argv[3])

    try:
        run_server(transport=transport, host=host, port=port)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
