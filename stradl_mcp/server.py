"""FastMCP server initialization for Stradl MCP."""

import logging

from mcp.server.fastmcp import FastMCP

from stradl_mcp.config import get_settings
from stradl_mcp.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# Initialize the MCP server
mcp = FastMCP("stradl_mcp")


def run() -> None:
    """Configure logging, register the tools and run the MCP server over stdio."""
    settings = get_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)

    import stradl_mcp.tools  # noqa: F401  (registers tools on ``mcp``)

    logger.info("Starting stradl_mcp data_file=%s", settings.data_file)
    mcp.run()


if __name__ == "__main__":
    run()
