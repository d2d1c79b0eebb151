"""
ShiftPay Calculation Engines - MCP Server

FastMCP server exposing overtime tools:
- Overtime Engine: session tiering, block rounding and pricing
- Day Classifier: weekday / weekend / public holiday lookup
- Holiday Calendar: read, replace and extend public holidays
"""

import logging

from backend.config import get_settings

# Configure logging
logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

# Importing the tool module registers all tools with the MCP server
from engines.tools.overtime_engine import mcp  # noqa: E402


def main():
    """Run the MCP server."""
    logger.info("Starting ShiftPay Calculation Engines MCP Server")
    mcp.run()


if __name__ == "__main__":
    main()
