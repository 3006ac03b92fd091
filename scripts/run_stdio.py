#!/usr/bin/env python3
"""
Run MCP server in STDIO mode for desktop clients
Uses LINEAR_API_KEY or LINEAR_OAUTH_TOKEN from the environment or .env
"""
import sys
import os

# Add the project directory to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Import and run the server
from game_dev_mcp.server import mcp, configure_logging

if __name__ == "__main__":
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    # Run with stdio transport (default for MCP)
    mcp.run()
