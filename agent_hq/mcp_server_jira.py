#!/usr/bin/env python3
"""
Jira MCP Server - stdio transport

Read-only Jira queries: jira.search (JQL) and jira.get (issue by key).

Usage:
    agent-hq-jira
    python -m agent_hq.mcp_server_jira

Configuration (environment or .env):
    JIRA_BASE_URL         site URL, e.g. https://example.atlassian.net (required)
    JIRA_EMAIL            account email (required)
    JIRA_API_TOKEN        API token (required)
    JIRA_CLOUD_ROUTING    1/true to route through api.atlassian.com (optional)
    JIRA_TIMEOUT_SECONDS  HTTP timeout (optional; default none)
"""

import asyncio
import sys
from typing import Any, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from agent_hq.config import JiraConfig, load_env_file
from agent_hq.errors import ConfigurationError
from agent_hq.jira_client import JiraClient
from agent_hq.logging_utils import get_logger
from agent_hq.mcp_handlers import JIRA_TOOLS, dispatch_tool, shared
from agent_hq.mcp_handlers.error_helpers import tool_not_found_error
from agent_hq.tool_schemas import get_tool_definitions

logger = get_logger(__name__)

SERVER_NAME = "jira-mcp-server"
SERVER_VERSION = "0.1.0"

server = Server(SERVER_NAME, version=SERVER_VERSION)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List the Jira tools"""
    return get_tool_definitions("jira")


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any] | None) -> Sequence[TextContent]:
    """Handle tool calls from MCP client"""
    if name not in JIRA_TOOLS:
        return tool_not_found_error(name, JIRA_TOOLS)
    return await dispatch_tool(name, arguments or {})


async def main(config: JiraConfig):
    """Serve Jira tools over stdio using an already-validated config"""
    async with JiraClient(config) as client:
        shared.configure_jira(client)
        logger.info(f"Server started. Tools available: {', '.join(JIRA_TOOLS)}")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options()
                )
        finally:
            shared.configure_jira(None)


def run():
    """Console script entry point"""
    load_env_file()
    try:
        # Missing credentials fail here, before the transport starts
        config = JiraConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Failed to start Jira MCP server: {e}")
        sys.exit(1)

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(f"Jira MCP server stopped: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
