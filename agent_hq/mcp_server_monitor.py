#!/usr/bin/env python3
"""
Agent HQ Monitor MCP Server - stdio transport

Logs agent invocations and workflow events to append-only JSON-line files
and reports metrics and status computed from them.

Usage:
    agent-hq-monitor
    python -m agent_hq.mcp_server_monitor

Configuration:
    AGENT_HQ_LOGS_DIR   directory for the log files (default: ./logs)
    AGENT_HQ_LOG_LEVEL  stderr log level (default: INFO)
"""

import asyncio
import sys
from typing import Any, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from agent_hq.config import MonitorConfig, load_env_file
from agent_hq.logging_utils import get_logger
from agent_hq.mcp_handlers import MONITOR_TOOLS, dispatch_tool, shared
from agent_hq.mcp_handlers.error_helpers import tool_not_found_error
from agent_hq.tool_schemas import get_tool_definitions

logger = get_logger(__name__)

SERVER_NAME = "agent-hq-monitor-server"
SERVER_VERSION = "0.1.0"

server = Server(SERVER_NAME, version=SERVER_VERSION)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List the monitoring tools"""
    return get_tool_definitions("monitor")


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any] | None) -> Sequence[TextContent]:
    """Handle tool calls from MCP client"""
    if name not in MONITOR_TOOLS:
        return tool_not_found_error(name, MONITOR_TOOLS)
    return await dispatch_tool(name, arguments or {})


async def main():
    """Main entry point for MCP server"""
    load_env_file()
    config = MonitorConfig.from_env()
    shared.configure_monitor(config)

    logger.info(f"Server started. Logs: {config.logs_dir}. Tools available: {', '.join(MONITOR_TOOLS)}")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def run():
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(f"Failed to start Agent HQ Monitor server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
