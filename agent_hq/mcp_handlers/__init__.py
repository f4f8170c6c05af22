"""
MCP Tool Handlers

Handler registry pattern for tool dispatch. Each tool handler is a separate
async function registered with @mcp_tool; both servers route call_tool
through dispatch_tool.
"""

import asyncio
from typing import Dict, Any, Sequence

from mcp.types import TextContent

# Importing the handler modules registers their tools
from . import jira, monitor  # noqa: F401
from .decorators import get_tool_registry, get_tool_timeout
from .error_helpers import system_error, timeout_error, tool_not_found_error
from .utils import error_response, success_response
from agent_hq.logging_utils import get_logger

logger = get_logger(__name__)

TOOL_HANDLERS: Dict[str, callable] = get_tool_registry()

MONITOR_TOOLS = tuple(name for name in TOOL_HANDLERS if name.startswith("agentHQ."))
JIRA_TOOLS = tuple(name for name in TOOL_HANDLERS if name.startswith("jira."))


async def dispatch_tool(name: str, arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """
    Dispatch a tool call to its registered handler.

    Handler exceptions never escape: they are logged and returned as a
    system_error response.

    Args:
        name: Tool name
        arguments: Tool arguments (None is treated as {})

    Returns:
        Sequence of TextContent responses
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        return tool_not_found_error(name, list(TOOL_HANDLERS))

    if arguments is None:
        arguments = {}

    try:
        return await handler(arguments)
    except asyncio.TimeoutError:
        timeout = get_tool_timeout(name)
        logger.warning(f"Tool '{name}' timed out after {timeout}s")
        return timeout_error(name, timeout)
    except Exception as e:
        # SECURITY: Don't expose full traceback to clients - log internally only
        logger.error(f"Tool '{name}' error: {e}", exc_info=True)
        return system_error(name, e)


__all__ = [
    "TOOL_HANDLERS",
    "MONITOR_TOOLS",
    "JIRA_TOOLS",
    "dispatch_tool",
    "error_response",
    "success_response",
]
