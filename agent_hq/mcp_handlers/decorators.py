"""
Tool registration decorator.

Handlers register themselves by name:

    @mcp_tool("agentHQ.getStatus")
    async def handle_get_status(arguments): ...

The registry is what dispatch_tool consults. A timeout, when given, is
applied around the handler with asyncio.wait_for.
"""

import asyncio
import time
from functools import wraps
from typing import Any, Callable, Dict, Optional, Sequence

from mcp.types import TextContent

from agent_hq.logging_utils import get_logger

logger = get_logger(__name__)

ToolHandler = Callable[[Dict[str, Any]], Any]

_TOOL_REGISTRY: Dict[str, ToolHandler] = {}
_TOOL_TIMEOUTS: Dict[str, Optional[float]] = {}


def mcp_tool(name: str, timeout: Optional[float] = None):
    """
    Register an async handler under a tool name.

    Args:
        name: Tool name as exposed over MCP
        timeout: Seconds before the call is abandoned (None = no limit)
    """
    def decorator(func: ToolHandler) -> ToolHandler:
        @wraps(func)
        async def wrapper(arguments: Dict[str, Any]) -> Sequence[TextContent]:
            start = time.perf_counter()
            try:
                if timeout is None:
                    return await func(arguments)
                return await asyncio.wait_for(func(arguments), timeout=timeout)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.debug(f"Tool '{name}' finished in {elapsed_ms:.1f}ms")

        wrapper.tool_name = name
        _TOOL_REGISTRY[name] = wrapper
        _TOOL_TIMEOUTS[name] = timeout
        return wrapper

    return decorator


def get_tool_registry() -> Dict[str, ToolHandler]:
    """Copy of the name -> handler registry"""
    return dict(_TOOL_REGISTRY)


def get_tool_timeout(name: str) -> Optional[float]:
    return _TOOL_TIMEOUTS.get(name)
