"""
Standard error responses for MCP handlers.

Every error carries recovery guidance so the calling agent knows what to do
next.
"""

from typing import Dict, Any, Optional, Sequence
from mcp.types import TextContent
from .utils import error_response
from agent_hq.errors import JiraRequestError


RECOVERY_PATTERNS = {
    "validation_error": {
        "action": "Fix the invalid parameter and retry",
        "related_tools": [],
        "workflow": [
            "1. Read the error to see which constraint failed",
            "2. Correct the parameter value",
            "3. Retry the call"
        ]
    },
    "timeout": {
        "action": "The tool did not finish in time. Retry, or simplify the request.",
        "related_tools": ["agentHQ.getStatus"],
        "workflow": [
            "1. Wait a few seconds and retry",
            "2. Check server health with agentHQ.getStatus"
        ]
    },
    "system_error": {
        "action": "Check server logs and retry",
        "related_tools": ["agentHQ.getStatus"],
        "workflow": [
            "1. Check the server's stderr log",
            "2. Verify the logs directory is writable",
            "3. Retry request"
        ]
    },
    "upstream_error": {
        "action": "Jira rejected the request. Check the query, issue key and credentials.",
        "related_tools": ["jira.search", "jira.get"],
        "workflow": [
            "1. Read the status code and response body",
            "2. 401/403: check JIRA_EMAIL and JIRA_API_TOKEN",
            "3. 400: fix the JQL or fields; 404: check the issue key",
            "4. Retry"
        ]
    },
    "tool_not_found": {
        "action": "Call a tool this server lists",
        "related_tools": [],
        "workflow": [
            "1. List the server's tools",
            "2. Retry with a listed tool name"
        ]
    },
}


def validation_error(message: str, param_name: Optional[str] = None,
                     details: Optional[Dict[str, Any]] = None) -> TextContent:
    """Standard error for a parameter that failed validation"""
    error_details = {"error_type": "validation_error", "error_code": "VALIDATION_ERROR"}
    if param_name:
        error_details["param_name"] = param_name
    if details:
        error_details.update(details)
    return error_response(
        message,
        details=error_details,
        recovery=RECOVERY_PATTERNS["validation_error"]
    )


def timeout_error(tool_name: str, timeout: float) -> Sequence[TextContent]:
    """Standard error for timeout"""
    return [error_response(
        f"Tool '{tool_name}' timed out after {timeout} seconds.",
        details={"error_type": "timeout", "error_code": "TIMEOUT"},
        recovery=RECOVERY_PATTERNS["timeout"],
        context={"tool_name": tool_name, "timeout_seconds": timeout}
    )]


def system_error(tool_name: str, error: Exception, context: Optional[Dict[str, Any]] = None) -> Sequence[TextContent]:
    """Standard error for unexpected failures (storage, configuration, bugs)"""
    return [error_response(
        f"System error executing tool '{tool_name}': {str(error)}",
        details={"error_type": "system_error", "error_code": "SYSTEM_ERROR"},
        recovery=RECOVERY_PATTERNS["system_error"],
        context=context or {"tool_name": tool_name}
    )]


def upstream_error(tool_name: str, error: JiraRequestError) -> Sequence[TextContent]:
    """Standard error for a non-2xx answer from Jira"""
    return [error_response(
        str(error),
        details={
            "error_type": "upstream_error",
            "error_code": "UPSTREAM_HTTP_ERROR",
            "status_code": error.status_code,
        },
        recovery=RECOVERY_PATTERNS["upstream_error"],
        context={"tool_name": tool_name}
    )]


def tool_not_found_error(tool_name: str, available_tools: Optional[Sequence[str]] = None) -> Sequence[TextContent]:
    """Standard error for an unknown tool name"""
    return [error_response(
        f"Unknown tool: '{tool_name}'",
        details={"error_type": "tool_not_found", "error_code": "TOOL_NOT_FOUND"},
        recovery=RECOVERY_PATTERNS["tool_not_found"],
        context={"available_tools": sorted(available_tools)} if available_tools else None
    )]
