"""
Tool Schema Definitions - Shared by both MCP servers

Single source of truth for the tools each server lists. Input schemas mirror
the validation done in agent_hq.mcp_handlers.
"""

from typing import List

from mcp.types import Tool

from agent_hq.records import ACTIVITY_STATUSES, WORKFLOW_STATUSES

_CONTEXT_SCHEMA = {
    "type": "object",
    "description": "Free-form context. Stored bounded to 1000 characters of JSON.",
    "additionalProperties": True,
}


def _monitor_tools() -> List[Tool]:
    return [
        Tool(
            name="agentHQ.logActivity",
            title="Log Agent Activity",
            description="Log an agent invocation or activity for monitoring purposes.",
            inputSchema={
                "type": "object",
                "properties": {
                    "agent": {"type": "string", "minLength": 1, "description": "Agent name (max 100 chars stored)"},
                    "action": {"type": "string", "minLength": 1, "description": "What the agent did (max 200 chars stored)"},
                    "status": {"type": "string", "enum": sorted(ACTIVITY_STATUSES)},
                    "duration": {"type": "number", "minimum": 0, "description": "Duration in seconds"},
                    "context": _CONTEXT_SCHEMA,
                },
                "required": ["agent", "action", "status"],
            },
        ),
        Tool(
            name="agentHQ.logWorkflow",
            title="Log Workflow Activity",
            description="Log a workflow execution for monitoring purposes.",
            inputSchema={
                "type": "object",
                "properties": {
                    "workflowId": {"type": "string", "minLength": 1},
                    "workflowType": {"type": "string", "minLength": 1},
                    "status": {"type": "string", "enum": sorted(WORKFLOW_STATUSES)},
                    "agents": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Participating agents (first 20 kept)",
                    },
                    "duration": {"type": "number", "description": "Duration in seconds"},
                    "context": _CONTEXT_SCHEMA,
                },
                "required": ["workflowId", "workflowType", "status"],
            },
        ),
        Tool(
            name="agentHQ.getStatus",
            title="Get Agent HQ Status",
            description="Retrieve current status of Agent HQ, including active workflows and agent health.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="agentHQ.getMetrics",
            title="Get Agent Metrics",
            description="Retrieve performance metrics for all agents.",
            inputSchema={
                "type": "object",
                "properties": {
                    "agent": {"type": "string", "description": "Limit to one agent"},
                },
            },
        ),
        Tool(
            name="agentHQ.getRecentActivities",
            title="Get Recent Activities",
            description="Retrieve recent agent invocations and workflow activities.",
            inputSchema={
                "type": "object",
                "properties": {
                    "limit": {"type": "integer", "minimum": 1, "maximum": 100, "default": 20},
                    "type": {"type": "string", "enum": ["invocations", "workflows", "all"], "default": "all"},
                },
            },
        ),
        Tool(
            name="agentHQ.clearLogs",
            title="Clear Monitoring Logs",
            description="Clear all monitoring logs (use with caution).",
            inputSchema={
                "type": "object",
                "properties": {
                    "confirm": {"type": "boolean", "description": "Must be true to clear"},
                },
                "required": ["confirm"],
            },
        ),
    ]


def _jira_tools() -> List[Tool]:
    string_list = {"type": "array", "items": {"type": "string"}}
    return [
        Tool(
            name="jira.search",
            title="Search Jira issues",
            description="Run a JQL query against Jira.",
            inputSchema={
                "type": "object",
                "properties": {
                    "jql": {"type": "string", "minLength": 1},
                    "fields": string_list,
                    "expand": string_list,
                    "maxResults": {"type": "integer", "minimum": 1, "maximum": 100},
                    "startAt": {"type": "integer", "minimum": 0},
                },
                "required": ["jql"],
            },
        ),
        Tool(
            name="jira.get",
            title="Get Jira issue",
            description="Retrieve a Jira issue by key.",
            inputSchema={
                "type": "object",
                "properties": {
                    "issueKey": {"type": "string", "minLength": 1},
                    "fields": string_list,
                    "expand": string_list,
                },
                "required": ["issueKey"],
            },
        ),
    ]


def get_tool_definitions(server: str = "all") -> List[Tool]:
    """
    Get MCP tool definitions.

    Args:
        server: "monitor", "jira" or "all"
    """
    if server == "monitor":
        return _monitor_tools()
    if server == "jira":
        return _jira_tools()
    if server == "all":
        return _monitor_tools() + _jira_tools()
    raise ValueError(f"Unknown server: {server}")
