"""
Agent HQ monitoring tool handlers.

Write tools append to the activity log; read tools recompute metrics from it
on every call.
"""

from typing import Dict, Any, Sequence
from mcp.types import TextContent
import json

from agent_hq.activity_log import LogCategory
from agent_hq.records import ActivityRecord, WorkflowRecord
from agent_hq.logging_utils import get_logger
from .decorators import mcp_tool
from .shared import get_activity_store, get_metrics_aggregator
from .utils import success_response
from .validators import (
    validate_activity_status,
    validate_activity_type,
    validate_boolean,
    validate_context,
    validate_non_empty_string,
    validate_number,
    validate_string_list,
    validate_workflow_status,
)

logger = get_logger(__name__)

DEFAULT_RECENT_LIMIT = 20
MAX_RECENT_LIMIT = 100


@mcp_tool("agentHQ.logActivity", timeout=30.0)
async def handle_log_activity(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Log an agent invocation or activity"""
    agent, error = validate_non_empty_string(arguments.get("agent"), "agent")
    if error:
        return [error]
    action, error = validate_non_empty_string(arguments.get("action"), "action")
    if error:
        return [error]
    status, error = validate_activity_status(arguments.get("status"))
    if error:
        return [error]
    duration, error = validate_number(arguments.get("duration"), "duration", min_val=0)
    if error:
        return [error]
    context, error = validate_context(arguments.get("context"))
    if error:
        return [error]

    record = ActivityRecord.create(agent, action, status, duration=duration, context=context)
    entry = get_activity_store().append(LogCategory.INVOCATIONS, record.to_dict())

    return success_response(
        {"logged": entry},
        summary=f"Logged activity for {agent}: {action} ({status})"
    )


@mcp_tool("agentHQ.logWorkflow", timeout=30.0)
async def handle_log_workflow(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Log a workflow lifecycle event"""
    workflow_id, error = validate_non_empty_string(arguments.get("workflowId"), "workflowId")
    if error:
        return [error]
    workflow_type, error = validate_non_empty_string(arguments.get("workflowType"), "workflowType")
    if error:
        return [error]
    status, error = validate_workflow_status(arguments.get("status"))
    if error:
        return [error]
    agents, error = validate_string_list(arguments.get("agents"), "agents")
    if error:
        return [error]
    duration, error = validate_number(arguments.get("duration"), "duration")
    if error:
        return [error]
    context, error = validate_context(arguments.get("context"))
    if error:
        return [error]

    record = WorkflowRecord.create(
        workflow_id, workflow_type, status,
        agents=agents, duration=duration, context=context
    )
    entry = get_activity_store().append(LogCategory.WORKFLOWS, record.to_dict())

    return success_response(
        {"logged": entry},
        summary=f"Logged workflow: {workflow_type} ({workflow_id}) - {status}"
    )


@mcp_tool("agentHQ.getStatus", timeout=30.0)
async def handle_get_status(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Current Agent HQ status; every call is recorded in the status log"""
    status = get_metrics_aggregator().status_snapshot()
    get_activity_store().append(LogCategory.STATUS, {"type": "status_check", **status})

    workflows = status["workflows"]
    summary = (
        "Agent HQ Status:\n"
        f"Health: {status['health']}\n"
        f"Active Workflows: {workflows['inProgress']}\n"
        f"Total Workflows: {workflows['total']}\n"
        f"Agents Monitored: {len(status['agents'])}"
    )
    return success_response({"status": status}, summary=summary)


@mcp_tool("agentHQ.getMetrics", timeout=30.0)
async def handle_get_metrics(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Performance metrics for all agents, or for one agent"""
    # An empty agent name means "all agents"
    agent, error = validate_non_empty_string(arguments.get("agent") or None, "agent", required=False)
    if error:
        return [error]

    aggregator = get_metrics_aggregator()
    if agent:
        metrics = {agent: aggregator.agent_metrics_for(agent)}
        summary = f"Metrics for {agent}:\n{json.dumps(metrics[agent], indent=2)}"
    else:
        metrics = aggregator.compute_agent_metrics()
        summary = f"Metrics for {len(metrics)} agents"

    return success_response({"metrics": metrics}, summary=summary)


@mcp_tool("agentHQ.getRecentActivities", timeout=30.0)
async def handle_get_recent_activities(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Most recent invocations and/or workflow events"""
    limit, error = validate_number(arguments.get("limit"), "limit",
                                   min_val=1, max_val=MAX_RECENT_LIMIT, integer=True)
    if error:
        return [error]
    activity_type, error = validate_activity_type(arguments.get("type"))
    if error:
        return [error]

    if limit is None:
        limit = DEFAULT_RECENT_LIMIT
    if activity_type is None:
        activity_type = "all"

    store = get_activity_store()
    activities: Dict[str, Any] = {}
    if activity_type in ("invocations", "all"):
        activities["invocations"] = store.read_all(LogCategory.INVOCATIONS, limit=limit).records
    if activity_type in ("workflows", "all"):
        activities["workflows"] = store.read_all(LogCategory.WORKFLOWS, limit=limit).records

    summary = (
        f"Recent activities (last {limit}):\n"
        f"Invocations: {len(activities.get('invocations', []))}\n"
        f"Workflows: {len(activities.get('workflows', []))}"
    )
    return success_response(activities, summary=summary)


@mcp_tool("agentHQ.clearLogs", timeout=30.0)
async def handle_clear_logs(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Truncate all monitoring logs; requires confirm=true"""
    confirm, error = validate_boolean(arguments.get("confirm"), "confirm")
    if error:
        return [error]

    if not confirm:
        return success_response(
            {"cleared": []},
            summary="Log clearing cancelled. Set confirm=true to proceed."
        )

    cleared = get_activity_store().clear_all()
    logger.info(f"Cleared monitoring logs: {', '.join(cleared) or 'none present'}")

    return success_response(
        {"cleared": cleared},
        summary="All monitoring logs have been cleared."
    )
