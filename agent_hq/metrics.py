"""
Metrics and status derived from the activity log.

Nothing here is cached: every call rescans the log files.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

from agent_hq.activity_log import ActivityLogStore, LogCategory, utc_timestamp
from agent_hq.records import IN_PROGRESS_STATUSES

# Workflow status only looks at the tail of the workflow log
WORKFLOW_SCAN_LIMIT = 50
RECENT_WORKFLOWS = 10


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _one_decimal(value: float) -> str:
    """Format with one decimal place, rounding exact ties up."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class MetricsAggregator:
    """Computes agent metrics and workflow status from an ActivityLogStore"""

    def __init__(self, store: ActivityLogStore):
        self.store = store

    def compute_agent_metrics(self) -> Dict[str, Dict[str, Any]]:
        """
        Per-agent invocation metrics over the entire invocation log.

        Records without a duration count toward the total but add zero
        duration. Records without a string `agent` are ignored.

        Returns:
            agent -> {totalInvocations, successful, failed, totalDuration,
                      avgDuration, successRate}
        """
        metrics: Dict[str, Dict[str, Any]] = {}

        for inv in self.store.read_all(LogCategory.INVOCATIONS):
            agent = inv.get("agent")
            if not isinstance(agent, str):
                continue

            m = metrics.setdefault(agent, {
                "totalInvocations": 0,
                "successful": 0,
                "failed": 0,
                "totalDuration": 0,
                "avgDuration": 0,
            })

            m["totalInvocations"] += 1
            status = inv.get("status")
            if status == "completed":
                m["successful"] += 1
            elif status == "failed":
                m["failed"] += 1

            duration = inv.get("duration")
            if _is_number(duration):
                m["totalDuration"] += duration

        for m in metrics.values():
            total = m["totalInvocations"]
            m["successRate"] = f"{_one_decimal(m['successful'] / total * 100)}%" if total > 0 else "0%"
            m["avgDuration"] = f"{_one_decimal(m['totalDuration'] / total)}s" if total > 0 else "0s"

        return metrics

    def agent_metrics_for(self, agent: str) -> Dict[str, Any]:
        """Metrics for one agent, or an empty dict if it has no records."""
        return self.compute_agent_metrics().get(agent, {})

    def compute_workflow_status(self) -> Dict[str, Any]:
        """
        Summary of the last WORKFLOW_SCAN_LIMIT workflow records.

        `total` counts only the scanned records, not the whole history.
        `recentWorkflows` lists the newest RECENT_WORKFLOWS, newest first.
        """
        workflows = self.store.read_all(LogCategory.WORKFLOWS, limit=WORKFLOW_SCAN_LIMIT).records

        in_progress = [w for w in workflows if w.get("status") in IN_PROGRESS_STATUSES]
        completed = [w for w in workflows if w.get("status") == "completed"]
        failed = [w for w in workflows if w.get("status") == "failed"]

        return {
            "total": len(workflows),
            "inProgress": len(in_progress),
            "completed": len(completed),
            "failed": len(failed),
            "recentWorkflows": list(reversed(workflows[-RECENT_WORKFLOWS:])),
        }

    def status_snapshot(self) -> Dict[str, Any]:
        """Current Agent HQ status: agent metrics, workflow status and health."""
        agent_metrics = self.compute_agent_metrics()
        workflow_status = self.compute_workflow_status()
        return {
            "timestamp": utc_timestamp(),
            "agents": agent_metrics,
            "workflows": workflow_status,
            "health": "active" if workflow_status["inProgress"] > 0 else "idle",
        }
