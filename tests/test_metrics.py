"""
Tests for agent_hq/metrics.py - agent metrics and workflow status.
"""

import pytest

from agent_hq.activity_log import LogCategory
from agent_hq.metrics import MetricsAggregator


@pytest.fixture
def aggregator(store):
    return MetricsAggregator(store)


def _log_activity(store, agent, status, duration=None):
    record = {"agent": agent, "action": "run", "status": status}
    if duration is not None:
        record["duration"] = duration
    store.append(LogCategory.INVOCATIONS, record)


# ============================================================================
# compute_agent_metrics
# ============================================================================

class TestAgentMetrics:

    def test_empty_log_has_no_agents(self, aggregator):
        assert aggregator.compute_agent_metrics() == {}

    def test_absent_duration_counts_toward_average(self, store, aggregator):
        _log_activity(store, "A", "completed", duration=10)
        _log_activity(store, "A", "failed")

        m = aggregator.compute_agent_metrics()["A"]

        assert m["totalInvocations"] == 2
        assert m["successful"] == 1
        assert m["failed"] == 1
        assert m["totalDuration"] == 10
        assert m["successRate"] == "50.0%"
        assert m["avgDuration"] == "5.0s"

    def test_started_counts_only_toward_total(self, store, aggregator):
        _log_activity(store, "B", "started")
        _log_activity(store, "B", "completed", duration=3)
        _log_activity(store, "B", "completed", duration=1.5)

        m = aggregator.compute_agent_metrics()["B"]

        assert m["totalInvocations"] == 3
        assert m["successful"] == 2
        assert m["failed"] == 0
        assert m["successRate"] == "66.7%"
        assert m["avgDuration"] == "1.5s"

    def test_exact_ties_round_up(self, store, aggregator):
        _log_activity(store, "A", "completed", duration=2.5)
        _log_activity(store, "A", "started")

        assert aggregator.compute_agent_metrics()["A"]["avgDuration"] == "1.3s"

    def test_success_rate_tie_rounds_up(self, store, aggregator):
        _log_activity(store, "A", "completed")
        for _ in range(15):
            _log_activity(store, "A", "started")

        # 1/16 = 6.25%
        assert aggregator.compute_agent_metrics()["A"]["successRate"] == "6.3%"

    def test_agents_are_separate(self, store, aggregator):
        _log_activity(store, "A", "completed")
        _log_activity(store, "B", "failed")

        metrics = aggregator.compute_agent_metrics()

        assert set(metrics) == {"A", "B"}
        assert metrics["A"]["successRate"] == "100.0%"
        assert metrics["B"]["successRate"] == "0.0%"

    def test_records_without_agent_ignored(self, store, aggregator):
        store.append(LogCategory.INVOCATIONS, {"action": "orphan", "status": "completed"})
        store.append(LogCategory.INVOCATIONS, {"agent": 7, "status": "completed"})
        _log_activity(store, "A", "completed")

        assert list(aggregator.compute_agent_metrics()) == ["A"]

    def test_non_numeric_duration_ignored(self, store, aggregator):
        store.append(LogCategory.INVOCATIONS, {"agent": "A", "status": "completed", "duration": "12"})
        store.append(LogCategory.INVOCATIONS, {"agent": "A", "status": "completed", "duration": True})

        m = aggregator.compute_agent_metrics()["A"]
        assert m["totalDuration"] == 0
        assert m["avgDuration"] == "0.0s"

    def test_scans_entire_log(self, store, aggregator):
        for _ in range(120):
            _log_activity(store, "busy", "completed", duration=1)

        assert aggregator.compute_agent_metrics()["busy"]["totalInvocations"] == 120

    def test_agent_metrics_for_unknown_agent(self, store, aggregator):
        _log_activity(store, "A", "completed")
        assert aggregator.agent_metrics_for("nobody") == {}
        assert aggregator.agent_metrics_for("A")["totalInvocations"] == 1


# ============================================================================
# compute_workflow_status
# ============================================================================

class TestWorkflowStatus:

    def test_only_last_50_records_scanned(self, store, aggregator):
        for i in range(60):
            store.append(LogCategory.WORKFLOWS, {"workflowId": f"wf-{i}", "status": "completed"})

        status = aggregator.compute_workflow_status()

        assert status["total"] == 50
        assert status["completed"] == 50

    def test_partitions_by_status(self, store, aggregator):
        for s in ["started", "in-progress", "completed", "failed", "failed", "paused"]:
            store.append(LogCategory.WORKFLOWS, {"workflowId": s, "status": s})

        status = aggregator.compute_workflow_status()

        assert status["total"] == 6
        assert status["inProgress"] == 2
        assert status["completed"] == 1
        assert status["failed"] == 2

    def test_recent_workflows_newest_first(self, store, aggregator):
        for i in range(15):
            store.append(LogCategory.WORKFLOWS, {"workflowId": f"wf-{i}", "status": "started"})

        recent = aggregator.compute_workflow_status()["recentWorkflows"]

        assert [w["workflowId"] for w in recent] == [f"wf-{i}" for i in range(14, 4, -1)]

    def test_empty_log(self, aggregator):
        status = aggregator.compute_workflow_status()
        assert status == {"total": 0, "inProgress": 0, "completed": 0, "failed": 0, "recentWorkflows": []}


# ============================================================================
# status_snapshot
# ============================================================================

class TestStatusSnapshot:

    def test_idle_without_in_progress_workflows(self, store, aggregator):
        store.append(LogCategory.WORKFLOWS, {"workflowId": "wf", "status": "completed"})
        assert aggregator.status_snapshot()["health"] == "idle"

    def test_active_with_in_progress_workflow(self, store, aggregator):
        store.append(LogCategory.WORKFLOWS, {"workflowId": "wf", "status": "in-progress"})
        _log_activity(store, "A", "started")

        snapshot = aggregator.status_snapshot()

        assert snapshot["health"] == "active"
        assert list(snapshot) == ["timestamp", "agents", "workflows", "health"]
        assert "A" in snapshot["agents"]
