"""
Shared context for MCP handlers.

Each server process configures the objects its handlers use once at start
(configure_monitor / configure_jira). Handlers fetch them through the
getters; the monitor falls back to a store built from the environment so
handlers also work when called without a server (scripts, tests).
"""

from typing import Optional

from agent_hq.activity_log import ActivityLogStore
from agent_hq.config import JiraConfig, MonitorConfig
from agent_hq.jira_client import JiraClient
from agent_hq.metrics import MetricsAggregator

_store: Optional[ActivityLogStore] = None
_aggregator: Optional[MetricsAggregator] = None
_jira_client: Optional[JiraClient] = None


def configure_monitor(config: MonitorConfig) -> ActivityLogStore:
    """Bind the monitor handlers to the logs directory in `config`."""
    global _store, _aggregator
    _store = ActivityLogStore(config.logs_dir)
    _aggregator = MetricsAggregator(_store)
    return _store


def get_activity_store() -> ActivityLogStore:
    if _store is None:
        configure_monitor(MonitorConfig.from_env())
    return _store


def get_metrics_aggregator() -> MetricsAggregator:
    if _aggregator is None:
        configure_monitor(MonitorConfig.from_env())
    return _aggregator


def configure_jira(client: Optional[JiraClient]) -> None:
    """Bind the Jira handlers to a client (None unbinds)."""
    global _jira_client
    _jira_client = client


def get_jira_client() -> JiraClient:
    """
    Return the configured Jira client, building one from the environment
    on first use.

    Raises:
        ConfigurationError: if the Jira environment variables are missing
    """
    global _jira_client
    if _jira_client is None:
        _jira_client = JiraClient(JiraConfig.from_env())
    return _jira_client
