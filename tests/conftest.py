"""
Pytest configuration and fixtures for the Agent HQ MCP tests.
"""
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from agent_hq.activity_log import ActivityLogStore
from agent_hq.config import JiraConfig, MonitorConfig
from agent_hq.mcp_handlers import shared


@pytest.fixture
def logs_dir(tmp_path):
    """A logs directory that does not exist yet (the store creates it)."""
    return tmp_path / "logs"


@pytest.fixture
def store(logs_dir):
    return ActivityLogStore(logs_dir)


@pytest.fixture
def monitor_store(logs_dir):
    """Bind the monitor handlers to a temporary logs directory."""
    bound = shared.configure_monitor(MonitorConfig(logs_dir=logs_dir))
    yield bound
    shared._store = None
    shared._aggregator = None


@pytest.fixture
def jira_config():
    return JiraConfig(
        base_url="https://example.atlassian.net/",
        email="dev@example.com",
        token="secret-token",
    )
