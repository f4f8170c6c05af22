"""
Tests for agent_hq/mcp_handlers/error_helpers.py and the response builders
in utils.py.

All functions are pure (just build dict structures). No mocking needed.
"""

import json

from agent_hq.errors import JiraRequestError
from agent_hq.mcp_handlers.error_helpers import (
    RECOVERY_PATTERNS,
    system_error,
    timeout_error,
    tool_not_found_error,
    upstream_error,
    validation_error,
)
from agent_hq.mcp_handlers.utils import error_response, success_response


# ============================================================================
# RECOVERY_PATTERNS data structure
# ============================================================================

class TestRecoveryPatterns:

    def test_has_known_patterns(self):
        for key in ["validation_error", "timeout", "system_error", "upstream_error", "tool_not_found"]:
            assert key in RECOVERY_PATTERNS, f"Missing recovery pattern: {key}"

    def test_patterns_have_required_fields(self):
        for key, pattern in RECOVERY_PATTERNS.items():
            assert "action" in pattern, f"Pattern '{key}' missing 'action'"
            assert "related_tools" in pattern, f"Pattern '{key}' missing 'related_tools'"
            assert "workflow" in pattern, f"Pattern '{key}' missing 'workflow'"


# ============================================================================
# Helper to parse TextContent result
# ============================================================================

def _parse_error(result):
    """Parse the error result (list of TextContent) into a dict."""
    if not isinstance(result, list):
        result = [result]
    assert len(result) >= 1
    return json.loads(result[0].text)


# ============================================================================
# Error builders
# ============================================================================

class TestValidationError:

    def test_basic(self):
        data = _parse_error(validation_error("limit out of range", "limit"))
        assert data["success"] is False
        assert data["error"] == "limit out of range"
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["param_name"] == "limit"
        assert data["recovery"] == RECOVERY_PATTERNS["validation_error"]

    def test_extra_details(self):
        data = _parse_error(validation_error("bad", "x", {"constraint": "range"}))
        assert data["constraint"] == "range"


class TestTimeoutError:

    def test_basic(self):
        data = _parse_error(timeout_error("jira.search", 30.0))
        assert data["error_code"] == "TIMEOUT"
        assert "30.0 seconds" in data["error"]
        assert data["context"] == {"tool_name": "jira.search", "timeout_seconds": 30.0}


class TestSystemError:

    def test_basic(self):
        data = _parse_error(system_error("agentHQ.logActivity", OSError("No space left on device")))
        assert data["error_code"] == "SYSTEM_ERROR"
        assert data["error"] == "System error executing tool 'agentHQ.logActivity': No space left on device"
        assert data["context"] == {"tool_name": "agentHQ.logActivity"}

    def test_file_paths_stripped(self):
        error = RuntimeError("failed in /home/dev/project/agent_hq/activity_log.py")
        data = _parse_error(system_error("agentHQ.getStatus", error))
        assert "/home/dev" not in data["error"]
        assert "activity_log.py" in data["error"]


class TestUpstreamError:

    def test_carries_status_code(self):
        error = JiraRequestError(401, {"message": "Unauthorized"})
        data = _parse_error(upstream_error("jira.search", error))
        assert data["error_code"] == "UPSTREAM_HTTP_ERROR"
        assert data["status_code"] == 401
        assert data["error"] == 'Jira request failed with status 401: {"message": "Unauthorized"}'


class TestToolNotFoundError:

    def test_lists_available_tools(self):
        data = _parse_error(tool_not_found_error("jira.delete", ["jira.search", "jira.get"]))
        assert data["error_code"] == "TOOL_NOT_FOUND"
        assert data["context"]["available_tools"] == ["jira.get", "jira.search"]

    def test_without_available_tools(self):
        data = _parse_error(tool_not_found_error("x"))
        assert "context" not in data


# ============================================================================
# utils response builders
# ============================================================================

class TestResponseBuilders:

    def test_error_message_capped(self):
        data = json.loads(error_response("x" * 5000).text)
        assert data["error"] == "x" * 2000 + "..."

    def test_success_response_with_summary(self):
        result = success_response({"cleared": []}, summary="done")
        assert len(result) == 2
        assert result[0].text == "done"
        assert json.loads(result[1].text) == {"success": True, "cleared": []}

    def test_success_response_without_summary(self):
        result = success_response({"value": {1, 2}})
        assert len(result) == 1
        assert sorted(json.loads(result[0].text)["value"]) == [1, 2]

    def test_unserializable_values_become_strings(self):
        class Marker:
            def __str__(self):
                return "marker"

        result = success_response({"items": ("a", Marker())})
        assert json.loads(result[0].text)["items"] == ["a", "marker"]
