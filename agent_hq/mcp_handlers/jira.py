"""
Jira query tool handlers (read-only).
"""

from typing import Dict, Any, Sequence
from mcp.types import TextContent

from agent_hq.errors import JiraRequestError
from agent_hq.logging_utils import get_logger
from .decorators import mcp_tool
from .error_helpers import upstream_error
from .shared import get_jira_client
from .utils import success_response
from .validators import validate_non_empty_string, validate_number, validate_string_list

logger = get_logger(__name__)


@mcp_tool("jira.search")
async def handle_jira_search(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Run a JQL query against Jira"""
    jql, error = validate_non_empty_string(arguments.get("jql"), "jql")
    if error:
        return [error]
    fields, error = validate_string_list(arguments.get("fields"), "fields")
    if error:
        return [error]
    expand, error = validate_string_list(arguments.get("expand"), "expand")
    if error:
        return [error]
    max_results, error = validate_number(arguments.get("maxResults"), "maxResults",
                                         min_val=1, max_val=100, integer=True)
    if error:
        return [error]
    start_at, error = validate_number(arguments.get("startAt"), "startAt", min_val=0, integer=True)
    if error:
        return [error]

    client = get_jira_client()
    try:
        data = await client.search(jql, fields=fields, expand=expand,
                                   max_results=max_results, start_at=start_at)
    except JiraRequestError as e:
        logger.warning(f"jira.search failed: {e}")
        return upstream_error("jira.search", e)

    total = data.get("total") if isinstance(data, dict) else None
    total_text = total if isinstance(total, int) and not isinstance(total, bool) else "unknown"
    issues = data.get("issues") if isinstance(data, dict) else None
    returned = len(issues) if isinstance(issues, list) else 0

    return success_response(
        {"result": data},
        summary=f"Search returned {returned} issues (total {total_text})."
    )


@mcp_tool("jira.get")
async def handle_jira_get(arguments: Dict[str, Any]) -> Sequence[TextContent]:
    """Retrieve a Jira issue by key"""
    issue_key, error = validate_non_empty_string(arguments.get("issueKey"), "issueKey")
    if error:
        return [error]
    fields, error = validate_string_list(arguments.get("fields"), "fields")
    if error:
        return [error]
    expand, error = validate_string_list(arguments.get("expand"), "expand")
    if error:
        return [error]

    client = get_jira_client()
    try:
        data = await client.get_issue(issue_key, fields=fields, expand=expand)
    except JiraRequestError as e:
        logger.warning(f"jira.get {issue_key} failed: {e}")
        return upstream_error("jira.get", e)

    summary = "No summary"
    if isinstance(data, dict) and isinstance(data.get("fields"), dict) and data["fields"].get("summary"):
        summary = str(data["fields"]["summary"])

    return success_response(
        {"result": data},
        summary=f"Fetched issue {issue_key}: {summary}"
    )
