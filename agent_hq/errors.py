"""
Exception types shared by the Agent HQ adapters.
"""

import json
from typing import Any, List, Optional


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class JiraRequestError(Exception):
    """Raised when the Jira REST API answers with a non-success status."""

    def __init__(self, status_code: int, body: Any, prefix: str = "Jira request failed with status"):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{prefix} {status_code}: {format_error_body(body)}")


def format_error_body(body: Any) -> str:
    """Render an upstream error body (parsed JSON or raw text) as text."""
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body)
    except (TypeError, ValueError):
        return str(body)
