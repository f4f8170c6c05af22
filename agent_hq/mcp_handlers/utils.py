"""
Common utilities for MCP tool handlers.
"""

from typing import Dict, Any, Sequence, Optional
from mcp.types import TextContent
import json
import re

from agent_hq.config import MAX_ERROR_MESSAGE_LENGTH
from agent_hq.logging_utils import get_logger

logger = get_logger(__name__)


def error_response(
    message: str,
    details: Optional[Dict[str, Any]] = None,
    recovery: Optional[Dict[str, Any]] = None,
    context: Optional[Dict[str, Any]] = None
) -> TextContent:
    """
    Create an error response with optional recovery guidance and context.

    SECURITY: Sanitizes error messages so file paths and tracebacks do not
    leak to clients.

    Args:
        message: Error message (will be sanitized)
        details: Optional additional error fields (string values sanitized)
        recovery: Optional recovery suggestions for the calling agent
        context: Optional context (what was happening)

    Returns:
        TextContent with error response
    """
    response = {
        "success": False,
        "error": _sanitize_error_message(message)
    }

    if details:
        for key, value in details.items():
            if isinstance(value, str):
                response[key] = _sanitize_error_message(value)
            else:
                response[key] = value

    if recovery:
        response["recovery"] = recovery

    if context:
        response["context"] = context

    return TextContent(
        type="text",
        text=json.dumps(_make_json_serializable(response), indent=2, ensure_ascii=False)
    )


def _sanitize_error_message(message: str) -> str:
    """
    Sanitize error messages to prevent internal structure leakage.

    Removes directory parts of file paths and traceback framing, and caps
    the length.
    """
    if not isinstance(message, str):
        return str(message)

    # Keep filename, drop directories
    message = re.sub(r'/[^\s]+/([^/\s]+\.py)', r'\1', message)

    message = re.sub(r'Traceback.*?File', 'Error in', message, flags=re.DOTALL)
    message = re.sub(r'File "[^"]+", line \d+', 'Internal error', message)

    if len(message) > MAX_ERROR_MESSAGE_LENGTH:
        message = message[:MAX_ERROR_MESSAGE_LENGTH] + "..."

    return message


def _make_json_serializable(obj: Any) -> Any:
    """
    Recursively convert non-JSON-serializable types to JSON-compatible types.

    Handles:
    - tuples and sets → lists
    - Other non-serializable types → strings
    """
    if obj is None:
        return None

    if isinstance(obj, dict):
        return {str(key): _make_json_serializable(value) for key, value in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_make_json_serializable(item) for item in obj]

    if isinstance(obj, (str, int, float, bool)):
        return obj

    try:
        return str(obj)
    except Exception:
        return f"<non-serializable: {type(obj).__name__}>"


def success_response(data: Dict[str, Any], summary: Optional[str] = None) -> Sequence[TextContent]:
    """
    Create a success response.

    Args:
        data: Response data (will have "success": True added)
        summary: Optional human-readable text, sent as the first block

    Returns:
        Sequence of TextContent: [summary,] JSON payload
    """
    response = {
        "success": True,
        **data
    }

    try:
        json_text = json.dumps(_make_json_serializable(response), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error(f"JSON serialization error: {e}", exc_info=True)
        json_text = json.dumps(_make_json_serializable(response), indent=2, ensure_ascii=False, default=str)

    blocks = []
    if summary:
        blocks.append(TextContent(type="text", text=summary))
    blocks.append(TextContent(type="text", text=json_text))
    return blocks
