"""
Standardized logging utilities.

All Agent HQ modules log through this module so the MCP servers share one
format and never write log output to stdout (stdout carries the MCP stdio
protocol).

Usage:
    from agent_hq.logging_utils import get_logger

    logger = get_logger(__name__)
    logger.info("Operation completed")
    logger.error("Operation failed", exc_info=True)
"""

import logging
import os
import sys
from typing import Optional

_logger_configured = False


def configure_logging(level: Optional[int] = None, format_string: Optional[str] = None):
    """
    Configure root logger for the Agent HQ servers.

    Args:
        level: Logging level (default: AGENT_HQ_LOG_LEVEL env var, else INFO)
        format_string: Custom format string (optional)
    """
    global _logger_configured

    if _logger_configured:
        return

    if level is None:
        level_name = os.getenv("AGENT_HQ_LOG_LEVEL", "INFO").strip().upper()
        level = getattr(logging, level_name, logging.INFO)

    if format_string is None:
        format_string = "[AGENT-HQ] %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stderr,  # stdout is reserved for MCP stdio
        force=True
    )

    _logger_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    configure_logging()
    return logging.getLogger(name)
