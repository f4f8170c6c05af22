"""
Agent HQ MCP adapters: activity monitor and read-only Jira queries.
"""

__version__ = "0.1.0"
