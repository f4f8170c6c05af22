"""
Configuration for the Agent HQ MCP servers.

Configuration Sources:
1. Process environment
2. A `.env` file in the working directory (loaded by python-dotenv; real
   environment variables win)

Both config objects are built once at process start and passed to the
components that need them.
"""

import base64
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from agent_hq.errors import ConfigurationError

# Error text returned to MCP clients is capped at this length
MAX_ERROR_MESSAGE_LENGTH = 2000

JIRA_ENV_VARS = ("JIRA_BASE_URL", "JIRA_EMAIL", "JIRA_API_TOKEN")

_TRUTHY = ("1", "true", "yes", "on")


def load_env_file(path: Optional[Path] = None) -> None:
    """Populate os.environ from a .env file without overriding existing values."""
    if path is None:
        load_dotenv(override=False)
    else:
        load_dotenv(path, override=False)


def _clean(value: Optional[str]) -> str:
    # Empty and whitespace-only values count as missing
    return value.strip() if value and value.strip() else ""


@dataclass
class MonitorConfig:
    """Where the activity monitor keeps its log files."""

    logs_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MonitorConfig":
        env = os.environ if environ is None else environ
        raw = _clean(env.get("AGENT_HQ_LOGS_DIR"))
        if raw:
            return cls(logs_dir=Path(raw).expanduser())
        return cls()


@dataclass
class JiraConfig:
    """Credentials and endpoint for the Jira REST API."""

    base_url: str
    email: str
    token: str
    cloud_routing: bool = False
    timeout_seconds: Optional[float] = None

    def __post_init__(self):
        self.base_url = _clean(self.base_url).rstrip("/")
        self.email = _clean(self.email)
        self.token = _clean(self.token)

        missing = []
        if not self.base_url:
            missing.append("JIRA_BASE_URL")
        if not self.email:
            missing.append("JIRA_EMAIL")
        if not self.token:
            missing.append("JIRA_API_TOKEN")
        if missing:
            raise ConfigurationError(
                f"Missing required Jira env vars: {', '.join(missing)}. "
                "Ensure they are set in .env or your shell.",
                missing=missing,
            )

    @property
    def auth_header(self) -> str:
        credentials = f"{self.email}:{self.token}".encode("utf-8")
        return f"Basic {base64.b64encode(credentials).decode('ascii')}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JiraConfig":
        """
        Build the config from environment variables.

        Raises:
            ConfigurationError: naming every missing variable
        """
        env = os.environ if environ is None else environ

        timeout_raw = _clean(env.get("JIRA_TIMEOUT_SECONDS"))
        timeout_seconds = None
        if timeout_raw:
            try:
                timeout_seconds = float(timeout_raw)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid JIRA_TIMEOUT_SECONDS: '{timeout_raw}'. Must be a number."
                )

        return cls(
            base_url=env.get("JIRA_BASE_URL") or "",
            email=env.get("JIRA_EMAIL") or "",
            token=env.get("JIRA_API_TOKEN") or "",
            cloud_routing=_clean(env.get("JIRA_CLOUD_ROUTING")).lower() in _TRUTHY,
            timeout_seconds=timeout_seconds,
        )
