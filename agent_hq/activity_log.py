"""
Append-only JSON-line activity log.

One file per category under the logs directory. Records are only ever
appended; the only deletion is truncating a whole file.

Reads are best-effort: a line that does not parse as a JSON object is
skipped and counted, never raised. A monitoring log must not break the
agents that write to it.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from agent_hq.logging_utils import get_logger
from agent_hq.records import compact_json

logger = get_logger(__name__)


class LogCategory(str, Enum):
    """Log partitions and their file names"""
    INVOCATIONS = "invocations"
    WORKFLOWS = "workflows"
    STATUS = "status"

    @property
    def filename(self) -> str:
        return f"agent-hq-{self.value}.log"


@dataclass
class ReadResult:
    """Records parsed from a log file plus how many lines were dropped"""
    records: List[Dict[str, Any]] = field(default_factory=list)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_lines(content: str) -> ReadResult:
    """
    Parse JSON-lines text, skipping blank and malformed lines.

    Args:
        content: Raw file contents

    Returns:
        ReadResult with parsed objects in file order and the skip count
    """
    result = ReadResult()
    # Only "\n" ends a record; other line separators may appear inside strings
    for line in content.split("\n"):
        if not line.strip():
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            result.skipped += 1
            continue
        if not isinstance(entry, dict):
            result.skipped += 1
            continue
        result.records.append(entry)
    return result


class ActivityLogStore:
    """Manages the append-only log files for every category"""

    def __init__(self, logs_dir: Path):
        self.logs_dir = Path(logs_dir)

    def path_for(self, category: LogCategory) -> Path:
        return self.logs_dir / LogCategory(category).filename

    def _ensure_logs_dir(self):
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def append(self, category: LogCategory, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append one record with a fresh timestamp.

        The store's timestamp replaces any timestamp already in the record.
        OSError from the filesystem propagates to the caller.

        Returns:
            The entry exactly as written
        """
        self._ensure_logs_dir()
        entry = dict(record)
        entry["timestamp"] = utc_timestamp()

        # Write before responding so acknowledged writes are on disk
        with open(self.path_for(category), "a", encoding="utf-8") as f:
            f.write(compact_json(entry) + "\n")
        return entry

    def read_all(self, category: LogCategory, limit: Optional[int] = None) -> ReadResult:
        """
        Read every parseable record of a category.

        Args:
            category: Which log to read
            limit: If positive, keep only the last `limit` records (file order)

        Returns:
            ReadResult; empty when the file does not exist
        """
        self._ensure_logs_dir()
        path = self.path_for(category)
        if not path.exists():
            return ReadResult()

        # Undecodable bytes become U+FFFD so the line fails to parse and is skipped
        content = path.read_text(encoding="utf-8", errors="replace")
        result = parse_lines(content)
        if result.skipped:
            logger.debug(f"Skipped {result.skipped} malformed line(s) in {path.name}")

        if limit and limit > 0:
            result.records = result.records[-limit:]
        return result

    def clear(self, category: LogCategory) -> bool:
        """
        Truncate a category's file to zero length.

        Returns:
            True if a file was truncated, False if it did not exist
        """
        path = self.path_for(category)
        if not path.exists():
            return False
        with open(path, "w", encoding="utf-8"):
            pass
        return True

    def clear_all(self) -> List[str]:
        """Truncate every existing log file. Returns the categories cleared."""
        self._ensure_logs_dir()
        return [category.value for category in LogCategory if self.clear(category)]
