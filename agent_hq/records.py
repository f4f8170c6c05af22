"""
Record types persisted by the activity monitor.

Field limits keep a single log line small no matter what a caller sends.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MAX_AGENT_LENGTH = 100
MAX_ACTION_LENGTH = 200
MAX_ID_LENGTH = 100
MAX_WORKFLOW_AGENTS = 20
MAX_CONTEXT_CHARS = 1000

ACTIVITY_STATUSES = {"started", "completed", "failed"}
WORKFLOW_STATUSES = {"started", "in-progress", "completed", "failed"}
IN_PROGRESS_STATUSES = {"started", "in-progress"}

TRUNCATED_MARKER = "_truncated"


def compact_json(value: Any) -> str:
    """Serialize without whitespace; character counts match what is stored."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def bound_context(context: Optional[Dict[str, Any]],
                  max_chars: int = MAX_CONTEXT_CHARS) -> Optional[Dict[str, Any]]:
    """
    Bound a context mapping to max_chars of its compact JSON form.

    A context that fits is returned unchanged. Otherwise top-level entries are
    kept in insertion order while the result, including a `_truncated: true`
    marker, still fits; entries that would overflow are dropped. A caller key
    named `_truncated` is dropped too, so the marker is always `true`. The
    result is always a valid JSON object.

    Args:
        context: Caller-supplied mapping (or None)
        max_chars: Size limit of the serialized form

    Returns:
        The bounded mapping, or None when no context was supplied
    """
    if context is None:
        return None

    if len(compact_json(context)) <= max_chars:
        return context

    bounded: Dict[str, Any] = {TRUNCATED_MARKER: True}
    for key, value in context.items():
        if key == TRUNCATED_MARKER:
            continue
        candidate = dict(bounded)
        candidate[key] = value
        if len(compact_json(candidate)) <= max_chars:
            bounded = candidate

    # Marker goes last so surviving entries keep their original order
    marker = bounded.pop(TRUNCATED_MARKER)
    bounded[TRUNCATED_MARKER] = marker
    return bounded


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    # timestamp is kept as a placeholder; the store fills it at append time
    return {key: value for key, value in data.items()
            if value is not None or key == "timestamp"}


@dataclass
class ActivityRecord:
    """One agent invocation"""
    agent: str
    action: str
    status: str  # "started", "completed", "failed"
    duration: Optional[float] = None
    context: Optional[Dict[str, Any]] = None

    @classmethod
    def create(cls, agent: str, action: str, status: str,
               duration: Optional[float] = None,
               context: Optional[Dict[str, Any]] = None) -> "ActivityRecord":
        """Build a record with field limits applied."""
        return cls(
            agent=agent[:MAX_AGENT_LENGTH],
            action=action[:MAX_ACTION_LENGTH],
            status=status,
            duration=duration,
            context=bound_context(context),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "timestamp": None,
            "agent": self.agent,
            "action": self.action,
            "status": self.status,
            "duration": self.duration,
            "context": self.context,
        })


@dataclass
class WorkflowRecord:
    """One workflow lifecycle event"""
    workflow_id: str
    workflow_type: str
    status: str  # "started", "in-progress", "completed", "failed"
    agents: List[str] = field(default_factory=list)
    duration: Optional[float] = None
    context: Optional[Dict[str, Any]] = None

    @classmethod
    def create(cls, workflow_id: str, workflow_type: str, status: str,
               agents: Optional[List[str]] = None,
               duration: Optional[float] = None,
               context: Optional[Dict[str, Any]] = None) -> "WorkflowRecord":
        """Build a record with field limits applied."""
        return cls(
            workflow_id=workflow_id[:MAX_ID_LENGTH],
            workflow_type=workflow_type[:MAX_ID_LENGTH],
            status=status,
            agents=[a[:MAX_AGENT_LENGTH] for a in (agents or [])[:MAX_WORKFLOW_AGENTS]],
            duration=duration,
            context=bound_context(context),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "workflowId": self.workflow_id,
            "timestamp": None,
            "workflowType": self.workflow_type,
            "status": self.status,
            "agents": list(self.agents),
            "duration": self.duration,
            "context": self.context,
        })
