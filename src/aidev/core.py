"""Core types shared by the orchestrator, the sandbox and the assistant adapter.

This module defines:
- RunStatus: The closed set of run states, with an UNKNOWN fallback
- ToolCall: A single pending tool invocation requested by the assistant
- ToolOutput: The answer to one ToolCall
- Session: What the human asked for (repository + task)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RunStatus(Enum):
    """Status of an assistant run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    """The run is blocked on tool outputs."""

    COMPLETED = "completed"
    """The assistant finished its turn; the human decides what happens next."""

    CANCELLED = "cancelled"
    CANCELLING = "cancelling"
    EXPIRED = "expired"
    FAILED = "failed"

    UNKNOWN = "unknown"
    """Any status string this client does not recognize."""

    @classmethod
    def parse(cls, value: str | None) -> "RunStatus":
        """Map a raw status string to a RunStatus, falling back to UNKNOWN."""
        for status in cls:
            if status is not cls.UNKNOWN and status.value == value:
                return status
        return cls.UNKNOWN

    @property
    def is_pending(self) -> bool:
        """True while the remote side is still working without our input."""
        return self in (RunStatus.QUEUED, RunStatus.IN_PROGRESS)

    @property
    def is_terminal(self) -> bool:
        """True for statuses that end the session."""
        return self in _TERMINAL


_TERMINAL = frozenset(
    {
        RunStatus.CANCELLED,
        RunStatus.CANCELLING,
        RunStatus.EXPIRED,
        RunStatus.FAILED,
        RunStatus.UNKNOWN,
    }
)


@dataclass
class ToolCall:
    """A tool invocation the assistant wants answered."""

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    raw_arguments: str = ""
    """The arguments exactly as received, kept for error reporting."""

    argument_error: str | None = None
    """Set when the raw arguments could not be decoded."""

    @classmethod
    def from_api(cls, call: Any) -> "ToolCall":
        """Build from an API tool call object (``call.id``, ``call.function``)."""
        function = call.function
        raw = function.arguments or ""
        arguments: dict[str, Any] = {}
        error = None
        if raw.strip():
            try:
                decoded = json.loads(raw)
            except json.JSONDecodeError as e:
                error = f"invalid JSON arguments: {e}"
            else:
                if isinstance(decoded, dict):
                    arguments = decoded
                else:
                    error = f"arguments must be a JSON object, got {type(decoded).__name__}"
        return cls(
            id=call.id,
            name=function.name,
            arguments=arguments,
            raw_arguments=raw,
            argument_error=error,
        )

    def __str__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.arguments.items())
        return f"{self.name}({args})"


@dataclass
class ToolOutput:
    """The result of one tool call, as sent back to the assistant."""

    tool_call_id: str
    output: str

    def to_api(self) -> dict[str, str]:
        """Convert to the submit-tool-outputs payload shape."""
        return {"tool_call_id": self.tool_call_id, "output": self.output}


@dataclass(frozen=True)
class Session:
    """What the human asked for at startup."""

    repo_name: str
    task: str

    def seed_message(self) -> str:
        """The first user message of the thread."""
        return (
            f"Pull this repo: '{self.repo_name}'. "
            f"Then carefully plan this task and start working on it: {self.task}"
        )


def pending_tool_calls(run: Any) -> list[ToolCall]:
    """Extract the pending tool calls of a run in ``requires_action``.

    Returns an empty list when the run carries no required action.
    """
    required = getattr(run, "required_action", None)
    if required is None:
        return []
    submit = getattr(required, "submit_tool_outputs", None)
    if submit is None:
        return []
    return [ToolCall.from_api(call) for call in submit.tool_calls or []]
