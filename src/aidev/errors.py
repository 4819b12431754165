"""Exception hierarchy for the AI developer client."""

from __future__ import annotations


class AIDevError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(AIDevError):
    """Missing or invalid configuration."""


class SessionAborted(AIDevError):
    """The human aborted before the session started."""


class ActionError(AIDevError):
    """A sandbox action failed.

    Raised by action handlers; the sandbox dispatcher turns it into a tool
    output so the assistant can react.
    """


class BootstrapError(AIDevError):
    """Authenticating or cloning inside the sandbox failed."""

    def __init__(self, message: str, command: str = "", exit_code: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        parts = [self.args[0] if self.args else "bootstrap failed"]
        if self.exit_code is not None:
            parts.append(f"[exit code: {self.exit_code}]")
        if self.stderr:
            parts.append(f"[stderr] {self.stderr.strip()}")
        return " ".join(parts)
