"""Remote sandbox wrapper with an explicit action dispatch table.

The RemoteSandbox owns one E2B sandbox for the whole session:
1. Shell commands run through run(), streaming output to a log callback
2. Actions are registered by ActionName, never by free-form string
3. Pending tool calls of a run are dispatched in order, one output per call
4. Handler failures become error outputs instead of exceptions
5. close() releases the remote sandbox exactly once
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from e2b import CommandExitException, Sandbox

from aidev.actions import ActionName, default_handlers
from aidev.core import ToolCall, ToolOutput, pending_tool_calls
from aidev.errors import ActionError, ConfigError
from aidev.logging_utils import abbreviate

logger = logging.getLogger(__name__)

LogCallback = Callable[[str], None]


@dataclass(frozen=True)
class CommandResult:
    """Exit code and captured output of one sandbox command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @classmethod
    def from_e2b(cls, result: Any) -> "CommandResult":
        """Build from an E2B command result or CommandExitException."""
        return cls(result.exit_code, result.stdout or "", result.stderr or "")

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def __str__(self) -> str:
        output = "\n".join(s.rstrip() for s in (self.stdout, self.stderr) if s.strip())
        return f"exit code {self.exit_code}:\n{output}" if output else f"exit code {self.exit_code}"


class RemoteSandbox:
    """A remote execution sandbox holding the repository checkout."""

    def __init__(self, sandbox: Any, on_log: LogCallback | None = None, command_timeout: float = 300):
        """Wrap an already created E2B sandbox.

        Args:
            sandbox: The E2B ``Sandbox`` instance.
            on_log: Called with every chunk of command stdout/stderr.
            command_timeout: Seconds a single command may run.
        """
        self._sandbox = sandbox
        self._on_log = on_log
        self.command_timeout = command_timeout
        self._handlers: dict[ActionName, Callable[..., str]] = {}
        self._closed = False

    @classmethod
    def create(
        cls,
        api_key: str,
        template: str = "base",
        timeout: int = 3600,
        on_log: LogCallback | None = None,
    ) -> "RemoteSandbox":
        """Create a fresh E2B sandbox with every default action registered."""
        logger.debug("sandbox create template=%s timeout=%s", template, timeout)
        sandbox = Sandbox.create(template=template, timeout=timeout, api_key=api_key)
        remote = cls(sandbox, on_log=on_log)
        remote.register_defaults()
        logger.info("sandbox created id=%s", getattr(sandbox, "sandbox_id", "?"))
        return remote

    # =========================================================================
    # Remote primitives
    # =========================================================================

    @property
    def files(self) -> Any:
        """The E2B filesystem API of the sandbox."""
        return self._sandbox.files

    @property
    def closed(self) -> bool:
        return self._closed

    def run(
        self,
        command: str,
        cwd: str | None = None,
        envs: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a shell command in the sandbox.

        A non-zero exit code is reported in the result, not raised.
        """
        logger.debug("sandbox run command=%s cwd=%s", command, cwd)
        try:
            result = self._sandbox.commands.run(
                command,
                cwd=cwd,
                envs=envs,
                timeout=self.command_timeout,
                on_stdout=self._on_log,
                on_stderr=self._on_log,
            )
        except CommandExitException as e:
            result = e
        logger.debug("sandbox result exit_code=%s", result.exit_code)
        return CommandResult.from_e2b(result)

    # =========================================================================
    # Action registry
    # =========================================================================

    def register_action(self, name: ActionName, handler: Callable[..., str]) -> "RemoteSandbox":
        """Register the handler for ``name``. Returns self for chaining."""
        if not isinstance(name, ActionName):
            raise TypeError(f"Action name must be an ActionName, got {name!r}")
        self._handlers[name] = handler
        return self

    def register_defaults(self) -> "RemoteSandbox":
        """Register the built-in handler for every ActionName."""
        for name, handler in default_handlers(self).items():
            self.register_action(name, handler)
        return self

    @property
    def actions(self) -> dict[ActionName, Callable[..., str]]:
        return dict(self._handlers)

    def check_actions(self, requested: Iterable[str] = ()) -> None:
        """Verify the registry is complete.

        Args:
            requested: Tool names the assistant may call.

        Raises:
            ConfigError: If an ActionName has no handler, or the assistant
                declares a tool this sandbox cannot run.
        """
        missing = [name.value for name in ActionName if name not in self._handlers]
        unknown = sorted(
            name
            for name in set(requested)
            if ActionName.lookup(name) is None or ActionName.lookup(name) not in self._handlers
        )
        problems = []
        if missing:
            problems.append(f"no handler registered for: {', '.join(missing)}")
        if unknown:
            problems.append(f"assistant declares unsupported tools: {', '.join(unknown)}")
        if problems:
            raise ConfigError("; ".join(problems))

    # =========================================================================
    # Dispatch
    # =========================================================================

    def dispatch(self, call: ToolCall) -> ToolOutput:
        """Run one tool call and return its output.

        Never raises for handler failures; the error is described in the output.
        """
        logger.debug("action call id=%s call=%s", call.id, abbreviate(str(call)))
        if call.argument_error:
            return ToolOutput(call.id, f"Error: {call.name}: {call.argument_error}")

        name = ActionName.lookup(call.name)
        handler = self._handlers.get(name) if name is not None else None
        if handler is None:
            logger.warning("action unknown name=%s", call.name)
            return ToolOutput(call.id, f"Error: unknown action '{call.name}'")

        try:
            inspect.signature(handler).bind(**call.arguments)
        except TypeError as e:
            return ToolOutput(call.id, f"Error: invalid arguments for {call.name}: {e}")

        try:
            result = handler(**call.arguments)
        except ActionError as e:
            output = f"Error: {e}"
        except Exception as e:
            logger.exception("action failed name=%s", call.name)
            output = f"Error: {type(e).__name__}: {e}"
        else:
            output = "" if result is None else str(result)

        logger.debug("action result id=%s output=%s", call.id, abbreviate(output))
        return ToolOutput(call.id, output)

    def run_tool_calls(self, calls: Iterable[ToolCall]) -> list[ToolOutput]:
        """Dispatch ``calls`` sequentially, in order."""
        return [self.dispatch(call) for call in calls]

    def run_actions(self, run: Any) -> list[ToolOutput]:
        """Dispatch every pending tool call of ``run`` and return the outputs."""
        return self.run_tool_calls(pending_tool_calls(run))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Release the remote sandbox. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        logger.debug("sandbox close")
        self._sandbox.kill()
