"""Conversation/run orchestrator.

The agent drives one session:
1. Creates a thread seeded with the task and starts a run
2. Polls the run on a fixed interval
3. Relays tool calls to the sandbox and submits the outputs
4. On completion, shows the assistant's reply and asks the human
5. Starts a new run on the same thread for every follow-up, until ``exit``

Anything raised by the remote services propagates to the caller; only
tool-call failures are turned into outputs (by the sandbox).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from aidev.assistant import AssistantClient, function_tool_names
from aidev.console import Spinner, print_error
from aidev.core import RunStatus, Session
from aidev.prompts import EXIT_SENTINEL, Prompter
from aidev.sandbox import RemoteSandbox

logger = logging.getLogger(__name__)


@dataclass
class AgentConfig:
    """Configuration for the orchestrator."""

    assistant_id: str
    poll_interval: float = 1.0


class DeveloperAgent:
    """Relays one human session between the assistant and the sandbox."""

    def __init__(
        self,
        assistant: AssistantClient,
        sandbox: RemoteSandbox,
        prompter: Prompter,
        config: AgentConfig,
        spinner: Spinner | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the agent.

        Args:
            assistant: Adapter over the hosted assistant API.
            sandbox: Sandbox with every action registered.
            prompter: Source of the human's follow-up replies.
            config: Assistant id and poll interval.
            spinner: Waiting indicator. If None, a default one is created.
            sleep: Delay function between polls.
        """
        self.assistant = assistant
        self.sandbox = sandbox
        self.prompter = prompter
        self.config = config
        self.spinner = spinner or Spinner()
        self._sleep = sleep
        self.thread_id: str | None = None
        self.run_id: str | None = None

    def run(self, session: Session) -> RunStatus:
        """Work on ``session`` until the human exits or the run ends.

        Returns:
            The status that ended the session; COMPLETED when the human
            typed ``exit``.
        """
        self.spinner.start()
        try:
            assistant = self.assistant.get_assistant(self.config.assistant_id)
            self.sandbox.check_actions(function_tool_names(assistant))

            thread = self.assistant.create_thread(session)
            self.thread_id = thread.id
            run = self.assistant.create_run(thread.id, assistant.id)
            return self._poll(run, assistant.id)
        finally:
            self.spinner.stop()

    def _poll(self, run: Any, assistant_id: str) -> RunStatus:
        while True:
            self.run_id = run.id
            self._sleep(self.config.poll_interval)

            status = RunStatus.parse(run.status)
            logger.debug("run poll id=%s status=%s", run.id, run.status)

            if status is RunStatus.REQUIRES_ACTION:
                self._handle_tool_calls(run)
            elif status is RunStatus.COMPLETED:
                next_run = self._handle_completed(assistant_id)
                if next_run is None:
                    return RunStatus.COMPLETED
                run = next_run
            elif status is RunStatus.UNKNOWN:
                self.spinner.stop()
                logger.error("run unknown status=%s id=%s", run.status, run.id)
                print_error(f"Unknown status: {run.status}")
                return status
            elif status.is_terminal:
                logger.info("run ended status=%s id=%s", status.value, run.id)
                return status

            run = self.assistant.retrieve_run(self.thread_id, run.id)

    def _handle_tool_calls(self, run: Any) -> None:
        self.spinner.stop()
        outputs = self.sandbox.run_actions(run)
        self.spinner.start()

        # TODO: confirm whether an empty batch must still be submitted to keep the run moving.
        if outputs:
            self.assistant.submit_tool_outputs(self.thread_id, run.id, outputs)
        else:
            logger.warning("run requires_action without tool calls id=%s", run.id)

    def _handle_completed(self, assistant_id: str) -> Any | None:
        """Ask the human how to continue; returns the next run, or None to stop."""
        self.spinner.stop()
        question = self.assistant.latest_reply(self.thread_id)
        response = self.prompter.follow_up(question)
        if response == EXIT_SENTINEL:
            logger.info("session exit thread_id=%s", self.thread_id)
            return None

        self.spinner.start()
        self.assistant.add_user_message(self.thread_id, response)
        return self.assistant.create_run(self.thread_id, assistant_id)
