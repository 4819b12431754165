"""Thin adapter over the hosted assistant (threads/runs) API.

Keeps every openai call the orchestrator makes in one place so the loop can
be driven by a fake in tests.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from openai import OpenAI

from aidev.core import Session, ToolOutput

logger = logging.getLogger(__name__)


def first_text(message: Any) -> str:
    """Return the first text-typed content part of ``message``, or ""."""
    for part in getattr(message, "content", None) or []:
        if getattr(part, "type", None) == "text":
            return part.text.value
    return ""


def function_tool_names(assistant: Any) -> list[str]:
    """Names of the function tools an assistant declares."""
    names = []
    for tool in getattr(assistant, "tools", None) or []:
        if getattr(tool, "type", None) == "function":
            names.append(tool.function.name)
    return names


class AssistantClient:
    """Calls to the hosted assistant API used by one session."""

    def __init__(self, client: OpenAI | None = None):
        self._client = client or OpenAI()

    @property
    def beta(self) -> Any:
        return self._client.beta

    def get_assistant(self, assistant_id: str) -> Any:
        logger.debug("assistant retrieve id=%s", assistant_id)
        return self.beta.assistants.retrieve(assistant_id)

    def create_thread(self, session: Session) -> Any:
        """Create the session thread, seeded with the task."""
        thread = self.beta.threads.create(
            messages=[{"role": "user", "content": session.seed_message()}],
        )
        logger.info("thread created id=%s", thread.id)
        return thread

    def create_run(self, thread_id: str, assistant_id: str) -> Any:
        run = self.beta.threads.runs.create(thread_id=thread_id, assistant_id=assistant_id)
        logger.info("run created id=%s status=%s", run.id, run.status)
        return run

    def retrieve_run(self, thread_id: str, run_id: str) -> Any:
        return self.beta.threads.runs.retrieve(run_id=run_id, thread_id=thread_id)

    def submit_tool_outputs(self, thread_id: str, run_id: str, outputs: Iterable[ToolOutput]) -> Any:
        """Submit one batch of outputs in a single call."""
        payload = [output.to_api() for output in outputs]
        logger.debug("run submit run_id=%s outputs=%s", run_id, len(payload))
        return self.beta.threads.runs.submit_tool_outputs(
            run_id=run_id,
            thread_id=thread_id,
            tool_outputs=payload,
        )

    def list_messages(self, thread_id: str) -> list[Any]:
        """Messages of the thread, newest first."""
        page = self.beta.threads.messages.list(thread_id=thread_id, order="desc")
        return list(page.data)

    def latest_reply(self, thread_id: str) -> str:
        """First text part of the most recent message in the thread."""
        messages = self.list_messages(thread_id)
        if not messages:
            return ""
        return first_text(messages[0])

    def add_user_message(self, thread_id: str, content: str) -> Any:
        logger.debug("thread message thread_id=%s chars=%s", thread_id, len(content))
        return self.beta.threads.messages.create(thread_id=thread_id, role="user", content=content)

    def create_assistant(self, name: str, instructions: str, model: str, tools: list[dict]) -> Any:
        assistant = self.beta.assistants.create(
            name=name,
            instructions=instructions,
            model=model,
            tools=tools,
        )
        logger.info("assistant created id=%s", assistant.id)
        return assistant
