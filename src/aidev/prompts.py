"""Interactive prompts for the human driving the session."""

from __future__ import annotations

from prompt_toolkit import PromptSession

from aidev.core import Session
from aidev.errors import SessionAborted

EXIT_SENTINEL = "exit"

REPO_PROMPT = "Enter repo name (eg: username/repo): "
TASK_PROMPT = "Enter the task you want the AI developer to work on: "
FOLLOW_UP_HINT = f"If you want to exit write '{EXIT_SENTINEL}', otherwise write your response:\n"


class Prompter:
    """Blocking text prompts backed by prompt_toolkit."""

    def __init__(self, session: PromptSession | None = None):
        self._session = session

    def ask(self, message: str) -> str:
        """Show ``message`` and return the line the human typed.

        Empty input is returned as is.

        Raises:
            EOFError, KeyboardInterrupt: If the human aborts the prompt.
        """
        if self._session is None:
            self._session = PromptSession()
        return self._session.prompt(message)

    def init_chat(self) -> Session:
        """Ask for the repository and the task."""
        try:
            repo_name = self.ask(REPO_PROMPT)
            task = self.ask(TASK_PROMPT)
        except (EOFError, KeyboardInterrupt) as exc:
            raise SessionAborted("Aborted before the session started") from exc
        return Session(repo_name=repo_name, task=task)

    def follow_up(self, question: str) -> str:
        """Show the assistant's reply and ask how to continue.

        Aborting the prompt counts as answering ``exit``.
        """
        try:
            return self.ask(f"{question}\n{FOLLOW_UP_HINT}")
        except (EOFError, KeyboardInterrupt):
            return EXIT_SENTINEL
