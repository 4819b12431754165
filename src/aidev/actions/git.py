"""Git and pull request actions executed inside the sandbox checkout."""

from __future__ import annotations

import logging
import shlex
import uuid

from aidev.actions.base import REPO_DIRECTORY, ActionGroup, ActionName, action
from aidev.errors import ActionError

logger = logging.getLogger(__name__)

BRANCH_PREFIX = "ai-developer"


class GitActions(ActionGroup):
    """Commit changes and open pull requests from the sandbox."""

    def _git(self, *args: str) -> str:
        command = " ".join(["git", *(shlex.quote(a) for a in args)])
        return self._run(command)

    def _run(self, command: str) -> str:
        result = self.sandbox.run(command, cwd=REPO_DIRECTORY)
        if not result.ok:
            raise ActionError(f"Command failed: {command}\n{result}")
        return result.stdout

    @action(ActionName.MAKE_COMMIT)
    def make_commit(self, message: str) -> str:
        """Stage all changes and commit them with the given message.

        Raises:
            ActionError: If staging or committing fails (e.g. nothing to commit).
        """
        logger.debug("git commit message=%s", message)
        self._git("add", ".")
        output = self._git("commit", "-m", message)
        return output.strip() or "Committed"

    @action(ActionName.MAKE_PULL_REQUEST)
    def make_pull_request(self, title: str, body: str = "", branch: str = "") -> str:
        """Push the work to a branch and open a pull request.

        Args:
            title: Pull request title.
            body: Pull request description.
            branch: Branch to push. A fresh ``ai-developer-*`` name is used
                when empty.

        Returns:
            The output of ``gh pr create`` (normally the pull request URL).
        """
        branch = branch or f"{BRANCH_PREFIX}-{uuid.uuid4().hex[:8]}"
        logger.debug("git pull_request branch=%s title=%s", branch, title)

        self._git("checkout", "-B", branch)
        self._git("push", "-u", "origin", branch)
        command = " ".join(
            [
                "gh pr create",
                "--title",
                shlex.quote(title),
                "--body",
                shlex.quote(body),
                "--head",
                shlex.quote(branch),
            ]
        )
        output = self._run(command)
        return output.strip() or f"Opened pull request from {branch}"
