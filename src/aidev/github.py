"""Repository bootstrap: authenticate the sandbox with GitHub and clone."""

from __future__ import annotations

import logging
import shlex
from typing import TYPE_CHECKING

from aidev.actions import REPO_DIRECTORY
from aidev.errors import BootstrapError

if TYPE_CHECKING:
    from aidev.sandbox import RemoteSandbox

logger = logging.getLogger(__name__)

TOKEN_ENV = "GH_LOGIN_TOKEN"


def _check(sandbox: "RemoteSandbox", command: str, message: str, envs: dict[str, str] | None = None) -> str:
    result = sandbox.run(command, envs=envs)
    if not result.ok:
        logger.error("bootstrap failed command=%s exit_code=%s", command, result.exit_code)
        raise BootstrapError(
            message,
            command=command,
            exit_code=result.exit_code,
            stderr=result.stderr,
        )
    return result.stdout


def login_with_gh(sandbox: "RemoteSandbox", token: str) -> None:
    """Authenticate the ``gh`` CLI in the sandbox and wire it into git.

    The token is passed through the command environment, never on the
    command line.
    """
    if not token:
        raise BootstrapError("No GitHub token available to log in with")
    logger.info("github login")
    _check(
        sandbox,
        f'echo "${TOKEN_ENV}" | gh auth login --with-token',
        "GitHub login failed",
        envs={TOKEN_ENV: token},
    )
    _check(sandbox, "gh auth setup-git", "Configuring git credentials failed")


def configure_git_identity(sandbox: "RemoteSandbox", name: str, email: str) -> None:
    """Set the author identity used for commits made in the sandbox."""
    logger.debug("github identity name=%s email=%s", name, email)
    _check(
        sandbox,
        f"git config --global user.name {shlex.quote(name)}",
        "Setting git user.name failed",
    )
    _check(
        sandbox,
        f"git config --global user.email {shlex.quote(email)}",
        "Setting git user.email failed",
    )


def clone_repo(sandbox: "RemoteSandbox", repo_name: str) -> None:
    """Clone ``repo_name`` (``owner/repo``) into the sandbox checkout."""
    logger.info("github clone repo=%s", repo_name)
    _check(
        sandbox,
        f"gh repo clone {shlex.quote(repo_name)} {REPO_DIRECTORY}",
        f"Cloning '{repo_name}' failed",
    )


def bootstrap(sandbox: "RemoteSandbox", repo_name: str, token: str, git_name: str, git_email: str) -> None:
    """Log in, set the git identity, then clone. Nothing is retried."""
    login_with_gh(sandbox, token)
    configure_git_identity(sandbox, git_name, git_email)
    clone_repo(sandbox, repo_name)
