"""Actions the assistant can run inside the sandbox.

Key classes:
- ActionName: The closed set of action names
- ActionGroup: Base class for a group of handlers bound to a sandbox
- FileSystemActions: listFiles, readFile, saveCodeToFile, makeDir
- GitActions: makeCommit, makePullRequest
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from aidev.actions.base import REPO_DIRECTORY, ActionGroup, ActionName, action, resolve_path
from aidev.actions.file_system import FileSystemActions
from aidev.actions.git import GitActions

if TYPE_CHECKING:
    from aidev.sandbox import RemoteSandbox


def default_groups(sandbox: "RemoteSandbox") -> list[ActionGroup]:
    """Return every action group, bound to ``sandbox``."""
    return [FileSystemActions(sandbox), GitActions(sandbox)]


def default_handlers(sandbox: "RemoteSandbox") -> dict[ActionName, Callable[..., str]]:
    """Return the full ActionName -> handler table for ``sandbox``."""
    handlers: dict[ActionName, Callable[..., str]] = {}
    for group in default_groups(sandbox):
        handlers.update(group.handlers())
    return handlers


__all__ = [
    "REPO_DIRECTORY",
    "ActionGroup",
    "ActionName",
    "FileSystemActions",
    "GitActions",
    "action",
    "default_groups",
    "default_handlers",
    "resolve_path",
]
