"""Base class and closed name set for sandbox actions.

An action is a single remote operation the assistant can request by name.
Actions are grouped by concern (files, git) into ActionGroup objects, each
bound to one sandbox, and expose their handlers keyed by ActionName so the
sandbox can build an explicit dispatch table.
"""

from __future__ import annotations

import posixpath
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from aidev.sandbox import RemoteSandbox

REPO_DIRECTORY = "/home/user/repo"
"""Where the repository checkout lives inside the sandbox."""


class ActionName(str, Enum):
    """Every action name the assistant is allowed to request."""

    LIST_FILES = "listFiles"
    READ_FILE = "readFile"
    SAVE_CODE_TO_FILE = "saveCodeToFile"
    MAKE_DIR = "makeDir"
    MAKE_COMMIT = "makeCommit"
    MAKE_PULL_REQUEST = "makePullRequest"

    @classmethod
    def lookup(cls, name: str) -> "ActionName | None":
        """Return the member whose value is ``name``, or None."""
        for member in cls:
            if member.value == name:
                return member
        return None


def action(name: ActionName) -> Callable[[Callable], Callable]:
    """Mark an ActionGroup method as the handler for ``name``."""

    def decorator(func: Callable) -> Callable:
        func.__action_name__ = name
        return func

    return decorator


def resolve_path(path: str) -> str:
    """Resolve a path against the repository checkout unless it is absolute."""
    if not path:
        return REPO_DIRECTORY
    if posixpath.isabs(path):
        return posixpath.normpath(path)
    return posixpath.normpath(posixpath.join(REPO_DIRECTORY, path))


class ActionGroup:
    """Base class for a group of related sandbox actions.

    Subclasses decorate each handler method with @action(ActionName.X).
    Handler parameters must match the tool schema in aidev.tools, since
    tool call arguments are passed as keywords.
    """

    def __init__(self, sandbox: "RemoteSandbox"):
        self.sandbox = sandbox

    def handlers(self) -> dict[ActionName, Callable[..., str]]:
        """Return the bound handler for every action this group implements."""
        found: dict[ActionName, Callable[..., str]] = {}
        for attr_name in dir(type(self)):
            if attr_name.startswith("_"):
                continue
            func = getattr(type(self), attr_name)
            name = getattr(func, "__action_name__", None)
            if name is not None:
                found[name] = getattr(self, attr_name)
        return found
