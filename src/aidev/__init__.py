"""aidev: an interactive AI developer working in a remote sandbox.

This package provides:
- An orchestrator that relays an assistant's tool calls to a sandbox
- A remote sandbox wrapper with an explicit action dispatch table
- File and git actions run against a cloned GitHub repository
- Interactive prompts for the human in the loop

Key Components:
- DeveloperAgent: Polls runs, dispatches tool calls, asks the human
- RemoteSandbox: E2B sandbox with registered actions and close-once teardown
- AssistantClient: Thin adapter over the hosted threads/runs API
- RunStatus: Closed set of run statuses with an UNKNOWN fallback

Example:
    from aidev.cli import main

    main()
"""

from aidev.actions import ActionGroup, ActionName, FileSystemActions, GitActions
from aidev.agent import AgentConfig, DeveloperAgent
from aidev.assistant import AssistantClient
from aidev.config import AppConfig
from aidev.core import RunStatus, Session, ToolCall, ToolOutput
from aidev.errors import (
    ActionError,
    AIDevError,
    BootstrapError,
    ConfigError,
    SessionAborted,
)
from aidev.prompts import Prompter
from aidev.sandbox import CommandResult, RemoteSandbox

__version__ = "0.1.0"

__all__ = [
    # Orchestrator
    "DeveloperAgent",
    "AgentConfig",
    "AssistantClient",
    # Sandbox
    "RemoteSandbox",
    "CommandResult",
    "ActionGroup",
    "ActionName",
    "FileSystemActions",
    "GitActions",
    # Core types
    "RunStatus",
    "Session",
    "ToolCall",
    "ToolOutput",
    # Config
    "AppConfig",
    "Prompter",
    # Errors
    "AIDevError",
    "ActionError",
    "BootstrapError",
    "ConfigError",
    "SessionAborted",
]
