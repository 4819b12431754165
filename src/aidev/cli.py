"""Command-line entry points."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Callable, Sequence

from rich.markup import escape

from aidev.agent import AgentConfig, DeveloperAgent
from aidev.assistant import AssistantClient
from aidev.config import AppConfig, load_env
from aidev.console import console, on_log, print_error
from aidev.core import RunStatus
from aidev.errors import AIDevError
from aidev.github import bootstrap
from aidev.logging_utils import configure_logging
from aidev.prompts import Prompter
from aidev.sandbox import RemoteSandbox
from aidev.tools import ASSISTANT_NAME, DEFAULT_INSTRUCTIONS, tool_definitions

logger = logging.getLogger(__name__)

SandboxFactory = Callable[[AppConfig], RemoteSandbox]


def create_sandbox(config: AppConfig) -> RemoteSandbox:
    return RemoteSandbox.create(
        api_key=config.e2b_api_key,
        template=config.sandbox_template,
        timeout=config.sandbox_timeout,
        on_log=on_log,
    )


def run_session(
    config: AppConfig,
    prompter: Prompter | None = None,
    assistant: AssistantClient | None = None,
    sandbox_factory: SandboxFactory = create_sandbox,
) -> RunStatus:
    """Prompt for a task, prepare the sandbox and run the agent loop.

    The sandbox is closed on every exit path.
    """
    prompter = prompter or Prompter()
    session = prompter.init_chat()

    with console.status("[bold green]Starting sandbox...", spinner="dots"):
        sandbox = sandbox_factory(config)
    try:
        with console.status(f"[bold green]Cloning {escape(session.repo_name)}...", spinner="dots"):
            bootstrap(
                sandbox,
                session.repo_name,
                token=config.github_token,
                git_name=config.git_user_name,
                git_email=config.git_user_email,
            )

        agent = DeveloperAgent(
            assistant=assistant or AssistantClient(),
            sandbox=sandbox,
            prompter=prompter,
            config=AgentConfig(
                assistant_id=config.assistant_id,
                poll_interval=config.poll_interval,
            ),
        )
        status = agent.run(session)
        logger.info("session finished status=%s", status.value)
        return status
    finally:
        sandbox.close()


def _add_logging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--log-level", default=None, help="Log level (e.g. DEBUG, INFO)")
    parser.add_argument("--log-file", default=None, help="Write logs to this file")


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Delegate a coding task on a GitHub repository to an AI developer.",
    )
    _add_logging_args(parser)
    args = parser.parse_args(argv)

    load_env()
    configure_logging(args.log_level, args.log_file)

    try:
        config = AppConfig.from_env()
        run_session(config)
    except AIDevError as e:
        logger.error("session failed error=%s", e)
        print_error(str(e))
        raise SystemExit(1)
    except KeyboardInterrupt:
        print()
        raise SystemExit(130)
    raise SystemExit(0)


def create_assistant_main(argv: Sequence[str] | None = None) -> None:
    """Provision an assistant whose tools match the sandbox actions."""
    parser = argparse.ArgumentParser(
        description="Create the AI developer assistant and print its id.",
    )
    parser.add_argument("--name", default=ASSISTANT_NAME, help="Assistant name")
    parser.add_argument("--model", default=None, help="Model to use (default: $AIDEV_MODEL)")
    _add_logging_args(parser)
    args = parser.parse_args(argv)

    load_env()
    configure_logging(args.log_level, args.log_file)

    model = args.model or os.getenv("AIDEV_MODEL") or AppConfig.model
    assistant = AssistantClient().create_assistant(
        name=args.name,
        instructions=DEFAULT_INSTRUCTIONS,
        model=model,
        tools=tool_definitions(),
    )
    print(assistant.id)


__all__ = [
    "create_assistant_main",
    "create_sandbox",
    "main",
    "run_session",
]
