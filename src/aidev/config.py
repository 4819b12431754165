"""Configuration loaded from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from aidev.errors import ConfigError

REQUIRED_VARIABLES = ("AI_ASSISTANT_ID", "E2B_API_KEY", "GITHUB_TOKEN")


def load_env() -> bool:
    """Load a ``.env`` file from the working directory, if any.

    Variables already set in the environment win.
    """
    return load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass
class AppConfig:
    """Configuration for one interactive session."""

    assistant_id: str = ""
    e2b_api_key: str = ""
    github_token: str = ""
    sandbox_template: str = "base"
    sandbox_timeout: int = 3600
    poll_interval: float = 1.0
    git_user_name: str = "AI Developer"
    git_user_email: str = "ai-developer@users.noreply.github.com"
    model: str = "gpt-4o"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigError: If a required variable is missing or a numeric
                variable does not parse.
        """
        env = os.environ if env is None else env

        missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        defaults = cls()
        return cls(
            assistant_id=env["AI_ASSISTANT_ID"],
            e2b_api_key=env["E2B_API_KEY"],
            github_token=env["GITHUB_TOKEN"],
            sandbox_template=env.get("AIDEV_SANDBOX_TEMPLATE") or defaults.sandbox_template,
            sandbox_timeout=_parse_number(
                env, "AIDEV_SANDBOX_TIMEOUT", int, defaults.sandbox_timeout
            ),
            poll_interval=_parse_number(
                env, "AIDEV_POLL_INTERVAL", float, defaults.poll_interval
            ),
            git_user_name=env.get("AIDEV_GIT_USER_NAME") or defaults.git_user_name,
            git_user_email=env.get("AIDEV_GIT_USER_EMAIL") or defaults.git_user_email,
            model=env.get("AIDEV_MODEL") or defaults.model,
        )


def _parse_number(env: Mapping[str, str], name: str, kind: type, default):
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value
