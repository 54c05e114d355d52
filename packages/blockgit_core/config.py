"""Settings and logging configuration for BlockGit.

Settings come from environment variables, optionally seeded from a
``.env`` file.

Execution Context:
    Library module - imported by the CLI and the API server

Dependencies:
    - python-dotenv: Load environment variables from .env file

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from blockgit_core.repository import DEFAULT_BRANCH


# ---- Constants ----------------------------------------------------------------------------------------------


ENV_PREFIX = "BLOCKGIT_"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ---- Environment Loading ------------------------------------------------------------------------------------


def _load_env_file(
        env_path: Path | None = None,
) -> None:
    """Load environment variables from .env file.

    Searches for .env file in:
    1. Specified path (if provided)
    2. Current working directory
    3. Parent directories (up to 3 levels)

    Args:
        env_path: Explicit path to .env file (optional).
    """
    if env_path:
        if env_path.exists():
            load_dotenv(env_path, override=True)
        return

    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env, override=True)
        return

    current = Path.cwd()
    for _ in range(3):
        parent = current.parent
        parent_env = parent / ".env"
        if parent_env.exists():
            load_dotenv(parent_env, override=True)
            return
        current = parent


# ---- Settings -----------------------------------------------------------------------------------------------


@dataclass
class Settings:
    """Runtime settings shared by the CLI and the API server.

    Attributes:
        state_dir: Name of the directory holding the state file.
        default_branch: Name of the branch created for a new repository.
        log_level: Logging level name.
        host: Interface the API server binds to.
        port: Port the API server listens on.
    """

    state_dir: str = ".blockgit"
    default_branch: str = DEFAULT_BRANCH
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 5000


def load_settings(
        env_path: Path | None = None,
) -> Settings:
    """Load settings from the environment.

    Args:
        env_path: Explicit path to a .env file (optional).

    Returns:
        Settings instance.

    Raises:
        ValueError: If BLOCKGIT_PORT is not an integer.
    """
    _load_env_file(env_path)
    defaults = Settings()

    raw_port = os.getenv(f"{ENV_PREFIX}PORT")
    try:
        port = int(raw_port) if raw_port else defaults.port
    except ValueError as port_error:
        msg = f"Invalid {ENV_PREFIX}PORT value: {raw_port!r}"
        raise ValueError(msg) from port_error

    return Settings(
        state_dir=os.getenv(f"{ENV_PREFIX}STATE_DIR") or defaults.state_dir,
        default_branch=os.getenv(f"{ENV_PREFIX}DEFAULT_BRANCH") or defaults.default_branch,
        log_level=(os.getenv(f"{ENV_PREFIX}LOG_LEVEL") or defaults.log_level).upper(),
        host=os.getenv(f"{ENV_PREFIX}HOST") or defaults.host,
        port=port,
    )


def configure_logging(
        level: str | int = "WARNING",
) -> None:
    """Configure root logging for an entry point.

    Args:
        level: Logging level name or number.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("blockgit_core").setLevel(level)
