"""JSON state file storage for BlockGit.

Persists a repository's exported state to ``<root>/.blockgit/state.json``
and loads it back. The engine itself never touches the disk; this module
is the snapshot/load boundary used by the CLI and the API server.

Execution Context:
    Library module - imported by CLI commands and the API server

Dependencies:
    - blockgit_core.repository: Versioning engine

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from blockgit_core.repository import DEFAULT_BRANCH
from blockgit_core.repository import Repository

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


STATE_DIR = ".blockgit"
STATE_FILE = "state.json"


# ---- State File Class ---------------------------------------------------------------------------------------


class StateFile:
    """Manages the on-disk state of a BlockGit repository.

    Attributes:
        root: Root directory containing the state directory.
        state_dir: Path to the state directory.
    """

    def __init__(
            self,
            root: Path | str,
            state_dir: str = STATE_DIR,
    ) -> None:
        """Initialize state file at given root path.

        Args:
            root: Directory containing or to contain the state directory.
            state_dir: Name of the state directory.
        """
        self.root = Path(root).resolve()
        self.state_dir = self.root / state_dir

    @property
    def path(
            self,
    ) -> Path:
        """Path to state.json."""
        return self.state_dir / STATE_FILE

    def exists(
            self,
    ) -> bool:
        """Check if the state file exists.

        Returns:
            True if state.json exists.
        """
        return self.path.is_file()

    def init(
            self,
            default_branch: str = DEFAULT_BRANCH,
    ) -> Repository:
        """Create a new state file holding an empty repository.

        Args:
            default_branch: Name of the initial branch.

        Returns:
            The new, empty Repository.

        Raises:
            RuntimeError: If a repository already exists here.
        """
        if self.exists():
            msg = f"BlockGit repository already exists at {self.state_dir}"
            raise RuntimeError(msg)

        repo = Repository(default_branch=default_branch)
        self.save(repo)
        logger.info(f"Initialized repository at {self.state_dir}")
        return repo

    def load(
            self,
            default_branch: str = DEFAULT_BRANCH,
    ) -> Repository:
        """Load the repository from disk.

        Args:
            default_branch: Name used if the state has to be repaired.

        Returns:
            Repository instance.

        Raises:
            RuntimeError: If the state file cannot be loaded.
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Repository.from_dict(data, default_branch=default_branch)
        except Exception as load_error:
            msg = f"Failed to load state from {self.path}: {load_error}"
            raise RuntimeError(msg) from load_error

    def save(
            self,
            repo: Repository,
    ) -> Path:
        """Write the repository to disk.

        The file is written to a uniquely named temporary file next to the
        target and then swapped in, so a crash mid-write leaves the previous
        state intact and concurrent saves never share a temporary file.

        Args:
            repo: Repository to persist.

        Returns:
            Path to the saved state file.
        """
        self.state_dir.mkdir(parents=True, exist_ok=True)
        content = json.dumps(repo.to_dict(), indent=2)

        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.state_dir, prefix=f".{STATE_FILE}.", suffix=".tmp"
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, self.path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise
        return self.path


# ---- Module Functions ---------------------------------------------------------------------------------------


def find_state(
        start_path: Path | str | None = None,
        state_dir: str = STATE_DIR,
) -> StateFile | None:
    """Find a BlockGit state file in current or parent directories.

    Args:
        start_path: Directory to start searching from.
        state_dir: Name of the state directory.

    Returns:
        StateFile if found, None otherwise.
    """
    current = Path(start_path or Path.cwd()).resolve()

    while True:
        state = StateFile(current, state_dir=state_dir)
        if state.exists():
            return state
        if current == current.parent:
            return None
        current = current.parent
