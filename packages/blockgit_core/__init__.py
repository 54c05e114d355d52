"""BlockGit Core Library.

Provides git-like version control for trees of items (todo outlines):
an in-memory versioning engine with commits, branches, staging, and a
detachable head, plus a JSON state file for persistence.

Execution Context:
    Library package - imported by CLI and API server

Dependencies:
    - python-dotenv: Settings from .env files

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

from blockgit_core.errors import ActiveBranchDeletionError
from blockgit_core.errors import BranchExistsError
from blockgit_core.errors import BranchNotFoundError
from blockgit_core.errors import CommitNotFoundError
from blockgit_core.errors import ForeignCommitError
from blockgit_core.errors import NotFoundError
from blockgit_core.errors import NothingStagedError
from blockgit_core.errors import VersioningError
from blockgit_core.models import Branch
from blockgit_core.models import Commit
from blockgit_core.models import Head
from blockgit_core.models import Item
from blockgit_core.repository import Repository

__version__ = "0.1.0"

__all__ = [
    "ActiveBranchDeletionError",
    "Branch",
    "BranchExistsError",
    "BranchNotFoundError",
    "Commit",
    "CommitNotFoundError",
    "ForeignCommitError",
    "Head",
    "Item",
    "NotFoundError",
    "NothingStagedError",
    "Repository",
    "VersioningError",
    "__version__",
]
