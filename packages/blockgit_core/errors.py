"""BlockGit error types.

All engine failures are local, synchronous validation errors. An
operation that raises one of these has made no change to the engine.
"""
from __future__ import annotations


class VersioningError(RuntimeError):
    """Base class for every error raised by the versioning engine."""


class NothingStagedError(VersioningError):
    """Raised when committing with an empty staging area."""

    def __init__(
            self,
            branch_id: str,
    ) -> None:
        self.branch_id = branch_id
        super().__init__("Nothing staged to commit")


class NotFoundError(VersioningError, LookupError):
    """Raised when an identifier does not resolve.

    Attributes:
        kind: What was looked up ('commit' or 'branch').
        ref: The identifier that did not resolve.
    """

    kind = "object"

    def __init__(
            self,
            ref: str,
    ) -> None:
        self.ref = ref
        super().__init__(f"{self.kind.capitalize()} '{ref}' not found")


class CommitNotFoundError(NotFoundError):
    """Raised when a commit ID is not in the commit graph."""

    kind = "commit"


class BranchNotFoundError(NotFoundError):
    """Raised when a branch ID is not in the branch table."""

    kind = "branch"


class ActiveBranchDeletionError(VersioningError):
    """Raised when deleting the currently active branch."""

    def __init__(
            self,
            branch_id: str,
    ) -> None:
        self.branch_id = branch_id
        super().__init__("Cannot delete the currently active branch")


class ForeignCommitError(VersioningError):
    """Raised when a commit is outside the active branch's history.

    Reset and revert only accept commits reachable from the active
    branch head.
    """

    def __init__(
            self,
            commit_id: str,
            branch_id: str,
    ) -> None:
        self.commit_id = commit_id
        self.branch_id = branch_id
        super().__init__(f"Commit '{commit_id}' does not belong to current branch")


class BranchExistsError(VersioningError):
    """Raised when a branch name is already taken."""

    def __init__(
            self,
            name: str,
    ) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' already exists")
