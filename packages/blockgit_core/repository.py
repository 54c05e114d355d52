"""In-memory versioning engine for BlockGit.

Holds the commit graph, branch table, staging area, and head pointer,
and exposes git-like operations (stage, commit, checkout, reset, revert,
branch, clone) over them. The commit graph is an arena of commits keyed
by ID; every traversal tolerates missing parents and revisited IDs so
that state merged by an outside replication layer never breaks a walk.

Execution Context:
    Library module - imported by storage, CLI commands, and API routes

Dependencies:
    - blockgit_core.models: Data models
    - blockgit_core.errors: Engine error types

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any
from typing import Callable
from typing import Iterable
from typing import Iterator

from blockgit_core.errors import ActiveBranchDeletionError
from blockgit_core.errors import BranchExistsError
from blockgit_core.errors import BranchNotFoundError
from blockgit_core.errors import CommitNotFoundError
from blockgit_core.errors import ForeignCommitError
from blockgit_core.errors import NothingStagedError
from blockgit_core.models import Branch
from blockgit_core.models import Commit
from blockgit_core.models import Head
from blockgit_core.models import Item
from blockgit_core.models import Snapshot
from blockgit_core.models import copy_tree
from blockgit_core.models import now_ms
from blockgit_core.models import tree_to_list

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


DEFAULT_BRANCH = "default"
STATE_VERSION = 1


def _generate_id() -> str:
    """Generate an opaque identifier for commits and branches."""
    return str(uuid.uuid4())


# ---- Repository Class ---------------------------------------------------------------------------------------


class Repository:
    """Versioning engine over a tree of items.

    The repository exclusively owns its commit graph, branch table,
    staging area, and head pointer. Reads hand out immutable commits and
    copies of branches, so callers can never mutate engine state except
    through the operations below.

    Attributes:
        default_branch: Name given to the branch created at initialization.
    """

    def __init__(
            self,
            default_branch: str = DEFAULT_BRANCH,
            id_factory: Callable[[], str] | None = None,
            clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize an empty repository with a single, empty branch.

        Args:
            default_branch: Name of the initial branch.
            id_factory: Callable producing unique IDs (defaults to UUID4).
            clock: Callable returning epoch milliseconds (defaults to now).
        """
        self.default_branch = default_branch
        self._new_id = id_factory or _generate_id
        self._clock = clock or now_ms
        self._last_timestamp = 0

        self._commits: dict[str, Commit] = {}
        self._branches: dict[str, Branch] = {}
        self._staging: dict[str, Snapshot] = {}
        self._head = Head()

        branch = Branch(id=self._new_id(), name=default_branch)
        self._branches[branch.id] = branch
        self._current_branch_id = branch.id

    # ---- Staging Operations ---------------------------------------------------------------------------------

    def add(
            self,
            items: Iterable[Item | dict[str, Any]],
    ) -> None:
        """Stage a snapshot for the next commit on the active branch.

        Replaces whatever was staged before. An empty input clears the
        staging area for the active branch.

        Args:
            items: Items (or item dictionaries) to stage.
        """
        tree = copy_tree(items or ())
        if not tree:
            self._staging.pop(self._current_branch_id, None)
            return
        self._staging[self._current_branch_id] = tree

    def get_staged(
            self,
    ) -> Snapshot:
        """Get the snapshot staged on the active branch (empty if none)."""
        return self._staging.get(self._current_branch_id, ())

    def has_staged_changes(
            self,
    ) -> bool:
        """Check whether the active branch has something staged."""
        return bool(self._staging.get(self._current_branch_id))

    # ---- Commit Operations ----------------------------------------------------------------------------------

    def commit(
            self,
            message: str,
    ) -> Commit:
        """Record the staged snapshot as a new commit.

        Args:
            message: Commit message.

        Returns:
            The new Commit, now the head of the active branch.

        Raises:
            ValueError: If the message is blank.
            NothingStagedError: If nothing is staged on the active branch.
            BranchNotFoundError: If the active branch is missing.
        """
        if not message or not message.strip():
            msg = "Commit message required"
            raise ValueError(msg)

        staged = self._staging.get(self._current_branch_id)
        if not staged:
            raise NothingStagedError(self._current_branch_id)

        branch = self._active_branch()
        new_commit = self._append_commit(branch, message, staged)
        self._staging.pop(branch.id, None)
        return new_commit

    def reset_to_commit(
            self,
            commit_id: str,
    ) -> Commit:
        """Move the active branch back to a commit, discarding later history.

        Deletes every commit made on the active branch that descends from
        the target. Commits still reachable from another branch's head
        are kept, so other branches never lose history.

        Args:
            commit_id: Commit to reset to.

        Returns:
            The target Commit, now the head of the active branch.

        Raises:
            CommitNotFoundError: If the commit does not exist.
            ForeignCommitError: If the commit is not in the active branch's history.
        """
        target = self._require_commit(commit_id)
        branch = self._active_branch()
        if target.id not in self._ancestry(branch.head_id):
            raise ForeignCommitError(target.id, branch.id)

        shared: set[str] = set()
        for other in self._branches.values():
            if other.id != branch.id:
                shared |= self._ancestry(other.head_id)

        doomed = [
            commit.id
            for commit in self._commits.values()
            if commit.branch_id == branch.id
            and commit.id != target.id
            and commit.id not in shared
            and target.id in self._ancestry(commit.parent_id)
        ]
        for doomed_id in doomed:
            del self._commits[doomed_id]

        branch.head_id = target.id
        self._head = Head(commit_id=target.id, detached=False)
        logger.debug(f"Reset branch {branch.id} to {target.id}, removed {len(doomed)} commit(s)")
        return target

    def revert_commit(
            self,
            commit_id: str,
            message: str | None = None,
    ) -> Commit:
        """Re-apply a past snapshot as a new commit on the active branch.

        Existing history is left untouched; the new commit carries a copy
        of the target's tree and becomes the branch tip.

        Args:
            commit_id: Commit whose snapshot is re-applied.
            message: Commit message (defaults to 'revert: <original message>').

        Returns:
            The new Commit.

        Raises:
            CommitNotFoundError: If the commit does not exist.
            ForeignCommitError: If the commit is not in the active branch's history.
        """
        target = self._require_commit(commit_id)
        branch = self._active_branch()
        if target.id not in self._ancestry(branch.head_id):
            raise ForeignCommitError(target.id, branch.id)

        return self._append_commit(branch, message or f"revert: {target.message}", target.tree)

    def checkout_commit(
            self,
            commit_id: str,
    ) -> Commit:
        """View a commit without moving the active branch (detached head).

        Args:
            commit_id: Commit to check out; any branch's commit is allowed.

        Returns:
            The checked out Commit.

        Raises:
            CommitNotFoundError: If the commit does not exist.
        """
        commit = self._require_commit(commit_id)
        self._head = Head(commit_id=commit.id, detached=True)
        logger.debug(f"Detached head at {commit.id}")
        return commit

    def delete_commit(
            self,
            commit_id: str,
    ) -> list[Commit]:
        """Delete a single commit from the graph.

        Direct children of the deleted commit are re-parented onto its
        parent. Any branch head (and the head pointer) that referenced it
        moves to the parent, or to no head for a root commit.

        Args:
            commit_id: Commit to delete.

        Returns:
            Commit history visible from the head after deletion.

        Raises:
            CommitNotFoundError: If the commit does not exist.
        """
        commit = self._require_commit(commit_id)
        del self._commits[commit.id]

        parent_id = commit.parent_id if commit.parent_id in self._commits else None
        for child in list(self._commits.values()):
            if child.parent_id == commit.id:
                self._commits[child.id] = replace(child, parent_id=parent_id)

        for branch in self._branches.values():
            if branch.head_id == commit.id:
                branch.head_id = parent_id

        if self._head.commit_id == commit.id:
            self._head.commit_id = parent_id

        logger.debug(f"Deleted commit {commit.id}, re-parented onto {parent_id}")
        return self.list_commits()

    def get_commit(
            self,
            commit_id: str,
    ) -> Commit | None:
        """Look up a commit by ID.

        Args:
            commit_id: Commit identifier.

        Returns:
            Commit or None if not found.
        """
        return self._commits.get(commit_id)

    def list_commits(
            self,
            limit: int | None = None,
    ) -> list[Commit]:
        """List the history visible from the head, newest first.

        A commit made on another branch is only listed while it is an
        ancestor of the active branch head; the walk stops at the first
        commit that fails that check, at a missing parent, or at an ID
        already visited.

        Args:
            limit: Maximum number of commits to return.

        Returns:
            List of commits in reverse chronological order.
        """
        branch = self._branches.get(self._current_branch_id)
        if branch is None or not self._head.commit_id:
            return []

        lineage: set[str] | None = None
        commits: list[Commit] = []
        for commit in self._walk(self._head.commit_id):
            if limit is not None and len(commits) >= limit:
                break
            if commit.branch_id != branch.id:
                if lineage is None:
                    lineage = self._ancestry(branch.head_id)
                if commit.id not in lineage:
                    break
            commits.append(commit)
        return commits

    @property
    def commit_count(
            self,
    ) -> int:
        """Number of commits in the graph, across all branches."""
        return len(self._commits)

    def iter_commits(
            self,
    ) -> Iterator[Commit]:
        """Iterate over every commit in the graph, across all branches."""
        return iter(list(self._commits.values()))

    # ---- HEAD Operations ------------------------------------------------------------------------------------

    def get_head(
            self,
    ) -> Commit | None:
        """Get the commit currently checked out.

        Returns:
            Commit or None if nothing is checked out.
        """
        if not self._head.commit_id:
            return None
        return self._commits.get(self._head.commit_id)

    def head_state(
            self,
    ) -> Head:
        """Get a copy of the head pointer."""
        return replace(self._head)

    def is_detached(
            self,
    ) -> bool:
        """Check whether the head is detached from the active branch."""
        return self._head.detached

    # ---- Branch Operations ----------------------------------------------------------------------------------

    def create_branch(
            self,
            name: str,
            from_commit_id: str | None = None,
    ) -> Branch:
        """Create a new branch without switching to it.

        Args:
            name: Branch name.
            from_commit_id: Commit to point to (defaults to the head commit).

        Returns:
            Created Branch.

        Raises:
            ValueError: If the name is blank.
            BranchExistsError: If the name is already used.
            CommitNotFoundError: If from_commit_id does not exist.
        """
        name = self._check_branch_name(name)
        if from_commit_id:
            head_id: str | None = self._require_commit(from_commit_id).id
        else:
            head_id = self._head.commit_id

        branch = Branch(id=self._new_id(), name=name, head_id=head_id)
        self._branches[branch.id] = branch
        logger.debug(f"Created branch '{name}' ({branch.id}) at {head_id}")
        return replace(branch)

    def create_and_checkout_branch(
            self,
            name: str,
            from_commit_id: str | None = None,
    ) -> Branch:
        """Create a new branch and make it the active branch.

        Args:
            name: Branch name.
            from_commit_id: Commit to point to (defaults to the head commit).

        Returns:
            Created Branch.
        """
        branch = self.create_branch(name, from_commit_id)
        return self.checkout_branch(branch.id)

    def delete_branch(
            self,
            branch_id: str,
    ) -> None:
        """Delete a branch. Its commits stay in the graph.

        Args:
            branch_id: Branch to delete.

        Raises:
            ActiveBranchDeletionError: If the branch is the active branch.
            BranchNotFoundError: If the branch doesn't exist.
        """
        if branch_id == self._current_branch_id:
            raise ActiveBranchDeletionError(branch_id)
        self._require_branch(branch_id)

        del self._branches[branch_id]
        self._staging.pop(branch_id, None)
        logger.debug(f"Deleted branch {branch_id}")

    def checkout_branch(
            self,
            branch_id: str,
    ) -> Branch:
        """Switch to a different branch.

        Args:
            branch_id: Branch to activate.

        Returns:
            The activated Branch.

        Raises:
            BranchNotFoundError: If the branch doesn't exist.
        """
        branch = self._require_branch(branch_id)
        self._current_branch_id = branch.id
        self._head = Head(commit_id=branch.head_id, detached=False)

        if not branch.head_id:
            # Branch has no commits - clear its working view
            self._staging.pop(branch.id, None)

        logger.debug(f"Checked out branch '{branch.name}' ({branch.id})")
        return replace(branch)

    def clone_branch(
            self,
            name: str,
            full_history: bool = False,
    ) -> Branch:
        """Create a new branch from the active branch.

        A shallow clone shares the source head, and with it the whole
        commit chain. A full clone copies every commit of the chain with
        new IDs, attributed to the new branch, oldest first.

        Args:
            name: Name of the new branch.
            full_history: Copy the commit chain instead of sharing it.

        Returns:
            Created Branch (not activated).

        Raises:
            ValueError: If the name is blank.
            BranchExistsError: If the name is already used.
        """
        name = self._check_branch_name(name)
        source = self._active_branch()
        branch = Branch(id=self._new_id(), name=name, head_id=source.head_id)

        if full_history and source.head_id:
            chain = list(self._walk(source.head_id))
            chain.reverse()

            previous_id: str | None = None
            for original in chain:
                clone = Commit.create(
                    commit_id=self._new_id(),
                    message=original.message,
                    branch_id=branch.id,
                    tree=original.tree,
                    parent_id=previous_id,
                    timestamp=original.timestamp,
                )
                self._commits[clone.id] = clone
                previous_id = clone.id
            branch.head_id = previous_id

        self._branches[branch.id] = branch
        logger.debug(
            f"Cloned branch '{source.name}' into '{name}' "
            f"({'full history' if full_history else 'shared history'})"
        )
        return replace(branch)

    def list_branches(
            self,
    ) -> list[Branch]:
        """List all branches in creation order.

        Returns:
            List of Branch copies.
        """
        return [replace(branch) for branch in self._branches.values()]

    def get_current_branch(
            self,
    ) -> Branch | None:
        """Get the active branch.

        Returns:
            Branch copy, or None if the table lost it.
        """
        branch = self._branches.get(self._current_branch_id)
        return replace(branch) if branch else None

    @property
    def current_branch_id(
            self,
    ) -> str:
        """ID of the active branch."""
        return self._current_branch_id

    def get_branch(
            self,
            branch_id: str,
    ) -> Branch | None:
        """Look up a branch by ID."""
        branch = self._branches.get(branch_id)
        return replace(branch) if branch else None

    def find_branch(
            self,
            name: str,
    ) -> Branch | None:
        """Look up a branch by name."""
        for branch in self._branches.values():
            if branch.name == name:
                return replace(branch)
        return None

    # ---- Snapshot/Load Operations ---------------------------------------------------------------------------

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Export the complete engine state for JSON serialization.

        Returns:
            Dictionary representation of the repository.
        """
        return {
            "version": STATE_VERSION,
            "commits": [commit.to_dict() for commit in self._commits.values()],
            "branches": [branch.to_dict() for branch in self._branches.values()],
            "currentBranch": {"id": self._current_branch_id},
            "head": self._head.to_dict(),
            "staging": {
                branch_id: tree_to_list(tree)
                for branch_id, tree in self._staging.items()
            },
            "lastTimestamp": self._last_timestamp,
        }

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
            default_branch: str = DEFAULT_BRANCH,
            id_factory: Callable[[], str] | None = None,
            clock: Callable[[], int] | None = None,
    ) -> Repository:
        """Rebuild a repository from exported state.

        Branches may be given as a list or as a mapping keyed by ID.
        State that violates the engine's invariants (dangling heads, a
        missing active branch, no branches at all) is repaired.

        Args:
            data: Dictionary produced by to_dict().
            default_branch: Name used if a branch has to be created.
            id_factory: Callable producing unique IDs.
            clock: Callable returning epoch milliseconds.

        Returns:
            Repository instance.
        """
        repo = cls(default_branch=default_branch, id_factory=id_factory, clock=clock)

        raw_commits = data.get("commits") or []
        if isinstance(raw_commits, dict):
            raw_commits = list(raw_commits.values())
        repo._commits = {commit.id: commit for commit in map(Commit.from_dict, raw_commits)}

        raw_branches = data.get("branches") or []
        if isinstance(raw_branches, dict):
            raw_branches = list(raw_branches.values())
        branches = {branch.id: branch for branch in map(Branch.from_dict, raw_branches)}
        if branches:
            repo._branches = branches
            repo._current_branch_id = (data.get("currentBranch") or {}).get("id") or ""
        else:
            logger.warning(f"State has no branches, created '{default_branch}'")

        repo._head = Head.from_dict(data.get("head"))
        repo._staging = {
            branch_id: copy_tree(items)
            for branch_id, items in (data.get("staging") or {}).items()
            if items and branch_id in repo._branches
        }
        repo._last_timestamp = max(
            [int(data.get("lastTimestamp") or 0)]
            + [commit.timestamp for commit in repo._commits.values()]
        )

        repo._repair()
        return repo

    def _repair(
            self,
    ) -> None:
        """Restore invariants on state that did not come from this engine."""
        if self._current_branch_id not in self._branches:
            fallback = next(iter(self._branches.values()))
            logger.warning(
                f"Active branch '{self._current_branch_id}' not found, "
                f"falling back to '{fallback.name}'"
            )
            self._current_branch_id = fallback.id
            self._head = Head(commit_id=fallback.head_id, detached=False)

        for branch in self._branches.values():
            if branch.head_id and branch.head_id not in self._commits:
                logger.warning(f"Branch '{branch.name}' head {branch.head_id} not found, cleared")
                branch.head_id = None

        if self._head.commit_id and self._head.commit_id not in self._commits:
            logger.warning(f"Head commit {self._head.commit_id} not found, cleared")
            self._head = Head()

        active = self._branches[self._current_branch_id]
        if not self._head.detached and self._head.commit_id != active.head_id:
            logger.warning(f"Head out of sync with branch '{active.name}', moved to branch head")
            self._head = Head(commit_id=active.head_id, detached=False)

    # ---- Internal Helpers -----------------------------------------------------------------------------------

    def _active_branch(
            self,
    ) -> Branch:
        """Get the active branch record (not a copy)."""
        branch = self._branches.get(self._current_branch_id)
        if branch is None:
            raise BranchNotFoundError(self._current_branch_id)
        return branch

    def _require_branch(
            self,
            branch_id: str,
    ) -> Branch:
        branch = self._branches.get(branch_id)
        if branch is None:
            raise BranchNotFoundError(branch_id)
        return branch

    def _require_commit(
            self,
            commit_id: str,
    ) -> Commit:
        commit = self._commits.get(commit_id)
        if commit is None:
            raise CommitNotFoundError(commit_id)
        return commit

    def _check_branch_name(
            self,
            name: str,
    ) -> str:
        """Validate a new branch name.

        Raises:
            ValueError: If the name is blank.
            BranchExistsError: If another branch has this name.
        """
        name = (name or "").strip()
        if not name:
            msg = "Branch name required"
            raise ValueError(msg)
        if any(branch.name == name for branch in self._branches.values()):
            raise BranchExistsError(name)
        return name

    def _append_commit(
            self,
            branch: Branch,
            message: str,
            tree: Snapshot,
    ) -> Commit:
        """Create a commit on top of a branch and move the head onto it."""
        new_commit = Commit.create(
            commit_id=self._new_id(),
            message=message,
            branch_id=branch.id,
            tree=tree,
            parent_id=branch.head_id,
            timestamp=self._next_timestamp(),
        )
        self._commits[new_commit.id] = new_commit
        branch.head_id = new_commit.id
        self._head = Head(commit_id=new_commit.id, detached=False)
        logger.debug(f"Created commit {new_commit.id} on branch {branch.id}")
        return new_commit

    def _next_timestamp(
            self,
    ) -> int:
        """Current time, forced strictly past the previous commit."""
        timestamp = max(int(self._clock()), self._last_timestamp + 1)
        self._last_timestamp = timestamp
        return timestamp

    def _walk(
            self,
            start_id: str | None,
    ) -> Iterator[Commit]:
        """Follow parent links from a commit, newest first.

        Stops at a missing commit or an ID already visited.
        """
        visited: set[str] = set()
        current_id = start_id
        while current_id and current_id not in visited:
            commit = self._commits.get(current_id)
            if commit is None:
                break
            visited.add(current_id)
            yield commit
            current_id = commit.parent_id

    def _ancestry(
            self,
            start_id: str | None,
    ) -> set[str]:
        """IDs of a commit and all of its reachable ancestors."""
        return {commit.id for commit in self._walk(start_id)}
