"""Data models for BlockGit version control.

Defines the core records of the versioning engine: the items that make
up a snapshot, commits, branches, and the head pointer. Every record
converts to and from the camelCase JSON shape used on the wire.

Execution Context:
    Library module - imported by other blockgit_core modules

Dependencies:
    - dataclasses: Data class decorators
    - typing: Type annotations

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import copy
import time
from dataclasses import dataclass
from typing import Any
from typing import Iterable


# ---- Constants ----------------------------------------------------------------------------------------------

ITEM_KINDS = ("todo", "text", "heading")

Snapshot = tuple["Item", ...]


# ---- Data Model Classes -------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Item:
    """Single node of a versioned item tree.

    Attributes:
        id: Item identifier (stable across snapshots).
        kind: Item kind ('todo', 'text' or 'heading').
        title: Display title.
        completed: Completion flag, None when the kind has none.
        children: Ordered child items.
    """

    id: str
    kind: str
    title: str
    completed: bool | None = None
    children: Snapshot = ()

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert item (recursively) to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the item.
        """
        result: dict[str, Any] = {
            "id": self.id,
            "type": self.kind,
            "title": self.title,
        }
        if self.completed is not None:
            result["completed"] = self.completed
        result["children"] = [child.to_dict() for child in self.children]
        return result

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> Item:
        """Create item (recursively) from dictionary.

        Args:
            data: Dictionary with item fields.

        Returns:
            Item instance.

        Raises:
            ValueError: If the data is not a well-formed item.
        """
        if not isinstance(data, dict):
            msg = f"Item must be an object, got {type(data).__name__}"
            raise ValueError(msg)
        if "id" not in data:
            msg = "Item requires an 'id'"
            raise ValueError(msg)

        kind = data.get("type", data.get("kind", "todo"))
        if kind not in ITEM_KINDS:
            msg = f"Unknown item kind '{kind}'"
            raise ValueError(msg)

        completed = data.get("completed")
        if completed is not None and not isinstance(completed, bool):
            msg = f"Item 'completed' must be a boolean, got {completed!r}"
            raise ValueError(msg)

        children = data.get("children") or []
        if not isinstance(children, list):
            msg = "Item 'children' must be a list"
            raise ValueError(msg)

        return cls(
            id=str(data["id"]),
            kind=kind,
            title=str(data.get("title", "")),
            completed=completed,
            children=tuple(cls.from_dict(child) for child in children),
        )


@dataclass(frozen=True)
class Commit:
    """Snapshot of the item tree with version control metadata.

    Attributes:
        id: Unique commit identifier (opaque, not a content hash).
        message: Commit message describing changes.
        timestamp: Creation time in epoch milliseconds.
        tree: Snapshot recorded by this commit.
        parent_id: Parent commit ID (None for a root commit).
        branch_id: ID of the branch that was active when created.
    """

    id: str
    message: str
    timestamp: int
    tree: Snapshot = ()
    parent_id: str | None = None
    branch_id: str = ""

    @classmethod
    def create(
            cls,
            commit_id: str,
            message: str,
            branch_id: str,
            tree: Iterable[Item | dict[str, Any]] = (),
            parent_id: str | None = None,
            timestamp: int | None = None,
    ) -> Commit:
        """Create a new commit holding a private copy of the tree.

        Args:
            commit_id: Unique identifier for the commit.
            message: Commit message.
            branch_id: Branch the commit is attributed to.
            tree: Items to record.
            parent_id: Parent commit ID.
            timestamp: Epoch milliseconds (defaults to now).

        Returns:
            New Commit instance.
        """
        return cls(
            id=commit_id,
            message=message,
            timestamp=timestamp if timestamp is not None else now_ms(),
            tree=copy_tree(tree),
            parent_id=parent_id,
            branch_id=branch_id,
        )

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert commit to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the commit.
        """
        return {
            "id": self.id,
            "message": self.message,
            "timestamp": self.timestamp,
            "tree": tree_to_list(self.tree),
            "parentId": self.parent_id,
            "branchId": self.branch_id,
        }

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> Commit:
        """Create commit from dictionary.

        Args:
            data: Dictionary with commit fields.

        Returns:
            Commit instance.
        """
        return cls(
            id=data["id"],
            message=data.get("message", ""),
            timestamp=int(data.get("timestamp", 0)),
            tree=copy_tree(data.get("tree") or ()),
            parent_id=data.get("parentId"),
            branch_id=data.get("branchId", ""),
        )


@dataclass
class Branch:
    """Named, movable pointer to a commit.

    Attributes:
        id: Branch identifier.
        name: Branch name (e.g., 'default', 'feature/outline').
        head_id: ID of the commit this branch points to, None if empty.
    """

    id: str
    name: str
    head_id: str | None = None

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert branch to dictionary.

        Returns:
            Dictionary representation.
        """
        return {"id": self.id, "name": self.name, "headId": self.head_id}

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> Branch:
        """Create branch from dictionary.

        Args:
            data: Dictionary with branch fields.

        Returns:
            Branch instance.
        """
        return cls(id=data["id"], name=data.get("name", ""), head_id=data.get("headId"))


@dataclass
class Head:
    """Pointer to the commit currently checked out.

    Attributes:
        commit_id: Checked out commit, None when nothing is checked out.
        detached: True when viewing a commit without moving the branch.
    """

    commit_id: str | None = None
    detached: bool = False

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert head to dictionary.

        Returns:
            Dictionary representation.
        """
        return {"id": self.commit_id, "detached": self.detached}

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any] | None,
    ) -> Head:
        """Create head from dictionary.

        Args:
            data: Dictionary with head fields (None for an empty head).

        Returns:
            Head instance.
        """
        data = data or {}
        return cls(commit_id=data.get("id"), detached=bool(data.get("detached", False)))


# ---- Snapshot Helpers ---------------------------------------------------------------------------------------


def copy_tree(
        items: Iterable[Item | dict[str, Any]],
) -> Snapshot:
    """Deep copy a tree given as items or wire dictionaries.

    Args:
        items: Items or item dictionaries, in order.

    Returns:
        Independent snapshot tuple.
    """
    return tuple(
        copy.deepcopy(item) if isinstance(item, Item) else Item.from_dict(item)
        for item in items
    )


def tree_to_list(
        tree: Iterable[Item],
) -> list[dict[str, Any]]:
    """Convert a snapshot to a list of item dictionaries."""
    return [item.to_dict() for item in tree]


def count_items(
        tree: Iterable[Item],
) -> int:
    """Count every item in a snapshot, children included."""
    return sum(1 + count_items(item.children) for item in tree)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)
