"""Utility functions for BlockGit CLI commands.

Locates and loads the repository state, resolves commit and branch
references typed by the user, and renders item trees.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - click: CLI framework
    - rich: Tree rendering
    - blockgit_core: Repository, storage and settings

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import json
from datetime import datetime
from datetime import timezone
from typing import IO
from typing import Any

import click
from rich.markup import escape
from rich.tree import Tree

from blockgit_core.config import Settings
from blockgit_core.config import load_settings
from blockgit_core.errors import BranchNotFoundError
from blockgit_core.errors import CommitNotFoundError
from blockgit_core.models import Branch
from blockgit_core.models import Commit
from blockgit_core.models import Item
from blockgit_core.repository import Repository
from blockgit_core.storage import StateFile
from blockgit_core.storage import find_state


# ---- Repository Loading -------------------------------------------------------------------------------------


def get_settings() -> Settings:
    """Get the settings loaded by the CLI group, or load them now."""
    ctx = click.get_current_context(silent=True)
    settings = ctx.find_object(Settings) if ctx else None
    return settings or load_settings()


def load_repository() -> tuple[StateFile, Repository]:
    """Find the state file above the working directory and load it.

    Returns:
        Tuple of (state file, loaded repository).

    Raises:
        click.ClickException: If no repository is found.
    """
    settings = get_settings()
    state = find_state(state_dir=settings.state_dir)
    if state is None:
        msg = "Not a BlockGit repository (run 'blockgit init')"
        raise click.ClickException(msg)
    return state, state.load(default_branch=settings.default_branch)


def read_items(
        source: IO[str],
) -> list[dict[str, Any]]:
    """Read an item tree from a JSON file.

    Accepts a list of items, or an object holding the list under
    'tree' or 'blocks'.

    Args:
        source: Open text stream.

    Returns:
        List of item dictionaries.

    Raises:
        ValueError: If the content is not an item list.
    """
    data = json.load(source)
    if isinstance(data, dict):
        data = data.get("tree", data.get("blocks"))
    if not isinstance(data, list):
        msg = "Expected a JSON list of items"
        raise ValueError(msg)
    return data


# ---- Reference Resolution -----------------------------------------------------------------------------------


def resolve_commit(
        repo: Repository,
        ref: str,
) -> Commit:
    """Resolve a full commit ID or a unique ID prefix.

    Raises:
        CommitNotFoundError: If nothing matches.
        click.ClickException: If the prefix is ambiguous.
    """
    commit = repo.get_commit(ref)
    if commit:
        return commit

    matches = [c for c in repo.iter_commits() if c.id.startswith(ref)] if ref else []
    if len(matches) > 1:
        msg = f"Commit prefix '{ref}' is ambiguous ({len(matches)} matches)"
        raise click.ClickException(msg)
    if not matches:
        raise CommitNotFoundError(ref)
    return matches[0]


def resolve_branch(
        repo: Repository,
        ref: str,
) -> Branch:
    """Resolve a branch by name, falling back to its ID.

    Raises:
        BranchNotFoundError: If no branch matches.
    """
    branch = repo.find_branch(ref) or repo.get_branch(ref)
    if branch is None:
        raise BranchNotFoundError(ref)
    return branch


# ---- Formatting ---------------------------------------------------------------------------------------------


def short_id(
        value: str | None,
) -> str:
    return value[:8] if value else "-"


def format_timestamp(
        timestamp: int,
) -> str:
    """Format epoch milliseconds for display."""
    moment = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def _item_label(
        item: Item,
) -> str:
    if item.kind == "todo":
        box = "[green]\\[x][/green]" if item.completed else "\\[ ]"
        return f"{box} {escape(item.title)}"
    if item.kind == "heading":
        return f"[bold]{escape(item.title)}[/bold]"
    return escape(item.title)


def render_tree(
        items: tuple[Item, ...],
        label: str = "items",
) -> Tree:
    """Build a rich Tree for a snapshot.

    Args:
        items: Snapshot to render.
        label: Label of the root node.

    Returns:
        rich Tree ready to print.
    """
    root = Tree(f"[dim]{escape(label)}[/dim]")
    pending = [(root, item) for item in items]
    while pending:
        parent, item = pending.pop(0)
        node = parent.add(_item_label(item))
        pending.extend((node, child) for child in item.children)
    return root
