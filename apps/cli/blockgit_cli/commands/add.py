"""BlockGit add command.

Stages an item tree for the next commit.

Execution Context:
    CLI command - invoked via `blockgit add`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - blockgit_core: Repository management

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

from typing import IO

import click
from rich.console import Console

from blockgit_cli.commands.utils import load_repository
from blockgit_cli.commands.utils import read_items
from blockgit_core.models import count_items

console = Console()


# ---- Add Command --------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "source",
    type=click.File("r"),
)
def add(
        source: IO[str],
) -> None:
    """Stage an item tree for the next commit.

    SOURCE is a JSON file holding a list of items; use '-' to read
    from stdin. Staging replaces anything staged before, and an empty
    list clears the staging area.

    Examples:
        blockgit add items.json
        cat items.json | blockgit add -
    """
    try:
        state, repo = load_repository()

        items = read_items(source)
        repo.add(items)
        state.save(repo)

        if repo.has_staged_changes():
            count = count_items(repo.get_staged())
            console.print(f"[green]Staged {count} item(s)[/green]")
        else:
            console.print("[dim]Staging area cleared[/dim]")

    except Exception as add_error:
        msg = f"Add failed: {add_error}"
        raise click.ClickException(msg) from add_error
