"""BlockGit checkout command.

Switches branches or checks out a single commit.

Execution Context:
    CLI command - invoked via `blockgit checkout`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - blockgit_core: Repository management

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from blockgit_cli.commands.utils import load_repository
from blockgit_cli.commands.utils import resolve_branch
from blockgit_cli.commands.utils import resolve_commit
from blockgit_cli.commands.utils import short_id
from blockgit_core.errors import BranchNotFoundError

console = Console()


# ---- Checkout Command ---------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "target",
    required=True,
)
@click.option(
    "--create",
    "-b",
    is_flag=True,
    help="Create the branch and switch to it.",
)
@click.option(
    "--commit",
    "as_commit",
    is_flag=True,
    help="Treat TARGET as a commit and detach HEAD.",
)
def checkout(
        target: str,
        create: bool,
        as_commit: bool,
) -> None:
    """Switch to a branch or view a commit.

    TARGET is a branch name or ID. If no branch matches, it is tried
    as a commit ID (or unique prefix), which detaches HEAD without
    moving the branch.

    Examples:
        blockgit checkout main
        blockgit checkout -b feature
        blockgit checkout --commit 3f2a9c1e
    """
    try:
        state, repo = load_repository()

        if create:
            branch = repo.create_and_checkout_branch(target)
            state.save(repo)
            console.print(f"[green]Switched to a new branch '{escape(branch.name)}'[/green]")
            return

        if not as_commit:
            try:
                branch = resolve_branch(repo, target)
            except BranchNotFoundError:
                branch = None

            if branch is not None:
                repo.checkout_branch(branch.id)
                state.save(repo)
                console.print(f"[green]Switched to branch '{escape(branch.name)}'[/green]")
                head = repo.get_head()
                if head:
                    console.print(f"[dim]At commit: {short_id(head.id)} - {escape(head.message)}[/dim]")
                else:
                    console.print("[dim]Branch has no commits yet[/dim]")
                return

        commit = repo.checkout_commit(resolve_commit(repo, target).id)
        state.save(repo)
        console.print(f"[yellow]HEAD is now detached at {short_id(commit.id)}[/yellow] {escape(commit.message)}")

    except Exception as checkout_error:
        msg = f"Checkout failed: {checkout_error}"
        raise click.ClickException(msg) from checkout_error
