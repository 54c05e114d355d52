"""Tests for the BlockGit command-line interface.

Covers:
    - Repository initialization and discovery
    - Staging and committing item files
    - History, status and show output
    - Branch, checkout, clone, reset and revert commands
    - Error reporting

Uses click's CliRunner inside an isolated filesystem.
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blockgit_cli.main import cli
from blockgit_core.storage import StateFile

SETTING_VARS = (
    "BLOCKGIT_STATE_DIR",
    "BLOCKGIT_DEFAULT_BRANCH",
    "BLOCKGIT_LOG_LEVEL",
    "BLOCKGIT_HOST",
    "BLOCKGIT_PORT",
)

GROCERIES = [
    {
        "id": "1",
        "type": "heading",
        "title": "Groceries",
        "children": [
            {"id": "2", "type": "todo", "title": "Milk", "completed": True, "children": []},
        ],
    },
]


# ---- Fixtures -----------------------------------------------------------------------------------------------


@pytest.fixture
def runner(monkeypatch, tmp_path):
    """CliRunner working inside an empty directory with a clean environment."""
    for name in SETTING_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture
def repo_dir(runner, tmp_path):
    """Initialized repository in the working directory."""
    result = runner.invoke(cli, ["init"])
    assert result.exit_code == 0, result.output
    return tmp_path


def write_items(path: Path, items: list[dict]) -> str:
    path.write_text(json.dumps(items), encoding="utf-8")
    return str(path)


def commit_file(runner: CliRunner, repo_dir: Path, message: str, title: str) -> None:
    """Stage a one-item file and commit it."""
    items_file = write_items(
        repo_dir / "items.json",
        [{"id": title, "type": "todo", "title": title, "completed": False, "children": []}],
    )
    result = runner.invoke(cli, ["commit", "-m", message, "--file", items_file])
    assert result.exit_code == 0, result.output


def load_state(repo_dir: Path):
    return StateFile(repo_dir).load()


# ---- Init Tests ---------------------------------------------------------------------------------------------


class TestInit:
    """Tests for the init command."""

    def test_init_creates_state(self, runner, tmp_path):
        """Test init writes the state file."""
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "Initialized empty BlockGit repository" in result.output
        assert (tmp_path / ".blockgit" / "state.json").is_file()

    def test_init_branch_name(self, runner, tmp_path):
        """Test the initial branch name option."""
        runner.invoke(cli, ["init", "--branch", "main"])

        assert load_state(tmp_path).get_current_branch().name == "main"

    def test_init_existing(self, runner, repo_dir):
        """Test init in an existing repository leaves it alone."""
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_state_dir_setting(self, runner, tmp_path, monkeypatch):
        """Test BLOCKGIT_STATE_DIR changes the state location."""
        monkeypatch.setenv("BLOCKGIT_STATE_DIR", ".todo-history")

        runner.invoke(cli, ["init"])

        assert (tmp_path / ".todo-history" / "state.json").is_file()

    def test_commands_require_repository(self, runner):
        """Test commands outside a repository fail."""
        result = runner.invoke(cli, ["log"])

        assert result.exit_code == 1
        assert "Not a BlockGit repository" in result.output

    def test_found_from_subdirectory(self, runner, repo_dir, monkeypatch):
        """Test the state file is discovered from nested directories."""
        nested = repo_dir / "notes" / "today"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "On branch" in result.output

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output


# ---- Add/Commit Tests ---------------------------------------------------------------------------------------


class TestAddCommit:
    """Tests for the add and commit commands."""

    def test_add_then_commit(self, runner, repo_dir):
        """Test staging a file and committing it."""
        items_file = write_items(repo_dir / "items.json", GROCERIES)

        added = runner.invoke(cli, ["add", items_file])
        committed = runner.invoke(cli, ["commit", "-m", "Groceries"])

        assert added.exit_code == 0
        assert "Staged 2 item(s)" in added.output
        assert committed.exit_code == 0
        assert "Groceries" in committed.output

        repo = load_state(repo_dir)
        assert [c.message for c in repo.list_commits()] == ["Groceries"]
        assert repo.has_staged_changes() is False

    def test_add_from_stdin(self, runner, repo_dir):
        """Test reading items from stdin."""
        result = runner.invoke(cli, ["add", "-"], input=json.dumps({"tree": GROCERIES}))

        assert result.exit_code == 0
        assert load_state(repo_dir).has_staged_changes() is True

    def test_add_empty_list_clears(self, runner, repo_dir):
        """Test an empty list clears the staging area."""
        runner.invoke(cli, ["add", write_items(repo_dir / "items.json", GROCERIES)])

        result = runner.invoke(cli, ["add", write_items(repo_dir / "empty.json", [])])

        assert "Staging area cleared" in result.output
        assert load_state(repo_dir).has_staged_changes() is False

    def test_add_invalid_content(self, runner, repo_dir):
        """Test non-list JSON is rejected."""
        bad_file = repo_dir / "bad.json"
        bad_file.write_text('{"title": "not a list"}', encoding="utf-8")

        result = runner.invoke(cli, ["add", str(bad_file)])

        assert result.exit_code == 1
        assert "Expected a JSON list" in result.output

    def test_commit_nothing_staged(self, runner, repo_dir):
        """Test committing with an empty staging area."""
        result = runner.invoke(cli, ["commit", "-m", "empty"])

        assert result.exit_code == 0
        assert "Nothing to commit" in result.output
        assert load_state(repo_dir).commit_count == 0

    def test_commit_requires_message(self, runner, repo_dir):
        """Test the message option is required."""
        result = runner.invoke(cli, ["commit"])

        assert result.exit_code != 0


# ---- History Tests ------------------------------------------------------------------------------------------


class TestHistory:
    """Tests for the log, status and show commands."""

    def test_log(self, runner, repo_dir):
        """Test the full log format."""
        commit_file(runner, repo_dir, "first", "A")
        commit_file(runner, repo_dir, "second", "B")

        result = runner.invoke(cli, ["log"])

        assert result.exit_code == 0
        assert result.output.index("second") < result.output.index("first")
        assert "HEAD -> default" in result.output

    def test_log_oneline_limit(self, runner, repo_dir):
        """Test the compact log with a limit."""
        commit_file(runner, repo_dir, "first", "A")
        commit_file(runner, repo_dir, "second", "B")

        result = runner.invoke(cli, ["log", "--oneline", "-n", "1"])

        assert "second" in result.output
        assert "first" not in result.output

    def test_log_empty(self, runner, repo_dir):
        """Test the log of an empty branch."""
        result = runner.invoke(cli, ["log"])

        assert "No commits yet" in result.output

    def test_status_shows_staged_items(self, runner, repo_dir):
        """Test status lists staged items."""
        runner.invoke(cli, ["add", write_items(repo_dir / "items.json", GROCERIES)])

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "Changes to be committed" in result.output
        assert "Milk" in result.output

    def test_show_by_prefix(self, runner, repo_dir):
        """Test showing a commit by ID prefix."""
        commit_file(runner, repo_dir, "first", "Bread")
        commit_id = load_state(repo_dir).get_head().id

        result = runner.invoke(cli, ["show", commit_id[:8]])

        assert result.exit_code == 0
        assert commit_id in result.output
        assert "Bread" in result.output

    def test_show_unknown_commit(self, runner, repo_dir):
        """Test showing an unknown commit fails."""
        result = runner.invoke(cli, ["show", "zzzz"])

        assert result.exit_code == 1
        assert "not found" in result.output


# ---- Branch Tests -------------------------------------------------------------------------------------------


class TestBranching:
    """Tests for the branch, checkout and clone commands."""

    def test_branch_create_and_list(self, runner, repo_dir):
        """Test creating a branch and listing branches."""
        commit_file(runner, repo_dir, "first", "A")

        created = runner.invoke(cli, ["branch", "feature"])
        listed = runner.invoke(cli, ["branch"])

        assert "Created branch 'feature'" in created.output
        assert "* default" in listed.output
        assert "feature" in listed.output

    def test_branch_from_commit(self, runner, repo_dir):
        """Test creating a branch at an older commit."""
        commit_file(runner, repo_dir, "first", "A")
        first_id = load_state(repo_dir).get_head().id
        commit_file(runner, repo_dir, "second", "B")

        runner.invoke(cli, ["branch", "old", "--from", first_id[:8]])

        assert load_state(repo_dir).find_branch("old").head_id == first_id

    def test_branch_duplicate(self, runner, repo_dir):
        """Test duplicate branch names are rejected."""
        runner.invoke(cli, ["branch", "feature"])

        result = runner.invoke(cli, ["branch", "feature"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_branch_delete(self, runner, repo_dir):
        """Test deleting a branch by name."""
        runner.invoke(cli, ["branch", "feature"])

        result = runner.invoke(cli, ["branch", "-d", "feature"])

        assert result.exit_code == 0
        assert load_state(repo_dir).find_branch("feature") is None

    def test_branch_delete_active(self, runner, repo_dir):
        """Test the active branch cannot be deleted."""
        result = runner.invoke(cli, ["branch", "-d", "default"])

        assert result.exit_code == 1
        assert "currently active" in result.output

    def test_checkout_branch(self, runner, repo_dir):
        """Test switching branches isolates history."""
        commit_file(runner, repo_dir, "first", "A")
        runner.invoke(cli, ["branch", "feature"])
        commit_file(runner, repo_dir, "second", "B")

        result = runner.invoke(cli, ["checkout", "feature"])
        log = runner.invoke(cli, ["log", "--oneline"])

        assert "Switched to branch 'feature'" in result.output
        assert "first" in log.output
        assert "second" not in log.output

    def test_checkout_create(self, runner, repo_dir):
        """Test creating and switching in one step."""
        result = runner.invoke(cli, ["checkout", "-b", "feature"])

        assert result.exit_code == 0
        assert load_state(repo_dir).get_current_branch().name == "feature"

    def test_checkout_commit_detaches(self, runner, repo_dir):
        """Test checking out a commit detaches HEAD."""
        commit_file(runner, repo_dir, "first", "A")
        first_id = load_state(repo_dir).get_head().id
        commit_file(runner, repo_dir, "second", "B")

        result = runner.invoke(cli, ["checkout", first_id[:8]])
        status = runner.invoke(cli, ["status"])

        assert "detached" in result.output
        assert "HEAD detached" in status.output
        repo = load_state(repo_dir)
        assert repo.is_detached() is True
        assert repo.get_head().id == first_id

    def test_checkout_unknown(self, runner, repo_dir):
        """Test an unknown target fails."""
        result = runner.invoke(cli, ["checkout", "nowhere"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_clone_full_history(self, runner, repo_dir):
        """Test cloning with copied history."""
        commit_file(runner, repo_dir, "first", "A")

        result = runner.invoke(cli, ["clone", "archive", "--full-history"])

        assert result.exit_code == 0
        assert "full history" in result.output
        repo = load_state(repo_dir)
        clone = repo.find_branch("archive")
        assert clone.head_id != repo.get_head().id
        assert repo.get_current_branch().name == "default"


# ---- Reset/Revert Tests -------------------------------------------------------------------------------------


class TestResetRevert:
    """Tests for the reset and revert commands."""

    def test_reset(self, runner, repo_dir):
        """Test resetting drops later commits."""
        commit_file(runner, repo_dir, "first", "A")
        first_id = load_state(repo_dir).get_head().id
        commit_file(runner, repo_dir, "second", "B")

        result = runner.invoke(cli, ["reset", first_id])

        assert result.exit_code == 0
        assert "Removed 1 commit(s)" in result.output
        repo = load_state(repo_dir)
        assert [c.message for c in repo.list_commits()] == ["first"]

    def test_reset_foreign_commit(self, runner, repo_dir):
        """Test resetting to another branch's commit fails."""
        commit_file(runner, repo_dir, "first", "A")
        runner.invoke(cli, ["checkout", "-b", "feature"])
        commit_file(runner, repo_dir, "on feature", "F")
        feature_id = load_state(repo_dir).get_head().id
        runner.invoke(cli, ["checkout", "default"])

        result = runner.invoke(cli, ["reset", feature_id])

        assert result.exit_code == 1
        assert "does not belong" in result.output

    def test_revert(self, runner, repo_dir):
        """Test revert appends a commit with the old snapshot."""
        commit_file(runner, repo_dir, "first", "A")
        first = load_state(repo_dir).get_head()
        commit_file(runner, repo_dir, "second", "B")

        result = runner.invoke(cli, ["revert", first.id[:8]])

        assert result.exit_code == 0
        repo = load_state(repo_dir)
        assert [c.message for c in repo.list_commits()] == ["revert: first", "second", "first"]
        assert repo.get_head().tree == first.tree

    def test_revert_custom_message(self, runner, repo_dir):
        """Test revert with an explicit message."""
        commit_file(runner, repo_dir, "first", "A")
        first_id = load_state(repo_dir).get_head().id

        runner.invoke(cli, ["revert", first_id, "-m", "again"])

        assert load_state(repo_dir).get_head().message == "again"
