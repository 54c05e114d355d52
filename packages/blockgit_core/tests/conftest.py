"""Shared test configuration and fixtures for blockgit_core tests.

Provides:
- A repository with deterministic IDs and a fake clock, so tests can
  assert on ordering without depending on wall-clock resolution.
- Small item builders.
"""
from __future__ import annotations

import itertools
from typing import Callable

import pytest

from blockgit_core.models import Item
from blockgit_core.repository import Repository


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1000) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Frozen clock; the engine must still order commits strictly."""
    return FakeClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Sequential ID generator ('id-1', 'id-2', ...)."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def repo(id_factory: Callable[[], str], clock: FakeClock) -> Repository:
    """Fresh repository with deterministic IDs."""
    return Repository(id_factory=id_factory, clock=clock)


@pytest.fixture
def make_item() -> Callable[..., Item]:
    """Build a todo item."""

    def _make(item_id: str, title: str = "", **kwargs) -> Item:
        return Item(id=item_id, kind=kwargs.pop("kind", "todo"), title=title or item_id, **kwargs)

    return _make


@pytest.fixture
def commit_items(repo: Repository, make_item: Callable[..., Item]) -> Callable[..., object]:
    """Stage a single item and commit it in one step."""

    def _commit(message: str, item_id: str | None = None):
        repo.add([make_item(item_id or message)])
        return repo.commit(message)

    return _commit
