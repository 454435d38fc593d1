"""Fixtures for CLI tests: a seeded SQLite file and an isolated config."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from relguard.scan.ops import RelationGuard, set_default_guard
from relguard.store.engine import Store
from tests.conftest import seed_blog


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """No user or project config leaks in; logging and the default guard are restored."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("relguard.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    monkeypatch.delenv("RELGUARD__DATABASE__URL", raising=False)
    yield
    logging.getLogger().handlers.clear()
    set_default_guard(RelationGuard())


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """URL of a SQLite file holding the seeded blog."""
    url = f"sqlite:///{tmp_path / 'blog.db'}"
    store = Store(url)
    store.create_all()
    with store.session() as session:
        seed_blog(session)
    store.dispose()
    return url
