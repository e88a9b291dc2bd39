from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `fleetboard/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data.db"


@pytest.fixture
def store(db_path: Path):
    """An open, empty store; closed after the test."""
    from fleetboard.store import Store

    s = Store.open(db_path)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def seeded_store(store):
    from fleetboard.seed import seed_store

    seed_store(store)
    return store
