"""Fixtures for Alembic migration tests."""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest
import sqlalchemy as sa

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
VERSIONS_DIR = PROJECT_ROOT / "alembic" / "versions"


def load_revision(filename: str) -> ModuleType:
    """Import a revision script by file path; ``alembic/versions`` is not a package."""
    path = VERSIONS_DIR / filename
    spec = importlib.util.spec_from_file_location(f"revision_{path.stem}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def initial_revision() -> ModuleType:
    return load_revision("20251020_000000_initial_schema.py")


@pytest.fixture
def sqlite_engine(tmp_path):
    """File-backed SQLite engine so every connection sees the same schema."""
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'migration.db'}")
    yield engine
    engine.dispose()
