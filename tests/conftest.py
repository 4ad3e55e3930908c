# Shared pytest fixtures for the catalog test suite.
# Each store fixture is a fresh SQLite file under `tmp_path`, disposed after the test.

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from library_catalog.api.db_access import DatabaseClient  # noqa: E402
from tests.api.support import build_test_db  # noqa: E402

TEST_ENVIRONMENT = {
    "PROJECT_NAME": "library-catalog-test",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
}


@pytest.fixture(autouse=True)
def required_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fill in the mandatory settings variables the caller's shell did not set."""

    for name, value in TEST_ENVIRONMENT.items():
        if not os.getenv(name):
            monkeypatch.setenv(name, value)


def _disposing(db: DatabaseClient) -> Iterator[DatabaseClient]:
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture
def catalog_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    """Store with the catalog schema applied and no rows."""

    yield from _disposing(build_test_db(tmp_path))


@pytest.fixture
def seeded_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    """Store holding the two sample books and two sample members."""

    yield from _disposing(build_test_db(tmp_path, seed=True))
