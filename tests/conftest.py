"""Pytest configuration and shared fixtures for all tests."""

from pathlib import Path

import pytest

from lockgraph.logging_config import logger

TEST_DATA_DIR = Path(__file__).parent / "test-data"


@pytest.fixture(autouse=True)
def restore_log_level():
    """Undo log level and format changes made by CLI runs."""
    level = logger.level
    formatters = [(handler, handler.formatter) for handler in logger.handlers]
    yield
    logger.setLevel(level)
    for handler, formatter in formatters:
        handler.setFormatter(formatter)


@pytest.fixture
def poetry_data() -> Path:
    """Directory holding the poetry fixture projects."""
    return TEST_DATA_DIR / "poetry"


@pytest.fixture
def write_project(tmp_path):
    """Write a poetry.lock (and optionally a pyproject.toml) into a directory.

    Returns a function taking (lock, pyproject=None, subdir="") and
    returning the project directory.
    """

    def _write(lock: str, pyproject: str | None = None, subdir: str = "") -> Path:
        project_dir = tmp_path / subdir if subdir else tmp_path
        project_dir.mkdir(parents=True, exist_ok=True)
        (project_dir / "poetry.lock").write_text(lock)
        if pyproject is not None:
            (project_dir / "pyproject.toml").write_text(pyproject)
        return project_dir

    return _write
