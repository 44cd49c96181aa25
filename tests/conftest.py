"""Root test configuration: session-level cleanup of runtime artifacts"""

import os
import shutil
from pathlib import Path

import pytest
import yaml


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["guidepub.db", "test.db"]
_CLEANUP_DIRS = ["dist"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and export directories created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GUIDEPUB_* variables from the outer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("GUIDEPUB_"):
            monkeypatch.delenv(name)


@pytest.fixture(name="guide")
def guide_fixture():
    """Factory rendering a guide source with YAML front matter."""
    def _guide(title: str = "A Guide", category: str = "developers", body: str = "# Intro\n\nText.\n", **fields) -> str:
        fm = {"title": title, "category": category, **fields}
        header = yaml.safe_dump(fm, sort_keys=False, allow_unicode=True)
        return f"---\n{header}---\n\n{body}"
    return _guide
