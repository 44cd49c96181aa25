"""Fixtures for CLI integration tests: a content tree inside tmp_path"""

import logging

import pytest
from typer.testing import CliRunner


@pytest.fixture(name="runner")
def runner_fixture():
    return CliRunner()


@pytest.fixture(name="site")
def site_fixture(tmp_path, monkeypatch, guide):
    """chdir into tmp_path with content/ holding three guides and a private database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GUIDEPUB_DB_URL", f"sqlite:///{tmp_path}/test.db")
    content = tmp_path / "content"
    (content / "developers").mkdir(parents=True)
    (content / "performance").mkdir()
    (content / "developers" / "api-docs.mdx").write_text(guide(
        title="API Documentation & Design",
        category="developers",
        tags=["api"],
        publishedAt="2024-01-15",
        relatedGuides=["web-performance", "nonexistent-guide"],
    ))
    (content / "performance" / "web-performance.mdx").write_text(guide(
        title="Web Performance",
        category="performance",
        tags=["Performance", "api"],
        publishedAt="2024-01-20",
    ))
    (content / "performance" / "caching.mdx").write_text(guide(
        title="Caching Strategies",
        category="performance",
        tags=["performance"],
        publishedAt="2024-01-16",
    ))
    return tmp_path


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI callback sets the package log level; undo it after each test."""
    logger = logging.getLogger("guidepub")
    level = logger.level
    yield
    logger.setLevel(level)
