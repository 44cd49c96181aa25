"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel

from guidepub.core.catalog import build_catalog
from guidepub.crud.database import init_db


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="sources")
def sources_fixture(guide):
    return [
        ("developers/api-docs.mdx", guide(
            title="API Documentation & Design",
            category="Developers",
            tags=["API", "docs"],
            publishedAt="2024-01-15",
            difficulty="intermediate",
            relatedGuides=["git-workflow", "nonexistent-guide"],
        )),
        ("devops/git-workflow.md", guide(
            title="Git Workflow",
            category="devops",
            tags=["git", "api"],
            publishedAt="2024-01-20",
        )),
    ]


@pytest.fixture(name="catalog")
def catalog_fixture(sources):
    return build_catalog(sources)
