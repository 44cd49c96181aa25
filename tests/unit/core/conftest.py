"""Shared fixtures for core unit tests: a small guide corpus"""

import pytest


@pytest.fixture(name="corpus")
def corpus_fixture(guide):
    """(path, text) sources for four guides with overlapping tags and categories."""
    return [
        ("developers/api-docs.mdx", guide(
            title="API Documentation & Design",
            description="Designing HTTP APIs",
            category="developers",
            tags=["api", "Documentation"],
            publishedAt="2024-01-15",
            relatedGuides=["backend-development-guide", "nonexistent-guide"],
        )),
        ("developers/backend-development-guide.mdx", guide(
            title="Backend Development Guide",
            description="Services, data and deployment",
            category="developers",
            tags=["backend", "api"],
            publishedAt="2024-01-20",
        )),
        ("devops/git-workflow.md", guide(
            title="Git Workflow",
            category="DevOps",
            tags=["git", "DevOps"],
            publishedAt="2024-01-16",
            relatedGuides=["api-docs"],
        )),
        ("qa-testing/testing-strategies-guide.mdx", guide(
            title="Testing Strategies",
            category="qa-testing",
            tags=["testing", "devops"],
        )),
    ]
