"""Catalog facade: one immutable registry plus its derived indices"""

from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterable, Optional

from guidepub.config import Settings
from guidepub.core.index import ContentIndex
from guidepub.core.models import Document, RelatedGuide
from guidepub.core.parse import read_sources
from guidepub.core.registry import Registry
from guidepub.core.related import dangling_references, resolve_related


@dataclass(frozen=True)
class Catalog:
    """Built once per process or build and handed to every consumer by reference."""
    registry: Registry
    index: ContentIndex

    def get(self, slug: str) -> Optional[Document]:
        return self.registry.get(slug)

    def resolve_related(self, document: Document) -> list[RelatedGuide]:
        return resolve_related(document, self.registry)

    def by_tag(self, tag: str) -> tuple[str, ...]:
        return self.index.by_tag(tag)

    def by_category(self, category: str) -> tuple[str, ...]:
        return self.index.by_category(category)

    def dangling(self) -> dict[str, tuple[str, ...]]:
        return dangling_references(self.registry)


def build_catalog(
    sources: Iterable[tuple[str, str]],
    categories: Optional[Collection[str]] = None,
    workers: int = 1,
    words_per_minute: int = 200,
    ) -> Catalog:
    """Build the registry from (path, text) pairs, then derive the indices."""
    registry = Registry.build(sources, categories, workers, words_per_minute)
    return Catalog(registry=registry, index=ContentIndex.from_registry(registry))


def load_catalog(root: Path, settings: Settings) -> Catalog:
    """Read every guide under root and build a catalog using settings."""
    return build_catalog(
        read_sources(root),
        categories=settings.categories or None,
        workers=settings.workers,
        words_per_minute=settings.words_per_minute,
    )
