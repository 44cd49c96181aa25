"""Secondary tag and category indices over a registry"""

from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping

from guidepub.core.models import Document
from guidepub.core.registry import Registry


def normalize_key(value: str) -> str:
    """Case-insensitive bucket key for tags and categories."""
    return value.strip().casefold()


def _listing_order(doc: Document) -> tuple:
    """Newest first, undated last, then slug ascending."""
    published: date | None = doc.published_at
    return (published is None, -published.toordinal() if published else 0, doc.slug)


def _bucket(pairs: Iterable[tuple[str, Document]]) -> Mapping[str, tuple[str, ...]]:
    groups: dict[str, list[Document]] = {}
    for key, doc in pairs:
        if key:
            groups.setdefault(key, []).append(doc)
    return MappingProxyType({
        key: tuple(d.slug for d in sorted(docs, key=_listing_order))
        for key, docs in sorted(groups.items())
    })


class ContentIndex:
    """Tag -> slugs and category -> slugs listings, most recent guide first."""

    def __init__(self, by_tag: Mapping[str, tuple[str, ...]], by_category: Mapping[str, tuple[str, ...]]):
        self._by_tag = by_tag
        self._by_category = by_category

    @classmethod
    def from_registry(cls, registry: Registry) -> "ContentIndex":
        # a tag repeated with different casing counts once per guide
        tag_pairs = (
            (key, doc)
            for doc in registry
            for key in dict.fromkeys(normalize_key(t) for t in doc.tags)
        )
        category_pairs = ((normalize_key(doc.category), doc) for doc in registry)
        return cls(_bucket(tag_pairs), _bucket(category_pairs))

    def by_tag(self, tag: str) -> tuple[str, ...]:
        return self._by_tag.get(normalize_key(tag), ())

    def by_category(self, category: str) -> tuple[str, ...]:
        return self._by_category.get(normalize_key(category), ())

    def tags(self) -> dict[str, int]:
        """Tag key -> number of guides, in key order."""
        return {k: len(v) for k, v in self._by_tag.items()}

    def categories(self) -> dict[str, int]:
        """Category key -> number of guides, in key order."""
        return {k: len(v) for k, v in self._by_category.items()}
