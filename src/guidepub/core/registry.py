"""Content registry: parse every guide once and index the results by slug"""

import logging
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType
from typing import Collection, Iterable, Iterator, Mapping, Optional

from guidepub.core.content import content_hash, reading_minutes, table_of_contents
from guidepub.core.frontmatter import parse_document
from guidepub.core.models import Document
from guidepub.core.utils.slug import slug_from_path, slugify
from guidepub.errors import DuplicateSlugError


logger = logging.getLogger(__name__)


def load_document(
    path: str,
    text: str,
    categories: Optional[Collection[str]] = None,
    words_per_minute: int = 200,
    ) -> Document:
    """Parse one source into a Document. The front matter slug wins over the path."""
    meta, body = parse_document(text, path, categories)
    slug = slugify(meta.slug) if meta.slug else slug_from_path(path)
    return Document(
        slug=slug or slug_from_path(path),
        path=path,
        title=meta.title,
        category=meta.category,
        description=meta.description,
        tags=meta.tags,
        published_at=meta.published_at,
        difficulty=meta.difficulty,
        external_links=meta.external_links,
        related_guides=meta.related_guides,
        extra=meta.extra,
        body=body,
        headings=tuple(table_of_contents(body)),
        reading_minutes=reading_minutes(body, words_per_minute),
        hash=content_hash(text),
    )


class Registry:
    """Read-only slug -> Document mapping, complete once constructed."""

    def __init__(self, documents: Mapping[str, Document]):
        self._docs = MappingProxyType(dict(sorted(documents.items())))

    @classmethod
    def build(
        cls,
        sources: Iterable[tuple[str, str]],
        categories: Optional[Collection[str]] = None,
        workers: int = 1,
        words_per_minute: int = 200,
        ) -> "Registry":
        """Parse all (path, text) sources and merge them by slug.

        Any parse error aborts the build. A repeated slug raises DuplicateSlugError
        naming both paths; no registry is produced in either case.
        """
        sources = list(sources)

        def _load(item: tuple[str, str]) -> Document:
            return load_document(item[0], item[1], categories, words_per_minute)

        if workers > 1 and len(sources) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                parsed = list(pool.map(_load, sources))
        else:
            parsed = [_load(s) for s in sources]

        docs: dict[str, Document] = {}
        for doc in parsed:
            existing = docs.get(doc.slug)
            if existing is not None:
                raise DuplicateSlugError(doc.slug, existing.path, doc.path)
            docs[doc.slug] = doc
            logger.debug("Indexed guide %s (%s)", doc.slug, doc.path)

        logger.info("Built registry with %d guide(s)", len(docs))
        return cls(docs)

    def get(self, slug: str) -> Optional[Document]:
        """Return the Document for slug, or None when it is not registered."""
        return self._docs.get(slug)

    def slugs(self) -> list[str]:
        return list(self._docs)

    def documents(self) -> list[Document]:
        return list(self._docs.values())

    def __contains__(self, slug: object) -> bool:
        return slug in self._docs

    def __iter__(self) -> Iterator[Document]:
        return iter(self._docs.values())

    def __len__(self) -> int:
        return len(self._docs)
