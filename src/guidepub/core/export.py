"""Export pipeline: per-guide sidecar JSON and the site-wide listing index"""

import json
from pathlib import Path

from guidepub.core.catalog import Catalog
from guidepub.core.models import Document


def _summary(doc: Document) -> dict:
    return {
        "slug": doc.slug,
        "title": doc.title,
        "description": doc.description,
        "category": doc.category,
        "publishedAt": doc.published_at.isoformat() if doc.published_at else None,
        "difficulty": doc.difficulty.value if doc.difficulty else None,
        "readingMinutes": doc.reading_minutes,
    }


def build_sidecar(doc: Document, catalog: Catalog) -> dict:
    """Build the sidecar JSON dict for one guide: metadata, headings, resolved related guides.

    Unresolved related guides are left out, matching what the page renders.
    """
    return {
        **_summary(doc),
        "path": doc.path,
        "hash": doc.hash,
        "tags": list(doc.tags),
        "externalLinks": [link.model_dump() for link in doc.external_links],
        "relatedGuides": [r.model_dump() for r in catalog.resolve_related(doc)],
        "headings": [h.model_dump() for h in doc.headings],
        "extra": doc.extra,
    }


def build_site_index(catalog: Catalog) -> dict:
    """Build the listing index: guide summaries plus tag and category buckets."""
    index = catalog.index
    return {
        "guides": [_summary(doc) for doc in catalog.registry],
        "tags": {tag: list(index.by_tag(tag)) for tag in index.tags()},
        "categories": {cat: list(index.by_category(cat)) for cat in index.categories()},
    }


def write_catalog(catalog: Catalog, output_dir: Path) -> list[Path]:
    """Write guides/<slug>.json for every guide and index.json. Returns the written paths."""
    output_dir = Path(output_dir)
    (output_dir / "guides").mkdir(parents=True, exist_ok=True)

    written = []
    for doc in catalog.registry:
        path = output_dir / "guides" / f"{doc.slug}.json"
        path.write_text(
            json.dumps(build_sidecar(doc, catalog), indent=2, ensure_ascii=False, default=str),
            encoding='utf-8',
        )
        written.append(path)

    index_path = output_dir / "index.json"
    index_path.write_text(
        json.dumps(build_site_index(catalog), indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    written.append(index_path)
    return written
