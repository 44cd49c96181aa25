"""Published guide persistence: snapshot commit and slug/tag/category lookup"""

import logging
from datetime import datetime

from sqlmodel import Session, select

from guidepub.core.catalog import Catalog
from guidepub.core.index import normalize_key
from guidepub.core.models import Document
from guidepub.core.utils.slug import slugify
from guidepub.crud.models import Guide, GuideLink, GuideTag


logger = logging.getLogger(__name__)


def get_by_slug(session: Session, slug: str) -> Guide | None:
    """Return the Guide with the given slug, or None if not found."""
    return session.exec(select(Guide).where(Guide.slug == slug)).one_or_none()


def get_by_category(session: Session, category: str) -> list[Guide]:
    """Guides in a category, newest first, ties by slug."""
    stmt = (
        select(Guide)
        .where(Guide.category == normalize_key(category))
        .order_by(Guide.published_at.is_(None), Guide.published_at.desc(), Guide.slug.asc())
    )
    return list(session.exec(stmt).all())


def get_by_tag(session: Session, tag: str) -> list[Guide]:
    """Guides carrying a tag, newest first, ties by slug."""
    stmt = (
        select(Guide)
        .join(GuideTag, GuideTag.guide_id == Guide.id)
        .where(GuideTag.tag == normalize_key(tag))
        .order_by(Guide.published_at.is_(None), Guide.published_at.desc(), Guide.slug.asc())
    )
    return list(session.exec(stmt).all())


def list_slugs(session: Session) -> list[str]:
    """Return all stored slugs in ascending order."""
    return list(session.exec(select(Guide.slug).order_by(Guide.slug)).all())


def get_related_slugs(session: Session, guide: Guide) -> list[str]:
    """Declared related-guide slugs (normalized) in declaration order, resolvable or not."""
    links = session.exec(
        select(GuideLink).where(GuideLink.guide_id == guide.id).order_by(GuideLink.position)
    ).all()
    return [link.target_slug for link in links]


def _frontmatter(doc: Document) -> dict:
    """Front matter fields not stored in their own columns."""
    return doc.model_dump(
        mode='json',
        include={'tags', 'external_links', 'related_guides', 'extra'},
    )


def _clear_children(session: Session, guide_id) -> None:
    for row in session.exec(select(GuideTag).where(GuideTag.guide_id == guide_id)).all():
        session.delete(row)
    for row in session.exec(select(GuideLink).where(GuideLink.guide_id == guide_id)).all():
        session.delete(row)
    session.flush()


def _add_children(session: Session, guide_id, doc: Document) -> None:
    labels: dict[str, str] = {}
    for tag in doc.tags:
        labels.setdefault(normalize_key(tag), tag)
    for key, label in labels.items():
        session.add(GuideTag(guide_id=guide_id, tag=key, label=label))
    for position, target in enumerate(dict.fromkeys(slugify(r) for r in doc.related_guides)):
        session.add(GuideLink(guide_id=guide_id, position=position, target_slug=target))
    session.flush()


def _apply(guide: Guide, doc: Document) -> None:
    guide.path = doc.path
    guide.title = doc.title
    guide.description = doc.description
    guide.category = normalize_key(doc.category)
    guide.difficulty = doc.difficulty.value if doc.difficulty else None
    guide.published_at = doc.published_at
    guide.reading_minutes = doc.reading_minutes
    guide.body = doc.body
    guide.hash = doc.hash
    guide.frontmatter = _frontmatter(doc)


def commit_catalog(
    session: Session,
    catalog: Catalog,
    committed_at: datetime | None = None,
    ) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Replace the stored snapshot with the catalog's guides.

    Returns (counts, changes) where counts has created/updated/unchanged/deleted
    and changes lists (status, slug) for everything but unchanged guides.
    Flushes but does not commit; caller controls the transaction.
    """
    committed_at = committed_at or datetime.now()
    counts = {"created": 0, "updated": 0, "unchanged": 0, "deleted": 0}
    changes: list[tuple[str, str]] = []

    stored = {g.slug: g for g in session.exec(select(Guide)).all()}

    for doc in catalog.registry:
        guide = stored.get(doc.slug)
        if guide is not None and guide.hash == doc.hash:
            counts["unchanged"] += 1
            continue

        if guide is None:
            guide = Guide(slug=doc.slug, path=doc.path, title=doc.title, category="", body="", hash="")
            status = "created"
        else:
            _clear_children(session, guide.id)
            guide.updated_at = datetime.now()
            status = "updated"

        _apply(guide, doc)
        guide.committed_at = committed_at
        session.add(guide)
        session.flush()
        _add_children(session, guide.id, doc)
        counts[status] += 1
        changes.append((status, doc.slug))

    for slug, guide in stored.items():
        if slug in catalog.registry:
            continue
        _clear_children(session, guide.id)
        session.delete(guide)
        counts["deleted"] += 1
        changes.append(("deleted", slug))
    session.flush()

    logger.info(
        "Committed snapshot: %d created, %d updated, %d unchanged, %d deleted",
        counts["created"], counts["updated"], counts["unchanged"], counts["deleted"],
    )
    return counts, changes
