"""Related-guide resolution against a built registry"""

import logging

from guidepub.core.models import Document, RelatedGuide
from guidepub.core.registry import Registry
from guidepub.core.utils.slug import slugify


logger = logging.getLogger(__name__)


def _declared(document: Document) -> dict[str, str]:
    """Normalized slug -> related guide as written, first occurrence wins."""
    declared: dict[str, str] = {}
    for ref in document.related_guides:
        declared.setdefault(slugify(ref), ref)
    return declared


def resolve_related(document: Document, registry: Registry) -> list[RelatedGuide]:
    """Summaries of document's related guides in declaration order.

    References are slugified the same way front matter slugs are, so `API_Docs`
    finds `api-docs`. Slugs missing from the registry are logged and skipped; a
    guide listed twice appears once, at its first position.
    """
    resolved = []
    for slug, ref in _declared(document).items():
        target = registry.get(slug)
        if target is None:
            logger.warning("%s: related guide '%s' not found", document.slug, ref)
            continue
        resolved.append(RelatedGuide(slug=target.slug, title=target.title, description=target.description))
    return resolved


def dangling_references(registry: Registry) -> dict[str, tuple[str, ...]]:
    """Map each slug to the related guides it declares (as written) that do not resolve."""
    report = {}
    for doc in registry:
        missing = tuple(ref for slug, ref in _declared(doc).items() if slug not in registry)
        if missing:
            report[doc.slug] = missing
    return report
