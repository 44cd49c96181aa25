"""Front matter splitting, decoding into GuideMeta, and re-serialisation"""

import re
from typing import Any, Collection, Optional

import yaml
from pydantic import ValidationError

from guidepub.core.models import GuideMeta
from guidepub.errors import MetadataParseError, MissingFieldError


FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
REQUIRED_FIELDS = ('title', 'category')


def split_frontmatter(text: str, path: str = '<string>') -> tuple[str, str]:
    """Return (header_text, body); the header must open the document."""
    if text.startswith('\ufeff'):
        text = text[1:]
    m = FRONTMATTER_RE.match(text)
    if not m:
        raise MetadataParseError(path, "document does not start with a '---' front matter fence")
    return m.group(1), text[m.end():]


def _load_header(header: str, path: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(header) if header.strip() else {}
    except yaml.YAMLError as e:
        raise MetadataParseError(path, str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MetadataParseError(path, f"expected a mapping, got {type(data).__name__}")
    return {str(k): v for k, v in data.items()}


def _describe(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'header'}: {err['msg']}" for err in e.errors()
    )


def parse_document(
    text: str,
    path: str = '<string>',
    categories: Optional[Collection[str]] = None,
    ) -> tuple[GuideMeta, str]:
    """Split and decode a guide's header.

    Raises MetadataParseError for a missing fence, invalid YAML, a non-mapping header,
    badly typed values, or a category outside `categories` (when given).
    Raises MissingFieldError when title or category is absent or blank.
    """
    header, body = split_frontmatter(text, path)
    data = _load_header(header, path)

    missing = [f for f in REQUIRED_FIELDS if data.get(f) is None or not str(data[f]).strip()]
    if missing:
        raise MissingFieldError(path, missing)

    try:
        meta = GuideMeta.model_validate(data)
    except ValidationError as e:
        raise MetadataParseError(path, _describe(e)) from e

    if categories:
        allowed = {c.casefold() for c in categories}
        if meta.category.casefold() not in allowed:
            raise MetadataParseError(
                path, f"unknown category '{meta.category}' (expected one of: {', '.join(sorted(allowed))})"
            )
    return meta, body


def dump_frontmatter(meta: GuideMeta) -> str:
    """Serialise meta back to a fenced YAML header using the published key names."""
    data = meta.model_dump(mode='json', by_alias=True, exclude={'extra'}, exclude_defaults=True)
    data.update(meta.extra)
    header = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n"
