"""Slug generation for guide identifiers"""

import re
from pathlib import PurePosixPath


INDEX_STEMS = {'index', 'readme'}


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def slug_from_path(path: str) -> str:
    """Derive a slug from a source path; index files take their directory name."""
    p = PurePosixPath(str(path).replace('\\', '/'))
    stem = p.stem
    if stem.lower() in INDEX_STEMS and p.parent.name:
        stem = p.parent.name
    return slugify(stem)
