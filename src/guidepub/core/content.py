"""Body analysis: heading anchors, reading time and source hashing"""

import hashlib
import math
import re

from markdown_it import MarkdownIt

from guidepub.core.models import Heading


WORD_RE = re.compile(r"[\w'’-]+")


def _make_parser() -> MarkdownIt:
    """Build the gfm-like MarkdownIt parser used for heading extraction."""
    return MarkdownIt("gfm-like", options_update={"linkify": False})


def _heading_level(token) -> int | None:
    if token.type == 'heading_open' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _inline_text(token) -> str:
    """Plain text of an inline token, without emphasis or link markup."""
    if not token.children:
        return token.content.strip()
    return ''.join(c.content for c in token.children if c.type in ('text', 'code_inline')).strip()


def anchor_for(text: str) -> str:
    """Heading id as rehype-slug renders it: lowercase, punctuation dropped, spaces to hyphens."""
    return re.sub(r'[^\w\- ]', '', text.lower()).replace(' ', '-')


def table_of_contents(body: str, max_level: int = 6) -> list[Heading]:
    """Return headings up to max_level with unique anchors in document order."""
    tokens = _make_parser().parse(body)
    seen: dict[str, int] = {}
    headings = []
    for i, tok in enumerate(tokens):
        level = _heading_level(tok)
        if level is None or level > max_level or i + 1 >= len(tokens):
            continue
        text = _inline_text(tokens[i + 1])
        base = anchor_for(text)
        count = seen.get(base, 0)
        seen[base] = count + 1
        anchor = f"{base}-{count}" if count else base
        headings.append(Heading(level=level, text=text, anchor=anchor))
    return headings


def content_hash(text: str) -> str:
    """Hex SHA-256 of the raw source, used to skip unchanged guides on commit."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def reading_minutes(body: str, words_per_minute: int = 200) -> int:
    """Whole minutes to read body (rounded up, at least 1). Code blocks count as words."""
    words = len(WORD_RE.findall(body))
    return max(1, math.ceil(words / max(words_per_minute, 1)))
