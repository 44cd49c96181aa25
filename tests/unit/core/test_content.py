"""Unit tests for core/content.py"""

from guidepub.core.content import anchor_for, reading_minutes, table_of_contents


BODY = """\
# API Documentation & Design

Intro paragraph.

## Getting Started

### Install `openapi-cli`

## Getting Started

```bash
# not a heading
npm install
```
"""


def test_table_of_contents_levels_and_text():
    """Headings are listed in order with their level and plain text."""
    toc = table_of_contents(BODY)
    assert [(h.level, h.text) for h in toc] == [
        (1, "API Documentation & Design"),
        (2, "Getting Started"),
        (3, "Install openapi-cli"),
        (2, "Getting Started"),
    ]


def test_table_of_contents_unique_anchors():
    """Repeated headings get numbered anchors; code comments are not headings."""
    anchors = [h.anchor for h in table_of_contents(BODY)]
    assert anchors == [
        "api-documentation--design",
        "getting-started",
        "install-openapi-cli",
        "getting-started-1",
    ]


def test_table_of_contents_max_level():
    """max_level drops deeper headings."""
    assert [h.level for h in table_of_contents(BODY, max_level=2)] == [1, 2, 2]


def test_anchor_for_drops_punctuation():
    assert anchor_for("Why CQRS?") == "why-cqrs"


def test_reading_minutes_rounds_up():
    """Reading time is rounded up to whole minutes."""
    body = " ".join(["word"] * 201)
    assert reading_minutes(body, words_per_minute=200) == 2


def test_reading_minutes_minimum_one():
    """Empty bodies still report one minute."""
    assert reading_minutes("") == 1
