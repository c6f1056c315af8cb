"""Decide how in-memory content should enter the transformation pipeline.

Remote documentation endpoints frequently serve HTML where markdown was
requested. Detection looks at a bounded prefix only, after skipping any leading
HTML comments (build metadata, generator stamps), and fails open: anything that
is not clearly HTML is treated as markdown.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from ..config import DETECTION_PREFIX_CHARS, HTML_DETECTION_TAGS, TABLE_FRAGMENT_TAGS

logger = logging.getLogger(__name__)


class ContentType(str, Enum):
    """Classification of raw input content."""

    MARKDOWN = "markdown"
    HTML_DOCUMENT = "html-document"
    HTML_TABLE_FRAGMENT = "html-table-fragment"


_LEADING_COMMENT = re.compile(r"\A<!--.*?-->\s*", re.DOTALL)

_HTML_TAG = re.compile(
    r"<\s*(?:" + "|".join(rf"{tag}\b" for tag in HTML_DETECTION_TAGS) + r")",
    re.IGNORECASE,
)

_TABLE_FRAGMENT = re.compile(
    r"\A<\s*(?:" + "|".join(TABLE_FRAGMENT_TAGS) + r")\b",
    re.IGNORECASE,
)


def detection_snippet(content: str | None) -> str:
    """Return the prefix of content used for detection.

    Leading whitespace and leading ``<!-- ... -->`` blocks are removed, then the
    remainder is truncated to ``DETECTION_PREFIX_CHARS`` characters.
    """
    if not content:
        return ""

    snippet = content.lstrip()
    while True:
        stripped = _LEADING_COMMENT.sub("", snippet, count=1)
        if stripped == snippet:
            break
        if not stripped:
            return ""
        snippet = stripped

    return snippet.lstrip()[:DETECTION_PREFIX_CHARS]


def is_table_fragment(snippet: str) -> bool:
    """Return True when the snippet opens with a table-family tag."""
    if not snippet:
        return False
    return bool(_TABLE_FRAGMENT.match(snippet.strip()))


def is_html_snippet(snippet: str) -> bool:
    """Return True when the snippet contains a recognized HTML document tag."""
    if not snippet:
        return False
    return bool(_HTML_TAG.search(snippet))


def classify(content: str | None) -> ContentType:
    """Classify raw content as markdown, an HTML document, or a table fragment."""
    snippet = detection_snippet(content)

    if is_table_fragment(snippet):
        result = ContentType.HTML_TABLE_FRAGMENT
    elif is_html_snippet(snippet):
        result = ContentType.HTML_DOCUMENT
    else:
        result = ContentType.MARKDOWN

    logger.debug("Classified content as %s", result.value)
    return result
