"""Remove decorative and non-essential markdown content."""

from __future__ import annotations

import re

from ..config import BADGE_URL_PATTERNS
from .options import TransformOptions

_FRONTMATTER = re.compile(
    r"\A(?:---[ \t]*\n(?:.*?\n)?---|\+\+\+[ \t]*\n(?:.*?\n)?\+\+\+)[ \t]*(?:\n|\Z)",
    re.DOTALL,
)

_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)

_BADGE_URL = "|".join(BADGE_URL_PATTERNS)

# [![alt](badge-url)](target)
_LINKED_BADGE = re.compile(
    rf"\[!\[[^\]]*\]\([^)]*(?:{_BADGE_URL})[^)]*\)\]\([^)]*\)",
    re.IGNORECASE,
)
# ![alt](badge-url)
_BADGE = re.compile(rf"!\[[^\]]*\]\([^)]*(?:{_BADGE_URL})[^)]*\)", re.IGNORECASE)
# <a ...><img src="badge-url"></a> and bare <img src="badge-url">
_HTML_LINKED_BADGE = re.compile(
    rf"<a\b[^>]*>\s*<img\b[^>]*src=[\"'][^\"']*(?:{_BADGE_URL})[^\"']*[\"'][^>]*>\s*</a>",
    re.IGNORECASE,
)
_HTML_BADGE = re.compile(
    rf"<img\b[^>]*src=[\"'][^\"']*(?:{_BADGE_URL})[^\"']*[\"'][^>]*>",
    re.IGNORECASE,
)

_LINKED_IMAGE = re.compile(r"\[!\[[^\]]*\]\([^)]*\)\]\([^)]*\)")
_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_HTML_IMAGE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)

_FENCED_CODE = re.compile(
    r"^[ \t]*(?P<fence>`{3,}|~{3,})[^\n]*\n.*?^[ \t]*(?P=fence)[ \t]*$\n?",
    re.DOTALL | re.MULTILINE,
)
_INLINE_CODE = re.compile(r"(`+)(?!`).+?(?<!`)\1(?!`)")

_BLOCKQUOTE_MARKER = re.compile(r"^([ \t]*)(?:>[ \t]?)+", re.MULTILINE)


def remove_frontmatter(content: str) -> str:
    """Remove a leading YAML (---) or TOML (+++) metadata block."""
    return _FRONTMATTER.sub("", content, count=1)


def remove_comments(content: str) -> str:
    return _COMMENT.sub("", content)


def remove_badges(content: str) -> str:
    """Remove badge/shield images, together with any link wrapping them."""
    content = _LINKED_BADGE.sub("", content)
    content = _BADGE.sub("", content)
    content = _HTML_LINKED_BADGE.sub("", content)
    return _HTML_BADGE.sub("", content)


def remove_images(content: str) -> str:
    content = _LINKED_IMAGE.sub("", content)
    content = _IMAGE.sub("", content)
    return _HTML_IMAGE.sub("", content)


def remove_code_examples(content: str) -> str:
    """Remove fenced code blocks, then inline code spans."""
    content = _FENCED_CODE.sub("", content)
    return _INLINE_CODE.sub("", content)


def remove_blockquotes(content: str) -> str:
    """Strip blockquote markers, keeping the quoted text."""
    return _BLOCKQUOTE_MARKER.sub(r"\1", content)


class ContentCleanupTransformer:
    """Strip frontmatter, comments, badges, images, code and blockquote markers."""

    def transform(self, content: str, options: TransformOptions) -> str:
        if options.remove_frontmatter:
            content = remove_frontmatter(content)
        if options.remove_comments:
            content = remove_comments(content)
        if options.remove_badges:
            content = remove_badges(content)
        if options.remove_images:
            content = remove_images(content)
        if options.remove_code_examples:
            content = remove_code_examples(content)
        if options.remove_blockquotes:
            content = remove_blockquotes(content)
        return content
