"""Rewrite link targets and link text."""

from __future__ import annotations

import re
from urllib.parse import urljoin

from ..config import SIMPLIFY_LINK_MAX_CHARS, SIMPLIFY_LINK_MAX_WORDS
from .options import TransformOptions

# Inline links and images: [text](target "title") / ![alt](target)
_INLINE_LINK = re.compile(
    r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|!\[[^\]]*\]\([^)]*\))*)\]"
    r"\((?P<url><[^>]*>|[^)\s]+)(?P<title>\s+[\"'(][^)]*)?\)"
)
# Reference definitions: [id]: target
_REFERENCE_DEF = re.compile(r"^(?P<prefix>[ ]{0,3}\[[^\]]+\]:[ \t]*)(?P<url>\S+)", re.MULTILINE)
_HTML_ANCHOR = re.compile(
    r"<a\b[^>]*?\bhref\s*=\s*[\"'](?P<url>[^\"']*)[\"'][^>]*>(?P<text>.*?)</a\s*>",
    re.IGNORECASE | re.DOTALL,
)
_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def is_relative_url(url: str) -> bool:
    """Return True for targets that should be resolved against a base URL."""
    if not url or url.startswith(("#", "//")):
        return False
    return not _SCHEME.match(url)


def expand_relative_links(content: str, base_url: str) -> str:
    """Resolve relative link and image targets against ``base_url``.

    Targets starting with ``/`` resolve to the base's origin, all others
    against the base's current path (standard relative-URL resolution).
    """

    def expand(url: str) -> str:
        bracketed = url.startswith("<") and url.endswith(">")
        target = url[1:-1] if bracketed else url
        if not is_relative_url(target):
            return url
        resolved = urljoin(base_url, target)
        return f"<{resolved}>" if bracketed else resolved

    def inline(match: re.Match) -> str:
        return (
            f"{match.group('bang')}[{_INLINE_LINK.sub(inline, match.group('text'))}]"
            f"({expand(match.group('url'))}{match.group('title') or ''})"
        )

    content = _INLINE_LINK.sub(inline, content)
    return _REFERENCE_DEF.sub(lambda m: m.group("prefix") + expand(m.group("url")), content)


def convert_html_anchors(content: str) -> str:
    """Convert ``<a href="URL">TEXT</a>`` anchors to ``[TEXT](URL)``."""

    def convert(match: re.Match) -> str:
        text = re.sub(r"<[^>]+>", "", match.group("text"))
        text = re.sub(r"\s+", " ", text).strip()
        return f"[{text or match.group('url')}]({match.group('url')})"

    return _HTML_ANCHOR.sub(convert, content)


def simplify_link_text(text: str) -> str:
    """Shorten verbose link text; short text is returned unchanged."""
    words = text.split()
    if len(text) <= SIMPLIFY_LINK_MAX_CHARS and len(words) <= SIMPLIFY_LINK_MAX_WORDS:
        return text

    kept: list[str] = []
    for word in words[:SIMPLIFY_LINK_MAX_WORDS]:
        if len(" ".join(kept + [word])) > SIMPLIFY_LINK_MAX_CHARS:
            break
        kept.append(word)
    if not kept:
        return text[:SIMPLIFY_LINK_MAX_CHARS].rstrip() + "..."
    return " ".join(kept).rstrip(".,;:") + "..."


def simplify_links(content: str) -> str:
    """Shorten link text while keeping every URL verbatim. Images are untouched."""

    def simplify(match: re.Match) -> str:
        if match.group("bang") or "![" in match.group("text"):
            return match.group(0)
        text = simplify_link_text(match.group("text"))
        return f"[{text}]({match.group('url')}{match.group('title') or ''})"

    return _INLINE_LINK.sub(simplify, content)


class LinkTransformer:
    """Convert HTML anchors, expand relative targets, simplify link text."""

    def transform(self, content: str, options: TransformOptions) -> str:
        if options.convert_urls:
            content = convert_html_anchors(content)
        if options.base_url:
            content = expand_relative_links(content, options.base_url)
        if options.simplify_links:
            content = simplify_links(content)
        return content
