"""HTML cleaning ahead of markdown rendering.

Documentation pages arrive with a lot of markup that carries no content for a
reader: document metadata, scripts, navigation chrome, hidden elements. This
module drops those subtrees with a streaming parser from the standard library
so malformed pages degrade to best-effort output instead of failing.
"""

from __future__ import annotations

import logging
import re
from html import escape
from html.parser import HTMLParser

logger = logging.getLogger(__name__)

# Tags to completely remove (including content)
REMOVE_TAGS = {
    "head",
    "title",
    "script",
    "style",
    "noscript",
    "template",
    "svg",
    "nav",
    "iframe",
    "object",
    "embed",
    "meta",
    "link",
    "base",
    "button",
    "form",
}

# HTML void elements (no end tag in normal HTML)
VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

# Attributes worth keeping for rendering; everything else is dropped
KEEP_ATTRIBUTES = {"href", "src", "alt", "title", "colspan", "rowspan"}

HIDDEN_STYLE_PATTERNS = [
    re.compile(r"display\s*:\s*none", re.IGNORECASE),
    re.compile(r"visibility\s*:\s*hidden", re.IGNORECASE),
]


def is_hidden_element(attributes: dict[str, str] | None) -> bool:
    """Return True when an element is explicitly hidden.

    Only the ``hidden`` attribute, ``aria-hidden="true"`` and inline
    ``display:none``/``visibility:hidden`` count.
    """
    if not attributes:
        return False
    if "hidden" in {k.lower() for k in attributes}:
        return True
    if (attributes.get("aria-hidden") or "").strip().lower() in {"true", "1"}:
        return True
    style = attributes.get("style") or ""
    return any(pattern.search(style) for pattern in HIDDEN_STYLE_PATTERNS)


def clean_html(html: str) -> str:
    """Drop non-content subtrees, comments and presentational attributes."""
    parser = _CleaningHTMLParser()
    try:
        parser.feed(html)
        parser.close()
    except Exception:
        # Best-effort: keep whatever was emitted before the parser gave up.
        logger.debug("HTML parser stopped early on malformed input", exc_info=True)

    return "".join(parser.out).strip()


class _CleaningHTMLParser(HTMLParser):
    """Streaming cleaner that re-emits the markup worth rendering."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.out: list[str] = []
        # Removed subtrees are tracked by their root tag name so unclosed
        # descendants cannot keep the parser skipping past the subtree's end.
        self._skip_tag: str | None = None
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        tag_l = tag.lower()

        if self._skip_depth > 0 and self._skip_tag == "head" and tag_l == "body":
            # </head> is optional in HTML; <body> always closes it.
            self._skip_tag = None
            self._skip_depth = 0

        if self._skip_depth > 0:
            if tag_l == self._skip_tag:
                self._skip_depth += 1
            return

        attr_dict = {k.lower(): (v if v is not None else "") for k, v in attrs}

        if tag_l in REMOVE_TAGS or is_hidden_element(attr_dict):
            if tag_l not in VOID_TAGS:
                self._skip_tag = tag_l
                self._skip_depth = 1
            return

        parts = [
            f'{name}="{escape(value, quote=True)}"'
            for name, value in sorted(attr_dict.items())
            if name in KEEP_ATTRIBUTES and value != ""
        ]
        attrs_rendered = (" " + " ".join(parts)) if parts else ""
        self.out.append(f"<{tag_l}{attrs_rendered}>")

    def handle_endtag(self, tag: str) -> None:
        tag_l = tag.lower()

        if self._skip_depth > 0:
            if tag_l == self._skip_tag:
                self._skip_depth -= 1
                if self._skip_depth == 0:
                    self._skip_tag = None
            return

        if tag_l in VOID_TAGS or tag_l in REMOVE_TAGS:
            return

        self.out.append(f"</{tag_l}>")

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag.lower() not in VOID_TAGS:
            self.handle_endtag(tag)

    def handle_data(self, data: str) -> None:
        if self._skip_depth > 0 or not data:
            return
        # Re-escape so literal "<" in text is not mistaken for markup downstream.
        self.out.append(data.replace("<", "&lt;").replace(">", "&gt;"))

    def handle_entityref(self, name: str) -> None:
        if self._skip_depth == 0:
            self.out.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        if self._skip_depth == 0:
            self.out.append(f"&#{name};")

    def handle_comment(self, data: str) -> None:
        return

    def handle_decl(self, decl: str) -> None:
        return
