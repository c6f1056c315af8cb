"""Render cleaned documentation HTML as markdown."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from html import unescape

from .html_clean import clean_html

logger = logging.getLogger(__name__)

_FLAGS = re.DOTALL | re.IGNORECASE

_LINK = re.compile(r'<a\b[^>]*?href="([^"]*)"[^>]*>(.*?)</a\s*>', _FLAGS)
_IMG = re.compile(r"<img\b([^>]*)>", re.IGNORECASE)
_ATTR = re.compile(r'(\w[\w-]*)="([^"]*)"')

# Placeholder for an already rendered block: NUL, index, NUL
_BLOCK_REF = re.compile(r"\x00(\d+)\x00")
_INNERMOST_LIST = re.compile(r"<(ul|ol)\b[^>]*>((?:(?!<(?:ul|ol)\b).)*?)</\1\s*>", _FLAGS)
_INNERMOST_BLOCKQUOTE = re.compile(r"<blockquote\b[^>]*>((?:(?!<blockquote\b).)*?)</blockquote\s*>", _FLAGS)
_LIST_ITEM = re.compile(r"<li\b[^>]*>(.*?)(?:</li\s*>|(?=<li[\s>])|\Z)", _FLAGS)
_QUOTE_PARAGRAPH = re.compile(r"</?p\b[^>]*>|<br\s*/?>\s*<br\s*/?>", re.IGNORECASE)


class HtmlToMarkdownConverter:
    """Convert an HTML document into markdown.

    Instances hold no state and can be shared between callers.
    """

    def convert(self, html: str) -> str:
        return html_to_markdown(html)


def html_to_markdown(html: str) -> str:
    """Clean an HTML document and render it as markdown."""
    markdown = render_markdown(clean_html(html))
    logger.debug("Converted %d chars of HTML into %d chars of markdown", len(html), len(markdown))
    return markdown


def render_markdown(html: str) -> str:
    """Convert cleaned HTML to markdown.

    Args:
        html: HTML, ideally already passed through ``clean_html``

    Returns:
        Markdown string without leading or trailing blank lines
    """
    result = html
    # Rendered multi-line blocks are held out of the text as placeholders
    # until every inline pass is done, so they keep their line structure.
    blocks: list[str] = []

    def stash(markdown: str) -> str:
        if not markdown:
            return ""
        blocks.append(markdown)
        return f"\x00{len(blocks) - 1}\x00"

    # Only the body matters when a full document is given.
    body_match = re.search(r"<body[^>]*>(.*?)(?:</body>|\Z)", result, _FLAGS)
    if body_match:
        result = body_match.group(1)

    # Code blocks go first so nothing inside them is rendered or re-spaced.
    result = re.sub(r"<pre[^>]*>(.*?)</pre>", lambda m: stash(_render_pre(m)), result, flags=_FLAGS)

    # Keep words apart once tags are stripped.
    result = re.sub(r">\s*<", "> <", result)

    result = _process_tables(result, stash)

    for level in range(1, 7):
        result = re.sub(
            rf"<h{level}[^>]*>(.*?)</h{level}\s*>",
            lambda m, level=level: f"\n\n{'#' * level} {_inline_text(m.group(1))}\n\n",
            result,
            flags=_FLAGS,
        )

    result = _render_innermost(
        result, _INNERMOST_LIST, lambda m: stash(_render_list(m.group(1), m.group(2), blocks))
    )
    result = _render_innermost(
        result, _INNERMOST_BLOCKQUOTE, lambda m: stash(_render_blockquote(m.group(1), blocks))
    )

    result = re.sub(
        r"<p\b[^>]*>(.*?)(?:</p\s*>|(?=<p[\s>]))",
        lambda m: f"\n\n{_inline_text(m.group(1))}\n\n",
        result,
        flags=_FLAGS,
    )

    result = _process_inline(result)

    result = re.sub(r"<br\s*/?>", "  \n", result, flags=re.IGNORECASE)
    result = re.sub(r"<hr\s*/?>", "\n\n---\n\n", result, flags=re.IGNORECASE)

    # Separate block-level tags we don't render explicitly.
    result = re.sub(
        r"</(?:div|section|article|main|header|footer|aside|figure|dl|dt|dd|details|summary)\s*>",
        "\n\n",
        result,
        flags=re.IGNORECASE,
    )

    result = _BLOCK_REF.sub(lambda m: f"\n\n{blocks[int(m.group(1))]}\n\n", result)

    # Unknown tags are dropped; their text stays.
    result = _strip_tags(result)
    result = unescape(result)

    return _normalize_output(result)


def _strip_tags(html: str) -> str:
    return re.sub(r"<[^>]+>", "", html)


def _render_innermost(html: str, pattern: re.Pattern, render: Callable[[re.Match], str]) -> str:
    """Apply ``render`` to nested elements from the innermost one outwards."""
    while True:
        html, count = pattern.subn(render, html)
        if not count:
            return html


def _render_pre(match: re.Match) -> str:
    code = _strip_tags(match.group(1)).strip("\n")
    return f"```\n{code}\n```"


def _render_image(match: re.Match) -> str:
    attrs = dict(_ATTR.findall(match.group(1)))
    src = attrs.get("src")
    if not src:
        return ""
    return f"![{attrs.get('alt', '')}]({src})"


def _process_inline(html: str) -> str:
    """Render inline elements (code, emphasis, images, links)."""
    result = re.sub(
        r"<code[^>]*>(.*?)</code>",
        lambda m: f"`{_strip_tags(m.group(1)).strip()}`",
        html,
        flags=_FLAGS,
    )
    result = re.sub(
        r"<(strong|b)\b[^>]*>(.*?)</\1\s*>",
        lambda m: f"**{m.group(2).strip()}**",
        result,
        flags=_FLAGS,
    )
    result = re.sub(
        r"<(em|i)\b[^>]*>(.*?)</\1\s*>",
        lambda m: f"*{m.group(2).strip()}*",
        result,
        flags=_FLAGS,
    )
    result = _IMG.sub(_render_image, result)
    result = _LINK.sub(
        lambda m: f"[{_strip_tags(m.group(2)).strip()}]({m.group(1)})",
        result,
    )
    return result


def _inline_text(html: str) -> str:
    """Render inline markup and collapse it onto a single line."""
    html = re.sub(r"<br\s*/?>", " ", html, flags=re.IGNORECASE)
    text = _strip_tags(_process_inline(html))
    return re.sub(r"\s+", " ", text).strip()


def _render_list(tag: str, html: str, blocks: list[str]) -> str:
    """Render one ul/ol whose nested lists are already placeholders."""
    ordered = tag.lower() == "ol"
    rendered: list[str] = []
    number = 0
    for item in _LIST_ITEM.findall(html):
        lines = _block_lines(item, blocks)
        if not lines:
            continue
        number += 1
        marker = f"{number}." if ordered else "-"
        indent = " " * (len(marker) + 1)
        rendered.append(f"{marker} {lines[0]}")
        rendered.extend(f"{indent}{line}" if line else "" for line in lines[1:])
    return "\n".join(rendered)


def _render_blockquote(html: str, blocks: list[str]) -> str:
    """Render a blockquote, keeping its paragraphs and nested blocks apart."""
    chunks: list[list[str]] = []
    for index, part in enumerate(_BLOCK_REF.split(html)):
        if index % 2:
            chunks.append(blocks[int(part)].split("\n"))
            continue
        for paragraph in _QUOTE_PARAGRAPH.split(part):
            text = _inline_text(paragraph)
            if text:
                chunks.append([text])

    lines: list[str] = []
    for chunk in chunks:
        if lines:
            lines.append(">")
        lines.extend(f"> {line}" if line else ">" for line in chunk)
    return "\n".join(lines)


def _block_lines(html: str, blocks: list[str]) -> list[str]:
    """Lines of a list item: its inline text, then any nested blocks."""
    lines: list[str] = []
    for index, part in enumerate(_BLOCK_REF.split(html)):
        if index % 2:
            lines.extend(blocks[int(part)].split("\n"))
            continue
        text = _inline_text(part)
        if text:
            lines.append(text)
    return lines


def _process_tables(html: str, stash: Callable[[str], str]) -> str:
    """Render tables as GFM pipe tables."""

    def process_table(match: re.Match) -> str:
        rows: list[list[str]] = []
        for tr_match in re.finditer(r"<tr[^>]*>(.*?)</tr>", match.group(1), _FLAGS):
            cells = [
                _escape_table_cell(_inline_text(cell))
                for cell in re.findall(r"<t[hd][^>]*>(.*?)</t[hd]>", tr_match.group(1), _FLAGS)
            ]
            if cells:
                rows.append(cells)

        if not rows:
            return ""

        max_cols = max(len(row) for row in rows)
        for row in rows:
            row.extend([""] * (max_cols - len(row)))

        lines = ["| " + " | ".join(rows[0]) + " |"]
        lines.append("| " + " | ".join("---" for _ in range(max_cols)) + " |")
        for row in rows[1:]:
            lines.append("| " + " | ".join(row) + " |")

        return stash("\n".join(lines))

    return re.sub(r"<table[^>]*>(.*?)</table>", process_table, html, flags=_FLAGS)


def _escape_table_cell(text: str) -> str:
    return text.replace("|", "\\|").strip()


def _normalize_output(md: str) -> str:
    """Normalize rendered markdown.

    - Single blank line between blocks
    - No trailing whitespace, except two-space hard breaks
    - No leading/trailing blank lines
    """
    md = md.replace("\r\n", "\n").replace("\r", "\n")

    lines = []
    for line in md.split("\n"):
        if line.endswith("  ") and line.strip():
            lines.append(line.rstrip() + "  ")
        else:
            lines.append(line.rstrip())

    md = "\n".join(lines)
    md = re.sub(r"\n{3,}", "\n\n", md)
    return md.strip()
