"""Lossy text compression: stopword removal and duplicate paragraph elision.

Both methods trade readability for density and are opt-in. Stopword removal
in particular is aggressive: it rewrites prose into a telegraphic style that a
model still understands but a person would not want to read.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .options import TransformOptions

logger = logging.getLogger(__name__)

STOPWORDS = frozenset(
    {
        "a", "an", "the",
        "and", "or", "but", "so", "yet",
        "of", "to", "in", "on", "at", "by", "for", "with", "from", "into",
        "onto", "upon", "about", "over", "than", "as",
        "is", "are", "was", "were", "be", "been", "being", "am",
        "has", "have", "had", "do", "does", "did",
        "this", "that", "these", "those", "there", "here",
        "it", "its", "it's", "they", "them", "their", "we", "our", "us",
        "you", "your", "i", "me", "my", "he", "him", "his", "she", "her",
        "which", "who", "whom", "whose",
        "very", "just", "also", "then", "too", "quite", "really",
        "will", "would", "shall", "should", "can", "could", "may", "might",
    }
)

_STOPWORD = re.compile(
    r"(?<![\w'-])(?:" + "|".join(sorted((re.escape(w) for w in STOPWORDS), key=len, reverse=True)) + r")(?![\w'-])",
    re.IGNORECASE,
)

# Spans inside a line that must never be rewritten. Inline links are matched
# whole so their text can be handled separately from their target.
_PROTECTED = re.compile(
    r"(`+).*?\1"                # inline code
    r"|!\[[^\]\n]*\]\([^)]*\)"  # image
    r"|\[(?P<link_text>[^\[\]\n]*)\]\((?P<link_target>[^)]*)\)"  # inline link
    r"|\]\([^)]*\)"             # target of a link wrapping an image
    r"|^[ ]{0,3}\[[^\]]+\]:.*$"  # reference definition
    r"|<[^>\n]+>"               # inline HTML tag or autolink
    r"|\b[a-z][a-z0-9+.-]*://\S+",  # bare URL
    re.IGNORECASE,
)
# Emphasis markers left with nothing between them ("**The**" -> "****")
_EMPTY_EMPHASIS = re.compile(r"(?<![\w*_])(\*{1,3}|_{1,3})\1(?![\w*_])")
_FENCE = re.compile(r"^[ \t]*(`{3,}|~{3,})")


class CompressionStats(BaseModel):
    """Size of a document before and after compression."""

    chars_before: int
    chars_after: int

    @property
    def chars_saved(self) -> int:
        return self.chars_before - self.chars_after


def _strip_prose(text: str) -> str:
    stripped = _STOPWORD.sub("", text)
    if stripped != text:
        stripped = _EMPTY_EMPHASIS.sub("", stripped)
    text = re.sub(r"[ \t]{2,}", " ", stripped)
    # Tidy brackets and punctuation left hanging by removed words.
    text = re.sub(r"([\[(])[ \t]+", r"\1", text)
    text = re.sub(r"[ \t]+([\]),.;:!?])", r"\1", text)
    return text


def _strip_link(match: re.Match) -> str:
    text = match.group("link_text")
    if text is None:
        return match.group(0)
    # A link whose text is only stopwords ("About") keeps its text.
    stripped = _strip_prose(text).strip() or text
    return f"[{stripped}]({match.group('link_target')})"


def _strip_line(line: str) -> str:
    pieces: list[str] = []
    last = 0
    for match in _PROTECTED.finditer(line):
        pieces.append(_strip_prose(line[last:match.start()]))
        pieces.append(_strip_link(match))
        last = match.end()
    pieces.append(_strip_prose(line[last:]))

    result = "".join(pieces)
    if not result.strip() and line.strip():
        # A line made only of stopwords keeps its original text.
        return line
    # Leading indentation and list/heading markers stay as they were.
    indent = line[: len(line) - len(line.lstrip())]
    return indent + result.lstrip().rstrip()


def remove_stopwords(content: str) -> str:
    """Remove stopwords from prose, leaving code, URLs and markup alone."""
    lines = content.split("\n")
    fence: str | None = None

    for index, line in enumerate(lines):
        fence_match = _FENCE.match(line)
        if fence_match:
            fence = _next_fence(fence, fence_match.group(1))
            continue
        if fence is None and line.strip():
            lines[index] = _strip_line(line)

    return "\n".join(lines)


def _next_fence(fence: str | None, marker: str) -> str | None:
    """Fence state after a fence line: opens a block, closes it, or neither."""
    if fence is None:
        return marker
    if marker[0] == fence[0] and len(marker) >= len(fence):
        return None
    return fence


def paragraph_signature(paragraph: str) -> str:
    """Normalized form used to detect repeated paragraphs."""
    return re.sub(r"\s+", " ", paragraph.lower()).strip()


def _segments(content: str) -> list[tuple[bool, list[str]]]:
    """Group lines into paragraphs and runs of blank lines.

    Each segment is ``(is_blank, lines)``. Blank lines inside a fenced code
    block belong to the block, so a fence never spans two paragraphs.
    """
    segments: list[tuple[bool, list[str]]] = []
    fence: str | None = None

    for line in content.split("\n"):
        fence_match = _FENCE.match(line)
        if fence_match:
            fence = _next_fence(fence, fence_match.group(1))
        blank = fence is None and not fence_match and not line.strip()
        if segments and segments[-1][0] == blank:
            segments[-1][1].append(line)
        else:
            segments.append((blank, [line]))

    return segments


def remove_duplicates(content: str) -> str:
    """Drop every paragraph whose signature already appeared earlier.

    Surviving paragraphs keep their order and position; a removed paragraph
    takes its following blank lines with it. Fenced code blocks count as a
    single paragraph.
    """
    segments = _segments(content)
    seen: set[str] = set()
    kept: list[tuple[bool, list[str]]] = []
    skip_blank = False
    removed = 0

    for blank, lines in segments:
        if blank:
            if not skip_blank:
                kept.append((blank, lines))
            skip_blank = False
            continue

        signature = paragraph_signature("\n".join(lines))
        if signature in seen:
            removed += 1
            skip_blank = True
            continue
        seen.add(signature)
        kept.append((blank, lines))

    # Dropping the last paragraph must not leave its separator dangling.
    if kept and kept[-1][0] and not segments[-1][0]:
        kept.pop()

    if removed:
        logger.debug("Removed %d duplicate paragraphs", removed)
    return "\n".join(line for _, lines in kept for line in lines)


class TextCompressor:
    """Apply the enabled compression methods in a fixed order."""

    def compress(self, content: str, methods: TransformOptions | Mapping[str, Any]) -> str:
        options = TransformOptions.coerce(methods)
        if options.remove_duplicates:
            content = remove_duplicates(content)
        if options.remove_stopwords:
            content = remove_stopwords(content)
        return content

    def transform(self, content: str, options: TransformOptions) -> str:
        return self.compress(content, options)

    def stats(self, content: str, methods: TransformOptions | Mapping[str, Any]) -> CompressionStats:
        """Compress ``content`` and report the size difference."""
        compressed = self.compress(content, methods)
        return CompressionStats(chars_before=len(content), chars_after=len(compressed))
