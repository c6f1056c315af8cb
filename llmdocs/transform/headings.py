"""Heading discovery and level renormalization."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from .options import TransformOptions

logger = logging.getLogger(__name__)

_ATX_HEADING = re.compile(r"^(?P<indent>[ ]{0,3})(?P<marks>#{1,6})(?P<rest>[ \t]+.*|[ \t]*)$")
_FENCE = re.compile(r"^[ \t]*(`{3,}|~{3,})")


class Heading(NamedTuple):
    """An ATX heading found in a document."""

    level: int
    title: str
    line_index: int


def _heading_title(rest: str) -> str:
    # Closing hashes ("## Title ##") are not part of the title.
    return re.sub(r"[ \t]+#+[ \t]*$", "", rest).strip()


def find_headings(content: str) -> list[Heading]:
    """Return ATX headings in document order, skipping fenced code blocks."""
    headings: list[Heading] = []
    fence: str | None = None

    for index, line in enumerate(content.split("\n")):
        fence_match = _FENCE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue

        match = _ATX_HEADING.match(line)
        if match:
            title = _heading_title(match.group("rest"))
            if title:
                headings.append(Heading(len(match.group("marks")), title, index))

    return headings


def normalize_heading_levels(content: str) -> str:
    """Shift every heading so the shallowest one becomes level 1.

    Relative nesting is preserved: all headings move by the same delta.
    Heading text is never changed, only the ``#`` marker.
    """
    headings = find_headings(content)
    if not headings:
        return content

    delta = min(h.level for h in headings) - 1
    if delta == 0:
        return content

    lines = content.split("\n")
    for heading in headings:
        match = _ATX_HEADING.match(lines[heading.line_index])
        level = max(1, min(6, heading.level - delta))
        lines[heading.line_index] = f"{match.group('indent')}{'#' * level}{match.group('rest')}"

    logger.debug("Shifted %d headings up by %d levels", len(headings), delta)
    return "\n".join(lines)


class HeadingTransformer:
    """Renormalize heading levels when ``normalize_headings`` is set."""

    def transform(self, content: str, options: TransformOptions) -> str:
        if not options.normalize_headings:
            return content
        return normalize_heading_levels(content)
