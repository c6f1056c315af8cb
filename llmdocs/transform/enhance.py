"""Table of contents and custom instruction injection."""

from __future__ import annotations

import re
from typing import NamedTuple

from .headings import Heading, find_headings
from .options import TransformOptions

TOC_TITLE = "Table of Contents"


class TocEntry(NamedTuple):
    """A single table of contents line."""

    level: int
    title: str
    anchor: str


def slugify(text: str) -> str:
    """Convert heading text to a lowercase, hyphenated anchor.

    Inline markup is dropped first so ``[Guide](x)`` and ``**Guide**`` both
    become ``guide``.
    """
    text = re.sub(r"!?\[([^\]]*)\]\([^)]*\)", r"\1", text)
    text = re.sub(r"[`*_~]", "", text)
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def build_toc_entries(headings: list[Heading]) -> list[TocEntry]:
    """Build TOC entries in document order with collision-free anchors."""
    entries: list[TocEntry] = []
    counts: dict[str, int] = {}
    used: set[str] = set()

    for heading in headings:
        base = slugify(heading.title) or "section"
        anchor = base
        counts[base] = counts.get(base, 1)
        while anchor in used:
            counts[base] += 1
            anchor = f"{base}-{counts[base]}"
        used.add(anchor)
        entries.append(TocEntry(heading.level, heading.title, anchor))

    return entries


def render_toc(entries: list[TocEntry]) -> str:
    """Render entries as a nested markdown list of anchor links."""
    if not entries:
        return ""
    top = min(entry.level for entry in entries)
    lines = [f"## {TOC_TITLE}", ""]
    for entry in entries:
        indent = "  " * (entry.level - top)
        lines.append(f"{indent}- [{entry.title}](#{entry.anchor})")
    return "\n".join(lines)


def insert_toc(content: str) -> str:
    """Insert a table of contents right before the first heading."""
    headings = find_headings(content)
    if not headings:
        return content

    toc = render_toc(build_toc_entries(headings))
    lines = content.split("\n")
    first = headings[0].line_index
    return "\n".join(lines[:first] + [toc, ""] + lines[first:])


def prepend_instruction(content: str, instruction: str) -> str:
    """Put the instruction text before everything else, as its own block."""
    instruction = instruction.strip()
    if not instruction:
        return content
    return f"{instruction}\n\n{content}"


class EnhancementTransformer:
    """Add a table of contents and/or a custom instruction header."""

    def transform(self, content: str, options: TransformOptions) -> str:
        if options.generate_toc:
            content = insert_toc(content)
        if options.custom_instruction:
            content = prepend_instruction(content, options.custom_instruction)
        return content
