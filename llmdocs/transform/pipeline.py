"""Orchestrate the markdown transformation pipeline."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol

from ..errors import SourceNotFoundError
from ..parse.detect import ContentType, classify
from ..parse.md_render import HtmlToMarkdownConverter
from .cleanup import ContentCleanupTransformer
from .compress import TextCompressor
from .enhance import EnhancementTransformer
from .headings import HeadingTransformer
from .links import LinkTransformer
from .options import TransformOptions
from .whitespace import WhitespaceTransformer

logger = logging.getLogger(__name__)


class Stage(Protocol):
    def transform(self, content: str, options: TransformOptions) -> str: ...


def _always(options: TransformOptions) -> bool:
    return True


def _compresses(options: TransformOptions) -> bool:
    return options.compresses


def _normalizes_whitespace(options: TransformOptions) -> bool:
    return options.normalize_whitespace


# Stage order is fixed: later stages rely on what earlier ones produce
# (the TOC reads normalized headings, whitespace cleanup must run last).
STAGES: tuple[tuple[Callable[[TransformOptions], bool], Stage], ...] = (
    (_always, ContentCleanupTransformer()),
    (_always, LinkTransformer()),
    (_always, HeadingTransformer()),
    (_compresses, TextCompressor()),
    (_always, EnhancementTransformer()),
    (_normalizes_whitespace, WhitespaceTransformer()),
)

_converter = HtmlToMarkdownConverter()


def load_content(source: str | os.PathLike[str] | None, options: TransformOptions) -> str:
    """Load the document to transform.

    Inline ``content`` wins over ``source`` and goes through content detection.
    A path is read as-is: files are always markdown.
    """
    if options.content is not None:
        content = options.content
        content_type = classify(content)
        if content_type is ContentType.HTML_DOCUMENT:
            return _converter.convert(content)
        return content

    if source is None:
        raise SourceNotFoundError(source)
    path = Path(source)
    if not path.is_file():
        raise SourceNotFoundError(path)
    return path.read_text(encoding="utf-8")


def run_stages(content: str, options: TransformOptions) -> str:
    """Apply every enabled stage, in order, to already-loaded markdown."""
    for enabled, stage in STAGES:
        if not enabled(options):
            continue
        before = len(content)
        content = stage.transform(content, options)
        logger.debug("%s: %d -> %d chars", type(stage).__name__, before, len(content))
    return content


class MarkdownTransformer:
    """Transform one markdown source into an LLM-friendly document.

    Example:
        >>> MarkdownTransformer("README.md", {"remove_badges": True}).transform()
        >>> MarkdownTransformer(None, {"content": "<html>...</html>"}).transform()
    """

    def __init__(
        self,
        source: str | os.PathLike[str] | None,
        options: TransformOptions | Mapping[str, Any] | None = None,
    ):
        self.source = source
        self.options = TransformOptions.coerce(options)

    def transform(self) -> str:
        content = load_content(self.source, self.options)
        return run_stages(content, self.options)


def transform(
    source: str | os.PathLike[str] | None,
    options: TransformOptions | Mapping[str, Any] | None = None,
) -> str:
    """Transform a markdown file, or inline ``content`` given in options."""
    return MarkdownTransformer(source, options).transform()
