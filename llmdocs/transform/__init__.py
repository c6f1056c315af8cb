"""The markdown transformation pipeline and its stages."""

from .cleanup import ContentCleanupTransformer
from .compress import TextCompressor
from .enhance import EnhancementTransformer, TocEntry
from .headings import Heading, HeadingTransformer
from .links import LinkTransformer
from .options import TransformOptions
from .pipeline import MarkdownTransformer, transform
from .whitespace import WhitespaceTransformer

__all__ = [
    "ContentCleanupTransformer",
    "EnhancementTransformer",
    "Heading",
    "HeadingTransformer",
    "LinkTransformer",
    "MarkdownTransformer",
    "TextCompressor",
    "TocEntry",
    "TransformOptions",
    "WhitespaceTransformer",
    "transform",
]
