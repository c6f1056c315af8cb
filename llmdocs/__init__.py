"""llmdocs: turn documentation into dense, LLM-friendly markdown."""

from .errors import ConfigError, FetchError, LlmDocsError, SourceNotFoundError
from .transform import MarkdownTransformer, TransformOptions, transform

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "FetchError",
    "LlmDocsError",
    "MarkdownTransformer",
    "SourceNotFoundError",
    "TransformOptions",
    "transform",
]
