"""Remote documentation retrieval."""

from .cache import DiskCache
from .client import DocsClient, fetch_document, is_url

__all__ = [
    "DiskCache",
    "DocsClient",
    "fetch_document",
    "is_url",
]
