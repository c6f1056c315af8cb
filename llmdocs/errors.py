"""Exception types raised by llmdocs."""

from __future__ import annotations


class LlmDocsError(Exception):
    """Base class for errors surfaced to llmdocs callers."""


class SourceNotFoundError(LlmDocsError, FileNotFoundError):
    """Raised when a source path does not exist and no inline content was given."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Source not found: {path}")
        self.path = path


class ConfigError(LlmDocsError):
    """Raised when a project configuration file cannot be read or validated."""


class FetchError(LlmDocsError):
    """Raised when a remote document cannot be retrieved."""

    def __init__(self, url: str, status_code: int | None = None, reason: str = "") -> None:
        detail = f"HTTP {status_code}" if status_code is not None else (reason or "request failed")
        super().__init__(f"{detail} for {url}")
        self.url = url
        self.status_code = status_code
        self.reason = reason
