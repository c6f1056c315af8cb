"""HTTP client for retrieving remote documentation with retries.

Documentation hosts are plain HTTP(S) endpoints, so this uses the standard
library in a worker thread rather than a dedicated HTTP client dependency.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import re
import urllib.error
import urllib.request
from typing import Any

from ..config import CACHE_DIR, CACHE_MAX_AGE, CONNECT_TIMEOUT, MAX_RETRIES, READ_TIMEOUT, USER_AGENT
from ..errors import FetchError
from .cache import DiskCache

logger = logging.getLogger(__name__)


class DocsClient:
    """Async client fetching documentation pages, retrying 429/5xx and network errors."""

    def __init__(self, user_agent: str = USER_AGENT, max_retries: int = MAX_RETRIES):
        self.user_agent = user_agent
        self._max_retries = max(1, int(max_retries))

    async def fetch(self, url: str) -> tuple[bytes, dict[str, str]]:
        """Fetch a URL, returning the body and response headers."""
        backoff = 1.0

        for attempt in range(1, self._max_retries + 1):
            try:
                content, headers, status = await asyncio.to_thread(self._fetch_sync, url)
            except (urllib.error.URLError, TimeoutError) as e:
                reason = str(getattr(e, "reason", e))
                if attempt >= self._max_retries:
                    raise FetchError(url, reason=reason) from e
                logger.warning("Fetch of %s failed (%s), retrying in %.1fs", url, reason, backoff)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2.0, 10.0)
                continue

            if status == 429 or status >= 500:
                if attempt >= self._max_retries:
                    raise FetchError(url, status_code=status)
                retry_after = _parse_retry_after(headers)
                delay = retry_after if retry_after is not None else backoff
                logger.warning("HTTP %d for %s, retrying in %.1fs", status, url, delay)
                await asyncio.sleep(delay)
                backoff = min(backoff * 2.0, 10.0)
                continue

            if status >= 400:
                raise FetchError(url, status_code=status)

            return content, headers

        raise RuntimeError("unreachable")

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and decode it using the declared charset (UTF-8 by default)."""
        content, headers = await self.fetch(url)
        return decode_body(content, headers)

    def _fetch_sync(self, url: str) -> tuple[bytes, dict[str, str], int]:
        # urllib only has a single timeout, so we pick the larger of connect/read.
        timeout = max(float(CONNECT_TIMEOUT), float(READ_TIMEOUT))
        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": self.user_agent,
                "Accept": "text/markdown, text/plain;q=0.9, text/html;q=0.8, */*;q=0.5",
                "Accept-Encoding": "gzip",
            },
            method="GET",
        )

        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                status = int(getattr(resp, "status", 200))
                headers = dict(resp.headers.items())
                content = resp.read() or b""
        except urllib.error.HTTPError as e:
            status = int(e.code or 0)
            headers = dict(e.headers.items()) if e.headers else {}
            content = e.read() or b""

        return _maybe_gunzip(content, headers), headers, status


def decode_body(content: bytes, headers: dict[str, Any]) -> str:
    content_type = headers.get("Content-Type") or headers.get("content-type") or ""
    match = re.search(r"charset=([\w-]+)", content_type, re.IGNORECASE)
    charset = match.group(1) if match else "utf-8"
    try:
        return content.decode(charset)
    except (LookupError, UnicodeDecodeError):
        return content.decode("utf-8", errors="replace")


def _maybe_gunzip(content: bytes, headers: dict[str, str]) -> bytes:
    if (headers.get("Content-Encoding") or "").lower() != "gzip":
        return content
    try:
        return gzip.decompress(content)
    except (OSError, EOFError):
        return content


def _parse_retry_after(headers: dict[str, str]) -> float | None:
    value = headers.get("Retry-After")
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return max(0.0, min(seconds, 60.0))


def is_url(source: str) -> bool:
    return bool(re.match(r"^https?://", source, re.IGNORECASE))


async def fetch_document(
    url: str,
    client: DocsClient | None = None,
    cache: DiskCache | None = None,
    force: bool = False,
) -> str:
    """Fetch a remote document, serving it from the disk cache while fresh."""
    cache = cache if cache is not None else DiskCache(CACHE_DIR)

    if not force:
        cached = cache.get(url, max_age_seconds=CACHE_MAX_AGE)
        if cached is not None:
            logger.info("Using cached copy of %s", url)
            return cached.decode("utf-8", errors="replace")

    client = client or DocsClient()
    text = await client.fetch_text(url)
    cache.put(url, text.encode("utf-8"))
    logger.info("Fetched %s (%d chars)", url, len(text))
    return text
