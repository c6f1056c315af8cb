"""Tests for remote document fetching and the disk cache."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, patch

from llmdocs.errors import FetchError
from llmdocs.fetch.cache import DiskCache
from llmdocs.fetch.client import DocsClient, decode_body, fetch_document, is_url


class TestDiskCache(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.cache = DiskCache(Path(self._tmp.name))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_put_then_get(self) -> None:
        self.cache.put("https://example.com/a.md", b"# A")
        self.assertEqual(self.cache.get("https://example.com/a.md"), b"# A")
        self.assertIsNone(self.cache.get("https://example.com/b.md"))

    def test_stale_entry_ignored(self) -> None:
        url = "https://example.com/a.md"
        self.cache.put(url, b"# A")
        _, meta_path = self.cache._paths(url)
        old = (datetime.now(UTC) - timedelta(hours=2)).isoformat()
        meta_path.write_text(json.dumps({"cached_at": old}), encoding="utf-8")

        self.assertIsNone(self.cache.get(url, max_age_seconds=3600))
        self.assertEqual(self.cache.get(url), b"# A")

    def test_clear(self) -> None:
        url = "https://example.com/a.md"
        self.cache.put(url, b"# A")
        self.assertTrue(self.cache.clear(url))
        self.assertFalse(self.cache.clear(url))
        self.assertIsNone(self.cache.get(url))


class TestHelpers(unittest.TestCase):
    def test_is_url(self) -> None:
        self.assertTrue(is_url("https://example.com/README.md"))
        self.assertTrue(is_url("HTTP://example.com"))
        self.assertFalse(is_url("docs/README.md"))
        self.assertFalse(is_url("ftp://example.com/x"))

    def test_decode_body_charset(self) -> None:
        body = "café".encode("latin-1")
        self.assertEqual(decode_body(body, {"Content-Type": "text/html; charset=ISO-8859-1"}), "café")
        self.assertEqual(decode_body("café".encode(), {}), "café")


class TestDocsClient(unittest.IsolatedAsyncioTestCase):
    async def test_retries_server_errors(self) -> None:
        client = DocsClient(max_retries=3)
        responses = [
            (b"", {"Retry-After": "0"}, 503),
            (b"", {"Retry-After": "0"}, 429),
            (b"# Doc", {"Content-Type": "text/markdown"}, 200),
        ]
        with patch.object(client, "_fetch_sync", side_effect=responses) as fetch_sync:
            text = await client.fetch_text("https://example.com/doc.md")
        self.assertEqual(text, "# Doc")
        self.assertEqual(fetch_sync.call_count, 3)

    async def test_gives_up_after_max_retries(self) -> None:
        client = DocsClient(max_retries=2)
        with patch.object(client, "_fetch_sync", return_value=(b"", {"Retry-After": "0"}, 502)):
            with self.assertRaises(FetchError) as ctx:
                await client.fetch("https://example.com/doc.md")
        self.assertEqual(ctx.exception.status_code, 502)

    async def test_client_error_not_retried(self) -> None:
        client = DocsClient(max_retries=3)
        with patch.object(client, "_fetch_sync", return_value=(b"", {}, 404)) as fetch_sync:
            with self.assertRaises(FetchError) as ctx:
                await client.fetch("https://example.com/missing.md")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(fetch_sync.call_count, 1)


class TestFetchDocument(unittest.IsolatedAsyncioTestCase):
    async def test_uses_cache_until_forced(self) -> None:
        url = "https://example.com/guide.md"
        client = AsyncMock()
        client.fetch_text.return_value = "# Guide"

        with tempfile.TemporaryDirectory() as td:
            cache = DiskCache(Path(td))
            first = await fetch_document(url, client=client, cache=cache)
            second = await fetch_document(url, client=client, cache=cache)
            self.assertEqual(client.fetch_text.await_count, 1)

            client.fetch_text.return_value = "# Guide v2"
            forced = await fetch_document(url, client=client, cache=cache, force=True)

        self.assertEqual(first, "# Guide")
        self.assertEqual(second, "# Guide")
        self.assertEqual(forced, "# Guide v2")
        self.assertEqual(client.fetch_text.await_count, 2)


if __name__ == "__main__":
    unittest.main()
