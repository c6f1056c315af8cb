"""Disk cache for fetched remote documents."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class DiskCache:
    """Disk cache keyed by URL hash.

    Structure: {cache_dir}/{key[:2]}/{key}.bin with {key}.meta.json alongside.
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            fallback = Path(os.getenv("LLMDOCS_CACHE_DIR_FALLBACK", "/tmp/llmdocs-cache"))
            logger.warning("Cache dir %s not writable, using %s", cache_dir, fallback)
            self.cache_dir = fallback
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _paths(self, url: str) -> tuple[Path, Path]:
        key = hashlib.sha256(url.encode()).hexdigest()
        base = self.cache_dir / key[:2]
        return base / f"{key}.bin", base / f"{key}.meta.json"

    def get(self, url: str, max_age_seconds: int | None = None) -> bytes | None:
        """Return cached content, or None when missing or older than ``max_age_seconds``."""
        path, meta_path = self._paths(url)
        if not path.exists():
            return None

        if max_age_seconds is not None and meta_path.exists():
            try:
                meta = json.loads(meta_path.read_text(encoding="utf-8"))
                cached_at = datetime.fromisoformat(meta.get("cached_at", ""))
            except (json.JSONDecodeError, ValueError):
                return None
            if (datetime.now(UTC) - cached_at).total_seconds() > max_age_seconds:
                return None

        return path.read_bytes()

    def put(self, url: str, content: bytes) -> None:
        path, meta_path = self._paths(url)
        meta = {
            "url": url,
            "cached_at": datetime.now(UTC).isoformat(),
            "size": len(content),
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            meta_path.write_text(json.dumps(meta, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not cache %s: %s", url, e)

    def clear(self, url: str) -> bool:
        """Remove a URL from the cache. Returns True if something was removed."""
        path, meta_path = self._paths(url)
        removed = path.exists()
        path.unlink(missing_ok=True)
        meta_path.unlink(missing_ok=True)
        return removed
