"""Transform every markdown file under a documentation directory."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .config import DEFAULT_SUFFIX
from .transform.options import TransformOptions
from .transform.pipeline import MarkdownTransformer

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md", ".markdown")


class BulkResult(BaseModel):
    """Outcome of transforming one file."""

    source: Path
    output: Path
    chars_before: int
    chars_after: int


def output_path_for(path: Path, suffix: str = DEFAULT_SUFFIX) -> Path:
    """Where the transformed copy of ``path`` goes.

    ``README.md`` with suffix ``.llm`` becomes ``README.llm.md``; an empty
    suffix means the file is rewritten in place.
    """
    if not suffix:
        return path
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def _is_excluded(relative: str, excludes: list[str]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in excludes)


def find_markdown_files(
    docs_dir: Path,
    suffix: str = DEFAULT_SUFFIX,
    excludes: list[str] | None = None,
) -> list[Path]:
    """List markdown files under ``docs_dir``, sorted, skipping earlier outputs."""
    excludes = excludes or []
    files: list[Path] = []

    for path in sorted(docs_dir.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in MARKDOWN_EXTENSIONS:
            continue
        if suffix and path.stem.endswith(suffix):
            continue
        relative = path.relative_to(docs_dir).as_posix()
        if _is_excluded(relative, excludes) or _is_excluded(path.name, excludes):
            logger.debug("Excluded %s", relative)
            continue
        files.append(path)

    return files


def bulk_transform(
    docs_dir: Path,
    options: TransformOptions | Mapping[str, Any] | None = None,
    suffix: str = DEFAULT_SUFFIX,
    excludes: list[str] | None = None,
) -> list[BulkResult]:
    """Transform each markdown file and write the result next to it."""
    if not docs_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {docs_dir}")

    # Each file is read from disk, never from inline content.
    options = TransformOptions.coerce(options).model_copy(update={"content": None})
    results: list[BulkResult] = []

    for path in find_markdown_files(docs_dir, suffix, excludes):
        original = path.read_text(encoding="utf-8")
        transformed = MarkdownTransformer(path, options).transform()
        output = output_path_for(path, suffix)
        output.write_text(transformed, encoding="utf-8")
        logger.info("Transformed %s -> %s", path, output.name)
        results.append(
            BulkResult(
                source=path,
                output=output,
                chars_before=len(original),
                chars_after=len(transformed),
            )
        )

    return results
