"""CLI entry point for llmdocs."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import LOG_LEVEL
from .errors import LlmDocsError
from .settings import BuildConfig, load_config

logger = logging.getLogger(__name__)

# Option flags shared by transform, bulk-transform and compare
_FLAG_OPTIONS = {
    "convert_urls": "Convert HTML anchors to markdown links",
    "remove_comments": "Remove HTML comments",
    "normalize_whitespace": "Normalize blank lines and trailing whitespace",
    "remove_badges": "Remove badge/shield images",
    "remove_frontmatter": "Remove YAML/TOML frontmatter",
    "remove_code_examples": "Remove fenced and inline code",
    "remove_images": "Remove all images",
    "simplify_links": "Shorten verbose link text",
    "remove_blockquotes": "Strip blockquote markers",
    "normalize_headings": "Renumber heading levels so the top level is 1",
    "generate_toc": "Prepend a table of contents",
    "remove_stopwords": "Remove common stopwords (aggressive, lossy)",
    "remove_duplicates": "Remove repeated paragraphs",
}

# Enabled by --all: safe cleanups that do not drop prose or code
_ALL_PRESET = (
    "convert_urls",
    "remove_comments",
    "normalize_whitespace",
    "remove_badges",
    "remove_frontmatter",
)


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _options_parser() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("transform options")
    group.add_argument("--base-url", default=None, help="Base URL for relative links and images")
    group.add_argument("--custom-instruction", default=None, help="Text to prepend to the output")
    group.add_argument("--all", action="store_true", help="Enable the standard safe cleanups")
    for name, help_text in _FLAG_OPTIONS.items():
        group.add_argument(f"--{name.replace('_', '-')}", action="store_true", default=None, help=help_text)
    return parent


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="llmdocs",
        description="Turn documentation into dense, LLM-friendly markdown.",
    )
    parser.add_argument("--version", "-v", action="version", version=f"llmdocs {__version__}")
    parser.add_argument("--config", "-c", type=Path, default=None, help="Path to llmdocs.toml")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    options_parent = _options_parser()
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_transform = sub.add_parser("transform", parents=[options_parent], help="Transform one file or URL")
    p_transform.add_argument("source", help="Markdown file path or http(s) URL")
    p_transform.add_argument("--out", "-o", type=Path, default=None, help="Write to file instead of stdout")
    p_transform.add_argument("--force", action="store_true", help="Bypass the fetch cache")

    p_bulk = sub.add_parser("bulk-transform", parents=[options_parent], help="Transform a docs directory")
    p_bulk.add_argument("--docs", "-d", type=Path, default=None, help="Documentation directory")
    p_bulk.add_argument("--suffix", default=None, help="Output suffix (\"\" rewrites files in place)")
    p_bulk.add_argument("--exclude", action="append", default=None, help="Glob to skip (repeatable)")

    p_generate = sub.add_parser("generate", help="Generate llms.txt for a docs directory")
    p_generate.add_argument("--docs", "-d", type=Path, default=None, help="Documentation directory")
    p_generate.add_argument("--out", "-o", type=Path, default=None, help="Output file or directory")
    p_generate.add_argument("--title", default=None, help="Project title")
    p_generate.add_argument("--description", default=None, help="Project description")
    p_generate.add_argument("--base-url", default=None, help="Base URL for document links")
    p_generate.add_argument("--exclude", action="append", default=None, help="Glob to skip (repeatable)")

    p_compare = sub.add_parser("compare", parents=[options_parent], help="Show size savings of a transform")
    p_compare.add_argument("source", help="Markdown file path or http(s) URL")
    p_compare.add_argument("--force", action="store_true", help="Bypass the fetch cache")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        if args.cmd == "transform":
            return _cmd_transform(args, config)
        if args.cmd == "bulk-transform":
            return _cmd_bulk(args, config)
        if args.cmd == "generate":
            return _cmd_generate(args, config)
        if args.cmd == "compare":
            return _cmd_compare(args, config)
    except (LlmDocsError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 2


def _overrides(args: Any) -> dict[str, Any]:
    values: dict[str, Any] = {name: getattr(args, name, None) for name in _FLAG_OPTIONS}
    if getattr(args, "all", False):
        for name in _ALL_PRESET:
            values[name] = True
    values["base_url"] = getattr(args, "base_url", None)
    values["custom_instruction"] = getattr(args, "custom_instruction", None)
    return values


def _load_source(source: str, config: BuildConfig, force: bool) -> BuildConfig:
    """Attach fetched remote content to the config when ``source`` is a URL."""
    from .fetch.client import fetch_document, is_url

    if not is_url(source):
        return config
    content = asyncio.run(fetch_document(source, force=force))
    return config.merged({"content": content})


def _cmd_transform(args: Any, config: BuildConfig) -> int:
    from .transform.pipeline import transform

    config = _load_source(args.source, config.merged(_overrides(args)), bool(args.force))
    output = transform(args.source, config.transform_options())

    if args.out is None:
        sys.stdout.write(output)
        return 0

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(output, encoding="utf-8")
    print(f"✓ Transformed {args.source} -> {args.out}")
    return 0


def _cmd_bulk(args: Any, config: BuildConfig) -> int:
    from .bulk import bulk_transform

    config = config.merged(_overrides(args)).merged(
        {"docs": args.docs, "suffix": args.suffix, "excludes": args.exclude}
    )
    docs_dir = config.docs or Path("./docs")

    results = bulk_transform(docs_dir, config.transform_options(), config.suffix, config.excludes)

    if not results:
        print(f"No markdown files found in {docs_dir}")
        return 0

    before = sum(r.chars_before for r in results)
    after = sum(r.chars_after for r in results)
    print(f"✓ Transformed {len(results)} files")
    for result in results:
        print(f"  {result.source} -> {result.output.name}")
    print(f"  Characters: {before:,} -> {after:,}")
    return 0


def _cmd_generate(args: Any, config: BuildConfig) -> int:
    from .bulk import find_markdown_files
    from .llms_txt import build_llms_txt, write_llms_txt

    config = config.merged(
        {
            "docs": args.docs,
            "output": args.out,
            "title": args.title,
            "description": args.description,
            "base_url": args.base_url,
            "excludes": args.exclude,
        }
    )
    docs_dir = config.docs or Path("./docs")
    if not docs_dir.is_dir():
        print(f"Error: not a directory: {docs_dir}", file=sys.stderr)
        return 1

    files = find_markdown_files(docs_dir, config.suffix, config.excludes)
    content = build_llms_txt(files, docs_dir, config.title, config.description, config.base_url)

    if config.output is None:
        sys.stdout.write(content)
        return 0

    path = write_llms_txt(content, config.output)
    print(f"✓ llms.txt written: {path} ({len(files)} documents)")
    return 0


def _cmd_compare(args: Any, config: BuildConfig) -> int:
    from .parse.tokenize import count_tokens, reduction_percent
    from .transform.pipeline import transform

    config = _load_source(args.source, config.merged(_overrides(args)), bool(args.force))
    if config.content is not None:
        original = config.content
    else:
        path = Path(args.source)
        if not path.is_file():
            print(f"Error: source not found: {args.source}", file=sys.stderr)
            return 1
        original = path.read_text(encoding="utf-8")

    output = transform(args.source, config.transform_options())

    chars_before, chars_after = len(original), len(output)
    tokens_before, tokens_after = count_tokens(original), count_tokens(output)

    print(f"Source: {args.source}")
    print(f"  Characters: {chars_before:,} -> {chars_after:,} ({reduction_percent(chars_before, chars_after)}% smaller)")
    print(f"  Tokens:     {tokens_before:,} -> {tokens_after:,} ({reduction_percent(tokens_before, tokens_after)}% smaller)")
    return 0


if __name__ == "__main__":
    app()
