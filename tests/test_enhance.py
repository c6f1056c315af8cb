"""Tests for TOC generation and instruction injection."""

import unittest

from llmdocs.transform.enhance import (
    EnhancementTransformer,
    TocEntry,
    build_toc_entries,
    insert_toc,
    prepend_instruction,
    slugify,
)
from llmdocs.transform.headings import find_headings
from llmdocs.transform.options import TransformOptions


class TestSlugify(unittest.TestCase):
    def test_basic(self) -> None:
        self.assertEqual(slugify("Getting Started"), "getting-started")

    def test_collapses_punctuation(self) -> None:
        self.assertEqual(slugify("  API: v2 -- (Beta)!  "), "api-v2-beta")

    def test_drops_inline_markup(self) -> None:
        self.assertEqual(slugify("Use `pip` with [PyPI](https://pypi.org)"), "use-pip-with-pypi")


class TestBuildTocEntries(unittest.TestCase):
    def test_deduplicates_anchors(self) -> None:
        headings = find_headings("# Usage\n## Example\n# Other\n## Example\n## Example")
        anchors = [entry.anchor for entry in build_toc_entries(headings)]
        self.assertEqual(anchors, ["usage", "example", "other", "example-2", "example-3"])

    def test_entries_follow_document_order(self) -> None:
        headings = find_headings("# Subscriptions\n\n## Pricing")
        self.assertEqual(
            build_toc_entries(headings),
            [TocEntry(1, "Subscriptions", "subscriptions"), TocEntry(2, "Pricing", "pricing")],
        )


class TestInsertToc(unittest.TestCase):
    def test_inserted_before_first_heading(self) -> None:
        md = "Intro line.\n\n# Subscriptions\n\nText.\n\n## Pricing\n"
        result = insert_toc(md)
        self.assertEqual(
            result,
            "Intro line.\n\n"
            "## Table of Contents\n\n"
            "- [Subscriptions](#subscriptions)\n"
            "  - [Pricing](#pricing)\n\n"
            "# Subscriptions\n\nText.\n\n## Pricing\n",
        )
        self.assertLess(result.index("(#subscriptions)"), result.index("(#pricing)"))

    def test_no_headings_no_toc(self) -> None:
        self.assertEqual(insert_toc("Just text."), "Just text.")


class TestInstruction(unittest.TestCase):
    def test_prepends_block(self) -> None:
        self.assertEqual(prepend_instruction("# Doc", "  Answer from this doc only. "), "Answer from this doc only.\n\n# Doc")

    def test_blank_instruction_ignored(self) -> None:
        self.assertEqual(prepend_instruction("# Doc", "   "), "# Doc")


class TestEnhancementTransformer(unittest.TestCase):
    def test_instruction_precedes_toc(self) -> None:
        options = TransformOptions(generate_toc=True, custom_instruction="Read carefully.")
        result = EnhancementTransformer().transform("# Title\n\nBody", options)
        self.assertTrue(result.startswith("Read carefully.\n\n## Table of Contents"))
        self.assertIn("- [Title](#title)", result)

    def test_disabled_is_passthrough(self) -> None:
        self.assertEqual(EnhancementTransformer().transform("# Title", TransformOptions()), "# Title")


if __name__ == "__main__":
    unittest.main()
