"""Tests for the link stage."""

import unittest

from llmdocs.transform.links import (
    LinkTransformer,
    convert_html_anchors,
    expand_relative_links,
    is_relative_url,
    simplify_link_text,
    simplify_links,
)
from llmdocs.transform.options import TransformOptions

BASE = "https://myproject.io/docs/guide/"


class TestIsRelativeUrl(unittest.TestCase):
    def test_relative(self) -> None:
        self.assertTrue(is_relative_url("intro.md"))
        self.assertTrue(is_relative_url("/api"))
        self.assertTrue(is_relative_url("../up.md"))

    def test_not_relative(self) -> None:
        for url in ("https://x.io", "mailto:a@b.c", "#anchor", "//cdn.x.io/a.js", ""):
            with self.subTest(url=url):
                self.assertFalse(is_relative_url(url))


class TestExpandRelativeLinks(unittest.TestCase):
    def test_resolves_against_current_path(self) -> None:
        md = "See [setup](setup.md) and [up](../index.md)."
        self.assertEqual(
            expand_relative_links(md, BASE),
            "See [setup](https://myproject.io/docs/guide/setup.md) and [up](https://myproject.io/docs/index.md).",
        )

    def test_root_relative_resolves_to_origin(self) -> None:
        self.assertEqual(
            expand_relative_links("[API](/api/v1)", BASE),
            "[API](https://myproject.io/api/v1)",
        )

    def test_images_and_titles(self) -> None:
        md = '![logo](img/logo.png "Logo")'
        self.assertEqual(
            expand_relative_links(md, BASE),
            '![logo](https://myproject.io/docs/guide/img/logo.png "Logo")',
        )

    def test_linked_image_expands_both_targets(self) -> None:
        md = "[![shot](shot.png)](full.png)"
        self.assertEqual(
            expand_relative_links(md, BASE),
            "[![shot](https://myproject.io/docs/guide/shot.png)](https://myproject.io/docs/guide/full.png)",
        )

    def test_leaves_absolute_and_anchors(self) -> None:
        md = "[a](https://other.io/x) [b](#usage) [c](mailto:me@x.io)"
        self.assertEqual(expand_relative_links(md, BASE), md)

    def test_reference_definitions(self) -> None:
        md = "[ref]: docs/ref.md\n[abs]: https://x.io"
        self.assertEqual(
            expand_relative_links(md, BASE),
            "[ref]: https://myproject.io/docs/guide/docs/ref.md\n[abs]: https://x.io",
        )


class TestConvertHtmlAnchors(unittest.TestCase):
    def test_converts_anchor(self) -> None:
        html = 'Go to <a href="https://x.io/docs" class="btn">the <b>docs</b></a> now.'
        self.assertEqual(convert_html_anchors(html), "Go to [the docs](https://x.io/docs) now.")

    def test_single_quotes_and_empty_text(self) -> None:
        self.assertEqual(convert_html_anchors("<a href='/a'></a>"), "[/a](/a)")


class TestSimplifyLinks(unittest.TestCase):
    def test_short_text_unchanged(self) -> None:
        self.assertEqual(simplify_link_text("Install guide"), "Install guide")

    def test_long_text_truncated(self) -> None:
        text = "Click here to read the complete installation guide for every platform"
        self.assertEqual(simplify_link_text(text), "Click here to read the complete...")

    def test_url_preserved(self) -> None:
        md = "[Read the full and very detailed migration guide for version two](https://x.io/m?a=1)"
        result = simplify_links(md)
        self.assertTrue(result.endswith("](https://x.io/m?a=1)"))
        self.assertIn("...", result)

    def test_images_untouched(self) -> None:
        md = "![A very long alternative text describing the screenshot in detail](s.png)"
        self.assertEqual(simplify_links(md), md)


class TestLinkTransformer(unittest.TestCase):
    def test_disabled_is_passthrough(self) -> None:
        md = '<a href="/x">X</a> [y](y.md)'
        self.assertEqual(LinkTransformer().transform(md, TransformOptions()), md)

    def test_converted_anchors_are_expanded(self) -> None:
        options = TransformOptions(convert_urls=True, base_url="https://x.io/")
        self.assertEqual(LinkTransformer().transform('<a href="/a">A</a>', options), "[A](https://x.io/a)")


if __name__ == "__main__":
    unittest.main()
