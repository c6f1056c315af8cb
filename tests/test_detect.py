"""Tests for content type detection."""

import unittest

from llmdocs.config import DETECTION_PREFIX_CHARS
from llmdocs.parse.detect import ContentType, classify, detection_snippet


class TestDetectionSnippet(unittest.TestCase):
    def test_strips_leading_whitespace_and_comments(self) -> None:
        content = "  \n<!-- build info -->\n<!-- status:\nready -->\n<!doctype html><html>"
        self.assertEqual(detection_snippet(content), "<!doctype html><html>")

    def test_only_comments_yields_empty_snippet(self) -> None:
        self.assertEqual(detection_snippet("<!-- a -->\n<!-- b -->\n"), "")

    def test_truncates_to_prefix(self) -> None:
        snippet = detection_snippet("x" * (DETECTION_PREFIX_CHARS * 2))
        self.assertEqual(len(snippet), DETECTION_PREFIX_CHARS)

    def test_none_and_empty(self) -> None:
        self.assertEqual(detection_snippet(None), "")
        self.assertEqual(detection_snippet(""), "")


class TestClassify(unittest.TestCase):
    def test_document_tags(self) -> None:
        for html in ("<!doctype html><html></html>", "<html><body></body></html>", "<head><title>x</title></head>", "<body><p>x</p></body>"):
            with self.subTest(html=html):
                self.assertEqual(classify(html), ContentType.HTML_DOCUMENT)

    def test_document_after_leading_comments(self) -> None:
        html = "<!-- build info -->\n<!-- status: ready -->\n<!DOCTYPE html>\n<html></html>"
        self.assertEqual(classify(html), ContentType.HTML_DOCUMENT)

    def test_table_fragments(self) -> None:
        for html in ("<table><tr><td>A</td></tr></table>", "<thead><tr><th>A</th></tr></thead>", "<tr><td>A</td></tr>", "<td>A</td>", "  <TABLE>\n</TABLE>"):
            with self.subTest(html=html):
                self.assertEqual(classify(html), ContentType.HTML_TABLE_FRAGMENT)

    def test_tag_later_in_prefix_is_document(self) -> None:
        self.assertEqual(classify("Intro text\n<div>content</div>"), ContentType.HTML_DOCUMENT)

    def test_plain_markdown(self) -> None:
        self.assertEqual(classify("# Title\n\nSome *text* with <span>inline</span> html."), ContentType.MARKDOWN)

    def test_tag_boundary_aware(self) -> None:
        # <pre>, <param> and <header> share a prefix with detection tags but are not them.
        self.assertEqual(classify("# Doc\n\n<pre>x</pre> <header>y</header>"), ContentType.MARKDOWN)

    def test_tag_beyond_prefix_is_ignored(self) -> None:
        content = "a" * DETECTION_PREFIX_CHARS + "<html>"
        self.assertEqual(classify(content), ContentType.MARKDOWN)

    def test_empty_and_comment_only_fail_open(self) -> None:
        self.assertEqual(classify(""), ContentType.MARKDOWN)
        self.assertEqual(classify("<!-- only a comment -->"), ContentType.MARKDOWN)


if __name__ == "__main__":
    unittest.main()
