"""Tests for HTML → markdown rendering."""

import unittest

from llmdocs.parse.md_render import HtmlToMarkdownConverter, _normalize_output, html_to_markdown, render_markdown


class TestRenderMarkdown(unittest.TestCase):
    def test_renders_headings(self) -> None:
        md = render_markdown("<h1>Title</h1><h2>Subtitle</h2><h6>Deep</h6>")
        self.assertIn("# Title", md)
        self.assertIn("## Subtitle", md)
        self.assertIn("###### Deep", md)

    def test_renders_paragraphs_on_one_line(self) -> None:
        md = render_markdown("<p>First\n   paragraph.</p><p>Second paragraph.</p>")
        self.assertEqual(md, "First paragraph.\n\nSecond paragraph.")

    def test_renders_inline_markup(self) -> None:
        html = '<p><strong>Bold</strong> <em>Em</em> <a href="https://x">Link</a> <code>cmd</code></p>'
        md = render_markdown(html)
        self.assertIn("**Bold**", md)
        self.assertIn("*Em*", md)
        self.assertIn("[Link](https://x)", md)
        self.assertIn("`cmd`", md)

    def test_renders_unordered_list_with_links(self) -> None:
        html = '<ul><li><a href="https://example.com/a">First</a></li><li>Plain</li></ul>'
        md = render_markdown(html)
        self.assertIn("- [First](https://example.com/a)", md)
        self.assertIn("- Plain", md)

    def test_renders_ordered_list(self) -> None:
        md = render_markdown("<ol><li>One</li><li>Two</li></ol>")
        self.assertIn("1. One", md)
        self.assertIn("2. Two", md)

    def test_nested_list_keeps_outer_items(self) -> None:
        md = render_markdown("<ul><li>A<ul><li>B</li></ul></li><li>C</li></ul>")
        self.assertEqual(md, "- A\n  - B\n- C")

    def test_code_block_inside_list_item(self) -> None:
        md = render_markdown("<ul><li>Install:<pre>pip install x\npip install y</pre></li></ul>")
        self.assertEqual(md, "- Install:\n  ```\n  pip install x\n  pip install y\n  ```")

    def test_code_block_inside_ordered_item(self) -> None:
        md = render_markdown("<ol><li>Run<pre>make</pre></li><li>Done</li></ol>")
        self.assertEqual(md, "1. Run\n   ```\n   make\n   ```\n2. Done")

    def test_blockquote_keeps_paragraphs(self) -> None:
        md = render_markdown("<blockquote><p>One</p><p>Two</p></blockquote>")
        self.assertEqual(md, "> One\n>\n> Two")

    def test_blockquote_with_list(self) -> None:
        md = render_markdown("<blockquote><p>Note:</p><ul><li>a</li></ul></blockquote><p>After</p>")
        self.assertEqual(md, "> Note:\n>\n> - a\n\nAfter")

    def test_renders_code_block(self) -> None:
        md = render_markdown("<pre><code>def hello():\n    return 1 &lt; 2</code></pre>")
        self.assertIn("```\ndef hello():\n    return 1 < 2\n```", md)

    def test_renders_table(self) -> None:
        html = "<table><tr><th>Name</th><th>Value</th></tr><tr><td>A</td><td>1</td></tr></table>"
        md = render_markdown(html)
        self.assertIn("| Name | Value |", md)
        self.assertIn("| --- | --- |", md)
        self.assertIn("| A | 1 |", md)

    def test_renders_images(self) -> None:
        md = render_markdown('<p><img alt="Logo" src="/logo.png"> text</p>')
        self.assertIn("![Logo](/logo.png)", md)

    def test_unknown_tags_keep_text(self) -> None:
        md = render_markdown("<div>One</div><custom-el>Two</custom-el>")
        self.assertIn("One", md)
        self.assertIn("Two", md)
        self.assertNotIn("<", md)


class TestHtmlToMarkdown(unittest.TestCase):
    def test_full_document(self) -> None:
        html = (
            "<!doctype html><html><head><meta charset='utf-8'><title>Doc</title></head>"
            "<body><h2>Subscriptions</h2><p>Latest updates on plans.</p>"
            '<ul><li><a href="https://example.com/a">First</a></li></ul></body></html>'
        )
        md = HtmlToMarkdownConverter().convert(html)
        self.assertEqual(
            md,
            "## Subscriptions\n\nLatest updates on plans.\n\n- [First](https://example.com/a)",
        )

    def test_drops_scripts_and_entities_are_unescaped(self) -> None:
        md = html_to_markdown("<body><script>x()</script><p>Fish &amp; chips</p></body>")
        self.assertEqual(md, "Fish & chips")

    def test_literal_angle_brackets_in_text_survive(self) -> None:
        md = html_to_markdown("<body><p>Use a &lt;div&gt; here</p></body>")
        self.assertEqual(md, "Use a <div> here")


class TestNormalizeOutput(unittest.TestCase):
    def test_collapses_multiple_blank_lines(self) -> None:
        result = _normalize_output("Para 1\n\n\n\n\nPara 2")
        self.assertEqual(result, "Para 1\n\nPara 2")

    def test_normalizes_line_endings(self) -> None:
        result = _normalize_output("Line 1\r\nLine 2\rLine 3")
        self.assertEqual(result, "Line 1\nLine 2\nLine 3")


if __name__ == "__main__":
    unittest.main()
