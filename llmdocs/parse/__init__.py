"""Content detection, HTML cleaning and markdown rendering."""

from .detect import ContentType, classify, detection_snippet
from .html_clean import clean_html
from .md_render import HtmlToMarkdownConverter, html_to_markdown, render_markdown
from .tokenize import count_tokens

__all__ = [
    "ContentType",
    "classify",
    "detection_snippet",
    "clean_html",
    "HtmlToMarkdownConverter",
    "html_to_markdown",
    "render_markdown",
    "count_tokens",
]
