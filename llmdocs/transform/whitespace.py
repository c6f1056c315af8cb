"""Final whitespace normalization."""

from __future__ import annotations

import re

from .options import TransformOptions


def normalize_whitespace(content: str) -> str:
    """Trim trailing spaces, collapse blank-line runs, end with one newline.

    Applying this to its own output returns the output unchanged.
    """
    content = content.replace("\r\n", "\n").replace("\r", "\n")
    content = "\n".join(line.rstrip() for line in content.split("\n"))
    content = re.sub(r"\n{3,}", "\n\n", content)
    return content.strip("\n") + "\n"


class WhitespaceTransformer:
    """Run ``normalize_whitespace`` when the option is set."""

    def transform(self, content: str, options: TransformOptions) -> str:
        if not options.normalize_whitespace:
            return content
        return normalize_whitespace(content)
