"""Options accepted by the transformation pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict


class TransformOptions(BaseModel):
    """Recognized transformation options.

    Every flag defaults to disabled. Unknown keys are ignored so configuration
    written for newer versions keeps working.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    content: str | None = None
    base_url: str | None = None
    convert_urls: bool = False
    remove_comments: bool = False
    normalize_whitespace: bool = False
    remove_badges: bool = False
    remove_frontmatter: bool = False
    remove_code_examples: bool = False
    remove_images: bool = False
    simplify_links: bool = False
    remove_blockquotes: bool = False
    normalize_headings: bool = False
    generate_toc: bool = False
    custom_instruction: str | None = None
    remove_stopwords: bool = False
    remove_duplicates: bool = False

    @classmethod
    def coerce(cls, options: TransformOptions | Mapping[str, Any] | None) -> TransformOptions:
        """Build options from a mapping (or pass an instance through)."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        # None values mean "not set" in merged CLI/config mappings.
        return cls.model_validate({k: v for k, v in options.items() if v is not None})

    @property
    def compresses(self) -> bool:
        return self.remove_stopwords or self.remove_duplicates
