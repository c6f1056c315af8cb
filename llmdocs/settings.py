"""Project configuration loaded from ``llmdocs.toml``.

Example file::

    docs = "./docs"
    base_url = "https://myproject.io/docs/"
    suffix = ".llm"
    excludes = ["**/drafts/**"]

    remove_badges = true
    remove_frontmatter = true
    normalize_whitespace = true

Command-line flags override values read from the file.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, ValidationError

from .config import DEFAULT_CONFIG_FILE, DEFAULT_SUFFIX
from .errors import ConfigError
from .transform.options import TransformOptions

logger = logging.getLogger(__name__)


class BuildConfig(TransformOptions):
    """Transform options plus the settings used by batch and llms.txt commands."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    docs: Path | None = None
    output: Path | None = None
    title: str | None = None
    description: str | None = None
    suffix: str = DEFAULT_SUFFIX
    excludes: list[str] = []

    @classmethod
    def from_file(cls, path: Path) -> BuildConfig:
        """Load a TOML config file. Relative paths resolve against its directory."""
        try:
            with open(path, "rb") as f:
                data: dict[str, Any] = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        # Allow the options to live under an [llmdocs] table as well.
        if isinstance(data.get("llmdocs"), dict):
            table = data.pop("llmdocs")
            data = {**data, **table}

        for key in ("docs", "output"):
            if isinstance(data.get(key), str):
                data[key] = path.parent / data[key]

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e

        logger.info("Loaded config from %s", path)
        return config

    def merged(self, overrides: Mapping[str, Any]) -> BuildConfig:
        """Return a copy with every non-None override applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return type(self).model_validate(values)

    def transform_options(self) -> TransformOptions:
        return TransformOptions.model_validate(self.model_dump(include=set(TransformOptions.model_fields)))


def load_config(path: Path | None = None, cwd: Path | None = None) -> BuildConfig:
    """Load an explicit config file, or ``llmdocs.toml`` from ``cwd`` when present."""
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        return BuildConfig.from_file(path)

    default = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILE
    if default.is_file():
        return BuildConfig.from_file(default)
    return BuildConfig()
