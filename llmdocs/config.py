"""Configuration constants and paths for llmdocs."""

import os
from pathlib import Path

# Sent with every remote documentation fetch.
# Override via LLMDOCS_USER_AGENT environment variable
USER_AGENT = os.getenv("LLMDOCS_USER_AGENT", "llmdocs/0.1 (+https://llmstxt.org)")

# Cache location for fetched remote documents
CACHE_DIR = Path(os.getenv("LLMDOCS_CACHE_DIR", Path.home() / ".llmdocs" / "cache"))

# Seconds a cached remote document stays fresh
CACHE_MAX_AGE = int(os.getenv("LLMDOCS_CACHE_MAX_AGE", "3600"))

# Log level used by the CLI when --verbose is not given
LOG_LEVEL = os.getenv("LLMDOCS_LOG_LEVEL", "WARNING").upper()

# HTTP client settings
CONNECT_TIMEOUT = 15.0
READ_TIMEOUT = 30.0
MAX_RETRIES = 3

# Token counting model
TIKTOKEN_ENCODING = "cl100k_base"

# Project configuration
DEFAULT_CONFIG_FILE = "llmdocs.toml"
DEFAULT_SUFFIX = ".llm"

# Content detection only looks at this many characters after leading comments
DETECTION_PREFIX_CHARS = 500

# Tags whose presence marks in-memory content as an HTML document
HTML_DETECTION_TAGS = (
    r"!DOCTYPE\s+html",
    "html",
    "body",
    "head",
    "article",
    "section",
    "main",
    "p",
    "div",
    "table",
    "thead",
    "tbody",
    "tr",
    "td",
    "th",
    "meta",
    "link",
    "h[1-6]",
)

# Leading tags that mark a table fragment to be preserved verbatim
TABLE_FRAGMENT_TAGS = ("table", "thead", "tbody", "tr", "td", "th")

# Image URLs matching any of these are treated as badges/shields
BADGE_URL_PATTERNS = (
    r"shields\.io",
    r"badgen\.net",
    r"badge\.fury\.io",
    r"travis-ci\.(?:org|com)",
    r"circleci\.com",
    r"ci\.appveyor\.com",
    r"codecov\.io",
    r"coveralls\.io",
    r"codeclimate\.com",
    r"app\.codacy\.com",
    r"snyk\.io/test",
    r"david-dm\.org",
    r"badges\.gitter\.im",
    r"readthedocs\.org/projects/[^/\s)]+/badge",
    r"pepy\.tech/badge",
    r"github\.com/[^\s)]+/(?:workflows|actions)/[^\s)]+/badge\.svg",
    r"/badges?/",
    r"badge\.svg",
)

# Link text longer than either threshold is shortened by simplify_links
SIMPLIFY_LINK_MAX_CHARS = 50
SIMPLIFY_LINK_MAX_WORDS = 6
