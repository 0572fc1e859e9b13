"""Shared constants used across the application."""

# GitHub Constants
# ----------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API URL (override for GitHub Enterprise Server)."""

LABELS_PER_PAGE = 100
"""Page size used when listing repository labels (GitHub's maximum)."""

LINK_NEXT_PATTERN = r'<[^>]+>;\s*rel="next"'
"""Regex pattern matching the next-page entry of a GitHub Link header."""

# Tag Constants
# -------------

TAG_SEPARATOR = ":"
"""Separator between a tag's prefix and its suffix (e.g. lib:core)."""

DEFAULT_ALL_AFFECTED_TAG = "all-affected"
"""Default sentinel tag applied when every project in the workspace is affected."""

# Build Graph Constants
# ---------------------

DEFAULT_BUILD_GRAPH_COMMAND = "yarn nx"
"""Default command prefix used to invoke the Nx CLI."""

# Label Defaults
# --------------

DEFAULT_PROJECT_TYPE_ABBREVIATIONS: dict[str, str] = {
    "application": "app",
    "library": "lib",
    "language": "lang",
}
"""Project type to tag prefix map used when PROJECT_TYPE_ABBREVIATIONS is not set."""

DEFAULT_LABEL_PREFIX_DEFINITIONS: dict[str, dict[str, str]] = {
    "app": {"color": "D4C5F9", "description": "Pull request affected the application"},
    "lang": {"color": "C2E0C6", "description": "Projects of this language were affected by the pull request"},
    "lib": {"color": "BFD4F2", "description": "Pull request affected the library"},
}
"""Label display settings per tag prefix used when LABEL_PREFIX_DEFINITIONS is not set."""
