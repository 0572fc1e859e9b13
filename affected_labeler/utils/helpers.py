"""General utility functions and helper classes."""

from affected_labeler.utils.constants import TAG_SEPARATOR


def split_tag(tag: str) -> tuple[str, str | None]:
    """Split a tag like 'lib:core' into its prefix and suffix.

    Tags without a separator return the whole tag as the prefix and None as
    the suffix. Only the first two segments are considered, so 'a:b:c' splits
    into ('a', 'b').
    """
    parts = tag.split(TAG_SEPARATOR)
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def join_tag(prefix: str, suffix: str) -> str:
    """Join a prefix and suffix into a tag."""
    return f"{prefix}{TAG_SEPARATOR}{suffix}"
