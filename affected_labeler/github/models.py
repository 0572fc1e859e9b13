"""Lightweight models for GitHub API results."""

from dataclasses import dataclass, field


@dataclass
class LabelPage:
    """One page of repository label names.

    has_next_page is True or False when GitHub sent an explicit pagination
    signal (a Link header), and None when it did not.
    """

    names: list[str] = field(default_factory=list)
    has_next_page: bool | None = None
