"""Exceptions raised while assembling and validating training content.

Every error here is a build-time problem: nothing is retried, and an author has
to fix the offending Markdown before the site can be published.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import BrokenLink


class ContentError(ValueError):
    """Base class for problems found in the content collection."""


class DuplicateSlugError(ContentError):
    """Raised when a category already holds a document with the same slug."""

    def __init__(self, category: str, slug: str) -> None:
        self.category = category
        self.slug = slug
        super().__init__(f"Category '{category}' already contains slug '{slug}'.")


class NotFoundError(ContentError, LookupError):
    """Raised when a slug lookup does not match any document."""

    def __init__(self, slug: str, category: str | None = None) -> None:
        self.slug = slug
        self.category = category
        where = f" in category '{category}'" if category else ""
        super().__init__(f"No topic document with slug '{slug}'{where}.")


class BrokenLinkError(ContentError):
    """Raised when internal links do not resolve.

    Attributes
    ----------
    broken : list[BrokenLink]
        Every offending ``(source, target)`` pair, sorted.
    """

    def __init__(self, broken: cabc.Iterable[BrokenLink]) -> None:
        self.broken = sorted(broken)
        lines = [f"  {link.source} -> {link.target}" for link in self.broken]
        count = len(self.broken)
        noun = "link" if count == 1 else "links"
        super().__init__(f"{count} broken internal {noun}:\n" + "\n".join(lines))


class TopicParseError(ContentError):
    """Raised when a topic file cannot be parsed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


__all__ = [
    "BrokenLinkError",
    "ContentError",
    "DuplicateSlugError",
    "NotFoundError",
    "TopicParseError",
]
