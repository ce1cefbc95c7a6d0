"""Dataclasses describing topic documents and the links between them."""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ
from urllib.parse import urlsplit

EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")
MARKDOWN_SUFFIXES = (".md", ".markdown")


@dc.dataclass(slots=True)
class TopicSection:
    """Second-level section of a topic document.

    Attributes
    ----------
    title : str
        Heading text as written, including any numbering.
    short_title : str
        Heading with numbering stripped; used when matching required sections.
    slug : str
        Anchor unique within the document.
    markdown : str
        Section body without the heading line.
    """

    title: str
    short_title: str
    slug: str
    markdown: str


@dc.dataclass(slots=True)
class CodeSample:
    """Fenced code block embedded in a topic. Never executed."""

    language: str | None
    code: str


@dc.dataclass(slots=True)
class DocumentLink:
    """Outbound hyperlink found in a topic body."""

    href: str
    text: str = ""

    @property
    def is_external(self) -> bool:
        """Return True when the href carries a scheme or network location."""
        lower = self.href.lower()
        if lower.startswith(EXTERNAL_PREFIXES) or self.href.startswith("//"):
            return True
        parsed = urlsplit(self.href)
        return bool(parsed.scheme or parsed.netloc)

    @property
    def is_internal(self) -> bool:
        """Return True for relative Markdown references and bare anchors."""
        if not self.href or self.is_external:
            return False
        parsed = urlsplit(self.href)
        if not parsed.path:
            return bool(parsed.fragment)
        if parsed.path.startswith("/"):
            return False
        return parsed.path.lower().endswith(MARKDOWN_SUFFIXES)

    @property
    def path(self) -> str:
        """Return the path component of the href."""
        return urlsplit(self.href).path

    @property
    def fragment(self) -> str | None:
        """Return the fragment component of the href, if any."""
        return urlsplit(self.href).fragment or None


@dc.dataclass(slots=True)
class TopicDocument:
    """A single tutorial article about one framework feature.

    Attributes
    ----------
    title : str
        Human-readable title.
    slug : str
        Identifier unique within ``category``.
    category : str
        Key of the category the document belongs to.
    body : str
        Markdown body with front matter removed.
    sections : list[TopicSection]
        Ordered second-level sections.
    code_samples : list[CodeSample]
        Fenced code blocks in document order.
    links : list[DocumentLink]
        Outbound links in document order.
    heading_ids : list[str]
        Ids the rendered page gives its headings, at every level.
    path : str or None
        POSIX path relative to the content root when loaded from disk.
    order : int or None
        Explicit authoring position from front matter.
    """

    title: str
    slug: str
    category: str
    body: str = ""
    sections: list[TopicSection] = dc.field(default_factory=list)
    code_samples: list[CodeSample] = dc.field(default_factory=list)
    links: list[DocumentLink] = dc.field(default_factory=list)
    heading_ids: list[str] = dc.field(default_factory=list)
    path: str | None = None
    order: int | None = None

    @property
    def anchors(self) -> set[str]:
        """Return every anchor a fragment link may target in this document."""
        return set(self.heading_ids) | {section.slug for section in self.sections}

    @property
    def filename(self) -> str:
        """Return the file name used for this document on disk."""
        if self.path:
            return posixpath.basename(self.path)
        return f"{self.slug}.md"

    def internal_links(self) -> typ.Iterator[DocumentLink]:
        """Yield links pointing at other topic documents or local anchors."""
        for link in self.links:
            if link.is_internal:
                yield link

    def external_links(self) -> typ.Iterator[DocumentLink]:
        """Yield links pointing outside the collection."""
        for link in self.links:
            if link.is_external:
                yield link


class BrokenLink(typ.NamedTuple):
    """An internal reference that does not resolve.

    Compares equal to a plain ``(source, target)`` tuple.
    """

    source: str
    target: str


@dc.dataclass(slots=True)
class NavEntry:
    """One row of the navigation index."""

    title: str
    slug: str
    path: str


__all__ = [
    "BrokenLink",
    "CodeSample",
    "DocumentLink",
    "NavEntry",
    "TopicDocument",
    "TopicSection",
]
