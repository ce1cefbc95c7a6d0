"""Derive the navigation index from a content collection.

The index maps each category to its ``(title, slug)`` entries in authoring
order. :func:`build` refuses to produce an index while any internal link is
broken, and :meth:`NavigationIndex.to_yaml` serialises the result as the
``nav:`` manifest a static site generator consumes.

Examples
--------
>>> from training_pages.collection import ContentCollection
>>> from training_pages.models import TopicDocument
>>> from training_pages.navigation import build
>>> collection = ContentCollection({"features": "Framework Features"})
>>> collection.add(TopicDocument(title="Signals", slug="signals", category="features"))
>>> build(collection).pairs("features")
[('Signals', 'signals')]
"""

from __future__ import annotations

import dataclasses as dc
import io
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from .errors import BrokenLinkError
from .links import validate
from .models import NavEntry

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .collection import ContentCollection
    from .models import TopicDocument


@dc.dataclass(slots=True)
class NavigationIndex:
    """Category to ordered entries mapping derived from a collection.

    Attributes
    ----------
    categories : dict[str, list[NavEntry]]
        Entries per category key, in category declaration order.
    labels : dict[str, str]
        Display label per category key.
    """

    categories: dict[str, list[NavEntry]] = dc.field(default_factory=dict)
    labels: dict[str, str] = dc.field(default_factory=dict)

    def entries(self, category: str) -> list[NavEntry]:
        """Return the entries of ``category`` (empty when unknown)."""
        return list(self.categories.get(category, []))

    def pairs(self, category: str) -> list[tuple[str, str]]:
        """Return ``(title, slug)`` pairs for ``category``."""
        return [(entry.title, entry.slug) for entry in self.categories.get(category, [])]

    def is_empty(self) -> bool:
        """Return True when no category has an entry."""
        return not any(self.categories.values())

    def to_yaml(self) -> str:
        """Render the ``nav:`` manifest as YAML text.

        Categories without documents are omitted so the site renderer never
        shows an empty heading. The output depends only on the index content.
        """
        nav = CommentedSeq()
        for key, entries in self.categories.items():
            if not entries:
                continue
            items = CommentedSeq()
            for entry in entries:
                row = CommentedMap()
                row[entry.title] = entry.path
                items.append(row)
            group = CommentedMap()
            group[self.labels.get(key, key)] = items
            nav.append(group)
        document = CommentedMap()
        document["nav"] = nav
        buffer = io.StringIO()
        _build_manifest_yaml().dump(document, buffer)
        return buffer.getvalue()

    def write(self, path: Path) -> Path:
        """Write the YAML manifest to ``path`` and return it."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_yaml(), encoding="utf-8")
        return path


def _build_manifest_yaml() -> YAML:
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def entry_path(collection: ContentCollection, document: TopicDocument) -> str:
    """Return the content-root-relative Markdown path of ``document``."""
    if document.path:
        return document.path
    directory = collection.directory_for(document.category)
    if directory in {"", "."}:
        return f"{document.slug}.md"
    return f"{directory}/{document.slug}.md"


def build(collection: ContentCollection) -> NavigationIndex:
    """Build the navigation index for ``collection``.

    Parameters
    ----------
    collection : ContentCollection
        Source collection; every declared category appears in the result,
        including those without documents.

    Returns
    -------
    NavigationIndex
        Entries per category in authoring order.

    Raises
    ------
    BrokenLinkError
        Listing every broken internal link when any exists.
    """
    broken = validate(collection)
    if broken:
        raise BrokenLinkError(broken)

    index = NavigationIndex(labels=collection.categories)
    for key in collection.categories:
        index.categories[key] = [
            NavEntry(
                title=document.title or document.slug,
                slug=document.slug,
                path=entry_path(collection, document),
            )
            for document in collection.documents(key)
        ]
    return index


__all__ = ["NavigationIndex", "build", "entry_path"]
