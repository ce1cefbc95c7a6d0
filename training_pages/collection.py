"""Ordered, categorised set of topic documents."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .store import TopicStore

if typ.TYPE_CHECKING:
    from .models import TopicDocument
    from .store import CategoryView


class ContentCollection:
    """Topic documents grouped into ordered categories.

    Categories keep their declaration order; documents keep the order in which
    they were added. A document added under an undeclared category registers
    that category with a title-cased label, so every document belongs to
    exactly one known category.

    Parameters
    ----------
    categories : Mapping[str, str], optional
        Category keys mapped to display labels, in navigation order.
    directories : Mapping[str, str], optional
        Category keys mapped to their directory under the content root.
        Missing entries default to the category key.
    """

    def __init__(
        self,
        categories: cabc.Mapping[str, str] | None = None,
        *,
        directories: cabc.Mapping[str, str] | None = None,
    ) -> None:
        self.store = TopicStore()
        self._labels: dict[str, str] = {}
        self._directories: dict[str, str] = {}
        for key, label in (categories or {}).items():
            self.declare_category(key, label, (directories or {}).get(key))

    def declare_category(
        self, key: str, label: str | None = None, directory: str | None = None
    ) -> None:
        """Register ``key`` if unknown; existing categories keep their settings."""
        if key in self._labels:
            return
        self._labels[key] = label or key.replace("-", " ").replace("_", " ").title()
        self._directories[key] = (directory or key).strip("/") or "."

    @property
    def categories(self) -> dict[str, str]:
        """Return a copy of the category key to label mapping, in order."""
        return dict(self._labels)

    def label_for(self, category: str) -> str:
        """Return the display label of ``category``."""
        return self._labels[category]

    def directory_for(self, category: str) -> str:
        """Return the content-root-relative directory of ``category``."""
        return self._directories.get(category, category)

    def category_for_directory(self, directory: str) -> str | None:
        """Return the category whose directory is ``directory``, if any."""
        normalized = directory.strip("/") or "."
        for key, value in self._directories.items():
            if value == normalized:
                return key
        return None

    def add(self, document: TopicDocument) -> None:
        """Add ``document`` to its category (see :meth:`TopicStore.add`)."""
        self.declare_category(document.category)
        self.store.add(document)

    def get(self, slug: str, category: str | None = None) -> TopicDocument:
        """Return the document with ``slug`` (see :meth:`TopicStore.get`)."""
        return self.store.get(slug, category)

    def documents(self, category: str) -> CategoryView:
        """Return the documents of ``category`` in authoring order."""
        return self.store.list(category)

    def find_by_path(self, path: str) -> TopicDocument | None:
        """Return the document loaded from ``path``, if any."""
        return self.store.find_by_path(path)

    def __iter__(self) -> cabc.Iterator[TopicDocument]:
        for category in self._labels:
            yield from self.store.list(category)

    def __len__(self) -> int:
        return len(self.store)


__all__ = ["ContentCollection"]
