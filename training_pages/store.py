"""In-memory store holding topic documents keyed by category and slug.

The store is written by a single loader at build time and then only read, so
it carries no locking. Lookups by slug are scoped to a category because slugs
only need to be unique inside one.

Examples
--------
>>> from training_pages.models import TopicDocument
>>> from training_pages.store import TopicStore
>>> store = TopicStore()
>>> store.add(TopicDocument(title="Signals", slug="signals", category="features"))
>>> store.get("signals").title
'Signals'
>>> [doc.slug for doc in store.list("features")]
['signals']
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .errors import ContentError, DuplicateSlugError, NotFoundError

if typ.TYPE_CHECKING:
    from .models import TopicDocument


class CategoryView(cabc.Sequence):
    """Live, restartable view over the documents of one category.

    Nothing is copied: each iteration walks the store's current list in
    authoring order, so two passes over an unmodified store agree.
    """

    __slots__ = ("_category", "_store")

    def __init__(self, store: TopicStore, category: str) -> None:
        self._store = store
        self._category = category

    def _items(self) -> list[TopicDocument]:
        return self._store._documents.get(self._category, [])

    def __getitem__(self, index: int | slice) -> typ.Any:
        return self._items()[index]

    def __len__(self) -> int:
        return len(self._items())

    def __iter__(self) -> cabc.Iterator[TopicDocument]:
        yield from self._items()

    def __repr__(self) -> str:
        slugs = ", ".join(doc.slug for doc in self._items())
        return f"CategoryView({self._category!r}, [{slugs}])"


class TopicStore:
    """Hold and retrieve topic documents by slug."""

    def __init__(self) -> None:
        self._documents: dict[str, list[TopicDocument]] = {}
        self._by_path: dict[str, TopicDocument] = {}

    def add(self, document: TopicDocument) -> None:
        """Store ``document`` at the end of its category.

        Raises
        ------
        ContentError
            If the slug is empty.
        DuplicateSlugError
            If the category already holds a document with the same slug.
        """
        if not document.slug or not document.slug.strip():
            msg = f"Topic '{document.title}' has an empty slug."
            raise ContentError(msg)
        bucket = self._documents.setdefault(document.category, [])
        if any(existing.slug == document.slug for existing in bucket):
            raise DuplicateSlugError(document.category, document.slug)
        bucket.append(document)
        if document.path:
            self._by_path[document.path] = document

    def get(self, slug: str, category: str | None = None) -> TopicDocument:
        """Return the document with ``slug``.

        Without ``category`` the first match in category insertion order wins.

        Raises
        ------
        NotFoundError
            If no document matches.
        """
        buckets = (
            [self._documents.get(category, [])]
            if category is not None
            else list(self._documents.values())
        )
        for bucket in buckets:
            for document in bucket:
                if document.slug == slug:
                    return document
        raise NotFoundError(slug, category)

    def find(self, slug: str, category: str | None = None) -> TopicDocument | None:
        """Return the matching document or ``None``."""
        try:
            return self.get(slug, category)
        except NotFoundError:
            return None

    def find_by_path(self, path: str) -> TopicDocument | None:
        """Return the document loaded from ``path`` (content-root relative)."""
        return self._by_path.get(path)

    def categories(self) -> list[str]:
        """Return category keys that hold at least one document."""
        return [key for key, docs in self._documents.items() if docs]

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and self.find(slug) is not None

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._documents.values())

    def list(self, category: str) -> CategoryView:
        """Return a lazy, restartable sequence of ``category`` documents.

        Unknown categories give an empty sequence.
        """
        return CategoryView(self, category)


__all__ = ["CategoryView", "TopicStore"]
