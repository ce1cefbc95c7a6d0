"""Check that every internal reference in the collection resolves.

Internal references are relative Markdown links (``views.md``,
``../reference/setup.md#install``) and bare anchors (``#deep-dive``). Links
with a scheme, absolute paths, and links to non-Markdown assets are outside
this check; see :mod:`training_pages.external_links` for remote URLs.

Examples
--------
>>> from training_pages.collection import ContentCollection
>>> from training_pages.links import validate
>>> from training_pages.models import DocumentLink, TopicDocument
>>> collection = ContentCollection()
>>> collection.add(TopicDocument(
...     title="Signals", slug="signals", category="features",
...     links=[DocumentLink("todo-completed-signal.md")]))
>>> validate(collection)
{BrokenLink(source='signals', target='todo-completed-signal')}
"""

from __future__ import annotations

import posixpath
import typing as typ

from .models import MARKDOWN_SUFFIXES, BrokenLink

if typ.TYPE_CHECKING:
    from .collection import ContentCollection
    from .models import DocumentLink, TopicDocument


def _strip_suffix(name: str) -> str:
    lower = name.lower()
    for suffix in MARKDOWN_SUFFIXES:
        if lower.endswith(suffix):
            return name[: -len(suffix)]
    return name


def _resolve_target(
    collection: ContentCollection, source: TopicDocument, link_path: str
) -> tuple[TopicDocument | None, str]:
    """Return the linked document (or None) and the slug the link names."""
    base_dir = (
        posixpath.dirname(source.path)
        if source.path
        else collection.directory_for(source.category)
    )
    joined = posixpath.normpath(posixpath.join(base_dir, link_path))
    directory, name = posixpath.split(joined)
    stem = _strip_suffix(name)

    by_path = collection.find_by_path(joined)
    if by_path is not None:
        return by_path, stem

    category = collection.category_for_directory(directory or ".")
    if category is not None:
        return collection.store.find(stem, category), stem
    return collection.store.find(stem), stem


def _check_link(
    collection: ContentCollection, source: TopicDocument, link: DocumentLink
) -> BrokenLink | None:
    fragment = link.fragment
    if not link.path:
        if fragment and fragment not in source.anchors:
            return BrokenLink(source.slug, f"{source.slug}#{fragment}")
        return None

    target, slug = _resolve_target(collection, source, link.path)
    if target is None:
        return BrokenLink(source.slug, slug)
    if fragment and fragment not in target.anchors:
        return BrokenLink(source.slug, f"{target.slug}#{fragment}")
    return None


def validate(collection: ContentCollection) -> set[BrokenLink]:
    """Return every internal reference that does not resolve.

    Parameters
    ----------
    collection : ContentCollection
        Collection to inspect. It is not modified.

    Returns
    -------
    set[BrokenLink]
        ``(source slug, target slug)`` pairs; empty when every link resolves.
        Fragment mismatches name the target as ``slug#fragment``.
    """
    broken: set[BrokenLink] = set()
    for document in collection:
        for link in document.internal_links():
            problem = _check_link(collection, document, link)
            if problem is not None:
                broken.add(problem)
    return broken


__all__ = ["validate"]
