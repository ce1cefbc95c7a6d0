"""Read topic Markdown files from disk into a :class:`ContentCollection`.

Each configured category maps to one directory under the content root. Every
``*.md`` file directly inside that directory is a topic, except the names the
category excludes. Authoring order is the category's ``documents`` list first,
then front matter ``order``, then file name.

Example
-------
>>> from pathlib import Path
>>> from training_pages.config import load_site_config
>>> from training_pages.content_loader import load_collection
>>> site = load_site_config(Path("config/training.yaml"))  # doctest: +SKIP
>>> collection = load_collection(site)  # doctest: +SKIP
>>> [doc.slug for doc in collection.documents("features")]  # doctest: +SKIP
['signals', 'class-based-views', 'messages']
"""

from __future__ import annotations

import typing as typ

from .collection import ContentCollection
from .errors import NotFoundError
from .markdown_parser import parse_topic

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import CategoryConfig, SiteConfig
    from .models import TopicDocument


def load_collection(site_config: SiteConfig) -> ContentCollection:
    """Parse every topic file the configuration points at.

    Parameters
    ----------
    site_config : SiteConfig
        Resolved configuration naming the content root and categories.

    Returns
    -------
    ContentCollection
        Documents grouped by category in authoring order. Categories whose
        directory is missing are present but empty.

    Raises
    ------
    DuplicateSlugError
        If two files in one category resolve to the same slug.
    NotFoundError
        If a category's ``documents`` list names a slug with no file.
    TopicParseError
        If a file has malformed front matter.
    """
    collection = ContentCollection(
        {key: category.label for key, category in site_config.categories.items()},
        directories={
            key: category.directory for key, category in site_config.categories.items()
        },
    )
    for key, category in site_config.categories.items():
        directory = site_config.category_dir(key)
        documents = [
            _read_topic(path, category, site_config.content_root)
            for path in _topic_files(directory, category)
        ]
        for document in _authoring_order(documents, category):
            collection.add(document)
    return collection


def _topic_files(directory: Path, category: CategoryConfig) -> list[Path]:
    if not directory.is_dir():
        return []
    excluded = set(category.exclude)
    return sorted(
        path
        for path in directory.glob("*.md")
        if path.is_file() and path.name not in excluded
    )


def _read_topic(path: Path, category: CategoryConfig, root: Path) -> TopicDocument:
    relative = path.relative_to(root).as_posix()
    text = path.read_text(encoding="utf-8")
    return parse_topic(
        text, category=category.key, path=relative, default_slug=path.stem
    )


def _authoring_order(
    documents: list[TopicDocument], category: CategoryConfig
) -> list[TopicDocument]:
    """Return ``documents`` sorted into the order authors asked for."""
    by_slug = {document.slug: document for document in documents}
    ordered: list[TopicDocument] = []
    for slug in category.documents:
        document = by_slug.get(slug)
        if document is None:
            raise NotFoundError(slug, category.key)
        if document not in ordered:
            ordered.append(document)

    remaining = [document for document in documents if document not in ordered]
    remaining.sort(
        key=lambda doc: (doc.order is None, doc.order or 0, doc.filename.lower())
    )
    return ordered + remaining


__all__ = ["load_collection"]
