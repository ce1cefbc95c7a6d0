"""Build-time tooling for the Markdown training curriculum.

This package models the curriculum as a content collection (topic documents
grouped by category), validates its cross-references, and derives the
navigation manifest and landing page consumed by the static site renderer.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``ContentCollection``, ``TopicDocument``: the content model.
- ``build``, ``validate``: navigation index builder and link validator.

Examples
--------
>>> from training_pages import ContentCollection, TopicDocument, build, validate
>>> collection = ContentCollection({"features": "Framework Features"})
>>> validate(collection)
set()
>>> build(collection).pairs("features")
[]
"""

from __future__ import annotations

from .cli import app, main
from .collection import ContentCollection
from .errors import (
    BrokenLinkError,
    ContentError,
    DuplicateSlugError,
    NotFoundError,
    TopicParseError,
)
from .links import validate
from .models import BrokenLink, TopicDocument
from .navigation import NavigationIndex, build

__all__ = [
    "BrokenLink",
    "BrokenLinkError",
    "ContentCollection",
    "ContentError",
    "DuplicateSlugError",
    "NavigationIndex",
    "NotFoundError",
    "TopicDocument",
    "TopicParseError",
    "app",
    "build",
    "main",
    "validate",
]
