"""File slug helpers used by the parser and the scaffolder.

Examples
--------
>>> from training_pages._slugs import slugify
>>> slugify("2. Deep Dive")
'deep-dive'
>>> slugify("Class-based Views")
'class-based-views'
"""

from __future__ import annotations

import re

NUMBER_PREFIX = re.compile(r"^\d+\.?\s*")


def strip_numbering(title: str) -> str:
    """Return ``title`` without a leading ``1.``-style number."""
    return NUMBER_PREFIX.sub("", title).strip()


def slugify(title: str) -> str:
    """Return a lowercase hyphen-separated slug, ignoring leading numbers."""
    no_number = strip_numbering(title.lower())
    return re.sub(r"[^a-z0-9]+", "-", no_number).strip("-")

