"""Create new topic files with the standard section skeleton."""

from __future__ import annotations

import typing as typ

from ._slugs import slugify
from .content_loader import load_collection
from .errors import ContentError, DuplicateSlugError
from .index_page import build_environment

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig


def scaffold_topic(
    site_config: SiteConfig,
    *,
    category: str,
    title: str,
    slug: str | None = None,
    templates_dir: Path | None = None,
) -> Path:
    """Write a new topic file for ``title`` under ``category``.

    Parameters
    ----------
    site_config : SiteConfig
        Configuration naming the category directory and required sections.
    category : str
        Key of the target category.
    title : str
        Topic title; also the source of the slug when ``slug`` is omitted.
    slug : str, optional
        Explicit slug and file stem.
    templates_dir : Path, optional
        Directory holding ``topic.md.jinja``; defaults to the package templates.

    Returns
    -------
    Path
        Path of the created file.

    Raises
    ------
    SiteConfigError
        If ``category`` is not configured.
    ContentError
        If no slug can be derived from ``title``.
    DuplicateSlugError
        If the file already exists or another topic in ``category`` already
        uses the slug.
    """
    directory = site_config.category_dir(category)
    resolved_slug = slugify(slug or title)
    if not resolved_slug:
        msg = f"Cannot derive a slug from '{slug or title}'."
        raise ContentError(msg)

    path = directory / f"{resolved_slug}.md"
    existing = load_collection(site_config).store.find(resolved_slug, category)
    if path.exists() or existing is not None:
        raise DuplicateSlugError(category, resolved_slug)

    template = build_environment(templates_dir).get_template("topic.md.jinja")
    text = template.render(
        title=title.strip(),
        slug=resolved_slug,
        sections=site_config.sections_for(category),
    )
    directory.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


__all__ = ["scaffold_topic"]
