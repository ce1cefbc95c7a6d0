"""Typed dataclasses describing the training site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

DEFAULT_REQUIRED_SECTIONS = ("Basics", "Deep Dive", "Hands-on Exercises", "Contribute")


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class CategoryConfig:
    """One content category and the directory holding its topics.

    Attributes
    ----------
    key : str
        Identifier used in front matter and the navigation index.
    label : str
        Heading shown in navigation.
    directory : str
        POSIX path relative to the content root (``"."`` for the root).
    documents : list[str]
        Slugs listed first, in this order; remaining files follow.
    exclude : list[str]
        File names inside ``directory`` that are not topics.
    required_sections : list[str] or None
        Section titles every topic here must carry; ``None`` uses the site
        default.
    """

    key: str
    label: str
    directory: str
    documents: list[str] = dc.field(default_factory=list)
    exclude: list[str] = dc.field(default_factory=list)
    required_sections: list[str] | None = None


@dc.dataclass(slots=True)
class SampleProjectConfig:
    """Pointer to the out-of-repository sample project readers clone."""

    label: str
    url: str
    setup: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SiteConfig:
    """Resolved configuration for one training curriculum."""

    content_root: Path
    categories: dict[str, CategoryConfig]
    title: str = "Training"
    description: str = ""
    required_sections: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_REQUIRED_SECTIONS)
    )
    nav_output: Path = Path("build/nav.yml")
    index_output: Path = Path("docs/index.md")
    sample_project: SampleProjectConfig | None = None

    def get_category(self, key: str) -> CategoryConfig:
        """Return the category named ``key``.

        Raises
        ------
        SiteConfigError
            If no such category is configured.
        """
        try:
            return self.categories[key]
        except KeyError as exc:
            available = ", ".join(self.categories)
            msg = f"Unknown category '{key}'. Known categories: {available}"
            raise SiteConfigError(msg) from exc

    def sections_for(self, key: str) -> list[str]:
        """Return the required section titles for category ``key``."""
        category = self.get_category(key)
        if category.required_sections is None:
            return list(self.required_sections)
        return list(category.required_sections)

    def category_dir(self, key: str) -> Path:
        """Return the filesystem directory for category ``key``."""
        directory = self.get_category(key).directory
        if directory in {"", "."}:
            return self.content_root
        return self.content_root / directory


__all__ = [
    "DEFAULT_REQUIRED_SECTIONS",
    "CategoryConfig",
    "SampleProjectConfig",
    "SiteConfig",
    "SiteConfigError",
]
