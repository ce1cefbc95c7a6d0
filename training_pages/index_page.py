"""Render the Markdown table of contents for the training curriculum.

The page lists every category and its topics in navigation order and ends with
the sample project pointer readers need before starting the exercises. It is
written next to the topics so the site renderer publishes it as the landing
page.

>>> from pathlib import Path
>>> from training_pages.config import load_site_config
>>> from training_pages.content_loader import load_collection
>>> from training_pages.index_page import IndexPageBuilder
>>> from training_pages.navigation import build
>>> site = load_site_config(Path("config/training.yaml"))  # doctest: +SKIP
>>> index = build(load_collection(site))  # doctest: +SKIP
>>> IndexPageBuilder(site).run(index)  # doctest: +SKIP
PosixPath('docs/index.md')
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .navigation import NavigationIndex

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


def build_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja environment used for Markdown templates."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir or DEFAULT_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class IndexPageBuilder:
    """Render the landing page that links to every topic document."""

    def __init__(
        self, site_config: SiteConfig, *, templates_dir: Path | None = None
    ) -> None:
        self.site_config = site_config
        self.env = build_environment(templates_dir)
        self.template = self.env.get_template("index.md.jinja")

    def render(self, index: NavigationIndex, output_path: Path | None = None) -> str:
        """Return the page text with links relative to ``output_path``."""
        target = output_path or self.site_config.index_output
        groups = []
        for key, entries in index.categories.items():
            if not entries:
                continue
            groups.append(
                {
                    "label": index.labels.get(key, key),
                    "entries": [
                        {
                            "title": entry.title,
                            "href": _relative_href(
                                self.site_config.content_root / entry.path,
                                target.parent,
                            ),
                        }
                        for entry in entries
                    ],
                }
            )
        return self.template.render(
            title=self.site_config.title,
            description=self.site_config.description,
            groups=groups,
            sample_project=self.site_config.sample_project,
        )

    def run(self, index: NavigationIndex, output_path: Path | None = None) -> Path:
        """Write the rendered page and return its path."""
        target = output_path or self.site_config.index_output
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(index, target), encoding="utf-8")
        return target


def _relative_href(target: Path, relative_to: Path) -> str:
    """Return the POSIX-relative path from ``relative_to`` to ``target``."""
    try:
        # os.path.relpath copes with targets outside ``relative_to``.
        rel_path = Path(os.path.relpath(target, start=relative_to))
    except ValueError:  # pragma: no cover - different drives
        return target.as_posix()
    return rel_path.as_posix()


__all__ = ["IndexPageBuilder", "build_environment"]
