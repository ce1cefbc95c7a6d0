"""Load training site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import (
    DEFAULT_REQUIRED_SECTIONS,
    CategoryConfig,
    SampleProjectConfig,
    SiteConfig,
    SiteConfigError,
)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the training content layout.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example
        ``config/training.yaml``). Relative paths inside the file resolve
        against the file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with categories in declaration order.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If no categories are defined or a field has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from training_pages.config import load_site_config
    >>> config = load_site_config(Path("config/training.yaml"))  # doctest: +SKIP
    >>> list(config.categories)  # doctest: +SKIP
    ['features', 'training-reference']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    categories_raw = raw.get("categories") or {}
    if not isinstance(categories_raw, dict) or not categories_raw:
        msg = "No categories defined in training configuration."
        raise SiteConfigError(msg)

    categories: dict[str, CategoryConfig] = {}
    for key, payload in categories_raw.items():
        match payload:
            case dict():
                categories[str(key)] = _build_category_config(str(key), payload)
            case None:
                categories[str(key)] = _build_category_config(str(key), {})
            case _:
                msg = f"Category '{key}' must be a mapping."
                raise SiteConfigError(msg)

    required = raw.get("required_sections", list(DEFAULT_REQUIRED_SECTIONS))
    if not isinstance(required, list):
        msg = "'required_sections' must be a list of section titles."
        raise SiteConfigError(msg)

    return SiteConfig(
        content_root=_resolve(base_dir, raw.get("content_root", "docs")),
        categories=categories,
        title=str(raw.get("title") or "Training"),
        description=str(raw.get("description") or ""),
        required_sections=[str(title) for title in required],
        nav_output=_resolve(base_dir, raw.get("nav_output", "build/nav.yml")),
        index_output=_resolve(base_dir, raw.get("index_output", "docs/index.md")),
        sample_project=_build_sample_project(raw.get("sample_project")),
    )


def _resolve(base_dir: Path, value: object) -> Path:
    """Return ``value`` as a path, anchored at ``base_dir`` when relative."""
    candidate = Path(str(value))
    if candidate.is_absolute():
        return candidate
    return (base_dir / candidate).resolve()


def _string_list(value: object, *, field: str, owner: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{field}' for '{owner}' must be a list."
        raise SiteConfigError(msg)
    return [str(item) for item in value]


def _build_category_config(
    key: str, payload: typ.Mapping[str, typ.Any]
) -> CategoryConfig:
    """Build a CategoryConfig from its YAML mapping, defaulting to the key."""
    label = payload.get("label") or key.replace("-", " ").title()
    directory = str(payload.get("directory", key)).strip("/") or "."
    sections = payload.get("required_sections")
    return CategoryConfig(
        key=key,
        label=str(label),
        directory=directory,
        documents=_string_list(payload.get("documents"), field="documents", owner=key),
        exclude=_string_list(payload.get("exclude"), field="exclude", owner=key),
        required_sections=(
            None
            if sections is None
            else _string_list(sections, field="required_sections", owner=key)
        ),
    )


def _build_sample_project(payload: object) -> SampleProjectConfig | None:
    """Return the sample project pointer, or None when not configured."""
    if not payload:
        return None
    if not isinstance(payload, dict) or not payload.get("url"):
        msg = "'sample_project' must be a mapping with a 'url'."
        raise SiteConfigError(msg)
    return SampleProjectConfig(
        label=str(payload.get("label") or "Sample project"),
        url=str(payload["url"]),
        setup=_string_list(payload.get("setup"), field="setup", owner="sample_project"),
    )


__all__ = ["load_site_config"]
