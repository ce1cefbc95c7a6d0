"""Cyclopts CLI entrypoint for validating and indexing the training content.

The ``training-pages`` console script loads ``config/training.yaml``, reads
every topic document, and either checks the collection (broken internal
links, section structure, optionally external URLs) or writes the navigation
manifest and landing page the static site renderer consumes. Typical usage is
``training-pages check`` in CI and ``training-pages nav`` before publishing.

Examples
--------
Validate the default configuration:

>>> from training_pages.cli import main
>>> main()  # doctest: +SKIP

Build the navigation files into a custom location:

>>> from training_pages.cli import app
>>> app(["nav", "--nav-output", "site/nav.yml"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import SiteConfigError, load_site_config
from .content_loader import load_collection
from .errors import BrokenLinkError, ContentError
from .external_links import ExternalLinkChecker
from .index_page import IndexPageBuilder
from .lint import lint_collection
from .links import validate
from .navigation import build
from .scaffold import scaffold_topic

if typ.TYPE_CHECKING:
    from .collection import ContentCollection
    from .config import SiteConfig
    from .external_links import ExternalLinkFailure

DEFAULT_CONFIG = Path("config/training.yaml")

app = App(name="training-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _abort(exc: Exception) -> typ.NoReturn:
    """Print ``exc`` as an error line and exit with status 1."""
    print(f"error: {exc}")
    raise SystemExit(1) from exc


def _load(config: Path) -> tuple[SiteConfig, ContentCollection]:
    """Load the configuration and collection, exiting 1 on content errors."""
    try:
        site_config = load_site_config(config)
        return site_config, load_collection(site_config)
    except (ContentError, SiteConfigError) as exc:
        _abort(exc)


@app.command(help="Check internal links and topic structure.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to training config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    strict: typ.Annotated[
        bool, Parameter(help="Treat structure warnings as errors")
    ] = False,
    external: typ.Annotated[
        bool, Parameter(help="Also request every external http(s) link")
    ] = False,
) -> None:
    """Report every problem in the collection in one pass.

    Parameters
    ----------
    config : Path, optional
        Path to the training configuration file.
    strict : bool, optional
        Fail on structure warnings as well as broken links.
    external : bool, optional
        Probe external URLs over the network.

    Returns
    -------
    None
        Problems are printed to stdout.

    Raises
    ------
    SystemExit
        With status 1 when any blocking problem was found.
    """
    site_config, collection = _load(config)

    broken = sorted(validate(collection))
    for link in broken:
        print(f"broken link: {link.source} -> {link.target}")

    issues = lint_collection(
        collection,
        site_config.required_sections,
        overrides={key: site_config.sections_for(key) for key in site_config.categories},
    )
    for issue in issues:
        print(f"warning: {issue}")

    failures: list[ExternalLinkFailure] = []
    if external:
        checker = ExternalLinkChecker()
        try:
            failures = checker.check(collection)
        finally:
            checker.close()
        for failure in failures:
            print(f"external link failed: {failure}")

    blocking = bool(broken) or bool(failures) or (strict and bool(issues))
    print(
        f"checked {len(collection)} topics: {len(broken)} broken links, "
        f"{len(issues)} warnings"
        + (f", {len(failures)} external failures" if external else "")
    )
    if blocking:
        raise SystemExit(1)


@app.command(help="Write the navigation manifest and the index page.")
def nav(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to training config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    nav_output: typ.Annotated[
        Path | None,
        Parameter(help="Override the manifest path", env_var="INPUT_NAV_OUTPUT"),
    ] = None,
    index_output: typ.Annotated[
        Path | None,
        Parameter(help="Override the index page path", env_var="INPUT_INDEX_OUTPUT"),
    ] = None,
) -> None:
    """Build the navigation index and write both navigation artifacts.

    Raises
    ------
    SystemExit
        With status 1 when internal links are broken; nothing is written.
    """
    site_config, collection = _load(config)
    try:
        index = build(collection)
    except BrokenLinkError as exc:
        for link in exc.broken:
            print(f"broken link: {link.source} -> {link.target}")
        raise SystemExit(1) from exc

    manifest_path = index.write(nav_output or site_config.nav_output)
    print(f"wrote {_format_path(manifest_path)}")
    index_path = IndexPageBuilder(site_config).run(index, index_output)
    print(f"wrote {_format_path(index_path)}")


@app.command(help="List topic documents per category.")
def topics(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to training config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    category: typ.Annotated[
        str | None, Parameter(help="Only list this category")
    ] = None,
) -> None:
    """Print each category label followed by its topics in authoring order."""
    site_config, collection = _load(config)
    keys = list(collection.categories)
    if category:
        try:
            keys = [site_config.get_category(category).key]
        except SiteConfigError as exc:
            _abort(exc)
    for key in keys:
        print(f"{collection.label_for(key)}:")
        for document in collection.documents(key):
            print(f"  {document.slug}: {document.title}")


@app.command(help="Create a new topic file with the standard sections.")
def new(
    *,
    category: typ.Annotated[str, Parameter(help="Category key")],
    title: typ.Annotated[str, Parameter(help="Topic title")],
    slug: typ.Annotated[str | None, Parameter(help="Explicit slug")] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to training config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Scaffold a topic document and print its path."""
    try:
        site_config = load_site_config(config)
        path = scaffold_topic(site_config, category=category, title=title, slug=slug)
    except (ContentError, SiteConfigError) as exc:
        _abort(exc)
    print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``training-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
