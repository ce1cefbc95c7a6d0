"""Shared fixtures for building throwaway training sites on disk.

``make_site`` writes a ``training.yaml`` plus topic files under ``tmp_path``
and returns the config path; ``topic_text`` renders a topic with every
required section so tests only spell out what they care about.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

REQUIRED = ("Basics", "Deep Dive", "Hands-on Exercises", "Contribute")


def _render_topic(
    title: str,
    *,
    links: cabc.Sequence[str] = (),
    front_matter: str = "",
    sections: cabc.Sequence[str] = REQUIRED,
) -> str:
    lines: list[str] = []
    if front_matter:
        lines += ["---", front_matter.strip(), "---", ""]
    lines += [f"# {title}", ""]
    for section in sections:
        lines += [f"## {section}", "", f"{section} material for {title}.", ""]
    for idx, href in enumerate(links, start=1):
        lines += [f"See [link {idx}]({href}).", ""]
    return "\n".join(lines)


@pytest.fixture
def topic_text() -> cabc.Callable[..., str]:
    """Return a helper that renders a topic with the standard sections."""
    return _render_topic


@pytest.fixture
def make_site(tmp_path: Path) -> cabc.Callable[..., Path]:
    """Return a factory writing a training config and topic files.

    The factory accepts a mapping of content-root-relative paths to file
    contents and an optional ``documents`` list for the features category.
    """

    def _make(
        files: cabc.Mapping[str, str],
        *,
        documents: cabc.Sequence[str] = (),
    ) -> Path:
        docs_root = tmp_path / "docs"
        for relative, text in files.items():
            target = docs_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        listed = "".join(f"      - {slug}\n" for slug in documents)
        documents_block = f"    documents:\n{listed}" if documents else ""
        config_path = tmp_path / "training.yaml"
        template = dedent(
            """\
            title: Test Training
            content_root: docs
            nav_output: build/nav.yml
            index_output: docs/index.md
            sample_project:
              label: Sample project
              url: https://example.invalid/todo
              setup:
                - git clone https://example.invalid/todo.git
            categories:
              features:
                label: Framework Features
                directory: features
            @DOCUMENTS@  training-reference:
                label: Training Reference
                directory: reference
                required_sections: []
            """
        )
        config_path.write_text(
            template.replace("@DOCUMENTS@", documents_block), encoding="utf-8"
        )
        return config_path

    return _make
