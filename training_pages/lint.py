"""Structural checks for topic documents.

Every topic follows the same teaching shape: a title, then Basics, Deep Dive,
Hands-on Exercises and Contribute sections in that order. Code samples should
carry a language tag Pygments knows, so the site renderer can highlight them.
These are warnings; broken links are handled by :mod:`training_pages.links`.
"""

from __future__ import annotations

import dataclasses as dc
import functools
import typing as typ

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .collection import ContentCollection
    from .models import TopicDocument


@dc.dataclass(slots=True, order=True)
class LintIssue:
    """A structural problem in one topic document."""

    category: str
    slug: str
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.category}/{self.slug}: [{self.code}] {self.message}"


@functools.lru_cache(maxsize=128)
def is_known_language(language: str) -> bool:
    """Return True when Pygments has a lexer registered under ``language``."""
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        return False
    return True


def _normalize(title: str) -> str:
    return " ".join(title.lower().replace("-", " ").split())


def lint_document(
    document: TopicDocument, required_sections: cabc.Sequence[str]
) -> list[LintIssue]:
    """Return every structural issue found in ``document``."""

    def issue(code: str, message: str) -> LintIssue:
        return LintIssue(document.category, document.slug, code, message)

    issues: list[LintIssue] = []
    if not document.title:
        issues.append(issue("missing-title", "No title in front matter or '# ' heading."))

    positions: dict[str, int] = {}
    for idx, section in enumerate(document.sections):
        positions.setdefault(_normalize(section.short_title), idx)

    found: list[tuple[int, str]] = []
    for required in required_sections:
        position = positions.get(_normalize(required))
        if position is None:
            issues.append(issue("missing-section", f"Missing '## {required}' section."))
        else:
            found.append((position, required))

    if [title for _, title in found] != [title for _, title in sorted(found)]:
        expected = ", ".join(title for _, title in found)
        issues.append(issue("section-order", f"Sections should appear as: {expected}."))

    for idx, sample in enumerate(document.code_samples, start=1):
        if sample.language and not is_known_language(sample.language):
            issues.append(
                issue(
                    "unknown-language",
                    f"Code sample {idx} uses unknown language '{sample.language}'.",
                )
            )
    return issues


def lint_collection(
    collection: ContentCollection,
    required_sections: cabc.Sequence[str],
    *,
    overrides: cabc.Mapping[str, cabc.Sequence[str]] | None = None,
) -> list[LintIssue]:
    """Return the issues of every document, in collection order.

    ``overrides`` maps a category key to the sections its topics need instead
    of ``required_sections``.
    """
    issues: list[LintIssue] = []
    for document in collection:
        sections = (overrides or {}).get(document.category, required_sections)
        issues.extend(lint_document(document, sections))
    return issues


__all__ = ["LintIssue", "is_known_language", "lint_collection", "lint_document"]
