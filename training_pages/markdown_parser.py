r"""Parse topic Markdown files into :class:`~training_pages.models.TopicDocument`.

A topic file is UTF-8 Markdown with optional YAML front matter, a ``# Title``
heading, and ``##`` sections that conventionally read Basics, Deep Dive,
Hands-on Exercises, and Contribute. Code samples are collected verbatim and
links are read from the rendered Markdown tree, so a link written inside a
code sample is never mistaken for a cross-reference.

Example
-------
>>> from training_pages.markdown_parser import parse_topic
>>> doc = parse_topic("# Signals\n\n## Basics\nSee [views](views.md).\n",
...                   category="features", default_slug="signals")
>>> doc.title, doc.sections[0].slug, doc.links[0].href
('Signals', 'basics', 'views.md')
"""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown
from markdown.extensions import Extension
from markdown.extensions.toc import slugify as toc_slugify
from markdown.extensions.toc import unique
from markdown.treeprocessors import Treeprocessor
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._slugs import strip_numbering
from .errors import TopicParseError
from .models import CodeSample, DocumentLink, TopicDocument, TopicSection

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

TITLE_PATTERN = re.compile(r"^#[ \t]+(.*)", re.MULTILINE)
SECTION_PATTERN = re.compile(r"^##[ \t]+(.*)", re.MULTILINE)
CLOSING_HASHES = re.compile(r"\s+#+$")
CODE_BLOCK_PATTERN = re.compile(
    r"(?P<fence>`{3,}|~{3,})(?P<language>[A-Za-z0-9_+#.-]+)?[^\n]*\n(?P<code>.*?)(?P=fence)",
    re.DOTALL,
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


class LinkCollectorExtension(Extension):
    """Record every anchor element produced while converting Markdown."""

    def __init__(self, sink: list[DocumentLink]) -> None:
        super().__init__()
        self.sink = sink

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link-collecting treeprocessor on the Markdown instance."""
        processor = LinkCollectorTreeprocessor(md, self.sink)
        md.treeprocessors.register(processor, "training_link_collector", 15)


class LinkCollectorTreeprocessor(Treeprocessor):
    """Append ``<a href>`` targets from the parsed tree to a shared list."""

    def __init__(self, md: Markdown, sink: list[DocumentLink]) -> None:
        super().__init__(md)
        self.sink = sink

    def run(self, root: Element) -> None:
        """Collect anchors without modifying the tree."""
        for element in root.iter("a"):
            href = element.get("href")
            if not href:
                continue
            text = "".join(element.itertext()).strip()
            self.sink.append(DocumentLink(href=href, text=text))


def split_front_matter(
    text: str, *, path: str | None = None
) -> tuple[dict[str, typ.Any], str]:
    """Return the front matter mapping and the remaining Markdown body.

    Raises
    ------
    TopicParseError
        If the front matter is not valid YAML or not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group(1))
    except YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise TopicParseError(msg, path) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping."
        raise TopicParseError(msg, path)
    return dict(loaded), text[match.end() :]


def normalize_fences(text: str) -> str:
    """Unindent list-nested fences and drop ``lang,extra`` fence labels."""
    without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

    def _strip_labels(match: re.Match[str]) -> str:
        fence, language, _extras = match.groups()
        return f"{fence}{language or ''}"

    return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _code_spans(text: str) -> list[tuple[int, int]]:
    return [match.span() for match in CODE_BLOCK_PATTERN.finditer(text)]


def _outside(spans: list[tuple[int, int]], position: int) -> bool:
    return not any(start <= position < end for start, end in spans)


def _clean_heading(text: str) -> str:
    """Return a cleaned heading, removing escapes, closing hashes and whitespace."""
    return CLOSING_HASHES.sub("", text.replace("\\", "").strip()).strip()


def parse_title(body: str) -> str | None:
    """Return the first level-one heading outside code samples."""
    spans = _code_spans(body)
    for match in TITLE_PATTERN.finditer(body):
        if _outside(spans, match.start()):
            return _clean_heading(match.group(1)) or None
    return None


def parse_sections(body: str) -> list[TopicSection]:
    """Split Markdown into ordered second-level sections.

    Headings inside fenced code samples are ignored. Slugs use the same rules
    as the ids the ``toc`` extension gives rendered headings. Returns an empty
    list when no ``##`` heading is present.
    """
    spans = _code_spans(body)
    entries = [m for m in SECTION_PATTERN.finditer(body) if _outside(spans, m.start())]
    sections: list[TopicSection] = []
    used_slugs: set[str] = set()
    for idx, match in enumerate(entries):
        start = match.end()
        end = entries[idx + 1].start() if idx + 1 < len(entries) else len(body)
        heading = _clean_heading(match.group(1))
        short_title = strip_numbering(heading) or heading
        slug = unique(toc_slugify(heading, "-"), used_slugs)
        sections.append(
            TopicSection(
                title=heading,
                short_title=short_title,
                slug=slug,
                markdown=body[start:end].strip(),
            )
        )
    return sections


def parse_code_samples(body: str) -> list[CodeSample]:
    """Return fenced code samples in document order."""
    return [
        CodeSample(language=match["language"], code=match["code"].rstrip("\n"))
        for match in CODE_BLOCK_PATTERN.finditer(body)
    ]


def _heading_ids(tokens: list[dict[str, typ.Any]]) -> list[str]:
    ids: list[str] = []
    for token in tokens:
        ids.append(token["id"])
        ids.extend(_heading_ids(token["children"]))
    return ids


def scan_rendered(body: str) -> tuple[list[DocumentLink], list[str]]:
    """Render ``body`` and return its hyperlinks and heading ids.

    Heading ids come from the ``toc`` extension, so they are the anchors a
    site renderer using Python-Markdown produces for every heading level.
    """
    links: list[DocumentLink] = []
    md = Markdown(
        extensions=[
            "fenced_code",
            "tables",
            "sane_lists",
            "toc",
            LinkCollectorExtension(links),
        ]
    )
    md.convert(body)
    return links, _heading_ids(md.toc_tokens)  # type: ignore[attr-defined]


def parse_links(body: str) -> list[DocumentLink]:
    """Return every hyperlink in the rendered Markdown, in document order."""
    links, _ids = scan_rendered(body)
    return links


def parse_topic(
    text: str,
    *,
    category: str,
    path: str | None = None,
    default_slug: str | None = None,
) -> TopicDocument:
    """Parse a topic file into a :class:`TopicDocument`.

    Parameters
    ----------
    text : str
        Raw file contents, optionally starting with ``---`` front matter.
    category : str
        Category key the document belongs to.
    path : str, optional
        Content-root-relative POSIX path, recorded on the document and used in
        error messages.
    default_slug : str, optional
        Slug used when the front matter does not set one (normally the file
        stem).

    Returns
    -------
    TopicDocument
        The parsed document.

    Raises
    ------
    TopicParseError
        If the front matter is malformed, ``order`` is not an integer, or no
        slug can be determined.
    """
    meta, raw_body = split_front_matter(text, path=path)
    body = normalize_fences(raw_body)

    slug = str(meta.get("slug") or default_slug or "").strip()
    if not slug:
        msg = "Topic has no slug."
        raise TopicParseError(msg, path)

    title = str(meta.get("title") or "").strip() or parse_title(body)
    order = meta.get("order")
    if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
        msg = f"Front matter 'order' must be an integer, got {order!r}."
        raise TopicParseError(msg, path)

    links, heading_ids = scan_rendered(body)
    return TopicDocument(
        title=title or "",
        slug=slug,
        category=category,
        body=body,
        sections=parse_sections(body),
        code_samples=parse_code_samples(body),
        links=links,
        heading_ids=heading_ids,
        path=path,
        order=order,
    )


__all__ = [
    "CODE_BLOCK_PATTERN",
    "LinkCollectorExtension",
    "normalize_fences",
    "parse_code_samples",
    "parse_links",
    "parse_sections",
    "parse_title",
    "parse_topic",
    "scan_rendered",
    "split_front_matter",
]
