"""Tests for the external link checker using an in-memory HTTP session."""

from __future__ import annotations

import requests

from training_pages.collection import ContentCollection
from training_pages.external_links import ExternalLinkChecker, ExternalLinkFailure
from training_pages.models import DocumentLink, TopicDocument


class _FakeResponse:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}", response=self)  # type: ignore[arg-type]


class _FakeSession:
    """Record requests and answer from a fixed status table."""

    def __init__(
        self,
        head: dict[str, int],
        get: dict[str, int] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.head_status = head
        self.get_status = get or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def head(self, url: str, **_: object) -> _FakeResponse:
        self.calls.append(("HEAD", url))
        if url in self.errors:
            raise self.errors[url]
        return _FakeResponse(self.head_status.get(url, 200))

    def get(self, url: str, **_: object) -> _FakeResponse:
        self.calls.append(("GET", url))
        return _FakeResponse(self.get_status.get(url, 200))

    def close(self) -> None:
        self.closed = True


def _collection(*hrefs_by_slug: tuple[str, list[str]]) -> ContentCollection:
    collection = ContentCollection()
    for slug, hrefs in hrefs_by_slug:
        collection.add(
            TopicDocument(
                title=slug.title(),
                slug=slug,
                category="features",
                links=[DocumentLink(href) for href in hrefs],
            )
        )
    return collection


def test_failures_are_reported_sorted() -> None:
    """Every failing URL is listed with its source and reason."""
    session = _FakeSession(
        head={"https://gone.invalid/": 404, "https://ok.invalid/": 200},
        errors={"https://down.invalid/": requests.ConnectionError("refused")},
    )
    collection = _collection(
        ("signals", ["https://ok.invalid/", "https://gone.invalid/"]),
        ("messages", ["https://down.invalid/", "views.md"]),
    )
    checker = ExternalLinkChecker(session=session)  # type: ignore[arg-type]
    assert checker.check(collection) == [
        ExternalLinkFailure("messages", "https://down.invalid/", "ConnectionError"),
        ExternalLinkFailure("signals", "https://gone.invalid/", "HTTP 404"),
    ]


def test_head_refusal_falls_back_to_get() -> None:
    """Servers that reject HEAD are retried with GET."""
    url = "https://docs.example.invalid/signals/"
    session = _FakeSession(head={url: 405}, get={url: 200})
    checker = ExternalLinkChecker(session=session)  # type: ignore[arg-type]
    assert checker.probe(url) is None
    assert session.calls == [("HEAD", url), ("GET", url)]


def test_each_url_is_requested_once() -> None:
    """Repeated links across documents share one request."""
    url = "https://docs.example.invalid/"
    session = _FakeSession(head={})
    collection = _collection(("signals", [url]), ("messages", [url, url]))
    checker = ExternalLinkChecker(session=session)  # type: ignore[arg-type]
    assert checker.check(collection) == []
    assert session.calls == [("HEAD", url)]


def test_non_http_schemes_are_skipped() -> None:
    """mailto and similar links are never requested."""
    session = _FakeSession(head={})
    collection = _collection(("signals", ["mailto:team@example.invalid"]))
    checker = ExternalLinkChecker(session=session)  # type: ignore[arg-type]
    assert checker.check(collection) == []
    assert session.calls == []
    checker.close()
    assert session.closed


def test_failure_str_names_source_and_reason() -> None:
    """The printed form is what the check command reports."""
    failure = ExternalLinkFailure("signals", "https://gone.invalid/", "HTTP 404")
    assert str(failure) == "signals: https://gone.invalid/ (HTTP 404)"
