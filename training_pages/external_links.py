"""Probe the external URLs topic documents link to.

Training material points readers at framework documentation, the sample
project repository, and assorted articles. :class:`ExternalLinkChecker` issues
one request per distinct URL (HEAD first, GET when the server refuses HEAD)
and reports every failure at once. It never runs as part of the default build
because it needs the network.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

if typ.TYPE_CHECKING:
    from .collection import ContentCollection

CHECKED_SCHEMES = ("http://", "https://")
_HEAD_REFUSED = {HTTPStatus.METHOD_NOT_ALLOWED, HTTPStatus.NOT_IMPLEMENTED}


@dc.dataclass(slots=True, frozen=True, order=True)
class ExternalLinkFailure:
    """An external URL that could not be fetched.

    Attributes
    ----------
    source : str
        Slug of the document containing the link.
    url : str
        The URL as written.
    reason : str
        HTTP status or transport error description.
    """

    source: str
    url: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}: {self.url} ({self.reason})"


def _build_session() -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=3,
        read=3,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class ExternalLinkChecker:
    """Check external links with caching per URL."""

    def __init__(
        self, *, session: requests.Session | None = None, timeout: float = 15.0
    ) -> None:
        """Initialise the checker.

        Parameters
        ----------
        session : requests.Session, optional
            Session to reuse; a retrying session is built when ``None``.
        timeout : float, optional
            Per-request timeout in seconds.
        """
        self._session = session
        self.timeout = timeout
        self._cache: dict[str, str | None] = {}

    @property
    def session(self) -> requests.Session:
        """Return the HTTP session, building it on first use."""
        if self._session is None:
            self._session = _build_session()
        return self._session

    def probe(self, url: str) -> str | None:
        """Return a failure reason for ``url`` or ``None`` when it responds."""
        if url in self._cache:
            return self._cache[url]
        reason: str | None
        try:
            resp = self.session.head(url, timeout=self.timeout, allow_redirects=True)
            if resp.status_code in _HEAD_REFUSED:
                resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            resp.raise_for_status()
            reason = None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "error"
            reason = f"HTTP {status}"
        except requests.RequestException as exc:
            reason = type(exc).__name__
        self._cache[url] = reason
        return reason

    def check(self, collection: ContentCollection) -> list[ExternalLinkFailure]:
        """Return every failing external link in ``collection``, sorted."""
        failures: set[ExternalLinkFailure] = set()
        for document in collection:
            for link in document.external_links():
                if not link.href.lower().startswith(CHECKED_SCHEMES):
                    continue
                reason = self.probe(link.href)
                if reason is not None:
                    failures.add(ExternalLinkFailure(document.slug, link.href, reason))
        return sorted(failures)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._session is not None:
            self._session.close()


__all__ = ["ExternalLinkChecker", "ExternalLinkFailure"]
