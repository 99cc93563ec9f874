"""Async package-index client with bounded retries.

Two protocols are understood, picked by the index base URL:

- PyPI JSON API (``https://pypi.org/pypi``): ``GET {base}/{name}/json``.
- Simple Repository API (any base whose path ends in ``/simple``):
  ``GET {base}/{name}/``, PEP 691 JSON preferred, PEP 503 HTML accepted.
"""

from __future__ import annotations

import asyncio
from html.parser import HTMLParser
from typing import Any
from urllib.parse import unquote, urlsplit

import httpx
import structlog
from packaging.utils import (
    InvalidSdistFilename,
    InvalidWheelFilename,
    canonicalize_name,
    parse_sdist_filename,
    parse_wheel_filename,
)
from packaging.version import InvalidVersion

from pydepsync import __version__
from pydepsync.engine.models import IndexRelease

log = structlog.get_logger("pydepsync.engine")

DEFAULT_INDEX = "https://pypi.org/pypi"

_MAX_RETRIES = 3
_RETRY_BASE_DELAY = 0.5  # seconds
_NOT_FOUND = frozenset({404, 410})

_SIMPLE_ACCEPT = (
    "application/vnd.pypi.simple.v1+json, "
    "application/vnd.pypi.simple.v1+html;q=0.2, "
    "text/html;q=0.1"
)


class IndexUnavailableError(Exception):
    """Raised when an index keeps failing after all retries."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


def is_simple_index(index_url: str) -> bool:
    return urlsplit(index_url).path.rstrip("/").endswith("/simple")


class IndexClient:
    """Thin async wrapper around one or more package indexes."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_retries: int = _MAX_RETRIES,
        retry_base_delay: float = _RETRY_BASE_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._max_retries = max(1, max_retries)
        self._retry_base_delay = retry_base_delay
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": f"pydepsync/{__version__}"},
            transport=transport,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> IndexClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch(self, index_url: str, name: str) -> IndexRelease | None:
        """Query *index_url* for *name*.

        Returns None when the index does not know the package or lists no
        usable versions for it. Raises :class:`IndexUnavailableError` when
        the index keeps failing.
        """
        base = index_url.rstrip("/")
        project = canonicalize_name(name)
        if is_simple_index(index_url):
            url = f"{base}/{project}/"
            response = await self._request_with_retry(url, {"Accept": _SIMPLE_ACCEPT})
            if response is None:
                return None
            display_name, versions = self._parse_simple(response, name)
        else:
            url = f"{base}/{project}/json"
            response = await self._request_with_retry(url, {"Accept": "application/json"})
            if response is None:
                return None
            display_name, versions = self._parse_json_api(response, name)

        if not versions:
            log.debug("index.no_versions", index=index_url, package=name)
            return None
        return IndexRelease(name=display_name, versions=tuple(versions), index_url=index_url)

    # ── internal ───────────────────────────────────────────────────────────

    async def _request_with_retry(
        self,
        url: str,
        headers: dict[str, str],
    ) -> httpx.Response | None:
        """GET with exponential backoff; None on 404/410, response on 2xx."""
        reason = "no attempt made"
        for attempt in range(self._max_retries):
            try:
                resp = await self._client.get(url, headers=headers)
                if resp.status_code in _NOT_FOUND:
                    return None
                if resp.is_success:
                    return resp
                reason = f"HTTP {resp.status_code}"
                log.warning(
                    "index.server_error",
                    url=url,
                    status=resp.status_code,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.TimeoutException:
                reason = "timeout"
                log.warning(
                    "index.timeout",
                    url=url,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.RequestError as exc:
                # Also covers redirect loops and undecodable bodies.
                reason = f"request error: {exc!r}"
                log.warning(
                    "index.request_error",
                    url=url,
                    error=repr(exc),
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )

            if attempt < self._max_retries - 1:
                delay = self._retry_base_delay * (2**attempt)
                await asyncio.sleep(delay)

        raise IndexUnavailableError(url, reason)

    @staticmethod
    def _parse_json_api(response: httpx.Response, name: str) -> tuple[str, list[str]]:
        try:
            data = response.json()
        except ValueError as exc:
            raise IndexUnavailableError(str(response.url), f"malformed JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise IndexUnavailableError(str(response.url), "unexpected JSON shape")
        info = data.get("info") or {}
        releases = data.get("releases") or {}
        if not isinstance(info, dict) or not isinstance(releases, dict):
            raise IndexUnavailableError(str(response.url), "unexpected JSON shape")

        display_name = info.get("name")
        if not isinstance(display_name, str) or not display_name:
            display_name = name
        versions: list[str] = []
        for version, files in releases.items():
            if not isinstance(files, list) or not all(isinstance(f, dict) for f in files):
                raise IndexUnavailableError(str(response.url), "unexpected JSON shape")
            # Releases without files, or with every file yanked, are not installable.
            if any(not f.get("yanked", False) for f in files):
                versions.append(version)
        return display_name, versions

    @staticmethod
    def _parse_simple(response: httpx.Response, name: str) -> tuple[str, list[str]]:
        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type:
            try:
                data: Any = response.json()
            except ValueError as exc:
                raise IndexUnavailableError(
                    str(response.url), f"malformed JSON: {exc}"
                ) from exc
            files = data.get("files", []) if isinstance(data, dict) else None
            if not isinstance(files, list) or not all(isinstance(f, dict) for f in files):
                raise IndexUnavailableError(str(response.url), "unexpected JSON shape")
            filenames = [
                f["filename"]
                for f in files
                if isinstance(f.get("filename"), str) and not f.get("yanked", False)
            ]
        else:
            collector = _AnchorCollector()
            collector.feed(response.text)
            filenames = collector.filenames
        # The simple API only reports normalized names; keep the caller's spelling.
        return name, _versions_from_filenames(filenames)


class _AnchorCollector(HTMLParser):
    """Collects distribution filenames from a PEP 503 project page."""

    def __init__(self) -> None:
        super().__init__()
        self.filenames: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "a":
            return
        attributes = dict(attrs)
        if "data-yanked" in attributes:
            return
        href = attributes.get("href") or ""
        path = urlsplit(href).path
        if path:
            self.filenames.append(unquote(path.rsplit("/", 1)[-1]))


def _versions_from_filenames(filenames: list[str]) -> list[str]:
    versions: set[str] = set()
    for filename in filenames:
        try:
            if filename.endswith(".whl"):
                _, version, _, _ = parse_wheel_filename(filename)
            elif filename.endswith((".tar.gz", ".zip")):
                _, version = parse_sdist_filename(filename)
            else:
                continue
        except (InvalidWheelFilename, InvalidSdistFilename, InvalidVersion):
            continue
        versions.add(str(version))
    return sorted(versions)
