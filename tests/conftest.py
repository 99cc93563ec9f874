"""Shared pytest fixtures for pydepsync tests.

Nothing here touches the network: registries are faked with
``httpx.MockTransport``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from packaging.utils import canonicalize_name

PYPI = "https://pypi.org/pypi"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


class FakeRegistry:
    """Routes index URLs to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[str] = []

    def add_json(
        self,
        base: str,
        name: str,
        versions: list[str],
        *,
        yanked: tuple[str, ...] = (),
        delay: float = 0.0,
    ) -> None:
        """Serve a PyPI JSON API document for *name* on *base*."""
        url = f"{base.rstrip('/')}/{canonicalize_name(name)}/json"
        body = {
            "info": {"name": name},
            "releases": {
                v: [{"filename": f"{name}-{v}.tar.gz", "yanked": v in yanked}]
                for v in versions
            },
        }
        self.routes[url] = lambda request: httpx.Response(200, json=body)
        self.delays[url] = delay

    def add_simple_json(self, base: str, name: str, filenames: list[str]) -> None:
        """Serve a PEP 691 JSON project page for *name* on *base*."""
        url = f"{base.rstrip('/')}/{canonicalize_name(name)}/"
        body = {
            "meta": {"api-version": "1.1"},
            "name": canonicalize_name(name),
            "files": [{"filename": f, "url": f"https://files.example/{f}"} for f in filenames],
        }
        self.routes[url] = lambda request: httpx.Response(
            200,
            json=body,
            headers={"Content-Type": "application/vnd.pypi.simple.v1+json"},
        )

    def add_status(self, url: str, status: int) -> None:
        self.routes[url] = lambda request: httpx.Response(status)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        delay = self.delays.get(url, 0.0)
        if delay:
            await asyncio.sleep(delay)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404)
        return route(request)


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Build a project tree from ``{relative path: contents}``."""

    def _make(files: dict[str, str], root_name: str = "proj") -> Path:
        root = tmp_path / root_name
        root.mkdir()
        for rel, contents in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(contents)
        return root

    return _make
