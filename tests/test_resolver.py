"""Tests for ordered multi-index resolution."""

from __future__ import annotations

import httpx
import pytest

from pydepsync.diagnostics import RESOLUTION_MISS, TRANSIENT_NETWORK
from pydepsync.engine.index_client import DEFAULT_INDEX, IndexClient
from pydepsync.engine.resolver import PackageResolver, build_index_list

PYPI = DEFAULT_INDEX
MIRROR = "https://mirror.example/pypi"
PRIVATE = "https://private.example/pypi"


class TestBuildIndexList:
    def test_default_first(self):
        assert build_index_list(None, [MIRROR]) == [PYPI, MIRROR]

    def test_preferred_replaces_default(self):
        assert build_index_list(PRIVATE, [MIRROR]) == [PRIVATE, MIRROR]

    def test_duplicates_dropped_in_order(self):
        assert build_index_list(None, [MIRROR, PYPI + "/", MIRROR]) == [PYPI, MIRROR]


def _resolver(transport: httpx.AsyncBaseTransport, **kwargs) -> tuple[IndexClient, PackageResolver]:
    client = IndexClient(transport=transport, retry_base_delay=0.0, max_retries=2)
    return client, PackageResolver(client, **kwargs)


@pytest.mark.anyio
class TestResolve:
    async def test_resolves_from_default(self, registry):
        registry.add_json(PYPI, "Django", ["4.2.0", "5.1.6", "5.2a1"])
        client, resolver = _resolver(registry.transport())
        async with client:
            package, diags = await resolver.resolve("django")
        assert package is not None
        assert package.requirement == "Django~=5.1.6"
        assert package.index_url == PYPI
        assert diags == []

    async def test_falls_back_to_next_index(self, registry):
        registry.add_json(MIRROR, "internal-tool", ["0.3.1"])
        client, resolver = _resolver(registry.transport(), extra_indexes=[MIRROR])
        async with client:
            package, diags = await resolver.resolve("internal-tool")
        assert package is not None
        assert package.index_url == MIRROR
        assert registry.calls == [
            f"{PYPI}/internal-tool/json",
            f"{MIRROR}/internal-tool/json",
        ]
        assert diags == []

    async def test_earlier_index_wins_even_when_slower(self, registry):
        registry.add_json(PYPI, "pkg", ["1.0"], delay=0.05)
        registry.add_json(MIRROR, "pkg", ["9.9"])
        client, resolver = _resolver(registry.transport(), extra_indexes=[MIRROR])
        async with client:
            package, _ = await resolver.resolve("pkg")
        assert package is not None
        assert package.version == "1.0"
        assert package.index_url == PYPI
        # Mirror never consulted once the first index answered.
        assert registry.calls == [f"{PYPI}/pkg/json"]

    async def test_unavailable_index_is_skipped_with_diagnostic(self, registry):
        registry.add_status(f"{PYPI}/pkg/json", 503)
        registry.add_json(MIRROR, "pkg", ["2.0"])
        client, resolver = _resolver(registry.transport(), extra_indexes=[MIRROR])
        async with client:
            package, diags = await resolver.resolve("pkg")
        assert package is not None
        assert package.index_url == MIRROR
        assert [d.kind for d in diags] == [TRANSIENT_NETWORK]

    async def test_miss_everywhere(self, registry):
        client, resolver = _resolver(registry.transport(), extra_indexes=[MIRROR])
        async with client:
            package, diags = await resolver.resolve("ghost")
        assert package is None
        assert [d.kind for d in diags] == [RESOLUTION_MISS]
        assert diags[0].subject == "ghost"

    async def test_index_with_only_invalid_versions_falls_through(self, registry):
        registry.add_json(PYPI, "pkg", ["not-a-version"])
        registry.add_json(MIRROR, "pkg", ["1.4"])
        client, resolver = _resolver(registry.transport(), extra_indexes=[MIRROR])
        async with client:
            package, _ = await resolver.resolve("pkg")
        assert package is not None
        assert package.index_url == MIRROR


@pytest.mark.anyio
class TestResolveAll:
    async def test_sorted_and_deduplicated(self, registry):
        registry.add_json(PYPI, "requests", ["2.32.3"])
        registry.add_json(PYPI, "Django", ["5.1.6"])
        client, resolver = _resolver(registry.transport())
        async with client:
            resolved, diags = await resolver.resolve_all(["requests", "django", "Django"])
        assert [p.requirement for p in resolved] == ["Django~=5.1.6", "requests~=2.32.3"]
        assert diags == []
        assert len(registry.calls) == 2

    async def test_outcomes_cached_per_canonical_name(self, registry):
        registry.add_json(PYPI, "Foo-Bar", ["1.0"])
        client, resolver = _resolver(registry.transport())
        async with client:
            first, _ = await resolver.resolve("foo_bar")
            second, _ = await resolver.resolve("Foo.Bar")
        assert first == second
        assert len(registry.calls) == 1

    async def test_partial_results_with_misses(self, registry):
        registry.add_json(PYPI, "numpy", ["2.1.0"])
        client, resolver = _resolver(registry.transport(), max_workers=1)
        async with client:
            resolved, diags = await resolver.resolve_all(["numpy", "missing-one"])
        assert [p.name for p in resolved] == ["numpy"]
        assert [d.subject for d in diags] == ["missing-one"]
