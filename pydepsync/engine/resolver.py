"""Multi-index package resolution with ordered fallback."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import structlog
from packaging.utils import canonicalize_name

from pydepsync.diagnostics import RESOLUTION_MISS, TRANSIENT_NETWORK, Diagnostic
from pydepsync.engine.index_client import DEFAULT_INDEX, IndexClient, IndexUnavailableError
from pydepsync.engine.models import ResolvedPackage
from pydepsync.engine.versions import compatible_specifier, select_version

log = structlog.get_logger("pydepsync.engine")

_Outcome = tuple[ResolvedPackage | None, list[Diagnostic]]


def build_index_list(
    preferred_index: str | None = None,
    extra_indexes: Iterable[str] = (),
) -> list[str]:
    """Preferred index (or the default one) first, then extras in listed order."""
    ordered = [preferred_index or DEFAULT_INDEX, *extra_indexes]
    indexes: list[str] = []
    seen: set[str] = set()
    for url in ordered:
        key = url.rstrip("/")
        if key and key not in seen:
            seen.add(key)
            indexes.append(url)
    return indexes


class PackageResolver:
    """Resolves distribution names against an ordered list of indexes.

    Different names resolve concurrently (bounded by *max_workers*); the
    indexes for one name are always tried one after another, in order, so
    an earlier index wins regardless of response latency. Outcomes are
    cached per canonical name for the lifetime of the resolver.
    """

    def __init__(
        self,
        client: IndexClient,
        *,
        preferred_index: str | None = None,
        extra_indexes: Iterable[str] = (),
        max_workers: int = 8,
    ) -> None:
        self._client = client
        self.indexes = build_index_list(preferred_index, extra_indexes)
        self._sem = asyncio.Semaphore(max(1, max_workers))
        self._cache: dict[str, asyncio.Future[_Outcome]] = {}

    async def resolve(self, name: str) -> _Outcome:
        key = canonicalize_name(name)
        pending = self._cache.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._resolve_in_order(name))
            self._cache[key] = pending
        return await pending

    async def resolve_all(
        self, names: Iterable[str]
    ) -> tuple[list[ResolvedPackage], list[Diagnostic]]:
        """Resolve every name; results come back sorted by canonical name."""
        unique: dict[str, str] = {}
        for name in names:
            unique.setdefault(canonicalize_name(name), name)
        ordered = [unique[key] for key in sorted(unique)]

        outcomes = await asyncio.gather(*(self.resolve(name) for name in ordered))

        resolved: list[ResolvedPackage] = []
        diagnostics: list[Diagnostic] = []
        for package, diags in outcomes:
            if package is not None:
                resolved.append(package)
            diagnostics.extend(diags)
        return resolved, diagnostics

    async def _resolve_in_order(self, name: str) -> _Outcome:
        diagnostics: list[Diagnostic] = []
        async with self._sem:
            for index_url in self.indexes:
                try:
                    release = await self._client.fetch(index_url, name)
                except IndexUnavailableError as exc:
                    diagnostics.append(
                        Diagnostic(
                            TRANSIENT_NETWORK,
                            name,
                            f"index {index_url} unavailable ({exc.reason}), trying next",
                        )
                    )
                    continue

                if release is None:
                    log.debug("resolver.index_miss", package=name, index=index_url)
                    continue

                version = select_version(release.versions)
                if version is None:
                    log.debug("resolver.no_valid_versions", package=name, index=index_url)
                    continue

                package = ResolvedPackage(
                    name=release.name,
                    version=str(version),
                    specifier=compatible_specifier(version),
                    index_url=index_url,
                )
                log.debug(
                    "resolver.found",
                    package=package.name,
                    version=package.version,
                    index=index_url,
                )
                return package, diagnostics

        diagnostics.append(
            Diagnostic(
                RESOLUTION_MISS,
                name,
                f"not found on any index ({', '.join(self.indexes)})",
            )
        )
        return None, diagnostics
