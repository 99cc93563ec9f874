"""DetectEngine — scan, extract, filter, remap, resolve."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import structlog
from packaging.utils import canonicalize_name

from pydepsync.diagnostics import Diagnostic, Diagnostics
from pydepsync.engine.evaluator import DependencyEvaluator
from pydepsync.engine.extractor import candidate_names, extract_imports
from pydepsync.engine.index_client import IndexClient
from pydepsync.engine.models import DetectResult, ResolvedPackage
from pydepsync.engine.resolver import PackageResolver
from pydepsync.engine.scanner import DEFAULT_EXCLUDE_DIRS, PythonFileFinder, load_source
from pydepsync.engine.stdlib import parse_python_version
from pydepsync.exceptions import ConfigError

log = structlog.get_logger("pydepsync.engine")


@dataclass
class EngineOptions:
    """Already-merged settings the engine runs with."""

    exclude_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    extra_indexes: list[str] = field(default_factory=list)
    preferred_index: str | None = None
    remap: dict[str, str] = field(default_factory=dict)
    source_roots: list[str] = field(default_factory=lambda: ["src"])
    python_version: str | None = None
    max_workers: int = 8
    timeout: float = 10.0
    max_retries: int = 3


class DetectEngine:
    """Runs the detection pipeline for one project tree.

    *transport* and *retry_base_delay* are passed through to the
    :class:`IndexClient`; tests use them to fake registries.
    """

    def __init__(
        self,
        options: EngineOptions | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        retry_base_delay: float | None = None,
    ) -> None:
        self.options = options or EngineOptions()
        self._transport = transport
        self._retry_base_delay = retry_base_delay
        try:
            python_version = parse_python_version(self.options.python_version)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        self.finder = PythonFileFinder(self.options.exclude_dirs)
        self.evaluator = DependencyEvaluator(
            user_remap=self.options.remap,
            python_version=python_version,
        )

    async def detect(
        self,
        root: Path,
        existing: Iterable[str] = (),
    ) -> DetectResult:
        """Find third-party imports under *root* and resolve them.

        Distribution names in *existing* (any spelling) are never queried.
        Raises :class:`~pydepsync.exceptions.ProjectRootError` if *root*
        cannot be read; every other problem lands in the result's diagnostics.
        """
        diagnostics = Diagnostics()

        log.info("engine.scanning", root=str(root))
        files = self.finder.find_files(root, diagnostics)

        log.info("engine.parsing", files=len(files))
        names = await self._collect_imports(files, diagnostics)

        local_modules = self.finder.find_local_modules(root, self.options.source_roots, files)
        candidates = self.evaluator.evaluate(names, local_modules)
        log.debug("engine.candidates", candidates=candidates)

        declared = {canonicalize_name(n) for n in existing}
        to_resolve = sorted(
            {dist for dist in candidates.values() if canonicalize_name(dist) not in declared}
        )

        log.info("engine.resolving", packages=len(to_resolve))
        resolved: list[ResolvedPackage] = []
        if to_resolve:
            async with self._make_client() as client:
                resolver = PackageResolver(
                    client,
                    preferred_index=self.options.preferred_index,
                    extra_indexes=self.options.extra_indexes,
                    max_workers=self.options.max_workers,
                )
                resolved, resolve_diags = await resolver.resolve_all(to_resolve)
            diagnostics.extend(resolve_diags)

        return DetectResult(
            resolved=resolved,
            candidates=set(candidates),
            diagnostics=diagnostics,
        )

    async def _collect_imports(self, files: list[Path], diagnostics: Diagnostics) -> set[str]:
        """Read and parse files in a bounded worker pool, then merge in one place."""
        sem = asyncio.Semaphore(max(1, self.options.max_workers))

        async def _one(path: Path) -> tuple[set[str], list[Diagnostic]]:
            async with sem:
                return await asyncio.to_thread(_parse_file, path)

        results = await asyncio.gather(*(_one(path) for path in files))

        names: set[str] = set()
        for file_names, file_diags in results:
            names |= file_names
            diagnostics.extend(file_diags)
        return names

    def _make_client(self) -> IndexClient:
        kwargs: dict = {
            "timeout": self.options.timeout,
            "max_retries": self.options.max_retries,
            "transport": self._transport,
        }
        if self._retry_base_delay is not None:
            kwargs["retry_base_delay"] = self._retry_base_delay
        return IndexClient(**kwargs)


def _parse_file(path: Path) -> tuple[set[str], list[Diagnostic]]:
    source, diags = load_source(path)
    if source is None:
        return set(), diags
    imports, parse_diags = extract_imports(source)
    return candidate_names(imports), diags + parse_diags
