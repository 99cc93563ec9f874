"""Full pipeline: read manifest -> detect -> patch manifest."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx
import structlog

from pydepsync.diagnostics import Diagnostics
from pydepsync.engine.models import ResolvedPackage
from pydepsync.engine.pipeline import DetectEngine, EngineOptions
from pydepsync.manifest import patch_manifest, read_manifest

log = structlog.get_logger("pydepsync")


@dataclass
class SyncResult:
    """Summary of a sync run."""

    added: list[ResolvedPackage]
    resolved: list[ResolvedPackage]
    diagnostics: Diagnostics
    written: bool


async def synchronize(
    root: Path,
    manifest_path: Path,
    options: EngineOptions | None = None,
    *,
    dry_run: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
    retry_base_delay: float | None = None,
) -> SyncResult:
    """Detect missing dependencies under *root* and append them to *manifest_path*.

    The manifest is parsed before any network traffic so an unparseable
    file aborts the run early. It is only ever written by this one
    coordinating call, after every parallel stage has finished.
    """
    doc = read_manifest(manifest_path)

    engine = DetectEngine(options, transport=transport, retry_base_delay=retry_base_delay)
    result = await engine.detect(root, existing=doc.existing_names())

    added = patch_manifest(doc, result.resolved, dry_run=dry_run)
    return SyncResult(
        added=added,
        resolved=result.resolved,
        diagnostics=result.diagnostics,
        written=bool(added) and not dry_run,
    )
