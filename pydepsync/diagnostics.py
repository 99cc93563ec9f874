"""Diagnostics sink, the explicit record of non-fatal problems in a run."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import structlog

log = structlog.get_logger("pydepsync.engine")

FILE_SKIP = "file-skip"
DIR_SKIP = "dir-skip"
RESOLUTION_MISS = "resolution-miss"
TRANSIENT_NETWORK = "transient-network"


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal problem: what kind, what it is about, and why."""

    kind: str
    subject: str
    message: str

    def __str__(self) -> str:
        return f"[{self.kind}] {self.subject}: {self.message}"


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics, threaded through every stage.

    Worker-pool stages build their own lists and hand them to :meth:`extend`
    from the single coordinating task, so this object is never mutated
    concurrently.
    """

    items: list[Diagnostic] = field(default_factory=list)

    def add(self, kind: str, subject: str, message: str) -> Diagnostic:
        diag = Diagnostic(kind=kind, subject=subject, message=message)
        self.items.append(diag)
        log.warning("diagnostic", kind=kind, subject=subject, detail=message)
        return diag

    def extend(self, diags: Iterable[Diagnostic]) -> None:
        for diag in diags:
            self.items.append(diag)
            log.warning("diagnostic", kind=diag.kind, subject=diag.subject, detail=diag.message)

    def of_kind(self, kind: str) -> list[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
