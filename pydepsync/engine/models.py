"""Data models for the dependency detection engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydepsync.diagnostics import Diagnostics


@dataclass
class SourceFile:
    """A Python source file found by the scanner."""

    path: Path
    contents: bytes


@dataclass(frozen=True)
class RawImport:
    """Root identifier of one import statement, as written in code."""

    name: str
    relative: bool = False


@dataclass(frozen=True)
class IndexRelease:
    """What one index reports for a distribution name."""

    name: str
    versions: tuple[str, ...]
    index_url: str


@dataclass(frozen=True)
class ResolvedPackage:
    """A candidate resolved to a published distribution."""

    name: str
    version: str
    specifier: str
    index_url: str

    @property
    def requirement(self) -> str:
        """Entry string as written to the manifest, e.g. ``Django~=5.1.6``."""
        return f"{self.name}{self.specifier}"


@dataclass
class DetectResult:
    """Result of a detection run: what to add, plus everything that went wrong on the way."""

    resolved: list[ResolvedPackage]
    candidates: set[str] = field(default_factory=set)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
