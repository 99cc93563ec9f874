"""Dependency detection engine — imports in, resolved distributions out."""

from pydepsync.engine.models import DetectResult, RawImport, ResolvedPackage, SourceFile

__all__ = ["DetectResult", "RawImport", "ResolvedPackage", "SourceFile"]
