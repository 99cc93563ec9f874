"""Import extraction from Python source via the ``ast`` module."""

from __future__ import annotations

import ast

from pydepsync.diagnostics import FILE_SKIP, Diagnostic
from pydepsync.engine.models import RawImport, SourceFile


def extract_imports(source: SourceFile) -> tuple[set[RawImport], list[Diagnostic]]:
    """Return the root-level imports of *source*.

    Handles ``import a.b.c`` (-> ``a``) and ``from a.b import c`` (-> ``a``)
    anywhere in the module, including function bodies and ``try`` blocks.
    Relative imports (``from . import x``, ``from ..pkg import y``) are
    tagged ``relative=True``.

    A file that does not parse contributes nothing and yields one diagnostic.
    """
    try:
        tree = ast.parse(source.contents, filename=str(source.path))
    except (SyntaxError, ValueError, UnicodeDecodeError) as exc:
        return set(), [Diagnostic(FILE_SKIP, str(source.path), f"cannot parse: {exc}")]

    imports: set[RawImport] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.add(RawImport(name=_root(alias.name)))
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                imports.add(RawImport(name=_root(node.module or ""), relative=True))
            elif node.module:
                imports.add(RawImport(name=_root(node.module)))
    return imports, []


def candidate_names(imports: set[RawImport]) -> set[str]:
    """Drop relative imports and return the remaining root identifiers."""
    return {i.name for i in imports if not i.relative and i.name}


def _root(dotted: str) -> str:
    return dotted.split(".", 1)[0]
