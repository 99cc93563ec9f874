"""Project walker: find Python sources and the names of local modules."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from pydepsync.diagnostics import DIR_SKIP, FILE_SKIP, Diagnostic, Diagnostics
from pydepsync.engine.models import SourceFile
from pydepsync.exceptions import ProjectRootError

log = structlog.get_logger("pydepsync.engine")

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (".venv", ".git")

# Suffixes that make a file importable as a top-level module.
_MODULE_SUFFIXES = (".py", ".pyi", ".so", ".pyd")


class PythonFileFinder:
    """Walks a project tree in lexical order, skipping excluded subtrees.

    A bare exclusion matches a directory name anywhere in the tree
    (``__pycache__``). One that starts with ``./`` or contains a slash is a
    path relative to the root and matches only there (``./build``,
    ``docs/examples``).
    """

    def __init__(self, exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS) -> None:
        self.excluded_names: set[str] = set()
        self.excluded_paths: set[str] = set()
        for raw in exclude_dirs:
            value = raw.strip().replace("\\", "/")
            if not value:
                continue
            if value.startswith("./") or "/" in value.strip("/"):
                path = value.removeprefix("./").strip("/")
                if path:
                    self.excluded_paths.add(path)
            else:
                self.excluded_names.add(value.strip("/"))

    def is_excluded(self, path: Path, root: Path) -> bool:
        if path.name in self.excluded_names:
            return True
        try:
            rel = path.relative_to(root).as_posix()
        except ValueError:
            return False
        return rel in self.excluded_paths

    def find_files(self, root: Path, diagnostics: Diagnostics) -> list[Path]:
        """Return every ``*.py`` file under *root*.

        Raises :class:`ProjectRootError` if *root* itself cannot be listed.
        Unreadable subdirectories are recorded in *diagnostics* and skipped.
        """
        root = root.resolve()
        if not root.is_dir():
            raise ProjectRootError(f"project root {root} is not a directory")
        try:
            entries = _sorted_entries(root)
        except OSError as exc:
            raise ProjectRootError(f"cannot read project root {root}: {exc}") from exc

        files: list[Path] = []
        seen: set[Path] = {root}
        stack: list[list[Path]] = [entries]
        # Depth-first, entries consumed front to back so output is lexical.
        while stack:
            pending = stack[-1]
            if not pending:
                stack.pop()
                continue
            entry = pending.pop(0)
            if entry.is_dir():
                if self.is_excluded(entry, root):
                    log.debug("scanner.excluded", path=str(entry))
                    continue
                real = entry.resolve()
                if real in seen:
                    log.debug("scanner.symlink_cycle", path=str(entry), target=str(real))
                    continue
                seen.add(real)
                try:
                    stack.append(_sorted_entries(entry))
                except OSError as exc:
                    diagnostics.add(DIR_SKIP, str(entry), f"cannot list directory: {exc}")
            elif entry.suffix == ".py" and entry.is_file():
                files.append(entry)

        log.debug("scanner.files_found", root=str(root), count=len(files))
        return files

    def find_local_modules(
        self,
        root: Path,
        source_roots: Iterable[str] = ("src",),
        files: Iterable[Path] = (),
    ) -> set[str]:
        """Names importable from the project itself.

        Covers top-level modules and packages at *root* and at each source
        root, the project directory's own name, and the siblings of every
        scanned file (a script's directory is on its import path).
        """
        root = root.resolve()
        names: set[str] = set()
        if root.name.isidentifier():
            names.add(root.name)

        for base in [root, *(root / s for s in source_roots)]:
            if base.is_dir():
                names.update(self._module_names_in(base, root))

        for path in files:
            names.add(_module_name(path.name))
            parent = path.parent
            if parent != root and parent.name.isidentifier():
                names.add(parent.name)

        names.discard("")
        return names

    def _module_names_in(self, directory: Path, root: Path) -> set[str]:
        names: set[str] = set()
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            log.warning("scanner.source_root_unreadable", path=str(directory), error=str(exc))
            return names
        for entry in entries:
            if entry.is_dir():
                if entry.name.isidentifier() and not self.is_excluded(entry, root):
                    names.add(entry.name)
            elif entry.name.endswith(_MODULE_SUFFIXES):
                names.add(_module_name(entry.name))
        return names


def load_source(path: Path) -> tuple[SourceFile | None, list[Diagnostic]]:
    """Read one source file. A read failure is a diagnostic, never an exception."""
    try:
        contents = path.read_bytes()
    except OSError as exc:
        return None, [Diagnostic(FILE_SKIP, str(path), f"cannot read file: {exc}")]
    return SourceFile(path=path, contents=contents), []


def _sorted_entries(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def _module_name(filename: str) -> str:
    # foo.py -> foo, _speedups.cpython-312-x86_64-linux-gnu.so -> _speedups
    name = filename.split(".", 1)[0]
    return name if name.isidentifier() else ""
