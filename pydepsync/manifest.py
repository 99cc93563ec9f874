"""pyproject.toml reading and non-destructive dependency patching.

Reads go through ``tomllib``; edits go through ``tomlkit`` so comments and
formatting outside ``[project].dependencies`` survive untouched. Every
edit is re-parsed and checked before it replaces the file.
"""

from __future__ import annotations

import os
import re
import sys
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import structlog
import tomlkit
from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name
from tomlkit.exceptions import TOMLKitError

from pydepsync.engine.models import ResolvedPackage
from pydepsync.exceptions import ManifestError, ManifestWriteError

log = structlog.get_logger("pydepsync.manifest")

# Leading distribution name of a PEP 508 string, used when full parsing fails.
_NAME_RE = re.compile(r"^\s*([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)")


def requirement_name(entry: str) -> str | None:
    """Distribution name of a dependency entry, ignoring extras/specifier/markers."""
    try:
        return Requirement(entry).name
    except InvalidRequirement:
        m = _NAME_RE.match(entry)
        return m.group(1) if m else None


@dataclass
class ManifestDocument:
    """Parsed view of a pyproject.toml."""

    path: Path
    text: str
    data: dict[str, Any]
    dependencies: list[str] = field(default_factory=list)
    optional_groups: dict[str, list[str]] = field(default_factory=dict)

    def existing_names(self) -> set[str]:
        """Canonical names declared anywhere: main list and every optional group."""
        names: set[str] = set()
        for entry in self.all_entries():
            name = requirement_name(entry)
            if name:
                names.add(canonicalize_name(name))
        return names

    def all_entries(self) -> list[str]:
        entries = list(self.dependencies)
        for group in self.optional_groups.values():
            entries.extend(group)
        return entries

    def declares(self, name: str) -> bool:
        return canonicalize_name(name) in self.existing_names()


def read_manifest(path: Path) -> ManifestDocument:
    """Parse *path*. Any failure here is fatal: we never guess at structure."""
    try:
        text = path.read_bytes().decode("utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(f"manifest {path} does not exist") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"cannot read manifest {path}: {exc}") from exc

    try:
        data = tomllib.loads(text)
        tomlkit.parse(text)
    except (tomllib.TOMLDecodeError, TOMLKitError) as exc:
        raise ManifestError(f"cannot parse manifest {path}: {exc}") from exc

    project = data.get("project", {})
    if not isinstance(project, dict):
        raise ManifestError(f"{path}: [project] is not a table")

    dependencies = project.get("dependencies", [])
    if not _is_string_list(dependencies):
        raise ManifestError(f"{path}: project.dependencies must be an array of strings")

    groups: dict[str, list[str]] = {}
    for prefix, table in (
        ("optional-dependencies", project.get("optional-dependencies", {})),
        ("dependency-groups", data.get("dependency-groups", {})),
    ):
        if not isinstance(table, dict):
            raise ManifestError(f"{path}: {prefix} is not a table")
        for group_name, members in table.items():
            if isinstance(members, list):
                # {include-group = "..."} entries carry no distribution name.
                groups[f"{prefix}.{group_name}"] = [m for m in members if isinstance(m, str)]

    doc = ManifestDocument(
        path=path,
        text=text,
        data=data,
        dependencies=list(dependencies),
        optional_groups=groups,
    )
    log.debug(
        "manifest.read",
        path=str(path),
        dependencies=len(doc.dependencies),
        groups=sorted(groups),
    )
    return doc


def plan_patch(doc: ManifestDocument, resolved: Iterable[ResolvedPackage]) -> list[ResolvedPackage]:
    """Resolved packages not yet declared anywhere in *doc*, each at most once."""
    existing = doc.existing_names()
    plan: dict[str, ResolvedPackage] = {}
    for package in resolved:
        key = canonicalize_name(package.name)
        if key in existing or key in plan:
            continue
        plan[key] = package
    return [plan[key] for key in sorted(plan)]


def render_patch(doc: ManifestDocument, plan: list[ResolvedPackage]) -> str:
    """Return the manifest text with *plan* appended to ``[project].dependencies``.

    Raises :class:`ManifestError` if the document has no ``[project]`` table,
    if it lists ``dependencies`` in ``project.dynamic``, or if the edited
    text does not re-parse to exactly the expected data.
    """
    if not plan:
        return doc.text
    if "project" not in doc.data:
        raise ManifestError(f"{doc.path}: no [project] table to add dependencies to")
    dynamic = doc.data["project"].get("dynamic", [])
    if isinstance(dynamic, list) and "dependencies" in dynamic:
        # A field listed in project.dynamic must not also be given statically.
        raise ManifestError(
            f"{doc.path}: project.dependencies is declared dynamic; add these by hand: "
            + ", ".join(package.requirement for package in plan)
        )

    document = tomlkit.parse(doc.text)
    project = document["project"]
    new_entries = [package.requirement for package in plan]
    if "dependencies" in project:
        array = project["dependencies"]
    else:
        array = tomlkit.array()
        project["dependencies"] = array
    for entry in new_entries:
        array.append(entry)
    new_text = tomlkit.dumps(document)

    _verify(doc, new_text, new_entries)
    return new_text


def write_atomic(path: Path, text: str) -> None:
    """Replace *path* with *text* in one step via a sibling temp file."""
    try:
        mode = path.stat().st_mode & 0o777
    except OSError:
        mode = 0o644

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ManifestWriteError(f"cannot write {path}: {exc}") from exc


def patch_manifest(
    doc: ManifestDocument,
    resolved: Iterable[ResolvedPackage],
    *,
    dry_run: bool = False,
) -> list[ResolvedPackage]:
    """Add the missing *resolved* packages to the manifest behind *doc*.

    Returns the packages that were (or, with *dry_run*, would be) added.
    When nothing is missing the file is not touched at all.
    """
    plan = plan_patch(doc, resolved)
    if not plan:
        log.info("manifest.up_to_date", path=str(doc.path))
        return []

    new_text = render_patch(doc, plan)
    added = [p.requirement for p in plan]
    if dry_run:
        log.info("manifest.dry_run", path=str(doc.path), added=added)
        return plan

    write_atomic(doc.path, new_text)
    log.info("manifest.updated", path=str(doc.path), added=added)
    return plan


def _verify(doc: ManifestDocument, new_text: str, new_entries: list[str]) -> None:
    try:
        new_data = tomllib.loads(new_text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"{doc.path}: edited manifest does not parse: {exc}") from exc

    expected = _strip_dependencies(doc.data)
    actual = _strip_dependencies(new_data)
    new_deps = new_data.get("project", {}).get("dependencies")
    if actual != expected or new_deps != doc.dependencies + new_entries:
        raise ManifestError(f"{doc.path}: edit would change more than project.dependencies")


def _strip_dependencies(data: dict[str, Any]) -> dict[str, Any]:
    copy = dict(data)
    project = dict(copy.get("project", {}))
    project.pop("dependencies", None)
    copy["project"] = project
    return copy


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)
