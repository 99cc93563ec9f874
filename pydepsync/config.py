"""Configuration: file loading, CLI overrides, and the merged engine options."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pydepsync.engine.pipeline import EngineOptions
from pydepsync.engine.scanner import DEFAULT_EXCLUDE_DIRS
from pydepsync.exceptions import ConfigError

log = structlog.get_logger("pydepsync.config")

CONFIG_FILENAME = ".pydepsync.toml"

# Always skipped in addition to DEFAULT_EXCLUDE_DIRS. Build output is only
# skipped at the project root so a package named `build` deeper down is kept.
EXTRA_DEFAULT_EXCLUDES: tuple[str, ...] = (
    "venv",
    "__pycache__",
    "node_modules",
    ".tox",
    ".nox",
    "./build",
    "./dist",
    "./target",
)


class FileConfig(BaseModel):
    """Settings read from ``.pydepsync.toml`` or ``[tool.pydepsync]``."""

    model_config = ConfigDict(extra="forbid")

    exclude_dirs: list[str] = Field(default_factory=list)
    extra_indexes: list[str] = Field(default_factory=list)
    preferred_index: str | None = None
    remap: dict[str, str] = Field(default_factory=dict)
    source_roots: list[str] | None = None
    python_version: str | None = None
    max_workers: int | None = Field(default=None, ge=1)
    timeout: float | None = Field(default=None, gt=0)
    max_retries: int | None = Field(default=None, ge=1)


class CliOverrides(BaseModel):
    """Values given on the command line; empty/None means "not given"."""

    exclude_dirs: list[str] = Field(default_factory=list)
    extra_indexes: list[str] = Field(default_factory=list)
    preferred_index: str | None = None
    remap: dict[str, str] = Field(default_factory=dict)
    python_version: str | None = None


def load_config(project_root: Path, manifest_path: Path | None = None) -> FileConfig:
    """Load ``.pydepsync.toml`` from *project_root*, else ``[tool.pydepsync]``.

    A missing file yields defaults; a malformed one raises :class:`ConfigError`.
    """
    dedicated = project_root / CONFIG_FILENAME
    if dedicated.is_file():
        return _validate(_load_toml(dedicated), dedicated)

    manifest = manifest_path or project_root / "pyproject.toml"
    if manifest.is_file():
        try:
            data = _load_toml(manifest)
        except ConfigError:
            # The manifest reader reports its own parse errors.
            return FileConfig()
        section = data.get("tool", {}).get("pydepsync")
        if section is not None:
            return _validate(section, manifest)
    return FileConfig()


def parse_remap(values: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs; the last occurrence of a key wins."""
    remap: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        key, value = key.strip(), value.strip()
        if not sep:
            raise ConfigError(f"invalid remap {raw!r}: use 'key=value'")
        if not key:
            raise ConfigError(f"invalid remap {raw!r}: key cannot be empty")
        if not value:
            raise ConfigError(f"invalid remap {raw!r}: value cannot be empty")
        remap[key] = value
    return remap


def merge_options(file_config: FileConfig, cli: CliOverrides) -> EngineOptions:
    """Combine defaults, file config, and CLI values.

    Exclusions are the union of all three; remaps are merged with CLI
    winning per key; every other setting takes the CLI value when given.
    """
    exclude_dirs = _unique(
        [*DEFAULT_EXCLUDE_DIRS, *EXTRA_DEFAULT_EXCLUDES, *file_config.exclude_dirs, *cli.exclude_dirs]
    )
    remap = {**file_config.remap, **cli.remap}
    defaults = EngineOptions()
    return EngineOptions(
        exclude_dirs=exclude_dirs,
        extra_indexes=list(cli.extra_indexes or file_config.extra_indexes),
        preferred_index=cli.preferred_index or file_config.preferred_index,
        remap=remap,
        source_roots=(
            list(file_config.source_roots)
            if file_config.source_roots is not None
            else defaults.source_roots
        ),
        python_version=cli.python_version or file_config.python_version,
        max_workers=file_config.max_workers or defaults.max_workers,
        timeout=file_config.timeout or defaults.timeout,
        max_retries=file_config.max_retries or defaults.max_retries,
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"cannot load config {path}: {exc}") from exc


def _validate(data: Mapping[str, Any], source: Path) -> FileConfig:
    try:
        config = FileConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid config in {source}: {exc}") from exc
    log.debug("config.loaded", source=str(source))
    return config


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out
