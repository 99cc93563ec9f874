"""CLI entry point: pydepsync.

Usage:
    pydepsync                                   # sync ./pyproject.toml with imports under .
    pydepsync path/to/project --dry-run         # show what would be added
    pydepsync --extra-indexes https://my.index/simple --remap cv2=opencv-python-headless
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from pydepsync import __version__
from pydepsync.config import CliOverrides, load_config, merge_options, parse_remap
from pydepsync.core.logging import setup_logging
from pydepsync.exceptions import ConfigError, PyDepSyncError
from pydepsync.sync import synchronize


def _remap_callback(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> dict[str, str]:
    try:
        return parse_remap(value)
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e


@click.command()
@click.argument(
    "path",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--manifest",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="pyproject.toml to update (default: PATH/pyproject.toml)",
)
@click.option(
    "--exclude-dirs",
    multiple=True,
    help="Directory name (any depth) or ./relative/path (root only) to skip; repeatable",
)
@click.option(
    "--extra-indexes",
    multiple=True,
    help="Extra package index to check, after the preferred/default one; repeatable",
)
@click.option(
    "--preferred-index",
    default=None,
    help="Index checked first instead of https://pypi.org/pypi",
)
@click.option(
    "-r",
    "--remap",
    multiple=True,
    metavar="KEY=VALUE",
    callback=_remap_callback,
    help="Map an import name to a distribution name; repeatable",
)
@click.option("--python-version", default=None, help="Python version whose stdlib is filtered (e.g. 3.12)")
@click.option("--dry-run", is_flag=True, help="Print what would be added without writing")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.version_option(__version__, prog_name="pydepsync")
def main(
    path: Path,
    manifest: Path | None,
    exclude_dirs: tuple[str, ...],
    extra_indexes: tuple[str, ...],
    preferred_index: str | None,
    remap: dict[str, str],
    python_version: str | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Add the third-party packages your code imports to pyproject.toml."""
    setup_logging(verbose)

    manifest_path = manifest or path / "pyproject.toml"
    try:
        file_config = load_config(path, manifest_path)
        options = merge_options(
            file_config,
            CliOverrides(
                exclude_dirs=list(exclude_dirs),
                extra_indexes=list(extra_indexes),
                preferred_index=preferred_index,
                remap=remap,
                python_version=python_version,
            ),
        )
        result = asyncio.run(synchronize(path, manifest_path, options, dry_run=dry_run))
    except PyDepSyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not result.added:
        click.echo("No new dependencies detected, nothing to do")
    else:
        verb = "Would add" if dry_run else "Adding"
        for package in result.added:
            click.echo(f"{verb}: {package.requirement}  ({package.index_url})")
        if result.written:
            click.echo(f"Updated {manifest_path}")

    if result.diagnostics:
        click.echo(f"\n{len(result.diagnostics)} warning(s):", err=True)
        for diag in result.diagnostics:
            click.echo(f"  {diag}", err=True)
