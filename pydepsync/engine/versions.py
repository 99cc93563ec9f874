"""Version selection and compatible-release specifiers."""

from __future__ import annotations

from collections.abc import Iterable

from packaging.version import InvalidVersion, Version


def parse_versions(raw: Iterable[str]) -> list[Version]:
    """Parse PEP 440 versions, silently dropping anything unparseable."""
    parsed: list[Version] = []
    for value in raw:
        try:
            parsed.append(Version(value))
        except InvalidVersion:
            continue
    return parsed


def select_version(raw: Iterable[str]) -> Version | None:
    """Newest stable version, else the newest pre/dev release, else None."""
    versions = parse_versions(raw)
    if not versions:
        return None
    stable = [v for v in versions if not v.is_prerelease]
    return max(stable) if stable else max(versions)


def compatible_specifier(version: Version) -> str:
    """``~=`` specifier anchored on at most major.minor.patch.

    >>> compatible_specifier(Version("5.1.6"))
    '~=5.1.6'
    >>> compatible_specifier(Version("5"))
    '~=5.0'
    >>> compatible_specifier(Version("2.0.0b1"))
    '~=2.0.0b1'
    """
    release = list(version.release[:3])
    if len(release) < 2:
        release.append(0)
    anchor = ".".join(str(part) for part in release)
    if version.epoch:
        anchor = f"{version.epoch}!{anchor}"
    if version.pre is not None:
        anchor += f"{version.pre[0]}{version.pre[1]}"
    if version.dev is not None:
        anchor += f".dev{version.dev}"
    return f"~={anchor}"
