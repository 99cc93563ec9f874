"""Candidate evaluation: stdlib/local filtering and import-name remapping."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import structlog

from pydepsync.engine.remap import BUILTIN_REMAP
from pydepsync.engine.stdlib import stdlib_modules

log = structlog.get_logger("pydepsync.engine")


class DependencyEvaluator:
    """Turns raw import roots into distribution-name guesses.

    *user_remap* takes precedence over the built-in table; both are matched
    case-sensitively on the exact import identifier.
    """

    def __init__(
        self,
        user_remap: Mapping[str, str] | None = None,
        python_version: tuple[int, int] = (3, 12),
        builtin_remap: Mapping[str, str] = BUILTIN_REMAP,
    ) -> None:
        self._user_remap = dict(user_remap or {})
        self._builtin_remap = builtin_remap
        self._stdlib = stdlib_modules(python_version)

    def filter(self, names: Iterable[str], local_modules: set[str]) -> set[str]:
        """Remove local modules first, then standard-library modules."""
        kept: set[str] = set()
        for name in names:
            if name in local_modules:
                log.debug("evaluator.local", name=name)
                continue
            if name in self._stdlib:
                continue
            kept.add(name)
        return kept

    def remap(self, name: str) -> str:
        """Exactly one distribution-name guess for an import identifier."""
        if name in self._user_remap:
            return self._user_remap[name]
        if name in self._builtin_remap:
            return self._builtin_remap[name]
        return name

    def evaluate(self, names: Iterable[str], local_modules: set[str]) -> dict[str, str]:
        """Filter *names* and map each survivor to its distribution name.

        Returns ``{import identifier: distribution name}``.
        """
        return {name: self.remap(name) for name in sorted(self.filter(names, local_modules))}
