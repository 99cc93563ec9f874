"""Tests for stdlib filtering, local precedence and import-name remapping."""

from __future__ import annotations

import sys

import pytest

from pydepsync.engine.evaluator import DependencyEvaluator
from pydepsync.engine.remap import BUILTIN_REMAP
from pydepsync.engine.stdlib import parse_python_version, stdlib_modules


class TestStdlib:
    def test_common_modules_present(self):
        mods = stdlib_modules((3, 12))
        assert {"os", "sys", "json", "asyncio", "typing", "__future__"} <= mods

    def test_tomllib_added_in_311(self):
        assert "tomllib" not in stdlib_modules((3, 10))
        assert "tomllib" in stdlib_modules((3, 11))

    def test_removed_modules_drop_out(self):
        assert "distutils" in stdlib_modules((3, 11))
        assert "distutils" not in stdlib_modules((3, 12))
        assert "telnetlib" not in stdlib_modules((3, 13))

    def test_newer_than_known_uses_latest(self):
        assert stdlib_modules((3, 99)) == stdlib_modules((3, 14))

    def test_parse_python_version(self):
        assert parse_python_version("3.12") == (3, 12)
        assert parse_python_version(" 3.9.1 ") == (3, 9)
        assert parse_python_version(None) == tuple(sys.version_info[:2])

    def test_parse_python_version_rejects_garbage(self):
        with pytest.raises(ValueError, match="invalid python version"):
            parse_python_version("three.twelve")


class TestFilter:
    def test_stdlib_removed(self):
        ev = DependencyEvaluator(python_version=(3, 12))
        assert ev.filter({"os", "json", "django"}, set()) == {"django"}

    def test_local_module_removed(self):
        ev = DependencyEvaluator(python_version=(3, 12))
        assert ev.filter({"myapp", "requests"}, {"myapp"}) == {"requests"}

    def test_local_shadows_stdlib_and_thirdparty(self):
        ev = DependencyEvaluator(python_version=(3, 12))
        # A local "requests" package is never a dependency.
        assert ev.filter({"requests", "logging"}, {"requests", "logging"}) == set()


class TestRemap:
    def test_builtin_table(self):
        ev = DependencyEvaluator()
        assert ev.remap("rest_framework") == "djangorestframework"
        assert ev.remap("yaml") == "PyYAML"
        assert ev.remap("PIL").lower() == "pillow"

    def test_identity_when_unmapped(self):
        assert DependencyEvaluator().remap("django") == "django"

    def test_user_remap_wins_over_builtin(self):
        ev = DependencyEvaluator(user_remap={"yaml": "ruamel.yaml"})
        assert ev.remap("yaml") == "ruamel.yaml"

    def test_case_sensitive_keys(self):
        ev = DependencyEvaluator(user_remap={"Foo": "foo-dist"}, builtin_remap={})
        assert ev.remap("Foo") == "foo-dist"
        assert ev.remap("foo") == "foo"

    def test_builtin_table_is_read_only(self):
        with pytest.raises(TypeError):
            BUILTIN_REMAP["yaml"] = "other"  # type: ignore[index]

    def test_builtin_table_has_no_identity_entries(self):
        assert all(k != v for k, v in BUILTIN_REMAP.items())


class TestEvaluate:
    def test_filters_then_maps(self):
        ev = DependencyEvaluator(python_version=(3, 12))
        result = ev.evaluate(
            {"os", "django", "rest_framework", "myapp"},
            local_modules={"myapp"},
        )
        assert result == {"django": "django", "rest_framework": "djangorestframework"}
