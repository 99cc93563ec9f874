"""Tests for import extraction."""

from __future__ import annotations

from pathlib import Path

from pydepsync.engine.extractor import candidate_names, extract_imports
from pydepsync.engine.models import RawImport, SourceFile


def _extract(code: str):
    return extract_imports(SourceFile(path=Path("mod.py"), contents=code.encode()))


class TestExtractImports:
    def test_finds_both_import_forms(self):
        imports, diags = _extract("from django import db\nimport os\n")
        assert imports == {RawImport("django"), RawImport("os")}
        assert diags == []

    def test_keeps_only_root_segment(self):
        imports, _ = _extract("import foo.bar.baz\nfrom a.b.c import d\n")
        assert candidate_names(imports) == {"foo", "a"}

    def test_multiple_names_in_one_statement(self):
        imports, _ = _extract("import json, yaml as y, numpy.linalg\n")
        assert candidate_names(imports) == {"json", "yaml", "numpy"}

    def test_relative_imports_are_tagged_and_dropped(self):
        imports, _ = _extract("from . import views\nfrom ..models import User\nfrom .x.y import z\n")
        assert all(i.relative for i in imports)
        assert candidate_names(imports) == set()

    def test_nested_imports_are_found(self):
        code = (
            "try:\n"
            "    import ujson as json\n"
            "except ImportError:\n"
            "    import json\n"
            "def f():\n"
            "    from requests import get\n"
            "    return get\n"
        )
        imports, _ = _extract(code)
        assert candidate_names(imports) == {"ujson", "json", "requests"}

    def test_case_is_preserved(self):
        imports, _ = _extract("from PIL import Image\n")
        assert candidate_names(imports) == {"PIL"}

    def test_syntax_error_is_a_diagnostic(self):
        imports, diags = _extract("import os\ndef broken(:\n")
        assert imports == set()
        assert len(diags) == 1
        assert diags[0].kind == "file-skip"
        assert diags[0].subject == "mod.py"

    def test_null_bytes_are_a_diagnostic(self):
        imports, diags = _extract("import os\x00\n")
        assert imports == set()
        assert len(diags) == 1

    def test_encoding_cookie_is_honoured(self):
        code = "# -*- coding: latin-1 -*-\nimport requests\ns = 'caf\xe9'\n".encode("latin-1")
        imports, diags = extract_imports(SourceFile(path=Path("m.py"), contents=code))
        assert candidate_names(imports) == {"requests"}
        assert diags == []
