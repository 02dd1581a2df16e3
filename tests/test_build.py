"""Tests for the single-file distribution builder."""
from __future__ import annotations

import ast

import pytest

import build


class TestCollectImportsAndBody:

    def test_strips_docstring_and_internal_imports(self, tmp_path):
        mod = tmp_path / "mod.py"
        mod.write_text(
            '"""Module docstring."""\n'
            "\n"
            "import os\n"
            "from compose2systemd.pacts.types import (\n"
            "    PodRecord, PortForward,\n"
            ")\n"
            "from compose2systemd.core.constants import PORT_MAX\n"
            "\n"
            "X = os.sep\n"
        )
        imports, body = build.collect_imports_and_body(mod)
        assert imports == ["import os\n"]
        assert "".join(body).strip() == "X = os.sep"

    def test_relative_imports_dropped_external_normalized(self, tmp_path):
        mod = tmp_path / "mod.py"
        mod.write_text(
            "from .types import PodRecord\n"
            "import compose2systemd.core.ports\n"
            "from dataclasses import (\n"
            "    dataclass,\n"
            "    field,\n"
            ")\n"
            "\n"
            "Y = field\n"
        )
        imports, body = build.collect_imports_and_body(mod)
        assert imports == ["from dataclasses import dataclass, field\n"]
        assert "".join(body).strip() == "Y = field"

    def test_first_string_statement_only_is_docstring(self, tmp_path):
        mod = tmp_path / "mod.py"
        mod.write_text('"""Doc."""\nX = 1\n"""Not a docstring."""\n')
        _imports, body = build.collect_imports_and_body(mod)
        assert body == ["X = 1\n", '"""Not a docstring."""\n']

    def test_drops_main_guard(self, tmp_path):
        mod = tmp_path / "cli.py"
        mod.write_text("def main():\n    pass\n\n\nif __name__ == \"__main__\":\n    main()\n")
        _imports, body = build.collect_imports_and_body(mod)
        assert "__name__" not in "".join(body)


class TestBundle:

    def test_bundle_is_valid_python(self):
        text = build.bundle()
        tree = ast.parse(text)
        names = {n.name for n in tree.body if isinstance(n, (ast.FunctionDef, ast.ClassDef))}
        assert {"main", "generate_all", "aggregate", "build", "render_unit",
                "ConfigError"} <= names
        assert "from compose2systemd" not in text
        assert text.count("import yaml\n") == 1

    def test_missing_module(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build.bundle(src_dir=tmp_path, modules=["nope.py"])
