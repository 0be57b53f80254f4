"""
Tests for declaration models — shorthand parsing, validation, lookups.
"""

import json

import pytest
from pydantic import ValidationError

from orderroots.core.models import (
    DependencyRef,
    DependencyScope,
    LibraryLevel,
    ModuleRef,
    Project,
)


class TestDependencyRef:
    def test_bare_string(self):
        d = DependencyRef.model_validate("source")
        assert d.kind == "source"
        assert d.name == ""

    def test_module_shorthand(self):
        d = DependencyRef.model_validate({"module": "core", "exported": True})
        assert d.kind == "module"
        assert d.name == "core"
        assert d.exported
        assert d.scope == DependencyScope.COMPILE

    def test_library_shorthand_with_options(self):
        d = DependencyRef.model_validate(
            {"library": "pytest", "scope": "test", "level": "application"}
        )
        assert d.kind == "library"
        assert d.scope == DependencyScope.TEST
        assert d.level == LibraryLevel.APPLICATION

    def test_explicit_form(self):
        d = DependencyRef(kind="sdk", name="python-3.12")
        assert d.label == "sdk:python-3.12"

    def test_named_kind_requires_name(self):
        with pytest.raises(ValidationError, match="needs a name"):
            DependencyRef(kind="module")

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            DependencyRef.model_validate("plugin")

    def test_bad_scope(self):
        with pytest.raises(ValidationError):
            DependencyRef.model_validate({"module": "core", "scope": "sometimes"})


class TestModuleRef:
    def test_module_dependency_names(self):
        m = ModuleRef(
            name="app",
            path="app",
            dependencies=["source", {"module": "core"}, {"library": "x"}, {"module": "util"}],
        )
        assert m.module_dependency_names() == ["core", "util"]


class TestProject:
    def test_minimal_project(self):
        p = Project(name="test")
        assert p.version == 1
        assert p.sdk is None
        assert p.modules == []

    def test_get_module(self):
        p = Project(
            name="test",
            modules=[ModuleRef(name="api", path="src/api"), ModuleRef(name="web", path="src/web")],
        )
        assert p.get_module("api").path == "src/api"
        assert p.get_module("missing") is None
        assert p.module_names == ["api", "web"]

    def test_serialization_roundtrip(self):
        p = Project(
            name="test",
            sdk="python-3.12",
            modules=[
                ModuleRef(
                    name="api",
                    path="src/api",
                    dependencies=[DependencyRef(kind="library", name="requests", scope="runtime")],
                )
            ],
        )
        data = json.loads(p.model_dump_json())
        p2 = Project.model_validate(data)
        assert p2.sdk == "python-3.12"
        assert p2.modules[0].dependencies[0].scope == DependencyScope.RUNTIME
