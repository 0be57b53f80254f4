"""
Tests for the config check use case.
"""

from pathlib import Path

from orderroots.core.models import ModuleRef, Project
from orderroots.core.use_cases.config_check import check_config, find_dependency_cycles


def _mkdirs(config: Path, *names: str) -> None:
    for name in names:
        (config.parent / name).mkdir()


class TestCheckConfig:
    def test_valid(self, write_project):
        path = write_project("""\
            name: demo
            modules:
              - name: app
                path: app
                dependencies:
                  - module: core
              - name: core
                path: core
        """)
        _mkdirs(path, "app", "core")
        result = check_config(path)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []
        assert result.to_dict()["module_count"] == 2

    def test_missing_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = check_config()
        assert not result.valid
        assert "No project.yml found." in result.errors

    def test_invalid_yaml(self, write_project):
        result = check_config(write_project("name: [oops\n"))
        assert not result.valid
        assert "Invalid YAML" in result.errors[0]

    def test_no_modules_warning(self, write_project):
        result = check_config(write_project("name: empty\n"))
        assert result.valid
        assert any("No modules" in w for w in result.warnings)

    def test_duplicate_modules(self, write_project):
        result = check_config(write_project("""\
            name: demo
            modules:
              - name: app
                path: app
              - name: app
                path: app2
        """))
        assert not result.valid
        assert "Duplicate module names: app" in result.errors

    def test_undeclared_dependency(self, write_project):
        result = check_config(write_project("""\
            name: demo
            modules:
              - name: app
                path: app
                dependencies:
                  - module: ghost
        """))
        assert not result.valid
        assert "Module 'app' depends on undeclared module 'ghost'" in result.errors

    def test_self_dependency(self, write_project):
        result = check_config(write_project("""\
            name: demo
            modules:
              - name: app
                path: app
                dependencies:
                  - module: app
        """))
        assert "Module 'app' depends on itself" in result.errors
        assert not any("Circular" in w for w in result.warnings)

    def test_repeated_entry_and_two_sdks(self, write_project):
        result = check_config(write_project("""\
            name: demo
            modules:
              - name: app
                path: app
                dependencies:
                  - sdk: python-3.12
                  - inherited-sdk
                  - library: requests
                  - library: requests
        """))
        assert result.valid
        assert any("library:requests" in w for w in result.warnings)
        assert any("2 SDK entries" in w for w in result.warnings)

    def test_same_library_at_different_levels_is_not_repeated(self, write_project):
        path = write_project("""\
            name: demo
            modules:
              - name: app
                path: app
                dependencies:
                  - library: junit
                  - library: junit
                    level: module
        """)
        (path.parent / "app").mkdir()
        result = check_config(path)
        assert result.valid
        assert result.warnings == []

    def test_repeated_module_level_library_label(self, write_project):
        result = check_config(write_project("""\
            name: demo
            modules:
              - name: app
                path: app
                dependencies:
                  - library: junit
                    level: module
                  - library: junit
                    level: module
        """))
        assert any("library:module:junit" in w for w in result.warnings)

    def test_cycle_warning(self, write_project):
        path = write_project("""\
            name: demo
            modules:
              - name: a
                path: a
                dependencies: [{module: b}]
              - name: b
                path: b
                dependencies: [{module: a}]
        """)
        _mkdirs(path, "a", "b")
        result = check_config(path)
        assert result.valid
        assert result.warnings == ["Circular module dependencies: a, b"]

    def test_missing_path_warning(self, write_project):
        result = check_config(write_project("""\
            name: demo
            modules:
              - name: app
                path: nowhere
        """))
        assert any("path does not exist: nowhere" in w for w in result.warnings)


class TestFindDependencyCycles:
    def test_acyclic(self):
        p = Project(
            name="p",
            modules=[
                ModuleRef(name="a", path="a", dependencies=[{"module": "b"}]),
                ModuleRef(name="b", path="b", dependencies=[{"module": "c"}]),
                ModuleRef(name="c", path="c"),
            ],
        )
        assert find_dependency_cycles(p) == []

    def test_dependents_of_cycle_reported(self):
        p = Project(
            name="p",
            modules=[
                ModuleRef(name="a", path="a", dependencies=[{"module": "b"}]),
                ModuleRef(name="b", path="b", dependencies=[{"module": "a"}]),
                ModuleRef(name="app", path="app", dependencies=[{"module": "a"}]),
                ModuleRef(name="lib", path="lib"),
            ],
        )
        assert find_dependency_cycles(p) == ["a", "app", "b"]
