"""
Tests for configuration loading — project.yml parsing and validation.
"""

from pathlib import Path

import pytest

from orderroots.core.config.loader import ConfigError, find_project_file, load_project


@pytest.fixture
def valid_project_yml(write_project) -> Path:
    return write_project("""\
        version: 1
        name: test-project
        description: "A test project"
        sdk: python-3.12

        modules:
          - name: app
            path: app
            dependencies:
              - inherited-sdk
              - source
              - module: core
              - library: requests
                scope: runtime
                exported: true
          - name: core
            path: core
    """)


class TestLoadProject:
    def test_load_valid(self, valid_project_yml: Path):
        project = load_project(valid_project_yml)
        assert project.name == "test-project"
        assert project.sdk == "python-3.12"
        assert project.module_names == ["app", "core"]
        deps = project.get_module("app").dependencies
        assert [d.kind for d in deps] == ["inherited-sdk", "source", "module", "library"]
        assert deps[3].exported

    def test_load_wrapped(self, write_project):
        path = write_project("""\
            project:
              name: wrapped
            sdk: jdk-21
            modules:
              - name: cli
                path: src/cli
        """)
        project = load_project(path)
        assert project.name == "wrapped"
        assert project.sdk == "jdk-21"
        assert project.module_names == ["cli"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_project(tmp_path / "nope.yml")

    def test_invalid_yaml(self, write_project):
        path = write_project("name: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_project(path)

    def test_not_a_mapping(self, write_project):
        path = write_project("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_project(path)

    def test_schema_error(self, write_project):
        path = write_project("""\
            name: broken
            modules:
              - name: app
                path: app
                dependencies:
                  - kind: module
        """)
        with pytest.raises(ConfigError, match="Invalid project configuration"):
            load_project(path)

    def test_missing_name(self, write_project):
        path = write_project("description: no name\n")
        with pytest.raises(ConfigError):
            load_project(path)

    def test_search_without_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError, match="No project.yml"):
            load_project()


class TestFindProjectFile:
    def test_finds_in_parent(self, valid_project_yml: Path):
        nested = valid_project_yml.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_file(nested) == valid_project_yml.resolve()

    def test_none_when_absent(self, tmp_path: Path):
        assert find_project_file(tmp_path) is None
