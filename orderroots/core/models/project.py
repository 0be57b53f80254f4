"""
Project model — declared modules and their dependency order.

Loaded from project.yml, this is what the user *declared*. The live,
ordered entries are built from it by the build use case.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from orderroots.core.models.entries import DependencyScope, LibraryLevel

DependencyKind = Literal["source", "sdk", "inherited-sdk", "module", "library"]

_NAMED_KINDS = ("sdk", "module", "library")


class DependencyRef(BaseModel):
    """One declared entry in a module's order.

    Accepts shorthand forms in YAML:

        - source
        - inherited-sdk
        - module: core
        - library: requests
          scope: runtime
    """

    kind: DependencyKind
    name: str = ""
    scope: DependencyScope = DependencyScope.COMPILE
    exported: bool = False
    level: LibraryLevel = LibraryLevel.PROJECT

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"kind": data}
        if isinstance(data, dict) and "kind" not in data:
            named = [k for k in _NAMED_KINDS if k in data]
            if len(named) == 1:
                data = dict(data)
                data["name"] = data.pop(named[0])
                data["kind"] = named[0]
        return data

    @model_validator(mode="after")
    def _require_name(self) -> DependencyRef:
        if self.kind in _NAMED_KINDS and not self.name:
            raise ValueError(f"A '{self.kind}' dependency needs a name")
        return self

    @property
    def label(self) -> str:
        """Short description used in messages."""
        if self.kind == "library" and self.level != LibraryLevel.PROJECT:
            return f"{self.kind}:{self.level}:{self.name}"
        return f"{self.kind}:{self.name}" if self.name else self.kind

    @property
    def key(self) -> tuple[str, ...]:
        """(kind, target) pair matching the key of the entry it becomes."""
        if self.kind == "library":
            return (self.kind, str(self.level), self.name)
        return (self.kind, self.name)


class ModuleRef(BaseModel):
    """A module declared in project.yml with its ordered dependencies."""

    name: str
    path: str
    description: str = ""
    dependencies: list[DependencyRef] = Field(default_factory=list)

    def module_dependency_names(self) -> list[str]:
        """Names of modules this module depends on, in declared order."""
        return [d.name for d in self.dependencies if d.kind == "module"]


class Project(BaseModel):
    """Root project declaration — loaded from project.yml."""

    version: int = 1

    name: str
    description: str = ""
    sdk: str | None = None

    modules: list[ModuleRef] = Field(default_factory=list)

    def get_module(self, name: str) -> ModuleRef | None:
        """Look up a module declaration by name."""
        for mod in self.modules:
            if mod.name == name:
                return mod
        return None

    @property
    def module_names(self) -> list[str]:
        return [m.name for m in self.modules]
