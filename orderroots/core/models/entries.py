"""
Entry kinds — the concrete variants a module's order can hold.

Each kind is its own class so that ``same_kind`` can classify entries
by runtime type. The ``key`` of an entry identifies its target among
entries of the same kind; reconciliation pairs entries by (kind, key).
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from orderroots.core.models.order_entry import OrderEntry

if TYPE_CHECKING:
    from orderroots.core.models.root_model import RootModel


class DependencyScope(StrEnum):
    """When a dependency is visible to the owning module."""

    COMPILE = "compile"
    TEST = "test"
    RUNTIME = "runtime"
    PROVIDED = "provided"


class LibraryLevel(StrEnum):
    """Where a library is defined."""

    PROJECT = "project"
    MODULE = "module"
    APPLICATION = "application"


class ModuleSourceOrderEntry(OrderEntry):
    """The owning module's own sources."""

    KIND = "source"

    @property
    def presentable_name(self) -> str:
        return "<module source>"

    @property
    def key(self) -> str:
        return "<module source>"


class SdkOrderEntry(OrderEntry):
    """An explicitly chosen SDK."""

    KIND = "sdk"

    def __init__(self, owner: RootModel, sdk_name: str) -> None:
        super().__init__(owner)
        self.sdk_name = sdk_name

    @property
    def presentable_name(self) -> str:
        return self.sdk_name

    @property
    def key(self) -> str:
        return self.sdk_name

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "sdk_name": self.sdk_name}


class InheritedSdkOrderEntry(OrderEntry):
    """Placeholder for whatever SDK the project declares."""

    KIND = "inherited-sdk"

    @property
    def presentable_name(self) -> str:
        return "<inherited sdk>"

    @property
    def key(self) -> str:
        return "<inherited sdk>"


class ExportableOrderEntry(OrderEntry):
    """A dependency with a scope that can be re-exported to dependents."""

    def __init__(
        self,
        owner: RootModel,
        scope: DependencyScope = DependencyScope.COMPILE,
        exported: bool = False,
    ) -> None:
        super().__init__(owner)
        self.scope = DependencyScope(scope)
        self.exported = exported

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "scope": str(self.scope),
            "exported": self.exported,
        }


class ModuleOrderEntry(ExportableOrderEntry):
    """Dependency on another module of the project."""

    KIND = "module"

    def __init__(
        self,
        owner: RootModel,
        module_name: str,
        scope: DependencyScope = DependencyScope.COMPILE,
        exported: bool = False,
    ) -> None:
        super().__init__(owner, scope=scope, exported=exported)
        self.module_name = module_name

    @property
    def presentable_name(self) -> str:
        return self.module_name

    @property
    def key(self) -> str:
        return self.module_name

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "module_name": self.module_name}


class LibraryOrderEntry(ExportableOrderEntry):
    """Dependency on a named library."""

    KIND = "library"

    def __init__(
        self,
        owner: RootModel,
        library_name: str,
        scope: DependencyScope = DependencyScope.COMPILE,
        exported: bool = False,
        level: LibraryLevel = LibraryLevel.PROJECT,
    ) -> None:
        super().__init__(owner, scope=scope, exported=exported)
        self.library_name = library_name
        self.level = LibraryLevel(level)

    @property
    def presentable_name(self) -> str:
        return self.library_name

    @property
    def key(self) -> tuple[str, str]:
        return (str(self.level), self.library_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "library_name": self.library_name,
            "level": str(self.level),
        }
