"""
Domain models — order entries, their owner, and project declarations.

All models are re-exported here for convenient access:

    from orderroots.core.models import OrderEntry, RootModel, Project
"""

from orderroots.core.models.entries import (
    DependencyScope,
    ExportableOrderEntry,
    InheritedSdkOrderEntry,
    LibraryLevel,
    LibraryOrderEntry,
    ModuleOrderEntry,
    ModuleSourceOrderEntry,
    SdkOrderEntry,
)
from orderroots.core.models.order_entry import OrderEntry, OwnerMismatchError, order_key
from orderroots.core.models.project import DependencyRef, ModuleRef, Project
from orderroots.core.models.root_model import RootModel

__all__ = [
    # project.py
    "DependencyRef",
    # entries.py
    "DependencyScope",
    "ExportableOrderEntry",
    "InheritedSdkOrderEntry",
    "LibraryLevel",
    "LibraryOrderEntry",
    "ModuleOrderEntry",
    "ModuleRef",
    "ModuleSourceOrderEntry",
    # order_entry.py
    "OrderEntry",
    "OwnerMismatchError",
    "Project",
    # root_model.py
    "RootModel",
    "SdkOrderEntry",
    "order_key",
]
