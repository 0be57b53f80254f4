"""
RootModel — the owner of a module's ordered entries.

A RootModel holds one module's entries in order and is the only thing
that assigns their indices. Every mutation runs under the model's lock
and finishes with one reindex pass, so readers never see a half-updated
set of indices.

    model = RootModel("app")
    core = model.add_module_dependency("core")
    lib = model.add_library("requests", scope=DependencyScope.RUNTIME)
    model.move(lib, 0)
    model.order_entries()   # [lib, <module source>, core]
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from orderroots.core.models.entries import (
    DependencyScope,
    InheritedSdkOrderEntry,
    LibraryLevel,
    LibraryOrderEntry,
    ModuleOrderEntry,
    ModuleSourceOrderEntry,
    SdkOrderEntry,
)
from orderroots.core.models.order_entry import OrderEntry, order_key

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=OrderEntry)


class RootModel:
    """Ordered entries of a single module.

    Args:
        module_name: Name of the owning module.
        with_source: Start with a ModuleSourceOrderEntry, as new modules do.
    """

    def __init__(self, module_name: str, *, with_source: bool = True) -> None:
        self.module_name = module_name
        self._entries: list[OrderEntry] = []
        self._lock = threading.RLock()
        if with_source:
            self.ensure_source()

    # ── Membership ───────────────────────────────────────────────

    def add(self, entry: E) -> E:
        """Append an entry created for this model."""
        with self._lock:
            self._check_new(entry)
            self._entries.append(entry)
            self._reindex()
        return entry

    def insert(self, position: int, entry: E) -> E:
        """Insert an entry at ``position`` (clamped like ``list.insert``)."""
        with self._lock:
            self._check_new(entry)
            self._entries.insert(position, entry)
            self._reindex()
        return entry

    def remove(self, entry: OrderEntry) -> None:
        """Remove this exact entry instance.

        Raises:
            ValueError: If the entry is not a member.
        """
        with self._lock:
            position = self._position_of(entry)
            del self._entries[position]
            self._reindex()
        logger.debug("Removed %r from module '%s'", entry, self.module_name)

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.debug("Cleared %d entries from module '%s'", dropped, self.module_name)

    @contextmanager
    def batch(self) -> Iterator[RootModel]:
        """Hold the model's lock across several mutations.

        Other threads block until the batch ends, so multi-step edits
        (see reconcile) are applied as one phase:

            with model.batch():
                model.remove(old)
                model.rearrange(new_order)
        """
        with self._lock:
            yield self

    # ── Reordering ───────────────────────────────────────────────

    def move(self, entry: OrderEntry, position: int) -> None:
        """Relocate one member to ``position``."""
        with self._lock:
            del self._entries[self._position_of(entry)]
            self._entries.insert(position, entry)
            self._reindex()

    def rearrange(self, entries: Iterable[OrderEntry]) -> None:
        """Replace the order with a permutation of the current members.

        Raises:
            ValueError: If ``entries`` is not exactly the current members.
        """
        new_order = list(entries)
        with self._lock:
            # Entries hash by identity, so set comparison is a membership check
            if len(new_order) != len(self._entries) or set(new_order) != set(self._entries):
                raise ValueError(
                    f"Rearranged entries of module '{self.module_name}' must be "
                    "a permutation of its current entries"
                )
            self._entries = new_order
            self._reindex()

    # ── Factories ────────────────────────────────────────────────

    def ensure_source(self) -> ModuleSourceOrderEntry:
        """Return the module source entry, adding one if missing."""
        with self._lock:
            existing = self.find(ModuleSourceOrderEntry, "<module source>")
            if existing is not None:
                return existing
            return self.add(ModuleSourceOrderEntry(self))

    def add_module_dependency(
        self,
        module_name: str,
        scope: DependencyScope = DependencyScope.COMPILE,
        exported: bool = False,
    ) -> ModuleOrderEntry:
        return self.add(ModuleOrderEntry(self, module_name, scope=scope, exported=exported))

    def add_library(
        self,
        library_name: str,
        scope: DependencyScope = DependencyScope.COMPILE,
        exported: bool = False,
        level: LibraryLevel = LibraryLevel.PROJECT,
    ) -> LibraryOrderEntry:
        return self.add(
            LibraryOrderEntry(self, library_name, scope=scope, exported=exported, level=level)
        )

    def set_sdk(self, sdk_name: str) -> SdkOrderEntry:
        """Use an explicit SDK, replacing any current SDK entry in place."""
        return self._replace_sdk(SdkOrderEntry(self, sdk_name))

    def inherit_sdk(self) -> InheritedSdkOrderEntry:
        """Use the project SDK, replacing any current SDK entry in place."""
        return self._replace_sdk(InheritedSdkOrderEntry(self))

    def _replace_sdk(self, entry: E) -> E:
        with self._lock:
            current = self.sdk_entry()
            if current is None:
                return self.add(entry)
            position = self._position_of(current)
            self._entries[position] = entry
            self._reindex()
        logger.debug("Module '%s' SDK %r -> %r", self.module_name, current, entry)
        return entry

    # ── Queries ──────────────────────────────────────────────────

    def order_entries(self) -> list[OrderEntry]:
        """Snapshot of the entries, sorted by their assigned index."""
        with self._lock:
            return sorted(self._entries, key=order_key)

    def entries_of_kind(self, kind: type[E]) -> list[E]:
        """Entries whose concrete class is exactly ``kind``, in order."""
        return [e for e in self.order_entries() if type(e) is kind]

    def find(self, kind: type[E], key: Hashable) -> E | None:
        """First entry of exactly ``kind`` whose key matches."""
        for entry in self.entries_of_kind(kind):
            if entry.key == key:
                return entry
        return None

    def module_dependencies(self) -> list[ModuleOrderEntry]:
        return self.entries_of_kind(ModuleOrderEntry)

    def libraries(self) -> list[LibraryOrderEntry]:
        return self.entries_of_kind(LibraryOrderEntry)

    def sdk_entry(self) -> SdkOrderEntry | InheritedSdkOrderEntry | None:
        """The SDK entry, explicit or inherited, if any."""
        for entry in self.order_entries():
            if isinstance(entry, (SdkOrderEntry, InheritedSdkOrderEntry)):
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        """Consistent snapshot: indices are read under the lock."""
        with self._lock:
            return {
                "module": self.module_name,
                "entries": [e.to_dict() for e in self.order_entries()],
            }

    # ── Container protocol ───────────────────────────────────────

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, entry: object) -> bool:
        with self._lock:
            return any(e is entry for e in self._entries)

    def __iter__(self) -> Iterator[OrderEntry]:
        return iter(self.order_entries())

    def __repr__(self) -> str:
        return f"<RootModel {self.module_name!r} entries={len(self)}>"

    # ── Internals ────────────────────────────────────────────────

    def _check_new(self, entry: OrderEntry) -> None:
        if entry.owner is not self:
            raise ValueError(
                f"{entry!r} was created for another module and cannot be "
                f"added to '{self.module_name}'"
            )
        if entry in self:
            raise ValueError(f"{entry!r} is already in module '{self.module_name}'")

    def _position_of(self, entry: OrderEntry) -> int:
        for position, member in enumerate(self._entries):
            if member is entry:
                return position
        raise ValueError(f"{entry!r} is not in module '{self.module_name}'")

    def _reindex(self) -> None:
        """Assign indices 0..n-1 in list order. Caller holds the lock."""
        for position, entry in enumerate(self._entries):
            entry.set_index(position)
        logger.debug("Reindexed module '%s' (%d entries)", self.module_name, len(self._entries))
