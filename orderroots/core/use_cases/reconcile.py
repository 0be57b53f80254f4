"""
Reconcile use case — bring a live RootModel in line with a declaration.

Existing entries are reused when a declared dependency is the same kind
and targets the same thing; they keep their identity (and hash), only
their scope/export flags and position change. Everything else is added
or removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from orderroots.core.models.entries import (
    ExportableOrderEntry,
    InheritedSdkOrderEntry,
    LibraryOrderEntry,
    ModuleOrderEntry,
    ModuleSourceOrderEntry,
    SdkOrderEntry,
)
from orderroots.core.models.order_entry import OrderEntry
from orderroots.core.models.project import DependencyRef, ModuleRef
from orderroots.core.models.root_model import RootModel

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """What reconciliation did to a module's entries."""

    module: str
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.removed)

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "added": self.added,
            "updated": self.updated,
            "kept": self.kept,
            "removed": self.removed,
        }


def entry_for(model: RootModel, dep: DependencyRef) -> OrderEntry:
    """Create (but don't add) the entry a declaration describes."""
    if dep.kind == "source":
        return ModuleSourceOrderEntry(model)
    if dep.kind == "sdk":
        return SdkOrderEntry(model, dep.name)
    if dep.kind == "inherited-sdk":
        return InheritedSdkOrderEntry(model)
    if dep.kind == "module":
        return ModuleOrderEntry(model, dep.name, scope=dep.scope, exported=dep.exported)
    return LibraryOrderEntry(
        model, dep.name, scope=dep.scope, exported=dep.exported, level=dep.level
    )


def reconcile(
    model: RootModel,
    module_ref: ModuleRef,
    default_sdk: str | None = None,
) -> ReconcileResult:
    """Merge ``module_ref``'s declared dependencies into ``model``.

    The whole merge runs as one batch on the model, so other threads
    see either the old order or the reconciled one.

    Args:
        model: The live entries to update, mutated in place.
        module_ref: The declaration to match.
        default_sdk: Project SDK. When set and the module declares no SDK,
            an inherited-SDK entry is ensured at the front.

    Returns:
        ReconcileResult naming what was added, updated, kept and removed.
    """
    result = ReconcileResult(module=model.module_name)

    declared = list(module_ref.dependencies)
    declared_kinds = {d.kind for d in declared}
    implicit_sdk = bool(default_sdk) and not declared_kinds & {"sdk", "inherited-sdk"}
    if implicit_sdk:
        declared.insert(0, DependencyRef(kind="inherited-sdk"))

    with model.batch():
        existing = model.order_entries()
        claimed: set[OrderEntry] = set()
        ordered: list[OrderEntry] = []

        for dep in declared:
            candidate = entry_for(model, dep)
            match = _find_match(existing, candidate, claimed)

            if match is None:
                model.add(candidate)
                ordered.append(candidate)
                claimed.add(candidate)
                result.added.append(candidate.presentable_name)
                logger.debug("Module '%s': adding %r", model.module_name, candidate)
                continue

            claimed.add(match)
            ordered.append(match)
            if _update_flags(match, candidate):
                result.updated.append(match.presentable_name)
                logger.debug("Module '%s': updated %r", model.module_name, match)
            else:
                result.kept.append(match.presentable_name)

        source_declared = "source" in declared_kinds
        for entry in existing:
            if entry in claimed:
                continue
            if isinstance(entry, ModuleSourceOrderEntry) and not source_declared:
                # Undeclared module source leads, behind only an implicit SDK
                ordered.insert(1 if implicit_sdk else 0, entry)
                result.kept.append(entry.presentable_name)
                continue
            model.remove(entry)
            result.removed.append(entry.presentable_name)
            logger.debug("Module '%s': removing %r", model.module_name, entry)

        model.rearrange(ordered)

    if result.changed:
        logger.info(
            "Reconciled module '%s': +%d ~%d -%d",
            model.module_name, len(result.added), len(result.updated), len(result.removed),
        )
    return result


def _find_match(
    existing: list[OrderEntry],
    candidate: OrderEntry,
    claimed: set[OrderEntry],
) -> OrderEntry | None:
    for entry in existing:
        if entry in claimed:
            continue
        if entry.same_kind(candidate) and entry.key == candidate.key:
            return entry
    return None


def _update_flags(entry: OrderEntry, declared: OrderEntry) -> bool:
    """Copy scope/export from ``declared`` onto ``entry``. True if anything changed."""
    if not isinstance(entry, ExportableOrderEntry) or not isinstance(declared, ExportableOrderEntry):
        return False
    changed = entry.scope != declared.scope or entry.exported != declared.exported
    entry.scope = declared.scope
    entry.exported = declared.exported
    return changed
