"""
Order entry — an owner-scoped, positionally ordered slot.

An entry lives in exactly one RootModel (its owner) and is ordered by the
``index`` that owner assigns. Three notions of sameness are kept apart:

    identity    ``a == b`` only when ``a is b``; ``hash`` is a per-instance token
    ordering    ``a.compare_to(b)`` compares owner-assigned indices
    kind        ``a.same_kind(b)`` compares concrete variant classes

The entry never validates its index. Keeping a consistent set of indices
across all members is the owner's job (see root_model.py).
"""

from __future__ import annotations

import functools
import itertools
import logging
import threading
import weakref
from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from orderroots.core.models.root_model import RootModel

logger = logging.getLogger(__name__)


# ── Identity tokens ─────────────────────────────────────────────

_token_counter = itertools.count()
_token_lock = threading.Lock()


def _next_identity_token() -> int:
    """Allocate the next process-wide identity token (never reused)."""
    with _token_lock:
        return next(_token_counter)


class OwnerMismatchError(AssertionError):
    """Raised when entries from different (or dead) owners are compared."""


class OrderEntry(ABC):
    """Base class for every entry kind in a module's order.

    Subclasses describe *what* the entry points at; this class only
    carries the owner back-reference, the index and the identity token.
    """

    def __init__(self, owner: RootModel) -> None:
        self._owner_ref: weakref.ref[RootModel] = weakref.ref(owner)
        self._index = 0
        self._identity_token = _next_identity_token()

    # ── Owner & position ─────────────────────────────────────────

    @property
    def owner(self) -> RootModel | None:
        """The owning model, or None once it has been garbage collected."""
        return self._owner_ref()

    @property
    def index(self) -> int:
        return self._index

    def set_index(self, index: int) -> None:
        """Overwrite the position. Called by the owner during reindexing."""
        self._index = index

    @property
    def identity_token(self) -> int:
        return self._identity_token

    # ── Description (per kind) ───────────────────────────────────

    @property
    @abstractmethod
    def presentable_name(self) -> str:
        """Human-readable label for listings."""

    @property
    @abstractmethod
    def key(self) -> Hashable:
        """What this entry refers to, unique among entries of the same kind."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind_name,
            "index": self._index,
            "presentable_name": self.presentable_name,
        }

    @property
    def kind_name(self) -> str:
        return getattr(type(self), "KIND", type(self).__name__)

    # ── Comparison ───────────────────────────────────────────────

    def compare_to(self, other: OrderEntry) -> int:
        """Negative, zero or positive as self sorts before, with or after other.

        Raises:
            OwnerMismatchError: If the two entries don't share a live owner.
        """
        mine = self.owner
        if mine is None or mine is not other.owner:
            logger.error(
                "Order entries compared across owners: %r (owner %s) vs %r (owner %s)",
                self, _owner_label(mine), other, _owner_label(other.owner),
            )
            raise OwnerMismatchError(
                f"Cannot order {self.presentable_name!r} against "
                f"{other.presentable_name!r}: entries belong to different owners"
            )
        return self._index - other._index

    def same_kind(self, other: OrderEntry) -> bool:
        """True iff both entries are the exact same concrete variant."""
        return type(self) is type(other)

    def __eq__(self, other: object) -> bool:
        return other is self

    def __ne__(self, other: object) -> bool:
        return other is not self

    def __hash__(self) -> int:
        return self._identity_token

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, OrderEntry):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, OrderEntry):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, OrderEntry):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, OrderEntry):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.presentable_name!r} "
            f"index={self._index} token={self._identity_token}>"
        )


order_key = functools.cmp_to_key(lambda a, b: a.compare_to(b))


def _owner_label(owner: RootModel | None) -> str:
    if owner is None:
        return "<detached>"
    return repr(owner.module_name)
