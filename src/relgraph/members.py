"""Ordered list view over index relations.

Relations named ``{prefix}{n}`` (n >= 1) are read as positions of a
1-based, possibly holey list. Each position holds a list of values. The
view never stores anything itself: every operation is translated into
relation reads and writes on the underlying store, so views can be
created and dropped freely.

The list logic lives in module level functions working on any
``RelationStore``; ``OrderedRelationView`` bundles them behind a
list-like interface.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

import structlog

from relgraph.entry import GraphEntry, Literal, Value, as_values, coerce_value
from relgraph.errors import NotFoundError, UnsupportedOperationError
from relgraph.keys import (
    FIRST_INDEX,
    default_prefix,
    encode_index,
    is_index_key,
    member_index,
)
from relgraph.store import RelationStore

logger = structlog.get_logger(__name__)


def iter_indices(store: RelationStore, prefix: str) -> Iterator[int]:
    """Yield the indices in use, unordered.

    ``{prefix}0`` is not a list member and is skipped.

    Raises:
        InvalidIndexError: If a key carries the prefix but its suffix is
            not a canonical decimal number.
    """
    for key in store.relations():
        index = member_index(key, prefix)
        if index is not None:
            yield index


def sorted_indices(store: RelationStore, prefix: str) -> list[int]:
    return sorted(iter_indices(store, prefix))


def _as_target(value: Any) -> Value | None:
    if not isinstance(value, (str, GraphEntry, Literal)):
        return None
    return coerce_value(value)


def has_index_keys(store: RelationStore, prefix: str) -> bool:
    """Whether any relation key carries the index prefix."""
    return any(is_index_key(key, prefix) for key in store.relations())


def index_range(store: RelationStore, prefix: str) -> tuple[int, int] | None:
    """Return (first, last) index in use, or None if there is none."""
    first = last = None
    for index in iter_indices(store, prefix):
        if first is None:
            first = last = index
        elif index < first:
            first = index
        elif index > last:
            last = index
    if first is None:
        return None
    return first, last


def next_free_index(store: RelationStore, position: int, prefix: str) -> int:
    """Return the lowest unused index >= position."""
    occupied = set(iter_indices(store, prefix))
    free = position
    while free in occupied:
        free += 1
    return free


def shift_up(store: RelationStore, position: int, prefix: str) -> int:
    """Move the run of occupied indices starting at position up by one.

    Only indices up to the first free slot move; anything above a gap
    stays where it is. Indices are processed from the top down so no
    slot is written before its old values have been moved away.

    Returns:
        The formerly free index that is now occupied, or position itself
        if position was free (nothing moved).
    """
    encode_index(position, prefix)
    free = next_free_index(store, position, prefix)
    for index in range(free - 1, position - 1, -1):
        moved = store.remove_all(encode_index(index, prefix))
        target = encode_index(index + 1, prefix)
        for value in moved:
            store.put(target, value)
    if free > position:
        logger.debug(
            "shifted list members",
            position=position,
            free_index=free,
            moved=free - position,
        )
    return free


class OrderedRelationView:
    """List-like view over the index relations of a store.

    Positions are the 1-based indices encoded in the relation keys. Each
    position holds a list of values; a position without values is a gap
    and is indistinguishable from an unused one. ``len(view)`` counts
    occupied positions, not the numeric span.

    Nothing is cached: two views over the same store always agree, and
    iteration re-reads the store each time it is started.
    """

    __slots__ = ("store", "prefix")

    def __init__(self, store: RelationStore, prefix: str | None = None):
        self.store = store
        self.prefix = prefix if prefix is not None else default_prefix()

    def _key(self, position: int) -> str:
        return encode_index(position, self.prefix)

    # -- range ----------------------------------------------------------

    def range(self) -> tuple[int, int] | None:
        """Return the first and last index in use, or None if empty."""
        return index_range(self.store, self.prefix)

    def first(self) -> int | None:
        bounds = self.range()
        return bounds[0] if bounds else None

    def last(self) -> int | None:
        bounds = self.range()
        return bounds[1] if bounds else None

    def is_empty(self) -> bool:
        """Whether no index relation is present."""
        return not has_index_keys(self.store, self.prefix)

    def size(self) -> int:
        """Number of occupied positions.

        This is not necessarily ``last()``; use ``len(elements())`` for the
        number of individual values.
        """
        return sum(1 for _ in iter_indices(self.store, self.prefix))

    # -- reads ------------------------------------------------------------

    def get(self, position: int) -> list[Value]:
        """Return the values at a position, empty for a gap."""
        return self.store.get(self._key(position))

    def entries(self) -> Iterator[tuple[int, list[Value]]]:
        """Yield (index, values) pairs in ascending index order."""
        for index in sorted_indices(self.store, self.prefix):
            values = self.store.get(self._key(index))
            if values:
                yield index, values

    def elements(self) -> list[Value]:
        """All values, flattened in index order."""
        return [value for values in self for value in values]

    def sub_list(self, start: int, stop: int) -> list[list[Value]]:
        """Return the non-empty positions in [start, stop)."""
        encode_index(start, self.prefix)
        return [
            values for index, values in self.entries() if start <= index < stop
        ]

    def to_list(self) -> list[list[Value]]:
        return list(self)

    # -- search -----------------------------------------------------------

    def contains(self, value: Any) -> bool:
        """Whether any position holds the value."""
        target = _as_target(value)
        if target is None:
            return False
        return any(target in values for values in self)

    def contains_all(self, values: Iterable[Any]) -> bool:
        return all(self.contains(v) for v in values)

    def index_of(self, value: Any) -> int:
        """Return the lowest index holding the value.

        Raises:
            NotFoundError: If no position holds the value.
        """
        target = _as_target(value)
        if target is None:
            raise NotFoundError(f"value not in list: {value!r}")
        for index, values in self.entries():
            if target in values:
                return index
        raise NotFoundError(f"value not in list: {value!r}")

    def last_index_of(self, value: Any) -> int:
        """Return the highest index holding the value.

        Raises:
            NotFoundError: If no position holds the value.
        """
        target = _as_target(value)
        if target is None:
            raise NotFoundError(f"value not in list: {value!r}")
        for index in reversed(sorted_indices(self.store, self.prefix)):
            if target in self.store.get(self._key(index)):
                return index
        raise NotFoundError(f"value not in list: {value!r}")

    # -- writes -----------------------------------------------------------

    def add(self, values: Any) -> bool:
        """Store values at a new position one above the highest in use.

        Args:
            values: A single value or a collection of values.

        Returns:
            Always True.
        """
        last = self.last()
        key = self._key(FIRST_INDEX if last is None else last + 1)
        for value in as_values(values):
            self.store.put(key, value)
        return True

    def add_all(self, collections: Iterable[Any]) -> bool:
        """``add`` each collection in turn. Returns True."""
        for values in collections:
            self.add(values)
        return True

    def insert(self, position: int, values: Any) -> None:
        """Store values at a position, shifting occupied positions up.

        Positions from ``position`` up to the first free one move up by
        one. Since the list may be holey, this does not necessarily raise
        the highest index in use.
        """
        new_values = as_values(values)
        shift_up(self.store, position, self.prefix)
        key = self._key(position)
        for value in new_values:
            self.store.put(key, value)

    def insert_all(self, position: int, collections: Iterable[Any]) -> bool:
        """``insert`` each collection at the same position in turn.

        The last collection ends up at ``position``.
        """
        for values in collections:
            self.insert(position, values)
        return True

    def add_to(self, position: int, values: Any) -> None:
        """Add values to a position without moving other positions."""
        key = self._key(position)
        for value in as_values(values):
            self.store.put(key, value)

    def clear(self) -> None:
        """Remove every index relation."""
        indices = sorted_indices(self.store, self.prefix)
        for index in indices:
            self.store.remove_all(self._key(index))
        if indices:
            logger.debug(
                "cleared list",
                first=indices[0],
                last=indices[-1],
                removed=len(indices),
            )

    # -- unsupported --------------------------------------------------------

    def remove(self, position: int) -> list[Value]:
        raise UnsupportedOperationError("remove")

    def remove_value(self, value: Any) -> bool:
        raise UnsupportedOperationError("remove_value")

    def remove_values(self, values: Iterable[Any]) -> bool:
        raise UnsupportedOperationError("remove_values")

    def retain_all(self, values: Iterable[Any]) -> bool:
        raise UnsupportedOperationError("retain_all")

    def set(self, position: int, values: Any) -> list[Value]:
        raise UnsupportedOperationError("set")

    def list_iterator(
        self, position: int | None = None
    ) -> Iterator[list[Value]]:
        raise UnsupportedOperationError("list_iterator")

    def to_array(self, target_type: type) -> Any:
        raise UnsupportedOperationError("to_array")

    # -- python protocols -------------------------------------------------

    def __iter__(self) -> Iterator[list[Value]]:
        for _, values in self.entries():
            yield values

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __getitem__(self, position: int | slice) -> Any:
        if isinstance(position, slice):
            if position.step not in (None, 1):
                raise UnsupportedOperationError("stepped slice")
            start = FIRST_INDEX if position.start is None else position.start
            if position.stop is None:
                return [
                    values
                    for index, values in self.entries()
                    if index >= start
                ]
            return self.sub_list(start, position.stop)
        return self.get(position)

    def __setitem__(self, position: int, values: Any) -> None:
        raise UnsupportedOperationError("set")

    def __delitem__(self, position: int) -> None:
        raise UnsupportedOperationError("remove")

    def __reversed__(self) -> Iterator[list[Value]]:
        raise UnsupportedOperationError("reversed iteration")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.store!r})"
