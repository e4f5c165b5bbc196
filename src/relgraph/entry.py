"""Graph entries: nodes holding multi-valued, labeled relations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from relgraph.errors import UnsupportedOperationError
from relgraph.keys import relation_id

if TYPE_CHECKING:
    from relgraph.members import OrderedRelationView


@dataclass(frozen=True, slots=True)
class Literal:
    """A literal leaf value.

    Literals carry no relations and no identifier. Two literals with the
    same text and datatype are equal.
    """

    value: str
    datatype: str | None = None

    identifier = None

    @property
    def is_literal(self) -> bool:
        return True

    @property
    def is_node(self) -> bool:
        return False

    @property
    def types(self) -> frozenset[str]:
        return frozenset((self.datatype,)) if self.datatype else frozenset()

    def has_type(self, type_id: str) -> bool:
        return self.datatype == type_id

    def __str__(self) -> str:
        return self.value


Value = Union["GraphEntry", Literal]


def coerce_value(value: Any) -> Value:
    """Wrap plain strings into literals; entries and literals pass through."""
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, (GraphEntry, Literal)):
        return value
    raise TypeError(f"not a graph value: {value!r}")


def as_values(values: Any) -> list[Value]:
    """Normalize a single value or an iterable of values into a list."""
    if isinstance(values, (str, GraphEntry, Literal)):
        return [coerce_value(values)]
    return [coerce_value(v) for v in values]


@dataclass(eq=False)
class GraphEntry:
    """A node in the graph.

    Relations map a relation identifier to an ordered list of values.
    Values are kept in insertion order per relation and are not
    deduplicated. A relation whose list would become empty is removed.

    Relations may be given as strings or as named entries, in which case
    the entry's identifier is used.

    Entries compare by identity.
    """

    identifier: str | None = None
    types: set[str] = field(default_factory=set)
    _relations: dict[str, list[Value]] = field(
        default_factory=dict, init=False, repr=False
    )

    # -- required relation capabilities -------------------------------

    def get(self, relation: Any, type_id: Any = None) -> list[Value]:
        """Return the values stored under a relation.

        Args:
            relation: Relation identifier or named entry.
            type_id: If given, only values having this type are returned.

        Returns:
            A copy of the value list, empty if the relation is absent.
        """
        values = self._relations.get(relation_id(relation), [])
        if type_id is None:
            return list(values)
        wanted = relation_id(type_id)
        return [v for v in values if v.has_type(wanted)]

    def put(self, relation: Any, value: Any) -> GraphEntry:
        """Append a value to a relation. Strings become literals."""
        self._relations.setdefault(relation_id(relation), []).append(
            coerce_value(value)
        )
        return self

    def remove_all(self, relation: Any) -> list[Value]:
        """Remove a relation, returning the values it held."""
        return self._relations.pop(relation_id(relation), [])

    def relations(self) -> set[str]:
        """Identifiers of all relations currently holding values."""
        return set(self._relations)

    # -- derived relation operations ----------------------------------

    def put_all(self, relation: Any, values: Iterable[Any]) -> GraphEntry:
        key = relation_id(relation)
        new_values = as_values(values)
        if new_values:
            self._relations.setdefault(key, []).extend(new_values)
        return self

    def replace_all(self, relation: Any, values: Any) -> list[Value]:
        """Replace the values of a relation.

        Args:
            relation: Relation to replace.
            values: A single value or a collection; an empty collection
                removes the relation.

        Returns:
            The values previously stored.
        """
        key = relation_id(relation)
        new_values = as_values(values)
        previous = self._relations.pop(key, [])
        if new_values:
            self._relations[key] = new_values
        return previous

    def remove(self, value: Any) -> bool:
        """Remove a value from every relation.

        Relations left without values are dropped.

        Returns:
            Whether anything was removed.
        """
        target = coerce_value(value)
        changed = False
        for key in list(self._relations):
            kept = [v for v in self._relations[key] if v != target]
            if len(kept) == len(self._relations[key]):
                continue
            changed = True
            if kept:
                self._relations[key] = kept
            else:
                del self._relations[key]
        return changed

    def contains(self, value: Any) -> bool:
        """Whether a value is directly referenced from this entry."""
        target = coerce_value(value)
        return any(target in values for values in self._relations.values())

    def contains_key(self, relation: Any) -> bool:
        return relation_id(relation) in self._relations

    def elements(self) -> set[Value]:
        """All referenced values, each once, in no particular order."""
        return {v for values in self._relations.values() for v in values}

    def iter_relations(self) -> Iterator[tuple[str, list[Value]]]:
        """Yield (relation, values) pairs."""
        for key, values in list(self._relations.items()):
            yield key, list(values)

    def iter_edges(self) -> Iterator[tuple[str, Value]]:
        """Yield one (relation, value) pair per stored value."""
        for key, values in self.iter_relations():
            for value in values:
                yield key, value

    # -- types ----------------------------------------------------------

    def add_type(self, type_id: Any) -> GraphEntry:
        self.types.add(relation_id(type_id))
        return self

    def has_type(self, type_id: Any) -> bool:
        return relation_id(type_id) in self.types

    # -- kind ------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self._relations

    @property
    def is_named(self) -> bool:
        return self.identifier is not None

    @property
    def is_anonymous(self) -> bool:
        return not self.is_named

    @property
    def is_literal(self) -> bool:
        return False

    @property
    def is_node(self) -> bool:
        return True

    @property
    def is_leaf(self) -> bool:
        """Whether no relation of this entry points at another node."""
        return not any(v.is_node for _, v in self.iter_edges())

    # -- literal content -------------------------------------------------

    @property
    def value(self) -> str:
        raise UnsupportedOperationError("value of a node entry")

    def set_value(self, text: str) -> GraphEntry:
        """Make a literal the only enumerated member of this entry.

        All index relations are removed; other relations are kept.
        """
        members = self.members
        members.clear()
        members.add(Literal(text))
        return self

    @property
    def members(self) -> OrderedRelationView:
        """Ordered list view over this entry's index relations."""
        from relgraph.members import OrderedRelationView

        return OrderedRelationView(self)
