"""Relation store protocol consumed by the ordered list view."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RelationStore(Protocol):
    """Minimal relation capabilities the ordered list view is built on.

    ``GraphEntry`` implements this; any other store offering the same four
    operations can be wrapped by ``OrderedRelationView`` as well.
    """

    def get(self, relation: str) -> list[Any]: ...

    def put(self, relation: str, value: Any) -> Any: ...

    def remove_all(self, relation: str) -> list[Any]: ...

    def relations(self) -> set[str]: ...
