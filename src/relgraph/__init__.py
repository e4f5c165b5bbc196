"""Labeled multi-relation graph entries with ordered list views.

Entries hold multi-valued relations. Relations named by the index prefix
(RDF container membership properties by default) can be read and
written as a 1-based, possibly holey list through
``GraphEntry.members`` / ``OrderedRelationView``.
"""

from relgraph.entry import GraphEntry, Literal, as_values, coerce_value
from relgraph.errors import (
    InvalidIndexError,
    NotFoundError,
    RelgraphError,
    UnsupportedOperationError,
)
from relgraph.keys import (
    FIRST_INDEX,
    decode_index,
    encode_index,
    is_index_key,
    member_index,
)
from relgraph.members import OrderedRelationView, index_range, shift_up
from relgraph.store import RelationStore

__all__ = [
    "FIRST_INDEX",
    "GraphEntry",
    "InvalidIndexError",
    "Literal",
    "NotFoundError",
    "OrderedRelationView",
    "RelationStore",
    "RelgraphError",
    "UnsupportedOperationError",
    "as_values",
    "coerce_value",
    "decode_index",
    "encode_index",
    "index_range",
    "is_index_key",
    "member_index",
    "shift_up",
]
