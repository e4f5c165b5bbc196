"""Index key codec for ordered relations.

An index key is a relation identifier of the form ``{prefix}{n}`` where
``n`` is the decimal representation of an integer >= FIRST_INDEX, e.g.
``http://www.w3.org/1999/02/22-rdf-syntax-ns#_3``. Indices are plain
Python ints and therefore unbounded.
"""

from __future__ import annotations

import re
from typing import Any

from relgraph import config
from relgraph.errors import InvalidIndexError

# RDF list indices are 1-based
FIRST_INDEX = 1

# canonical decimal: no sign, no leading zeros
_DIGITS = re.compile(r"0|[1-9][0-9]*", re.ASCII)

# int <-> str conversion is capped (sys.get_int_max_str_digits), so very
# long numbers are converted in chunks of this many digits
_CHUNK_DIGITS = 1000
_CHUNK_BASE = 10**_CHUNK_DIGITS


def default_prefix() -> str:
    return config.index_prefix()


def _digits_to_int(digits: str) -> int:
    if len(digits) <= _CHUNK_DIGITS:
        return int(digits)
    head = len(digits) % _CHUNK_DIGITS or _CHUNK_DIGITS
    value = int(digits[:head])
    for start in range(head, len(digits), _CHUNK_DIGITS):
        value = value * _CHUNK_BASE + int(digits[start : start + _CHUNK_DIGITS])
    return value


def _int_to_digits(value: int) -> str:
    if value < _CHUNK_BASE:
        return str(value)
    chunks = []
    while value >= _CHUNK_BASE:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


def is_index_key(key: str, prefix: str | None = None) -> bool:
    """Whether a relation key carries the index prefix.

    This is a prefix test only; the suffix may still fail to decode.
    """
    return key.startswith(prefix if prefix is not None else default_prefix())


def encode_index(index: int, prefix: str | None = None) -> str:
    """Encode a list index as a relation key.

    Args:
        index: Index to encode, must be >= FIRST_INDEX.
        prefix: Key prefix (default: configured index prefix).

    Raises:
        ValueError: If the index is out of range. This is a caller bug,
            not a malformed key, hence not InvalidIndexError.
    """
    if index < FIRST_INDEX:
        raise ValueError(f"index out of range: {index}")
    if prefix is None:
        prefix = default_prefix()
    return prefix + _int_to_digits(index)


def _parse_suffix(key: str, prefix: str) -> int:
    suffix = key[len(prefix) :]
    if not _DIGITS.fullmatch(suffix):
        raise InvalidIndexError(
            key, "suffix is not a canonical decimal integer"
        )
    return _digits_to_int(suffix)


def decode_index(key: str, prefix: str | None = None) -> int:
    """Decode a relation key into its list index.

    Raises:
        InvalidIndexError: If the key lacks the prefix, the suffix is not a
            canonical decimal number (sign, leading zeros), or the number
            is below FIRST_INDEX.
    """
    if prefix is None:
        prefix = default_prefix()
    if not key.startswith(prefix):
        raise InvalidIndexError(key, "missing index prefix")
    index = _parse_suffix(key, prefix)
    if index < FIRST_INDEX:
        raise InvalidIndexError(key, f"index must be >= {FIRST_INDEX}")
    return index


def member_index(key: str, prefix: str | None = None) -> int | None:
    """Return the list index of a member key, None for other keys.

    Keys without the prefix and ``{prefix}0`` are not list members.

    Raises:
        InvalidIndexError: If the key carries the prefix but its suffix is
            not a canonical decimal number.
    """
    if prefix is None:
        prefix = default_prefix()
    if not key.startswith(prefix):
        return None
    index = _parse_suffix(key, prefix)
    return index if index >= FIRST_INDEX else None


def relation_id(relation: Any) -> str:
    """Normalize a relation given as a string or a named entry."""
    if isinstance(relation, str):
        return relation
    identifier = getattr(relation, "identifier", None)
    if identifier is None:
        raise ValueError(
            f"relation must be a string or a named entry: {relation!r}"
        )
    return identifier
