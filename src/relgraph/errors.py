"""Error taxonomy for relgraph.

Each error also subclasses the builtin exception callers would naturally
catch for the same condition.
"""


class RelgraphError(Exception):
    """Base class for all relgraph errors."""


class InvalidIndexError(RelgraphError, ValueError):
    """A relation key does not encode a valid list index."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"invalid index key {key!r}: {reason}")


class NotFoundError(RelgraphError, LookupError):
    """A searched value is not held at any list index."""


class UnsupportedOperationError(RelgraphError, NotImplementedError):
    """The operation is intentionally not implemented."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}: not yet implemented")
