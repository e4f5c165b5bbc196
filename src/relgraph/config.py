"""Environment driven configuration constants."""

from __future__ import annotations

import os

# Environment variable names
ENV_DEBUG = "RELGRAPH_DEBUG"
ENV_LOG_LEVEL = "RELGRAPH_LOG_LEVEL"
ENV_INDEX_PREFIX = "RELGRAPH_INDEX_PREFIX"

# RDF container membership properties: rdf:_1, rdf:_2, ...
RDF_INDEX_PREFIX = "http://www.w3.org/1999/02/22-rdf-syntax-ns#_"

DEFAULT_LOG_LEVEL = "WARNING"


def is_debug() -> bool:
    """Whether RELGRAPH_DEBUG is set to a truthy value."""
    return os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes", "on")


def log_level() -> str:
    """Resolve the log level name.

    RELGRAPH_DEBUG wins over RELGRAPH_LOG_LEVEL.
    """
    if is_debug():
        return "DEBUG"
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()


def index_prefix() -> str:
    """Prefix used for index relation keys when none is given."""
    return os.environ.get(ENV_INDEX_PREFIX) or RDF_INDEX_PREFIX
