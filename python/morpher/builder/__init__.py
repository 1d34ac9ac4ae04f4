"""Index builder module.

Folds ingested dictionary records into an immutable DictionaryIndex:
- Word index (upper-cased surface -> group ids, load order)
- Group table (group id -> forms, parse order)
- Build statistics
"""

from .index import (
    BuildStats,
    IndexBuilder,
    LoaderState,
    REENTRY_APPEND,
    REENTRY_FIRST,
    REENTRY_POLICIES,
    build_index,
)

__all__ = [
    "BuildStats",
    "IndexBuilder",
    "LoaderState",
    "REENTRY_APPEND",
    "REENTRY_FIRST",
    "REENTRY_POLICIES",
    "build_index",
]
