"""Dictionary ingestion module.

Provides pluggable ingestors that turn dictionary lines into records:
- OpenCorpora plain-text export (.txt, .zip, .bz2)
- Custom formats via register_ingestor()

Usage:
    from morpher.ingest import opencorpora

    records = opencorpora.parse(lines)
    records = opencorpora.ingest("path/to/dict.opcorpora.txt")
    records = opencorpora.download_and_ingest(cache_dir="./sources")
"""

from .base import (
    DownloadableIngestor,
    Flush,
    GroupStart,
    Ingestor,
    LoadError,
    MalformedRecordError,
    Record,
    WordEntry,
)
from . import opencorpora

# Register available ingestors
INGESTORS: dict[str, type[Ingestor]] = {
    "opencorpora": opencorpora.OpenCorporaIngestor,
}


def get_ingestor(name: str) -> type[Ingestor]:
    """Get ingestor class by name."""
    if name not in INGESTORS:
        raise ValueError(f"Unknown ingestor: {name}. Available: {list(INGESTORS.keys())}")
    return INGESTORS[name]


def register_ingestor(name: str, ingestor_cls: type[Ingestor]) -> None:
    """Register a custom ingestor."""
    INGESTORS[name] = ingestor_cls


__all__ = [
    "Ingestor",
    "DownloadableIngestor",
    "Record",
    "GroupStart",
    "WordEntry",
    "Flush",
    "LoadError",
    "MalformedRecordError",
    "opencorpora",
    "get_ingestor",
    "register_ingestor",
    "INGESTORS",
]
