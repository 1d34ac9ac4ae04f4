"""Dictionary index schema for morpher.

Core concept:
    - A lexeme group (integer id) holds every inflected form of one lemma
    - Each form is a surface string plus a set of grammatical attributes
    - The word index maps an upper-cased surface string to the groups
      containing it, in the order they were loaded

Example:
    group 1: "КОТ" {сущ, ед, им}, "КОТА" {сущ, ед, род}
    words:   "КОТ" -> (1,), "КОТА" -> (1,)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
import json

from .ingest.base import LoadError

FORMAT_VERSION = 1


@dataclass(frozen=True)
class Form:
    """One inflected surface string and its attributes."""

    surface: str                    # Stored verbatim, original casing
    attributes: frozenset[str]      # Lower-cased grammatical tags

    def satisfies(self, required: frozenset[str]) -> bool:
        """Check if this form carries every required attribute."""
        return required <= self.attributes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "surface": self.surface,
            "attributes": sorted(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Form":
        """Create from dictionary."""
        return cls(
            surface=data["surface"],
            attributes=frozenset(data.get("attributes", [])),
        )


@dataclass(frozen=True)
class DictionaryIndex:
    """Loaded dictionary: word index plus group table.

    Both mappings hold tuples only; nothing is mutated after the
    builder returns, so one index can be shared between threads.
    """

    words: dict[str, tuple[int, ...]] = field(default_factory=dict)
    groups: dict[int, tuple[Form, ...]] = field(default_factory=dict)
    source: Optional[str] = None
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def group_ids(self, word: str) -> tuple[int, ...]:
        """Get group ids for an already upper-cased word."""
        return self.words.get(word, ())

    def forms(self, group_id: int) -> tuple[Form, ...]:
        """Get forms of a group (empty if the group was never committed)."""
        return self.groups.get(group_id, ())

    def count_forms(self) -> int:
        """Get total number of stored forms."""
        return sum(len(forms) for forms in self.groups.values())

    def attributes(self) -> set[str]:
        """Get every distinct attribute in the index."""
        result: set[str] = set()
        for forms in self.groups.values():
            for form in forms:
                result.update(form.attributes)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "format_version": FORMAT_VERSION,
            "source": self.source,
            "generated_at": self.generated_at,
            "word_count": len(self.words),
            "group_count": len(self.groups),
            "words": {word: list(ids) for word, ids in self.words.items()},
            # JSON object keys are strings; ids are restored on load
            "groups": {
                str(group_id): [f.to_dict() for f in forms]
                for group_id, forms in self.groups.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DictionaryIndex":
        """Create from dictionary.

        Raises:
            LoadError: If the data does not have the index shape.
        """
        try:
            return cls(
                words={
                    word: tuple(int(i) for i in ids)
                    for word, ids in data["words"].items()
                },
                groups={
                    int(group_id): tuple(Form.from_dict(f) for f in forms)
                    for group_id, forms in data["groups"].items()
                },
                source=data.get("source"),
                generated_at=data.get("generated_at", ""),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise LoadError(f"Invalid index data: {e!r}") from e

    def save(self, filepath: Path) -> None:
        """Save index to JSON file."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False)

    @classmethod
    def load(cls, filepath: Path) -> "DictionaryIndex":
        """Load index from JSON file."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)
