"""Index builder: folds ingested records into a DictionaryIndex.

The fold carries a small state record between lines:

    current_group  id selected by the last bare integer line (1 before any)
    pending        forms read since the last flush
    selection      how many times a group id line has been seen

A blank line (and the end of input) commits pending forms to the
group table. What happens when a group id is selected again after it
was already committed depends on the re-entry policy:

    append  forms from every selection are appended to the group;
            a group id line also commits forms not yet flushed
    first   forms from a later selection are discarded on flush;
            a group id line drops forms not yet flushed

Dropped forms are counted in BuildStats.discarded_forms.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..ingest.base import Flush, GroupStart, Record, WordEntry
from ..normalizer import AttributeInterner, normalize_word
from ..schema import DictionaryIndex, Form

REENTRY_APPEND = "append"
REENTRY_FIRST = "first"
REENTRY_POLICIES = (REENTRY_APPEND, REENTRY_FIRST)

DEFAULT_GROUP_ID = 1


@dataclass
class BuildStats:
    """Statistics from a build operation."""

    total_lines: int = 0
    total_groups: int = 0
    total_forms: int = 0
    total_words: int = 0
    total_attributes: int = 0
    reentered_groups: int = 0
    discarded_forms: int = 0

    def __repr__(self) -> str:
        return (
            f"BuildStats({self.total_groups} groups, "
            f"{self.total_forms} forms, {self.total_words} words, "
            f"{self.total_attributes} attributes)"
        )


@dataclass
class LoaderState:
    """Accumulator carried across dictionary lines."""

    current_group: int = DEFAULT_GROUP_ID
    pending: list[Form] = field(default_factory=list)
    selection: int = 0


class IndexBuilder:
    """Builds a DictionaryIndex from ingested records."""

    def __init__(
        self,
        group_reentry: str = REENTRY_APPEND,
        intern_attributes: bool = True,
        source: Optional[str] = None,
    ):
        """Initialize builder.

        Args:
            group_reentry: Policy for group ids selected more than once.
            intern_attributes: Share attribute strings between forms.
            source: Description of the dictionary source (kept in the index).

        Raises:
            ValueError: If the re-entry policy is unknown.
        """
        if group_reentry not in REENTRY_POLICIES:
            raise ValueError(
                f"Unknown group re-entry policy: {group_reentry}. "
                f"Available: {list(REENTRY_POLICIES)}"
            )
        self.group_reentry = group_reentry
        self.interner = AttributeInterner() if intern_attributes else None
        self.source = source

        self.state = LoaderState()
        self.stats = BuildStats()

        # Internal storage: word -> group ids, group id -> forms
        self._words: dict[str, list[int]] = {}
        self._groups: dict[int, list[Form]] = {}
        # Selection in which each group was first committed
        self._committed_in: dict[int, int] = {}
        self._seen_groups: set[int] = set()

    def add_record(self, record: Record) -> None:
        """Fold a single record into the builder state."""
        if isinstance(record, GroupStart):
            self._select(record.group_id)
        elif isinstance(record, WordEntry):
            self._add_word(record)
        elif isinstance(record, Flush):
            self.flush()
        else:
            raise TypeError(f"Unknown record type: {type(record).__name__}")

        self.stats.total_lines = max(self.stats.total_lines, record.line_number)

    def add_records(self, records: Iterable[Record]) -> None:
        """Fold a stream of records."""
        for record in records:
            self.add_record(record)

    def _select(self, group_id: int) -> None:
        if group_id in self._seen_groups:
            self.stats.reentered_groups += 1
        self._seen_groups.add(group_id)

        if self.group_reentry == REENTRY_APPEND:
            self.flush()
        else:
            # Unflushed forms are dropped when a new group id line arrives
            self.stats.discarded_forms += len(self.state.pending)

        self.state = LoaderState(
            current_group=group_id,
            selection=self.state.selection + 1,
        )

    def _add_word(self, entry: WordEntry) -> None:
        if self.interner is not None:
            attributes = self.interner.intern_all(entry.attributes)
        else:
            attributes = frozenset(entry.attributes)

        self.state.pending.append(Form(entry.word, attributes))
        self._words.setdefault(normalize_word(entry.word), []).append(
            self.state.current_group
        )

    def flush(self) -> None:
        """Commit pending forms to the current group."""
        state = self.state
        group_id = state.current_group
        # An empty flush still counts as the group's first commit
        committed_in = self._committed_in.setdefault(group_id, state.selection)

        if not state.pending:
            return

        if self.group_reentry == REENTRY_FIRST and committed_in != state.selection:
            self.stats.discarded_forms += len(state.pending)
        else:
            self._groups.setdefault(group_id, []).extend(state.pending)

        state.pending = []

    def build(self) -> DictionaryIndex:
        """Flush remaining forms and freeze the index.

        Returns:
            Immutable DictionaryIndex.
        """
        self.flush()

        groups = {gid: tuple(forms) for gid, forms in self._groups.items()}
        words = {word: tuple(ids) for word, ids in self._words.items()}

        self.stats.total_groups = len(groups)
        self.stats.total_forms = sum(len(forms) for forms in groups.values())
        self.stats.total_words = len(words)
        if self.interner is not None:
            self.stats.total_attributes = len(self.interner)
        else:
            self.stats.total_attributes = len(
                {a for forms in groups.values() for f in forms for a in f.attributes}
            )

        return DictionaryIndex(words=words, groups=groups, source=self.source)


def build_index(
    records: Iterable[Record],
    group_reentry: str = REENTRY_APPEND,
    intern_attributes: bool = True,
    source: Optional[str] = None,
) -> tuple[DictionaryIndex, BuildStats]:
    """Build an index from records in one step.

    Args:
        records: Records from an ingestor.
        group_reentry: Policy for group ids selected more than once.
        intern_attributes: Share attribute strings between forms.
        source: Description of the dictionary source.

    Returns:
        Tuple of (index, stats).

    Raises:
        LoadError: If the records cannot be read.
    """
    builder = IndexBuilder(
        group_reentry=group_reentry,
        intern_attributes=intern_attributes,
        source=source,
    )
    builder.add_records(records)
    index = builder.build()
    return index, builder.stats
