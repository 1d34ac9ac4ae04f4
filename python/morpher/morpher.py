"""Sentence morpher.

Rewrites a sentence token by token. A token may carry a specifier
listing the attributes the output form must have:

    кот{сущ,род} -> КОТА

The replacement is the first form, in word-index group order and then
group form order, whose attribute set contains every requested
attribute. Tokens without a specifier, unknown words and unsatisfiable
requests come out as the upper-cased word.
"""

from pathlib import Path
from typing import Iterable, Optional

from .builder import REENTRY_APPEND, BuildStats, build_index
from .ingest import opencorpora
from .normalizer import (
    normalize_attribute,
    normalize_word,
    parse_specifier,
    split_sentence,
    split_token,
)
from .schema import DictionaryIndex, Form


class SentenceMorpher:
    """Morphs sentences against a loaded dictionary index.

    Instances hold only the immutable index and may be shared across
    threads.
    """

    def __init__(self, index: DictionaryIndex, stats: Optional[BuildStats] = None):
        self.index = index
        self.stats = stats

    @classmethod
    def create(
        cls,
        lines: Iterable[str],
        group_reentry: str = REENTRY_APPEND,
        intern_attributes: bool = True,
        source: Optional[str] = None,
    ) -> "SentenceMorpher":
        """Create a morpher from OpenCorpora dictionary lines.

        Args:
            lines: Dictionary lines.
            group_reentry: Policy for group ids selected more than once.
            intern_attributes: Share attribute strings between forms.
            source: Description of the dictionary source.

        Returns:
            SentenceMorpher over the complete index.

        Raises:
            MalformedRecordError: If a word line has no tab separator.
        """
        index, stats = build_index(
            opencorpora.parse(lines),
            group_reentry=group_reentry,
            intern_attributes=intern_attributes,
            source=source,
        )
        return cls(index, stats)

    @classmethod
    def from_file(
        cls,
        filepath: Path | str,
        encoding: str = "utf-8",
        group_reentry: str = REENTRY_APPEND,
        intern_attributes: bool = True,
    ) -> "SentenceMorpher":
        """Create a morpher from a dictionary file (.txt, .zip or .bz2)."""
        filepath = Path(filepath)
        index, stats = build_index(
            opencorpora.ingest(filepath, encoding=encoding),
            group_reentry=group_reentry,
            intern_attributes=intern_attributes,
            source=str(filepath),
        )
        return cls(index, stats)

    @classmethod
    def from_index(cls, index: DictionaryIndex | Path | str) -> "SentenceMorpher":
        """Create a morpher from an index or a saved JSON index."""
        if not isinstance(index, DictionaryIndex):
            index = DictionaryIndex.load(Path(index))
        return cls(index)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self.index.words

    def forms_of(self, word: str) -> list[Form]:
        """Get candidate forms of a word, in search order."""
        index = self.index
        return [
            form
            for group_id in index.group_ids(normalize_word(word))
            for form in index.forms(group_id)
        ]

    def resolve(self, word: str, attributes: Iterable[str]) -> Optional[Form]:
        """Find the first form of a word carrying all attributes.

        Args:
            word: Word in any case.
            attributes: Required attributes in any case.

        Returns:
            Matching Form, or None if the word is unknown or no form
            satisfies the request.
        """
        required = frozenset(normalize_attribute(a) for a in attributes)
        index = self.index

        for group_id in index.group_ids(normalize_word(word)):
            for form in index.forms(group_id):
                if form.satisfies(required):
                    return form
        return None

    def morph_token(self, token: str) -> str:
        """Morph a single sentence token."""
        word, spec = split_token(token)
        word = normalize_word(word)

        required = parse_specifier(spec)
        if not required:
            return word

        form = self.resolve(word, required)
        if form is None:
            return word
        return form.surface

    def morph(self, sentence: str) -> str:
        """Morph every token of a sentence.

        Args:
            sentence: Tokens separated by spaces or newlines, each
                optionally followed by a {attr1,attr2,...} specifier.

        Returns:
            Morphed tokens joined by single spaces.
        """
        return " ".join(
            self.morph_token(token) for token in split_sentence(sentence)
        ).strip()


def create(lines: Iterable[str], **kwargs) -> SentenceMorpher:
    """Convenience function to create a SentenceMorpher from lines."""
    return SentenceMorpher.create(lines, **kwargs)
