"""Text normalization for morpher.

Handles case folding of surface words and grammatical attributes,
splitting of attribute clauses and sentence specifiers, and the
attribute interner shared by all forms of a loaded dictionary.
"""

import re
from typing import Iterable, Optional

# Attribute clauses use commas, spaces or both: "NOUN,anim,masc sing,nomn"
ATTRIBUTE_SEPARATORS = re.compile(r"[,\s]+")

# Sentence tokens are separated by single spaces and newlines
TOKEN_SEPARATORS = re.compile(r"[ \n]")

# A bare group id line: "12", " 12 ", "+12"
GROUP_ID_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")

# Specifier delimiters: "кот{сущ,род}"
SPEC_BRACES = re.compile(r"[{}]")


def normalize_word(word: str) -> str:
    """Normalize a surface word for lookup (upper-case)."""
    return word.upper()


def normalize_attribute(attribute: str) -> str:
    """Normalize an attribute token (lower-case, stripped)."""
    return attribute.strip().lower()


def split_attributes(clause: str) -> list[str]:
    """Split an attribute clause into normalized tokens.

    Both commas and spaces separate tokens; empty fragments produced
    by ", " sequences are dropped. Order and duplicates are kept.

    Args:
        clause: Raw attribute clause, e.g. "сущ ед, муж".

    Returns:
        List of lower-cased attribute tokens.
    """
    return [
        token for token in ATTRIBUTE_SEPARATORS.split(clause.lower()) if token
    ]


def is_group_id(line: str) -> bool:
    """Check if a dictionary line is a bare integer group id."""
    return bool(GROUP_ID_PATTERN.match(line))


def split_token(token: str) -> tuple[str, Optional[str]]:
    """Split a sentence token into its word and raw specifier.

    "кот{сущ,род}" -> ("кот", "сущ,род")
    "кот"          -> ("кот", None)
    "кот{}"        -> ("кот", "")
    "кот}род"      -> ("кот", "род")

    Either brace ends the word; the specifier runs to the next brace
    (or the end of the token) and anything after it is ignored.
    """
    parts = SPEC_BRACES.split(token, maxsplit=2)
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def parse_specifier(spec: Optional[str]) -> frozenset[str]:
    """Parse a raw specifier into the set of required attributes."""
    if not spec:
        return frozenset()
    return frozenset(split_attributes(spec))


def split_sentence(sentence: str) -> list[str]:
    """Split a sentence into tokens on spaces and newlines."""
    return TOKEN_SEPARATORS.split(sentence)


class AttributeInterner:
    """Deduplicating pool of attribute strings.

    Identical tokens across forms resolve to one shared string object,
    which keeps large dictionaries (millions of forms, a few hundred
    distinct tags) small in memory.
    """

    def __init__(self):
        self._pool: dict[str, str] = {}

    def intern(self, attribute: str) -> str:
        """Return the pooled instance of an attribute."""
        return self._pool.setdefault(attribute, attribute)

    def intern_all(self, attributes: Iterable[str]) -> frozenset[str]:
        """Intern several attributes into a frozenset."""
        return frozenset(self.intern(a) for a in attributes)

    def __len__(self) -> int:
        return len(self._pool)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._pool
