"""morpher - Dictionary-driven sentence morphing.

Loads a morphological dictionary (OpenCorpora plain-text format) and
rewrites sentences, replacing annotated tokens with the dictionary form
that carries the requested grammatical attributes.

Core concepts:
    - A lexeme group holds all inflected forms of one lemma
    - Each form is a surface string tagged with attributes (POS, case, ...)
    - A token specifier lists attributes the output form must have

Example:
    "кот{сущ,род}" -> "КОТА"
    "кот"          -> "КОТ"  (no specifier: upper-cased passthrough)

Usage:
    from morpher import SentenceMorpher

    morpher = SentenceMorpher.create(dictionary_lines)
    morpher.morph("мама мыла раму{сущ,мн}")

    # Or from a file, downloaded export, or compiled JSON index
    morpher = SentenceMorpher.from_file("dict.opcorpora.txt.zip")
    morpher.index.save(Path("index.json"))
    morpher = SentenceMorpher.from_index("index.json")
"""

from .ingest.base import LoadError, MalformedRecordError
from .morpher import SentenceMorpher, create
from .schema import DictionaryIndex, Form

__version__ = "0.1.0"

__all__ = [
    "SentenceMorpher",
    "create",
    "DictionaryIndex",
    "Form",
    "LoadError",
    "MalformedRecordError",
]
