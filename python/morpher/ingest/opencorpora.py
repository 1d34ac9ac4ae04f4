"""OpenCorpora plain-text dictionary ingestor.

Parses the plain-text export of the OpenCorpora morphological dictionary.

Format:
    1                           # Bare integer: lexeme group id
    ЁЖ<TAB>NOUN,anim,masc sing,nomn
    ЕЖА<TAB>NOUN,anim,masc sing,gent
                                # Blank line: group is complete
    2
    ...

Attributes are separated by commas, spaces, or both. The first one is
the part of speech but is otherwise an ordinary attribute.
"""

from pathlib import Path
from typing import Iterable, Iterator

from .base import (
    DownloadableIngestor,
    Flush,
    GroupStart,
    MalformedRecordError,
    Record,
    WordEntry,
)
from ..normalizer import is_group_id, split_attributes

OPENCORPORA_URL = "https://opencorpora.org/files/export/dict/dict.opcorpora.txt.zip"


class OpenCorporaIngestor(DownloadableIngestor):
    """Ingestor for OpenCorpora plain-text dictionaries."""

    name = "opencorpora"
    file_extensions = [".txt", ".zip", ".bz2"]
    download_url = OPENCORPORA_URL

    def __init__(
        self,
        cache_dir: Path | str = ".",
        encoding: str = "utf-8",
        quiet: bool = False,
    ):
        super().__init__(cache_dir, encoding, quiet)

    def parse(self, lines: Iterable[str]) -> Iterator[Record]:
        """Parse OpenCorpora dictionary lines.

        Args:
            lines: Dictionary lines.

        Yields:
            Records in source order.

        Raises:
            MalformedRecordError: If a word line has no tab.
        """
        for line_num, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")

            if not line.strip():
                yield Flush(line_num)
                continue

            if is_group_id(line):
                yield GroupStart(int(line), line_num)
                continue

            word, tab, clause = line.partition("\t")
            if not tab:
                raise MalformedRecordError(line_num, line)

            # An empty clause is accepted as a form with no attributes
            yield WordEntry(word, tuple(split_attributes(clause)), line_num)


def parse(lines: Iterable[str]) -> Iterator[Record]:
    """Convenience function to parse dictionary lines.

    Args:
        lines: Dictionary lines.

    Returns:
        Iterator of records.
    """
    return OpenCorporaIngestor().parse(lines)


def ingest(filepath: Path | str, encoding: str = "utf-8") -> Iterator[Record]:
    """Convenience function to parse an OpenCorpora dictionary file.

    Args:
        filepath: Path to .txt, .zip or .bz2 file.
        encoding: Text encoding.

    Returns:
        Iterator of records.
    """
    ingestor = OpenCorporaIngestor(
        cache_dir=Path(filepath).parent,
        encoding=encoding,
    )
    return ingestor.ingest_file(filepath)


def download_and_ingest(
    cache_dir: Path | str,
    encoding: str = "utf-8",
    force: bool = False,
    quiet: bool = False,
) -> Iterator[Record]:
    """Download and parse the OpenCorpora dictionary.

    Args:
        cache_dir: Directory to cache downloaded files.
        encoding: Text encoding.
        force: Force re-download.
        quiet: Suppress progress output.

    Returns:
        Iterator of records.
    """
    ingestor = OpenCorporaIngestor(
        cache_dir=cache_dir,
        encoding=encoding,
        quiet=quiet,
    )
    return ingestor.download_and_ingest(force=force)
