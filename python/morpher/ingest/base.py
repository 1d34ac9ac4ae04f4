"""Base ingestor interface for dictionary sources.

All ingestors inherit from Ingestor and implement the parse() method,
turning raw dictionary lines into a stream of typed records. The
records are folded into a DictionaryIndex by morpher.builder.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Union
import bz2
import io
import urllib.request
import zipfile


class LoadError(ValueError):
    """Dictionary source could not be loaded."""


class MalformedRecordError(LoadError):
    """A word line is missing its tab separator."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"Malformed record at line {line_number}: {line!r} (no tab separator)"
        )


@dataclass(frozen=True)
class GroupStart:
    """Bare integer line: starts or reselects a lexeme group."""

    group_id: int
    line_number: int


@dataclass(frozen=True)
class WordEntry:
    """Word line: surface form and its attribute tokens."""

    word: str
    attributes: tuple[str, ...]
    line_number: int


@dataclass(frozen=True)
class Flush:
    """Blank line: commit pending forms of the current group."""

    line_number: int


Record = Union[GroupStart, WordEntry, Flush]


class Ingestor(ABC):
    """Base class for dictionary ingestors.

    Subclasses must implement:
        - parse(lines) -> Iterator of records
        - file_extensions: list of supported extensions

    read_lines() handles files, including compressed archives.
    """

    name: str = "base"
    file_extensions: list[str] = []

    def __init__(self, encoding: str = "utf-8"):
        """Initialize ingestor.

        Args:
            encoding: Text encoding of source files.
        """
        self.encoding = encoding

    @abstractmethod
    def parse(self, lines: Iterable[str]) -> Iterator[Record]:
        """Parse dictionary lines and yield records.

        Args:
            lines: Dictionary lines, with or without trailing newlines.

        Yields:
            GroupStart, WordEntry and Flush records in source order.

        Raises:
            MalformedRecordError: On a structurally invalid line.
        """
        pass

    def read_lines(self, filepath: Path | str) -> Iterator[str]:
        """Read lines from a plain, .zip or .bz2 dictionary file.

        Args:
            filepath: Path to source file.

        Yields:
            Lines without trailing newlines.
        """
        filepath = Path(filepath)

        if filepath.suffix == ".zip":
            with zipfile.ZipFile(filepath) as archive:
                members = [n for n in archive.namelist() if not n.endswith("/")]
                if not members:
                    raise LoadError(f"Empty archive: {filepath}")
                with archive.open(members[0]) as raw:
                    text = io.TextIOWrapper(raw, encoding=self.encoding)
                    for line in text:
                        yield line.rstrip("\r\n")
            return

        if filepath.suffix == ".bz2":
            with bz2.open(filepath, "rt", encoding=self.encoding) as f:
                for line in f:
                    yield line.rstrip("\r\n")
            return

        with open(filepath, "r", encoding=self.encoding) as f:
            for line in f:
                yield line.rstrip("\r\n")

    def ingest_file(self, filepath: Path | str) -> Iterator[Record]:
        """Parse a dictionary file into records."""
        return self.parse(self.read_lines(filepath))


class DownloadableIngestor(Ingestor):
    """Ingestor that can download source files."""

    download_url: str = ""

    def __init__(
        self,
        cache_dir: Path | str,
        encoding: str = "utf-8",
        quiet: bool = False,
    ):
        super().__init__(encoding)
        self.cache_dir = Path(cache_dir)
        self.quiet = quiet

    def _log(self, message: str) -> None:
        if not self.quiet:
            print(f"[{self.name}] {message}")

    def get_cached_path(self) -> Path:
        """Get path where downloaded file should be cached."""
        if not self.download_url:
            raise ValueError(f"No download URL for ingestor: {self.name}")
        filename = self.download_url.split("/")[-1]
        return self.cache_dir / filename

    def download(self, force: bool = False) -> Path:
        """Download source file if not cached.

        Args:
            force: Force re-download even if cached.

        Returns:
            Path to cached file.
        """
        cached_path = self.get_cached_path()

        if cached_path.exists() and not force:
            self._log(f"Using cached: {cached_path}")
            return cached_path

        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self._log(f"Downloading from: {self.download_url}")
        urllib.request.urlretrieve(self.download_url, cached_path)
        self._log(f"Saved to: {cached_path}")

        return cached_path

    def download_and_ingest(self, force: bool = False) -> Iterator[Record]:
        """Download and parse in one step."""
        filepath = self.download(force=force)
        return self.ingest_file(filepath)
