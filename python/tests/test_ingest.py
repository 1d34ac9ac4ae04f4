"""Tests for the ingest module."""

import bz2
import pytest
import tempfile
import zipfile
from pathlib import Path

from morpher.ingest import (
    INGESTORS,
    Flush,
    GroupStart,
    Ingestor,
    LoadError,
    MalformedRecordError,
    WordEntry,
    get_ingestor,
    register_ingestor,
)
from morpher.ingest.opencorpora import (
    OPENCORPORA_URL,
    OpenCorporaIngestor,
    parse,
)


class TestOpenCorporaParse:
    """Tests for OpenCorporaIngestor.parse."""

    def test_record_sequence(self):
        """Test a group yields start, words and flush in order."""
        records = list(parse(["7", "КОТ\tсущ ед,им", "КОТА\tсущ ед,род", ""]))

        assert records == [
            GroupStart(7, 1),
            WordEntry("КОТ", ("сущ", "ед", "им"), 2),
            WordEntry("КОТА", ("сущ", "ед", "род"), 3),
            Flush(4),
        ]

    def test_surface_kept_verbatim(self):
        """Test surface strings are not case-folded."""
        records = list(parse(["1", "Москва\tСУЩ гео"]))
        assert records[1].word == "Москва"
        assert records[1].attributes == ("сущ", "гео")

    def test_trailing_newlines_stripped(self):
        """Test raw file lines with newlines parse the same."""
        records = list(parse(["1\n", "КОТ\tсущ\r\n", "\n"]))
        assert isinstance(records[0], GroupStart)
        assert records[1].attributes == ("сущ",)
        assert isinstance(records[2], Flush)

    def test_whitespace_line_is_flush(self):
        records = list(parse(["   "]))
        assert records == [Flush(1)]

    def test_empty_attribute_clause_accepted(self):
        """Test a word with an empty clause has no attributes."""
        records = list(parse(["КОТ\t"]))
        assert records == [WordEntry("КОТ", (), 1)]

    def test_missing_tab_raises(self):
        """Test a word line without tab is rejected."""
        with pytest.raises(MalformedRecordError) as exc_info:
            list(parse(["1", "КОТ сущ ед"]))

        assert exc_info.value.line_number == 2
        assert exc_info.value.line == "КОТ сущ ед"
        assert isinstance(exc_info.value, LoadError)
        assert isinstance(exc_info.value, ValueError)

    def test_only_first_tab_splits(self):
        records = list(parse(["КОТ\tсущ\tед"]))
        assert records[0].word == "КОТ"
        assert records[0].attributes == ("сущ", "ед")


class TestOpenCorporaFiles:
    """Tests for reading dictionary files."""

    def test_plain_text_file(self, sample_dictionary_content):
        """Test reading a plain text dictionary."""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".txt", delete=False, encoding="utf-8"
        ) as f:
            f.write(sample_dictionary_content)
            filepath = Path(f.name)

        try:
            ingestor = OpenCorporaIngestor()
            records = list(ingestor.ingest_file(filepath))

            words = [r.word for r in records if isinstance(r, WordEntry)]
            assert words[:2] == ["КОТ", "КОТА"]
            assert len(words) == 9
        finally:
            filepath.unlink()

    def test_custom_encoding(self):
        """Test a cp1251 encoded dictionary."""
        with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
            f.write("1\nКОТ\tсущ\n".encode("cp1251"))
            filepath = Path(f.name)

        try:
            ingestor = OpenCorporaIngestor(encoding="cp1251")
            records = list(ingestor.ingest_file(filepath))
            assert records[1].word == "КОТ"
        finally:
            filepath.unlink()

    def test_zip_archive(self, sample_dictionary_content):
        """Test reading the first member of a zip archive."""
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir, "dict.opcorpora.txt.zip")
            with zipfile.ZipFile(filepath, "w") as archive:
                archive.writestr("dict.opcorpora.txt", sample_dictionary_content)

            records = list(OpenCorporaIngestor().ingest_file(filepath))
            assert records[0] == GroupStart(1, 1)
            assert records[1].word == "КОТ"

    def test_empty_zip_archive(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir, "empty.zip")
            with zipfile.ZipFile(filepath, "w"):
                pass

            with pytest.raises(LoadError):
                list(OpenCorporaIngestor().ingest_file(filepath))

    def test_bz2_file(self, sample_dictionary_content):
        """Test reading a bz2 compressed dictionary."""
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir, "dict.opcorpora.txt.bz2")
            filepath.write_bytes(bz2.compress(sample_dictionary_content.encode("utf-8")))

            records = list(OpenCorporaIngestor().ingest_file(filepath))
            assert records[1].word == "КОТ"


class TestDownload:
    """Tests for DownloadableIngestor caching."""

    def test_cached_path(self):
        ingestor = OpenCorporaIngestor(cache_dir="/tmp/sources")
        assert ingestor.get_cached_path() == Path("/tmp/sources", OPENCORPORA_URL.split("/")[-1])

    def test_uses_cache(self, capsys):
        """Test an existing cached file is not downloaded again."""
        with tempfile.TemporaryDirectory() as tmpdir:
            ingestor = OpenCorporaIngestor(cache_dir=tmpdir)
            cached = ingestor.get_cached_path()
            cached.write_text("")

            assert ingestor.download() == cached
            assert "Using cached" in capsys.readouterr().out

    def test_quiet(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            ingestor = OpenCorporaIngestor(cache_dir=tmpdir, quiet=True)
            ingestor.get_cached_path().write_text("")
            ingestor.download()
            assert capsys.readouterr().out == ""


class TestRegistry:
    """Tests for the ingestor registry."""

    def test_get_known(self):
        assert get_ingestor("opencorpora") is OpenCorporaIngestor

    def test_get_unknown(self):
        with pytest.raises(ValueError, match="Unknown ingestor"):
            get_ingestor("hunspell")

    def test_register_custom(self):
        """Test registering a custom line format."""

        class PipeIngestor(Ingestor):
            name = "pipe"

            def parse(self, lines):
                for line_num, line in enumerate(lines, start=1):
                    word, _, attrs = line.partition("|")
                    yield WordEntry(word, tuple(attrs.split(",")), line_num)

        register_ingestor("pipe", PipeIngestor)
        try:
            cls = get_ingestor("pipe")
            records = list(cls().parse(["КОТ|сущ,ед"]))
            assert records == [WordEntry("КОТ", ("сущ", "ед"), 1)]
        finally:
            del INGESTORS["pipe"]
