"""
Unit tests for catalog reading (kdb_ingest.reader).

Tests quote repair on fully-quoted exports with unescaped inner quotes,
and DataFrame decoding of the repaired text.
"""

from __future__ import annotations

import pytest

from kdb_ingest.exceptions import CatalogFormatError
from kdb_ingest.reader import read_catalog, read_catalog_text, repair_quotes


class TestRepairQuotes:
    """Tests for repair_quotes()."""

    def test_plain_fields_unchanged(self):
        text = '"a","b"\r\n"c","d"'
        assert repair_quotes(text) == text

    def test_inner_quotes_escaped(self):
        assert repair_quotes('"A1","say "hi" now"') == '"A1","say ""hi"" now"'

    def test_quote_at_field_end(self):
        assert repair_quotes('"say "hi"","x"') == '"say ""hi""","x"'

    def test_empty_field(self):
        assert repair_quotes('"a","","b"') == '"a","","b"'

    def test_spaces_around_row_break(self):
        assert repair_quotes('"a" \r\n "b"') == '"a"\r\n"b"'

    def test_lf_row_break(self):
        assert repair_quotes('"a"\n"b"') == '"a"\n"b"'


class TestReadCatalogText:
    """Tests for read_catalog_text()."""

    def test_reads_all_rows_as_strings(self, sample_catalog_text: str):
        df = read_catalog_text(sample_catalog_text)
        assert len(df) == 4
        assert df["科目番号"].tolist() == ["GB10101", "GB20201", "", "GB30301"]
        assert df["授業方法"].iloc[0] == "1"

    def test_empty_cells_stay_empty_strings(self, sample_catalog_text: str):
        df = read_catalog_text(sample_catalog_text)
        assert df["備考"].iloc[0] == ""
        assert not df.isna().any().any()

    def test_inner_quotes_preserved(self, sample_catalog_text: str):
        df = read_catalog_text(sample_catalog_text)
        assert df["授業概要"].iloc[1] == 'テキスト"アルゴリズム入門"を輪読する。'

    def test_cell_whitespace_preserved(self, sample_catalog_text: str):
        df = read_catalog_text(sample_catalog_text)
        assert df["単位数"].iloc[0] == " 2.0 "

    def test_without_repair(self):
        df = read_catalog_text('科目番号,科目名\nGB1,"A, B"\n', repair=False)
        assert df["科目名"].iloc[0] == "A, B"

    def test_header_names_stripped(self):
        df = read_catalog_text('" 科目番号 "\r\n"GB1"')
        assert list(df.columns) == ["科目番号"]

    def test_required_columns(self, sample_catalog_text: str):
        with pytest.raises(CatalogFormatError, match="存在しない"):
            read_catalog_text(sample_catalog_text, required_columns=["科目番号", "存在しない"])

    def test_empty_text(self):
        with pytest.raises(CatalogFormatError, match="empty"):
            read_catalog_text("  \r\n")


class TestReadCatalog:
    """Tests for read_catalog() on files."""

    def test_reads_file_with_bom(self, tmp_path, sample_catalog_text: str):
        path = tmp_path / "kdb.csv"
        path.write_text("\ufeff" + sample_catalog_text, encoding="utf-8")
        df = read_catalog(path)
        assert df.columns[0] == "科目番号"
        assert len(df) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_catalog(tmp_path / "missing.csv")
