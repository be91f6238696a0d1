"""
Tests for the inverted index builder and the index file format.
"""

import pytest

from collection import load_collection
from invert import (
    TermTable,
    build_index,
    index_document,
    is_metadata_token,
    load_term_table,
    normalize_word,
    write_index,
)


class TestNormalizeWord:
    """Tests for token normalization."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("Mars", "mars"),
            ("planet.", "planet"),
            ("return?", "return"),
            ("end.;:,?*", "end"),
            ("e.g.", "e.g"),
            ("(mars)", ""),
            ("42nd", ""),
            ("...", ""),
            ("", ""),
        ],
    )
    def test_normalize(self, token, expected):
        assert normalize_word(token) == expected

    def test_leading_punctuation_is_kept(self):
        # only trailing characters from the fixed set are stripped
        assert normalize_word("don't!") == "don't!"

    @pytest.mark.parametrize("token", ["\u00e9clair", "\u00c9cole"])
    def test_non_ascii_first_letter_is_rejected(self, token):
        assert normalize_word(token) == ""


class TestMetadataTokens:
    """Tests for recognizing corpus metadata."""

    @pytest.mark.parametrize("token", ["#start", "#end", "#startSection", "Section-1", "Section-2", "url1", "url42x"])
    def test_metadata(self, token):
        assert is_metadata_token(token)

    @pytest.mark.parametrize("token", ["url", "urls", "section-1", "Section-3", "mars", "url\u00b2"])
    def test_content(self, token):
        assert not is_metadata_token(token)


class TestTermTable:
    """Tests for ordering and idempotent inserts."""

    def test_items_are_sorted(self):
        table = TermTable()
        for term, doc in [("zeta", "url2"), ("alpha", "url3"), ("zeta", "url1"), ("alpha", "url10")]:
            table.add(term, doc)

        assert list(table.items()) == [("alpha", ["url10", "url3"]), ("zeta", ["url1", "url2"])]

    def test_repeated_term_in_document_is_stored_once(self):
        table = TermTable()
        index_document(table, "url1", "mars Mars MARS. mars?")

        assert table.as_dict() == {"mars": ["url1"]}

    def test_link_section_names_are_not_indexed(self):
        table = TermTable()
        index_document(table, "url1", "#start Section-1 url2 url3 #end Section-1 #start Section-2 moon #end Section-2")

        assert table.as_dict() == {"moon": ["url1"]}


class TestBuildIndex:
    """Tests for indexing a whole collection."""

    def test_sample_collection(self, sample_collection):
        store, _, bodies = load_collection(sample_collection)

        table = build_index(store, bodies)

        assert table.documents("mars") == ["url11", "url21", "url31", "url41"]
        assert table.documents("planet") == ["url31"]
        assert table.documents("return") == ["url41"]
        assert "url21" not in table
        assert "section-1" not in table

    def test_rebuilding_is_idempotent(self, sample_collection, tmp_path):
        store, _, bodies = load_collection(sample_collection)
        first = tmp_path / "first.txt"
        second = tmp_path / "second.txt"

        write_index(first, build_index(store, bodies))
        write_index(second, build_index(store, bodies))

        assert first.read_text() == second.read_text()


class TestIndexFile:
    """Tests for writing and reading the index file."""

    def test_write_format(self, tmp_path):
        table = TermTable()
        table.add("fish", "url2")
        table.add("fish", "url1")
        table.add("cat", "url2")
        path = tmp_path / "invertedIndex.txt"

        write_index(path, table)

        assert path.read_text() == "cat url2\nfish url1 url2\n"

    def test_load_skips_blank_lines(self, tmp_path):
        path = tmp_path / "invertedIndex.txt"
        path.write_text("cat url2\n\nfish url1 url2\n")

        table = load_term_table(path)

        assert table.as_dict() == {"cat": ["url2"], "fish": ["url1", "url2"]}

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_term_table(tmp_path / "invertedIndex.txt")
