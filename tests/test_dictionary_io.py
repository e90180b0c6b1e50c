"""Tests for project dictionary and library symbol I/O."""
from __future__ import annotations

import logging
from pathlib import Path

import orjson
import pytest

from gikh.bimap import BiMap, BiMapCollisionError
from gikh.dictionary_io import (
    DictionaryFormatError,
    add_project_identifier,
    derive_library_symbols,
    extract_library_pairs,
    load_lexicon,
    load_library_symbols,
    load_project_identifiers,
    parse_project_dictionary,
    render_project_dictionary,
    save_library_snapshot,
)
from gikh.keywords import KEYWORDS
from gikh.lexicon import Lexicon, LexiconCollisionError
from gikh.tokens import Direction

LET = KEYWORDS.to_key("let") or ""

SAMPLE_DICTIONARY = """\
# project vocabulary
tier: project
identifiers:
  חשבון: account
  סכום: total   # running sum

  # grouped below
  גרייס: size
  ליידיק:
  אָן_קאָלאָן
version: 2
  אויסער: outside
"""


class TestParseProjectDictionary:
    def test_entries_in_file_order(self) -> None:
        assert parse_project_dictionary(SAMPLE_DICTIONARY) == [
            ("חשבון", "account"),
            ("סכום", "total"),
            ("גרייס", "size"),
        ]

    def test_first_colon_splits(self) -> None:
        text = "identifiers:\n  צייט: Time:Zone\n"
        assert parse_project_dictionary(text) == [("צייט", "Time:Zone")]

    def test_tab_indentation(self) -> None:
        assert parse_project_dictionary("identifiers:\n\tא: a\n") == [("א", "a")]

    def test_no_section(self) -> None:
        assert parse_project_dictionary("tier: project\n") == []

    def test_duplicates_are_kept_for_the_caller(self) -> None:
        text = "identifiers:\n  א: a\n  א: b\n"
        assert parse_project_dictionary(text) == [("א", "a"), ("א", "b")]

    def test_render_parses_back(self) -> None:
        pairs = [("חשבון", "account"), ("סכום", "total")]
        rendered = render_project_dictionary(pairs)
        assert rendered.startswith("tier: project\nidentifiers:\n")
        assert parse_project_dictionary(rendered) == pairs

    def test_indented_identifiers_key_is_an_entry(self) -> None:
        text = "tier: project\nidentifiers:\n  identifiers: ids\n  א: a\n"
        assert parse_project_dictionary(text) == [("identifiers", "ids"), ("א", "a")]

    def test_indented_header_does_not_open_section(self) -> None:
        assert parse_project_dictionary("tier: project\n  identifiers:\n  א: a\n") == []

    def test_missing_tier_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="gikh.dictionary_io"):
            assert parse_project_dictionary("identifiers:\n  א: a\n") == [("א", "a")]
        assert "no 'tier:' line" in caplog.text

    def test_wrong_tier_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="gikh.dictionary_io"):
            parse_project_dictionary("tier: library\nidentifiers:\n  א: a\n")
        assert "'library'" in caplog.text

    def test_project_tier_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="gikh.dictionary_io"):
            parse_project_dictionary(SAMPLE_DICTIONARY)
        assert caplog.text == ""


class TestLoadProjectIdentifiers:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "לעקסיקאָן.yaml"
        path.write_text(SAMPLE_DICTIONARY, encoding="utf-8")
        bimap = load_project_identifiers(path)
        assert bimap.to_value("סכום") == "total"
        assert len(bimap) == 3

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert len(load_project_identifiers(tmp_path / "absent.yaml")) == 0

    def test_missing_file_strict(self, tmp_path: Path) -> None:
        with pytest.raises(DictionaryFormatError, match="not found"):
            load_project_identifiers(tmp_path / "absent.yaml", missing_ok=False)

    def test_duplicate_primary_named(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.yaml"
        path.write_text("identifiers:\n  א: shared\n  ב: shared\n", encoding="utf-8")
        with pytest.raises(DictionaryFormatError) as excinfo:
            load_project_identifiers(path)
        message = str(excinfo.value)
        assert "duplicate primary name" in message
        assert "shared" in message
        assert excinfo.value.path == path


class TestAddProjectIdentifier:
    def test_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.yaml"
        project = add_project_identifier(path, "חשבון", "account")
        assert project.to_value("חשבון") == "account"
        assert path.read_text(encoding="utf-8") == (
            "tier: project\nidentifiers:\n  חשבון: account\n"
        )

    def test_appends_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.yaml"
        add_project_identifier(path, "חשבון", "account")
        add_project_identifier(path, "סכום", "total")
        assert load_project_identifiers(path).pairs() == [
            ("חשבון", "account"),
            ("סכום", "total"),
        ]

    def test_existing_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.yaml"
        add_project_identifier(path, "חשבון", "account")
        before = path.read_text(encoding="utf-8")
        with pytest.raises(BiMapCollisionError):
            add_project_identifier(path, "חשבון", "ledger")
        assert path.read_text(encoding="utf-8") == before

    def test_keyword_collision_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "dict.yaml"
        with pytest.raises(LexiconCollisionError):
            add_project_identifier(path, "באַנד", "let", Lexicon.for_compilation())
        assert not path.exists()


class TestLibrarySymbols:
    def test_extract_typealias_and_mapping_lines(self) -> None:
        text = (
            "import Foundation\n"
            "public typealias מאַסיוו = Array\n"
            "typealias ווערטערבוך = Dictionary\n"
            "    fileprivate typealias פּאָר<T> = Pair<T>\n"
            "// mapping: צולייגן = append\n"
            "let x = 1\n"
            "typealias בלויז =\n"
        )
        assert extract_library_pairs(text) == [
            ("מאַסיוו", "Array"),
            ("ווערטערבוך", "Dictionary"),
            ("צולייגן", "append"),
        ]

    def test_first_occurrence_wins(self) -> None:
        texts = [
            "typealias א = Alpha\n",
            "typealias א = Other\ntypealias ב = Alpha\ntypealias ג = Gamma\n",
        ]
        assert derive_library_symbols(texts).pairs() == [("א", "Alpha"), ("ג", "Gamma")]

    def test_load_directory_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "b.swift").write_text("typealias א = Second\n", encoding="utf-8")
        (tmp_path / "nested").mkdir()
        (tmp_path / "a.swift").write_text("typealias א = First\n", encoding="utf-8")
        (tmp_path / "nested" / "c.swift").write_text("typealias ב = Third\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("typealias ג = Ignored\n", encoding="utf-8")
        bimap = load_library_symbols(tmp_path)
        assert bimap.to_value("א") == "First"
        assert bimap.to_value("ב") == "Third"
        assert bimap.to_value("ג") is None

    def test_load_single_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Types.swift"
        path.write_text("public typealias סעט = Set\n", encoding="utf-8")
        assert load_library_symbols(path).pairs() == [("סעט", "Set")]

    def test_missing_path_is_empty(self, tmp_path: Path) -> None:
        assert len(load_library_symbols(tmp_path / "absent")) == 0

    def test_snapshot_round_trip(self, tmp_path: Path) -> None:
        library = BiMap([("מאַסיוו", "Array"), ("סעט", "Set")])
        path = tmp_path / "out" / "library.json"
        save_library_snapshot(library, path)
        payload = orjson.loads(path.read_bytes())
        assert payload["tier"] == "library_symbols"
        assert load_library_symbols(path) == library

    def test_invalid_snapshot_json(self, tmp_path: Path) -> None:
        path = tmp_path / "library.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DictionaryFormatError, match="invalid JSON"):
            load_library_symbols(path)

    def test_snapshot_with_bad_pair(self, tmp_path: Path) -> None:
        path = tmp_path / "library.json"
        path.write_bytes(orjson.dumps({"pairs": [["א"]]}))
        with pytest.raises(DictionaryFormatError, match="malformed"):
            load_library_symbols(path)

    def test_snapshot_must_be_bijective(self, tmp_path: Path) -> None:
        path = tmp_path / "library.json"
        path.write_bytes(orjson.dumps({"pairs": [["א", "A"], ["א", "B"]]}))
        with pytest.raises(DictionaryFormatError, match="duplicate localized name"):
            load_library_symbols(path)


class TestLoadLexicon:
    def test_without_dictionary_is_compilation_lexicon(self) -> None:
        lexicon = load_lexicon()
        assert len(lexicon.project_identifiers) == 0
        assert lexicon.translate(LET, Direction.TO_PRIMARY) == "let"

    def test_with_dictionary_and_library(self, tmp_path: Path) -> None:
        dictionary = tmp_path / "dict.yaml"
        dictionary.write_text(SAMPLE_DICTIONARY, encoding="utf-8")
        library = tmp_path / "lib.swift"
        library.write_text("typealias מאַסיוו = Array\n", encoding="utf-8")
        lexicon = load_lexicon(dictionary, library)
        assert lexicon.translate("account", Direction.TO_LOCALIZED) == "חשבון"
        assert lexicon.translate("מאַסיוו", Direction.TO_PRIMARY) == "Array"

    def test_dictionary_colliding_with_library(self, tmp_path: Path) -> None:
        dictionary = tmp_path / "dict.yaml"
        dictionary.write_text("identifiers:\n  רשימה: Array\n", encoding="utf-8")
        library = tmp_path / "lib.swift"
        library.write_text("typealias מאַסיוו = Array\n", encoding="utf-8")
        with pytest.raises(LexiconCollisionError):
            load_lexicon(dictionary, library)
