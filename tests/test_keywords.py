"""Tests for the compiled-in keyword tier."""
from __future__ import annotations

from gikh.keywords import (
    ALL_KEYWORDS,
    KEYWORD_PAIRS,
    KEYWORDS,
    LOCALIZED_KEYWORDS,
    PRIMARY_KEYWORDS,
    is_keyword,
)


class TestKeywordTier:
    def test_table_is_bijective(self) -> None:
        assert len(KEYWORDS) == len(KEYWORD_PAIRS)
        assert len(set(KEYWORDS.values())) == len(KEYWORD_PAIRS)

    def test_every_value_is_a_primary_keyword(self) -> None:
        assert set(KEYWORDS.values()) <= PRIMARY_KEYWORDS

    def test_vocabularies_are_disjoint(self) -> None:
        assert not (LOCALIZED_KEYWORDS & PRIMARY_KEYWORDS)

    def test_core_declarations_present(self) -> None:
        for primary in ("func", "let", "var", "struct", "class", "return", "if"):
            assert KEYWORDS.to_key(primary) is not None, primary

    def test_localized_keywords_use_hebrew_script(self) -> None:
        for localized in LOCALIZED_KEYWORDS:
            assert any("\u0590" <= ch <= "\u05ff" for ch in localized), localized


class TestIsKeyword:
    def test_primary_and_localized(self) -> None:
        assert is_keyword("let")
        assert is_keyword(KEYWORDS.to_key("let") or "")

    def test_untranslated_primary_keyword(self) -> None:
        # reserved but without a localized counterpart
        assert "IBOutlet" in ALL_KEYWORDS
        assert KEYWORDS.to_key("IBOutlet") is None

    def test_plain_identifier(self) -> None:
        assert not is_keyword("account")
