"""Lossless transposition between primary and localized program text."""

from gikh.bidi import annotate, contains_rtl, strip_bidi
from gikh.bimap import BiMap, BiMapCollision, BiMapCollisionError
from gikh.dictionary_io import (
    DEFAULT_PROJECT_DICTIONARY,
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
from gikh.keywords import KEYWORDS, is_keyword
from gikh.lexicon import Lexicon, LexiconCollisionError, validate_project_tier
from gikh.scanner import Scanner, join_tokens, scan
from gikh.tokens import Direction, Mode, Scope, Token, TokenKind
from gikh.translator import translate
from gikh.transpiler import (
    LOCALIZED_SUFFIX,
    PRIMARY_SUFFIX,
    Transpiler,
    detect_mode,
    resolve_translation,
    transpile,
)
from gikh.verify import RoundTripReport, untranslated_identifiers, verify_round_trip

__all__ = [
    "BiMap",
    "BiMapCollision",
    "BiMapCollisionError",
    "DEFAULT_PROJECT_DICTIONARY",
    "DictionaryFormatError",
    "Direction",
    "KEYWORDS",
    "LOCALIZED_SUFFIX",
    "Lexicon",
    "LexiconCollisionError",
    "Mode",
    "PRIMARY_SUFFIX",
    "RoundTripReport",
    "Scanner",
    "Scope",
    "Token",
    "TokenKind",
    "Transpiler",
    "add_project_identifier",
    "annotate",
    "contains_rtl",
    "derive_library_symbols",
    "detect_mode",
    "extract_library_pairs",
    "is_keyword",
    "join_tokens",
    "load_lexicon",
    "load_library_symbols",
    "load_project_identifiers",
    "parse_project_dictionary",
    "render_project_dictionary",
    "resolve_translation",
    "save_library_snapshot",
    "scan",
    "strip_bidi",
    "translate",
    "transpile",
    "untranslated_identifiers",
    "validate_project_tier",
    "verify_round_trip",
]
