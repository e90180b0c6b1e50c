"""Core types for scanning and transpiling: tokens, directions, scopes, modes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal


type TokenKind = Literal[
    "keyword",
    "identifier",
    "string_literal",
    "comment",
    "whitespace",
    "punctuation",
    "operator",
    "number_literal",
    "interpolation_delimiter",
    "unknown",
]

TOKEN_KINDS: tuple[TokenKind, ...] = (
    "keyword",
    "identifier",
    "string_literal",
    "comment",
    "whitespace",
    "punctuation",
    "operator",
    "number_literal",
    "interpolation_delimiter",
    "unknown",
)


@dataclass(frozen=True, slots=True, eq=False)
class Token:
    """One classified span of source text.

    ``start``/``end`` are code-point offsets into the scanned source, half-open.
    Two tokens are equal when kind and text match; offsets are metadata.
    """

    kind: TokenKind
    text: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.kind not in TOKEN_KINDS:
            raise ValueError(f"unknown token kind: {self.kind!r}")
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid token range [{self.start}, {self.end})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.kind, self.text))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, {self.start}:{self.end})"

    def with_text(self, text: str) -> Token:
        """Return a copy carrying ``text``; kind and source range are kept."""
        if text == self.text:
            return self
        return replace(self, text=text)


class Direction(Enum):
    """Vocabulary the translator rewrites symbols into."""

    TO_PRIMARY = "to_primary"
    TO_LOCALIZED = "to_localized"


class Scope(Enum):
    """Which token kinds a translation pass rewrites."""

    KEYWORDS_ONLY = "keywords_only"
    FULL = "full"


class Mode(Enum):
    """The three textual representations of one program.

    A: primary keywords and identifiers, no markup.
    B: localized keywords and identifiers, directional markup.
    C: primary keywords, localized identifiers, no markup (compiler input).
    """

    A = "A"
    B = "B"
    C = "C"

    @property
    def has_markup(self) -> bool:
        return self is Mode.B
