"""Single-pass, lossless tokenizer for primary, localized and hybrid source.

``scan(source)`` never raises: every character lands in exactly one token,
and anything unclassifiable becomes a one-character ``unknown`` token. The
concatenated token text always equals the input.

Single-line string literals are split around interpolations::

    "a \\(b + c) d"  ->  string_literal '"a '
                         interpolation_delimiter '\\('
                         identifier 'b', whitespace, operator '+', ...
                         interpolation_delimiter ')'
                         string_literal ' d"'

Nesting (strings inside interpolations inside strings) is tracked with an
explicit frame stack rather than recursion. Raw strings (``#"..."#``) and
triple-quoted strings are opaque single tokens; interpolation inside them is
deliberately left undecomposed.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from gikh.keywords import ALL_KEYWORDS
from gikh.tokens import Token, TokenKind


OPERATOR_CHARS: frozenset[str] = frozenset("+-*/%=<>!&|^~?")
PUNCTUATION_CHARS: frozenset[str] = frozenset("()[]{},;:.@#")

# ``\(`` in primary/hybrid text; localized text also writes it slash-flipped as ``/(``.
PRIMARY_INTERPOLATION_OPENERS: tuple[str, ...] = ("\\(",)
LOCALIZED_INTERPOLATION_OPENERS: tuple[str, ...] = ("\\(", "/(")

_IDENTIFIER_MARK_CATEGORIES: frozenset[str] = frozenset({"Mn", "Mc", "Pc"})
_JOINERS: frozenset[str] = frozenset({"\u200c", "\u200d"})
_ASCII_DIGITS: frozenset[str] = frozenset("0123456789")
_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
_OCTAL_DIGITS: frozenset[str] = frozenset("01234567")
_BINARY_DIGITS: frozenset[str] = frozenset("01")
_NEWLINES: frozenset[str] = frozenset("\n\r")
_DECIMAL_EXPONENT: frozenset[str] = frozenset("eE")
_HEX_EXPONENT: frozenset[str] = frozenset("pP")


def is_identifier_start(ch: str) -> bool:
    return ch == "_" or ch == "$" or ch.isalpha()


def is_identifier_continue(ch: str) -> bool:
    if ch == "_" or ch.isalnum() or ch in _JOINERS:
        return True
    return unicodedata.category(ch) in _IDENTIFIER_MARK_CATEGORIES


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class _StringFrame:
    """Inside the body of a single-line, interpolating string literal."""


@dataclass(slots=True)
class _InterpolationFrame:
    """Inside ``\\( ... )``; ``depth`` counts unclosed inner parentheses."""

    depth: int = 0


type _Frame = _StringFrame | _InterpolationFrame


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

class Scanner:
    """Cursor over one source string. Use ``scan()`` unless you need the class.

    ``localized`` selects which interpolation openers are recognised inside
    single-line strings: only ``\\(`` for primary and hybrid text, ``\\(`` and
    ``/(`` for localized text.
    """

    def __init__(self, source: str, *, localized: bool = False) -> None:
        self.source = source
        self.localized = localized
        self._openers = (
            LOCALIZED_INTERPOLATION_OPENERS if localized else PRIMARY_INTERPOLATION_OPENERS
        )
        self.pos = 0
        self.tokens: list[Token] = []
        self._frames: list[_Frame] = []

    # ─── Public API ───────────────────────────────────────────────

    def scan(self) -> list[Token]:
        while self.pos < len(self.source):
            frame = self._frames[-1] if self._frames else None
            if isinstance(frame, _StringFrame):
                self._scan_string_fragment()
            else:
                self._scan_code_token(frame)
        return self.tokens

    # ─── Character helpers ────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return ""

    def _starts_with(self, text: str, at: int | None = None) -> bool:
        return self.source.startswith(text, self.pos if at is None else at)

    def _count_run(self, ch: str, at: int) -> int:
        end = at
        while end < len(self.source) and self.source[end] == ch:
            end += 1
        return end - at

    def _emit(self, kind: TokenKind, start: int) -> None:
        self.tokens.append(Token(kind, self.source[start:self.pos], start, self.pos))

    # ─── Code tokens ──────────────────────────────────────────────

    def _scan_code_token(self, frame: _InterpolationFrame | None) -> None:
        start = self.pos
        ch = self.source[start]

        # 1. string literals, possibly raw
        if ch == '"':
            self._begin_string(start, pound_count=0)
            return
        if ch == "#":
            pounds = self._count_run("#", start)
            if self._peek(pounds) == '"':
                self._begin_string(start, pound_count=pounds)
                return

        # 2. comments
        if ch == "/" and self._peek(1) == "/":
            self._scan_line_comment(start)
            return
        if ch == "/" and self._peek(1) == "*":
            self._scan_block_comment(start)
            return

        # 3. whitespace
        if ch.isspace():
            while self.pos < len(self.source) and self.source[self.pos].isspace():
                self.pos += 1
            self._emit("whitespace", start)
            return

        # 4. numbers
        if ch in _ASCII_DIGITS:
            self._scan_number(start)
            return

        # 5. operators
        if ch == "\\":
            self.pos += 1
            self._emit("operator", start)
            return
        if ch in OPERATOR_CHARS:
            self._scan_operator(start)
            return

        # 6. punctuation, with interpolation bookkeeping for parentheses
        if ch in PUNCTUATION_CHARS:
            self.pos += 1
            if frame is not None and ch == "(":
                frame.depth += 1
            elif frame is not None and ch == ")":
                if frame.depth == 0:
                    self._frames.pop()
                    self._emit("interpolation_delimiter", start)
                    return
                frame.depth -= 1
            self._emit("punctuation", start)
            return

        # 7. identifiers and keywords
        if ch == "`":
            self._scan_backtick_identifier(start)
            return
        if is_identifier_start(ch):
            self._scan_word(start)
            return

        self.pos += 1
        self._emit("unknown", start)

    def _scan_line_comment(self, start: int) -> None:
        self.pos += 2
        while self.pos < len(self.source) and self.source[self.pos] not in _NEWLINES:
            self.pos += 1
        self._emit("comment", start)

    def _scan_block_comment(self, start: int) -> None:
        self.pos += 2
        depth = 1
        while depth > 0 and self.pos < len(self.source):
            if self._starts_with("/*"):
                depth += 1
                self.pos += 2
            elif self._starts_with("*/"):
                depth -= 1
                self.pos += 2
            else:
                self.pos += 1
        self._emit("comment", start)

    def _scan_operator(self, start: int) -> None:
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch not in OPERATOR_CHARS:
                break
            # never swallow the start of a comment
            if ch == "/" and self._peek(1) in ("/", "*"):
                break
            self.pos += 1
        self._emit("operator", start)

    def _scan_word(self, start: int) -> None:
        self.pos += 1
        while self.pos < len(self.source) and is_identifier_continue(self.source[self.pos]):
            self.pos += 1
        word = self.source[start:self.pos]
        self._emit("keyword" if word in ALL_KEYWORDS else "identifier", start)

    def _scan_backtick_identifier(self, start: int) -> None:
        self.pos += 1
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in _NEWLINES:
                break
            self.pos += 1
            if ch == "`":
                break
        self._emit("identifier", start)

    # ─── Numbers ──────────────────────────────────────────────────

    def _consume_digits(self, digits: frozenset[str]) -> int:
        consumed = 0
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == "_":
                self.pos += 1
                continue
            if ch not in digits:
                break
            self.pos += 1
            consumed += 1
        return consumed

    def _consume_exponent(self, markers: frozenset[str]) -> None:
        if self._peek() not in markers:
            return
        offset = 1
        if self._peek(offset) in ("+", "-"):
            offset += 1
        if self._peek(offset) in _ASCII_DIGITS:
            self.pos += offset
            self._consume_digits(_ASCII_DIGITS)

    def _scan_number(self, start: int) -> None:
        first = self.source[start]
        self.pos += 1
        prefix = self._peek()
        if first == "0" and prefix in ("x", "X"):
            self.pos += 1
            self._consume_digits(_HEX_DIGITS)
            if self._peek() == "." and self._peek(1) in _HEX_DIGITS:
                self.pos += 1
                self._consume_digits(_HEX_DIGITS)
            self._consume_exponent(_HEX_EXPONENT)
            self._emit("number_literal", start)
            return
        if first == "0" and prefix in ("o", "O"):
            self.pos += 1
            self._consume_digits(_OCTAL_DIGITS)
            self._emit("number_literal", start)
            return
        if first == "0" and prefix in ("b", "B"):
            self.pos += 1
            self._consume_digits(_BINARY_DIGITS)
            self._emit("number_literal", start)
            return

        self._consume_digits(_ASCII_DIGITS)
        # "." only joins the literal when a digit follows: not "1..<5" or "1.description"
        if self._peek() == "." and self._peek(1) in _ASCII_DIGITS:
            self.pos += 1
            self._consume_digits(_ASCII_DIGITS)
        self._consume_exponent(_DECIMAL_EXPONENT)
        self._emit("number_literal", start)

    # ─── Strings ──────────────────────────────────────────────────

    def _begin_string(self, start: int, pound_count: int) -> None:
        quote_at = start + pound_count
        if pound_count > 0 or self._starts_with('"""', at=quote_at):
            self._scan_opaque_string(start, pound_count)
            return
        # opening quote becomes part of the first fragment
        self.pos = quote_at + 1
        self._frames.append(_StringFrame())
        self._scan_string_fragment(fragment_start=start)

    def _scan_opaque_string(self, start: int, pound_count: int) -> None:
        """Raw or multi-line literal, consumed whole up to its exact closer."""
        self.pos = start + pound_count
        quotes = 3 if self._starts_with('"""') else 1
        self.pos += quotes
        closer = '"' * quotes + "#" * pound_count
        escape = "\\" + "#" * pound_count
        while self.pos < len(self.source):
            if self._starts_with(escape):
                # escaped char (including an escaped quote) cannot close
                self.pos += len(escape) + 1
                continue
            if self._starts_with(closer):
                self.pos += len(closer)
                break
            self.pos += 1
        self.pos = min(self.pos, len(self.source))
        self._emit("string_literal", start)

    def _scan_string_fragment(self, fragment_start: int | None = None) -> None:
        """Scan string body from the cursor to the next opener or the closing quote."""
        start = self.pos if fragment_start is None else fragment_start
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if self.source.startswith(self._openers, self.pos):
                if self.pos > start:
                    self._emit("string_literal", start)
                opener_start = self.pos
                self.pos += 2
                self._emit("interpolation_delimiter", opener_start)
                self._frames.append(_InterpolationFrame())
                return
            if ch == "\\":
                self.pos = min(self.pos + 2, len(self.source))
                continue
            if ch == '"':
                self.pos += 1
                self._frames.pop()
                self._emit("string_literal", start)
                return
            if ch in _NEWLINES:
                # unterminated literal: the newline belongs to the code after it
                break
            self.pos += 1
        self._frames.pop()
        if self.pos > start:
            self._emit("string_literal", start)


def scan(source: str, *, localized: bool = False) -> list[Token]:
    """Tokenize ``source``. Total: never raises, never drops a character.

    Pass ``localized=True`` for Mode B text, where ``/(`` also opens an
    interpolation.
    """
    return Scanner(source, localized=localized).scan()


def join_tokens(tokens: list[Token]) -> str:
    """Concatenate token text; ``join_tokens(scan(s)) == s`` for every ``s``."""
    return "".join(token.text for token in tokens)
