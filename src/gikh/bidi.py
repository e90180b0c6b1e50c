"""Render token streams with or without Unicode directional markup.

Mode B output is right-to-left dominant. Each token is wrapped so it
displays correctly in a right-to-left editor and can be recovered exactly:

* Hebrew-script keywords/identifiers -> ``RLI text PDI``
* other keywords/identifiers         -> ``LRI text PDI``
* string literals                    -> ``FSI text PDI`` (content untouched)
* operators                         -> slashes swapped, then ``LRI ... PDI``
* interpolation delimiters          -> opener written ``/(``, then ``LRI ... PDI``
* ``(`` ``[`` ``{``                  -> followed by ``LRM``
* whitespace, comments, numbers, unknown -> verbatim

Modes A and C are left-to-right: every directional control is stripped,
operator backslashes become forward slashes again, and the localized
interpolation opener ``/(`` is restored to ``\\(``.
"""

from __future__ import annotations

from collections.abc import Sequence

from gikh.tokens import Mode, Token


LRI = "\u2066"  # left-to-right isolate
RLI = "\u2067"  # right-to-left isolate
FSI = "\u2068"  # first strong isolate
PDI = "\u2069"  # pop directional isolate
LRM = "\u200e"  # left-to-right mark
RLM = "\u200f"  # right-to-left mark

# Legacy embeddings/overrides: LRE, RLE, PDF, LRO, RLO. Stripped, never emitted.
LEGACY_CONTROLS: frozenset[str] = frozenset("\u202a\u202b\u202c\u202d\u202e")

BIDI_CONTROLS: frozenset[str] = frozenset({LRI, RLI, FSI, PDI, LRM, RLM}) | LEGACY_CONTROLS

OPENING_BRACKETS: frozenset[str] = frozenset("([{")

# Hebrew block and Hebrew presentation forms.
RTL_RANGES: tuple[tuple[int, int], ...] = (
    (0x0590, 0x05FF),
    (0xFB1D, 0xFB4F),
)

_SLASH_SWAP = str.maketrans({"/": "\\", "\\": "/"})
_BACKSLASH_TO_SLASH = str.maketrans({"\\": "/"})
_STRIP_TABLE = str.maketrans({ch: None for ch in BIDI_CONTROLS})


def is_rtl_char(ch: str) -> bool:
    code = ord(ch)
    return any(low <= code <= high for low, high in RTL_RANGES)


def contains_rtl(text: str) -> bool:
    """True if any code point falls in the Hebrew script ranges."""
    return any(is_rtl_char(ch) for ch in text)


def strip_bidi(text: str) -> str:
    """Remove every directional control character."""
    return text.translate(_STRIP_TABLE)


def flip_slashes(text: str) -> str:
    """Swap ``/`` and ``\\``."""
    return text.translate(_SLASH_SWAP)


def _isolate(opener: str, text: str) -> str:
    return f"{opener}{text}{PDI}"


def _primary_interpolation(text: str) -> str:
    if text.startswith("/"):
        return "\\" + text[1:]
    return text


def _localized_interpolation(text: str) -> str:
    if text.startswith("\\"):
        return "/" + text[1:]
    return text


def _annotate_localized(tokens: Sequence[Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        text = token.text
        match token.kind:
            case "keyword" | "identifier":
                parts.append(_isolate(RLI if contains_rtl(text) else LRI, text))
            case "string_literal":
                parts.append(_isolate(FSI, text))
            case "operator":
                parts.append(_isolate(LRI, flip_slashes(text)))
            case "interpolation_delimiter":
                parts.append(_isolate(LRI, _localized_interpolation(text)))
            case "punctuation":
                parts.append(text)
                # anchor the direction of the bracketed content that follows
                if text in OPENING_BRACKETS:
                    parts.append(LRM)
            case "whitespace" | "comment" | "number_literal" | "unknown":
                parts.append(text)
    return "".join(parts)


def _annotate_plain(tokens: Sequence[Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        text = strip_bidi(token.text)
        match token.kind:
            case "operator":
                parts.append(text.translate(_BACKSLASH_TO_SLASH))
            case "interpolation_delimiter":
                parts.append(_primary_interpolation(text))
            case (
                "keyword" | "identifier" | "string_literal" | "comment"
                | "whitespace" | "punctuation" | "number_literal" | "unknown"
            ):
                parts.append(text)
    return "".join(parts)


def annotate(tokens: Sequence[Token], target_mode: Mode) -> str:
    """Render ``tokens`` as final text for ``target_mode``."""
    if target_mode is Mode.B:
        return _annotate_localized(tokens)
    return _annotate_plain(tokens)
