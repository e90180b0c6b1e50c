"""Round-trip checks and lexicon coverage reports."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Any

from gikh.bidi import strip_bidi
from gikh.lexicon import Lexicon
from gikh.scanner import scan
from gikh.tokens import Direction, Mode
from gikh.transpiler import transpile


@dataclass(frozen=True, slots=True)
class LineMismatch:
    line: int  # 1-based
    expected: str
    actual: str

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "expected": self.expected, "actual": self.actual}


@dataclass(frozen=True, slots=True)
class RoundTripReport:
    """Outcome of ``source_mode -> via_mode -> source_mode``."""

    source_mode: Mode
    via_mode: Mode
    original: str
    intermediate: str
    round_tripped: str
    markup_insensitive: bool
    mismatches: tuple[LineMismatch, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.mismatches

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "source_mode": self.source_mode.value,
            "via_mode": self.via_mode.value,
            "markup_insensitive": self.markup_insensitive,
            "mismatches": [m.to_dict() for m in self.mismatches],
        }


def diff_lines(expected: str, actual: str) -> tuple[LineMismatch, ...]:
    """Positional line diff; a missing line compares as the empty string."""
    return tuple(
        LineMismatch(number, want, got)
        for number, (want, got) in enumerate(
            zip_longest(expected.split("\n"), actual.split("\n"), fillvalue=""),
            start=1,
        )
        if want != got
    )


def verify_round_trip(
    source: str,
    lexicon: Lexicon,
    source_mode: Mode = Mode.B,
    via_mode: Mode = Mode.C,
) -> RoundTripReport:
    """Transpile ``source`` to ``via_mode`` and back, then compare with the input.

    When either mode carries directional markup the comparison ignores
    directional controls, so hand-written localized files without markup
    still verify.
    """
    intermediate = transpile(source, lexicon, source_mode, via_mode)
    round_tripped = transpile(intermediate, lexicon, via_mode, source_mode)
    markup_insensitive = source_mode.has_markup or via_mode.has_markup
    if markup_insensitive:
        mismatches = diff_lines(strip_bidi(source), strip_bidi(round_tripped))
    else:
        mismatches = diff_lines(source, round_tripped)
    return RoundTripReport(
        source_mode=source_mode,
        via_mode=via_mode,
        original=source,
        intermediate=intermediate,
        round_tripped=round_tripped,
        markup_insensitive=markup_insensitive,
        mismatches=mismatches,
    )


def untranslated_identifiers(
    sources: Iterable[str],
    lexicon: Lexicon,
    *,
    localized: bool = False,
) -> list[str]:
    """Identifiers no tier translates in either direction, sorted.

    Single-character names and ``_`` are ignored. ``localized`` marks the
    sources as Mode B text (see ``gikh.scanner.scan``).
    """
    missing: set[str] = set()
    for source in sources:
        for token in scan(source, localized=localized):
            if token.kind != "identifier" or len(token.text) < 2:
                continue
            name = token.text
            if name in missing:
                continue
            if (
                lexicon.translate(name, Direction.TO_PRIMARY) is None
                and lexicon.translate(name, Direction.TO_LOCALIZED) is None
            ):
                missing.add(name)
    return sorted(missing)
