"""Scan -> translate -> annotate, for every ordered pair of modes.

Two workflows share one pipeline:

* compiler workflow, B <-> C: only reserved words change; identifiers are
  already in the vocabulary the compiler sees (``Scope.KEYWORDS_ONLY``).
* developer workflow, A <-> B and A <-> C: identifiers are translated too
  (``Scope.FULL``).

The direction is ``TO_LOCALIZED`` exactly when the target is Mode B; A and C
are both primary-keyword outputs.
"""

from __future__ import annotations

from pathlib import Path

from gikh.bidi import annotate
from gikh.lexicon import Lexicon
from gikh.scanner import scan
from gikh.tokens import Direction, Mode, Scope
from gikh.translator import translate


LOCALIZED_SUFFIX = ".gikh"
PRIMARY_SUFFIX = ".swift"

_COMPILER_PAIRS: frozenset[tuple[Mode, Mode]] = frozenset({
    (Mode.B, Mode.C),
    (Mode.C, Mode.B),
})


def resolve_translation(source_mode: Mode, target_mode: Mode) -> tuple[Direction, Scope]:
    """Direction and scope for converting ``source_mode`` into ``target_mode``.

    Same-mode pairs resolve to a keywords-only pass toward the target's
    vocabulary; ``transpile`` short-circuits them before translating.
    """
    direction = Direction.TO_LOCALIZED if target_mode is Mode.B else Direction.TO_PRIMARY
    if source_mode is target_mode or (source_mode, target_mode) in _COMPILER_PAIRS:
        return direction, Scope.KEYWORDS_ONLY
    return direction, Scope.FULL


def transpile(
    source: str,
    lexicon: Lexicon,
    source_mode: Mode,
    target_mode: Mode,
) -> str:
    """Convert ``source`` from ``source_mode`` into ``target_mode``.

    Same-mode conversion returns ``source`` unchanged.
    """
    if source_mode is target_mode:
        return source
    direction, scope = resolve_translation(source_mode, target_mode)
    tokens = scan(source, localized=source_mode is Mode.B)
    translated = translate(tokens, lexicon, direction, scope)
    return annotate(translated, target_mode)


def detect_mode(path: str | Path) -> Mode:
    """``.gikh`` files hold Mode B; anything else is treated as Mode C.

    Mode A and Mode C share the primary file extension, so callers that know
    a file is fully primary pass ``Mode.A`` explicitly.
    """
    if Path(path).suffix == LOCALIZED_SUFFIX:
        return Mode.B
    return Mode.C


def output_suffix(target_mode: Mode) -> str:
    return LOCALIZED_SUFFIX if target_mode is Mode.B else PRIMARY_SUFFIX


class Transpiler:
    """A lexicon bound once and reused across many sources.

    Holds no mutable state, so one instance can serve concurrent callers.
    """

    __slots__ = ("lexicon",)

    def __init__(self, lexicon: Lexicon) -> None:
        self.lexicon = lexicon

    def transpile(self, source: str, source_mode: Mode, target_mode: Mode) -> str:
        return transpile(source, self.lexicon, source_mode, target_mode)

    def transpile_file(self, path: Path, target_mode: Mode, source_mode: Mode | None = None) -> str:
        text = path.read_text(encoding="utf-8")
        return self.transpile(text, source_mode or detect_mode(path), target_mode)
