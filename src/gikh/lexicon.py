"""Three-tier dictionary stack used by the translator.

Tiers, in lookup priority order:

1. ``keywords``: compiled-in keyword table (``gikh.keywords``).
2. ``library_symbols``: framework aliases derived from declaration files
   (see ``gikh.dictionary_io.derive_library_symbols``).
3. ``project_identifiers``: per-project names from the project dictionary.

Every tier maps a localized symbol (key) to its primary symbol (value).
Project entries are validated against the two higher tiers when the lexicon
is built, never lazily, so a ``Lexicon`` instance is always consistent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

from gikh.bimap import BiMap
from gikh.keywords import KEYWORDS
from gikh.tokens import Direction

log = logging.getLogger(__name__)

type TierName = Literal["keywords", "library_symbols", "project_identifiers"]
type CollisionField = Literal["localized", "primary"]


class LexiconCollisionError(RuntimeError):
    """A project identifier reuses a symbol owned by a higher-priority tier."""

    def __init__(
        self,
        *,
        tier: TierName,
        localized: str,
        primary: str,
        field: CollisionField,
        other: str,
    ) -> None:
        self.tier = tier
        self.localized = localized
        self.primary = primary
        self.field = field
        self.other = other
        symbol = localized if field == "localized" else primary
        super().__init__(
            f"project identifier '{localized}' <-> '{primary}' collides with "
            f"tier '{tier}': {field} symbol '{symbol}' is already used there "
            f"(paired with '{other}')"
        )


def _empty() -> BiMap[str, str]:
    return BiMap()


def _tier_hit(tier: BiMap[str, str], symbol: str) -> str | None:
    """Counterpart of ``symbol`` if it appears anywhere in ``tier``."""
    found = tier.to_value(symbol)
    if found is not None:
        return found
    return tier.to_key(symbol)


def validate_project_tier(
    keywords: BiMap[str, str],
    library_symbols: BiMap[str, str],
    project_identifiers: BiMap[str, str],
) -> None:
    """Raise ``LexiconCollisionError`` on the first project/higher-tier overlap.

    Both the key and the value of every project pair are checked against both
    sides of ``keywords`` and then ``library_symbols``.
    """
    higher: tuple[tuple[TierName, BiMap[str, str]], ...] = (
        ("keywords", keywords),
        ("library_symbols", library_symbols),
    )
    for localized, primary in project_identifiers.pairs():
        for tier_name, tier in higher:
            other = _tier_hit(tier, localized)
            if other is not None:
                raise LexiconCollisionError(
                    tier=tier_name, localized=localized, primary=primary,
                    field="localized", other=other,
                )
            other = _tier_hit(tier, primary)
            if other is not None:
                raise LexiconCollisionError(
                    tier=tier_name, localized=localized, primary=primary,
                    field="primary", other=other,
                )


@dataclass(frozen=True, slots=True)
class Lexicon:
    """Immutable tier stack. Build with ``for_compilation`` or ``for_developer``.

    The project tier is validated against the higher tiers on construction;
    ``LexiconCollisionError`` is raised instead of returning an inconsistent
    lexicon.
    """

    keywords: BiMap[str, str] = field(default_factory=lambda: KEYWORDS)
    library_symbols: BiMap[str, str] = field(default_factory=_empty)
    project_identifiers: BiMap[str, str] = field(default_factory=_empty)

    def __post_init__(self) -> None:
        validate_project_tier(self.keywords, self.library_symbols, self.project_identifiers)

    @classmethod
    def for_compilation(
        cls,
        library_symbols: BiMap[str, str] | None = None,
    ) -> Lexicon:
        """Keywords and library symbols only; the B <-> C pipeline never needs project names."""
        lexicon = cls(
            keywords=KEYWORDS,
            library_symbols=library_symbols if library_symbols is not None else _empty(),
        )
        log.debug(
            "compilation lexicon: %d keywords, %d library symbols",
            len(lexicon.keywords), len(lexicon.library_symbols),
        )
        return lexicon

    @classmethod
    def for_developer(
        cls,
        library_symbols: BiMap[str, str] | None = None,
        project_identifiers: BiMap[str, str] | None = None,
    ) -> Lexicon:
        """All three tiers.

        Raises ``LexiconCollisionError`` if a project entry collides with a
        keyword or library symbol.
        """
        lexicon = cls(
            keywords=KEYWORDS,
            library_symbols=library_symbols if library_symbols is not None else _empty(),
            project_identifiers=(
                project_identifiers if project_identifiers is not None else _empty()
            ),
        )
        log.debug(
            "developer lexicon: %d keywords, %d library symbols, %d project identifiers",
            len(lexicon.keywords), len(lexicon.library_symbols), len(lexicon.project_identifiers),
        )
        return lexicon

    def with_project_identifiers(self, project_identifiers: BiMap[str, str]) -> Lexicon:
        """Copy with the project tier replaced, validated like ``for_developer``."""
        return Lexicon(
            keywords=self.keywords,
            library_symbols=self.library_symbols,
            project_identifiers=project_identifiers,
        )

    def tiers(self) -> Iterator[tuple[TierName, BiMap[str, str]]]:
        yield "keywords", self.keywords
        yield "library_symbols", self.library_symbols
        yield "project_identifiers", self.project_identifiers

    def translate(self, symbol: str, direction: Direction) -> str | None:
        """Counterpart of ``symbol`` from the first tier that knows it, else None."""
        for _, tier in self.tiers():
            if direction is Direction.TO_PRIMARY:
                found = tier.to_value(symbol)
            else:
                found = tier.to_key(symbol)
            if found is not None:
                return found
        return None

