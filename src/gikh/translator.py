"""Token-level vocabulary substitution.

Only ``keyword`` and ``identifier`` tokens are ever rewritten. String
literals, comments and every other kind are opaque and pass through with
their text untouched. A symbol missing from every tier is not an error: it
keeps its original text.
"""

from __future__ import annotations

from collections.abc import Sequence

from gikh.lexicon import Lexicon
from gikh.tokens import Direction, Scope, Token


def translate_token(
    token: Token,
    lexicon: Lexicon,
    direction: Direction,
    scope: Scope,
) -> Token:
    match token.kind:
        case "keyword":
            replacement = lexicon.translate(token.text, direction)
        case "identifier":
            if scope is not Scope.FULL:
                return token
            replacement = lexicon.translate(token.text, direction)
        case (
            "string_literal" | "comment" | "whitespace" | "punctuation"
            | "operator" | "number_literal" | "interpolation_delimiter" | "unknown"
        ):
            return token
    if replacement is None:
        return token
    return token.with_text(replacement)


def translate(
    tokens: Sequence[Token],
    lexicon: Lexicon,
    direction: Direction,
    scope: Scope,
) -> list[Token]:
    """Return a new token list of the same length and order.

    Keywords are looked up under either scope; identifiers only under
    ``Scope.FULL``.
    """
    return [translate_token(token, lexicon, direction, scope) for token in tokens]
