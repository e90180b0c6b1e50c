"""Bijective dictionary: a forward and a reverse dict kept in lockstep.

Every key maps to exactly one value and every value back to exactly one key.
Instances are immutable once built; ``merge`` returns a new map.

Two construction paths:

* ``BiMap(pairs)``: strict. Raises ``BiMapCollisionError`` on the first
  duplicate key or value. Meant for compiled-in tables.
* ``BiMap.safe(pairs)``: returns ``None`` instead of raising. Meant for
  externally supplied data that must be validated, not trusted.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal


type CollisionKind = Literal["duplicate_key", "duplicate_value"]


@dataclass(frozen=True, slots=True)
class BiMapCollision:
    """First bijectivity violation found in a pair list or merge."""

    kind: CollisionKind
    entry: tuple[Any, Any]
    existing: tuple[Any, Any]


class BiMapCollisionError(ValueError):
    """Raised when construction or merge would break bijectivity."""

    def __init__(
        self,
        kind: CollisionKind,
        entry: tuple[Any, Any],
        *,
        existing: tuple[Any, Any] | None = None,
        source_label: str = "",
        incoming_label: str = "",
    ) -> None:
        self.kind = kind
        self.entry = entry
        self.existing = existing
        self.source_label = source_label
        self.incoming_label = incoming_label
        super().__init__(self._message())

    def _message(self) -> str:
        key, value = self.entry
        where = f" in '{self.source_label}'" if self.source_label else ""
        incoming = f" from '{self.incoming_label}'" if self.incoming_label else ""
        if self.kind == "duplicate_key":
            return (
                f"key {key!r} is already defined{where}; "
                f"incoming mapping {key!r} -> {value!r}{incoming} repeats it"
            )
        return (
            f"value {value!r} is already mapped{where}; "
            f"incoming mapping {key!r} -> {value!r}{incoming} would not be bijective"
        )


def find_conflict(pairs: Iterable[tuple[Any, Any]]) -> BiMapCollision | None:
    """Return the first duplicate key or value in ``pairs``, or None."""
    forward: dict[Any, Any] = {}
    reverse: dict[Any, Any] = {}
    for key, value in pairs:
        if key in forward:
            return BiMapCollision("duplicate_key", (key, value), (key, forward[key]))
        if value in reverse:
            return BiMapCollision("duplicate_value", (key, value), (reverse[value], value))
        forward[key] = value
        reverse[value] = key
    return None


class BiMap[K: Hashable, V: Hashable]:
    """Two synchronized hash maps, ``forward: K -> V`` and ``reverse: V -> K``."""

    __slots__ = ("_forward", "_reverse")

    def __init__(self, pairs: Iterable[tuple[K, V]] = ()) -> None:
        forward: dict[K, V] = {}
        reverse: dict[V, K] = {}
        for key, value in pairs:
            if key in forward:
                raise BiMapCollisionError(
                    "duplicate_key", (key, value), existing=(key, forward[key]),
                )
            if value in reverse:
                raise BiMapCollisionError(
                    "duplicate_value", (key, value), existing=(reverse[value], value),
                )
            forward[key] = value
            reverse[value] = key
        self._forward = forward
        self._reverse = reverse

    @classmethod
    def safe(cls, pairs: Iterable[tuple[K, V]]) -> BiMap[K, V] | None:
        """Build from untrusted pairs; None if any key or value repeats."""
        materialized = list(pairs)
        if find_conflict(materialized) is not None:
            return None
        return cls(materialized)

    # ─── Lookups ──────────────────────────────────────────────────

    def to_value(self, key: K) -> V | None:
        return self._forward.get(key)

    def to_key(self, value: V) -> K | None:
        return self._reverse.get(value)

    def contains_value(self, value: V) -> bool:
        return value in self._reverse

    @property
    def forward(self) -> MappingProxyType[K, V]:
        return MappingProxyType(self._forward)

    @property
    def reverse(self) -> MappingProxyType[V, K]:
        return MappingProxyType(self._reverse)

    def keys(self) -> list[K]:
        return list(self._forward)

    def values(self) -> list[V]:
        return list(self._reverse)

    def pairs(self) -> list[tuple[K, V]]:
        """All ``(key, value)`` pairs in insertion order."""
        return list(self._forward.items())

    # ─── Merge ────────────────────────────────────────────────────

    def merge(
        self,
        other: BiMap[K, V],
        source_label: str = "source",
        incoming_label: str = "incoming",
    ) -> BiMap[K, V]:
        """Return a new map holding both maps' pairs.

        Raises ``BiMapCollisionError`` if any key or value of ``other`` is
        already present here. Neither map is modified either way.
        """
        for key, value in other._forward.items():
            if key in self._forward:
                raise BiMapCollisionError(
                    "duplicate_key",
                    (key, value),
                    existing=(key, self._forward[key]),
                    source_label=source_label,
                    incoming_label=incoming_label,
                )
            if value in self._reverse:
                raise BiMapCollisionError(
                    "duplicate_value",
                    (key, value),
                    existing=(self._reverse[value], value),
                    source_label=source_label,
                    incoming_label=incoming_label,
                )
        merged: BiMap[K, V] = BiMap()
        merged._forward = {**self._forward, **other._forward}
        merged._reverse = {**self._reverse, **other._reverse}
        return merged

    # ─── Container protocol ───────────────────────────────────────

    def __len__(self) -> int:
        return len(self._forward)

    def __bool__(self) -> bool:
        return bool(self._forward)

    def __contains__(self, key: object) -> bool:
        return key in self._forward

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BiMap):
            return NotImplemented
        return self._forward == other._forward

    def __hash__(self) -> int:
        return hash(frozenset(self._forward.items()))

    def __repr__(self) -> str:
        return f"BiMap({len(self._forward)} pairs)"
