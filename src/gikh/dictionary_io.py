"""Reading and writing the external dictionary files.

Project dictionary (``לעקסיקאָן.yaml``), a deliberately small YAML subset::

    tier: project
    identifiers:
      חשבון: account        # inline comments are allowed
      באַניצער: user

Library declarations, scanned line by line::

    public typealias מאַסיוו = Array
    // mapping: צולייגן = append

Library snapshots are JSON written with orjson::

    {"tier": "library_symbols", "pairs": [["מאַסיוו", "Array"], ...]}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import orjson

from gikh.bimap import BiMap, find_conflict
from gikh.lexicon import Lexicon, validate_project_tier

log = logging.getLogger(__name__)

DEFAULT_PROJECT_DICTIONARY = "לעקסיקאָן.yaml"
LIBRARY_SOURCE_GLOB = "*.swift"
SNAPSHOT_TIER = "library_symbols"
PROJECT_TIER = "project"

_ACCESS_MODIFIERS = ("public ", "internal ", "private ", "fileprivate ", "open ")
_TYPEALIAS_PREFIX = "typealias "
_MAPPING_PREFIX = "// mapping:"
_SECTION_HEADER = "identifiers:"
_TIER_KEY = "tier:"


class DictionaryFormatError(ValueError):
    """An external dictionary file is missing, malformed, or not bijective."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path is not None else message)


# ─── Project dictionary ───────────────────────────────────────────────


def _parse_entry(stripped: str) -> tuple[str, str] | None:
    localized, sep, primary = stripped.partition(":")
    if not sep:
        return None
    localized = localized.strip()
    primary = primary.split(" #", 1)[0].strip()
    if not localized or not primary:
        return None
    return localized, primary


def parse_project_dictionary(text: str) -> list[tuple[str, str]]:
    """Return ``(localized, primary)`` pairs from the ``identifiers:`` section.

    Lines outside the section, blank lines, ``#`` comments and entries with
    an empty side are ignored. The section header and the ``tier:`` line are
    only recognised unindented; the section ends at the first unindented
    line that is neither blank nor a comment. Pairs are returned in file
    order, duplicates included; bijectivity is checked by the caller.
    """
    pairs: list[tuple[str, str]] = []
    tier: str | None = None
    in_section = False
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indented = line[0] in (" ", "\t")
        if not indented:
            in_section = line.startswith(_SECTION_HEADER)
            if line.startswith(_TIER_KEY):
                tier = line[len(_TIER_KEY):].split(" #", 1)[0].strip()
            continue
        if not in_section:
            continue
        entry = _parse_entry(stripped)
        if entry is not None:
            pairs.append(entry)
    if tier is None:
        log.warning("Project dictionary has no 'tier:' line; expected 'tier: %s'", PROJECT_TIER)
    elif tier != PROJECT_TIER:
        log.warning("Project dictionary declares tier %r; expected %r", tier, PROJECT_TIER)
    return pairs


def _bimap_or_raise(pairs: list[tuple[str, str]], path: Path | None) -> BiMap[str, str]:
    bimap = BiMap.safe(pairs)
    if bimap is not None:
        return bimap
    conflict = find_conflict(pairs)
    assert conflict is not None
    side = "localized name" if conflict.kind == "duplicate_key" else "primary name"
    raise DictionaryFormatError(
        f"duplicate {side}: {conflict.entry[0]!r} -> {conflict.entry[1]!r} "
        f"conflicts with {conflict.existing[0]!r} -> {conflict.existing[1]!r}",
        path=path,
    )


def load_project_identifiers(
    path: str | Path,
    *,
    missing_ok: bool = True,
) -> BiMap[str, str]:
    """Load the project tier; an absent file is an empty tier unless ``missing_ok`` is False."""
    path = Path(path)
    if not path.exists():
        if not missing_ok:
            raise DictionaryFormatError("project dictionary not found", path=path)
        log.info("No project dictionary at %s; project tier is empty", path)
        return BiMap()
    pairs = parse_project_dictionary(path.read_text(encoding="utf-8"))
    bimap = _bimap_or_raise(pairs, path)
    log.debug("Loaded %d project identifiers from %s", len(bimap), path)
    return bimap


def render_project_dictionary(pairs: Iterable[tuple[str, str]]) -> str:
    lines = [f"{_TIER_KEY} {PROJECT_TIER}", _SECTION_HEADER]
    lines.extend(f"  {localized}: {primary}" for localized, primary in pairs)
    return "\n".join(lines) + "\n"


def add_project_identifier(
    path: str | Path,
    localized: str,
    primary: str,
    lexicon: Lexicon | None = None,
) -> BiMap[str, str]:
    """Append one pair to the project dictionary and return the new project tier.

    Nothing is written unless the pair is new on both sides of the existing
    project tier (``BiMapCollisionError`` otherwise) and, when ``lexicon`` is
    given, owned by no keyword or library symbol (``LexiconCollisionError``).
    """
    path = Path(path)
    existing = load_project_identifiers(path)
    incoming = BiMap([(localized, primary)])
    merged = existing.merge(incoming, source_label=str(path), incoming_label="new entry")
    if lexicon is not None:
        validate_project_tier(lexicon.keywords, lexicon.library_symbols, incoming)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_project_dictionary(merged.pairs()), encoding="utf-8")
    log.info("Added %s -> %s to %s", localized, primary, path)
    return merged


# ─── Library symbols ──────────────────────────────────────────────────


def _parse_typealias(stripped: str) -> tuple[str, str] | None:
    rest = stripped
    for modifier in _ACCESS_MODIFIERS:
        if rest.startswith(modifier):
            rest = rest[len(modifier):]
            break
    if not rest.startswith(_TYPEALIAS_PREFIX):
        return None
    return _parse_alias_body(rest[len(_TYPEALIAS_PREFIX):])


def _parse_alias_body(body: str) -> tuple[str, str] | None:
    parts = body.split(" = ")
    if len(parts) != 2:
        return None
    localized, primary = parts[0].strip(), parts[1].strip()
    if not localized or not primary:
        return None
    # generic aliases are not expressible as a one-word substitution
    if "<" in localized or "<" in primary:
        return None
    return localized, primary


def extract_library_pairs(text: str) -> list[tuple[str, str]]:
    """``(localized, primary)`` pairs from typealias and ``// mapping:`` lines."""
    pairs: list[tuple[str, str]] = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(_MAPPING_PREFIX):
            pair = _parse_alias_body(stripped[len(_MAPPING_PREFIX):].strip())
        else:
            pair = _parse_typealias(stripped)
        if pair is not None:
            pairs.append(pair)
    return pairs


def derive_library_symbols(texts: Iterable[str]) -> BiMap[str, str]:
    """Dedupe pairs across ``texts``: the first use of a key or value wins."""
    seen_keys: set[str] = set()
    seen_values: set[str] = set()
    unique: list[tuple[str, str]] = []
    for text in texts:
        for localized, primary in extract_library_pairs(text):
            if localized in seen_keys or primary in seen_values:
                log.debug("Skipping duplicate library pair %s -> %s", localized, primary)
                continue
            seen_keys.add(localized)
            seen_values.add(primary)
            unique.append((localized, primary))
    return BiMap(unique)


def _load_snapshot(path: Path) -> BiMap[str, str]:
    try:
        payload: Any = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        raise DictionaryFormatError(f"invalid JSON snapshot: {exc}", path=path) from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("pairs"), list):
        raise DictionaryFormatError("snapshot must be an object with a 'pairs' list", path=path)
    pairs: list[tuple[str, str]] = []
    for item in payload["pairs"]:
        if (
            not isinstance(item, list)
            or len(item) != 2
            or not all(isinstance(side, str) and side for side in item)
        ):
            raise DictionaryFormatError(f"malformed snapshot pair: {item!r}", path=path)
        pairs.append((item[0], item[1]))
    return _bimap_or_raise(pairs, path)


def load_library_symbols(path: str | Path) -> BiMap[str, str]:
    """Library tier from a declaration directory, a single file, or a JSON snapshot."""
    path = Path(path)
    if not path.exists():
        log.info("No library symbols at %s; library tier is empty", path)
        return BiMap()
    if path.is_dir():
        files = sorted(path.rglob(LIBRARY_SOURCE_GLOB))
        bimap = derive_library_symbols(f.read_text(encoding="utf-8") for f in files)
        log.debug("Derived %d library symbols from %d files under %s", len(bimap), len(files), path)
        return bimap
    if path.suffix == ".json":
        return _load_snapshot(path)
    return derive_library_symbols([path.read_text(encoding="utf-8")])


def save_library_snapshot(bimap: BiMap[str, str], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"tier": SNAPSHOT_TIER, "pairs": [list(pair) for pair in bimap.pairs()]}
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    log.info("Wrote %d library symbols to %s", len(bimap), path)



# ─── Lexicon assembly ─────────────────────────────────────────────────


def load_lexicon(
    dictionary: str | Path | None = None,
    library: str | Path | None = None,
) -> Lexicon:
    """Build the lexicon a command-line run needs.

    With a project dictionary this is the developer lexicon (all three tiers,
    validated); without one it is the compilation lexicon.
    """
    library_symbols = load_library_symbols(library) if library is not None else None
    if dictionary is None:
        return Lexicon.for_compilation(library_symbols)
    project = load_project_identifiers(dictionary)
    return Lexicon.for_developer(library_symbols, project)
