#!/usr/bin/env python3
"""Maintain the project dictionary and library-symbol snapshots.

Usage:
    # Add one project identifier (checked against keywords and library symbols)
    python3 scripts/gikh_lexicon.py add חשבון account --library Sources/ביבליאָטעק

    # Freeze the library tier derived from declaration files into JSON
    python3 scripts/gikh_lexicon.py snapshot Sources/ביבליאָטעק -o library_symbols.json

    # List identifiers that no tier translates
    python3 scripts/gikh_lexicon.py scan src/
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from gikh.bimap import BiMapCollisionError
from gikh.dictionary_io import (
    DEFAULT_PROJECT_DICTIONARY,
    DictionaryFormatError,
    add_project_identifier,
    load_lexicon,
    load_library_symbols,
    save_library_snapshot,
)
from gikh.lexicon import Lexicon, LexiconCollisionError
from gikh.tokens import Mode
from gikh.transpiler import LOCALIZED_SUFFIX, PRIMARY_SUFFIX, detect_mode
from gikh.verify import untranslated_identifiers

log = logging.getLogger("gikh_lexicon")

SCANNED_SUFFIXES = frozenset({LOCALIZED_SUFFIX, PRIMARY_SUFFIX})


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def collect_sources(paths: list[Path]) -> list[Path]:
    """Files to scan: given files as-is, directories searched for source suffixes."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.suffix in SCANNED_SUFFIXES))
        elif path.exists():
            files.append(path)
        else:
            log.warning("Not found: %s", path)
    return files


def run_add(args: argparse.Namespace) -> dict[str, object]:
    library = load_library_symbols(args.library) if args.library is not None else None
    lexicon = Lexicon.for_compilation(library)
    project = add_project_identifier(args.dictionary, args.localized, args.primary, lexicon)
    return {
        "added": {"localized": args.localized, "primary": args.primary},
        "dictionary": str(args.dictionary),
        "project_identifiers": len(project),
    }


def run_snapshot(args: argparse.Namespace) -> dict[str, object]:
    library = load_library_symbols(args.library)
    save_library_snapshot(library, args.output)
    return {"library_symbols": len(library), "output": str(args.output)}


def run_scan(args: argparse.Namespace) -> dict[str, object]:
    lexicon = load_lexicon(args.dictionary, args.library)
    files = collect_sources(args.paths)
    missing: set[str] = set()
    for mode in (Mode.B, Mode.C):
        group = [f for f in files if detect_mode(f) is mode]
        missing.update(untranslated_identifiers(
            (f.read_text(encoding="utf-8") for f in group), lexicon,
            localized=mode is Mode.B,
        ))
    return {"files": len(files), "untranslated": sorted(missing)}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Project dictionary and library symbol tools")
    parser.add_argument("--verbose", "-v", action="store_true")
    sub = parser.add_subparsers(dest="command", help="Lexicon command")

    p_add = sub.add_parser("add", help="Add a project identifier")
    p_add.add_argument("localized")
    p_add.add_argument("primary")
    p_add.add_argument("--dictionary", type=Path, default=Path(DEFAULT_PROJECT_DICTIONARY))
    p_add.add_argument("--library", type=Path, default=None)

    p_snapshot = sub.add_parser("snapshot", help="Write derived library symbols as JSON")
    p_snapshot.add_argument("library", type=Path)
    p_snapshot.add_argument("-o", "--output", type=Path, required=True)

    p_scan = sub.add_parser("scan", help="List identifiers with no translation")
    p_scan.add_argument("paths", nargs="+", type=Path)
    p_scan.add_argument("--dictionary", type=Path, default=None)
    p_scan.add_argument("--library", type=Path, default=None)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "add":
            result = run_add(args)
        elif args.command == "snapshot":
            result = run_snapshot(args)
        else:
            result = run_scan(args)
    except (
        DictionaryFormatError, LexiconCollisionError, BiMapCollisionError,
        OSError, UnicodeDecodeError,
    ) as exc:
        dump_json({"error": type(exc).__name__, "message": str(exc)})
        return 1

    dump_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
