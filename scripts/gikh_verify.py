#!/usr/bin/env python3
"""Round-trip verification: convert each file to another mode and back.

Exits 1 if any file does not survive the round trip. By default ``.gikh``
files go B -> C -> B, which is exactly what a build does before compiling.

Usage:
    python3 scripts/gikh_verify.py src/*.gikh
    python3 scripts/gikh_verify.py --dictionary לעקסיקאָן.yaml --via A src/חשבון.gikh
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from gikh.bimap import BiMapCollisionError
from gikh.dictionary_io import DictionaryFormatError, load_lexicon
from gikh.lexicon import Lexicon, LexiconCollisionError
from gikh.tokens import Mode
from gikh.transpiler import LOCALIZED_SUFFIX, detect_mode
from gikh.verify import verify_round_trip

log = logging.getLogger("gikh_verify")

MODE_CHOICES = [mode.value for mode in Mode]


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def verify_file(
    path: Path,
    lexicon: Lexicon,
    source_mode: Mode | None,
    via_mode: Mode,
) -> dict[str, Any]:
    mode = source_mode or detect_mode(path)
    if source_mode is None and path.suffix != LOCALIZED_SUFFIX:
        log.warning("Skipping %s: only %s files are verified by default", path, LOCALIZED_SUFFIX)
        return {"path": str(path), "status": "skipped"}
    if mode is via_mode:
        log.warning("Skipping %s: source and intermediate mode are both %s", path, mode.value)
        return {"path": str(path), "status": "skipped"}

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.error("Cannot read %s: %s", path, exc)
        return {"path": str(path), "status": "error", "error": type(exc).__name__, "message": str(exc)}

    report = verify_round_trip(source, lexicon, mode, via_mode)
    if report.ok:
        log.info("OK: %s", path)
    else:
        log.info("FAIL: %s (%d lines differ)", path, len(report.mismatches))
    return {"path": str(path), "status": "ok" if report.ok else "fail", **report.to_dict()}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify lossless round trips between modes")
    parser.add_argument("paths", nargs="+", type=Path)
    parser.add_argument(
        "--from", dest="source", choices=MODE_CHOICES, default=None,
        help="Source mode; without it only .gikh files are verified, as mode B",
    )
    parser.add_argument("--via", choices=MODE_CHOICES, default=Mode.C.value)
    parser.add_argument("--dictionary", type=Path, default=None)
    parser.add_argument("--library", type=Path, default=None)
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        lexicon = load_lexicon(args.dictionary, args.library)
    except (
        DictionaryFormatError, LexiconCollisionError, BiMapCollisionError,
        OSError, UnicodeDecodeError,
    ) as exc:
        dump_json({"error": type(exc).__name__, "message": str(exc)})
        return 1

    source_mode = Mode(args.source) if args.source else None
    via_mode = Mode(args.via)
    files = [verify_file(path, lexicon, source_mode, via_mode) for path in args.paths]
    failed = sum(1 for entry in files if entry["status"] in ("fail", "error"))

    dump_json({
        "files": files,
        "verified": sum(1 for entry in files if entry["status"] in ("ok", "fail")),
        "failed": failed,
    })
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
