#!/usr/bin/env python3
"""Transpile source files between modes A, B and C.

Usage:
    # Localized .gikh file -> compiler input on stdout
    python3 scripts/gikh_transpile.py --to C src/חשבון.gikh

    # Fully primary view, with the project dictionary and library declarations
    python3 scripts/gikh_transpile.py --to A --dictionary לעקסיקאָן.yaml \
      --library Sources/ביבליאָטעק src/חשבון.gikh -o build/

    # Primary file back to the localized source of truth
    python3 scripts/gikh_transpile.py --to B --from A Account.swift -o Account.gikh
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
from gikh.dictionary_io import DictionaryFormatError, load_lexicon
from gikh.lexicon import LexiconCollisionError
from gikh.tokens import Mode
from gikh.transpiler import Transpiler, detect_mode, output_suffix

log = logging.getLogger("gikh_transpile")

MODE_CHOICES = [mode.value for mode in Mode]


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def output_path(source: Path, target: Mode, output: Path | None, many: bool) -> Path | None:
    """Where one converted file goes; None means stdout.

    With several inputs, or when ``output`` is an existing directory, the
    file keeps its stem and takes the target mode's suffix.
    """
    if output is None:
        return None
    if many or output.is_dir():
        return output / (source.stem + output_suffix(target))
    return output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Transpile between primary and localized source")
    parser.add_argument("paths", nargs="+", type=Path, help="Input files")
    parser.add_argument("--to", dest="target", required=True, choices=MODE_CHOICES)
    parser.add_argument(
        "--from", dest="source", choices=MODE_CHOICES, default=None,
        help="Source mode (default: B for .gikh files, C otherwise)",
    )
    parser.add_argument("--dictionary", type=Path, default=None, help="Project dictionary file")
    parser.add_argument(
        "--library", type=Path, default=None,
        help="Library declarations directory/file, or a JSON snapshot",
    )
    parser.add_argument("-o", "--output", type=Path, default=None)
    parser.add_argument("--json", action="store_true", help="Print a JSON summary of written files")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    target = Mode(args.target)
    try:
        lexicon = load_lexicon(args.dictionary, args.library)
    except (
        DictionaryFormatError, LexiconCollisionError, BiMapCollisionError,
        OSError, UnicodeDecodeError,
    ) as exc:
        dump_json({"error": type(exc).__name__, "message": str(exc)})
        return 1

    transpiler = Transpiler(lexicon)
    many = len(args.paths) > 1
    written: list[dict[str, str]] = []
    failed: list[dict[str, str]] = []
    for path in args.paths:
        source_mode = Mode(args.source) if args.source else detect_mode(path)
        try:
            result = transpiler.transpile_file(path, target, source_mode)
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Cannot read %s: %s", path, exc)
            failed.append({"input": str(path), "error": type(exc).__name__, "message": str(exc)})
            continue
        destination = output_path(path, target, args.output, many)
        if destination is None:
            sys.stdout.write(result)
            continue
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(result, encoding="utf-8")
        log.info("%s (%s) -> %s (%s)", path, source_mode.value, destination, target.value)
        written.append({
            "input": str(path),
            "output": str(destination),
            "source_mode": source_mode.value,
            "target_mode": target.value,
        })

    if failed:
        dump_json({"written": written, "failed": failed})
        return 1
    if args.json and written:
        dump_json({"written": written})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
