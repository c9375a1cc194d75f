#!/usr/bin/env python3
"""
Build output/lectionary.json from lectionary HTML tables.

  lectionary build --input input/ --versification data/versification/nab.json \
      --parses data/parses.json --catalogue data/romcal_enhanced.json \
      --calendar data/romcal_2025.json
  lectionary validate output/lectionary.json

Defaults come from the LECTIONARY_* environment variables (see config.py).
"""

from __future__ import annotations
import argparse, sys
from pathlib import Path
from typing import List

import requests

from . import config
from .boundaries import pick_table
from .catalogue import load_calendar, load_catalogue
from .extract import rows_from_files
from .parses import ParsedCitations
from .records import build_document, records_from_calendar, records_from_rows
from .references import NormalizerOptions
from .util import atomic_write_json, load_source, log, warn
from .validate import schema_errors, validate_file

def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="lectionary")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="normalize readings and write the lectionary document")
    b.add_argument("--input", default=config.INPUT_DIR, help="directory of lectionary .html tables")
    b.add_argument("--output", default=config.OUTPUT_PATH)
    b.add_argument("--versification", default=config.VERSIFICATION_SOURCE, help="boundary table JSON (path or URL)")
    b.add_argument("--translation", default=config.TRANSLATION)
    b.add_argument("--parses", default=config.PARSES_SOURCE, help="precomputed citation parses JSON (path or URL)")
    b.add_argument("--catalogue", default=config.CATALOGUE_SOURCE, help="day definitions JSON (path or URL)")
    b.add_argument("--calendar", default=config.CALENDAR_SOURCE, help="generated calendar JSON (path or URL)")
    b.add_argument("--year", type=int, default=config.REFERENCE_YEAR)
    b.add_argument("--keep-plus", action="store_true", default=config.KEEP_PLUS,
                   help="keep '+' verse joiners instead of turning them into commas")
    b.add_argument("--no-book-completion", action="store_true", default=not config.COMPLETE_BOOKS)
    b.add_argument("--strict", action="store_true", help="exit non-zero when the output fails the schema")
    b.add_argument("--dry-run", action="store_true")

    v = sub.add_parser("validate", help="check a lectionary document against the schema")
    v.add_argument("path", nargs="?", default=config.OUTPUT_PATH)
    return p.parse_args(argv)

def build(args: argparse.Namespace) -> int:
    try:
        table = pick_table(load_source(args.versification), args.translation)
        parser = ParsedCitations.from_dict(load_source(args.parses))
        calendar = load_calendar(load_source(args.calendar)) if args.calendar else {}
        catalogue = load_catalogue(load_source(args.catalogue), calendar) if args.catalogue else {}
    except (OSError, ValueError, KeyError, requests.RequestException) as e:
        print(f"[error] cannot load collaborator data: {e}", file=sys.stderr)
        return 1

    html_files = sorted(Path(args.input).glob("*.html"))
    if not html_files:
        print(f"[error] no .html tables in {args.input}", file=sys.stderr)
        return 1

    log(f"translation={args.translation} books={len(table.books)} parses={len(parser)} "
        f"catalogue={len(catalogue)} calendar_dates={len(calendar)} year={args.year}")

    options = NormalizerOptions(keep_plus=args.keep_plus, complete_books=not args.no_book_completion)
    failures: List[str] = []
    rows = rows_from_files(html_files)
    grouped = records_from_rows(rows, parser, table, catalogue, calendar, options, args.year, failures)
    grouped += records_from_calendar(calendar, catalogue)
    doc = build_document(grouped)

    if failures:
        warn(f"{len(failures)} citation option(s) dropped after parse failures")
    errors = schema_errors(doc)
    for e in errors:
        warn(f"schema: {e}")
    if errors and args.strict:
        print(f"[error] output does not match the schema ({len(errors)} problem(s))", file=sys.stderr)
        return 1

    out = Path(args.output)
    if args.dry_run:
        print(f"[info] dry run: {len(rows)} row(s), not writing {out}")
        return 0
    atomic_write_json(out, doc)
    print(f"[ok] wrote {out}")
    return 0

def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "validate":
        return validate_file(Path(args.path))
    return build(args)

if __name__ == "__main__":
    raise SystemExit(main())
