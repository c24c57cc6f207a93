"""Batch-load listings from a JSON file into the store.

Usage: freight-ingest <path-to-json>
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

from sqlalchemy.exc import SQLAlchemyError

from .errors import InputFileError
from .utils import logger


def load_records(path: str) -> List[Any]:
    file_path = Path(path).resolve()
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputFileError(f"cannot read file: {e.strerror or e}", str(file_path))
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InputFileError(f"not valid JSON: {e}", str(file_path))
    if not isinstance(data, list):
        raise InputFileError("the JSON document must be an array of listings", str(file_path))
    if not data:
        raise InputFileError("the JSON array contains no listings", str(file_path))
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="freight-ingest",
        description="Validate, geocode and store freight listings from a JSON array.",
        epilog="Examples: freight-ingest cargas.json | freight-ingest ./datos/cargas.json",
    )
    parser.add_argument("path", nargs="?", help="JSON file holding an array of listings")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.path:
        parser.print_help()
        return 0

    try:
        logger.info("Loading file %s", args.path)
        records = load_records(args.path)
        # db and geocoder settings are only needed once there is work to do
        from .db import init_db, session_scope
        from .geocoding import GoogleGeocoder
        from .services import ingest_batch

        geocoder = GoogleGeocoder()
        init_db()
        with session_scope() as db:
            summary = ingest_batch(db, records, geocoder)
    except InputFileError as e:
        logger.error("Run aborted: %s: %s", e.path, e)
        print(f"Error: {e.path}: {e}", file=sys.stderr)
        return 1
    except (RuntimeError, SQLAlchemyError) as e:
        logger.error("Run aborted: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(summary, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
