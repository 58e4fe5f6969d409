"""
Export a Stored Activity to GPX

Reads an activity record saved as JSON (with ``positions`` in stored form and
``created_at``), restores its track and writes a GPX 1.1 file.

Usage:
    python export_gpx.py activity.json --output activity.gpx --name "Morning run"
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from ecorun import eco_track

logger = logging.getLogger("export_gpx")


def load_record(path: Path) -> dict:
    """
    Load an activity record from a JSON file.

    Raises:
        ValueError: If the file is not a JSON object.
    """
    with path.open("r", encoding="utf-8") as file:
        try:
            record = json.load(file)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(record, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(record).__name__}")
    return record


def default_name(record: dict) -> str:
    activity_type = record.get("activity_type") or "activity"
    created_at = record.get("created_at") or ""
    return f"{activity_type} {created_at}".strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Restore a stored activity track and export it as GPX"
    )
    parser.add_argument(
        "record",
        type=str,
        help="Path to the activity record JSON file"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output GPX path (default: record path with .gpx suffix)"
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Track name (default: activity type and creation time)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    record_path = Path(args.record)
    if not record_path.exists():
        logger.error("Record file not found: %s", record_path)
        return 1

    try:
        record = load_record(record_path)
        positions = eco_track.restore_activity(record)
        gpx = eco_track.generate_gpx(positions, args.name or default_name(record))
    except ValueError as exc:
        logger.error("Could not export activity: %s", exc)
        return 1

    output_path = Path(args.output) if args.output else record_path.with_suffix(".gpx")
    output_path.write_text(gpx, encoding="utf-8")

    logger.info("Wrote %s track points to %s", len(positions), output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
