"""Run custom attribute extraction over a directory sync event file.

This module serves as a CLI wrapper around dsync.core.scim_attributes, handy
to replay a webhook payload captured from an identity provider:

    python -m scripts.extract_attributes --directory-id dir_123 event.json
    cat event.json | python -m scripts.extract_attributes --directory-id dir_123 -
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dsync.config.settings import LOG_LEVELS, parse_id_list, parse_log_level
from dsync.core.events import DirectorySyncEvent, EventError
from dsync.core.scim_attributes import AttributeExtractor


def _read_payload(source: str):
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def main() -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Extract custom attributes from a directory sync event")
    parser.add_argument("event_file", help="Path to the event JSON file, or '-' for stdin")
    parser.add_argument("--directory-id", required=True)
    parser.add_argument(
        "--verbose-dir",
        action="append",
        default=sorted(parse_id_list(os.environ.get("DIRECTORY_IDS_TO_LOG"))),
        help="Directory id whose collected attributes are echoed (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        # stdout is reserved for the JSON result
        default=parse_log_level(os.environ.get("LOG_LEVEL", "WARNING"), file=sys.stderr),
        choices=LOG_LEVELS,
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="[%(levelname)s] %(name)s: %(message)s", stream=sys.stderr)

    try:
        payload = _read_payload(args.event_file)
    except (OSError, json.JSONDecodeError) as e:
        print(f"[extract_attributes] Cannot read event: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        event = DirectorySyncEvent.from_dict(payload)
    except EventError as e:
        print(f"[extract_attributes] Invalid event: {e}", file=sys.stderr)
        sys.exit(2)

    # Diagnostic dumps go to stderr so stdout stays valid JSON
    extractor = AttributeExtractor(
        directory_ids_to_log=args.verbose_dir,
        echo=lambda line: print(line, file=sys.stderr),
    )
    attributes = extractor.extract(event, args.directory_id)
    print(json.dumps(attributes, indent=2, sort_keys=True, ensure_ascii=False))


if __name__ == "__main__":
    main()
