"""Merge and validate saved generation chunks for one section.

Reads a JSON file holding the chunk outputs of one chunked section, in call
order, runs the section's merger and validator and prints the report. Chunks
may be objects or the raw text returned by the generator.

Usage:
    python scripts/check_merged_document.py <section> <chunks.json> [--dump <path>]

Examples:
    # Check a saved email run
    python scripts/check_merged_document.py emails /tmp/email-chunks.json

    # Keep the merged document for inspection
    python scripts/check_merged_document.py vsl vsl-run.json --dump /tmp/vsl-merged.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure tedos is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def load_chunks(path: Path, section: str) -> list:
    from tedos.core.chunk_parsing import parse_chunk_json

    raw = json.loads(path.read_text())
    if not isinstance(raw, list):
        raise ValueError(f"{path} must hold a JSON list of chunks")

    return [parse_chunk_json(c, section=section) if isinstance(c, str) else c for c in raw]


def print_report(section: str, result) -> None:
    print(f"\n{'='*60}")
    print(f"Section: {section}")
    print(f"Valid:   {result.valid}")

    payload = result.to_payload()
    for key in ("missing", "incomplete", "issues", "warnings"):
        values = payload.get(key) or []
        if values:
            print(f"\n{key.capitalize()} ({len(values)}):")
            for value in values:
                print(f"  - {value}")

    if payload.get("fieldCount") is not None:
        print(f"\nField count: {payload['fieldCount']}")
    print(f"{'='*60}")


def main(argv: list[str] | None = None) -> int:
    from tedos.mergers import DOCUMENT_REGISTRY, merge_and_validate

    parser = argparse.ArgumentParser(
        description="Merge and validate saved generation chunks for one section."
    )
    parser.add_argument("section", choices=sorted(DOCUMENT_REGISTRY), help="Chunked section id")
    parser.add_argument("chunks", type=Path, help="JSON file with a list of chunks in call order")
    parser.add_argument("--dump", metavar="PATH", type=Path, help="Write the merged document here")

    args = parser.parse_args(argv)

    try:
        chunks = load_chunks(args.chunks, args.section)
        merged, result = merge_and_validate(args.section, *chunks)
    except (OSError, ValueError, TypeError) as e:
        parser.error(str(e))

    if args.dump:
        args.dump.write_text(json.dumps(merged, indent=2))
        print(f"Merged document written to {args.dump}")

    print_report(args.section, result)
    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
