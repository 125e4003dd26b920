#!/usr/bin/env python3
"""Validate exported cow catalog snapshots against the published JSON schema."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable

from jsonschema import Draft202012Validator, FormatChecker, ValidationError


def _load_json(path: Path, label: str):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Unable to read {label} {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"{label} {path} is not valid JSON: {exc}") from exc


def _format_error_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "$"
    parts: Iterable[str] = ("$", *map(str, error.absolute_path))
    return ".".join(parts)


def _validate_uniqueness(snapshot: list) -> list[str]:
    issues: list[str] = []
    tags = Counter(cow.get("earTag") for cow in snapshot if isinstance(cow, dict))
    for tag, count in sorted(tags.items(), key=lambda item: str(item[0])):
        if count > 1:
            issues.append(f"ear tag {tag} appears {count} times")
    for cow in snapshot:
        if not isinstance(cow, dict):
            continue
        ids = Counter(event.get("id") for event in cow.get("events") or [] if isinstance(event, dict))
        for event_id, count in ids.items():
            if count > 1:
                issues.append(f"event id {event_id} repeated within {cow.get('earTag')}")
    return issues


def validate_snapshot(snapshot_path: Path, schema_path: Path) -> int:
    if not snapshot_path.exists():
        print(f"[cowcatalog] Snapshot not found at {snapshot_path}", file=sys.stderr)
        return 2

    schema = _load_json(schema_path, "Schema file")
    snapshot = _load_json(snapshot_path, "Snapshot")
    validator = Draft202012Validator(schema, format_checker=FormatChecker())

    errors = [
        f"{_format_error_path(error)}: {error.message}"
        for error in sorted(validator.iter_errors(snapshot), key=lambda e: list(map(str, e.absolute_path)))
    ]
    if isinstance(snapshot, list):
        errors.extend(_validate_uniqueness(snapshot))

    if errors:
        print(f"[FAIL] {snapshot_path}", file=sys.stderr)
        for item in errors:
            print(f"  - {item}", file=sys.stderr)
        return 1

    statuses = Counter(cow.get("status", "<missing>") for cow in snapshot)
    print(f"Validated {len(snapshot)} cows in {snapshot_path}")
    print("  Statuses: " + ", ".join(f"{status}={count}" for status, count in sorted(statuses.items())))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate a cow catalog snapshot against the JSON schema.")
    parser.add_argument("snapshot", type=Path, help="Snapshot JSON file (from `cowcatalog export --out`)")
    parser.add_argument(
        "--schema",
        type=Path,
        default=Path("docs/specs/cow-catalog.schema.json"),
        help="Path to cow catalog JSON schema",
    )

    args = parser.parse_args()
    try:
        return validate_snapshot(args.snapshot, args.schema)
    except RuntimeError as exc:
        print(f"[cowcatalog] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
