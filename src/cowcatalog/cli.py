"""CLI entrypoint for the cow catalog."""

import argparse
import json
import shutil
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from cowcatalog.config.loader import DEFAULT_CONFIG_PATH, load_config
from cowcatalog.database.cow_repo import encode_herd
from cowcatalog.herd.queries import EVENT_TYPES, SEXES, STATUSES
from cowcatalog.herd.service import CowCatalog
from cowcatalog.models import Cow, CowDraft, EventType
from cowcatalog.utils.logging import configure_logging, get_logger
from cowcatalog.utils.time import parse_utc, to_utc_z

logger = get_logger(__name__)

EXAMPLE_CONFIG_PATH = Path("cowcatalog.config.example.yaml")


def _open_catalog(args: argparse.Namespace) -> CowCatalog:
    config = load_config(args.config)
    configure_logging(config["logging"]["level"])
    return CowCatalog.from_config(config)


def _format_weight(value: Optional[float]) -> str:
    return f"{value:g} kg" if value is not None else "-"


def _format_date(catalog: CowCatalog, cow: Cow) -> str:
    last = catalog.get_last_event_date(cow)
    return last.date().isoformat() if last else "-"


def _print_table(catalog: CowCatalog, cows: List[Cow]) -> None:
    print(f"{'Ear Tag':<14} {'Sex':<8} {'Pen':<10} {'Status':<14} {'Weight':<10} {'Last Event':<12}")
    print("-" * 72)
    for cow in cows:
        print(
            f"{cow.ear_tag:<14} {cow.sex.value:<8} {cow.pen:<10} {cow.status.value:<14} "
            f"{_format_weight(cow.weight):<10} {_format_date(catalog, cow):<12}"
        )


def cmd_list(args: argparse.Namespace) -> None:
    """List cows matching the given filters."""
    catalog = _open_catalog(args)
    try:
        catalog.set_search_term(args.search or "")
        catalog.set_status_filter(args.status or "")
        catalog.set_pen_filter(args.pen or "")
        cows = catalog.visible_cows()

        if args.format == "json":
            print(encode_herd(cows, indent=2))
            return

        if not cows:
            print("No cows match the current filters.")
            return
        _print_table(catalog, cows)
        print(f"\n{len(cows)} of {len(catalog.all_cows())} cows shown")
    finally:
        catalog.close()


def cmd_show(args: argparse.Namespace) -> None:
    """Show one cow with its event history, newest first."""
    catalog = _open_catalog(args)
    try:
        cow = catalog.get_cow_by_tag(args.ear_tag)
        if cow is None:
            print(f"Error: No cow with ear tag {args.ear_tag}", file=sys.stderr)
            raise SystemExit(1)

        history = catalog.get_event_history(cow)
        if args.format == "json":
            payload = cow.model_dump(mode="json", by_alias=True, exclude_none=True)
            payload["events"] = [event.model_dump(mode="json") for event in history]
            print(json.dumps(payload, indent=2))
            return

        print(f"Cow {cow.ear_tag}:")
        print(f"  Sex: {cow.sex.value}")
        print(f"  Pen: {cow.pen}")
        print(f"  Status: {cow.status.value}")
        print(f"  Weight: {_format_weight(cow.weight)}")
        if cow.daily_weight_gain is not None:
            print(f"  Daily Gain: {cow.daily_weight_gain:g} kg/day")
        print(f"  Registered: {to_utc_z(cow.created_at)}")
        print(f"  Events ({len(history)}):")
        if not history:
            print("    (none)")
        for event in history:
            print(f"    {event.date.date().isoformat()}  {event.type.value:<13} {event.description}")
    finally:
        catalog.close()


def cmd_add(args: argparse.Namespace) -> None:
    """Register a new cow."""
    try:
        draft = CowDraft(
            ear_tag=args.ear_tag,
            sex=args.sex,
            pen=args.pen,
            status=args.status,
            weight=args.weight,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"Error: {field}: {error['msg']}", file=sys.stderr)
        raise SystemExit(2)

    catalog = _open_catalog(args)
    try:
        if not catalog.is_tag_unique(draft.ear_tag):
            print("Error: This ear tag is already in use.", file=sys.stderr)
            raise SystemExit(1)

        result = catalog.register_cow(draft)
        if result.error:
            print(f"Error: {result.error}", file=sys.stderr)
            raise SystemExit(1)
        if result.persist_error:
            print(f"Warning: {result.persist_error}", file=sys.stderr)
        print(f"Added {draft.ear_tag} to {draft.pen}")
    finally:
        catalog.close()


def cmd_log_event(args: argparse.Namespace) -> None:
    """Append an event to a cow's history."""
    try:
        date = parse_utc(args.date) if args.date else None
    except ValueError:
        print(f"Error: Invalid --date value: {args.date}", file=sys.stderr)
        raise SystemExit(2)

    catalog = _open_catalog(args)
    try:
        result = catalog.log_event(
            args.ear_tag,
            EventType(args.type),
            args.description,
            date=date,
        )
        if result.error:
            print(f"Error: {result.error}", file=sys.stderr)
            raise SystemExit(1)
        if result.persist_error:
            print(f"Warning: {result.persist_error}", file=sys.stderr)
        print(f"Logged {args.type} for {args.ear_tag}")
    finally:
        catalog.close()


def cmd_pens(args: argparse.Namespace) -> None:
    """List pen names in use."""
    catalog = _open_catalog(args)
    try:
        for pen in catalog.get_pens():
            print(pen)
    finally:
        catalog.close()


def cmd_export(args: argparse.Namespace) -> None:
    """Write the full catalog as a JSON snapshot."""
    catalog = _open_catalog(args)
    try:
        payload = encode_herd(catalog.all_cows(), indent=2)
    finally:
        catalog.close()

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(payload + "\n", encoding="utf-8")
        print(f"Exported {len(json.loads(payload))} cows to {args.out}")
    else:
        print(payload)


def cmd_init(args: argparse.Namespace) -> None:
    """Create cowcatalog.config.yaml from the example file."""
    if not EXAMPLE_CONFIG_PATH.exists():
        logger.error(f"Example file not found: {EXAMPLE_CONFIG_PATH}")
        raise SystemExit(1)

    if DEFAULT_CONFIG_PATH.exists() and not args.force:
        print(f"Skipped {DEFAULT_CONFIG_PATH} (already exists, use --force to overwrite)")
        return

    shutil.copy(EXAMPLE_CONFIG_PATH, DEFAULT_CONFIG_PATH)
    print(f"Created {DEFAULT_CONFIG_PATH}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cow catalog: track a herd and its history")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file path (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list command
    list_parser = subparsers.add_parser("list", help="List cows, optionally filtered")
    list_parser.add_argument("--search", type=str, help="Ear tag substring (case-insensitive)")
    list_parser.add_argument("--status", type=str, choices=STATUSES, help="Filter by status")
    list_parser.add_argument("--pen", type=str, help="Filter by pen name")
    list_parser.add_argument(
        "--format",
        type=str,
        choices=["md", "json"],
        default="md",
        help="Output format: md or json (default: md)",
    )
    list_parser.set_defaults(func=cmd_list)

    # show command
    show_parser = subparsers.add_parser("show", help="Show a cow and its event history")
    show_parser.add_argument("ear_tag", type=str, help="Ear tag of the cow")
    show_parser.add_argument(
        "--format",
        type=str,
        choices=["md", "json"],
        default="md",
        help="Output format: md or json (default: md)",
    )
    show_parser.set_defaults(func=cmd_show)

    # add command
    add_parser = subparsers.add_parser("add", help="Register a new cow")
    add_parser.add_argument("--ear-tag", type=str, required=True, help="Unique ear tag")
    add_parser.add_argument("--sex", type=str, choices=SEXES, required=True, help="Sex")
    add_parser.add_argument("--pen", type=str, required=True, help="Pen name")
    add_parser.add_argument(
        "--status",
        type=str,
        choices=STATUSES,
        default="Active",
        help="Status (default: Active)",
    )
    add_parser.add_argument("--weight", type=float, help="Weight in kg")
    add_parser.set_defaults(func=cmd_add)

    # log-event command
    event_parser = subparsers.add_parser("log-event", help="Append an event to a cow's history")
    event_parser.add_argument("ear_tag", type=str, help="Ear tag of the cow")
    event_parser.add_argument("--type", type=str, choices=EVENT_TYPES, required=True, help="Event type")
    event_parser.add_argument("--description", type=str, default="", help="Free-text description")
    event_parser.add_argument("--date", type=str, help="ISO 8601 timestamp (default: now)")
    event_parser.set_defaults(func=cmd_log_event)

    # pens command
    pens_parser = subparsers.add_parser("pens", help="List pen names in use")
    pens_parser.set_defaults(func=cmd_pens)

    # export command
    export_parser = subparsers.add_parser("export", help="Export the catalog as JSON")
    export_parser.add_argument(
        "--out",
        type=Path,
        help="Output file path (if not provided, prints to stdout)",
    )
    export_parser.set_defaults(func=cmd_export)

    # init command
    init_parser = subparsers.add_parser("init", help="Create cowcatalog.config.yaml from the example")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )
    init_parser.set_defaults(func=cmd_init)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
