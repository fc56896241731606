from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from config import settings
from sunday_prep.errors import InvalidArgument, ShortcutMetadataError, TemplateNotFound
from sunday_prep.pathnorm import expand_env
from sunday_prep.prep import PrepConfig, run
from sunday_prep.shortcuts import ShortcutStore, WindowsShortcutStore, fix_existing_shortcuts
from sunday_prep.sundays import month_name, upcoming_month

log = logging.getLogger("sunday_prep")


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def lead_days() -> int:
    raw = os.getenv("SUNDAY_LEAD_DAYS", str(settings.LEAD_DAYS))
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgument(f"SUNDAY_LEAD_DAYS must be a whole number of days, got {raw!r}") from None


def build_parser() -> argparse.ArgumentParser:
    # .env values are read here so they become the argparse defaults
    month, year = upcoming_month(lead_days=lead_days())

    parser = argparse.ArgumentParser(
        prog="sunday-prep",
        description="Prepare next month's Sunday presentations from a template.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    prep = sub.add_parser("prep", help="Create the TODO copies/shortcuts for each Sunday")
    prep.add_argument("--month", type=int, default=month, help="Month number, 1-12 (default: next week's)")
    prep.add_argument("--year", type=int, default=year, help="Year (default: next week's)")
    prep.add_argument("--template-file", default=os.getenv("SUNDAY_TEMPLATE_FILE", settings.TEMPLATE_FILE))
    prep.add_argument("--template-dir", default=os.getenv("SUNDAY_TEMPLATE_DIR", settings.TEMPLATE_DIR))
    prep.add_argument("--output-dir", default=os.getenv("SUNDAY_OUTPUT_DIR", settings.OUTPUT_DIR))
    prep.add_argument("--ext", default=os.getenv("SUNDAY_EXT", settings.EXTENSION))
    prep.add_argument("--mode", choices=["copy", "shortcut"], default="copy",
                      help="copy: TODO copy beside the template; shortcut: dated folder + TODO shortcut")
    prep.add_argument("--write", action="store_true", help="Actually write files (default is a dry run)")

    fix = sub.add_parser("fix-shortcuts", help="Rewrite absolute OneDrive paths in existing shortcuts")
    fix.add_argument("directory", help="Folder holding the .lnk files")
    return parser


def cmd_prep(args: argparse.Namespace, store: Optional[ShortcutStore] = None) -> int:
    try:
        cfg = PrepConfig(
            month=args.month,
            year=args.year,
            template_file=args.template_file,
            template_dir=args.template_dir,
            output_dir=args.output_dir,
            ext=args.ext,
            write=args.write,
            mode=args.mode,
        )
    except ValidationError as e:
        print(f"[red]Invalid arguments:[/red] {escape(str(e))}")
        return 2

    print(f"[bold]{month_name(cfg.month)} {cfg.year}[/bold]")
    print(f"Using Directory: {escape(cfg.template_dir)}")
    if cfg.write:
        print("Write mode is [green]enabled[/green]\n")
    else:
        print("Write mode is [yellow]disabled[/yellow], use --write to write files\n")

    try:
        report = run(cfg, store)
    except TemplateNotFound as e:
        log.error(str(e))
        return 1
    except ShortcutMetadataError as e:
        log.error(f"Shortcuts unavailable: {e}")
        return 1

    for stamp in report.created:
        print(f"[green]Created[/green] {stamp}")
    for stamp in report.planned:
        print(f"[blue]Would create[/blue] {stamp}")
    for stamp in report.failed:
        print(f"[red]Failed[/red] {stamp}")
    return 0


def cmd_fix_shortcuts(args: argparse.Namespace, store: Optional[ShortcutStore] = None) -> int:
    directory = Path(expand_env(args.directory))
    if not directory.is_dir():
        log.error(f"Not a directory: {directory}")
        return 1
    try:
        store = store or WindowsShortcutStore()
    except ShortcutMetadataError as e:
        log.error(f"Shortcuts unavailable: {e}")
        return 1
    count = fix_existing_shortcuts(store, directory)
    print(f"[green]Checked[/green] {count} shortcut(s) in {escape(str(directory))}")
    return 0


def main(argv: Optional[List[str]] = None, store: Optional[ShortcutStore] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    try:
        parser = build_parser()
    except InvalidArgument as e:
        print(f"[red]Invalid arguments:[/red] {escape(str(e))}")
        return 2
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "fix-shortcuts":
        return cmd_fix_shortcuts(args, store)
    if args.command == "prep":
        return cmd_prep(args, store)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
