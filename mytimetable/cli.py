"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    mytimetable search --query data --grade 2 --day Mon --pages 2
    mytimetable majors
    mytimetable interactive

The catalog is read from local JSON files (--catalog-dir, default: the
package's data/ folder) or fetched over HTTP (--base-url).

Note:
- The interactive timetable editor lives in mytimetable/interactive.py
- Diagnostics go through logging (rich handler on stderr); results are printed
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import requests
from rich.console import Console
from rich.logging import RichHandler

from mytimetable.catalog import fetch_catalog, load_catalog_dir
from mytimetable.config import PAGE_SIZE
from mytimetable.model import FilterCriteria, Lecture
from mytimetable.pagination import Paginator
from mytimetable.render import render_lectures
from mytimetable.search import all_majors, filter_lectures

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_catalog(args: argparse.Namespace) -> list[Lecture]:
    if args.base_url:
        return fetch_catalog(args.base_url)
    return load_catalog_dir(args.catalog_dir)


def _criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        query=(args.query or "").strip(),
        grades=args.grade,
        days=args.day,
        times=args.time,
        majors=args.major,
        credits=args.credits,
    )


def _cmd_search(args: argparse.Namespace, lectures: list[Lecture]) -> int:
    """
    Filter the catalog and print the first `--pages` pages of results.
    """
    if args.pages < 1:
        console.print("--pages must be at least 1.")
        return 1

    filtered = filter_lectures(lectures, _criteria_from_args(args))
    if not filtered:
        console.print("No results.")
        return 0

    pages = Paginator(filtered, PAGE_SIZE)
    for _ in range(args.pages - 1):
        if not pages.advance():
            break

    console.print(render_lectures(pages.visible))
    console.print(f"Results: {pages.total} (showing {len(pages.visible)}, page {pages.page}/{pages.last_page})")
    return 0


def _cmd_majors(args: argparse.Namespace, lectures: list[Lecture]) -> int:
    majors = all_majors(lectures)
    if not majors:
        console.print("No majors (catalog is empty).")
        return 0
    for major in majors:
        console.print(major)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="mytimetable", description="MyTimetable CLI")
    parser.add_argument("--catalog-dir", type=Path, default=None, help="Folder with schedules-*.json files")
    parser.add_argument("--base-url", type=str, default="", help="Fetch the catalog from this URL instead")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug diagnostics")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Search the lecture catalog")
    p_search.add_argument("--query", "-q", type=str, default="", help="Text in lecture code or title")
    p_search.add_argument("--grade", type=int, action="append", default=[], help="Grade (repeatable)")
    p_search.add_argument("--day", type=str, action="append", default=[], help="Day label, e.g. Mon (repeatable)")
    p_search.add_argument("--time", type=int, action="append", default=[], help="Time slot 1-24 (repeatable)")
    p_search.add_argument("--major", type=str, action="append", default=[], help="Major (repeatable)")
    p_search.add_argument("--credits", type=int, default=None, help="Credits prefix, e.g. 3")
    p_search.add_argument("--pages", type=int, default=1, help=f"Pages of {PAGE_SIZE} results to show")

    sub.add_parser("majors", help="List the majors found in the catalog")

    sub.add_parser("interactive", help="Interactive timetable editor")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, loads the catalog, dispatches to command
    handlers, and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        lectures = _load_catalog(args)
    except (requests.RequestException, ValueError) as exc:
        console.print(f"Could not load the lecture catalog: {exc}", markup=False)
        raise SystemExit(1)

    if args.command == "search":
        raise SystemExit(_cmd_search(args, lectures))
    if args.command == "majors":
        raise SystemExit(_cmd_majors(args, lectures))

    if args.command == "interactive":
        from mytimetable.interactive import run_interactive

        run_interactive(lectures)
        raise SystemExit(0)

    raise SystemExit(2)
