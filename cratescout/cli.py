"""Command-line front door for cratescout.

Parses CLI options and either prints one synchronous search (``--find``)
or launches the interactive search session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .errors import CratescoutError
from .highlight import DEFAULT_STYLE, colorize_toml
from .logs import configure_console_logging, configure_file_logging
from .registry.client import RegistryClient
from .registry.models import SearchPage, SortOrder
from .render.ansi import display_width, truncate_with_ellipsis
from .runtime import AppOptions, run_app
from .runtime.config import DEFAULT_LOG_PATH, load_settings
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 5
DESCRIPTION_COLUMN_MAX = 60


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _sort_order(value: str) -> SortOrder:
    """argparse type accepting a sort key, label, or enum name."""
    try:
        return SortOrder.parse(value)
    except ValueError as exc:
        choices = ", ".join(sort.key for sort in SortOrder)
        raise argparse.ArgumentTypeError(f"invalid sort order {value!r} (choose from {choices})") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cratescout",
        description=(
            "Search crates.io from the terminal. Without --find an interactive "
            "search session starts; with --find the results are printed directly."
        ),
    )
    parser.add_argument("-f", "--find", metavar="TERM", default=None, help="Search for TERM, print results, and exit.")
    parser.add_argument(
        "-s",
        "--sort",
        type=_sort_order,
        default=None,
        help="Sort order: " + ", ".join(sort.key for sort in SortOrder) + " (default: relevance or config).",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=_positive_int,
        default=DEFAULT_COUNT,
        help=f"Number of results printed by --find (default: {DEFAULT_COUNT}).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style for --find dependency lines.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--no-copy", action="store_true", help="Disable the copy-to-clipboard action.")
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help=f"Log file for interactive sessions (default: {DEFAULT_LOG_PATH}).",
    )
    return parser


def format_results_table(page: SearchPage, *, no_color: bool = False, style: str = DEFAULT_STYLE) -> str:
    """Render ``page`` as an aligned table followed by Cargo.toml lines."""
    if not page.records:
        return "No crates found.\n"
    headers = ("NAME", "VERSION", "DOWNLOADS", "DESCRIPTION")
    rows = [
        (
            record.name,
            record.version,
            f"{record.downloads:,}",
            truncate_with_ellipsis(record.description, DESCRIPTION_COLUMN_MAX),
        )
        for record in page.records
    ]
    widths = [max(display_width(row[idx]) for row in [headers, *rows]) for idx in range(len(headers))]

    def format_row(cells: tuple[str, ...]) -> str:
        padded = [
            cell + " " * (widths[idx] - display_width(cell)) if idx < len(cells) - 1 else cell
            for idx, cell in enumerate(cells)
        ]
        return "  ".join(padded).rstrip()

    out = [format_row(headers), *(format_row(row) for row in rows), ""]
    out.extend(colorize_toml(record.dependency_line(), style=style, no_color=no_color) for record in page.records)
    if page.total > len(page.records):
        out.append("")
        out.append(f"showing {len(page.records)} of {page.total:,} crates")
    return "\n".join(out) + "\n"


def find_and_print(term: str, sort: SortOrder, count: int, *, no_color: bool, style: str, client: RegistryClient) -> None:
    page = client.search(term, 1, count, sort)
    sys.stdout.write(format_results_table(page, no_color=no_color, style=style))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run either ``--find`` or the interactive session.

    Errors are reported on stderr as ``cratescout: <message>`` with exit
    status 1, after the terminal has been restored.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    sort = args.sort if args.sort is not None else settings.default_sort
    no_color = args.no_color or not sys.stdout.isatty()

    if args.find is not None:
        configure_console_logging()
        try:
            with RegistryClient(base_url=settings.registry_url, timeout=settings.request_timeout) as client:
                find_and_print(args.find, sort, args.count, no_color=no_color, style=args.style, client=client)
        except CratescoutError as exc:
            raise SystemExit(f"cratescout: {exc}") from exc
        return

    configure_file_logging(args.log_file or DEFAULT_LOG_PATH)
    options = AppOptions(
        settings=replace(
            settings,
            default_sort=sort,
            clipboard="off" if args.no_copy else settings.clipboard,
        ),
        theme=args.theme,
        no_color=args.no_color,
        copy_enabled=not args.no_copy,
    )
    try:
        run_app(options)
    except (CratescoutError, OSError) as exc:
        logger.exception("interactive session failed")
        raise SystemExit(f"cratescout: {exc}") from exc


if __name__ == "__main__":
    main()
