"""Command-line front door for srctree.

Parses CLI options (with defaults from the user config file), validates the
root directory, and streams the rendered report to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from pathlib import Path

from .config import load_cli_defaults, load_config, save_config
from .logs import setup_logging
from .render import DEFAULT_MAX_FILE_SIZE, MARKDOWN, OUTPUT_FORMATS, ReportOptions, iter_report
from .tree_model import SortDirection, SortKey, WalkOptions, unknown_filters

logger = logging.getLogger(__name__)

EXAMPLES = """\
Examples:
  srctree ./src
      Show top-level entries in ./src

  srctree -d 3 -t ext:py -c
      Show Python files 3 levels deep and include file contents

  srctree --sort date -t group:code
      Show code files sorted by modification date

  srctree -c -p "TODO" --highlight
      Show files containing "TODO" and highlight the matches

  srctree -t ext:py -t group:web ./src
      Filter by more than one type (Python files OR files in the web group).
      Repeat '-t' for each filter; filters are combined with OR, not AND.

Type filters:
  ext:EXTENSION   files with a specific extension (e.g. ext:py)
  group:GROUP     files from a group: web, docs, images, code, config, data, script
  binary, text, dir, socket, pipe, executable, symlink, device,
  hidden, empty, archive, all
"""


def _non_negative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _regex(value: str) -> re.Pattern[str]:
    """argparse type compiling a content pattern."""
    try:
        return re.compile(value)
    except re.error as exc:
        raise argparse.ArgumentTypeError(f"invalid regular expression {value!r}: {exc}") from exc


def build_parser(defaults: dict[str, object] | None = None) -> argparse.ArgumentParser:
    defaults = defaults or {}
    default_format = defaults.get("format", MARKDOWN)
    if default_format not in OUTPUT_FORMATS:
        default_format = MARKDOWN
    parser = argparse.ArgumentParser(
        prog="srctree",
        description="Map and display a source tree with filtering, sorting and content excerpts.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("directory", nargs="?", default=".", help="Directory to start mapping from.")
    parser.add_argument(
        "-d",
        "--depth",
        type=_non_negative_int,
        default=defaults.get("depth", 1),
        help="Maximum directory depth (0 = unlimited).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=default_format,
        help="Output format: markdown or text.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        help="Exclude directories or files by name (repeatable).",
    )
    parser.add_argument("-c", "--content", action="store_true", help="Show file contents in the tree.")
    parser.add_argument(
        "-s",
        "--max-size",
        type=_non_negative_int,
        default=defaults.get("max_size", DEFAULT_MAX_FILE_SIZE),
        help="Maximum file size in bytes for content display.",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="types",
        action="append",
        default=None,
        help="Filter results by type (repeatable; filters are OR-combined).",
    )
    parser.add_argument("-p", "--pattern", type=_regex, default=None, help="Show only content matching a regex.")
    parser.add_argument(
        "--context",
        type=_non_negative_int,
        default=defaults.get("context", 0),
        help="Show N lines of context around matches.",
    )
    parser.add_argument("--whole-file", action="store_true", help="Show the entire file, marking matching lines.")
    parser.add_argument("--highlight", action="store_true", help="Highlight matching content.")
    parser.add_argument("--sort", default=defaults.get("sort", "name"), help="Sort by: name, date, size, type, ext.")
    parser.add_argument("--direction", default=defaults.get("direction", "asc"), help="Sort direction: asc or desc.")
    parser.add_argument("--dirs-first", action="store_true", help="Show directories first (default).")
    parser.add_argument("--no-dirs-first", action="store_true", help="Don't sort directories separately.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug diagnostics to stderr.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store depth, format, max size, excludes, context and sort options as future defaults.",
    )
    parser.set_defaults(
        config_exclude=list(defaults.get("exclude", [])),
        config_dirs_first=defaults.get("dirs_first", True),
    )
    return parser


def resolve_sort(args: argparse.Namespace) -> tuple[SortKey, SortDirection]:
    """Parse sort flags, warning and falling back on unrecognized values."""
    sort_key = SortKey.parse(args.sort)
    if sort_key is None:
        logger.warning("unrecognized sort key %r; sorting by name", args.sort)
        sort_key = SortKey.NAME
    direction = SortDirection.parse(args.direction)
    if direction is None:
        logger.warning("unrecognized sort direction %r; using asc", args.direction)
        direction = SortDirection.ASC
    return sort_key, direction


def resolve_dirs_first(args: argparse.Namespace) -> bool:
    if args.no_dirs_first:
        return False
    if args.dirs_first:
        return True
    return bool(args.config_dirs_first)


def build_options(args: argparse.Namespace) -> tuple[WalkOptions, ReportOptions]:
    sort_key, direction = resolve_sort(args)
    filters = tuple(args.types or ())
    for predicate in unknown_filters(filters):
        logger.warning("type filter %r matches nothing", predicate)

    walk_options = WalkOptions(
        max_depth=args.depth,
        exclude=frozenset([*args.config_exclude, *(args.exclude or ())]),
        filters=filters,
        sort_key=sort_key,
        sort_direction=direction,
        dirs_first=resolve_dirs_first(args),
    )
    report_options = ReportOptions(
        output_format=args.format,
        show_content=args.content,
        max_file_size=args.max_size,
        pattern=args.pattern,
        context=args.context,
        whole_file=args.whole_file,
        highlight=args.highlight,
    )
    return walk_options, report_options


def save_defaults(walk_options: WalkOptions, report_options: ReportOptions) -> None:
    """Merge the active options into the persisted config."""
    config = load_config()
    config.update(
        {
            "depth": walk_options.max_depth,
            "format": report_options.output_format,
            "max_size": report_options.max_file_size,
            "exclude": sorted(walk_options.exclude),
            "context": report_options.context,
            "sort": walk_options.sort_key.value,
            "direction": walk_options.sort_direction.value,
            "dirs_first": walk_options.dirs_first,
        }
    )
    save_config(config)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the source-tree report.

    Exits with status 1 before printing anything when the root is not a
    directory; every other failure is reported inline in the report.
    """
    parser = build_parser(load_cli_defaults())
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    root = Path(args.directory)
    if not root.is_dir():
        raise SystemExit(f"Error: '{root}' is not a directory.")

    walk_options, report_options = build_options(args)
    if args.save_defaults:
        save_defaults(walk_options, report_options)

    try:
        for line in iter_report(root, walk_options, report_options):
            sys.stdout.write(line + "\n")
        sys.stdout.flush()
    except BrokenPipeError:
        # The interpreter flushes stdout again at exit; send that flush to devnull.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
