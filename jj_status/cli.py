"""
Command-line interface for jj-status.

This module is responsible for argument parsing and delegating to the
session layer; rendering is left to the render module.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from rich.text import Text

from .config import Config
from .errors import JjStatusError
from .line_refs import source_path
from .logging_utils import configure_logging
from .render import get_console, render_document
from .session import StatusSession


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jj-status",
        description=(
            "Show the status and per-file diff of a jj working copy as a "
            "structured document."
        ),
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Directory inside the workspace (default: current directory).",
    )
    parser.add_argument(
        "--jj",
        dest="jj_executable",
        help="jj executable to run (default: jj, or $JJ_STATUS_EXECUTABLE).",
    )
    parser.add_argument(
        "--tool",
        dest="diff_tool",
        help="Diff tool passed to `jj diff --tool` (default: difft).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for each jj command.",
    )
    parser.add_argument(
        "--expand",
        action="store_true",
        default=None,
        help="Show every file section expanded.",
    )
    parser.add_argument(
        "--locate",
        type=int,
        metavar="LINE",
        help=(
            "Print the source location of document line LINE instead of the "
            "document. Lines are counted from 0 starting below the document "
            "name heading."
        ),
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Render without colors.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(verbosity=args.verbose)
    console = get_console(no_color=args.no_color)

    try:
        config = Config.from_env(
            jj_executable=args.jj_executable,
            diff_tool=args.diff_tool,
            timeout=args.timeout,
            expand=args.expand,
            verbosity=args.verbose,
        )
        session = StatusSession(config)
        opened = session.open(args.path)
        if args.locate is not None:
            reference = session.locate(opened.root, args.locate)
            location = str(source_path(opened.root, reference))
            if reference.line_number is not None:
                location = f"{location}:{reference.line_number}"
            print(location)
        else:
            console.print(Text(opened.name, style="bold underline"))
            console.print(render_document(opened.document))
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130
    except JjStatusError as exc:
        print(f"jj-status: error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
