"""Command-line interface."""
from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from displacedpoints.logging_config import setup_logging, verbosity_to_level
from displacedpoints.main import run, summary_line


class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with status 1 instead of argparse's 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="displacedpoints",
        description="Expand labeled 3D points with displaced copies chosen by the label's digits.",
    )
    parser.add_argument("input_file", help="points as 'label X Y Z' or 'label,X,Y,Z'")
    parser.add_argument("output_file", help="CSV file to write (label,x,y,z)")
    parser.add_argument(
        "--no-original",
        dest="keep_original",
        action="store_false",
        help="Write only the displaced points to the CSV (the plot still shows originals).",
    )
    parser.add_argument(
        "--plot",
        metavar="PREFIX",
        help="Also write PREFIX.png and PREFIX.vtp.",
    )
    parser.add_argument("--show", action="store_true", help="Open the plot window (with --plot).")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logs.")
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to PATH.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        setup_logging(level=verbosity_to_level(args.verbose), log_file=args.log_file)
        summary = run(
            args.input_file,
            args.output_file,
            keep_original=args.keep_original,
            plot_prefix=args.plot,
            show=args.show,
        )
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(summary_line(args.output_file, summary, args.keep_original))
    return 0


if __name__ == "__main__":
    sys.exit(main())
