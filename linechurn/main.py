"""
linechurn: see which lines of a git repository change the most

Entry point for the command line.
"""

import argparse

from linechurn import __version__
from linechurn.cli import display_summary
from linechurn.config import ConfigError, load_config, validate_config
from linechurn.history_client import HistoryClientError
from linechurn.logging_config import configure_logging
from linechurn.output_manager import ReportWriteError
from linechurn.pipeline import run

DESCRIPTION = """\
Visualize a git repository's history by counting how many commits changed
each line. Heavily edited lines are drawn red, lines barely or never touched
after they were added stay white. Often edited lines are likely to hold the
most bugs, which makes them good targets for tests.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linechurn", description=DESCRIPTION)
    parser.add_argument("--repo", help="Directory with a git repo to visualize")
    parser.add_argument("--outdir", help="Directory the reports are written to")
    parser.add_argument(
        "--dont-skip-existing",
        dest="skip_existing",
        action="store_const",
        const=False,
        default=None,
        help="Regenerate reports that already exist",
    )
    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Skip files with more lines than this (0 means no limit)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent git queries per file (default 1)",
    )
    parser.add_argument(
        "--git-timeout",
        type=float,
        default=None,
        help="Seconds before a single git query is abandoned",
    )
    parser.add_argument(
        "--debug",
        action="store_const",
        const=True,
        default=None,
        help="Enable debug output",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            repo=args.repo,
            outdir=args.outdir,
            skip_existing=args.skip_existing,
            max_lines=args.max_lines,
            workers=args.workers,
            git_timeout=args.git_timeout,
            debug=args.debug,
        )
        validate_config(config)
    except ConfigError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    configure_logging(config.debug)

    try:
        summary = run(config)
    except HistoryClientError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1
    except ReportWriteError as e:
        print(f"\nError: {e}")
        return 1

    display_summary(summary)
    return 0


if __name__ == "__main__":
    exit(main())
