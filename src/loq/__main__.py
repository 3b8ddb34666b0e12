"""Main entry point for the Loq command-line tool."""

import argparse
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Iterable, List

from loq.loq import Loq
from loq.loq_config import LoqConfig
from loq.loq_error import LoqError
from loq.loq_expr import LoqExpr
from loq.loq_repl import LoqRepl


def setup_logging(log_dir: str, level: int) -> None:
    """Configure logging to timestamped, rotating files in the log directory."""
    log_dir = os.path.expanduser(log_dir)
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 20 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=19,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=20)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Another process may have removed it


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='loq',
        description='Symbolic arithmetic calculator with variables and functions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the interactive REPL
  loq

  # Run every statement in a file, one per line
  loq definitions.loq

  # Evaluate statements given on the command line
  loq -e "f(a,b)=a*b+c" -e "c=1" -e "f(2,3)"
"""
    )
    parser.add_argument(
        'file',
        nargs='?',
        help='Source file to run (default: start the REPL)'
    )
    parser.add_argument(
        '-e', '--eval',
        action='append',
        default=[],
        metavar='STATEMENT',
        help='Statement to evaluate; may be repeated'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Show expression trees instead of source form'
    )
    parser.add_argument(
        '--max-depth',
        type=int,
        default=100,
        help='Maximum nesting depth of parentheses and argument lists (default: 100)'
    )
    parser.add_argument(
        '--log-dir',
        default='~/.loq/logs',
        help='Directory for log files (default: ~/.loq/logs)'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )
    return parser


def _print_results(session: Loq, results: Iterable[LoqExpr]) -> None:
    for result in results:
        print(f"  => {session.format_result(result)}")


def main(argv: List[str] | None = None) -> int:
    """Main function to run the tool."""
    args = build_arg_parser().parse_args(argv)
    config = LoqConfig(max_depth=args.max_depth, debug=args.debug, log_dir=args.log_dir)
    setup_logging(config.log_dir, getattr(logging, args.log_level))

    if args.file is None and not args.eval:
        LoqRepl(config).run()
        return 0

    session = Loq(config)
    try:
        if args.file is not None:
            _print_results(session, session.iter_file(args.file))

        for statement in args.eval:
            _print_results(session, [session.run(statement)])

    except OSError as e:
        print(f"Error: Cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    except LoqError as e:
        print(e, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
