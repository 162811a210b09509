import argparse
import logging
import sys

from . import config
from .lox import Lox


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pylox", description="Run Lox scripts")
    parser.add_argument("filename", nargs="?",
                        help="script to run; starts a prompt when omitted")
    parser.add_argument("--print-ast", action="store_true",
                        help="print the syntax tree instead of running")
    parser.add_argument("--log-level", choices=config.LOG_LEVELS,
                        type=str.upper, default=None,
                        help="logging level (default: $PYLOX_LOG_LEVEL)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=config.get_log_level(args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr)
    sys.setrecursionlimit(config.get_recursion_limit())

    lox = Lox()
    if args.filename is None:
        lox.run_prompt()
        return 0
    return lox.run_file(args.filename, print_ast=args.print_ast)


if __name__ == "__main__":
    sys.exit(main())
