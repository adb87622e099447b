"""Uses the lambda calculus parser to print syntax trees of .lc files, or runs in command-line mode. Also uses error
handling context manager. Called from the lcparse console script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from lcparse.lang.error import ErrorHandler
from lcparse.lang.session import Session
from lcparse.lang.shell import Shell


def build_parser():
    """Returns the argparse parser for the lcparse executable."""
    parser = argparse.ArgumentParser(prog="lcparse", description="Parse untyped lambda calculus expressions.")
    parser.add_argument("file", help="file to parse line by line (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--format", dest="fmt", choices=Session.FORMATS, default="json",
                        help="print tagged JSON syntax trees (default) or canonical λ-terms")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation, 0 for one line per term")
    return parser


def main(argv=None):
    """Runs lcparse. Called from lcparse executable script."""
    assert sys.version_info >= (3, 7), "lcparse cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, fmt=args.fmt, indent=args.indent)
            sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, fmt=args.fmt, indent=args.indent)).cmdloop()


if __name__ == "__main__":
    main()
