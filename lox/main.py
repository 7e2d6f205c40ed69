"""Runs lox scripts, or starts an interactive session when no script is given. Also uses the error handling context
manager. Called from the lox console script (and python -m lox).

Exit codes: 64 for a bad invocation, 65 if the script had lexical or syntax faults, 66 if it could not be read, 70 if
evaluating it raised a runtime fault.
"""

import argparse
import sys

from lox.core.printer import AstPrinter
from lox.lang.error import EX_USAGE, ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but a bad invocation exits with EX_USAGE."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(EX_USAGE)


def build_parser():
    parser = ArgumentParser(prog="lox")
    parser.add_argument("file", help="script to run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--no-color", action="store_true", help="do not color error messages")

    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="print the script's tokens instead of running it")
    dump.add_argument("--ast", action="store_true", help="print the script's syntax tree instead of running it")
    return parser


def main(argv=None):
    """Runs lox interpreter. Called from lox console script."""
    assert sys.version_info >= (3, 7), "lox cannot be run with python < 3.7"

    args = build_parser().parse_args(argv)

    with ErrorHandler(color=sys.stderr.isatty() and not args.no_color) as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)

            if args.tokens:
                for token in sess.tokenize(sess.load()):
                    print(token)
            elif args.ast:
                printer = AstPrinter()
                for stmt in sess.parse(sess.load()):
                    print(printer.print(stmt))
            else:
                sess.run_file()

            sys.exit(sess.diagnostics.exit_code)

        elif args.tokens or args.ast:
            build_parser().error("--tokens and --ast need a script")

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
