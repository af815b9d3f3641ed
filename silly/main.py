"""Runs SILLY programs from a file, or starts the interactive shell when no file is given. Installed as the `silly`
console script.
"""

import argparse
import logging

from silly.lang.error import ErrorHandler
from silly.lang.session import Session
from silly.lang.shell import Shell


def main(argv=None):
    """Runs the SILLY interpreter. argv defaults to sys.argv[1:]."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="silly", description="Interpreter for the SILLY language.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-q", "--quiet", action="store_true", help="do not echo statements read from the file")
        parser.add_argument("-v", "--verbose", action="store_true", help="log scope and function call activity")
        args = parser.parse_args(argv)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

        if args.file is not None:
            Session(error_handler, args.file, echo=not args.quiet).run_file()
        else:
            Shell(Session(error_handler)).cmdloop()


if __name__ == "__main__":
    main()
