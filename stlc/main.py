"""Simply typed lambda calculus interpreter and compiler. Called from the stlc console script.

Basic program flow:
    1. Parser: produces a term from the source file (see stlc/lang/lexical.py)
    2. Type checker: walks the term and collects diagnostics (see stlc/pure/check.py)
        - Will stop if there is any diagnostic
    3. Either the evaluator runs the term (stlc/pure/evaluate.py), or the code generator turns it into JavaScript
       (stlc/pure/codegen.py)
"""

import argparse
import sys

from termcolor import colored

from stlc.lang.error import ErrorHandler
from stlc.lang.session import Session


def main(argv=None):
    """Runs stlc. Called from stlc executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="stlc", description="Simply typed lambda calculus")
        parser.add_argument("file", help="file to type check and run")

        mode = parser.add_mutually_exclusive_group()
        mode.add_argument("-c", "--compile", action="store_true", help="compile to JavaScript instead of evaluating")
        mode.add_argument("-t", "--check", action="store_true", help="only type check and print the type")
        parser.add_argument("--ast", action="store_true", help="print the parsed term tree first")
        args = parser.parse_args(argv)

        sess = Session(error_handler, args.file)
        if args.ast:
            print(sess.display())

        if args.compile:
            sess.check()
            print(colored(f"Compiling '{args.file}' to JavaScript\n", "green"))
            print(sess.compile())

        elif args.check:
            term_type = sess.check()
            print(colored(f"Checking '{args.file}'\n", "green"))
            print(term_type if term_type is not None else "")

        else:
            sess.check()
            print(colored(f"Evaluating '{args.file}'\n", "green"))
            print(sess.evaluate())


if __name__ == "__main__":
    sys.exit(main())
