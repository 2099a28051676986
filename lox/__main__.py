"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv|-vvvv] [--debug-file PATH] [--tokens|--ast] [script]

With no script an interactive prompt is started; bindings made on one line
stay visible on the following ones.

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Where to write debug output (default: debug.txt)
  --tokens      Print the scanned tokens instead of running
  --ast         Print the parsed statements instead of running

Exit status (sysexits.h): 64 usage error, 65 lexical or syntax error,
66 script not found, 70 runtime error.
"""

import argparse
import sys
from functools import partial
from pathlib import Path
from typing import List, Optional, Union

from .ast_printer import print_stmt
from .debug import DEFAULT_DEBUG_FILE, DebugLog
from .diagnostics import Diagnostics
from .interpreter import Interpreter, parse_program, run_program
from .scanner import scan_tokens
from .shell import Shell

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EX_USAGE, f"{self.prog}: error: {message}\n")


def process(source: Union[str, bytes], interpreter: Interpreter, mode: str = 'run') -> None:
    """Handle one chunk of source (a whole file or one prompt line)."""
    if mode == 'tokens':
        for token in scan_tokens(source, interpreter.diagnostics):
            print(token)
        return
    if mode == 'ast':
        statements = parse_program(source, interpreter.diagnostics, interpreter.debug)
        for stmt in statements or []:
            print(print_stmt(stmt))
        return
    run_program(source, interpreter)


def run_line(interpreter: Interpreter, mode: str, line: str) -> None:
    # errors on one line must not leak into the status of the next
    interpreter.diagnostics.reset()
    process(line, interpreter, mode)


def main(argv: Optional[List[str]] = None) -> None:
    parser = ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default=DEFAULT_DEBUG_FILE, help='file receiving debug output')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', action='store_const', const='tokens', dest='mode',
                       help='print scanned tokens instead of running')
    group.add_argument('--ast', action='store_const', const='ast', dest='mode',
                       help='print parsed statements instead of running')
    parser.add_argument('script', nargs='?', help='Lox script to execute')
    args = parser.parse_args(argv)
    mode = args.mode or 'run'

    debug = DebugLog(args.v, args.debug_file)
    interpreter = Interpreter(Diagnostics(), debug=debug)

    if args.script is None:
        try:
            Shell(partial(run_line, interpreter, mode)).cmdloop()
        finally:
            debug.close()
        return

    script = Path(args.script)
    if not script.exists():
        print(f"Error: file {script} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    try:
        process(script.read_bytes(), interpreter, mode)
    finally:
        debug.close()

    if interpreter.diagnostics.had_error:
        sys.exit(EX_DATAERR)
    if interpreter.diagnostics.had_runtime_error:
        sys.exit(EX_SOFTWARE)


if __name__ == '__main__':
    main()
