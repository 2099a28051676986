"""Error reporting for a single Lox run.

A ``Diagnostics`` object is created by whoever drives a run and handed to
the scanner, the parser and the interpreter in turn. It prints each
error as it arrives and remembers whether a lexical/syntax error or a
runtime error happened, so the driver can decide what to do next (skip
evaluation, pick an exit code). Both flags can be reset independently,
which the interactive prompt does between lines.

Rendering lives in the ``render_*`` functions below and is kept apart
from the code that raises errors.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .errors import LoxRuntimeError, ParseError, ScanErrorKind
from .tokens import TokenType


def render_report(line: int, location: str, message: str) -> str:
    return f"[line {line}] Error{location}: {message}"


def render_scan_error(line: int, kind: ScanErrorKind) -> str:
    return render_report(line, '', kind.value)


def render_parse_error(error: ParseError) -> str:
    token = error.token
    if token.type is TokenType.EOF:
        location = ' at end'
    else:
        location = f" at '{token.lexeme}'"
    return render_report(token.line, location, error.kind.value)


def render_runtime_error(error: LoxRuntimeError) -> str:
    message = error.kind.value.format(name=error.token.lexeme)
    return f"{message}\n[line {error.token.line}]"


class Diagnostics:
    """Collects and prints the errors of one run."""
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.had_error = False
        self.had_runtime_error = False
        self.messages: List[str] = []

    def scan_error(self, line: int, kind: ScanErrorKind) -> None:
        self._emit(render_scan_error(line, kind))
        self.had_error = True

    def parse_error(self, error: ParseError) -> None:
        self._emit(render_parse_error(error))
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError) -> None:
        self._emit(render_runtime_error(error))
        self.had_runtime_error = True

    def reset_error(self) -> None:
        self.had_error = False

    def reset_runtime_error(self) -> None:
        self.had_runtime_error = False

    def reset(self) -> None:
        self.reset_error()
        self.reset_runtime_error()
        self.messages.clear()

    def _emit(self, message: str) -> None:
        self.messages.append(message)
        # resolve the default stream late so redirected stderr is honoured
        stream = self.stream if self.stream is not None else sys.stderr
        print(message, file=stream)
