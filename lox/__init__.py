# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .diagnostics import Diagnostics
from .errors import LoxError, LoxRuntimeError, ParseError
from .interpreter import Interpreter, parse_program, run_program

__all__ = [
    'Diagnostics',
    'Interpreter',
    'LoxError',
    'LoxRuntimeError',
    'ParseError',
    'parse_program',
    'run_program',
]
