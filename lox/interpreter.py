"""Tree-walking interpreter for Lox.

This module ties the pipeline together: ``parse_program`` scans and parses
source text, and ``Interpreter`` executes the resulting statements against
a chain of ``Environment`` scopes. Expressions evaluate to one of the
value classes in ``lox.values``; operator type errors and undefined
variables raise ``LoxRuntimeError``, which aborts the rest of the run and
is reported once to the diagnostics sink.
"""

from __future__ import annotations

import math
from typing import List, Optional, TextIO, Tuple, Union

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, If, Literal,
    Logical, Print, Stmt, Unary, Var, Variable, While,
)
from .debug import DebugLog
from .diagnostics import Diagnostics
from .environment import Environment
from .errors import LoxRuntimeError, RuntimeErrorKind
from .parser import Parser
from .scanner import scan_tokens
from .tokens import Token, TokenType
from .values import (
    NIL, Number, String, Value, boolean, is_equal, is_truthy,
    stringify,
)


class Interpreter:
    """Core interpreter that executes Lox statements."""
    def __init__(self, diagnostics: Optional[Diagnostics] = None, out: Optional[TextIO] = None,
                 debug: Optional[DebugLog] = None):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.out = out
        self.debug = debug if debug is not None else DebugLog()
        self.globals = Environment()
        self.environment = self.globals

    # Public API
    def interpret(self, statements: List[Stmt]) -> Optional[Value]:
        """Execute statements in order, stopping at the first runtime error.

        Returns the value of the last statement when it was an expression
        statement, otherwise ``None``.
        """
        result: Optional[Value] = None
        try:
            for stmt in statements:
                result = self.execute(stmt)
        except LoxRuntimeError as error:
            self.debug.log(1, f"runtime error at line {error.token.line}: {error.kind.name}")
            self.diagnostics.runtime_error(error)
            return None
        self.debug.log(1, f"executed {len(statements)} statements")
        return result

    def execute(self, stmt: Stmt) -> Optional[Value]:
        if isinstance(stmt, Expression):
            return self.evaluate(stmt.expression)
        if isinstance(stmt, Print):
            value = self.evaluate(stmt.expression)
            text = stringify(value)
            self.debug.log(4, f"print {text!r}")
            print(text, file=self.out)
            return None
        if isinstance(stmt, Var):
            value = self.evaluate(stmt.initializer) if stmt.initializer is not None else NIL
            self.environment.define(stmt.name.lexeme, value)
            self.debug.log(2, f"define {stmt.name.lexeme} = {stringify(value)} (depth {self.environment.depth})")
            return None
        if isinstance(stmt, Block):
            self.execute_block(stmt.statements, Environment(self.environment))
            return None
        if isinstance(stmt, If):
            truthy = is_truthy(self.evaluate(stmt.condition))
            self.debug.log(3, f"if condition at line {self._line_of(stmt.condition)} -> {truthy}")
            if truthy:
                self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)
            return None
        if isinstance(stmt, While):
            iterations = 0
            while is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)
                iterations += 1
            self.debug.log(3, f"while loop at line {self._line_of(stmt.condition)} ran {iterations} times")
            return None
        raise NotImplementedError(f"execute: unexpected node type {type(stmt)}")

    def execute_block(self, statements: List[Stmt], environment: Environment) -> None:
        previous = self.environment
        self.environment = environment
        self.debug.log(3, f"enter block (depth {environment.depth})")
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            # restore even when a runtime error unwinds through this block
            self.environment = previous
            self.debug.log(3, f"exit block (depth {environment.depth})")

    def evaluate(self, expr: Expr) -> Value:
        value = self._evaluate(expr)
        if self.debug.enabled(4):
            self.debug.log(4, f"{type(expr).__name__} -> {stringify(value)}")
        return value

    def _evaluate(self, expr: Expr) -> Value:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Variable):
            return self.environment.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            self.debug.log(2, f"assign {expr.name.lexeme} = {stringify(value)}")
            return value
        if isinstance(expr, Logical):
            left = self.evaluate(expr.left)
            # short-circuit: the deciding operand is returned as is
            if expr.operator.type is TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)
        if isinstance(expr, Unary):
            right = self.evaluate(expr.right)
            if expr.operator.type is TokenType.BANG:
                return boolean(not is_truthy(right))
            if expr.operator.type is TokenType.MINUS:
                if not isinstance(right, Number):
                    raise LoxRuntimeError(expr.operator, RuntimeErrorKind.OPERAND_MUST_BE_NUMBER)
                return Number(-right.value)
            raise NotImplementedError(f"unary operator {expr.operator.type}")
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.apply_binary_op(expr.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr)}")

    def apply_binary_op(self, operator: Token, left: Value, right: Value) -> Value:
        op = operator.type
        if op is TokenType.EQUAL_EQUAL:
            return boolean(is_equal(left, right))
        if op is TokenType.BANG_EQUAL:
            return boolean(not is_equal(left, right))
        if op is TokenType.PLUS:
            if isinstance(left, Number) and isinstance(right, Number):
                return Number(left.value + right.value)
            if isinstance(left, String) and isinstance(right, String):
                return String(left.value + right.value)
            raise LoxRuntimeError(operator, RuntimeErrorKind.OPERANDS_MUST_BE_NUMBERS_OR_STRINGS)

        a, b = self.number_operands(operator, left, right)
        if op is TokenType.MINUS:
            return Number(a - b)
        if op is TokenType.STAR:
            return Number(a * b)
        if op is TokenType.SLASH:
            return Number(divide(a, b))
        if op is TokenType.GREATER:
            return boolean(a > b)
        if op is TokenType.GREATER_EQUAL:
            return boolean(a >= b)
        if op is TokenType.LESS:
            return boolean(a < b)
        if op is TokenType.LESS_EQUAL:
            return boolean(a <= b)
        raise NotImplementedError(f"binary operator {op}")

    @staticmethod
    def number_operands(operator: Token, left: Value, right: Value) -> Tuple[float, float]:
        if isinstance(left, Number) and isinstance(right, Number):
            return left.value, right.value
        raise LoxRuntimeError(operator, RuntimeErrorKind.OPERANDS_MUST_BE_NUMBERS)

    @staticmethod
    def _line_of(expr: Expr) -> Union[int, str]:
        # best effort: the first token found in the expression
        while True:
            if isinstance(expr, (Binary, Logical, Unary)):
                return expr.operator.line
            if isinstance(expr, (Variable, Assign)):
                return expr.name.line
            if isinstance(expr, Grouping):
                expr = expr.expression
                continue
            return '?'


def divide(a: float, b: float) -> float:
    """IEEE 754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def parse_program(source: Union[str, bytes], diagnostics: Diagnostics,
                  debug: Optional[DebugLog] = None) -> Optional[List[Stmt]]:
    """Scan and parse source text.

    Returns ``None`` when a lexical or syntax error was reported; such a
    program must not be executed.
    """
    tokens = scan_tokens(source, diagnostics)
    statements = Parser(tokens, diagnostics).parse()
    if debug is not None:
        count = 'no' if statements is None else len(statements)
        debug.log(1, f"scanned {len(tokens)} tokens, parsed {count} statements")
    if diagnostics.had_error:
        return None
    return statements


def run_program(source: Union[str, bytes], interpreter: Optional[Interpreter] = None) -> Optional[Value]:
    """Convenience function to parse and run a Lox program from source.

    Passing an existing ``interpreter`` keeps its global bindings, which is
    how the interactive prompt carries variables from line to line.
    """
    if interpreter is None:
        interpreter = Interpreter()
    statements = parse_program(source, interpreter.diagnostics, interpreter.debug)
    if statements is None:
        return None
    return interpreter.interpret(statements)
