"""Error kinds and exception types.

Every error the front end or the interpreter can produce is one member of
a closed enumeration. Raising code only picks the kind and the source
location; turning that pair into text is done by ``lox.diagnostics``.
"""

from __future__ import annotations

from enum import Enum

from .tokens import Token


class ScanErrorKind(Enum):
    UNEXPECTED_CHARACTER = 'Unexpected character.'
    UNTERMINATED_STRING = 'Unterminated string.'


class ParseErrorKind(Enum):
    EXPECT_EXPRESSION = 'Expect expression.'
    EXPECT_RIGHT_PAREN_AFTER_EXPRESSION = "Expect ')' after expression."
    EXPECT_SEMICOLON_AFTER_VALUE = "Expect ';' after value."
    EXPECT_SEMICOLON_AFTER_EXPRESSION = "Expect ';' after expression."
    EXPECT_VARIABLE_NAME = 'Expect variable name.'
    EXPECT_SEMICOLON_AFTER_VAR = "Expect ';' after variable declaration."
    INVALID_ASSIGNMENT_TARGET = 'Invalid assignment target.'
    EXPECT_RIGHT_BRACE_AFTER_BLOCK = "Expect '}' after block."
    EXPECT_LEFT_PAREN_AFTER_IF = "Expect '(' after 'if'."
    EXPECT_RIGHT_PAREN_AFTER_IF_CONDITION = "Expect ')' after if condition."
    EXPECT_LEFT_PAREN_AFTER_WHILE = "Expect '(' after 'while'."
    EXPECT_RIGHT_PAREN_AFTER_WHILE_CONDITION = "Expect ')' after while condition."
    EXPECT_LEFT_PAREN_AFTER_FOR = "Expect '(' after 'for'."
    EXPECT_SEMICOLON_AFTER_LOOP_CONDITION = "Expect ';' after loop condition."
    EXPECT_RIGHT_PAREN_AFTER_FOR_CLAUSES = "Expect ')' after for clauses."


class RuntimeErrorKind(Enum):
    OPERAND_MUST_BE_NUMBER = 'Operand must be a number.'
    OPERANDS_MUST_BE_NUMBERS = 'Operands must be numbers.'
    OPERANDS_MUST_BE_NUMBERS_OR_STRINGS = 'Operands must be two numbers or two strings.'
    UNDEFINED_VARIABLE = "Undefined variable '{name}'."


class LoxError(Exception):
    """Base class for errors raised while parsing or running Lox code."""
    pass


class ParseError(LoxError):
    """Raised by a grammar rule that cannot match the tokens in front of it."""
    def __init__(self, token: Token, kind: ParseErrorKind):
        super().__init__(f"ParseError: {kind.value} (line {token.line})")
        self.token = token
        self.kind = kind


class LoxRuntimeError(LoxError):
    """Exception type used to propagate Lox runtime errors."""
    def __init__(self, token: Token, kind: RuntimeErrorKind):
        super().__init__(f"RuntimeError: {kind.value.format(name=token.lexeme)} (line {token.line})")
        self.token = token
        self.kind = kind
