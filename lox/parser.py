"""Recursive-descent parser for Lox.

Grammar, from lowest to highest precedence::

    program        -> declaration* EOF
    declaration    -> varDecl | statement
    varDecl        -> "var" IDENTIFIER ( "=" expression )? ";"
    statement      -> forStmt | ifStmt | printStmt | whileStmt | block | exprStmt
    forStmt        -> "for" "(" ( varDecl | exprStmt | ";" ) expression? ";" expression? ")" statement
    ifStmt         -> "if" "(" expression ")" statement ( "else" statement )?
    printStmt      -> "print" expression ";"
    whileStmt      -> "while" "(" expression ")" statement
    block          -> "{" declaration* "}"
    exprStmt       -> expression ";"

    expression     -> assignment
    assignment     -> IDENTIFIER "=" assignment | logic_or
    logic_or       -> logic_and ( "or" logic_and )*
    logic_and      -> equality ( "and" equality )*
    equality       -> comparison ( ( "!=" | "==" ) comparison )*
    comparison     -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term           -> factor ( ( "-" | "+" ) factor )*
    factor         -> unary ( ( "/" | "*" ) unary )*
    unary          -> ( "!" | "-" ) unary | primary
    primary        -> NUMBER | STRING | "true" | "false" | "nil"
                    | "(" expression ")" | IDENTIFIER

``for`` has no node of its own: it is desugared here into a block holding
the initializer and a ``while`` loop.

Any grammar rule that cannot continue raises ``ParseError``. Only the
top-level ``parse`` catches it: the error is reported once, the parser
runs one panic-mode cycle to skip to the next statement boundary, and
the whole parse yields ``None`` so that nothing gets executed.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, If, Literal,
    Logical, Print, Stmt, Unary, Var, Variable, While,
)
from .diagnostics import Diagnostics
from .errors import ParseError, ParseErrorKind
from .tokens import STATEMENT_KEYWORDS, Token, TokenType
from .values import FALSE, NIL, TRUE


class RecoveryState(Enum):
    RESUMED = 'resumed'
    SEEKING_BOUNDARY = 'seeking boundary'


class PanicRecovery:
    """Panic-mode state machine.

    After an error the machine is put into ``SEEKING_BOUNDARY``. It is then
    shown each (previous, current) token pair as the parser skips ahead and
    switches back to ``RESUMED`` once the previous token was a ``;`` or the
    current one starts a new statement (or is the end of input).
    """

    def __init__(self):
        self.state = RecoveryState.RESUMED

    @property
    def panicking(self) -> bool:
        return self.state is RecoveryState.SEEKING_BOUNDARY

    def enter(self) -> None:
        self.state = RecoveryState.SEEKING_BOUNDARY

    def observe(self, previous: Token, current: Token) -> RecoveryState:
        if self.state is RecoveryState.SEEKING_BOUNDARY and self.at_boundary(previous, current):
            self.state = RecoveryState.RESUMED
        return self.state

    @staticmethod
    def at_boundary(previous: Token, current: Token) -> bool:
        if current.type is TokenType.EOF:
            return True
        if previous.type is TokenType.SEMICOLON:
            return True
        return current.type in STATEMENT_KEYWORDS


class Parser:
    def __init__(self, tokens: List[Token], diagnostics: Diagnostics):
        self.tokens = tokens
        self.diagnostics = diagnostics
        self.current = 0
        self.recovery = PanicRecovery()

    def parse(self) -> Optional[List[Stmt]]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            try:
                statements.append(self.declaration())
            except ParseError as error:
                self.diagnostics.parse_error(error)
                self.synchronize()
                return None
        return statements

    def parse_expression(self) -> Optional[Expr]:
        """Parse the tokens as a single expression (no trailing ';')."""
        try:
            expr = self.expression()
            if not self.is_at_end():
                raise self.error(self.peek(), ParseErrorKind.EXPECT_EXPRESSION)
            return expr
        except ParseError as error:
            self.diagnostics.parse_error(error)
            return None

    # Statements

    def declaration(self) -> Stmt:
        if self.match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self) -> Stmt:
        name = self.consume(TokenType.IDENTIFIER, ParseErrorKind.EXPECT_VARIABLE_NAME)
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, ParseErrorKind.EXPECT_SEMICOLON_AFTER_VAR)
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, ParseErrorKind.EXPECT_LEFT_PAREN_AFTER_FOR)

        initializer: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition: Optional[Expr] = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, ParseErrorKind.EXPECT_SEMICOLON_AFTER_LOOP_CONDITION)

        increment: Optional[Expr] = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, ParseErrorKind.EXPECT_RIGHT_PAREN_AFTER_FOR_CLAUSES)

        body = self.statement()

        if increment is not None:
            body = Block([body, Expression(increment)])
        if condition is None:
            condition = Literal(TRUE)
        body = While(condition, body)
        if initializer is not None:
            body = Block([initializer, body])
        return body

    def if_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, ParseErrorKind.EXPECT_LEFT_PAREN_AFTER_IF)
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, ParseErrorKind.EXPECT_RIGHT_PAREN_AFTER_IF_CONDITION)

        then_branch = self.statement()
        else_branch: Optional[Stmt] = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, ParseErrorKind.EXPECT_SEMICOLON_AFTER_VALUE)
        return Print(value)

    def while_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, ParseErrorKind.EXPECT_LEFT_PAREN_AFTER_WHILE)
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, ParseErrorKind.EXPECT_RIGHT_PAREN_AFTER_WHILE_CONDITION)
        body = self.statement()
        return While(condition, body)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())
        self.consume(TokenType.RIGHT_BRACE, ParseErrorKind.EXPECT_RIGHT_BRACE_AFTER_BLOCK)
        return statements

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, ParseErrorKind.EXPECT_SEMICOLON_AFTER_EXPRESSION)
        return Expression(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            if not isinstance(expr, Variable):
                raise self.error(equals, ParseErrorKind.INVALID_ASSIGNMENT_TARGET)
            # right-associative: a = b = c assigns c to b, then to a
            return Assign(expr.name, self.assignment())
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                         TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(FALSE)
        if self.match(TokenType.TRUE):
            return Literal(TRUE)
        if self.match(TokenType.NIL):
            return Literal(NIL)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, ParseErrorKind.EXPECT_RIGHT_PAREN_AFTER_EXPRESSION)
            return Grouping(expr)
        raise self.error(self.peek(), ParseErrorKind.EXPECT_EXPRESSION)

    # Error recovery

    def synchronize(self) -> None:
        """Discard tokens until the start of the next statement."""
        self.recovery.enter()
        self.advance()
        while self.recovery.observe(self.previous(), self.peek()) is RecoveryState.SEEKING_BOUNDARY:
            self.advance()

    # Token helpers

    def match(self, *types: TokenType) -> bool:
        for type in types:
            if self.check(type):
                self.advance()
                return True
        return False

    def consume(self, type: TokenType, kind: ParseErrorKind) -> Token:
        if self.check(type):
            return self.advance()
        raise self.error(self.peek(), kind)

    def check(self, type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type is type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, kind: ParseErrorKind) -> ParseError:
        return ParseError(token, kind)
