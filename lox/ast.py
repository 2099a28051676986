"""Abstract Syntax Tree (AST) definitions for the Lox language.

The parser produces these nodes and the interpreter walks them. There are
two families: expressions (``Expr``), which evaluate to a value, and
statements (``Stmt``), which are executed for their effect. Operator nodes
keep the operator token itself so that runtime errors can report the line
they came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .tokens import Token
from .values import Value


@dataclass
class Expr:
    """Base class for all expression nodes."""
    pass


@dataclass
class Literal(Expr):
    value: Value


@dataclass
class Grouping(Expr):
    expression: Expr


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Variable(Expr):
    name: Token


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


@dataclass
class Stmt:
    """Base class for all statement nodes."""
    pass


@dataclass
class Expression(Stmt):
    expression: Expr


@dataclass
class Print(Stmt):
    expression: Expr


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass
class Block(Stmt):
    statements: List[Stmt]


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt
