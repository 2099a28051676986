"""Render AST nodes as parenthesized prefix expressions.

``1 + 2 * 3`` prints as ``(+ 1 (* 2 3))``. Used by the ``--ast`` CLI flag
and by tests that need to compare tree shapes.
"""

from __future__ import annotations

from typing import Union

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, If, Literal,
    Logical, Print, Stmt, Unary, Var, Variable, While,
)
from .values import stringify


def parenthesize(name: str, *parts: Union[Expr, Stmt, str]) -> str:
    pieces = [name]
    for part in parts:
        if isinstance(part, str):
            pieces.append(part)
        elif isinstance(part, Stmt):
            pieces.append(print_stmt(part))
        else:
            pieces.append(print_expr(part))
    return '(' + ' '.join(pieces) + ')'


def print_expr(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return stringify(expr.value)
    if isinstance(expr, Grouping):
        return parenthesize('group', expr.expression)
    if isinstance(expr, Unary):
        return parenthesize(expr.operator.lexeme, expr.right)
    if isinstance(expr, (Binary, Logical)):
        return parenthesize(expr.operator.lexeme, expr.left, expr.right)
    if isinstance(expr, Variable):
        return expr.name.lexeme
    if isinstance(expr, Assign):
        return parenthesize('=', expr.name.lexeme, expr.value)
    raise NotImplementedError(f"print_expr: unexpected node type {type(expr)}")


def print_stmt(stmt: Stmt) -> str:
    if isinstance(stmt, Expression):
        return parenthesize(';', stmt.expression)
    if isinstance(stmt, Print):
        return parenthesize('print', stmt.expression)
    if isinstance(stmt, Var):
        if stmt.initializer is None:
            return parenthesize('var', stmt.name.lexeme)
        return parenthesize('var', stmt.name.lexeme, stmt.initializer)
    if isinstance(stmt, Block):
        return parenthesize('block', *stmt.statements)
    if isinstance(stmt, If):
        if stmt.else_branch is None:
            return parenthesize('if', stmt.condition, stmt.then_branch)
        return parenthesize('if', stmt.condition, stmt.then_branch, stmt.else_branch)
    if isinstance(stmt, While):
        return parenthesize('while', stmt.condition, stmt.body)
    raise NotImplementedError(f"print_stmt: unexpected node type {type(stmt)}")
