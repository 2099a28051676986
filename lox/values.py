"""Runtime values for Lox.

Lox is dynamically typed, but its set of value kinds is closed: every
value is exactly one of Number (a 64-bit float), String, Boolean or Nil.
Each kind is a small frozen dataclass so that equality is structural
and values of different kinds never compare equal. Operator code in the
interpreter dispatches on these classes explicitly; adding a kind means
adding a class here and handling it at each operator site.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Nil:
    pass


Value = Union[Number, String, Boolean, Nil]

NIL = Nil()
TRUE = Boolean(True)
FALSE = Boolean(False)


def boolean(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


def format_number(n: float) -> str:
    """Render a float in plain decimal notation.

    Integral values drop the fractional part (``3.0`` prints as ``3``) and
    no exponent notation is ever used; the digits are the shortest ones
    that round-trip, so ``0.1`` prints as ``0.1``.
    """
    if math.isnan(n):
        return 'NaN'
    if math.isinf(n):
        return 'inf' if n > 0 else '-inf'
    text = format(Decimal(repr(n)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def stringify(value: Value) -> str:
    if isinstance(value, Number):
        return format_number(value.value)
    if isinstance(value, String):
        return value.value
    if isinstance(value, Boolean):
        return 'true' if value.value else 'false'
    if isinstance(value, Nil):
        return 'nil'
    raise TypeError(f'not a Lox value: {value!r}')


def is_truthy(value: Value) -> bool:
    # Only nil and false are falsy; 0 and "" are truthy.
    if isinstance(value, Nil):
        return False
    if isinstance(value, Boolean):
        return value.value
    return True


def is_equal(a: Value, b: Value) -> bool:
    if isinstance(a, Number) and isinstance(b, Number):
        # IEEE comparison, so NaN is never equal to itself
        return a.value == b.value
    return a == b
