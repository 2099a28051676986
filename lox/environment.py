from typing import Dict, Optional

from .errors import LoxRuntimeError, RuntimeErrorKind
from .tokens import Token
from .values import Value


class Environment:
    """One lexical scope: name -> value bindings plus a link to the enclosing scope."""
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Value] = {}

    @property
    def depth(self) -> int:
        # number of enclosing scopes; 0 for the global scope
        return 0 if self.enclosing is None else self.enclosing.depth + 1

    def define(self, name: str, value: Value) -> None:
        # redeclaring in the same scope simply rebinds
        self.values[name] = value

    def get(self, name: Token) -> Value:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise LoxRuntimeError(name, RuntimeErrorKind.UNDEFINED_VARIABLE)

    def assign(self, name: Token, value: Value) -> None:
        # Mutate the innermost scope that already binds the name; assignment
        # never creates a binding.
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value)
        else:
            raise LoxRuntimeError(name, RuntimeErrorKind.UNDEFINED_VARIABLE)
