"""Lexical scanner for Lox.

The scanner walks the source once, left to right, keeping a window between
``start`` (first character of the token being scanned) and ``current``
(next character to read). Invalid characters and unterminated strings are
reported to the diagnostics sink and skipped; scanning always runs to the
end of the input and always finishes with exactly one EOF token.

Source may be given as ``str`` or as raw ``bytes``. Bytes are scanned one
character per byte; the contents of string literals are decoded back from
UTF-8 so that printed strings keep their original text.
"""

from __future__ import annotations

from typing import List, Optional, Union

from .diagnostics import Diagnostics
from .errors import ScanErrorKind
from .tokens import KEYWORDS, Token, TokenType
from .values import Number, String, Value

SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (type when followed by '=', type otherwise)
ONE_OR_TWO_CHAR_TOKENS = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'


def is_alphanumeric(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Scanner:
    def __init__(self, source: Union[str, bytes], diagnostics: Diagnostics):
        # one character per byte, whether the source came from a file or a prompt line
        if isinstance(source, str):
            source = source.encode('utf-8')
        self.source = source.decode('latin-1')
        self.diagnostics = diagnostics
        self.tokens: List[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token(TokenType.EOF, '', None, self.line))
        return self.tokens

    def scan_token(self) -> None:
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
        elif c in ONE_OR_TWO_CHAR_TOKENS:
            with_equal, alone = ONE_OR_TWO_CHAR_TOKENS[c]
            self.add_token(with_equal if self.match('=') else alone)
        elif c == '/':
            if self.match('/'):
                # line comment runs to end of line; the newline is left for
                # the main loop so the line counter stays right
                while self.peek() != '\n' and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif c in (' ', '\r', '\t'):
            pass
        elif c == '\n':
            self.line += 1
        elif c == '"':
            self.string()
        elif is_digit(c):
            self.number()
        elif is_alpha(c):
            self.identifier()
        else:
            self.diagnostics.scan_error(self.line, ScanErrorKind.UNEXPECTED_CHARACTER)

    def identifier(self) -> None:
        while is_alphanumeric(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def number(self) -> None:
        while is_digit(self.peek()):
            self.advance()
        # a trailing '.' without digits is not part of the number
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        text = self.source[self.start:self.current]
        self.add_token(TokenType.NUMBER, Number(float(text)))

    def string(self) -> None:
        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == '\n':
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.diagnostics.scan_error(self.line, ScanErrorKind.UNTERMINATED_STRING)
            return

        self.advance()  # closing quote
        value = self.source[self.start + 1:self.current - 1]
        value = value.encode('latin-1').decode('utf-8', errors='replace')
        self.add_token(TokenType.STRING, String(value))

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def add_token(self, type: TokenType, literal: Optional[Value] = None) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(type, text, literal, self.line))


def scan_tokens(source: Union[str, bytes], diagnostics: Diagnostics) -> List[Token]:
    """Convenience function to scan a whole source into tokens."""
    return Scanner(source, diagnostics).scan_tokens()
