"""
Error taxonomy for the KLUA front end.

Every failure raised by the scanner or the parser derives from `KluaError`,
which is itself a `SyntaxError` so callers that already trap malformed input
that way keep working.

Classes:
    KluaError: Base class. Carries `index` (0-based), `line` and `col` of the failure,
        mirrored into the `SyntaxError` fields `lineno` and `offset` (1-based column).
    ScanError: Lexical failures.
        UnexpectedCharacterError: A character that starts no token.
        UnterminatedStringError: A string literal reaching end of input.
    ParseError: Syntactic failures.
        ExpectedTokenError: A required token kind was not found.
        UnexpectedTopLevelTokenError: Input left over after the program block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from klua.klua_constants import TokenKind
    from klua.klua_lexer import Token


class KluaError(SyntaxError):
    """Base class for all scan and parse failures."""

    def __init__(self, message: str, index: int = 0, line: int = 0, col: int = 0):
        super().__init__(f"{message} at line {line}, col {col}")
        self.message = message
        self.index = index
        self.lineno = line
        self.offset = col
        self.line = line
        self.col = col

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, col {self.col}"


class ScanError(KluaError):
    """Raised when the source cannot be split into tokens."""


class UnexpectedCharacterError(ScanError):
    def __init__(self, char: str, index: int, line: int, col: int):
        super().__init__(f"Unexpected character {char!r}", index, line, col)
        self.char = char


class UnterminatedStringError(ScanError):
    def __init__(self, index: int, line: int, col: int):
        super().__init__("Unterminated string", index, line, col)


class ParseError(KluaError):
    """Raised when the token list does not match the grammar."""

    def __init__(self, message: str, token: Token):
        super().__init__(message, token.offset, token.line, token.col)
        self.token = token


class ExpectedTokenError(ParseError):
    """The `consume` primitive found something other than `expected`."""

    def __init__(self, expected: TokenKind, found: Token, message: str = ""):
        reason = f"{message} - " if message else ""
        super().__init__(f"{reason}expected {expected} but got {found!r}", found)
        self.expected = expected
        self.found = found


class UnexpectedTopLevelTokenError(ParseError):
    def __init__(self, token: Token):
        super().__init__(f"Unexpected token {token!r} after top-level block", token)


__all__ = [
    "ExpectedTokenError",
    "KluaError",
    "ParseError",
    "ScanError",
    "UnexpectedCharacterError",
    "UnexpectedTopLevelTokenError",
    "UnterminatedStringError",
]
