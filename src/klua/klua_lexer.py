"""
Lexical analyzer for the KLUA scripting language.

This module converts raw source text into a flat, immutable list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with kind, exact lexeme, and source location.
    Scanner: Converts a whole source string into a list of tokens ending in `EOF`.

Features:
    - Skips spaces, tabs, carriage returns and line feeds
    - Static table lookup for one-character operators and reserved words
    - Recognizes:
        * Identifiers and keywords (ASCII letters, digits, underscore)
        * Integer numbers (digit runs, no sign or fraction)
        * Double-quoted strings (no escape sequences)
        * `==`, `=` and `~=`

Raises:
    UnexpectedCharacterError: For characters that start no token (including a lone `~`).
    UnterminatedStringError: When a string literal runs into end of input.

Example:
    >>> scan("local x = 1;")
    [Token(LOCAL, 'local'), Token(IDENTIFIER, 'x'), Token(ASSIGN, '='), Token(NUMBER, '1'), Token(SEMICOLON, ';'), Token(EOF, '')]

Exports:
    - CharacterStream
    - Token
    - Scanner
    - scan
"""

import logging
from dataclasses import dataclass

from klua.klua_constants import (
    TokenKind,
    reserved_words,
    single_char_tokens,
    whitespace,
)
from klua.klua_errors import UnexpectedCharacterError, UnterminatedStringError

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def match(self, expected: str) -> bool:
        """Consumes the next character only if it equals `expected`."""
        if self.peek() != expected:
            return False
        self.next()
        return True

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token.

    Attributes:
        kind (TokenKind): The token's kind.
        lexeme (str): The exact source text of the token. String literals exclude
            their quotes and the `EOF` token has an empty lexeme.
        offset (int): 0-based index of the token's first character.
        line (int): 1-based line number of the token's first character.
        col (int): 1-based column number of the token's first character.
    """

    kind: TokenKind
    lexeme: str
    offset: int = 0
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r})"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_alpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_alphanumeric(char: str) -> bool:
    return is_digit(char) or is_alpha(char)


class Scanner:
    """Single-pass scanner turning KLUA source into tokens.

    A scanner instance holds no state between calls; each `scan` builds its own
    stream and token list, so one instance may be reused freely.
    """

    def scan(self, source: str | bytes) -> list[Token]:
        """Scans the whole source and returns its tokens, ending with one `EOF`.

        Args:
            source (str | bytes): Source text. Bytes map one-to-one onto characters
                (latin-1), so offsets are byte offsets and high bytes stay intact.

        Returns:
            list[Token]: Tokens in source order.

        Raises:
            UnexpectedCharacterError: On a character that starts no token.
            UnterminatedStringError: On a string literal without a closing quote.
        """
        if isinstance(source, bytes):
            source = source.decode("latin-1")

        stream = CharacterStream(source)
        tokens: list[Token] = []

        while not stream.end_of_file():
            token = self._scan_token(stream)
            if token is not None:
                tokens.append(token)

        tokens.append(Token(TokenKind.EOF, "", stream.position, stream.line, stream.column))
        logger.debug("scanned %d tokens from %d characters", len(tokens), len(source))
        return tokens

    def _scan_token(self, stream: CharacterStream) -> Token | None:
        start, line, col = stream.position, stream.line, stream.column
        char = stream.next()

        def token(kind: TokenKind) -> Token:
            return Token(kind, stream.source[start : stream.position], start, line, col)

        if char in whitespace:
            return None

        kind = single_char_tokens.get(char)
        if kind is not None:
            return token(kind)

        if char == "=":
            return token(TokenKind.EQ if stream.match("=") else TokenKind.ASSIGN)

        if char == "~":
            if stream.match("="):
                return token(TokenKind.NOTEQ)
            raise UnexpectedCharacterError(char, start, line, col)

        if char == '"':
            while not stream.end_of_file() and stream.peek() != '"':
                stream.next()
            if stream.end_of_file():
                raise UnterminatedStringError(start, line, col)
            stream.next()  # closing quote
            lexeme = stream.source[start + 1 : stream.position - 1]
            return Token(TokenKind.LITERAL_STR, lexeme, start, line, col)

        if is_digit(char):
            while is_digit(stream.peek()):
                stream.next()
            return token(TokenKind.NUMBER)

        if is_alpha(char):
            while is_alphanumeric(stream.peek()):
                stream.next()
            lexeme = stream.source[start : stream.position]
            return token(reserved_words.get(lexeme, TokenKind.IDENTIFIER))

        raise UnexpectedCharacterError(char, start, line, col)


def scan(source: str | bytes) -> list[Token]:
    """Convenience wrapper around `Scanner().scan`."""
    return Scanner().scan(source)


__all__ = ["CharacterStream", "Scanner", "Token", "scan"]
