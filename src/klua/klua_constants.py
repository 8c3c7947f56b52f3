"""
Token kinds and lookup tables shared by the KLUA scanner and parser.

Tables:
    single_char_tokens: One-character lexemes mapped straight to their kind.
    reserved_words: Identifier-shaped lexemes reclassified as keywords.
    binary_operators: Token kinds accepted between two unary operands.
    unary_operators: Token kinds accepted as a prefix operator.
    whitespace: Characters skipped between tokens.
"""

from enum import Enum


class TokenKind(str, Enum):
    """Closed set of token kinds produced by the scanner."""

    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    LT = "LT"
    GT = "GT"
    EQ = "EQ"
    ASSIGN = "ASSIGN"
    NOTEQ = "NOTEQ"

    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"

    NUMBER = "NUMBER"
    LITERAL_STR = "LITERAL_STR"
    IDENTIFIER = "IDENTIFIER"

    LOCAL = "LOCAL"
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    END = "END"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    NIL = "NIL"
    FALSE = "FALSE"
    TRUE = "TRUE"

    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


single_char_tokens: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LBRACE,
    ")": TokenKind.RBRACE,
}

reserved_words: dict[str, TokenKind] = {
    "local": TokenKind.LOCAL,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "end": TokenKind.END,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "not": TokenKind.NOT,
    "nil": TokenKind.NIL,
    "false": TokenKind.FALSE,
    "true": TokenKind.TRUE,
}

binary_operators: frozenset[TokenKind] = frozenset(
    {
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.STAR,
        TokenKind.SLASH,
        TokenKind.LT,
        TokenKind.GT,
        TokenKind.EQ,
        TokenKind.NOTEQ,
        TokenKind.AND,
        TokenKind.OR,
    }
)

unary_operators: frozenset[TokenKind] = frozenset({TokenKind.MINUS, TokenKind.NOT})

# nil/false/true parse as literal terms in `primary`
literal_keywords: frozenset[TokenKind] = frozenset(
    {TokenKind.NIL, TokenKind.FALSE, TokenKind.TRUE}
)

whitespace = " \r\n\t"

__all__ = [
    "TokenKind",
    "binary_operators",
    "literal_keywords",
    "reserved_words",
    "single_char_tokens",
    "unary_operators",
    "whitespace",
]
