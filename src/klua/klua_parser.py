"""
KLUA Language Parser

Parses a KLUA token list into a typed abstract syntax tree.

This module implements a recursive-descent parser with one method per grammar
nonterminal. It reads the token list by index, looking at most two tokens ahead,
and never backtracks.

Grammar
-------
    block       := stat*
    stat        := varstat | ifstat | assignstat | funcallstat
    varstat     := "local" var ("=" exp)? ";"
    ifstat      := "if" exp "then" block ("else" block)? "end" ";"
    assignstat  := var "=" exp ";"
    funcallstat := functioncall ";"
    var         := IDENTIFIER
    exp         := binary
    binary      := unary (binop unary)?
    unary       := unop unary | functioncall | primary
    functioncall:= primary args
    primary     := "nil" | "false" | "true" | NUMBER | STRING | "(" exp ")" | var
    args        := "(" exp? ")"
    binop       := "+" | "-" | "*" | "/" | "<" | ">" | "==" | "~=" | "and" | "or"
    unop        := "-" | "not"

Parser Behavior
---------------
- Fail-fast: the first mismatch raises, with no recovery and no partial tree.
- A statement is chosen from the current token and the one after it; a token
  that starts no statement ends the current block without being consumed.
- Only the outermost block must be followed by `EOF`.
- Binary expressions hold at most one operator; prefix operators nest freely.

Entry Points
------------
- `Parser(tokens).parse()`: Parse a full token list into a `Root`.
- `parse(tokens)`: Same, as a function.
- `parse_source(source)`: Scan then parse, returning both tokens and tree.

Raises
------
ExpectedTokenError
    When a required token (`;`, `then`, `end`, `)`, an identifier...) is missing.
UnexpectedTopLevelTokenError
    When tokens remain after the outermost block.
"""

from __future__ import annotations

import logging

from klua.klua_ast import (
    Args,
    AssignStat,
    Binary,
    Block,
    Exp,
    FuncallStat,
    FunctionCall,
    IfStat,
    Primary,
    Root,
    Stat,
    Term,
    Unary,
    VarStat,
)
from klua.klua_constants import (
    TokenKind,
    binary_operators,
    literal_keywords,
    unary_operators,
)
from klua.klua_errors import ExpectedTokenError, UnexpectedTopLevelTokenError
from klua.klua_lexer import Token, scan

logger = logging.getLogger(__name__)


class Parser:
    """
    KLUA Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The input token list. Must end with exactly one `EOF` token.
    position : int
        Current index into the token list.
    depth : int
        Block nesting depth; 1 while parsing the outermost block.

    Raises
    ------
    ValueError
        If the token list does not end with exactly one `EOF` token.
    """

    def __init__(self, tokens: list[Token]) -> None:
        eof_count = sum(1 for tok in tokens if tok.kind is TokenKind.EOF)
        if not tokens or tokens[-1].kind is not TokenKind.EOF or eof_count != 1:
            raise ValueError("Token list must end with exactly one EOF token")
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.depth: int = 0

    def current(self) -> Token:
        return self.tokens[self.position]

    def peek(self, offset: int = 1) -> Token:
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        tok = self.current()
        if tok.kind is not TokenKind.EOF:
            self.position += 1
        return tok

    def check(self, *kinds: TokenKind) -> bool:
        return self.current().kind in kinds

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.check(*kinds):
            return self.advance()
        return None

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ExpectedTokenError(kind, self.current(), message)

    def parse(self) -> Root:
        """Parse the whole token list into a `Root`."""
        self.position = 0
        self.depth = 0
        logger.debug("parsing %d tokens", len(self.tokens))
        root = Root(self.parse_block())
        logger.debug("parsed %d top-level statements", len(root.block.stats))
        return root

    def parse_block(self) -> Block:
        self.depth += 1
        stats: list[Stat] = []
        while True:
            stat = self.parse_stat()
            if stat is None:
                break
            stats.append(stat)
        self.depth -= 1

        if self.depth == 0 and not self.check(TokenKind.EOF):
            raise UnexpectedTopLevelTokenError(self.current())
        return Block(tuple(stats))

    def parse_stat(self) -> Stat | None:
        """Pick a statement from the next two tokens, or None to end the block."""
        if self.match(TokenKind.LOCAL):
            return self.parse_varstat()
        if self.match(TokenKind.IF):
            return self.parse_ifstat()
        if self.peek().kind is TokenKind.ASSIGN:
            return self.parse_assignstat()
        if self.check(TokenKind.LBRACE, TokenKind.IDENTIFIER):
            return self.parse_funcallstat()
        return None

    def parse_varstat(self) -> VarStat:
        target = self.parse_var()
        value = self.parse_exp() if self.match(TokenKind.ASSIGN) else None
        self.consume(TokenKind.SEMICOLON, "Expect ; at the end of stat")
        return VarStat(target, value)

    def parse_ifstat(self) -> IfStat:
        condition = self.parse_exp()
        self.consume(TokenKind.THEN, "Expect then after if condition")
        then_block = self.parse_block()
        else_block = self.parse_block() if self.match(TokenKind.ELSE) else None
        self.consume(TokenKind.END, "Expect end after if stat")
        self.consume(TokenKind.SEMICOLON, "Expect ; at the end of stat")
        return IfStat(condition, then_block, else_block)

    def parse_assignstat(self) -> AssignStat:
        target = self.parse_var()
        self.consume(TokenKind.ASSIGN, "Expect = for assignment")
        value = self.parse_exp()
        self.consume(TokenKind.SEMICOLON, "Expect ; at the end of stat")
        return AssignStat(target, value)

    def parse_funcallstat(self) -> FuncallStat:
        call = self.parse_functioncall()
        self.consume(TokenKind.SEMICOLON, "Expect ; at the end of stat")
        return FuncallStat(call)

    def parse_var(self) -> Term:
        return Term(
            self.consume(TokenKind.IDENTIFIER, "Expect identifier for variable name")
        )

    def parse_exp(self) -> Exp:
        return Exp(self.parse_binary())

    def parse_binary(self) -> Binary:
        left = self.parse_unary()
        op = self.match(*binary_operators)
        if op is None:
            return Binary(left)
        return Binary(left, Term(op), self.parse_unary())

    def parse_unary(self) -> Unary:
        op = self.match(*unary_operators)
        if op is not None:
            return Unary(self.parse_unary(), Term(op))
        if self.check(TokenKind.IDENTIFIER) and self.peek().kind is TokenKind.LBRACE:
            return Unary(self.parse_functioncall())
        return Unary(self.parse_primary())

    def parse_functioncall(self) -> FunctionCall:
        callee = self.parse_primary()
        return FunctionCall(callee, self.parse_args())

    def parse_primary(self) -> Primary:
        tok = self.match(*literal_keywords, TokenKind.NUMBER, TokenKind.LITERAL_STR)
        if tok is not None:
            return Primary(Term(tok))
        if self.match(TokenKind.LBRACE):
            inner = self.parse_exp()
            self.consume(TokenKind.RBRACE, "Expect ) after (")
            return Primary(inner)
        return Primary(self.parse_var())

    def parse_args(self) -> Args:
        self.consume(TokenKind.LBRACE, "Expect ( on starting args")
        if self.match(TokenKind.RBRACE):
            return Args()
        value = self.parse_exp()
        self.consume(TokenKind.RBRACE, "Expect ) after args")
        return Args(value)


def parse(tokens: list[Token]) -> Root:
    """Parse `tokens` with a fresh `Parser`."""
    return Parser(tokens).parse()


def parse_source(source: str | bytes) -> tuple[list[Token], Root]:
    """Scan and parse `source`, returning the token list alongside the tree."""
    tokens = scan(source)
    return tokens, parse(tokens)


__all__ = ["Parser", "parse", "parse_source"]
