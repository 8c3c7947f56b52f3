"""
Defines the abstract syntax tree (AST) node types for the KLUA scripting language.

Each grammar nonterminal has its own frozen dataclass with typed fields, so a
node can only ever hold the children its production allows. All nodes also
share a uniform read-only view used by diagnostics and generic tree walks:

    kind (NodeKind): The node's tag.
    children (tuple[Node, ...]): Child nodes in grammar order.
    terminal (Token | None): The wrapped token, set only on `Term` nodes.

Classes:
    NodeKind: Closed enumeration of node tags.
    Term, Block, VarStat, IfStat, AssignStat, FuncallStat, Exp, Binary,
    Unary, FunctionCall, Primary, Args, Root: One node class per tag.
    NodeDict, TerminalDict: TypedDict shapes returned by `Node.to_dict()`.

Functions:
    dump(node): Render a node and its descendants as an indented text tree.

Example:
    Root(Block((VarStat(Term(Token(IDENTIFIER, 'x'))),)))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypedDict, Union

from klua.klua_lexer import Token


class NodeKind(str, Enum):
    ROOT = "root"
    BLOCK = "block"
    VARSTAT = "varstat"
    IFSTAT = "ifstat"
    ASSIGNSTAT = "assignstat"
    FUNCALLSTAT = "funcallstat"
    TERM = "term"
    EXP = "exp"
    BINARY = "binary"
    UNARY = "unary"
    FUNCTIONCALL = "functioncall"
    PRIMARY = "primary"
    ARGS = "args"

    def __str__(self) -> str:
        return self.value


class TerminalDict(TypedDict):
    kind: str
    lexeme: str
    line: int
    col: int


class NodeDict(TypedDict):
    """
    Plain-dict form of a node, suitable for JSON output or debugging.

    Fields:
        kind (str): The node tag (e.g. "varstat", "term").
        terminal (TerminalDict | None): The wrapped token for `term` nodes.
        children (list[NodeDict]): Child nodes in grammar order.
    """

    kind: str
    terminal: TerminalDict | None
    children: list[NodeDict]


class Node:
    """Base class for every AST node."""

    kind: ClassVar[NodeKind]

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    @property
    def terminal(self) -> Token | None:
        return None

    def to_dict(self) -> NodeDict:
        tok = self.terminal
        terminal: TerminalDict | None = None
        if tok is not None:
            terminal = {
                "kind": tok.kind.value,
                "lexeme": tok.lexeme,
                "line": tok.line,
                "col": tok.col,
            }
        return {
            "kind": self.kind.value,
            "terminal": terminal,
            "children": [c.to_dict() for c in self.children],
        }


def _present(*nodes: Node | None) -> tuple[Node, ...]:
    return tuple(n for n in nodes if n is not None)


@dataclass(frozen=True)
class Term(Node):
    """Leaf wrapping a single token: a variable name, literal, or operator."""

    kind: ClassVar[NodeKind] = NodeKind.TERM
    token: Token

    @property
    def terminal(self) -> Token:
        return self.token


@dataclass(frozen=True)
class Primary(Node):
    """A literal term, a parenthesized expression, or a variable term."""

    kind: ClassVar[NodeKind] = NodeKind.PRIMARY
    value: Term | Exp

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.value,)


@dataclass(frozen=True)
class Args(Node):
    kind: ClassVar[NodeKind] = NodeKind.ARGS
    value: Exp | None = None

    @property
    def children(self) -> tuple[Node, ...]:
        return _present(self.value)


@dataclass(frozen=True)
class FunctionCall(Node):
    kind: ClassVar[NodeKind] = NodeKind.FUNCTIONCALL
    callee: Primary
    args: Args

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.callee, self.args)


@dataclass(frozen=True)
class Unary(Node):
    """Either `op operand` for a prefix operator, or a bare operand."""

    kind: ClassVar[NodeKind] = NodeKind.UNARY
    operand: Unary | FunctionCall | Primary
    op: Term | None = None

    @property
    def children(self) -> tuple[Node, ...]:
        return _present(self.op, self.operand)


@dataclass(frozen=True)
class Binary(Node):
    """A single operand, or exactly one binary operator application."""

    kind: ClassVar[NodeKind] = NodeKind.BINARY
    left: Unary
    op: Term | None = None
    right: Unary | None = None

    def __post_init__(self) -> None:
        if (self.op is None) != (self.right is None):
            raise ValueError("Binary needs both an operator and a right operand, or neither")

    @property
    def children(self) -> tuple[Node, ...]:
        return _present(self.left, self.op, self.right)


@dataclass(frozen=True)
class Exp(Node):
    kind: ClassVar[NodeKind] = NodeKind.EXP
    binary: Binary

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.binary,)


@dataclass(frozen=True)
class VarStat(Node):
    """`local name [= exp];`"""

    kind: ClassVar[NodeKind] = NodeKind.VARSTAT
    target: Term
    value: Exp | None = None

    @property
    def children(self) -> tuple[Node, ...]:
        return _present(self.target, self.value)


@dataclass(frozen=True)
class AssignStat(Node):
    """`name = exp;`"""

    kind: ClassVar[NodeKind] = NodeKind.ASSIGNSTAT
    target: Term
    value: Exp

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.target, self.value)


@dataclass(frozen=True)
class FuncallStat(Node):
    kind: ClassVar[NodeKind] = NodeKind.FUNCALLSTAT
    call: FunctionCall

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.call,)


@dataclass(frozen=True)
class IfStat(Node):
    """`if exp then block [else block] end;`"""

    kind: ClassVar[NodeKind] = NodeKind.IFSTAT
    condition: Exp
    then_block: Block
    else_block: Block | None = None

    @property
    def children(self) -> tuple[Node, ...]:
        return _present(self.condition, self.then_block, self.else_block)


Stat = Union[VarStat, IfStat, AssignStat, FuncallStat]


@dataclass(frozen=True)
class Block(Node):
    kind: ClassVar[NodeKind] = NodeKind.BLOCK
    stats: tuple[Stat, ...] = ()

    @property
    def children(self) -> tuple[Node, ...]:
        return self.stats


@dataclass(frozen=True)
class Root(Node):
    """Outermost parse result holding the program's top-level block."""

    kind: ClassVar[NodeKind] = NodeKind.ROOT
    block: Block

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.block,)


def dump(node: Node, indent: int = 0) -> str:
    """Render `node` as an indented tree, one node per line.

    Term nodes show their token; every other node shows its kind only.
    """
    pad = "  " * indent
    if node.terminal is not None:
        lines = [f"{pad}{node.kind} {node.terminal!r}"]
    else:
        lines = [f"{pad}{node.kind}"]
    lines.extend(dump(child, indent + 1) for child in node.children)
    return "\n".join(lines)


__all__ = [
    "Args",
    "AssignStat",
    "Binary",
    "Block",
    "Exp",
    "FuncallStat",
    "FunctionCall",
    "IfStat",
    "Node",
    "NodeDict",
    "NodeKind",
    "Primary",
    "Root",
    "Stat",
    "Term",
    "TerminalDict",
    "Unary",
    "VarStat",
    "dump",
]
