"""Recursive-descent parser producing an abstract syntax tree.

Grammar::

    program    = stmt*
    stmt       = expr ";"
               | "return" expr ";"
               | "if" "(" expr ")" stmt ("else" stmt)?
    expr       = assign
    assign     = equality ("=" assign)?
    equality   = relational ("==" relational | "!=" relational)*
    relational = add ("<" add | "<=" add | ">" add | ">=" add)*
    add        = mul ("+" mul | "-" mul)*
    mul        = unary ("*" unary | "/" unary)*
    unary      = ("+" | "-")? unary | primary
    primary    = num | ident | "(" expr ")"
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from minicc.errors import PosError
from minicc.lexer import Token, TokenKind


class NodeKind(enum.Enum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    EQ = enum.auto()
    NEQ = enum.auto()
    LT = enum.auto()
    LTE = enum.auto()
    NUM = enum.auto()
    ASSIGN = enum.auto()
    LVAR = enum.auto()
    RETURN = enum.auto()
    IF = enum.auto()
    EOF = enum.auto()


@dataclass(frozen=True)
class Node:
    """An AST node; which fields are used depends on ``kind``."""

    kind: NodeKind
    lhs: Optional["Node"] = None
    rhs: Optional["Node"] = None
    val: int = 0
    offset: int = 0
    cond: Optional["Node"] = None
    then: Optional["Node"] = None
    else_: Optional["Node"] = None


_EQUALITY_OPS = {"==": NodeKind.EQ, "!=": NodeKind.NEQ}
_ADD_OPS = {"+": NodeKind.ADD, "-": NodeKind.SUB}
_MUL_OPS = {"*": NodeKind.MUL, "/": NodeKind.DIV}
# operator -> (node kind, whether operands are swapped)
_RELATIONAL_OPS = {
    "<": (NodeKind.LT, False),
    "<=": (NodeKind.LTE, False),
    ">": (NodeKind.LT, True),
    ">=": (NodeKind.LTE, True),
}

_LOCAL_SLOT = 8


class Parser:
    """Parses a token sequence into a list of statement nodes."""

    def __init__(self, tokens: Sequence[Token], text: str) -> None:
        self._tokens = list(tokens)
        self._index = 0
        self.input = text
        self.code: list[Node] = []
        self.locals: dict[str, int] = {}

    def parse(self) -> list[Node]:
        """Parse every statement; raise PosError on a syntax error."""
        while not self._at_end():
            self.code.append(self._stmt())
        return self.code

    # --- token cursor -------------------------------------------------

    @property
    def _current(self) -> Optional[Token]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _at_end(self) -> bool:
        current = self._current
        return current is None or current.kind is TokenKind.EOF

    def _advance(self) -> None:
        if self._current is not None:
            self._index += 1

    def _match(self, op: str) -> bool:
        current = self._current
        return current is not None and current.text == op

    def _consume(self, op: str) -> bool:
        if self._match(op):
            self._advance()
            return True
        return False

    def _expect(self, op: str) -> None:
        current = self._current
        if current is None:
            raise PosError(f"expected {op}, but got EOF", self.input, len(self.input))
        if current.text != op:
            raise PosError(f"expected {op}, but got {current.text}", self.input, current.pos)
        self._advance()

    # --- grammar rules ------------------------------------------------

    def _stmt(self) -> Node:
        if self._consume("return"):
            value = self._expr()
            self._expect(";")
            return Node(NodeKind.RETURN, lhs=value)

        if self._consume("if"):
            self._expect("(")
            cond = self._expr()
            self._expect(")")
            then = self._stmt()
            else_ = self._stmt() if self._consume("else") else None
            return Node(NodeKind.IF, cond=cond, then=then, else_=else_)

        node = self._expr()
        self._expect(";")
        return node

    def _expr(self) -> Node:
        return self._assign()

    def _assign(self) -> Node:
        node = self._equality()
        if self._consume("="):
            node = Node(NodeKind.ASSIGN, lhs=node, rhs=self._assign())
        return node

    def _binary(self, ops: dict[str, NodeKind], operand: Callable[[], Node]) -> Node:
        node = operand()
        while True:
            current = self._current
            kind = ops.get(current.text) if current is not None else None
            if kind is None:
                return node
            self._advance()
            node = Node(kind, lhs=node, rhs=operand())

    def _equality(self) -> Node:
        return self._binary(_EQUALITY_OPS, self._relational)

    def _relational(self) -> Node:
        node = self._add()
        while True:
            current = self._current
            entry = _RELATIONAL_OPS.get(current.text) if current is not None else None
            if entry is None:
                return node
            kind, swapped = entry
            self._advance()
            other = self._add()
            node = Node(kind, lhs=other, rhs=node) if swapped else Node(kind, lhs=node, rhs=other)

    def _add(self) -> Node:
        return self._binary(_ADD_OPS, self._mul)

    def _mul(self) -> Node:
        return self._binary(_MUL_OPS, self._unary)

    def _unary(self) -> Node:
        if self._consume("+"):
            return self._unary()
        if self._consume("-"):
            return Node(NodeKind.SUB, lhs=Node(NodeKind.NUM, val=0), rhs=self._unary())
        return self._primary()

    def _primary(self) -> Node:
        if self._consume("("):
            node = self._expr()
            self._expect(")")
            return node

        current = self._current
        if current is None:
            raise PosError(
                "expected number or identifier, but got EOF", self.input, len(self.input)
            )
        if current.kind is TokenKind.NUM:
            self._advance()
            return Node(NodeKind.NUM, val=current.val)
        if current.kind is TokenKind.IDENT:
            self._advance()
            return Node(NodeKind.LVAR, offset=self._local_offset(current.text))
        raise PosError(
            f"expected number or identifier, but got {current.text}", self.input, current.pos
        )

    def _local_offset(self, name: str) -> int:
        offset = self.locals.get(name)
        if offset is None:
            offset = max(self.locals.values(), default=0) + _LOCAL_SLOT
            self.locals[name] = offset
        return offset


# --- tree printing ----------------------------------------------------

_KIND_LABELS = {
    NodeKind.ADD: "+",
    NodeKind.SUB: "-",
    NodeKind.MUL: "*",
    NodeKind.DIV: "/",
    NodeKind.EQ: "==",
    NodeKind.NEQ: "!=",
    NodeKind.LT: "<",
    NodeKind.LTE: "<=",
    NodeKind.ASSIGN: "=",
    NodeKind.LVAR: "LVAR",
}


def _tree_lines(node: Optional[Node], prefix: str, is_tail: bool, out: list[str]) -> None:
    if node is None:
        return
    if is_tail:
        connector, next_prefix = "└── ", prefix + "    "
    else:
        connector, next_prefix = "├── ", prefix + "│   "

    if node.kind is NodeKind.NUM:
        label = str(node.val)
    else:
        label = f"({_KIND_LABELS.get(node.kind, '?')})"
    out.append(f"{prefix}{connector}{label}")

    if node.rhs is not None:
        _tree_lines(node.lhs, next_prefix, False, out)
        _tree_lines(node.rhs, next_prefix, True, out)
    elif node.lhs is not None:
        _tree_lines(node.lhs, next_prefix, True, out)


def format_tree(node: Optional[Node]) -> str:
    """Render one AST as a box-drawing tree."""
    lines: list[str] = []
    _tree_lines(node, "", True, lines)
    return "".join(line + "\n" for line in lines)


def format_program(nodes: Sequence[Node]) -> str:
    """Render a sequence of statement trees one after another."""
    return "".join(format_tree(node) for node in nodes)