"""x86-64 assembly (Intel syntax) emitter for the parsed AST."""

from __future__ import annotations

from typing import Optional, Sequence

from minicc.parser import Node, NodeKind

_HEADER = (".intel_syntax noprefix", ".global main", "main:")
_FOOTER = '.section .note.GNU-stack,"",@progbits'
# Space reserved for 26 eight-byte local variables.
_FRAME_SIZE = 208

_BINARY_OPS: dict[NodeKind, tuple[str, ...]] = {
    NodeKind.ADD: ("  add rax, rdi",),
    NodeKind.SUB: ("  sub rax, rdi",),
    NodeKind.MUL: ("  imul rax, rdi",),
    NodeKind.DIV: ("  cqo", "  idiv rdi"),
    NodeKind.EQ: ("  cmp rax, rdi", "  sete al", "  movzb rax, al"),
    NodeKind.NEQ: ("  cmp rax, rdi", "  setne al", "  movzb rax, al"),
    NodeKind.LT: ("  cmp rax, rdi", "  setl al", "  movzb rax, al"),
    NodeKind.LTE: ("  cmp rax, rdi", "  setle al", "  movzb rax, al"),
}


class GenerationError(Exception):
    """Raised when an AST cannot be turned into assembly."""


class Generator:
    """Produces a stack-machine style assembly listing from AST nodes."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._label_seq = 0

    def generate(self, node: Node) -> str:
        """Emit a program that evaluates one expression and returns its value."""
        self._lines = list(_HEADER)
        self._expr(node)
        self._emit("  pop rax", "  ret", _FOOTER)
        return self._text()

    def generate_program(self, nodes: Sequence[Node]) -> str:
        """Emit a program that runs each statement in order inside a stack frame."""
        self._lines = list(_HEADER)
        self._emit("  push rbp", "  mov rbp, rsp", f"  sub rsp, {_FRAME_SIZE}")
        for node in nodes:
            self._expr(node)
            self._emit("  pop rax")
        self._emit(_FOOTER)
        return self._text()

    def _text(self) -> str:
        return "".join(line + "\n" for line in self._lines)

    def _emit(self, *lines: str) -> None:
        self._lines.extend(lines)

    def _new_label(self) -> int:
        label = self._label_seq
        self._label_seq += 1
        return label

    def _lval(self, node: Optional[Node]) -> None:
        if node is None or node.kind is not NodeKind.LVAR:
            raise GenerationError("not lval")
        self._emit("  mov rax, rbp", f"  sub rax, {node.offset}", "  push rax")

    def _child(self, node: Optional[Node], role: str, parent: NodeKind) -> Node:
        if node is None:
            raise GenerationError(f"missing {role} operand for {parent.name}")
        return node

    def _expr(self, node: Node) -> None:
        kind = node.kind

        if kind is NodeKind.NUM:
            self._emit(f"  push {node.val}")
            return

        if kind is NodeKind.LVAR:
            self._lval(node)
            self._emit("  pop rax", "  mov rax, [rax]", "  push rax")
            return

        if kind is NodeKind.ASSIGN:
            self._lval(node.lhs)
            self._expr(self._child(node.rhs, "right", kind))
            self._emit("  pop rdi", "  pop rax", "  mov [rax], rdi", "  push rdi")
            return

        if kind is NodeKind.RETURN:
            self._expr(self._child(node.lhs, "left", kind))
            self._emit("  pop rax", "  mov rsp, rbp", "  pop rbp", "  ret")
            return

        if kind is NodeKind.IF:
            label = self._new_label()
            self._expr(self._child(node.cond, "condition", kind))
            self._emit("  pop rax", "  cmp rax, 0", f"  je .Lelse{label}")
            self._expr(self._child(node.then, "then", kind))
            self._emit(f"  jmp .Lend{label}", f".Lelse{label}:")
            if node.else_ is not None:
                self._expr(node.else_)
            self._emit(f".Lend{label}:")
            return

        instructions = _BINARY_OPS.get(kind)
        if instructions is None:
            raise GenerationError(f"unsupported node kind: {kind.name}")
        self._expr(self._child(node.lhs, "left", kind))
        self._expr(self._child(node.rhs, "right", kind))
        self._emit("  pop rdi", "  pop rax", *instructions, "  push rax")