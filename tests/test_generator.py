import pytest

from minicc.generator import GenerationError, Generator
from minicc.parser import Node, NodeKind


def num(value):
    return Node(NodeKind.NUM, val=value)


def binary(kind, lhs, rhs):
    return Node(kind, lhs=lhs, rhs=rhs)


def test_addition():
    asm = Generator().generate(binary(NodeKind.ADD, num(1), num(2)))
    for line in [
        "push 1",
        "push 2",
        "pop rdi",
        "pop rax",
        "add rax, rdi",
        "push rax",
        "pop rax",
        "ret",
    ]:
        assert line in asm


def test_equality():
    asm = Generator().generate(binary(NodeKind.EQ, num(42), num(42)))
    for line in ["cmp rax, rdi", "sete al", "movzb rax, al"]:
        assert line in asm


def test_subtraction():
    asm = Generator().generate(binary(NodeKind.SUB, num(5), num(3)))
    assert "sub rax, rdi" in asm


def test_nested_expr():
    node = binary(NodeKind.ADD, num(1), binary(NodeKind.MUL, num(2), num(3)))
    asm = Generator().generate(node)
    assert "imul rax, rdi" in asm


def test_less_than():
    asm = Generator().generate(binary(NodeKind.LT, num(1), num(2)))
    for line in ["cmp rax, rdi", "setl al", "movzb rax, al"]:
        assert line in asm


def test_single_number_exact_output():
    asm = Generator().generate(num(42))
    assert asm == (
        ".intel_syntax noprefix\n"
        ".global main\n"
        "main:\n"
        "  push 42\n"
        "  pop rax\n"
        "  ret\n"
        '.section .note.GNU-stack,"",@progbits\n'
    )


@pytest.mark.parametrize(
    "kind, expected",
    [
        (NodeKind.DIV, ["  cqo", "  idiv rdi"]),
        (NodeKind.NEQ, ["  setne al"]),
        (NodeKind.LTE, ["  setle al"]),
    ],
)
def test_other_binary_ops(kind, expected):
    asm = Generator().generate(binary(kind, num(6), num(3)))
    for line in expected:
        assert line + "\n" in asm


def test_program_prologue_and_assignment():
    program = [
        Node(NodeKind.ASSIGN, lhs=Node(NodeKind.LVAR, offset=8), rhs=num(3)),
        Node(NodeKind.RETURN, lhs=Node(NodeKind.LVAR, offset=8)),
    ]
    lines = Generator().generate_program(program).splitlines()
    assert lines[:6] == [
        ".intel_syntax noprefix",
        ".global main",
        "main:",
        "  push rbp",
        "  mov rbp, rsp",
        "  sub rsp, 208",
    ]
    assert lines[6:9] == ["  mov rax, rbp", "  sub rax, 8", "  push rax"]
    assert "  mov [rax], rdi" in lines
    assert "  mov rax, [rax]" in lines
    assert lines[-1] == '.section .note.GNU-stack,"",@progbits'
    ret_index = lines.index("  ret")
    assert lines[ret_index - 3 : ret_index] == ["  pop rax", "  mov rsp, rbp", "  pop rbp"]


def test_if_labels_are_sequential():
    stmt = Node(
        NodeKind.IF,
        cond=num(1),
        then=Node(NodeKind.RETURN, lhs=num(2)),
        else_=Node(NodeKind.RETURN, lhs=num(3)),
    )
    lines = Generator().generate_program([stmt, stmt]).splitlines()
    assert "  je .Lelse0" in lines
    assert "  jmp .Lend0" in lines
    assert ".Lelse0:" in lines
    assert ".Lend0:" in lines
    assert "  je .Lelse1" in lines
    assert ".Lend1:" in lines
    assert lines.index(".Lelse0:") < lines.index(".Lend0:")


def test_if_without_else_has_empty_else_branch():
    stmt = Node(NodeKind.IF, cond=num(0), then=Node(NodeKind.RETURN, lhs=num(2)))
    lines = Generator().generate_program([stmt]).splitlines()
    else_index = lines.index(".Lelse0:")
    assert lines[else_index + 1] == ".Lend0:"


def test_assign_to_non_lvalue_raises():
    node = Node(NodeKind.ASSIGN, lhs=num(1), rhs=num(2))
    with pytest.raises(GenerationError, match="not lval"):
        Generator().generate_program([node])