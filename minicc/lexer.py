"""Tokenizer for the small C subset."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Iterator

from minicc.errors import PosError

_MAX_INT = 2**63 - 1
_SYMBOLS = frozenset("+-*/=()<>;")
_TWO_CHAR_OPS = frozenset({"==", "!=", "<=", ">="})
_SPACES = frozenset(" \t\n\r")


class TokenKind(enum.Enum):
    RESERVED = enum.auto()
    RETURN = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    IDENT = enum.auto()
    NUM = enum.auto()
    EOF = enum.auto()


KEYWORDS: dict[str, TokenKind] = {
    "return": TokenKind.RETURN,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
}


@dataclass(frozen=True)
class Token:
    """A lexical token; ``val`` is only meaningful for numbers."""

    kind: TokenKind
    text: str
    pos: int
    val: int = 0


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


def _is_alnum(ch: str) -> bool:
    return _is_digit(ch) or _is_alpha(ch) or ch == "_"


class Lexer:
    """Splits source text into tokens."""

    def __init__(self, text: str) -> None:
        self.input = text

    def lex(self) -> list[Token]:
        """Return all tokens, ending with an EOF token; raise PosError on bad input."""
        return list(self._scan())

    def _scan(self) -> Iterator[Token]:
        text = self.input
        length = len(text)
        pos = 0
        while pos < length:
            ch = text[pos]

            if ch in _SPACES:
                pos += 1
                continue

            if _is_digit(ch):
                start = pos
                while pos < length and _is_digit(text[pos]):
                    pos += 1
                literal = text[start:pos]
                value = int(literal)
                if value > _MAX_INT:
                    raise PosError(f"invalid numeric literal: {literal}", text, start)
                yield Token(TokenKind.NUM, literal, start, value)
                continue

            if _is_alpha(ch):
                start = pos
                while pos < length and _is_alnum(text[pos]):
                    pos += 1
                word = text[start:pos]
                yield Token(KEYWORDS.get(word, TokenKind.IDENT), word, start)
                continue

            two = text[pos : pos + 2]
            if two in _TWO_CHAR_OPS:
                yield Token(TokenKind.RESERVED, two, pos)
                pos += 2
                continue

            if ch in _SYMBOLS:
                yield Token(TokenKind.RESERVED, ch, pos)
                pos += 1
                continue

            raise PosError(f"unexpected character: {ch}", text, pos)

        yield Token(TokenKind.EOF, "EOF", pos)


def tokenize(text: str) -> list[Token]:
    """Tokenize ``text``."""
    return Lexer(text).lex()


_DEBUG_NAMES = {
    TokenKind.RESERVED: "RESERVED",
    TokenKind.NUM: "NUM",
    TokenKind.IDENT: "IDENT",
    TokenKind.EOF: "EOF",
}


def format_tokens(tokens: list[Token]) -> str:
    """Render tokens as a numbered debug listing terminated by ``END``."""
    lines = []
    for index, tok in enumerate(tokens):
        line = f"[{index}] {_DEBUG_NAMES.get(tok.kind, 'UNKNOWN')}"
        if tok.text:
            line += f"({json.dumps(tok.text, ensure_ascii=False)})"
        if tok.kind is TokenKind.NUM:
            line += f" val={tok.val}"
        lines.append(line + " ->")
    lines.append("END")
    return "\n".join(lines) + "\n"