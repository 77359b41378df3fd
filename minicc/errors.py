"""Errors that point at a position in the source text."""

from __future__ import annotations

PREFIX = "Error: "


class PosError(Exception):
    """An error tied to a character offset within the input text."""

    def __init__(self, message: str, text: str, pos: int) -> None:
        super().__init__(message)
        self.message = message
        self.input = text
        self.pos = pos

    def __str__(self) -> str:
        spaces = " " * (self.pos + len(PREFIX))
        return f"{PREFIX}{self.input}\n{spaces}^ {self.message}"