"""A small compiler for a C-like language: lexer, parser and x86-64 assembly generator."""

__version__ = "0.1.0"