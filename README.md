# minicc

A small compiler for a C-like language. It reads a source file and writes
x86-64 assembly in Intel syntax that defines a global `main`.

## Language

A program is a sequence of statements:

```
a = 3;
b = a * (2 + 1);
if (b >= 9) return b - a; else return 0;
```

Supported:

- decimal integer literals (up to 2^63 - 1)
- identifiers (a letter followed by letters, digits or `_`), used as local
  variables; each new name gets its own 8-byte stack slot
- `+`, `-`, `*`, `/`, unary `+` and `-`, and parentheses
- comparisons `==`, `!=`, `<`, `<=`, `>`, `>=`
- assignment with `=`
- `return expr;`
- `if (expr) stmt` with an optional `else stmt`

`main` returns the value of the `return` statement that is executed. The
generated code does not add a return of its own after the last statement,
so a program should always reach a `return`.

Lexing and parsing errors point at the offending column of the input:

```
Error: 1+2$
          ^ unexpected character: $
```

## Installation

```
pip install .
```

## Command line

```
minicc -i program.c -o out.s
```

Options:

- `-i FILE` — input source file (required)
- `-o FILE` — output assembly file (default `out.s`)
- `-d` — print the token list and the syntax tree before generating code

On an error the message is printed and the command exits with status 1.

## Library use

```python
from minicc.cli import compile_source

asm = compile_source("a = 2; return a * 21;", False)
print(asm)
```

The stages are also available on their own:

- `minicc.lexer.tokenize(text)` (or `Lexer(text).lex()`) returns a list of
  `Token` objects ending with an EOF token; `format_tokens(tokens)` renders
  them as a numbered listing.
- `minicc.parser.Parser(tokens, text).parse()` returns the list of statement
  `Node`s; `format_tree(node)` and `format_program(nodes)` render them as
  box-drawing trees.
- `minicc.generator.Generator` has `generate_program(nodes)` for a whole
  program and `generate(node)` for a single expression whose value `main`
  returns.

Errors in the input raise `minicc.errors.PosError`, whose string form shows
the input with a caret under the bad position. Malformed trees given to the
generator raise `minicc.generator.GenerationError`.

## Limitations

- There are no `while` or `for` loops, blocks, functions, pointers or types
  other than 64-bit integers.
- The stack frame reserves 208 bytes, room for 26 variables; programs with
  more distinct variable names are not rejected but will overwrite memory
  outside the frame.
- minicc only writes assembly; assembling and linking it is left to your
  own toolchain.

## Tests

```
pip install .[test]
pytest
```