"""Tokenizer for the Stacky language.

Terminals are described by a small Lark grammar and recognised by Lark's
basic lexer in lexer-only mode (no parser is built). The stream coming out
of Lark is then refined:

* identifiers that spell a reserved word become keyword tokens, and the
  single letters ``I J K L M`` become loop variable tokens,
* number literals are converted and range checked,
* string literals lose their quotes,
* an identifier must be followed by whitespace or the end of input.

The public entry point is :func:`lex`, which always returns a list ending
in an ``EOF`` token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexFault
from .types import INT32_MIN, INT32_MAX


@dataclass(frozen=True)
class Token:
    type: str
    value: Any = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def describe(self) -> str:
        if self.type == 'EOF':
            return 'end of input'
        if self.type == 'STRING':
            return f'string "{self.value}"'
        if self.type == 'LOOP_VAR':
            return f"loop variable {LOOP_VARIABLES[self.value]}"
        return f"{self.type} {self.value}"


KEYWORDS = {
    'IF': 'IF',
    'ELSE': 'ELSE',
    'THEN': 'THEN',
    'DUP': 'DUP',
    'SWAP': 'SWAP',
    'DROP': 'DROP',
    'DO': 'DO',
    'LOOP': 'LOOP',
    'PUTS': 'PUTS',
}

# Index in this string is the loop depth, 0 being the innermost loop
LOOP_VARIABLES = 'IJKLM'


STACKY_TOKENS = r"""
    start: token*
    ?token: NUMBER | STRING | IDENT | ARROW
          | GTE | LTE | DOUBLE_EQ | GT | LT | EQ
          | ADD | SUB | MUL | DIV | EMIT | COLON | SEMICOLON | AT

    NUMBER: /-?[0-9]+/
    STRING: /"[^"]*"?/
    IDENT: /[A-Za-z][A-Za-z0-9_]*/

    ARROW: "->"
    GTE: ">="
    LTE: "<="
    DOUBLE_EQ: "=="
    GT: ">"
    LT: "<"
    EQ: "="
    ADD: "+"
    SUB: "-"
    MUL: "*"
    DIV: "/"
    EMIT: "."
    COLON: ":"
    SEMICOLON: ";"
    AT: "@"

    WS: /\s+/
    %ignore WS
"""


STACKY_LEXER = Lark(
    STACKY_TOKENS,
    parser=None,
    lexer='basic',
)


def _end_position(source: str):
    line = source.count('\n') + 1
    column = len(source) - (source.rfind('\n') + 1) + 1
    return line, column


def _convert(tok, source: str) -> Token:
    kind = tok.type
    text = str(tok)
    if kind == 'NUMBER':
        value = int(text)
        if not INT32_MIN <= value <= INT32_MAX:
            raise LexFault(f"number {text} out of range at {tok.line}:{tok.column}")
        return Token('NUMBER', value, tok.line, tok.column)
    if kind == 'STRING':
        # an unterminated literal runs to the end of input
        body = text[1:]
        if body.endswith('"'):
            body = body[:-1]
        return Token('STRING', body, tok.line, tok.column)
    if kind == 'IDENT':
        end = tok.end_pos
        if end < len(source) and not source[end].isspace():
            raise LexFault(
                f"identifier {text!r} must be followed by whitespace, "
                f"found {source[end]!r} at {tok.end_line}:{tok.end_column}"
            )
        if text in KEYWORDS:
            return Token(KEYWORDS[text], text, tok.line, tok.column)
        if len(text) == 1 and text in LOOP_VARIABLES:
            return Token('LOOP_VAR', LOOP_VARIABLES.index(text), tok.line, tok.column)
        return Token('IDENT', text, tok.line, tok.column)
    return Token(kind, text, tok.line, tok.column)


def lex(source: str) -> List[Token]:
    """Convert source text into a list of tokens terminated by ``EOF``."""
    tokens: List[Token] = []
    try:
        for tok in STACKY_LEXER.lex(source):
            tokens.append(_convert(tok, source))
    except UnexpectedCharacters as e:
        raise LexFault(f"unexpected character {e.char!r} at {e.line}:{e.column}") from None
    line, column = _end_position(source)
    tokens.append(Token('EOF', None, line, column))
    return tokens
