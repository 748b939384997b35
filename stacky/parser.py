"""Recursive-descent parser for the Stacky language.

A program is a flat sequence of nodes. Word definitions (``: name ... ;``),
conditionals (``IF ... [ELSE ...] THEN``) and counted loops
(``DO ... LOOP``) open a nested body which is parsed the same way until
its closing delimiter. Delimiters are consumed here and never appear in
the resulting tree.

The public entry point is :func:`parse`, which returns an ``Expressions``
node holding the whole program.
"""

from __future__ import annotations

from typing import FrozenSet, List, Tuple

from .ast import (
    Node, Number, StringLiteral, Operation, Expressions, FunctionCall,
    WordDefinition, If, Loop, LoopVariable, SetVariable, GetVariable,
)
from .errors import ParseFault
from .lexer import Token, KEYWORDS, lex

# Tokens executed directly by the stack machine
OPERATIONS = frozenset({
    'ADD', 'SUB', 'MUL', 'DIV', 'EMIT',
    'LT', 'GT', 'LTE', 'GTE', 'EQ', 'DOUBLE_EQ',
    'DUP', 'SWAP', 'DROP', 'PUTS',
})

# Tokens that may only appear as the closing delimiter of a body
DELIMITERS = frozenset({'SEMICOLON', 'ELSE', 'THEN', 'LOOP', 'EOF'})

RESERVED = frozenset(KEYWORDS.values()) | {'LOOP_VAR'}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        # tolerate token lists handed in without a trailing EOF
        last = self.tokens[-1] if self.tokens else None
        return Token('EOF', None, last.line if last else 0, last.column if last else 0)

    def advance(self) -> Token:
        token = self.peek()
        if token.type != 'EOF':
            self.pos += 1
        return token

    def fault(self, message: str, token: Token) -> ParseFault:
        return ParseFault(f"{message} at {token.line}:{token.column}")

    def parse_program(self) -> Expressions:
        body, _ = self.parse_body(frozenset({'EOF'}), 'program')
        return Expressions(body)

    def parse_body(self, terminators: FrozenSet[str], context: str) -> Tuple[List[Node], Token]:
        """Parse nodes until one of ``terminators``; return them and the delimiter."""
        nodes: List[Node] = []
        while True:
            token = self.advance()
            if token.type in terminators:
                return nodes, token
            if token.type in DELIMITERS:
                if token.type == 'EOF':
                    raise self.fault(f"unexpected end of input in {context}", token)
                raise self.fault(f"unexpected {token.value} in {context}", token)
            nodes.append(self.parse_node(token))

    def parse_node(self, token: Token) -> Node:
        kind = token.type
        if kind == 'NUMBER':
            return Number(token.value)
        if kind == 'STRING':
            return StringLiteral(token.value)
        if kind in OPERATIONS:
            return Operation(kind)
        if kind == 'IDENT':
            return FunctionCall(token.value)
        if kind == 'LOOP_VAR':
            return LoopVariable(token.value)
        if kind == 'COLON':
            return self.parse_definition()
        if kind == 'IF':
            return self.parse_if()
        if kind == 'DO':
            return self.parse_loop()
        if kind == 'ARROW':
            return SetVariable(self.expect_name("'->'"))
        if kind == 'AT':
            return GetVariable(self.expect_name("'@'"))
        raise self.fault(f"unexpected token {token.describe()}", token)

    def expect_name(self, after: str) -> str:
        token = self.advance()
        if token.type == 'IDENT':
            return token.value
        if token.type in RESERVED:
            raise self.fault(f"Expected identifier after {after}, got reserved word {token.describe()}", token)
        raise self.fault(f"Expected identifier after {after}, got {token.describe()}", token)

    def parse_definition(self) -> WordDefinition:
        name = self.expect_name("':'")
        body, _ = self.parse_body(frozenset({'SEMICOLON'}), f"definition of {name}")
        return WordDefinition(name, body)

    def parse_if(self) -> If:
        if_body, end = self.parse_body(frozenset({'THEN', 'ELSE'}), 'IF')
        else_body: List[Node] = []
        if end.type == 'ELSE':
            else_body, _ = self.parse_body(frozenset({'THEN'}), 'ELSE')
        return If(if_body, else_body)

    def parse_loop(self) -> Loop:
        body, _ = self.parse_body(frozenset({'LOOP'}), 'DO')
        return Loop(body)


def parse(tokens: List[Token]) -> Expressions:
    """Parse a token sequence into the root ``Expressions`` node."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Expressions:
    """Lex and parse Stacky source text."""
    return parse(lex(source))
