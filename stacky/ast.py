"""Abstract Syntax Tree (AST) definitions for the Stacky language.

The parser turns a token sequence into a tree of these nodes and the
interpreter walks it. Every program, word body and loop body is an ordered
list of nodes; ``Expressions`` wraps such a list at the root.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Number(Node):
    value: int


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class Operation(Node):
    op: str  # token type of a primitive, e.g. 'ADD' or 'DUP'


@dataclass
class Expressions(Node):
    body: List[Node] = field(default_factory=list)


@dataclass
class FunctionCall(Node):
    name: str


@dataclass
class WordDefinition(Node):
    name: str
    body: List[Node] = field(default_factory=list)


@dataclass
class If(Node):
    if_body: List[Node] = field(default_factory=list)
    else_body: List[Node] = field(default_factory=list)


@dataclass
class Loop(Node):
    body: List[Node] = field(default_factory=list)


@dataclass
class LoopVariable(Node):
    depth: int  # 0 is the innermost loop


@dataclass
class SetVariable(Node):
    name: str


@dataclass
class GetVariable(Node):
    name: str
