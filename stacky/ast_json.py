"""JSON serialization/deserialization for Stacky tokens and ASTs.

This module converts between Stacky AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types. Tokens can be dumped for debugging but are
not read back.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Number,
    StringLiteral,
    Operation,
    Expressions,
    FunctionCall,
    WordDefinition,
    If,
    Loop,
    LoopVariable,
    SetVariable,
    GetVariable,
)
from .lexer import Token


def tokens_to_obj(tokens: List[Token]) -> List[Dict[str, Any]]:
    return [
        {"type": t.type, "value": t.value, "line": t.line, "column": t.column}
        for t in tokens
    ]


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Number):
        return {"type": "Number", "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "value": node.value}
    if isinstance(node, Operation):
        return {"type": "Operation", "op": node.op}
    if isinstance(node, Expressions):
        return {"type": "Expressions", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, FunctionCall):
        return {"type": "FunctionCall", "name": node.name}
    if isinstance(node, WordDefinition):
        return {
            "type": "WordDefinition",
            "name": node.name,
            "body": [ast_to_obj(n) for n in node.body],
        }
    if isinstance(node, If):
        return {
            "type": "If",
            "if_body": [ast_to_obj(n) for n in node.if_body],
            "else_body": [ast_to_obj(n) for n in node.else_body],
        }
    if isinstance(node, Loop):
        return {"type": "Loop", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, LoopVariable):
        return {"type": "LoopVariable", "depth": node.depth}
    if isinstance(node, SetVariable):
        return {"type": "SetVariable", "name": node.name}
    if isinstance(node, GetVariable):
        return {"type": "GetVariable", "name": node.name}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Number":
        return Number(value=int(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(value=obj["value"])
    if t == "Operation":
        return Operation(op=obj["op"])
    if t == "Expressions":
        return Expressions(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "FunctionCall":
        return FunctionCall(name=obj["name"])
    if t == "WordDefinition":
        return WordDefinition(name=obj["name"], body=[ast_from_obj(n) for n in obj["body"]])
    if t == "If":
        return If(
            if_body=[ast_from_obj(n) for n in obj["if_body"]],
            else_body=[ast_from_obj(n) for n in obj.get("else_body", [])],
        )
    if t == "Loop":
        return Loop(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "LoopVariable":
        return LoopVariable(depth=int(obj["depth"]))
    if t == "SetVariable":
        return SetVariable(name=obj["name"])
    if t == "GetVariable":
        return GetVariable(name=obj["name"])

    raise ValueError(f"Unknown AST node type: {t}")
