import json

import pytest

from stacky.ast_json import ast_from_obj, ast_to_obj, tokens_to_obj
from stacky.lexer import lex
from stacky.parser import parse_program

SOURCE = '''
: fact -> n 1 -> acc
    @ n 1 + 1 DO @ acc I * -> acc LOOP
    @ acc ;
5 fact DUP 100 > IF "big" ELSE "small" THEN PUTS .
'''


def test_ast_survives_json_round_trip():
    ast = parse_program(SOURCE)
    text = json.dumps(ast_to_obj(ast))
    assert ast_from_obj(json.loads(text)) == ast


def test_ast_object_shape():
    obj = ast_to_obj(parse_program('1 -> x'))
    assert obj == {
        'type': 'Expressions',
        'body': [
            {'type': 'Number', 'value': 1},
            {'type': 'SetVariable', 'name': 'x'},
        ],
    }


def test_tokens_dump():
    assert tokens_to_obj(lex('DUP J')) == [
        {'type': 'DUP', 'value': 'DUP', 'line': 1, 'column': 1},
        {'type': 'LOOP_VAR', 'value': 1, 'line': 1, 'column': 5},
        {'type': 'EOF', 'value': None, 'line': 1, 'column': 6},
    ]


def test_unknown_nodes_are_rejected():
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(ValueError, match='Unknown AST node type: Bogus'):
        ast_from_obj({'type': 'Bogus'})
    with pytest.raises(TypeError):
        ast_from_obj([1, 2])
