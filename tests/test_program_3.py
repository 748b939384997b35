from pathlib import Path
from stacky.parser import parse_program
from stacky.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3(capsys):
    # I reads the index of the innermost loop
    with open(EXAMPLES / 'program_3.f', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out
    assert out == '01234'
