import json

import pytest

from stacky.__main__ import main


@pytest.fixture
def program(tmp_path):
    path = tmp_path / 'square.f'
    path.write_text(': square DUP * ; 9 square .', encoding='utf-8')
    return path


def test_runs_program_file(program, capsys):
    main([str(program)])
    assert capsys.readouterr().out == '81'


def test_emit_tokens(program, capsys):
    main(['--emit-tokens', str(program)])
    out_path = program.with_name('square.f.tokens.json')
    assert capsys.readouterr().out.strip() == str(out_path)
    tokens = json.loads(out_path.read_text(encoding='utf-8'))
    assert tokens[0]['type'] == 'COLON'
    assert tokens[-1]['type'] == 'EOF'


def test_emit_ast_then_run_it(program, capsys):
    main(['--emit-ast', str(program)])
    out_path = program.with_name('square.f.ast.json')
    assert capsys.readouterr().out.strip() == str(out_path)
    main(['--ast', str(out_path)])
    assert capsys.readouterr().out == '81'


def test_string_values_flag(tmp_path, capsys):
    path = tmp_path / 'concat.f'
    path.write_text('"ab" "cd" + .', encoding='utf-8')
    main(['--string-values', str(path)])
    assert capsys.readouterr().out == 'abcd'


def test_fault_exits_with_status_1(tmp_path, capsys):
    path = tmp_path / 'bad.f'
    path.write_text('7 . undefined_word', encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == '7'
    assert 'RuntimeFault: Word not found: undefined_word' in captured.err


def test_parse_fault_is_reported(tmp_path, capsys):
    path = tmp_path / 'bad.f'
    path.write_text(': 1 2 + ;', encoding='utf-8')
    with pytest.raises(SystemExit):
        main([str(path)])
    assert "ParseFault: Expected identifier after ':'" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'nope.f')])
    assert exc.value.code == 1
    assert 'not found' in capsys.readouterr().err


@pytest.mark.parametrize('content', ['not json', '[1, 2]', '{"type": "Number"}', '{"type": "Bogus"}'])
def test_invalid_ast_file(tmp_path, capsys, content):
    path = tmp_path / 'bad.ast.json'
    path.write_text(content, encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main(['--ast', str(path)])
    assert exc.value.code == 1
    assert 'not a valid AST file' in capsys.readouterr().err
