import pytest

from stacky.errors import LexFault
from stacky.lexer import Token, lex


def types(source):
    return [t.type for t in lex(source)]


def test_empty_source_is_just_eof():
    assert lex('') == [Token('EOF')]
    assert lex('  \n\t ') == [Token('EOF')]


def test_numbers_and_negative_numbers():
    assert lex('10 -1 0') == [Token('NUMBER', 10), Token('NUMBER', -1), Token('NUMBER', 0), Token('EOF')]


def test_minus_sub_and_arrow():
    assert types('- -> -5') == ['SUB', 'ARROW', 'NUMBER', 'EOF']
    assert lex('1 2 -')[2] == Token('SUB', '-')


def test_two_character_comparisons():
    assert types('< <= > >= = ==') == ['LT', 'LTE', 'GT', 'GTE', 'EQ', 'DOUBLE_EQ', 'EOF']


def test_single_character_operators():
    assert types('+ - * / . : ; @') == [
        'ADD', 'SUB', 'MUL', 'DIV', 'EMIT', 'COLON', 'SEMICOLON', 'AT', 'EOF',
    ]


def test_keywords_and_identifiers():
    tokens = lex('IF ELSE THEN DUP SWAP DROP DO LOOP PUTS if Test my_word2')
    assert [t.type for t in tokens] == [
        'IF', 'ELSE', 'THEN', 'DUP', 'SWAP', 'DROP', 'DO', 'LOOP', 'PUTS',
        'IDENT', 'IDENT', 'IDENT', 'EOF',
    ]
    assert tokens[9].value == 'if'
    assert tokens[11].value == 'my_word2'


def test_loop_variables():
    assert lex('I J K L M') == [
        Token('LOOP_VAR', 0), Token('LOOP_VAR', 1), Token('LOOP_VAR', 2),
        Token('LOOP_VAR', 3), Token('LOOP_VAR', 4), Token('EOF'),
    ]
    # only the bare letters are loop variables
    assert lex('II N')[:2] == [Token('IDENT', 'II'), Token('IDENT', 'N')]


def test_string_literals_are_verbatim():
    assert lex('"hello world"') == [Token('STRING', 'hello world'), Token('EOF')]
    assert lex(r'"a\n"')[0] == Token('STRING', r'a\n')
    assert lex('""')[0] == Token('STRING', '')


def test_unterminated_string_runs_to_end():
    assert lex('"abc def') == [Token('STRING', 'abc def'), Token('EOF')]


def test_colon_may_touch_the_word_name():
    assert lex(':Test 1 ;')[:2] == [Token('COLON', ':'), Token('IDENT', 'Test')]


def test_identifier_must_be_followed_by_whitespace():
    with pytest.raises(LexFault, match="identifier 'Test'"):
        lex(': Test 1 2 + . ;Test;')


def test_unknown_character_is_a_fault():
    with pytest.raises(LexFault, match=r"unexpected character '\$' at 1:3"):
        lex('1 $')


def test_number_out_of_range():
    lex('2147483647 -2147483648')
    with pytest.raises(LexFault, match='out of range'):
        lex('2147483648')


def test_positions():
    tokens = lex('1\n  DUP')
    assert (tokens[0].line, tokens[0].column) == (1, 1)
    assert (tokens[1].line, tokens[1].column) == (2, 3)


def test_any_unicode_whitespace_separates_tokens():
    assert types('1\v2 + .') == ['NUMBER', 'NUMBER', 'ADD', 'EMIT', 'EOF']
    assert types('DUP\u00a0DROP\u2003x') == ['DUP', 'DROP', 'IDENT', 'EOF']
