# Stacky language package
# This package provides a lexer, parser and interpreter for the Stacky language.
from .errors import StackyError, LexFault, ParseFault, RuntimeFault
from .lexer import lex
from .parser import parse, parse_program
from .interpreter import Interpreter, run, run_program

__all__ = [
    'lex',
    'parse',
    'parse_program',
    'run',
    'run_program',
    'Interpreter',
    'StackyError',
    'LexFault',
    'ParseFault',
    'RuntimeFault',
]
