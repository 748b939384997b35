"""CLI entry point for the Stacky interpreter.

Usage:
    python -m stacky [-v|-vv|-vvv] [--string-values] <program_file>
    python -m stacky [-v...] --emit-tokens <program_file>
    python -m stacky [-v...] --emit-ast <program_file>
    python -m stacky [-v...] --ast <ast_json_file>

Options:
  -v               Increase debug verbosity (can be repeated)
  --string-values  Push string literals as one String value instead of
                   character codes followed by a length
  --emit-tokens    Lex the given file and emit a token JSON file
  --emit-ast       Parse the given file and emit an AST JSON file
  --ast            Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Faults are reported on stderr and the
process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_json import ast_to_obj, ast_from_obj, tokens_to_obj
from .errors import StackyError
from .interpreter import Interpreter
from .lexer import lex
from .parser import parse


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def dump_path(path: Path, kind: str) -> Path:
    return path.with_name(path.name + f'.{kind}.json')


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Stacky language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--string-values', action='store_true',
                        help='push string literals as a single String value')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-tokens', metavar='PROGRAM_FILE', help='emit token JSON for the given program')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Stacky program file to execute')
    args = parser.parse_args(argv)

    try:
        if args.emit_tokens:
            program_file = Path(args.emit_tokens)
            tokens = lex(read_source(program_file))
            out_path = dump_path(program_file, 'tokens')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(tokens_to_obj(tokens), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        if args.emit_ast:
            program_file = Path(args.emit_ast)
            ast_program = parse(lex(read_source(program_file)))
            out_path = dump_path(program_file, 'ast')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        if args.ast:
            ast_path = Path(args.ast)
            try:
                ast_program = ast_from_obj(json.loads(read_source(ast_path)))
            except (ValueError, KeyError, TypeError) as e:
                print(f"Error: {ast_path} is not a valid AST file: {e}", file=sys.stderr)
                sys.exit(1)
        else:
            if not args.program:
                parser.error('missing program file; or use --emit-tokens/--emit-ast/--ast')
            ast_program = parse(lex(read_source(Path(args.program))))

        interpreter = Interpreter(
            debug_level=args.v,
            string_mode='value' if args.string_values else 'chars',
        )
        interpreter.run(ast_program)
    except StackyError as e:
        sys.stdout.flush()
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
