"""Tree-walking interpreter for the Stacky language.

The interpreter owns a :class:`~stacky.stack_machine.StackMachine` and the
root :class:`~stacky.environment.Environment` of a run. It walks the AST
produced by :mod:`stacky.parser`, pushing literals, delegating primitive
operations to the stack machine, expanding word calls in place and running
conditionals and counted loops. Output goes to a text sink as soon as it
is produced, so anything written before a fault stays written.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .ast import (
    Node, Number, StringLiteral, Operation, Expressions, FunctionCall,
    WordDefinition, If, Loop, LoopVariable, SetVariable, GetVariable,
)
from .environment import Environment
from .errors import RuntimeFault
from .parser import parse_program
from .stack_machine import StackMachine
from .types import VariableBinding, WordBinding, is_number, to_string, type_name

STRING_MODES = ('chars', 'value')

# A word call costs about four Python frames
RECURSION_LIMIT = 10000


class Interpreter:
    """Core interpreter that executes Stacky AST."""
    def __init__(self, output: Optional[TextIO] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt', string_mode: str = 'chars'):
        if string_mode not in STRING_MODES:
            raise ValueError(f"string_mode must be one of {STRING_MODES}, not {string_mode!r}")
        self.output = output
        self.string_mode = string_mode
        self.machine = StackMachine()
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    @property
    def sink(self) -> TextIO:
        # resolved late so pytest's capsys sees the replaced stdout
        return self.output if self.output is not None else sys.stdout

    # Public API
    def run(self, program: Node, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        if self.debug_level > 0:
            self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
        old_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
        try:
            self.execute(program, env)
        except RecursionError:
            raise RuntimeFault('word calls nested too deeply') from None
        finally:
            sys.setrecursionlimit(old_limit)
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, nodes: List[Node], env: Environment) -> None:
        for node in nodes:
            self.execute(node, env)

    def execute(self, node: Node, env: Environment) -> None:
        if self.debug_level >= 2 and not isinstance(node, Expressions):
            self.debug(f"exec {node}")
        if isinstance(node, Number):
            self.machine.push(node.value)
            return
        if isinstance(node, StringLiteral):
            self.push_string(node.value)
            return
        if isinstance(node, Operation):
            self.machine.execute(node.op, self.sink)
            if self.debug_level >= 3:
                self.debug(f"stack {self.machine.snapshot()}")
            return
        if isinstance(node, Expressions):
            self.execute_block(node.body, env)
            return
        if isinstance(node, WordDefinition):
            env.set(node.name, WordBinding(node.name, node.body))
            if self.debug_level >= 1:
                self.debug(f"define word {node.name}")
            return
        if isinstance(node, FunctionCall):
            binding = env.get(node.name)
            if isinstance(binding, WordBinding):
                # expanded in place: no new scope for the call
                self.execute_block(binding.body, env)
            else:
                self.machine.push(binding.value)
            return
        if isinstance(node, If):
            cond = self.machine.pop()
            if cond is None:
                raise RuntimeFault('IF needs a condition on the stack')
            if not is_number(cond):
                raise RuntimeFault(f'IF condition must be a Number, got {type_name(cond)}')
            if self.debug_level >= 3:
                self.debug(f"if condition {cond} -> {cond == 1}")
            self.execute_block(node.if_body if cond == 1 else node.else_body, env)
            return
        if isinstance(node, Loop):
            self.execute_loop(node, env)
            return
        if isinstance(node, LoopVariable):
            self.machine.push(self.machine.loop_index(node.depth))
            return
        if isinstance(node, SetVariable):
            value = self.machine.pop()
            if value is None:
                raise RuntimeFault(f'-> {node.name} needs a value on the stack')
            env.set(node.name, VariableBinding(value))
            if self.debug_level >= 1:
                self.debug(f"set {node.name} = {to_string(value)}")
            return
        if isinstance(node, GetVariable):
            self.machine.push(env.get_variable(node.name).value)
            return
        # catch any other nodes
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def push_string(self, text: str) -> None:
        if self.string_mode == 'value':
            self.machine.push(text)
            return
        for ch in text:
            self.machine.push(ord(ch))
        self.machine.push(len(text))

    def execute_loop(self, node: Loop, env: Environment) -> None:
        index = self.machine.pop()
        limit = self.machine.pop()
        if index is None or limit is None:
            raise RuntimeFault('DO needs a limit and a start index on the stack')
        if not (is_number(index) and is_number(limit)):
            raise RuntimeFault(f'DO bounds must be Numbers, got {type_name(limit)}, {type_name(index)}')
        self.machine.enter_loop(limit, index)
        try:
            while True:
                frame = self.machine.loop_frame()
                if frame.index >= frame.limit:
                    break
                self.execute_block(node.body, env)
                frame.index += 1
        finally:
            self.machine.exit_loop()


def run(ast: Node, output_sink: Optional[TextIO] = None, **options) -> Interpreter:
    """Run a parsed program, writing its output to ``output_sink``."""
    interpreter = Interpreter(output=output_sink, **options)
    interpreter.run(ast)
    return interpreter


def run_program(source: str, output: Optional[TextIO] = None, debug_level: int = 0) -> Interpreter:
    """Convenience function to lex, parse and run a Stacky program from source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(output=output, debug_level=debug_level)
    interpreter.run(ast_program)
    return interpreter

