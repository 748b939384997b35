"""Data stack, loop-counter stack and primitive operations.

Binary operations pop the most recently pushed value first, so a program
``X Y op`` computes ``X op Y``: ``1 2 -`` is ``-1`` and ``4 2 /`` is ``2``.
Every failure raises :class:`~stacky.errors.RuntimeFault` naming the
operation involved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from .errors import RuntimeFault
from .types import INT32_MIN, INT32_MAX, Pointer, entities_equal, is_number, to_string, type_name

# Reserved loop variable names I, J, K, L, M allow five nested loops
MAX_LOOP_DEPTH = 5

SYMBOLS = {
    'ADD': '+',
    'SUB': '-',
    'MUL': '*',
    'DIV': '/',
    'EMIT': '.',
    'LT': '<',
    'GT': '>',
    'LTE': '<=',
    'GTE': '>=',
    'EQ': '=',
    'DOUBLE_EQ': '==',
    'DUP': 'DUP',
    'SWAP': 'SWAP',
    'DROP': 'DROP',
    'PUTS': 'PUTS',
}


@dataclass
class LoopFrame:
    limit: int
    index: int


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class StackMachine:
    def __init__(self):
        self.stack: List[Any] = []
        self.loops: List[LoopFrame] = []

    # Data stack

    def push(self, entity: Any) -> None:
        self.stack.append(entity)

    def pop(self) -> Optional[Any]:
        if not self.stack:
            return None
        return self.stack.pop()

    @property
    def depth(self) -> int:
        return len(self.stack)

    def get(self, pointer: Pointer) -> Any:
        if not 0 <= pointer.address < self.depth:
            raise RuntimeFault(f'pointer {to_string(pointer)} is outside the stack')
        return self.stack[pointer.address]

    def snapshot(self) -> str:
        return '[' + ' '.join(repr(v) if isinstance(v, str) else to_string(v) for v in self.stack) + ']'

    def take(self, op: str, count: int) -> List[Any]:
        """Pop ``count`` values, returned in push order."""
        if self.depth < count:
            needed = 'a value' if count == 1 else f'{count} values'
            raise RuntimeFault(f"stack underflow: '{SYMBOLS.get(op, op)}' needs {needed}, "
                               f"stack has {self.depth}")
        values = self.stack[-count:]
        del self.stack[-count:]
        return values

    def push_number(self, op: str, value: int) -> None:
        if not INT32_MIN <= value <= INT32_MAX:
            raise RuntimeFault(f"'{SYMBOLS.get(op, op)}' overflows a 32-bit Number: {value}")
        self.push(value)

    def take_numbers(self, op: str, count: int) -> List[int]:
        values = self.take(op, count)
        for v in values:
            if not is_number(v):
                raise RuntimeFault(f"'{SYMBOLS.get(op, op)}' expects Number operands, "
                                   f"got {', '.join(type_name(x) for x in values)}")
        return values

    # Primitive operations

    def execute(self, op: str, output: TextIO) -> None:
        if op == 'ADD':
            a, b = self.take('ADD', 2)
            if isinstance(a, str) and isinstance(b, str):
                self.push(a + b)
            elif is_number(a) and is_number(b):
                self.push_number(op, a + b)
            else:
                raise RuntimeFault(f"'+' expects two Numbers or two Strings, "
                                   f"got {type_name(a)}, {type_name(b)}")
            return
        if op == 'SUB':
            a, b = self.take_numbers(op, 2)
            self.push_number(op, a - b)
            return
        if op == 'MUL':
            a, b = self.take_numbers(op, 2)
            self.push_number(op, a * b)
            return
        if op == 'DIV':
            a, b = self.take_numbers(op, 2)
            if b == 0:
                raise RuntimeFault('division by zero')
            self.push_number(op, truncating_div(a, b))
            return
        if op in ('LT', 'GT', 'LTE', 'GTE'):
            a, b = self.take_numbers(op, 2)
            if op == 'LT': result = a < b
            elif op == 'GT': result = a > b
            elif op == 'LTE': result = a <= b
            else: result = a >= b
            self.push(1 if result else 0)
            return
        if op in ('EQ', 'DOUBLE_EQ'):
            a, b = self.take(op, 2)
            self.push(1 if entities_equal(a, b) else 0)
            return
        if op == 'EMIT':
            value, = self.take(op, 1)
            output.write(to_string(value))
            return
        if op == 'PUTS':
            self.puts(output)
            return
        if op == 'DUP':
            value, = self.take(op, 1)
            self.push(value)
            self.push(value)
            return
        if op == 'SWAP':
            # "1 2 SWAP . ." prints 21: the pair goes back with the
            # earlier-pushed value underneath
            a, b = self.take(op, 2)
            self.push(a)
            self.push(b)
            return
        if op == 'DROP':
            self.take(op, 1)
            return
        raise RuntimeFault(f'unknown operation {op}')

    def puts(self, output: TextIO) -> None:
        top, = self.take('PUTS', 1)
        if isinstance(top, str):
            output.write(top)
            return
        if not is_number(top) or top < 0:
            raise RuntimeFault(f"'PUTS' expects a character count, got {to_string(top)}")
        codes = self.take_numbers('PUTS', top) if top else []
        try:
            text = ''.join(chr(c) for c in codes)
        except (ValueError, OverflowError):
            raise RuntimeFault(f"'PUTS' got an invalid character code in {codes}") from None
        output.write(text)

    # Loop-counter stack

    def enter_loop(self, limit: int, index: int) -> None:
        if len(self.loops) >= MAX_LOOP_DEPTH:
            raise RuntimeFault(f'loops nested deeper than {MAX_LOOP_DEPTH}')
        self.loops.append(LoopFrame(limit, index))

    def loop_frame(self) -> LoopFrame:
        if not self.loops:
            raise RuntimeFault('no active loop')
        return self.loops[-1]

    def exit_loop(self) -> LoopFrame:
        frame = self.loop_frame()
        self.loops.pop()
        return frame

    def loop_index(self, depth: int) -> int:
        if depth >= len(self.loops):
            name = 'IJKLM'[depth] if depth < MAX_LOOP_DEPTH else str(depth)
            raise RuntimeFault(f'loop variable {name} used outside of {depth + 1} nested loop(s)')
        return self.loops[-1 - depth].index
