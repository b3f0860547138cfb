"""Bytecode chunks and the instruction set."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .value import Value


class OpCode(enum.IntEnum):
    """Bytecode instructions."""

    CONSTANT = 0
    NIL = 1
    TRUE = 2
    FALSE = 3
    EQUAL = 4
    GREATER = 5
    LESS = 6
    ADD = 7
    SUBTRACT = 8
    MULTIPLY = 9
    DIVIDE = 10
    NOT = 11
    NEGATE = 12
    RETURN = 13


@dataclass
class Chunk:
    """A sequence of bytecode with per-byte source lines and a constant pool."""

    code: bytearray = field(default_factory=bytearray)
    lines: list[int] = field(default_factory=list)
    constants: list[Value] = field(default_factory=list)

    def write(self, byte: int, line: int) -> None:
        """Append one byte (0-255) recorded as coming from the given line."""
        self.code.append(byte)
        self.lines.append(line)

    def add_constant(self, value: Value) -> int:
        """Add a value to the constant pool and return its index."""
        self.constants.append(value)
        return len(self.constants) - 1

    def __len__(self) -> int:
        return len(self.code)