"""Stack-based virtual machine executing compiled chunks."""

from __future__ import annotations

import enum
import math
import operator
import sys
from typing import Callable, Optional, TextIO

from .chunk import Chunk, OpCode
from .compiler import CompileError, compile_source
from .debug import disassemble_instruction
from .value import Value, format_value, is_falsey, is_number, values_equal

STACK_MAX = 256


class InterpretResult(enum.Enum):
    """Outcome of interpreting a piece of source."""

    OK = 0
    COMPILE_ERROR = 1
    RUNTIME_ERROR = 2


class LoxRuntimeError(Exception):
    """An error raised while executing bytecode, tagged with its source line."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(message)
        self.message = message
        self.line = line


def _divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


_BINARY: dict[OpCode, Callable[[float, float], Value]] = {
    OpCode.GREATER: operator.gt,
    OpCode.LESS: operator.lt,
    OpCode.ADD: operator.add,
    OpCode.SUBTRACT: operator.sub,
    OpCode.MULTIPLY: operator.mul,
    OpCode.DIVIDE: _divide,
}


class VM:
    """Runs chunks, printing results to out and errors to err."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        trace: bool = False,
    ) -> None:
        self.out = sys.stdout if out is None else out
        self.err = sys.stderr if err is None else err
        self.trace = trace
        self.stack: list[Value] = []

    def push(self, value: Value) -> None:
        """Push a value; raise OverflowError when the stack is full."""
        if len(self.stack) >= STACK_MAX:
            raise OverflowError("Stack overflow.")
        self.stack.append(value)

    def pop(self) -> Value:
        """Remove and return the top of the stack."""
        return self.stack.pop()

    def _trace(self, chunk: Chunk, offset: int) -> None:
        slots = "".join(f"[ {format_value(v)} ]" for v in self.stack)
        self.out.write(f"          {slots}\n")
        text, _ = disassemble_instruction(chunk, offset)
        self.out.write(text + "\n")

    def _binary(self, op: OpCode, line: int) -> None:
        if len(self.stack) < 2 or not (
            is_number(self.stack[-1]) and is_number(self.stack[-2])
        ):
            raise LoxRuntimeError("Operands must be numbers.", line)
        b = self.pop()
        a = self.pop()
        result = _BINARY[op](float(a), float(b))  # type: ignore[arg-type]
        self.push(result)

    def run(self, chunk: Chunk) -> Value:
        """Execute the chunk until RETURN, print the returned value and return it."""
        code = chunk.code
        ip = 0
        while True:
            if ip >= len(code):
                last = chunk.lines[-1] if chunk.lines else 0
                raise LoxRuntimeError("Unexpected end of bytecode.", last)
            if self.trace:
                self._trace(chunk, ip)
            line = chunk.lines[ip]
            byte = code[ip]
            ip += 1
            try:
                op = OpCode(byte)
            except ValueError:
                raise LoxRuntimeError(f"Unknown opcode {byte}.", line) from None

            try:
                match op:
                    case OpCode.CONSTANT:
                        self.push(chunk.constants[code[ip]])
                        ip += 1
                    case OpCode.NIL:
                        self.push(None)
                    case OpCode.TRUE:
                        self.push(True)
                    case OpCode.FALSE:
                        self.push(False)
                    case OpCode.EQUAL:
                        b = self.pop()
                        a = self.pop()
                        self.push(values_equal(a, b))
                    case OpCode.NOT:
                        self.push(is_falsey(self.pop()))
                    case OpCode.NEGATE:
                        if not self.stack or not is_number(self.stack[-1]):
                            raise LoxRuntimeError("Operand must be a number.", line)
                        self.push(-float(self.pop()))  # type: ignore[arg-type]
                    case OpCode.RETURN:
                        value = self.pop()
                        self.out.write(format_value(value) + "\n")
                        return value
                    case _:
                        self._binary(op, line)
            except OverflowError:
                raise LoxRuntimeError("Stack overflow.", line) from None

    def interpret(self, source: str) -> InterpretResult:
        """Compile and run source, reporting any errors to err."""
        source = source.partition("\0")[0]
        try:
            chunk = compile_source(source, self.out if self.trace else None)
        except CompileError as exc:
            for message in exc.messages:
                self.err.write(message + "\n")
            return InterpretResult.COMPILE_ERROR

        try:
            self.run(chunk)
        except LoxRuntimeError as exc:
            self.err.write(f"{exc.message}\n[line {exc.line}] in script\n")
            self.stack.clear()
            return InterpretResult.RUNTIME_ERROR
        return InterpretResult.OK