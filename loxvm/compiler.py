"""Single-pass compiler from Lox expressions to bytecode."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

from .chunk import Chunk, OpCode
from .debug import disassemble_chunk
from .scanner import Scanner, Token, TokenType
from .value import Value

_MAX_CONSTANT_INDEX = 255


class Precedence(enum.IntEnum):
    """Binding power of operators, lowest first."""

    NONE = 0
    ASSIGNMENT = 1  # =
    OR = 2  # or
    AND = 3  # and
    EQUALITY = 4  # == !=
    COMPARISON = 5  # < > <= >=
    TERM = 6  # + -
    FACTOR = 7  # * /
    UNARY = 8  # ! -
    CALL = 9  # . ()
    PRIMARY = 10


class CompileError(Exception):
    """Raised when the source has errors; holds every reported message."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


_ParseFn = Callable[["Compiler"], None]


@dataclass(frozen=True)
class _ParseRule:
    prefix: Optional[_ParseFn]
    infix: Optional[_ParseFn]
    precedence: Precedence


_BINARY_OPS: dict[TokenType, tuple[OpCode, ...]] = {
    TokenType.BANG_EQUAL: (OpCode.EQUAL, OpCode.NOT),
    TokenType.EQUAL_EQUAL: (OpCode.EQUAL,),
    TokenType.GREATER: (OpCode.GREATER,),
    TokenType.GREATER_EQUAL: (OpCode.LESS, OpCode.NOT),
    TokenType.LESS: (OpCode.LESS,),
    TokenType.LESS_EQUAL: (OpCode.GREATER, OpCode.NOT),
    TokenType.PLUS: (OpCode.ADD,),
    TokenType.MINUS: (OpCode.SUBTRACT,),
    TokenType.STAR: (OpCode.MULTIPLY,),
    TokenType.SLASH: (OpCode.DIVIDE,),
}

_LITERAL_OPS = {
    TokenType.FALSE: OpCode.FALSE,
    TokenType.NIL: OpCode.NIL,
    TokenType.TRUE: OpCode.TRUE,
}

_UNARY_OPS = {
    TokenType.BANG: OpCode.NOT,
    TokenType.MINUS: OpCode.NEGATE,
}


class Compiler:
    """Compiles one source string into a chunk. Each instance is used once."""

    def __init__(self, source: str) -> None:
        self._scanner = Scanner(source)
        self.chunk = Chunk()
        self.errors: list[str] = []
        self._current = Token(TokenType.EOF, "", 1)
        self._previous = self._current

    def compile(self) -> Chunk:
        """Compile the whole source; raise CompileError if anything was wrong."""
        self._advance()
        self._expression()
        self._consume(TokenType.EOF, "Expect end of expression.")
        self._emit_byte(OpCode.RETURN)
        if self.errors:
            raise CompileError(self.errors)
        return self.chunk

    # Error reporting.

    def _error_at(self, token: Token, message: str) -> None:
        text = f"[line {token.line}] Error"
        if token.type is TokenType.EOF:
            text += " at end"
        elif token.type is not TokenType.ERROR:
            text += f" at '{token.lexeme}'"
        self.errors.append(f"{text}: {message}")

    def _error(self, message: str) -> None:
        self._error_at(self._previous, message)

    def _error_at_current(self, message: str) -> None:
        self._error_at(self._current, message)

    # Token handling.

    def _advance(self) -> None:
        self._previous = self._current
        while True:
            self._current = self._scanner.scan_token()
            if self._current.type is not TokenType.ERROR:
                break
            self._error_at_current(self._current.lexeme)

    def _consume(self, kind: TokenType, message: str) -> None:
        if self._current.type is kind:
            self._advance()
            return
        self._error_at_current(message)

    # Code emission.

    def _emit_byte(self, byte: int) -> None:
        self.chunk.write(byte, self._previous.line)

    def _emit_bytes(self, *data: int) -> None:
        for byte in data:
            self._emit_byte(byte)

    def _make_constant(self, value: Value) -> int:
        index = self.chunk.add_constant(value)
        if index > _MAX_CONSTANT_INDEX:
            self._error("Too many constants in one chunk.")
            return 0
        return index

    def _emit_constant(self, value: Value) -> None:
        self._emit_bytes(OpCode.CONSTANT, self._make_constant(value))

    # Parse functions.

    def _binary(self) -> None:
        operator = self._previous.type
        rule = _rule(operator)
        self._parse_precedence(Precedence(rule.precedence + 1))
        self._emit_bytes(*_BINARY_OPS.get(operator, ()))

    def _literal(self) -> None:
        op = _LITERAL_OPS.get(self._previous.type)
        if op is not None:
            self._emit_byte(op)

    def _grouping(self) -> None:
        self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")

    def _number(self) -> None:
        self._emit_constant(float(self._previous.lexeme))

    def _string(self) -> None:
        self._emit_constant(self._previous.lexeme[1:-1])

    def _unary(self) -> None:
        operator = self._previous.type
        self._parse_precedence(Precedence.UNARY)
        op = _UNARY_OPS.get(operator)
        if op is not None:
            self._emit_byte(op)

    def _parse_precedence(self, precedence: Precedence) -> None:
        self._advance()
        prefix = _rule(self._previous.type).prefix
        if prefix is None:
            self._error("Expect expression.")
            return
        prefix(self)

        while precedence <= _rule(self._current.type).precedence:
            self._advance()
            infix = _rule(self._previous.type).infix
            if infix is not None:
                infix(self)

    def _expression(self) -> None:
        self._parse_precedence(Precedence.ASSIGNMENT)


_NO_RULE = _ParseRule(None, None, Precedence.NONE)

_RULES: dict[TokenType, _ParseRule] = {
    TokenType.LEFT_PAREN: _ParseRule(Compiler._grouping, None, Precedence.NONE),
    TokenType.MINUS: _ParseRule(Compiler._unary, Compiler._binary, Precedence.TERM),
    TokenType.PLUS: _ParseRule(None, Compiler._binary, Precedence.TERM),
    TokenType.SLASH: _ParseRule(None, Compiler._binary, Precedence.FACTOR),
    TokenType.STAR: _ParseRule(None, Compiler._binary, Precedence.FACTOR),
    TokenType.BANG: _ParseRule(Compiler._unary, None, Precedence.NONE),
    TokenType.BANG_EQUAL: _ParseRule(None, Compiler._binary, Precedence.EQUALITY),
    TokenType.EQUAL_EQUAL: _ParseRule(None, Compiler._binary, Precedence.EQUALITY),
    TokenType.GREATER: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.GREATER_EQUAL: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.LESS: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.LESS_EQUAL: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.STRING: _ParseRule(Compiler._string, None, Precedence.NONE),
    TokenType.NUMBER: _ParseRule(Compiler._number, None, Precedence.NONE),
    TokenType.FALSE: _ParseRule(Compiler._literal, None, Precedence.NONE),
    TokenType.NIL: _ParseRule(Compiler._literal, None, Precedence.NONE),
    TokenType.TRUE: _ParseRule(Compiler._literal, None, Precedence.NONE),
}


def _rule(kind: TokenType) -> _ParseRule:
    return _RULES.get(kind, _NO_RULE)


def compile_source(source: str, debug_out: Optional[TextIO] = None) -> Chunk:
    """Compile source to a chunk, writing its disassembly to debug_out if given."""
    chunk = Compiler(source).compile()
    if debug_out is not None:
        debug_out.write(disassemble_chunk(chunk, "code"))
    return chunk