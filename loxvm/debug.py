"""Human-readable disassembly of bytecode chunks."""

from __future__ import annotations

from .chunk import Chunk, OpCode
from .value import format_value


def disassemble_chunk(chunk: Chunk, name: str) -> str:
    """Return the listing of every instruction in the chunk under a header."""
    lines = [f"== {name} =="]
    offset = 0
    while offset < len(chunk):
        text, offset = disassemble_instruction(chunk, offset)
        lines.append(text)
    return "\n".join(lines) + "\n"


def disassemble_instruction(chunk: Chunk, offset: int) -> tuple[str, int]:
    """Describe the instruction at offset; return its text and the next offset."""
    prefix = f"{offset:04d} "
    if offset > 0 and chunk.lines[offset] == chunk.lines[offset - 1]:
        prefix += "    | "
    else:
        prefix += f"{chunk.lines[offset]:4d} "

    instruction = chunk.code[offset]
    try:
        op = OpCode(instruction)
    except ValueError:
        return f"{prefix}Unkown opcode {instruction}", offset + 1

    name = f"OP_{op.name}"
    if op is OpCode.CONSTANT:
        index = chunk.code[offset + 1]
        value = format_value(chunk.constants[index])
        return f"{prefix}{name:<16} {index:4d} '{value}'", offset + 2
    return prefix + name, offset + 1