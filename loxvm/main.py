"""Command-line entry point: a REPL or a script runner."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from .vm import VM, InterpretResult

_LINE_MAX = 1024

EXIT_USAGE = 64
EXIT_COMPILE_ERROR = 65
EXIT_RUNTIME_ERROR = 70
EXIT_IO_ERROR = 74


def repl(vm: VM, stdin: Optional[TextIO] = None) -> None:
    """Read lines and interpret each until end of input."""
    stream = sys.stdin if stdin is None else stdin
    while True:
        vm.out.write("> ")
        vm.out.flush()
        line = stream.readline(_LINE_MAX - 1)
        if not line:
            vm.out.write("\n")
            return
        vm.interpret(line)


def run_file(vm: VM, path: str) -> int:
    """Interpret the file at path and return the process exit status."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        vm.err.write(f'Could not open file "{path}".\n')
        return EXIT_IO_ERROR

    result = vm.interpret(data.decode("utf-8", errors="replace"))
    if result is InterpretResult.COMPILE_ERROR:
        return EXIT_COMPILE_ERROR
    if result is InterpretResult.RUNTIME_ERROR:
        return EXIT_RUNTIME_ERROR
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a REPL with no arguments or a script with one; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    vm = VM()
    if not args:
        repl(vm)
        return 0
    if len(args) == 1:
        return run_file(vm, args[0])
    sys.stderr.write("Usage: loxvm [path]\n")
    return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())