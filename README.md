# loxvm

loxvm is a small interpreter for expressions in the Lox language. It compiles
source text to bytecode in one pass and then runs that bytecode on a
stack-based virtual machine.

Each program is a single expression. The value of that expression is printed.
The expressions it understands are:

- number literals (`1`, `3.25`), string literals (`"hi"`), `true`, `false` and `nil`
- arithmetic: `+`, `-`, `*` and unary `-`
- comparison and equality: `<`, `<=`, `>`, `>=`, `==`, `!=`
- logical not: `!`
- grouping with parentheses

Numbers are printed in the style of `%g` (`7`, `0.5`, `1e+20`). Only `nil` and
`false` count as false for `!`. Values of different types are never equal.

A `/` character starts a comment that runs to the end of the line, so division
cannot be written in source text, even though the virtual machine has a divide
instruction.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

Start an interactive prompt by running the command with no arguments:

```
loxvm
```

The prompt is `> `. Each line you type is compiled and run, and its value is
printed. Stop the prompt with end of input (Ctrl-D).

Run a file with:

```
loxvm path/to/program.lox
```

Giving more than one argument prints `Usage: loxvm [path]` and exits.

The command exits with these statuses:

| Status | Meaning                          |
|--------|----------------------------------|
| 0      | success                          |
| 64     | wrong command-line usage         |
| 65     | the source failed to compile     |
| 70     | a runtime error occurred         |
| 74     | the file could not be read       |

Compile errors are written to standard error as
`[line N] Error at 'x': message` (or `Error at end: message`). Runtime errors,
such as `Operands must be numbers.` or `Operand must be a number.`, are written
to standard error followed by `[line N] in script`.

## Using it from Python

```python
from loxvm.vm import VM, InterpretResult

vm = VM()
result = vm.interpret("(1 + 2) * 3 > 8")
assert result is InterpretResult.OK
```

`VM(out, err, trace)` takes the streams that results and errors are written to
(standard output and standard error by default). With `trace=True` it also
writes a disassembly of the compiled chunk and, before each instruction, the
contents of the stack and the instruction being run.

The building blocks can also be used one at a time:

- `loxvm.scanner.tokenize(source)` splits source text into `Token`s, ending
  with an `EOF` token; `Scanner(source)` yields them one at a time.
- `loxvm.compiler.compile_source(source, debug_out)` compiles source text into
  a `Chunk` of bytecode, writes its disassembly to `debug_out` when one is
  given, and raises `CompileError` (with every message in `messages`) if it
  does not compile.
- `loxvm.vm.VM.run(chunk)` executes a chunk, prints the value it returns and
  returns it, raising `LoxRuntimeError` on a runtime error.
- `loxvm.debug.disassemble_chunk(chunk, name)` returns a readable listing of a
  chunk's instructions; `disassemble_instruction(chunk, offset)` returns one
  instruction's text and the offset of the next.

## What it does not do

There are no statements, variables, functions, classes or control flow: the
keywords are recognised by the scanner, but the compiler accepts only a single
expression.