"""Runtime values: nil is None, booleans are bool, numbers are float, strings are str."""

from __future__ import annotations

from typing import Union

Value = Union[None, bool, float, str]


def is_number(value: object) -> bool:
    """True if the value is a Lox number."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _kind(value: object) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    raise TypeError(f"not a Lox value: {value!r}")


def format_value(value: Value) -> str:
    """Render a value the way the interpreter prints it."""
    kind = _kind(value)
    if kind == "nil":
        return "nil"
    if kind == "bool":
        return "true" if value else "false"
    if kind == "number":
        return "%g" % value
    return value  # type: ignore[return-value]


def values_equal(a: Value, b: Value) -> bool:
    """Lox equality: values of different types are never equal."""
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind == "nil":
        return True
    return a == b


def is_falsey(value: Value) -> bool:
    """Only nil and false are falsey."""
    return value is None or (isinstance(value, bool) and not value)