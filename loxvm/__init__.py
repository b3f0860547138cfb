"""A bytecode compiler and stack virtual machine for Lox expressions."""

__version__ = "0.1.0"