"""Errors raised by the translation pipeline."""

from __future__ import annotations


class TranslationError(Exception):
    """User-facing failure with a 1-based source position."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class LexError(TranslationError):
    """No lexical rule matches at the current position."""

    def __init__(self, char: str, line: int, col: int, msg: str = ""):
        self.char: str = char
        if msg == "":
            msg = "unexpected character: " + repr(char)
        super().__init__(msg, line, col)


class ParseError(TranslationError):
    """A required token or production was not found."""


class GeneratorError(Exception):
    """The generator was handed a node outside the closed AST variant set.

    Parser-produced trees never trigger this; seeing it means a bug upstream.
    """

    def __init__(self, node_kind: str):
        self.node_kind: str = node_kind
        super().__init__("unhandled node type: " + node_kind)
