"""Tokenizer: lexes localized source into a flat token list."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import LexError
from .tables import CANONICAL_KEYWORDS, RUSSIAN, Dialect

logger = logging.getLogger(__name__)


# Token kind constants
TK_NUMBER = "NUMBER"
TK_STRING = "STRING"
TK_TEMPLATE = "TEMPLATE"
TK_IDENT = "IDENTIFIER"

TK_TRIPLE_EQUALS = "TRIPLE_EQUALS"
TK_BANG_DOUBLE_EQUALS = "BANG_DOUBLE_EQUALS"
TK_DOUBLE_EQUALS = "DOUBLE_EQUALS"
TK_BANG_EQUALS = "BANG_EQUALS"
TK_LESS_EQUALS = "LESS_EQUALS"
TK_GREATER_EQUALS = "GREATER_EQUALS"
TK_AND = "AND"
TK_OR = "OR"
TK_PLUS = "PLUS"
TK_MINUS = "MINUS"
TK_STAR = "STAR"
TK_SLASH = "SLASH"
TK_PERCENT = "PERCENT"
TK_LESS = "LESS"
TK_GREATER = "GREATER"
TK_EQUALS = "EQUALS"
TK_BANG = "BANG"
TK_COMMA = "COMMA"
TK_DOT = "DOT"
TK_COLON = "COLON"
TK_QUESTION = "QUESTION"
TK_LEFT_PAREN = "LEFT_PAREN"
TK_RIGHT_PAREN = "RIGHT_PAREN"
TK_LEFT_BRACE = "LEFT_BRACE"
TK_RIGHT_BRACE = "RIGHT_BRACE"
TK_LEFT_BRACKET = "LEFT_BRACKET"
TK_RIGHT_BRACKET = "RIGHT_BRACKET"
TK_SEMICOLON = "SEMICOLON"

# Operators in match order: every operator precedes its own prefixes.
OPERATORS: list[tuple[str, str]] = [
    ("===", TK_TRIPLE_EQUALS),
    ("!==", TK_BANG_DOUBLE_EQUALS),
    ("==", TK_DOUBLE_EQUALS),
    ("!=", TK_BANG_EQUALS),
    ("<=", TK_LESS_EQUALS),
    (">=", TK_GREATER_EQUALS),
    ("&&", TK_AND),
    ("||", TK_OR),
    ("+", TK_PLUS),
    ("-", TK_MINUS),
    ("*", TK_STAR),
    ("/", TK_SLASH),
    ("%", TK_PERCENT),
    ("<", TK_LESS),
    (">", TK_GREATER),
    ("=", TK_EQUALS),
    ("!", TK_BANG),
    (",", TK_COMMA),
    (".", TK_DOT),
    (":", TK_COLON),
    ("?", TK_QUESTION),
    ("(", TK_LEFT_PAREN),
    (")", TK_RIGHT_PAREN),
    ("{", TK_LEFT_BRACE),
    ("}", TK_RIGHT_BRACE),
    ("[", TK_LEFT_BRACKET),
    ("]", TK_RIGHT_BRACKET),
    (";", TK_SEMICOLON),
]


def keyword_kind(canonical: str) -> str:
    """Token kind for a canonical keyword spelling."""
    return canonical.upper()


TOKEN_KINDS: frozenset[str] = frozenset(
    [kind for _, kind in OPERATORS]
    + [TK_NUMBER, TK_STRING, TK_TEMPLATE, TK_IDENT]
    + [keyword_kind(kw) for kw in CANONICAL_KEYWORDS]
)


@dataclass(frozen=True)
class Token:
    """A token with kind, lexeme, and the position of its first character."""

    kind: str
    lexeme: str
    line: int
    column: int


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_ident_start(c: str, dialect: Dialect) -> bool:
    return (
        (c >= "a" and c <= "z")
        or (c >= "A" and c <= "Z")
        or c == "_"
        or c == "$"
        or dialect.is_letter(c)
    )


def _is_ident_part(c: str, dialect: Dialect) -> bool:
    return _is_ident_start(c, dialect) or _is_digit(c)


class _Scanner:
    """Cursor over the source that keeps line/column in step with position."""

    def __init__(self, source: str):
        self.src: str = source
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.src)

    def char(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx >= len(self.src):
            return ""
        return self.src[idx]

    def startswith(self, text: str) -> bool:
        return self.src.startswith(text, self.pos)

    def advance(self, n: int) -> None:
        end = self.pos + n
        while self.pos < end:
            if self.src[self.pos] == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
            self.pos += 1


def _skip_trivia(sc: _Scanner) -> None:
    """Skip whitespace and both comment forms."""
    while not sc.at_end():
        c = sc.char()
        if c.isspace():
            sc.advance(1)
            continue
        if sc.startswith("//"):
            end = sc.src.find("\n", sc.pos)
            if end == -1:
                end = len(sc.src)
            sc.advance(end - sc.pos)
            continue
        if sc.startswith("/*"):
            end = sc.src.find("*/", sc.pos + 2)
            if end == -1:
                raise LexError("/", sc.line, sc.col, "unterminated block comment")
            sc.advance(end + 2 - sc.pos)
            continue
        return


def _scan_number(sc: _Scanner) -> int:
    """Length of the numeric literal at the cursor: digits[.digits][e[+-]digits]."""
    n = 0
    while _is_digit(sc.char(n)):
        n += 1
    if sc.char(n) == "." and _is_digit(sc.char(n + 1)):
        n += 1
        while _is_digit(sc.char(n)):
            n += 1
    if sc.char(n) == "e" or sc.char(n) == "E":
        k = n + 1
        if sc.char(k) == "+" or sc.char(k) == "-":
            k += 1
        # 1e without exponent digits is a number followed by a name
        if _is_digit(sc.char(k)):
            n = k
            while _is_digit(sc.char(n)):
                n += 1
    return n


def _scan_string(sc: _Scanner) -> int:
    """Length of the quoted string at the cursor, quotes included."""
    quote = sc.char()
    n = 1
    while True:
        c = sc.char(n)
        if c == "" or c == "\n":
            raise LexError(quote, sc.line, sc.col, "unterminated string literal")
        if c == "\\":
            if sc.char(n + 1) == "" or sc.char(n + 1) == "\n":
                raise LexError(quote, sc.line, sc.col, "unterminated string literal")
            n += 2
            continue
        n += 1
        if c == quote:
            return n


def _scan_template(sc: _Scanner) -> int:
    """Length of the backtick literal at the cursor; may span lines."""
    end = sc.src.find("`", sc.pos + 1)
    if end == -1:
        raise LexError("`", sc.line, sc.col, "unterminated template literal")
    return end + 1 - sc.pos


def _scan_ident(sc: _Scanner, dialect: Dialect) -> int:
    n = 1
    while _is_ident_part(sc.char(n), dialect):
        n += 1
    return n


def tokenize(source: str, dialect: Dialect = RUSSIAN) -> list[Token]:
    """Tokenize localized source into a flat list of tokens."""
    tokens: list[Token] = []
    sc = _Scanner(source)

    while True:
        _skip_trivia(sc)
        if sc.at_end():
            break
        c = sc.char()
        line = sc.line
        col = sc.col

        # Operators and punctuation
        matched = False
        for op, kind in OPERATORS:
            if sc.startswith(op):
                tokens.append(Token(kind, op, line, col))
                sc.advance(len(op))
                matched = True
                break
        if matched:
            continue

        if _is_digit(c):
            n = _scan_number(sc)
            tokens.append(Token(TK_NUMBER, sc.src[sc.pos : sc.pos + n], line, col))
            sc.advance(n)
            continue

        if c == '"' or c == "'":
            n = _scan_string(sc)
            tokens.append(Token(TK_STRING, sc.src[sc.pos : sc.pos + n], line, col))
            sc.advance(n)
            continue

        if c == "`":
            n = _scan_template(sc)
            tokens.append(Token(TK_TEMPLATE, sc.src[sc.pos : sc.pos + n], line, col))
            sc.advance(n)
            continue

        if _is_ident_start(c, dialect):
            n = _scan_ident(sc, dialect)
            word = sc.src[sc.pos : sc.pos + n]
            canonical = dialect.keyword(word)
            if canonical is not None:
                tokens.append(Token(keyword_kind(canonical), canonical, line, col))
            else:
                tokens.append(Token(TK_IDENT, word, line, col))
            sc.advance(n)
            continue

        raise LexError(c, line, col)

    logger.debug("tokenized %d tokens", len(tokens))
    return tokens
