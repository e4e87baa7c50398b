"""rjs: translate Russian-keyword JavaScript into standard JavaScript."""

from __future__ import annotations

import logging

from .ast import Program
from .emit import generate as generate
from .errors import (
    GeneratorError as GeneratorError,
    LexError as LexError,
    ParseError as ParseError,
    TranslationError as TranslationError,
)
from .parse import Parser as Parser, parse as parse
from .tables import RUSSIAN as RUSSIAN, Dialect as Dialect
from .tokens import Token as Token, tokenize as tokenize

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def translate(source: str, dialect: Dialect = RUSSIAN) -> str:
    """Translate localized source into JavaScript. Raises TranslationError."""
    tokens = tokenize(source, dialect)
    program: Program = parse(tokens, dialect)
    output = generate(program, dialect)
    logger.debug("translated %d chars into %d chars", len(source), len(output))
    return output


