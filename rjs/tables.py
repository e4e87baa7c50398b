"""Alias tables: localized keywords, built-in names, transliteration."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


# Reserved words of the target language. Token kinds for keywords are the
# upper-cased spellings of these.
CANONICAL_KEYWORDS: frozenset[str] = frozenset(
    {
        "async",
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "default",
        "delete",
        "do",
        "else",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "from",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "let",
        "new",
        "null",
        "of",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "undefined",
        "var",
        "while",
        "yield",
    }
)

KEYWORD_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "если": "if",
        "иначе": "else",
        "для": "for",
        "пока": "while",
        "функция": "function",
        "вернуть": "return",
        "константа": "const",
        "переменная": "let",
        "истина": "true",
        "ложь": "false",
        "неопределено": "undefined",
        "нуль": "null",
        "новый": "new",
        "попробовать": "try",
        "поймать": "catch",
        "выбросить": "throw",
        "наконец": "finally",
        "класс": "class",
        "расширяет": "extends",
        "супер": "super",
        "этот": "this",
        "экспорт": "export",
        "импорт": "import",
        "из": "from",
        "по": "of",
        "в": "in",
        "экземпляр": "instanceof",
        "тип": "typeof",
        "удалить": "delete",
        "создать": "new",
        "выполнить": "do",
        "прервать": "break",
        "продолжить": "continue",
        "переключатель": "switch",
        "случай": "case",
        "по_умолчанию": "default",
        "статика": "static",
        "асинхронно": "async",
        "ожидать": "await",
        "вернуть_значение": "yield",
    }
)

# Identifiers, not keywords: the tokenizer leaves them alone and the
# generator swaps in the target name.
BUILTIN_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "консоль": "console",
        "лог": "log",
        "ошибка": "error",
        "предупреждение": "warn",
        "информация": "info",
    }
)

TRANSLITERATION: Mapping[str, str] = MappingProxyType(
    {
        "а": "a",
        "б": "b",
        "в": "v",
        "г": "g",
        "д": "d",
        "е": "e",
        "ё": "yo",
        "ж": "zh",
        "з": "z",
        "и": "i",
        "й": "y",
        "к": "k",
        "л": "l",
        "м": "m",
        "н": "n",
        "о": "o",
        "п": "p",
        "р": "r",
        "с": "s",
        "т": "t",
        "у": "u",
        "ф": "f",
        "х": "kh",
        "ц": "ts",
        "ч": "ch",
        "ш": "sh",
        "щ": "shch",
        "ъ": "",
        "ы": "y",
        "ь": "",
        "э": "e",
        "ю": "yu",
        "я": "ya",
        "А": "A",
        "Б": "B",
        "В": "V",
        "Г": "G",
        "Д": "D",
        "Е": "E",
        "Ё": "Yo",
        "Ж": "Zh",
        "З": "Z",
        "И": "I",
        "Й": "Y",
        "К": "K",
        "Л": "L",
        "М": "M",
        "Н": "N",
        "О": "O",
        "П": "P",
        "Р": "R",
        "С": "S",
        "Т": "T",
        "У": "U",
        "Ф": "F",
        "Х": "Kh",
        "Ц": "Ts",
        "Ч": "Ch",
        "Ш": "Sh",
        "Щ": "Shch",
        "Ъ": "",
        "Ы": "Y",
        "Ь": "",
        "Э": "E",
        "Ю": "Yu",
        "Я": "Ya",
    }
)


@dataclass(frozen=True)
class Dialect:
    """One localized dialect: the three alias tables, read-only."""

    name: str
    keyword_aliases: Mapping[str, str]
    builtin_aliases: Mapping[str, str]
    transliteration: Mapping[str, str]

    def keyword(self, word: str) -> str | None:
        """Canonical keyword for a localized or canonical spelling, else None."""
        folded = word.casefold()
        canonical = self.keyword_aliases.get(folded)
        if canonical is not None:
            return canonical
        if folded in CANONICAL_KEYWORDS:
            return folded
        return None

    def is_letter(self, c: str) -> bool:
        """True for characters of the localized alphabet."""
        return c in self.transliteration


RUSSIAN: Dialect = Dialect(
    name="russian",
    keyword_aliases=KEYWORD_ALIASES,
    builtin_aliases=BUILTIN_ALIASES,
    transliteration=TRANSLITERATION,
)
