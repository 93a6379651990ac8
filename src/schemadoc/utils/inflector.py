"""English noun inflection used to match column names to table names.

The rules cover regular suffix patterns plus a table of irregular and
uncountable words. Both functions work on snake_case identifiers: only the
last word segment is inflected, so ``order_item`` pluralizes to
``order_items`` and ``sales_person`` to ``sales_people``. Irregular words
also match as the end of a compound, so ``salesman`` becomes ``salesmen``.

This is a heuristic. Words the rules do not know come out wrong, and callers
must treat the result as a guess.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

UNCOUNTABLE_WORDS = frozenset(
    {
        "data",
        "deer",
        "equipment",
        "fish",
        "information",
        "meta",
        "metadata",
        "money",
        "news",
        "rice",
        "series",
        "sheep",
        "species",
    }
)

# singular -> plural
IRREGULAR_WORDS: Dict[str, str] = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "move": "moves",
    "ox": "oxen",
    "person": "people",
    "sex": "sexes",
    "tooth": "teeth",
    "woman": "women",
    "zombie": "zombies",
}

_IRREGULAR_PLURALS: Dict[str, str] = {v: k for k, v in IRREGULAR_WORDS.items()}

_WHOLE_WORD_IRREGULARS = frozenset({"ox", "oxen"})

# First matching rule wins.
_PLURAL_RULES: List[Tuple[str, str]] = [
    (r"(quiz)$", r"\1zes"),
    (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
    (r"(x|ch|ss|sh|zz)$", r"\1es"),
    (r"([^aeiouy]|qu)y$", r"\1ies"),
    (r"(hive)$", r"\1s"),
    (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
    (r"sis$", "ses"),
    (r"([ti])um$", r"\1a"),
    (r"(buffal|her|potat|tomat)o$", r"\1oes"),
    (r"(bu|campu)s$", r"\1ses"),
    (r"(alias|status|virus)$", r"\1es"),
    (r"(octop)us$", r"\1i"),
    (r"(ax|cris|test)is$", r"\1es"),
    (r"s$", "s"),
    (r"$", "s"),
]

_SINGULAR_RULES: List[Tuple[str, str]] = [
    (r"(quiz)zes$", r"\1"),
    (r"(matr)ices$", r"\1ix"),
    (r"(vert|ind)ices$", r"\1ex"),
    (r"(alias|status|virus)(?:es)?$", r"\1"),
    (r"(octop)(?:us|i)$", r"\1us"),
    (r"(cris|ax|test)es$", r"\1is"),
    (r"(shoe)s$", r"\1"),
    (r"(bus|campus)(?:es)?$", r"\1"),
    (r"(o)es$", r"\1"),
    (r"(x|ch|ss|sh|zz)es$", r"\1"),
    (r"(m)ovies$", r"\1ovie"),
    (r"([^aeiouy]|qu)ies$", r"\1y"),
    (r"(tive|hive)s$", r"\1"),
    (r"([lr])ves$", r"\1f"),
    (r"([^f])ves$", r"\1fe"),
    (r"(analy|ba|diagno|parenthe|progno|synop|the)ses$", r"\1sis"),
    (r"([ti])a$", r"\1um"),
    (r"(ss|us|is)$", r"\1"),
    (r"s$", ""),
]

_COMPILED_PLURAL = [(re.compile(p, re.IGNORECASE), r) for p, r in _PLURAL_RULES]
_COMPILED_SINGULAR = [(re.compile(p, re.IGNORECASE), r) for p, r in _SINGULAR_RULES]


def _split_last_segment(word: str) -> Tuple[str, str]:
    """Split ``sales_person`` into ``("sales_", "person")``."""
    head, sep, tail = word.rpartition("_")
    return head + sep, tail


def _match_case(source: str, replacement: str) -> str:
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _irregular_suffix(lowered: str, words) -> Optional[str]:
    """Return the longest irregular word that ``lowered`` ends with.

    ``salesman`` matches ``man`` and ``grandchild`` matches ``child``.
    Words in ``_WHOLE_WORD_IRREGULARS`` only match the entire segment,
    so ``box`` is not treated as a compound of ``ox``.
    """
    for candidate in sorted(words, key=len, reverse=True):
        if lowered == candidate:
            return candidate
        if candidate not in _WHOLE_WORD_IRREGULARS and lowered.endswith(candidate):
            return candidate
    return None


def _inflect(word: str, irregular: Dict[str, str], target_forms, rules) -> str:
    if not word:
        return word

    prefix, last = _split_last_segment(word)
    if not last:
        return word

    lowered = last.lower()
    if lowered in UNCOUNTABLE_WORDS or _irregular_suffix(lowered, target_forms):
        return word

    match = _irregular_suffix(lowered, irregular)
    if match:
        stem, tail = last[: -len(match)], last[-len(match):]
        return prefix + stem + _match_case(tail, irregular[match])

    for pattern, replacement in rules:
        if pattern.search(last):
            return prefix + pattern.sub(replacement, last, count=1)

    return word


def pluralize(word: str) -> str:
    """Return the plural form of ``word``.

    Example:
        >>> pluralize("category")
        'categories'
        >>> pluralize("child")
        'children'
    """
    return _inflect(word, IRREGULAR_WORDS, _IRREGULAR_PLURALS, _COMPILED_PLURAL)


def singularize(word: str) -> str:
    """Return the singular form of ``word``.

    Example:
        >>> singularize("categories")
        'category'
        >>> singularize("people")
        'person'
    """
    return _inflect(word, _IRREGULAR_PLURALS, IRREGULAR_WORDS, _COMPILED_SINGULAR)
