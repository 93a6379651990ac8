"""Selection of the tables to document."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern

from schemadoc.errors import ConfigError, EmptySchemaError
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)

_DELIMITED = re.compile(r"^([/#~%!@|])(.*)\1([a-zA-Z]*)$", re.DOTALL)
_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def compile_ignore_regex(pattern: Optional[str]) -> Optional[Pattern[str]]:
    """Compile an ignore pattern.

    Accepts a bare Python regex (``^tmp_``) or a delimited pattern with
    trailing flags (``/^tmp_/i``).

    Raises:
        ConfigError: If the pattern does not compile or uses unknown flags
    """
    if not pattern:
        return None

    flags = 0
    source = pattern
    match = _DELIMITED.match(pattern)
    if match:
        source = match.group(2)
        for letter in match.group(3):
            if letter not in _FLAGS:
                raise ConfigError(
                    f"Unsupported flag '{letter}' in ignore regex {pattern!r}"
                )
            flags |= _FLAGS[letter]

    try:
        return re.compile(source, flags)
    except re.error as e:
        raise ConfigError(f"Invalid ignore regex {pattern!r}: {e}") from e


def build_table_registry(
    all_table_names: Iterable[str],
    ignore_list: Optional[Iterable[str]] = None,
    ignore_regex: Optional[str] = None,
) -> List[str]:
    """Filter the catalog's table list down to the tables to document.

    Args:
        all_table_names: Table names in catalog order
        ignore_list: Exact, case-sensitive names to drop
        ignore_regex: Names matching this pattern are dropped

    Returns:
        Admitted table names, catalog order, without duplicates

    Raises:
        EmptySchemaError: If nothing is left after filtering
    """
    names = list(dict.fromkeys(all_table_names))
    ignored = set(ignore_list or ())
    regex = compile_ignore_regex(ignore_regex)

    admitted = []
    for name in names:
        if name in ignored:
            logger.debug(f"Ignoring table {name} (ignore list)")
            continue
        if regex is not None and regex.search(name):
            logger.debug(f"Ignoring table {name} (matches {regex.pattern!r})")
            continue
        admitted.append(name)

    logger.info(f"Admitted {len(admitted)} of {len(names)} tables")

    if not admitted:
        raise EmptySchemaError("No tables to document after applying ignore rules")

    return admitted
