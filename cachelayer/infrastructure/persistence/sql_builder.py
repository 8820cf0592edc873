"""Literal SQL rendering for query templates with ``?`` placeholders.

Values are inlined verbatim (no quoting or escaping): pass trusted values
only, e.g. integers and identifiers already validated by the caller.
"""

import re
from typing import Any

from cachelayer.core.constants import SQL_FALSE_PREDICATE, SQL_PLACEHOLDER

_LIMIT_WORD_RE = re.compile(r"\bLIMIT\b", re.IGNORECASE)
# LIMIT followed only by its arguments: no parentheses or quotes up to the end.
_LIMIT_CLAUSE_RE = re.compile(r"LIMIT\s+[^()']*$", re.IGNORECASE)


def _literal(arg: Any) -> str:
    """Render one argument. None and empty sequences become a predicate matching nothing."""
    if arg is None:
        return SQL_FALSE_PREDICATE
    if isinstance(arg, (list, tuple, set, frozenset)):
        if not arg:
            return SQL_FALSE_PREDICATE
        return "(" + ",".join(str(item) for item in arg) + ")"
    return str(arg)


def generate_sql(sql: str, *args: Any) -> str:
    """Replace ``?`` placeholders left to right with literal args.

    Placeholders beyond the supplied args are left untouched; surplus args
    are ignored.

    Examples:
        >>> generate_sql("SELECT * FROM spu WHERE id in ?", ["1", "2"])
        'SELECT * FROM spu WHERE id in (1,2)'
    """
    parts = sql.split(SQL_PLACEHOLDER)
    rendered = [parts[0]]
    for index, part in enumerate(parts[1:]):
        rendered.append(_literal(args[index]) if index < len(args) else SQL_PLACEHOLDER)
        rendered.append(part)
    return "".join(rendered)


def generate_count_sql(sql: str, *args: Any) -> str:
    """Render sql and wrap it in a row count, dropping a trailing LIMIT clause."""
    rendered = _strip_trailing_limit(generate_sql(sql, *args))
    return f"SELECT COUNT(*) FROM ({rendered}) t"


def _strip_trailing_limit(sql: str) -> str:
    """Cut the last LIMIT keyword and its arguments when it ends the query."""
    matches = list(_LIMIT_WORD_RE.finditer(sql))
    if matches and _LIMIT_CLAUSE_RE.match(sql, matches[-1].start()):
        return sql[: matches[-1].start()]
    return sql

