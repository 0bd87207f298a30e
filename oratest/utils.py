"""
Generic helpers that are reused across sub‑modules.
"""
from __future__ import annotations
import sqlparse

_QUOTE_CHARS = {
    "oci": '"',
    "mysql": "`",
    "sqlite": "`",
}


def split_sql(sql: str) -> list[str]:
    """
    Split a string containing one or many SQL statements into individual
    statements **safely** (aware of literals, comments, delimiters, etc.).
    Trailing semicolons are removed.
    """
    stmts = []
    for s in sqlparse.split(sql):
        s = s.strip()
        if s.endswith(";"):
            s = s[:-1].rstrip()
        if s:
            stmts.append(s)
    return stmts


def replace_quotes(sql: str, driver: str) -> str:
    """Swap ``[[`` / ``]]`` placeholders for the quote character of *driver*."""
    quote = _QUOTE_CHARS.get(driver)
    if quote is None:
        return sql
    return sql.replace("[[", quote).replace("]]", quote)


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n")
