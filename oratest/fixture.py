"""
Fixture loading – resets a test database from one SQL dump.

The ``oci`` fixture format is a single file in four zones::

    <drop blocks, each terminated by -->
    /* STATEMENTS */
    <CREATE statements, separated by ;>
    /* TRIGGERS */
    <PL/SQL trigger blocks, each terminated by />
    /* TRIGGERS */
    <INSERT statements, separated by ;>

Every other driver uses a plain ``;``‑separated script.  Both formats are
split completely before the first statement runs, so a malformed fixture
never leaves the database half reset.
"""
from __future__ import annotations

import logging
import pathlib
import typing as t

from oratest.aliases import Aliases
from oratest.config import ConfigurationError
from oratest.constants import (
    DROP_DELIMITER,
    STATEMENT_DELIMITER,
    STATEMENTS_MARKER,
    TRIGGER_DELIMITER,
    TRIGGERS_MARKER,
)
from oratest.utils import split_sql

logger = logging.getLogger(__name__)


class Executor(t.Protocol):
    def execute(self, statement: str) -> None: ...


class FixtureStatements(t.NamedTuple):
    drops: list[str]
    statements: list[str]
    triggers: list[str]
    data: list[str]

    def all(self) -> list[str]:
        """Every statement in execution order: drops, creates, triggers, data."""
        return [*self.drops, *self.statements, *self.triggers, *self.data]

    def counts(self) -> dict[str, int]:
        return {zone: len(getattr(self, zone)) for zone in self._fields}


def _pieces(text: str, delimiter: str) -> list[str]:
    return [p.strip() for p in text.split(delimiter) if p.strip()]


def split_oci_fixture(text: str) -> FixtureStatements:
    """
    Split an ``oci`` fixture document into its four statement zones.

    Raises :class:`ConfigurationError` if either marker is missing.  A third
    ``/* TRIGGERS */`` is not special: it stays in the data zone, where it is
    just a comment in front of the following statement.
    """
    parts = text.split(STATEMENTS_MARKER, 1)
    if len(parts) < 2:
        raise ConfigurationError(f"Fixture has no {STATEMENTS_MARKER} marker")
    drops, creates = parts

    parts = creates.split(TRIGGERS_MARKER, 2)
    if len(parts) < 3:
        raise ConfigurationError(
            f"Fixture needs two {TRIGGERS_MARKER} markers after {STATEMENTS_MARKER}, "
            f"found {len(parts) - 1}"
        )
    statements, triggers, data = parts

    return FixtureStatements(
        drops=_pieces(drops, DROP_DELIMITER),
        statements=_pieces(statements, STATEMENT_DELIMITER),
        triggers=_pieces(triggers, TRIGGER_DELIMITER),
        data=_pieces(data, STATEMENT_DELIMITER),
    )


def split_plain_fixture(text: str) -> list[str]:
    return split_sql(text)


def fixture_statements(text: str, driver: str = "oci") -> list[str]:
    """Return the statements of *text* in the order they must be executed."""
    if driver == "oci":
        zones = split_oci_fixture(text)
        logger.info(
            "Fixture split: %(drops)d drops, %(statements)d statements, "
            "%(triggers)d triggers, %(data)d data",
            zones.counts(),
        )
        return zones.all()
    stmts = split_plain_fixture(text)
    logger.info("Fixture split: %d statements", len(stmts))
    return stmts


def run_statements(conn: Executor, statements: t.Iterable[str]) -> int:
    """
    Execute *statements* one after another.  The first failure propagates
    and nothing after it runs.  Returns the number of statements executed.
    """
    count = 0
    for stmt in statements:
        stmt = stmt.strip()
        if not stmt:
            continue
        conn.execute(stmt)
        count += 1
    return count


def load_fixture(conn: Executor, text: str, driver: str = "oci") -> int:
    """Split *text* completely, then execute it against *conn*."""
    stmts = fixture_statements(text, driver)
    count = run_statements(conn, stmts)
    logger.info("Fixture loaded: %d statements executed", count)
    return count


def read_fixture(path: str | pathlib.Path, aliases: Aliases | None = None) -> str:
    """Resolve a (possibly ``@alias``‑prefixed) fixture path and read it."""
    resolved = pathlib.Path(aliases.get(str(path)) if aliases is not None else path)
    try:
        return resolved.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Fixture file {resolved} not found") from exc
