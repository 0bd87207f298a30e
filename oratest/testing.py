"""
Per‑test context and assertion helpers.

A :class:`TestContext` bundles what one test needs (configuration, path
aliases, logger and a connection) and is created and destroyed explicitly
with :func:`setup_context` / :func:`teardown_context`.  There is no global
application object; every test gets its own context.
"""
from __future__ import annotations

import logging
import typing as t

from oratest.aliases import Aliases
from oratest.config import DatabaseConfig, load
from oratest.driver import Connection
from oratest.fixture import load_fixture, read_fixture
from oratest.utils import normalize_line_endings, replace_quotes

logger = logging.getLogger(__name__)


class TestContext:
    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        config: DatabaseConfig,
        aliases: Aliases,
        logger: logging.Logger,
    ) -> None:
        self.config = config
        self.aliases = aliases
        self.logger = logger
        self.connection: Connection | None = Connection(config)

    @property
    def driver(self) -> str:
        return self.connection.driver if self.connection else self.config.driver

    def get_connection(self, reset: bool = False) -> Connection:
        """
        Return the context connection.  With *reset* the connection is opened
        and the configured fixture is loaded first.
        """
        if self.connection is None:
            self.connection = Connection(self.config)
        if reset:
            prepare_database(self.connection, self.config.fixture, self.aliases)
        return self.connection

    def replace_quotes(self, sql: str) -> str:
        return replace_quotes(sql, self.driver)


def prepare_database(
    conn: Connection,
    fixture: str | None,
    aliases: Aliases | None = None,
) -> Connection:
    """Open *conn* and, when a fixture is configured, reset the database from it."""
    conn.open()
    if fixture is not None:
        text = read_fixture(fixture, aliases)
        logger.info("Resetting database from %s", fixture)
        load_fixture(conn, text, conn.driver)
    return conn


def setup_context(
    config: DatabaseConfig | None = None,
    aliases: Aliases | None = None,
    logger: logging.Logger | None = None,
) -> TestContext:
    return TestContext(
        config=config if config is not None else load(),
        aliases=aliases if aliases is not None else Aliases(),
        logger=logger if logger is not None else logging.getLogger("oratest.tests"),
    )


def teardown_context(ctx: TestContext) -> None:
    if ctx.connection is not None:
        ctx.connection.close()
        ctx.connection = None


# --------------------------------------------------------------------- #
# Assertions
# --------------------------------------------------------------------- #
def assert_equals_without_le(expected: str, actual: str, message: str = "") -> None:
    """Assert two strings are equal, ignoring ``\\r\\n`` vs ``\\n``."""
    expected = normalize_line_endings(expected)
    actual = normalize_line_endings(actual)
    assert expected == actual, message or f"{expected!r} != {actual!r}"


def assert_is_one_of(actual: t.Any, expected: t.Iterable[t.Any], message: str = "") -> None:
    expected = list(expected)
    assert actual in expected, message or f"{actual!r} is not one of {expected!r}"


# --------------------------------------------------------------------- #
# Private member access
# --------------------------------------------------------------------- #
def _member_name(obj: t.Any, name: str) -> str:
    """
    Find the attribute name that *name* refers to on *obj*: the name itself,
    or its ``__x`` mangled form for any class in the MRO.
    """
    if hasattr(obj, name):
        return name
    if name.startswith("__") and not name.endswith("__"):
        for cls in type(obj).__mro__:
            mangled = f"_{cls.__name__.lstrip('_')}{name}"
            if hasattr(obj, mangled):
                return mangled
    raise AttributeError(f"{type(obj).__name__!r} object has no member {name!r}")


def invoke_method(obj: t.Any, name: str, *args: t.Any, **kwargs: t.Any) -> t.Any:
    """Call a private (``_x`` or ``__x``) method of *obj*."""
    return getattr(obj, _member_name(obj, name))(*args, **kwargs)


def get_inaccessible_attr(obj: t.Any, name: str) -> t.Any:
    return getattr(obj, _member_name(obj, name))


def set_inaccessible_attr(obj: t.Any, name: str, value: t.Any) -> None:
    """
    Set a private attribute of *obj*.  The attribute must already exist
    somewhere on the object or its classes.
    """
    setattr(obj, _member_name(obj, name), value)
