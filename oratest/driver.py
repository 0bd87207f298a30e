from __future__ import annotations
import logging
import typing as t
from contextlib import contextmanager

import mysql.connector
import oracledb

from oratest.config import ConfigurationError, DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseConnectionError(RuntimeError):
    """Opening or authenticating the test connection failed."""


class ExecutionError(RuntimeError):
    """A single statement was rejected by the database."""

    def __init__(self, statement: str, message: str) -> None:
        super().__init__(message)
        self.statement = statement


def parse_dsn(dsn: str) -> tuple[str, dict[str, str]]:
    """
    Split a PDO‑style DSN (``oci:dbname=localhost/XE;charset=AL32UTF8;``) into
    the driver name and its ``key=value`` parameters.
    """
    driver, sep, rest = dsn.partition(":")
    if not sep or not driver or "=" in driver:
        raise ConfigurationError(f"DSN {dsn!r} has no driver prefix")

    params: dict[str, str] = {}
    for part in rest.split(";"):
        part = part.strip()
        if not part:
            continue
        key, eq, value = part.partition("=")
        if not eq:
            raise ConfigurationError(f"Malformed DSN parameter {part!r} in {dsn!r}")
        params[key.strip()] = value.strip()
    return driver.strip().lower(), params


def _connect_oci(config: DatabaseConfig, params: dict[str, str]):
    try:
        target = params["dbname"]
    except KeyError as exc:
        raise ConfigurationError(f"oci DSN {config.dsn!r} needs a dbname") from exc
    conn = oracledb.connect(
        user=config.username,
        password=config.password,
        dsn=target,
        **config.options,
    )
    conn.autocommit = True
    return conn


def _connect_mysql(config: DatabaseConfig, params: dict[str, str]):
    kwargs: dict[str, t.Any] = {
        "host": params.get("host", "127.0.0.1"),
        "port": int(params.get("port", 3306)),
        "user": config.username,
        "password": config.password,
        "autocommit": True,
    }
    if "dbname" in params:
        kwargs["database"] = params["dbname"]
    if "charset" in params:
        kwargs["charset"] = params["charset"]
    kwargs.update(config.options)
    return mysql.connector.connect(**kwargs)


_CONNECTORS: dict[str, t.Callable[[DatabaseConfig, dict[str, str]], t.Any]] = {
    "oci": _connect_oci,
    "mysql": _connect_mysql,
}

_DRIVER_ERRORS = (oracledb.Error, mysql.connector.Error)


class Connection:
    """
    One test‑database connection.  Nothing is opened until :meth:`open`; the
    underlying DB‑API handle is available as :attr:`raw` while active.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config
        self.driver, self._params = parse_dsn(config.dsn)
        if self.driver not in _CONNECTORS:
            raise ConfigurationError(f"Unsupported driver {self.driver!r} in DSN {config.dsn!r}")
        self._raw = None

    @property
    def is_active(self) -> bool:
        return self._raw is not None

    @property
    def raw(self):
        if self._raw is None:
            raise DatabaseConnectionError("Connection is not open")
        return self._raw

    def open(self) -> None:
        if self._raw is not None:
            return
        logger.info("Opening %s connection to %s", self.driver, self.config.dsn)
        try:
            self._raw = _CONNECTORS[self.driver](self.config, self._params)
        except _DRIVER_ERRORS as err:
            logger.error("Failed to connect to %s: %s", self.config.dsn, err)
            raise DatabaseConnectionError(
                f"Could not connect to {self.config.dsn}: {err}"
            ) from err

    def close(self) -> None:
        if self._raw is None:
            return
        try:
            self._raw.close()
        finally:
            self._raw = None
            logger.info("Closed %s connection", self.driver)

    def commit(self) -> None:
        self.raw.commit()

    def execute(self, statement: str) -> None:
        """Execute one raw statement; no parameters, no result fetching."""
        if self._raw is None:
            raise ExecutionError(statement, "Cannot execute on a closed connection")
        logger.debug("Executing: %s", statement)
        try:
            with self._raw.cursor() as cur:
                cur.execute(statement)
        except _DRIVER_ERRORS as err:
            logger.error("Statement failed: %s", err)
            raise ExecutionError(statement, f"{err}\nThe SQL being executed was: {statement}") from err

    def __repr__(self) -> str:
        state = "open" if self.is_active else "closed"
        return f"<Connection {self.driver} {state}>"


@contextmanager
def connection(config: DatabaseConfig):
    """
    Context‑manager that yields an **opened** :class:`Connection`, commits
    when the block finishes cleanly and always closes it.
    """
    conn = Connection(config)
    conn.open()
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
