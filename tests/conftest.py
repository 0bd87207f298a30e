from __future__ import annotations

import pathlib

import oracledb
import pytest

from oratest.driver import ExecutionError

DATA_DIR = pathlib.Path(__file__).parent / "data"


class RecordingConnection:
    """Stands in for a live connection; remembers every executed statement."""

    driver = "oci"

    def __init__(self, fail_on: str | None = None) -> None:
        self.executed: list[str] = []
        self.fail_on = fail_on

    def execute(self, statement: str) -> None:
        if self.fail_on is not None and self.fail_on in statement:
            raise ExecutionError(statement, f"rejected: {statement}")
        self.executed.append(statement)


@pytest.fixture()
def recorder() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture()
def oci_fixture_text() -> str:
    return (DATA_DIR / "oci.sql").read_text(encoding="utf-8")


class FakeCursor:
    def __init__(self, raw):
        self.raw = raw

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, statement):
        if "BROKEN" in statement:
            raise oracledb.DatabaseError("ORA-00900: invalid SQL statement")
        self.raw.executed.append(statement)


class FakeRaw:
    """A DB-API connection double for the driver layer."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.autocommit = False
        self.executed = []
        self.commits = 0
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def close(self):
        self.closed = True


@pytest.fixture()
def fake_oracle(monkeypatch) -> list[FakeRaw]:
    made = []

    def connect(**kwargs):
        raw = FakeRaw(**kwargs)
        made.append(raw)
        return raw

    monkeypatch.setattr(oracledb, "connect", connect)
    return made
