"""
pytest fixtures for tests that need the test database.

    def test_customers(oratest_db, oratest_context):
        ...

``oratest_db`` is a connection to a freshly reset database.  When the
database cannot be reached the test is skipped rather than failed.
"""
from __future__ import annotations

import typing as t

import pytest

from oratest.config import DatabaseConfig, load
from oratest.driver import Connection, DatabaseConnectionError
from oratest.testing import TestContext, setup_context, teardown_context


def pytest_addoption(parser):
    group = parser.getgroup("oratest")
    group.addoption(
        "--oratest-config",
        action="store",
        default=None,
        help="YAML/TOML file describing the test databases",
    )
    group.addoption(
        "--oratest-driver",
        action="store",
        default=None,
        help="database entry to use (default: the file's default_driver)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "oracle: test needs a live Oracle database")


@pytest.fixture(scope="session")
def oratest_config(request) -> DatabaseConfig:
    return load(
        request.config.getoption("--oratest-config"),
        request.config.getoption("--oratest-driver"),
    )


@pytest.fixture()
def oratest_context(oratest_config) -> t.Iterator[TestContext]:
    ctx = setup_context(oratest_config)
    yield ctx
    teardown_context(ctx)


@pytest.fixture()
def oratest_db(oratest_context) -> Connection:
    try:
        return oratest_context.get_connection(reset=True)
    except DatabaseConnectionError as exc:
        pytest.skip(f"Something wrong when preparing database: {exc}")
