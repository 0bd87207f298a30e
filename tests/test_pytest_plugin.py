from __future__ import annotations

from importlib.metadata import entry_points

import pytest

pytestmark = pytest.mark.skipif(
    not any(ep.name == "oratest" for ep in entry_points(group="pytest11")),
    reason="oratest is not installed as a pytest plugin",
)

UNREACHABLE = """
databases:
  oci:
    dsn: "oci:dbname=127.0.0.1:1/NOPE"
    username: system
    password: oracle
    fixture: null
    tcp_connect_timeout: 2
"""


def test_context_fixture_uses_config_file(pytester):
    pytester.makefile(".yml", oratest=UNREACHABLE)
    pytester.makepyfile(
        """
        def test_ctx(oratest_context):
            assert oratest_context.config.dsn == "oci:dbname=127.0.0.1:1/NOPE"
            assert not oratest_context.get_connection().is_active
        """
    )
    result = pytester.runpytest("--oratest-config", "oratest.yml")
    result.assert_outcomes(passed=1)


def test_unreachable_database_skips(pytester):
    pytester.makefile(".yml", oratest=UNREACHABLE)
    pytester.makepyfile(
        """
        def test_db(oratest_db):
            raise AssertionError("should have been skipped")
        """
    )
    result = pytester.runpytest("--oratest-config", "oratest.yml", "-rs")
    result.assert_outcomes(skipped=1)
    result.stdout.fnmatch_lines(["*Something wrong when preparing database*"])


def test_oracle_marker_registered(pytester):
    result = pytester.runpytest("--markers")
    result.stdout.fnmatch_lines(["@pytest.mark.oracle:*"])
