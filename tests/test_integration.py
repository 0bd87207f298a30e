"""
Runs the bundled fixture against a live Oracle instance.

Point ``ORATEST_CONFIG`` (or ``--oratest-config``) at a config file for your
database; with the built-in defaults the tests expect
``system/oracle@localhost/XE``.  They are skipped when the database cannot be
reached.
"""
from __future__ import annotations

from importlib.metadata import entry_points

import pytest

pytestmark = [
    pytest.mark.oracle,
    pytest.mark.skipif(
        not any(ep.name == "oratest" for ep in entry_points(group="pytest11")),
        reason="oratest is not installed as a pytest plugin",
    ),
]


def _scalar(conn, sql):
    with conn.raw.cursor() as cur:
        cur.execute(sql)
        return cur.fetchone()[0]


def test_customers_loaded(oratest_db, oratest_context):
    assert _scalar(oratest_db, oratest_context.replace_quotes("SELECT COUNT(*) FROM [[customer]]")) == 3


def test_trigger_assigns_ids(oratest_db, oratest_context):
    assert _scalar(oratest_db, oratest_context.replace_quotes("SELECT MAX([[id]]) FROM [[item]]")) == 3


def test_reset_is_repeatable(oratest_db, oratest_context):
    oratest_db.execute(oratest_context.replace_quotes("DELETE FROM [[order_item]]"))
    oratest_context.get_connection(reset=True)
    assert _scalar(oratest_db, oratest_context.replace_quotes("SELECT COUNT(*) FROM [[order_item]]")) == 3
