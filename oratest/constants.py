from __future__ import annotations

import pathlib

STATEMENTS_MARKER = "/* STATEMENTS */"
TRIGGERS_MARKER = "/* TRIGGERS */"

# Zone delimiters of the oci fixture format
DROP_DELIMITER = "--"
STATEMENT_DELIMITER = ";"
TRIGGER_DELIMITER = "/"

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent

DEFAULT_ALIASES = {
    "@root": str(PROJECT_ROOT),
    "@data": "@root/tests/data",
    "@runtime": "@data/runtime",
}

DEFAULT_DRIVER = "oci"

DEFAULT_DATABASES = {
    "oci": {
        "dsn": "oci:dbname=localhost/XE;charset=AL32UTF8;",
        "username": "system",
        "password": "oracle",
        "fixture": "@data/oci.sql",
    },
}

CONFIG_ENV_VAR = "ORATEST_CONFIG"
