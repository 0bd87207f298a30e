from __future__ import annotations

import pytest

from oratest.aliases import Aliases
from oratest.config import ConfigurationError
from oratest.constants import PROJECT_ROOT


def test_nested_aliases_expand():
    aliases = Aliases({"@root": "/srv/app/", "@data": "@root/tests/data", "@runtime": "@data/runtime"})
    assert aliases.get("@data/oci.sql") == "/srv/app/tests/data/oci.sql"
    assert aliases.get("@runtime") == "/srv/app/tests/data/runtime"


def test_default_aliases_point_at_project():
    assert Aliases().get("@data/oci.sql") == f"{PROJECT_ROOT}/tests/data/oci.sql"


def test_plain_path_unchanged():
    assert Aliases().get("/tmp/x.sql") == "/tmp/x.sql"


def test_set_adds_missing_at_sign():
    aliases = Aliases({})
    aliases.set("fixtures", "/opt/fx")
    assert "@fixtures" in aliases
    assert aliases.get("@fixtures/a.sql") == "/opt/fx/a.sql"


def test_unknown_alias():
    with pytest.raises(ConfigurationError, match="@nope"):
        Aliases().get("@nope/file.sql")


def test_circular_alias():
    with pytest.raises(ConfigurationError, match="Circular"):
        Aliases({"@a": "@b/x", "@b": "@a/y"}).get("@a")
