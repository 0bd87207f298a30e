from __future__ import annotations

import typing as t

from oratest.config import ConfigurationError
from oratest.constants import DEFAULT_ALIASES


class Aliases:
    """
    Maps ``@name`` prefixes to file‑system paths.  Values may themselves start
    with another alias (``@data -> @root/tests/data``); they are expanded
    lazily on lookup.
    """

    def __init__(self, mapping: t.Mapping[str, str] | None = None) -> None:
        self._aliases: dict[str, str] = {}
        for name, value in (DEFAULT_ALIASES if mapping is None else mapping).items():
            self.set(name, value)

    def set(self, name: str, value: str) -> None:
        if not name.startswith("@"):
            name = "@" + name
        self._aliases[name] = value.rstrip("/\\")

    def get(self, path: str) -> str:
        """Expand the leading alias of *path*; plain paths are returned as is."""
        if not path.startswith("@"):
            return path

        seen: set[str] = set()
        while path.startswith("@"):
            name, sep, rest = path.partition("/")
            if name not in self._aliases:
                raise ConfigurationError(f"Invalid path alias: {name}")
            if name in seen:
                raise ConfigurationError(f"Circular path alias: {name}")
            seen.add(name)
            path = self._aliases[name] + sep + rest
        return path

    def __contains__(self, name: str) -> bool:
        return name in self._aliases
