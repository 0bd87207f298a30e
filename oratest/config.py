from __future__ import annotations
import copy
import os
import pathlib
import typing as t
import yaml

try:
    import tomllib as _toml
except ModuleNotFoundError:
    import tomli as _toml

from oratest.constants import CONFIG_ENV_VAR, DEFAULT_DATABASES, DEFAULT_DRIVER

_KNOWN_KEYS = {"dsn", "username", "password", "fixture"}


class ConfigurationError(RuntimeError):
    """Raised for any user‑visible configuration or fixture‑format problem."""


class DatabaseConfig:
    """
    A thin value‑object holding what the harness needs to open one test
    database and reset it.  Nothing here talks to the database.
    """

    def __init__(self, driver: str, d: dict[str, t.Any]) -> None:
        self.driver: str = driver
        try:
            self.dsn: str = d["dsn"]
        except KeyError as exc:
            raise ConfigurationError(f"Database {driver!r} has no `dsn` configured") from exc
        self.username: str | None = d.get("username")

        # Allow `${ENV_VAR}` syntax for secrets
        raw_pwd = d.get("password")
        if raw_pwd is None:
            self.password: str | None = None
        else:
            raw_pwd = str(raw_pwd)
            if raw_pwd.startswith("${") and raw_pwd.endswith("}"):
                var = raw_pwd[2:-1]
                self.password = os.getenv(var)
                if self.password is None:
                    raise ConfigurationError(
                        f"Password for {driver!r} refers to ${{{var}}}, which is not set"
                    )
            else:
                self.password = raw_pwd

        # Fixture is kept unresolved; it may still carry an @alias prefix
        self.fixture: str | None = d.get("fixture")

        # Anything else is handed to the driver's connect() untouched
        self.options: dict[str, t.Any] = {
            k: v for k, v in d.items() if k not in _KNOWN_KEYS
        }

    def masked(self) -> dict[str, t.Any]:
        """Return the settings with the password hidden, for display."""
        return {
            "driver": self.driver,
            "dsn": self.dsn,
            "username": self.username,
            "password": "***" if self.password else None,
            "fixture": self.fixture,
            **self.options,
        }

    def __repr__(self) -> str:
        return f"DatabaseConfig(driver={self.driver!r}, dsn={self.dsn!r})"


def _read_file(cfg_file: pathlib.Path) -> dict[str, t.Any]:
    try:
        if cfg_file.suffix.lower() == ".toml":
            with cfg_file.open("rb") as fh:
                raw = _toml.load(fh)
        else:
            with cfg_file.open(encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
    except (yaml.YAMLError, _toml.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Cannot parse {cfg_file}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file {cfg_file} must contain a mapping, got {type(raw).__name__}"
        )
    return raw


def load(path: pathlib.Path | str | None = None, driver: str | None = None) -> DatabaseConfig:
    """
    Parse *path* (or ``$ORATEST_CONFIG``, or the built‑in defaults) and return
    the :class:`DatabaseConfig` for *driver*.
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None

    if path is None:
        raw: dict[str, t.Any] = {
            "default_driver": DEFAULT_DRIVER,
            "databases": copy.deepcopy(DEFAULT_DATABASES),
        }
    else:
        cfg_file = pathlib.Path(path)
        if not cfg_file.exists():
            raise ConfigurationError(f"Config file {cfg_file} not found.")
        raw = _read_file(cfg_file)

    driver_name = driver or raw.get("default_driver") or DEFAULT_DRIVER

    try:
        return DatabaseConfig(driver_name, raw["databases"][driver_name])
    except (KeyError, TypeError) as exc:
        raise ConfigurationError(f"Database {driver_name!r} not found in config") from exc
