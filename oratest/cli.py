#!/usr/bin/env python3
"""
oratest – reset a test database from its SQL fixture.

• Inspect a fixture without a database:   oratest split tests/data/oci.sql
• Reset the configured test database:     oratest -c oratest.yml load-fixture
• Preview what would run:                 oratest load-fixture --dry-run
"""
from __future__ import annotations

import logging
import pathlib
import sys

import click
import yaml

from oratest import __version__
from oratest.aliases import Aliases
from oratest.config import ConfigurationError, DatabaseConfig, load
from oratest.driver import DatabaseConnectionError, ExecutionError, connection, parse_dsn
from oratest.fixture import (
    fixture_statements,
    load_fixture,
    read_fixture,
    split_oci_fixture,
    split_plain_fixture,
)


def _fail(exc: Exception) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _load_config(ctx, _param, value) -> DatabaseConfig:
    try:
        return load(ctx.obj["config_path"], value)
    except ConfigurationError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)


def _driver_opt(fn):
    return click.option(
        "-d", "--driver", "config", callback=_load_config, expose_value=True,
        help="database entry from the config file",
    )(fn)


@click.group()
@click.option(
    "-c", "--config", "config_path", type=click.Path(), help="database config YAML/TOML"
)
@click.option("-v", "--verbose", is_flag=True, help="log every statement")
@click.pass_context
def main(ctx, config_path, verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"config_path": pathlib.Path(config_path) if config_path else None}


@main.command()
def version():
    click.echo(__version__)


@main.command("show-config")
@_driver_opt
def show_config_cmd(config):
    click.echo(yaml.safe_dump(config.masked(), sort_keys=False).rstrip())


@main.command("split")
@click.argument("fixture", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "fmt", type=click.Choice(["oci", "plain"]), default="oci", show_default=True,
    help="fixture format: oci zones or a plain ;-separated script",
)
@click.option("--show", is_flag=True, help="print every statement")
def split_cmd(fixture, fmt, show):
    try:
        text = read_fixture(fixture)
        if fmt == "oci":
            zones = split_oci_fixture(text)
            for zone, count in zones.counts().items():
                click.echo(f"{zone:<11} {count}")
            stmts = zones.all()
        else:
            stmts = split_plain_fixture(text)
        click.echo(f"{'total':<11} {len(stmts)}")
    except ConfigurationError as exc:
        _fail(exc)

    if show:
        for stmt in stmts:
            click.echo(f"\n{stmt}")


@main.command("load-fixture")
@_driver_opt
@click.option("-f", "--fixture", help="fixture path (overrides the config, @aliases allowed)")
@click.option("--dry-run", is_flag=True)
def load_fixture_cmd(config, fixture, dry_run):
    fixture = fixture or config.fixture
    if fixture is None:
        _fail(ConfigurationError(f"No fixture configured for {config.driver!r}"))

    try:
        driver, _ = parse_dsn(config.dsn)
        text = read_fixture(fixture, Aliases())

        if dry_run:
            for stmt in fixture_statements(text, driver):
                click.echo(f"{stmt}\n")
            click.echo("-- DRY‑RUN complete (no changes executed)")
            return

        with connection(config) as conn:
            count = load_fixture(conn, text, driver)
    except (ConfigurationError, DatabaseConnectionError, ExecutionError) as exc:
        _fail(exc)

    click.echo(f"✅  Loaded {fixture}: {count} statements executed.")


if __name__ == "__main__":
    main()
