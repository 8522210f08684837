#!/usr/bin/env python3
"""
Main CLI Entry Point for Alkansya

Provides the command-line interface for the savings tracker.
"""

import logging
import os

import click

from ..core.config import get_config
from ..core.currency import format_centavos, format_percentage
from ..core.datastore import JsonFileStore
from ..ledger.manager import LedgerManager


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Alkansya - Personal Savings Tracker

    Record deposits toward a savings goal, move the balance into your vault,
    and export or import your history as CSV.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["ALKANSYA_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("alkansya").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from alkansya import __author__, __version__

    click.echo(f"Alkansya v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    symbol = config_obj.ledger.currency_symbol

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  State Key: {config_obj.storage.state_key}")
    click.echo(f"  Default Goal: {format_centavos(config_obj.ledger.default_goal_cents, symbol)}")
    click.echo(f"  Quick-Add: {', '.join(m.format(symbol) for m in config_obj.quick_add_amounts)}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show balance, vault, goal progress and where state is saved."""
    config_obj = ctx.obj["config"]
    symbol = config_obj.ledger.currency_symbol
    store = JsonFileStore(config_obj.storage.data_dir)
    key = config_obj.storage.state_key
    snapshot = LedgerManager.load(store, key, config_obj.default_goal).snapshot()

    click.echo("Alkansya Status:")
    click.echo("=" * 40)
    click.echo(f"  Balance: {snapshot.balance.format(symbol)}")
    click.echo(f"  Vault: {snapshot.vault_total.format(symbol)}")
    click.echo(f"  Goal: {snapshot.goal.format(symbol)} ({format_percentage(snapshot.progress)})")
    click.echo(f"  Transactions: {len(snapshot.transactions)}")
    click.echo(f"  Theme: {snapshot.theme.value}")

    if not store.exists(key):
        click.echo("  Last Saved: never")
        return

    click.echo(f"  Last Saved: {store.last_modified(key):%Y-%m-%d %H:%M:%S}")
    if ctx.obj.get("verbose", False):
        click.echo(f"  State File: {store.path_for(key)} ({store.size_bytes(key)} bytes)")


# Import ledger commands
from .ledger import (  # noqa: E402
    add,
    delete,
    edit,
    empty,
    export,
    goal,
    import_csv,
    list_transactions,
    quick_add,
    theme,
)

for _command in (list_transactions, add, quick_add, edit, delete, empty, goal, theme, export, import_csv):
    main.add_command(_command)


if __name__ == "__main__":
    main()
