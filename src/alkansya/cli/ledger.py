#!/usr/bin/env python3
"""
Ledger CLI - Savings Transaction Commands

Command-line front end for recording deposits, emptying the alkansya into the
vault, changing the goal, and moving history in and out as CSV.

Transactions are addressed by id; any unique prefix of an id (as shown by
`alkansya list`) is accepted.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from ..core.config import Config, get_config
from ..core.currency import format_percentage
from ..core.datastore import JsonFileStore
from ..core.errors import LedgerError
from ..core.models import Theme
from ..ledger.actions import LedgerActions, parse_amount
from ..ledger.manager import LedgerManager

ID_DISPLAY_LENGTH = 8


def _config(ctx: click.Context) -> Config:
    obj = ctx.obj or {}
    return obj.get("config") or get_config()


def _open_ledger(ctx: click.Context, assume_yes: bool = False) -> LedgerActions:
    """Load the ledger from the configured store and wrap it in LedgerActions."""
    config = _config(ctx)
    store = JsonFileStore(config.storage.data_dir)
    manager = LedgerManager.load(store, config.storage.state_key, config.default_goal)

    def confirm(question: str) -> bool:
        return assume_yes or click.confirm(question, default=False)

    return LedgerActions(
        manager,
        confirm=confirm,
        notify=lambda message: click.echo(f"✅ {message}"),
        currency_symbol=config.ledger.currency_symbol,
    )


@contextmanager
def ledger_errors() -> Iterator[None]:
    """Report ledger failures as CLI errors (exit code 1) instead of tracebacks."""
    try:
        yield
    except LedgerError as e:
        raise click.ClickException(str(e)) from e


def _resolve_id(manager: LedgerManager, id_or_prefix: str) -> str:
    """Expand a unique id prefix to the full transaction id."""
    transactions = manager.state.transactions
    if id_or_prefix in transactions:
        return id_or_prefix

    matches = [tid for tid in transactions if tid.startswith(id_or_prefix)]
    if len(matches) > 1:
        raise click.ClickException(f"Ambiguous transaction id {id_or_prefix!r} matches {len(matches)} transactions")
    # An unknown id is passed through so the ledger reports it as not found
    return matches[0] if matches else id_or_prefix


@click.command(name="list")
@click.option("--limit", type=int, help="Show only the newest N transactions")
@click.pass_context
def list_transactions(ctx: click.Context, limit: int | None) -> None:
    """
    List transactions, newest first, with balance and goal progress.

    Example:
      alkansya list --limit 10
    """
    actions = _open_ledger(ctx)
    symbol = _config(ctx).ledger.currency_symbol
    snapshot = actions.manager.snapshot()

    if not snapshot.transactions:
        click.echo("No transactions yet. Start saving!")
    else:
        shown = snapshot.transactions[:limit] if limit else snapshot.transactions
        for t in shown:
            details = f"{t.quantity} × {t.amount.format(symbol)}"
            if t.note:
                details += f" • {t.note}"
            click.echo(
                f"{t.id[:ID_DISPLAY_LENGTH]}  {t.date.to_display_string():>12}  "
                f"{t.total.format(symbol):>14}  {details}"
            )
        if len(shown) < len(snapshot.transactions):
            click.echo(f"... {len(snapshot.transactions) - len(shown)} more")

    click.echo(f"\n{'-' * 60}")
    click.echo(
        f"Balance: {snapshot.balance.format(symbol)}  "
        f"Goal: {snapshot.goal.format(symbol)} ({format_percentage(snapshot.progress)})  "
        f"Vault: {snapshot.vault_total.format(symbol)}"
    )


@click.command()
@click.argument("amount")
@click.option("--quantity", "-q", default="1", show_default=True, help="Number of units of AMOUNT")
@click.option("--note", "-n", default="", help="Optional note")
@click.option("--date", "date_str", help="Deposit date (YYYY-MM-DD, default: today)")
@click.pass_context
def add(ctx: click.Context, amount: str, quantity: str, note: str, date_str: str | None) -> None:
    """
    Record a deposit of QUANTITY units of AMOUNT each.

    Examples:
      alkansya add 50 --quantity 2 --note "lunch money"
      alkansya add 20 --date 2024-01-15
    """
    actions = _open_ledger(ctx)
    with ledger_errors():
        transaction = actions.add(amount, quantity, note, date_str)
    click.echo(f"   id: {transaction.id[:ID_DISPLAY_LENGTH]}")


@click.command(name="quick-add")
@click.argument("amount")
@click.pass_context
def quick_add(ctx: click.Context, amount: str) -> None:
    """
    Record one coin or bill of a configured denomination, dated today.

    Example:
      alkansya quick-add 20
    """
    config = _config(ctx)
    denominations = config.quick_add_amounts
    actions = _open_ledger(ctx)

    with ledger_errors():
        value = parse_amount(amount)
        if denominations and value not in denominations:
            choices = ", ".join(d.to_plain_str() for d in denominations)
            raise click.ClickException(f"{amount} is not a quick-add denomination. Choose one of: {choices}")
        actions.quick_add(amount)


@click.command()
@click.argument("transaction_id")
@click.option("--amount", help="New amount per unit")
@click.option("--quantity", "-q", help="New number of units")
@click.option("--note", "-n", help="New note")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD)")
@click.pass_context
def edit(
    ctx: click.Context,
    transaction_id: str,
    amount: str | None,
    quantity: str | None,
    note: str | None,
    date_str: str | None,
) -> None:
    """
    Change a transaction. Fields that aren't given keep their current value.

    Example:
      alkansya edit 3f2a9c1b --amount 100 --note "birthday money"
    """
    actions = _open_ledger(ctx)
    with ledger_errors():
        full_id = _resolve_id(actions.manager, transaction_id)
        current = actions.manager.get_transaction(full_id)
        actions.edit(
            full_id,
            amount if amount is not None else current.amount.to_fixed_str(),
            quantity if quantity is not None else str(current.quantity),
            note if note is not None else current.note,
            date_str if date_str is not None else current.date.to_iso_string(),
        )


@click.command()
@click.argument("transaction_id")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, transaction_id: str, assume_yes: bool) -> None:
    """
    Delete a transaction.

    Example:
      alkansya delete 3f2a9c1b
    """
    actions = _open_ledger(ctx, assume_yes)
    with ledger_errors():
        if not actions.delete(_resolve_id(actions.manager, transaction_id)):
            click.echo("Cancelled.")


@click.command()
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def empty(ctx: click.Context, assume_yes: bool) -> None:
    """
    Empty the alkansya: move the whole balance into the vault.

    All transactions are cleared.
    """
    actions = _open_ledger(ctx, assume_yes)
    with ledger_errors():
        moved = actions.empty()
    if moved is None:
        click.echo("Cancelled.")
        return
    symbol = _config(ctx).ledger.currency_symbol
    click.echo(f"   Vault total: {actions.manager.state.vault_total.format(symbol)}")


@click.command()
@click.argument("amount", required=False)
@click.pass_context
def goal(ctx: click.Context, amount: str | None) -> None:
    """
    Show the savings goal, or set it to AMOUNT.

    Examples:
      alkansya goal
      alkansya goal 25000
    """
    actions = _open_ledger(ctx)
    symbol = _config(ctx).ledger.currency_symbol

    if amount is not None:
        with ledger_errors():
            actions.set_goal(amount)

    manager = actions.manager
    click.echo(f"Goal: {manager.state.goal.format(symbol)} ({format_percentage(manager.progress_percentage())})")


@click.command()
@click.argument("choice", required=False, type=click.Choice([t.value for t in Theme]))
@click.pass_context
def theme(ctx: click.Context, choice: str | None) -> None:
    """
    Toggle the display theme, or set it to light or dark.

    The theme has no effect on balances.
    """
    actions = _open_ledger(ctx)
    with ledger_errors():
        if choice is None:
            new_theme = actions.toggle_theme()
        else:
            new_theme = Theme(choice)
            actions.manager.set_theme(new_theme)
    click.echo(f"Theme: {new_theme.value}")


@click.command()
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for the CSV file")
@click.pass_context
def export(ctx: click.Context, output_dir: Path | None) -> None:
    """
    Export transactions, vault total and goal to alkansya-<date>.csv.

    Example:
      alkansya export --output-dir ~/Documents
    """
    config = _config(ctx)
    directory = output_dir or config.storage.export_dir or Path.cwd()
    actions = _open_ledger(ctx)

    with ledger_errors():
        path = actions.export_csv(directory)
    click.echo(f"   File: {path}")


@click.command(name="import")
@click.argument("csv_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def import_csv(ctx: click.Context, csv_file: Path, assume_yes: bool) -> None:
    """
    Replace ALL transactions with those in CSV_FILE.

    Vault total and goal are also taken from the file when present. Export
    first if you want to keep the current transactions.
    """
    actions = _open_ledger(ctx, assume_yes)
    with ledger_errors():
        count = actions.import_csv(csv_file)
    if count is None:
        click.echo("Cancelled.")
