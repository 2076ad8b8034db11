"""
Command Line Interface for the Expense Ledger

Typer-based console interface. Each command loads the ledger from the
configured data file first; the interactive ``menu`` command offers the
classic numbered menu loop on top of the same service.

Business logic lives in ``expense_ledger.orchestrator`` and below; this
module only prompts, prints and maps failures to exit codes.
"""

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date
from decimal import Decimal
from pathlib import Path
from typing import Optional

import typer

from expense_ledger.audit import AuditLogger, configure_logging
from expense_ledger.codec import DecodeError
from expense_ledger.config import get_settings, validate_all_settings
from expense_ledger.models.transaction import (
    ImportResult,
    MonthlySummary,
    Transaction,
    TransactionKind,
    categories_for,
)
from expense_ledger.orchestrator import LedgerService, create_app_components
from expense_ledger.services.storage import NotFoundError, StorageError
from expense_ledger.validation import (
    category_choices,
    check_description,
    parse_amount,
    parse_kind,
    pick_category,
    resolve_entry_date,
)


@dataclass
class CliState:
    service: LedgerService
    currency: str


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Record income and expenses in a text file and summarize them by month.",
)


# ---- Formatting ---------------------------------------------------------------


def _money(amount: Decimal, currency: str) -> str:
    return f"{currency}{amount:.2f}"


def print_transactions(transactions: tuple[Transaction, ...], currency: str) -> None:
    if not transactions:
        typer.echo("No transactions found.")
        return

    typer.echo("\n===== ALL TRANSACTIONS =====")
    typer.echo(f"{'DATE':<15} {'TYPE':<15} {'CATEGORY':<15} {'AMOUNT':<12} {'DESCRIPTION':<30}")
    typer.echo("-" * 73)
    for tx in transactions:
        typer.echo(
            f"{tx.date.isoformat():<15} {tx.kind.value:<15} {tx.category:<15} "
            f"{_money(tx.amount, currency):<12} {tx.description:<30}"
        )


def print_summary(summary: MonthlySummary, currency: str) -> None:
    typer.echo(f"\n===== MONTHLY SUMMARY: {summary.period_label} =====")
    typer.echo(f"Total Income:  {_money(summary.total_income, currency)}")
    typer.echo(f"Total Expense: {_money(summary.total_expense, currency)}")
    typer.echo(f"Balance:       {_money(summary.balance, currency)}")

    typer.echo("\n----- Income Breakdown -----")
    for category, amount in summary.nonzero_income_breakdown().items():
        typer.echo(f"{category + ':':<15} {_money(amount, currency)}")

    typer.echo("\n----- Expense Breakdown -----")
    for category, amount in summary.nonzero_expense_breakdown().items():
        typer.echo(f"{category + ':':<15} {_money(amount, currency)}")


def print_import_result(result: ImportResult) -> None:
    for skipped in result.skipped_lines:
        typer.echo(f"Skipping line {skipped.line_number}: {skipped.message}")
    typer.echo(f"Successfully imported {result.imported_count} transactions.")


# ---- Prompting ----------------------------------------------------------------


def _prompt_choice(low: int, high: int, text: str = "Enter your choice") -> int:
    while True:
        choice = typer.prompt(f"{text} ({low}-{high})", type=int)
        if low <= choice <= high:
            return choice
        typer.echo(f"Please enter a valid choice ({low}-{high}).")


def _resolve_category(kind: TransactionKind, category: Optional[str]) -> str:
    if category is None:
        typer.echo("Choose a category:")
        for number, name in category_choices(kind):
            typer.echo(f"{number}. {name}")
        return pick_category(kind, _prompt_choice(1, len(categories_for(kind))))

    for name in categories_for(kind):
        if name.lower() == category.strip().lower():
            return name
    raise typer.BadParameter(
        f"{category!r} is not a {kind.value.lower()} category. "
        f"Choose from: {', '.join(categories_for(kind))}",
        param_hint="--category",
    )


def _resolve_amount(amount: Optional[str]) -> Decimal:
    text = amount
    while True:
        if text is None:
            text = typer.prompt("Enter amount")
        try:
            return parse_amount(text)
        except DecodeError as e:
            typer.echo(e.message)
            text = None


def _resolve_date(on_date: Optional[str]) -> date:
    if on_date is None:
        on_date = typer.prompt(
            "Enter date (yyyy-MM-dd) or press Enter for today",
            default="",
            show_default=False,
        )
    resolved, fell_back = resolve_entry_date(on_date)
    if fell_back:
        typer.echo("Invalid date format. Using today's date.")
    return resolved


def _add(
    state: CliState,
    kind: TransactionKind,
    category: Optional[str] = None,
    amount: Optional[str] = None,
    on_date: Optional[str] = None,
    description: Optional[str] = None,
) -> Transaction:
    typer.echo(f"\n===== Add {kind.value} =====")
    chosen_category = _resolve_category(kind, category)
    chosen_amount = _resolve_amount(amount)
    chosen_date = _resolve_date(on_date)
    if description is None:
        description = typer.prompt(
            "Enter description (optional)", default="", show_default=False
        )

    transaction = state.service.add_transaction(
        kind=kind,
        category=chosen_category,
        amount=chosen_amount,
        on_date=chosen_date,
        description=description,
    )
    typer.echo(f"{kind.value} added successfully!")
    return transaction


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


# ---- Commands -----------------------------------------------------------------


@app.callback()
def _root(
    ctx: typer.Context,
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        help="Ledger data file (defaults to LEDGER_DATA_FILE or expense_data.csv).",
        dir_okay=False,
    ),
) -> None:
    """Load settings and the ledger before any command runs."""
    audit_logger = AuditLogger()
    results = validate_all_settings()
    problems = [
        results[f"{section}_error"] for section in ("ledger", "app") if not results[section]
    ]
    if problems:
        audit_logger.log_error("ConfigurationError", "; ".join(problems))
        _fail(f"invalid configuration: {'; '.join(problems)}")

    settings = get_settings()
    configure_logging(settings.app.effective_log_level)

    service = create_app_components(settings, data_file=data_file, audit_logger=audit_logger)
    try:
        service.load_on_startup()
    except StorageError as e:
        _fail(f"could not load ledger: {e}")

    ctx.obj = CliState(service=service, currency=settings.ledger.currency_symbol)


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="income or expense"),
    category: Optional[str] = typer.Option(None, help="Category name from the fixed list."),
    amount: Optional[str] = typer.Option(None, help="Amount, e.g. 1250.50"),
    on_date: Optional[str] = typer.Option(
        None, "--date", help="Date as YYYY-MM-DD; empty or invalid means today."
    ),
    description: Optional[str] = typer.Option(None, help="Free-form note."),
) -> None:
    """Add an income or expense; prompts for anything not given."""
    try:
        parsed_kind = parse_kind(kind)
    except DecodeError as e:
        raise typer.BadParameter(e.message, param_hint="KIND") from e
    if description is not None:
        try:
            check_description(description)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--description") from e

    try:
        _add(ctx.obj, parsed_kind, category, amount, on_date, description)
    except StorageError as e:
        _fail(f"could not save ledger: {e}")


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """Show every transaction in the order it was recorded."""
    state: CliState = ctx.obj
    print_transactions(state.service.list_all(), state.currency)


@app.command("summary")
def summary_cmd(
    ctx: typer.Context,
    year: int = typer.Argument(..., min=MINYEAR, max=MAXYEAR, help="Year, e.g. 2025"),
    month: int = typer.Argument(..., min=1, max=12, help="Month 1-12"),
) -> None:
    """Totals and per-category breakdown for one month."""
    state: CliState = ctx.obj
    print_summary(state.service.monthly_summary(year, month), state.currency)


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File in TYPE,CATEGORY,AMOUNT,DATE,DESCRIPTION format"),
) -> None:
    """Import transactions from another file, skipping bad rows."""
    state: CliState = ctx.obj
    try:
        result = state.service.import_from_file(path)
    except NotFoundError:
        _fail("File not found.")
    except StorageError as e:
        _fail(f"could not import: {e}")
    else:
        print_import_result(result)


MENU = """
===== EXPENSE TRACKER =====
1. Add Income
2. Add Expense
3. View All Transactions
4. View Monthly Summary
5. Import Transactions from File
6. Exit"""


@app.command("menu")
def menu_cmd(ctx: typer.Context) -> None:
    """Interactive numbered menu."""
    state: CliState = ctx.obj
    typer.echo(f"Loaded {len(state.service.list_all())} transactions.")

    while True:
        typer.echo(MENU)
        choice = _prompt_choice(1, 6)

        try:
            if choice == 1:
                _add(state, TransactionKind.INCOME)
            elif choice == 2:
                _add(state, TransactionKind.EXPENSE)
            elif choice == 3:
                print_transactions(state.service.list_all(), state.currency)
            elif choice == 4:
                year = _prompt_choice(MINYEAR, MAXYEAR, "Enter year (e.g., 2025)")
                month = _prompt_choice(1, 12, "Enter month")
                print_summary(state.service.monthly_summary(year, month), state.currency)
            elif choice == 5:
                path = typer.prompt("Enter the path to the import file")
                try:
                    print_import_result(state.service.import_from_file(path))
                except NotFoundError:
                    typer.echo("File not found.")
            else:
                state.service.persist()
                typer.echo("Data saved successfully!")
                break
        except StorageError as e:
            _fail(str(e))

    typer.echo("Thank you for using the Expense Tracker!")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
