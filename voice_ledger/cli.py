"""Command-line interface for the voice ledger."""
import click
import json
import sys
from pathlib import Path
from dateutil import parser as date_parser
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .analytics import TransactionAnalyzer, PERIODS
from .config import settings, normalize_category
from .interpreter import TransactionInterpreter
from .models import ParsedTransaction, TransactionType
from .nlu import get_nlu_client, PROVIDERS
from .storage import LedgerStore, StorageError
from .utils import setup_logger, parse_amount, format_currency
from .validators import TransactionValidator

console = Console()
logger = setup_logger()

CONFIDENCE_STYLES = {'high': 'green', 'medium': 'yellow', 'low': 'red'}


def _build_interpreter(offline: bool, provider: str = None) -> TransactionInterpreter:
    client = None if offline else get_nlu_client(provider)
    return TransactionInterpreter(client=client, timeout=settings.NLU_TIMEOUT_SECONDS)


def _print_parsed(parsed: ParsedTransaction, transcript: str) -> None:
    style = CONFIDENCE_STYLES[parsed.confidence_level]
    type_style = 'green' if parsed.type == TransactionType.INCOME else 'red'

    console.print(f"[cyan]Voice input:[/cyan] \"{escape(transcript)}\"")
    console.print(f"  Type:        [{type_style}]{parsed.type.value}[/{type_style}]")
    console.print(f"  Amount:      {format_currency(parsed.amount)}")
    console.print(f"  Category:    {parsed.category}")
    console.print(f"  Description: {escape(parsed.description)}")
    console.print(f"  Confidence:  [{style}]{parsed.confidence * 100:.0f}%[/{style}] ({parsed.source})")


@click.group()
@click.version_option(version=__version__)
@click.option('--ledger', 'ledger_path', type=click.Path(dir_okay=False),
              help='Ledger JSON file (defaults to LEDGER_FILE setting)')
@click.pass_context
def cli(ctx, ledger_path):
    """Voice Ledger - turn spoken transaction descriptions into ledger entries."""
    ctx.ensure_object(dict)
    ctx.obj['store'] = LedgerStore(Path(ledger_path) if ledger_path else settings.LEDGER_FILE)


@cli.command()
@click.argument('transcript')
@click.option('--offline', is_flag=True, help='Skip the NLU service and use keyword heuristics')
@click.option('--provider', '-p', type=click.Choice(PROVIDERS), help='NLU provider (defaults to NLU_PROVIDER)')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
def interpret(transcript, offline, provider, as_json):
    """
    Interpret a transcript without saving it.

    TRANSCRIPT: Text of the spoken transaction, e.g. "beli kopi 25000"
    """
    interpreter = _build_interpreter(offline, provider)
    parsed = interpreter.interpret_sync(transcript)

    if as_json:
        click.echo(json.dumps(parsed.to_dict(), ensure_ascii=False))
        return

    _print_parsed(parsed, transcript)


@cli.command()
@click.argument('transcript')
@click.option('--offline', is_flag=True, help='Skip the NLU service and use keyword heuristics')
@click.option('--provider', '-p', type=click.Choice(PROVIDERS), help='NLU provider (defaults to NLU_PROVIDER)')
@click.option('--amount', '-a', help='Override the interpreted amount')
@click.option('--category', '-c', help='Override the interpreted category')
@click.option('--description', '-d', help='Override the interpreted description')
@click.option('--type', 'transaction_type', type=click.Choice(['income', 'expense']),
              help='Override the interpreted transaction type')
@click.option('--date', 'date_text', help='Transaction date (defaults to now)')
@click.option('--yes', '-y', is_flag=True, help='Save without asking for confirmation')
@click.pass_context
def add(ctx, transcript, offline, provider, amount, category, description, transaction_type, date_text, yes):
    """
    Interpret a transcript, review it and add it to the ledger.

    TRANSCRIPT: Text of the spoken transaction
    """
    store = ctx.obj['store']
    interpreter = _build_interpreter(offline, provider)
    parsed = interpreter.interpret_sync(transcript)

    # Manual corrections, as made on the confirmation screen
    if transaction_type:
        parsed.type = TransactionType.from_value(transaction_type)
        parsed.category = normalize_category(parsed.category, parsed.type)
    if amount is not None:
        parsed.amount = parse_amount(amount)
    if category is not None:
        parsed.category = normalize_category(category, parsed.type)
    if description is not None:
        parsed.description = description

    date = None
    if date_text:
        try:
            date = date_parser.parse(date_text)
        except (ValueError, OverflowError):
            console.print(f"[red]Error: Could not parse date: {date_text}[/red]")
            sys.exit(1)

    _print_parsed(parsed, transcript)

    result = TransactionValidator().validate(parsed)
    if not result.success:
        console.print("\n[red]✗ Transaction not saved[/red]")
        for error in result.errors:
            console.print(f"  ⚠ {error}")
        sys.exit(1)

    if not yes and not click.confirm("\nSave this transaction?", default=True):
        console.print("[yellow]Cancelled[/yellow]")
        return

    try:
        transaction = store.add_parsed(parsed, date=date)
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]")
        logger.exception("Could not save transaction")
        sys.exit(1)

    console.print(f"\n[green]✓ Saved transaction {transaction.id}[/green]")


@cli.command()
@click.option('--period', type=click.Choice(PERIODS), default='all', show_default=True)
@click.option('--category', '-c', help='Only show this category')
@click.pass_context
def history(ctx, period, category):
    """List ledger entries, newest first."""
    store = ctx.obj['store']

    try:
        transactions = store.by_category(category) if category else store.list_all()
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    transactions = TransactionAnalyzer(transactions).filter_by_period(period)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Description")
    table.add_column("ID", style="dim")

    for txn in transactions:
        sign_style = 'green' if txn.type == TransactionType.INCOME else 'red'
        table.add_row(
            txn.date.strftime('%Y-%m-%d %H:%M'),
            f"[{sign_style}]{txn.type.value}[/{sign_style}]",
            txn.category,
            format_currency(txn.amount),
            escape(txn.description),
            txn.id
        )

    console.print(table)


@cli.command()
@click.argument('transaction_id')
@click.pass_context
def delete(ctx, transaction_id):
    """Remove a ledger entry by ID."""
    store = ctx.obj['store']

    try:
        removed = store.remove(transaction_id)
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if removed:
        console.print(f"[green]✓ Deleted {transaction_id}[/green]")
    else:
        console.print(f"[yellow]No transaction with ID {transaction_id}[/yellow]")
        sys.exit(1)


@cli.command()
@click.option('--period', type=click.Choice(PERIODS), default='month', show_default=True)
@click.pass_context
def summary(ctx, period):
    """Show totals, category breakdown and monthly trend."""
    store = ctx.obj['store']

    try:
        transactions = store.list_all()
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    analyzer = TransactionAnalyzer(TransactionAnalyzer(transactions).filter_by_period(period))
    totals = analyzer.get_summary()

    console.print(f"\n[bold blue]Summary ({period})[/bold blue]\n")
    console.print(f"  Income:  [green]{format_currency(totals.total_income)}[/green]")
    console.print(f"  Expense: [red]{format_currency(totals.total_expense)}[/red]")
    balance_style = 'green' if totals.balance >= 0 else 'red'
    console.print(f"  Balance: [{balance_style}]{format_currency(totals.balance)}[/{balance_style}]")
    console.print(f"  Transactions: {totals.transaction_count}")

    for transaction_type in (TransactionType.INCOME, TransactionType.EXPENSE):
        breakdown = analyzer.category_breakdown(transaction_type)
        if not breakdown:
            continue

        table = Table(title=f"{transaction_type.value.title()} by category", header_style="bold magenta")
        table.add_column("Category", style="cyan")
        table.add_column("Amount", justify="right")
        table.add_column("Share", justify="right")
        for item in breakdown:
            table.add_row(item['category'], format_currency(item['amount']), f"{item['percentage']:.1f}%")
        console.print(table)

    trend = analyzer.monthly_trend()
    if trend:
        table = Table(title="Monthly trend", header_style="bold magenta")
        table.add_column("Month", style="cyan")
        table.add_column("Income", justify="right", style="green")
        table.add_column("Expense", justify="right", style="red")
        for row in trend:
            table.add_row(row['month'], format_currency(row['income']), format_currency(row['expense']))
        console.print(table)


@cli.command()
@click.pass_context
def check(ctx):
    """Verify configuration and dependencies."""
    console.print("\n[bold blue]System Check[/bold blue]\n")

    console.print("[cyan]Checking Python version...[/cyan]")
    version = sys.version_info
    if version >= (3, 10):
        console.print(f"  [green]✓[/green] Python {version.major}.{version.minor}.{version.micro}")
    else:
        console.print(f"  [red]✗[/red] Python {version.major}.{version.minor} (3.10+ required)")

    console.print("[cyan]Checking dependencies...[/cyan]")
    deps = [
        ("httpx", "httpx"),
        ("anthropic", "anthropic"),
        ("openai", "openai"),
        ("pandas", "pandas"),
    ]
    for name, import_name in deps:
        try:
            __import__(import_name)
            console.print(f"  [green]✓[/green] {name}")
        except ImportError:
            console.print(f"  [red]✗[/red] {name} (not installed)")

    console.print("[cyan]Checking API keys...[/cyan]")
    for key_name in ('GEMINI_API_KEY', 'ANTHROPIC_API_KEY', 'OPENAI_API_KEY'):
        if getattr(settings, key_name):
            console.print(f"  [green]✓[/green] {key_name} set")
        else:
            console.print(f"  [dim]-[/dim] {key_name} not set")

    console.print("[cyan]Checking NLU provider...[/cyan]")
    try:
        client = get_nlu_client()
    except (ValueError, ImportError) as e:
        console.print(f"  [red]✗[/red] {e}")
        client = None
    else:
        if client is None:
            console.print(f"  [yellow]![/yellow] {settings.NLU_PROVIDER}: offline mode (keyword heuristics only)")
        else:
            console.print(f"  [green]✓[/green] {settings.NLU_PROVIDER}: {client.name}")

    console.print("[cyan]Checking ledger...[/cyan]")
    store = ctx.obj['store']
    try:
        count = len(store.list_all())
        console.print(f"  [green]✓[/green] {store.path} ({count} transactions)")
    except StorageError as e:
        console.print(f"  [red]✗[/red] {e}")

    console.print("\n[green]System check complete[/green]\n")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        logger.exception("Unhandled exception")
        sys.exit(1)


if __name__ == '__main__':
    main()
