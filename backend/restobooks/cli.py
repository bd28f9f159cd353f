# Overview: Flask CLI command groups for bootstrap, inspection and reporting.

# backend/restobooks/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to restobooks (PowerShell: $env:FLASK_APP="restobooks").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask system seed-demo
#   Load a small set of sample items, movements, sales, expenses and petty cash.
#
# Reporting:
# - python -m flask reports pnl --start 2024-01-01 --end 2024-01-31
#   Profit & loss for an inclusive calendar window (either bound optional).
# - python -m flask inventory status
#   Current stock level per item; low-stock items are flagged.
#   Add --low to list only items below their threshold.
# - python -m flask petty-cash balance
#   Running petty cash balance.

import click
from datetime import timedelta
from flask.cli import with_appcontext

from .extensions import db
from .ledger.dates import CalendarDate
from .services import inventory_service, petty_cash_service, reporting_service, sales_service
from .time_utils import utcnow


def _money(cents: int) -> str:
    sign = "-" if cents < 0 else ""
    return f"{sign}{abs(cents) / 100:,.2f}"


def _day(iso: str | None) -> str:
    return CalendarDate.parse(iso).display() if iso else "-"


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Schema ready.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system seed-demo' for sample data.")


@system_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """Load sample records through the service layer (revisions are bumped)."""
    db.create_all()
    today = CalendarDate.today().to_date()
    now = utcnow()

    rice = inventory_service.create_item(patch={"name": "Basmati Rice", "unit": "kg", "low_stock_threshold": 10})
    oil = inventory_service.create_item(patch={"name": "Groundnut Oil", "unit": "litre", "low_stock_threshold": 5})
    inventory_service.create_item(patch={"name": "Paper Napkins", "unit": "pack", "low_stock_threshold": None})

    movements = [
        (rice["id"], "stockIn", 25, "Weekly delivery"),
        (rice["id"], "out", 18, "Kitchen issue"),
        (oil["id"], "stockIn", 12, "Weekly delivery"),
        (oil["id"], "adjustment", 4, "Shelf count"),
    ]
    for offset, (item_id, movement_type, quantity, notes) in enumerate(movements):
        inventory_service.record_movement(
            patch={"item_id": item_id, "movement_type": movement_type, "quantity": quantity, "notes": notes},
            occurred_at=now - timedelta(minutes=len(movements) - offset),
        )

    for days_ago, amount_cents in ((2, 184_500), (1, 152_000), (0, 97_250)):
        day = CalendarDate.from_date(today - timedelta(days=days_ago)).value
        sales_service.create_sale(patch={"date": day, "amount_cents": amount_cents, "notes": None})

    expenses = [
        ("rent", "fixed", 250_000, "bank"),
        ("foodCost", "variable", 64_300, "cash"),
        ("utilities", "fixed", 18_900, "bank"),
        ("supplies", "variable", 7_450, "creditCard"),
    ]
    for category, expense_type, amount_cents, payment_method in expenses:
        sales_service.create_expense(
            patch={
                "date": CalendarDate.from_date(today).value,
                "category": category,
                "expense_type": expense_type,
                "amount_cents": amount_cents,
                "payment_method": payment_method,
                "notes": None,
            }
        )

    for transaction_type, amount_cents, reason in (
        ("cashIn", 50_000, "Float top-up"),
        ("out", 12_000, "Vegetables from market"),
        ("cashIn", 3_000, "Change returned"),
    ):
        petty_cash_service.record_transaction(
            patch={"transaction_type": transaction_type, "amount_cents": amount_cents, "reason": reason}
        )

    click.echo("PASS Demo data loaded.")


@click.group('reports')
def reports_group():
    """Financial reports."""


@reports_group.command('pnl')
@click.option('--start', default=None, help='First calendar day (YYYY-MM-DD or YYYYMMDD)')
@click.option('--end', default=None, help='Last calendar day (YYYY-MM-DD or YYYYMMDD)')
@with_appcontext
def pnl_cli(start, end):
    """Print the profit & loss report."""
    try:
        report = reporting_service.profit_and_loss_report(start=start, end=end)
    except reporting_service.ReportError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Period:            {_day(report['start'])} .. {_day(report['end'])}")
    click.echo(f"Total sales:       {_money(report['total_sales_cents'])}")
    click.echo(f"Total expenses:    {_money(report['total_expenses_cents'])}")
    click.echo(f"  Fixed:           {_money(report['fixed_expenses_cents'])}")
    click.echo(f"  Variable:        {_money(report['variable_expenses_cents'])}")
    click.echo(f"Net profit/loss:   {_money(report['net_profit_loss_cents'])}")
    if report["category_breakdown"]:
        click.echo("By category:")
        for row in report["category_breakdown"]:
            click.echo(f"  {row['label']:<15}  {_money(row['total_cents'])}")


@click.group('inventory')
def inventory_group():
    """Inventory inspection."""


@inventory_group.command('status')
@click.option('--low', is_flag=True, help='Only items below their low-stock threshold')
@with_appcontext
def inventory_status_cli(low):
    """List stock levels; low-stock items are marked with LOW."""
    status = inventory_service.get_inventory_status(low_stock_only=low)
    if not status["items"]:
        click.echo("No low-stock items." if low else "No inventory items.")
        return
    for row in status["items"]:
        flag = "LOW" if row["is_low_stock"] else ""
        click.echo(f"{row['item_id']:>4}  {row['name']:<24} {row['level']:>10} {row['unit']:<8} {flag}")


@click.group('petty-cash')
def petty_cash_group():
    """Petty cash inspection."""


@petty_cash_group.command('balance')
@with_appcontext
def petty_cash_balance_cli():
    """Print the running petty cash balance."""
    balance = petty_cash_service.get_balance()
    click.echo(
        f"Balance: {_money(balance['balance_cents'])} "
        f"({balance['transaction_count']} transactions)"
    )


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(reports_group)
    app.cli.add_command(inventory_group)
    app.cli.add_command(petty_cash_group)
