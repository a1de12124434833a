"""
Florist Fulfillment CLI.

Command-line interface for common operations: database setup, a terminal
worklist, florist stats and development tokens.
"""

import sys
from datetime import date

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="florist-ops",
    help="Florist Fulfillment CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create tables and seed reference data and default labels."""
    from sqlalchemy.exc import SQLAlchemyError

    from florist_api.models import Base
    from florist_api.seed import seed
    from shared.infrastructure.db import engine, get_db_context

    console.print("[blue]Creating tables...[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
        with get_db_context() as db:
            seed(db)
        console.print("[green]✓ Database ready[/green]")
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Database setup failed: {e}[/red]")
        raise typer.Exit(1)


# =============================================================================
# Worklist Commands
# =============================================================================

@app.command()
def worklist(
    delivery_date: str = typer.Argument(None, help="Delivery date (YYYY-MM-DD), default today"),
    user: str = typer.Option("florist-1", "--user", "-u", help="Florist viewing the list"),
    store: list[str] = typer.Option([], "--store", "-s", help="Store id, repeatable"),
    status: str = typer.Option("ALL", "--status", help="ALL, PENDING, ASSIGNED or COMPLETED"),
    query: str = typer.Option(None, "--query", "-q", help="Search text"),
):
    """Show the ranked worklist for a delivery date."""
    from florist_api.core.dependencies import operating_today
    from florist_api.services.clock import utc_now
    from florist_api.services.domain import WorklistService
    from florist_api.services.ranking import WorklistFilters
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException

    try:
        day = date.fromisoformat(delivery_date) if delivery_date else operating_today(utc_now)
    except ValueError:
        console.print(f"[red]✗ Invalid date: {delivery_date}[/red]")
        raise typer.Exit(1)

    try:
        with get_db_context() as db:
            result = WorklistService(db).get_worklist(
                day,
                user,
                filters=WorklistFilters(status=status.upper(), store_ids=frozenset(store)),
                search_query=query,
            )
    except AppException as e:
        console.print(f"[red]✗ {e.detail}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Worklist {day.isoformat()} ({user})")
    table.add_column("Order", style="cyan")
    table.add_column("Store")
    table.add_column("Timeslot", style="yellow")
    table.add_column("Product")
    table.add_column("Difficulty")
    table.add_column("Type")
    table.add_column("Status", style="green")
    table.add_column("Florist")

    for order in result.orders:
        table.add_row(
            order.id,
            order.store_id,
            order.timeslot or "-",
            order.product_name,
            order.difficulty_label or "-",
            order.product_type_label or "-",
            order.status,
            order.assigned_florist_id or "-",
        )

    console.print(table)
    summary = result.summary
    console.print(
        f"Total {summary.total} | pending {summary.pending} | "
        f"assigned {summary.assigned} | completed {summary.completed}"
    )


# =============================================================================
# Analytics Commands
# =============================================================================

@app.command()
def stats(
    timeframe: str = typer.Option("week", "--timeframe", "-t", help="today, week or month"),
    store: list[str] = typer.Option([], "--store", "-s", help="Store id, repeatable"),
):
    """Show completed orders and average completion time per florist."""
    from florist_api.services.domain import AnalyticsService
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException

    try:
        with get_db_context() as db:
            service = AnalyticsService(db)
            window, florist_stats = service.florist_stats(timeframe, store or None)
    except AppException as e:
        console.print(f"[red]✗ {e.detail}[/red]")
        raise typer.Exit(1)

    table = Table(
        title=f"Florist stats: {window.timeframe} "
        f"({window.start:%Y-%m-%d %H:%M} to {window.end:%Y-%m-%d %H:%M} {service.timezone_name})"
    )
    table.add_column("Florist", style="cyan")
    table.add_column("Name")
    table.add_column("Completed", style="green", justify="right")
    table.add_column("Avg minutes", style="yellow", justify="right")

    for row in florist_stats:
        avg = "-" if row.average_completion_minutes is None else str(row.average_completion_minutes)
        table.add_row(row.florist_id, row.florist_name or "-", str(row.completed_count), avg)

    console.print(table)


# =============================================================================
# Auth Commands
# =============================================================================

@app.command()
def issue_token(
    user_id: str = typer.Argument(..., help="Subject (user id)"),
    role: str = typer.Option("FLORIST", "--role", "-r", help="ADMIN or FLORIST"),
    name: str = typer.Option(None, "--name", help="Display name claim"),
    ttl: int = typer.Option(None, "--ttl", help="Lifetime in seconds"),
):
    """Issue a signed bearer token for local testing."""
    from shared.config.constants import Roles
    from shared.security.auth import sign_jwt

    role = role.upper()
    if role not in Roles.ALL:
        console.print(f"[red]✗ Unknown role: {role}[/red]")
        raise typer.Exit(1)

    payload = {"sub": user_id, "roles": [role]}
    if name:
        payload["name"] = name
    console.print(sign_jwt(payload, ttl_seconds=ttl), soft_wrap=True)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Florist Fulfillment Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("CLI", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
