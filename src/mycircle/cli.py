from __future__ import annotations

import logging
from datetime import datetime

import typer
from rich.console import Console
from rich.table import Table

from mycircle.config import load_settings
from mycircle.db import init_db
from mycircle.errors import CRMError
from mycircle.services import Services, build_services

app = typer.Typer(help="MyCircle — keep in touch with the people who matter")
console = Console()

_STATUS_STYLE = {"green": "green", "yellow": "yellow", "red": "red"}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s: %(name)s: %(message)s",
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _services() -> Services:
    settings = load_settings()
    init_db(settings.db_path)
    return build_services(settings.db_path)


def _fmt_date(ts: int | None) -> str:
    if ts is None:
        return "—"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")) -> None:
    _configure_logging("DEBUG" if verbose else load_settings().log_level)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
) -> None:
    """Start the MyCircle API server."""
    import uvicorn

    uvicorn.run("mycircle.web:create_app", host=host, port=port, reload=reload, factory=True)


@app.command()
def init() -> None:
    """Create the database and seed the default tags."""
    settings = load_settings()
    init_db(settings.db_path)
    console.print("[green]Database ready.[/green]")


@app.command()
def recommend(
    limit: int | None = typer.Option(None, min=1, help="Maximum number of suggestions"),
    exclude: list[int] = typer.Option([], help="Contact id to leave out (repeatable)"),
) -> None:
    """Suggest who to get in touch with next."""
    services = _services()
    if limit is None:
        limit = load_settings().recommendation_limit
    recs = services.recommendations.recommend(limit=limit, exclude_contact_ids=exclude)

    if not recs:
        console.print("[green]Nobody needs a nudge right now.[/green]")
        return

    table = Table(title="Who to contact next")
    table.add_column("Contact", style="cyan")
    table.add_column("Health")
    table.add_column("Source", style="magenta")
    table.add_column("Why", style="white")
    for r in recs:
        style = _STATUS_STYLE[r.health_status]
        table.add_row(
            f"{r.contact.name} (#{r.contact_id})",
            f"[{style}]{r.health_status}[/{style}]",
            "reminder" if r.is_reminder else "health",
            r.reason,
        )
    console.print(table)


@app.command()
def health(contact_id: int = typer.Argument(..., help="Contact id")) -> None:
    """Show the relationship health of one contact."""
    services = _services()
    try:
        score = services.health.health(contact_id)
    except CRMError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1)

    style = _STATUS_STYLE[score.status]
    console.print(
        f"Contact #{contact_id}: [{style}]{score.status}[/{style}] "
        f"(score {score.score:.3f}, last contact {_fmt_date(score.last_interaction_timestamp)}, "
        f"expected every {score.expected_interval_days} days)"
    )


@app.command()
def remind() -> None:
    """Show pending reminders that are due."""
    services = _services()
    reminders = services.reminders.overdue_reminders()

    if not reminders:
        console.print("[green]All clear! No reminders due.[/green]")
        return

    table = Table(title="Reminders due")
    table.add_column("Contact", style="cyan")
    table.add_column("Note", style="white")
    table.add_column("Due Date", style="yellow")
    for r in reminders:
        contact = services.contacts.get_contact(r.contact_id)
        name = contact.name if contact else f"#{r.contact_id}"
        table.add_row(name, r.note or "—", _fmt_date(r.due_date))
    console.print(table)


@app.command()
def log(
    contact_id: int = typer.Argument(..., help="Contact id"),
    type: str = typer.Argument(..., help="text, call or hangout"),
    notes: str | None = typer.Option(None, help="Optional notes"),
) -> None:
    """Log an interaction that happened just now."""
    services = _services()
    try:
        interaction = services.interactions.log_interaction(
            contact_id, type, services.interactions.clock(), notes
        )
    except CRMError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Logged {interaction.type} with contact #{contact_id}.[/green]")


@app.command()
def snooze(
    contact_id: int = typer.Argument(..., help="Contact id"),
    days: int = typer.Argument(..., help="Number of days"),
) -> None:
    """Hide a contact from suggestions for a while."""
    services = _services()
    try:
        result = services.snoozes.snooze(contact_id, days)
    except CRMError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1)
    console.print(f"Snoozed contact #{contact_id} until {_fmt_date(result.snoozed_until)}.")
