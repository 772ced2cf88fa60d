"""Audit log CLI command."""

import typer
from rich.table import Table

from .shared import app, console


@app.command()
def audit(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of events to show"),
    event_type: str | None = typer.Option(None, "--type", help="Only show this event type"),
    clear: bool = typer.Option(False, "--clear", help="Wipe all audit events"),
) -> None:
    """Show or manage the security audit log."""
    from authguard.modules.audit import AuditLogManager

    mgr = AuditLogManager()
    if clear:
        mgr.clear()
        console.print("[green]Audit log cleared.[/green]")
        return

    events = mgr.recent(limit=limit, event_type=event_type)
    if not events:
        console.print("[dim]No audit events recorded.[/dim]")
        return

    table = Table(title="Security events")
    table.add_column("When", no_wrap=True)
    table.add_column("Event", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Identity")
    table.add_column("Details")
    for event in events:
        table.add_row(
            event.created_at.strftime("%Y-%m-%d %H:%M:%S") if event.created_at else "",
            event.event_type,
            event.severity,
            event.identity or "",
            event.details or "",
        )
    console.print(table)
