"""Password check CLI command."""

import typer
from rich.table import Table

from authguard.modules.policy import StrengthLabel

from .shared import app, console, load_breach_config, load_settings

STRENGTH_STYLES = {
    StrengthLabel.VERY_WEAK: "red",
    StrengthLabel.WEAK: "yellow",
    StrengthLabel.MEDIUM: "yellow",
    StrengthLabel.STRONG: "green",
}


@app.command()
def check(
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password to check"
    ),
    organization: str | None = typer.Option(None, "--org", help="Organization policy to apply"),
    identity: str | None = typer.Option(None, "--identity", help="Account the password is for"),
    breach: bool = typer.Option(True, "--breach/--no-breach", help="Query the breach corpus"),
) -> None:
    """Check a password against the policy and, optionally, known breaches."""
    from authguard.modules.breach import BreachLookupClient
    from authguard.modules.guard import PasswordGuard
    from authguard.utils.async_utils import safe_async_run

    settings = load_settings(organization)
    api_url, timeout = load_breach_config()
    client = BreachLookupClient(
        api_url=api_url,
        timeout=timeout,
        enabled=breach and settings.leaked_password_check_enabled,
    )
    guard = PasswordGuard(settings, breach_client=client)
    verdict = safe_async_run(guard.check(password, identity=identity))

    style = STRENGTH_STYLES[verdict.strength]
    table = Table(show_header=False, box=None)
    table.add_row("Strength", f"[{style}]{verdict.strength.display_name}[/{style}]")
    table.add_row("Score", f"{verdict.score}/100")
    looked_up = verdict.leaked or (not verdict.issues and client.should_check(password))
    if looked_up:
        leaked = "[red]found in breaches[/red]" if verdict.leaked else "[green]not found[/green]"
        table.add_row("Breach check", leaked)
    console.print(table)

    if verdict.valid:
        console.print("[green]Password meets all security requirements.[/green]")
        return

    console.print("[red]Issues to fix:[/red]")
    for issue in verdict.issues:
        console.print(f"  - {issue}")
    raise typer.Exit(1)
