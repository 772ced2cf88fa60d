"""Lockout simulation CLI command."""

import typer

from .shared import app, console, load_settings


@app.command()
def lockout(
    identity: str = typer.Argument(..., help="Identity to simulate failures for"),
    failures: int = typer.Option(1, "--failures", "-f", min=1, help="Failed attempts to record"),
    organization: str | None = typer.Option(None, "--org", help="Organization policy to apply"),
    record: bool = typer.Option(False, "--audit", help="Write events to the audit log"),
) -> None:
    """Replay failed logins for an identity and show the resulting state."""
    from authguard.modules.lockout import LoginAttemptTracker
    from authguard.modules.monitor import SecurityMonitor

    settings = load_settings(organization)
    monitor = SecurityMonitor()
    if record:
        from authguard.modules.audit import AuditLogManager

        monitor.add_sink(AuditLogManager())

    tracker = LoginAttemptTracker(settings, monitor=monitor)
    for attempt in range(1, failures + 1):
        status = tracker.record_failure(identity)
        flags = []
        if status.captcha_required:
            flags.append("[yellow]captcha[/yellow]")
        if status.locked:
            flags.append(f"[red]locked {status.lockout_seconds_left}s[/red]")
        console.print(f"  attempt {attempt}: {status.state.value} {' '.join(flags)}".rstrip())

    console.print(
        f"[bold]{identity}[/bold]: max attempts {settings.max_login_attempts}, "
        f"captcha after {settings.captcha_threshold}, "
        f"lockout {settings.lockout_duration_minutes} min"
    )
