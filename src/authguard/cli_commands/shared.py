"""Shared CLI app objects."""

import typer
from rich.console import Console

app = typer.Typer(
    name="authguard",
    help="Password policy, breach lookup and login lockout tooling",
    no_args_is_help=True,
)
console = Console()


def load_settings(organization: str | None):
    """Resolve policy settings or exit with a readable error."""
    from authguard.config import get_policy_settings
    from authguard.errors import InvalidConfiguration

    try:
        return get_policy_settings(organization)
    except InvalidConfiguration as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(2)


def load_breach_config() -> tuple[str, float]:
    """Resolve the breach API URL and timeout or exit with a readable error."""
    from authguard.config import get_breach_api_url, get_breach_timeout
    from authguard.errors import InvalidConfiguration

    try:
        return get_breach_api_url(), get_breach_timeout()
    except InvalidConfiguration as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(2)
