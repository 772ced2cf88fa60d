"""Configuration CLI command."""

import typer

from .shared import app, console, load_breach_config, load_settings


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, init"),
    organization: str | None = typer.Option(None, "--org", help="Organization to resolve"),
    project: bool = typer.Option(
        False, "--project", help="Create a project .env template in the current directory"
    ),
) -> None:
    """Show the effective policy or create configuration files."""
    from pathlib import Path

    from authguard.config import create_global_config, create_project_config_template

    if action == "init":
        if project:
            env_path = create_project_config_template(Path.cwd())
            console.print(f"[green]Created project config:[/green] {env_path}")
            return
        config_path = create_global_config()
        console.print(f"[green]Created global config:[/green] {config_path}")
        return

    if action == "show":
        settings = load_settings(organization)
        api_url, timeout = load_breach_config()
        scope = f"organization {organization}" if organization else "default policy"
        console.print(f"[bold]Effective configuration ({scope}):[/bold]")
        for key, value in settings.to_dict().items():
            console.print(f"  {key}={value}")
        console.print(f"  breach_api_url={api_url}")
        console.print(f"  breach_timeout={timeout}")
        return

    console.print(f"[red]Unknown action: {action}. Use 'show' or 'init'.[/red]")
    raise typer.Exit(1)
