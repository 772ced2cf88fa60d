"""authguard CLI - password policy and login lockout tooling."""

import typer

from authguard.cli_commands import (  # noqa: F401  (registers commands)
    audit_command,
    check_command,
    config_command,
    lockout_command,
)
from authguard.cli_commands.shared import app, console
from authguard.config import is_verbose
from authguard.utils.logging_setup import configure_logging


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Password policy, breach lookup and login lockout tooling."""
    configure_logging(verbose or is_verbose())


@app.command()
def version() -> None:
    """Show the installed authguard version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("authguard")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"authguard {current_version}")


def main():
    app()


if __name__ == "__main__":
    main()
