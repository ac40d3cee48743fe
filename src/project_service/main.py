"""Main CLI entry point for the project service.

Usage:
    project-service serve --port 8081
    project-service --config project-service.toml config
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from project_service.config import ProjectServiceConfig, load_config
from project_service.logging import setup_logging

app = typer.Typer(
    name="project-service",
    help="Project service: project lifecycle management API",
    no_args_is_help=True,
)

console = Console()

# Loaded by the callback before any command runs
_config: ProjectServiceConfig | None = None


def get_config() -> ProjectServiceConfig:
    """Get the configuration loaded by the CLI callback.

    Raises:
        RuntimeError: If the callback has not run
    """
    if _config is None:
        raise RuntimeError("Configuration not loaded. Run through the CLI entry point.")
    return _config


@app.command()
def serve(
    host: Annotated[
        Optional[str],
        typer.Option("--host", "-h", help="Host to bind to (default: web.host)"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Port to bind to (default: web.port)"),
    ] = None,
) -> None:
    """Start the project service web server with uvicorn."""
    import uvicorn

    from project_service.web.app import create_app

    config = get_config()
    bind_host = host or config.web.host
    bind_port = port or config.web.port

    console.print("[bold cyan]Starting Project Service[/bold cyan]")
    console.print(f"[dim]Host:[/dim] {bind_host}")
    console.print(f"[dim]Port:[/dim] {bind_port}")
    console.print()

    uvicorn.run(
        create_app(config),
        host=bind_host,
        port=bind_port,
        log_level=config.logging.level.lower(),
    )


@app.command("config")
def show_config() -> None:
    """Print the resolved configuration (secrets masked)."""
    config = get_config()

    table = Table(title="Project Service Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for section_name, section in config:
        for key, value in section.model_dump().items():
            if key == "secret_key" and value:
                value = "********"
            elif section_name == "database" and key == "url":
                value = _mask_password(str(value))
            table.add_row(f"{section_name}.{key}", str(value))

    console.print(table)


def _mask_password(url: str) -> str:
    scheme, sep, rest = url.partition("://")
    credentials, at, host = rest.rpartition("@")
    if not at or ":" not in credentials:
        return url
    user = credentials.split(":", 1)[0]
    return f"{scheme}{sep}{user}:********@{host}"


@app.callback()
def main_callback(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (TOML format)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Load configuration and configure logging."""
    global _config

    try:
        config = load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(code=1) from e

    if verbose:
        config.logging.level = "DEBUG"
        config.logging.format = "console"

    setup_logging(config.logging)
    _config = config


if __name__ == "__main__":
    app()
