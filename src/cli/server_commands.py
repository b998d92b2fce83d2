"""Commands for running and inspecting the catalog API."""

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.catalog_api.api.http.app import create_app
from src.catalog_api.core.security import mask_key
from src.catalog_api.runtime.context import get_config

console = Console()


def serve(
    host: str | None = typer.Option(None, help="Host to bind (defaults to config)"),
    port: int | None = typer.Option(None, help="Port to bind (defaults to config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Uvicorn log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the catalog API with uvicorn.
    """
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Starting {config.app.name}[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Environment:[/blue] {config.app.environment}")
    console.print(f"[blue]Server will be available at:[/blue] http://{bind_host}:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    try:
        uvicorn.run(
            "src.catalog_api.api.http.app:create_app",
            factory=True,
            host=bind_host,
            port=bind_port,
            reload=reload,
            log_level=log_level,
            access_log=False,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
    except Exception as exc:
        console.print(f"[red]❌ Server failed: {exc}[/red]")
        raise typer.Exit(1) from exc


def routes() -> None:
    """📋 List the HTTP routes the API serves."""
    app = create_app(get_config())

    table = Table(title="Routes")
    table.add_column("Methods", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Name")

    for route in app.routes:
        methods = getattr(route, "methods", None)
        if not methods:
            continue
        table.add_row(", ".join(sorted(methods)), route.path, route.name)

    console.print(table)


def keys() -> None:
    """🔑 Show the configured API keys (masked)."""
    security = get_config().security
    if not security.api_keys:
        console.print("[yellow]No API keys configured[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"API keys ({security.api_key_header} header)")
    table.add_column("#", justify="right")
    table.add_column("Key", style="magenta")
    for index, key in enumerate(security.api_keys, start=1):
        table.add_row(str(index), mask_key(key))
    console.print(table)
