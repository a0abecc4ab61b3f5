"""Server lifecycle CLI commands."""

import typer
from rich.console import Console
from rich.panel import Panel

console = Console()


def serve(
    host: str | None = typer.Option(None, help="Host to bind; defaults to config app.host"),
    port: int | None = typer.Option(None, help="Port to bind; defaults to config app.port"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    from src.users_api.runtime.context import get_config

    app_config = get_config().app
    bind_host = host or app_config.host
    bind_port = port or app_config.port

    console.print(
        Panel.fit(
            f"[bold green]Users API listening on {bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )

    uvicorn.run(
        "src.users_api.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        log_config=None,
    )


def init_db_command() -> None:
    """Create the users table if it does not exist."""
    from src.users_api.runtime.init_db import init_db

    try:
        init_db()
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]✅ Database initialized[/green]")
