"""Command-line entry point for running and bootstrapping the service."""

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

from src.app.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="product-api",
    help="Product Catalog API - run the server and manage its database",
    rich_markup_mode="rich",
)


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind; defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind; defaults to app.port"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the HTTP server."""
    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Product Catalog API[/bold green] on http://{bind_host}:{bind_port}",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.app.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=config.logging.level.lower(),
    )


@app.command(name="init-db")
def init_db() -> None:
    """Create the database tables if they do not exist."""
    from src.app.core.services import DbManageService, DbSessionService

    database_service = DbSessionService()
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()
    console.print("[green]Database tables are in place[/green]")


if __name__ == "__main__":
    app()
