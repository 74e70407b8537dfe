"""Main CLI application module."""

import typer
from rich.console import Console

from .user_commands import users_app

console = Console()

app = typer.Typer(
    help="User Management API command line tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(users_app, name="users")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    uvicorn.run(
        "src.user_management.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )


@app.command("init-db")
def init_db() -> None:
    """Create the users table in the configured database."""
    from src.user_management.core.services import DbSessionService

    DbSessionService().create_all()
    console.print("[green]✅ Database tables created[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
