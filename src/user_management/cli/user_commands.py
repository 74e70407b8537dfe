"""User store CLI commands."""

import typer
from rich.console import Console
from rich.table import Table

from src.user_management.core.storage import UserStoreError, build_user_store
from src.user_management.runtime.context import get_config

console = Console()

users_app = typer.Typer(help="Inspect users in the configured store")


@users_app.command("list")
def list_users() -> None:
    """List all users in the configured store."""
    config = get_config()
    if config.store.backend == "memory":
        # A fresh in-memory store never holds the server's users
        console.print(
            "[red]❌ Listing users needs the sql backend "
            "(set USER_STORE_BACKEND=sql)[/red]"
        )
        raise typer.Exit(code=1)

    store = build_user_store(config)

    try:
        users = store.get_all()
    except UserStoreError as e:
        console.print(f"[red]❌ Failed to list users: {e}[/red]")
        raise typer.Exit(code=1) from e

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("First Name", style="magenta")
    table.add_column("Last Name", style="magenta")
    table.add_column("Email", style="blue")
    table.add_column("Phone", style="green")
    table.add_column("Age")
    table.add_column("Status", style="yellow")

    for user in users:
        table.add_row(
            str(user.id),
            user.first_name,
            user.last_name,
            user.email,
            user.phone,
            str(user.age) if user.age else "-",
            user.status.value,
        )

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")
