"""User inspection CLI commands."""

import typer
from rich.console import Console
from rich.table import Table

from src.users_api.core.errors import StoreError
from src.users_api.core.services import DataStore, UserService
from src.users_api.runtime.context import get_config

console = Console()

users_app = typer.Typer(help="Inspect users stored in the database")


@users_app.command("list")
def list_users() -> None:
    """List all users. Passwords are never printed."""
    data_store = DataStore.from_config(get_config().database)

    try:
        users = UserService(data_store).list_users()
    except StoreError as e:
        console.print(f"[red]❌ Failed to list users: {e.message}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        data_store.dispose()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Email", style="blue")
    table.add_column("Name", style="green")

    for user in users:
        table.add_row(str(user.id), user.email, user.name)

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")
