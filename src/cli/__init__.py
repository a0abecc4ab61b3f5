"""Main CLI application module."""

import typer
from dotenv import load_dotenv

from .server_commands import init_db_command, serve
from .user_commands import users_app

app = typer.Typer(
    help="Users API command line",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="init-db")(init_db_command)
app.add_typer(users_app, name="users")


def main() -> None:
    """Main entry point for the CLI."""
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
