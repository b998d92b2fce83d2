"""Main CLI application module."""

import typer

from .server_commands import keys, routes, serve

# Create the main CLI application
app = typer.Typer(
    help="🛠️  Catalog API CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="routes")(routes)
app.command(name="keys")(keys)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
