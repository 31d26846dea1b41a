"""
Command line interface for Todo Lists.

Provides commands to start the web server and inspect its configuration.
"""

import os
from typing import Optional

import click
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todo_lists import __version__
from todo_lists.config import CONFIG_PATH_ENV, Config, load_config


console = Console()

ROUTES = [
    ("GET", "/lists", "All lists"),
    ("GET", "/lists/new", "New list form"),
    ("POST", "/lists", "Create a list"),
    ("GET", "/lists/{id}", "One list and its todos"),
    ("GET", "/lists/{id}/edit", "Rename form"),
    ("POST", "/lists/{id}", "Rename a list"),
    ("POST", "/lists/{id}/delete", "Delete a list"),
    ("POST", "/lists/{id}/add_todo", "Add a todo"),
    ("POST", "/lists/{id}/todo/{todo_id}/delete", "Delete a todo"),
    ("POST", "/lists/{id}/todo/{todo_id}", "Mark a todo complete or incomplete"),
    ("POST", "/lists/{id}/complete_all", "Complete every todo in a list"),
    ("GET", "/health", "Health check"),
]


@click.group()
@click.version_option(__version__, prog_name="todo-lists")
def cli():
    """Todo Lists web application."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind the server to")
@click.option("--port", default=None, type=int, help="Port to bind the server to")
@click.option("--debug", is_flag=True, help="Enable debug mode with auto-reload")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML configuration file",
)
def serve(host: Optional[str], port: Optional[int], debug: bool, config_path: Optional[str]):
    """Start the Todo Lists web server."""
    if config_path:
        os.environ[CONFIG_PATH_ENV] = config_path

    config = load_config(config_path)
    config.host = host or config.host
    config.port = port or config.port
    config.debug = debug or config.debug
    Config.set(config)

    # The reloader imports the app in a fresh process; keep its sessions valid
    os.environ.setdefault("SESSION_SECRET", config.session_secret)

    content = Text()
    content.append("Server will start at: ", style="white")
    content.append(f"http://{config.host}:{config.port}/lists", style="bold green")
    if config.debug:
        content.append("\n\n")
        content.append("Debug mode: ", style="yellow")
        content.append("ENABLED", style="bold red")
        content.append(" (auto-reload on file changes)", style="white")

    console.print(Panel(content, title=Text("Todo Lists", style="bold cyan"), border_style="cyan", padding=(1, 2)))
    console.print("Press Ctrl+C to stop the server", style="dim")

    try:
        uvicorn.run(
            "todo_lists.webapp.app:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=config.debug,
            log_level=config.log_level.lower(),
        )
    except KeyboardInterrupt:
        console.print("Server stopped", style="yellow")
    except Exception as e:
        console.print(f"\nError starting server: {e}", style="red")
        raise click.ClickException(f"Failed to start server: {e}")


@cli.command()
def info():
    """Show the routes served by the web application."""
    table = Table(title="Todo Lists routes")
    table.add_column("Method", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Action")

    for method, path, action in ROUTES:
        table.add_row(method, path, action)

    console.print(table)


@cli.command("config")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML configuration file",
)
def show_config(config_path: Optional[str]):
    """Print the effective configuration as YAML."""
    config = load_config(config_path)
    click.echo(config.to_yaml(mask_secret=True), nl=False)


def main():
    cli()


if __name__ == "__main__":
    main()
