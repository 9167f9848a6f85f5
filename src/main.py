"""Main entry point for digger.

Commands
--------
new     Create a ticket file from the default template
run     Open an existing ticket file in the interactive viewer
"""
from __future__ import annotations
import sys
import termios

import click

from cli import CLI
from config import Settings, load_settings
from errors import DiggerError
from keys import StdinKeySource
from log import configure_logging
from presenter import AnsiPresenter
from session import Session
from storage import TomlTicketRepository, create_template, resolve_store_path
from terminal import TerminalController
from theme import build_palette

__version__ = "0.1.0"


@click.group()
@click.version_option(__version__, prog_name="digger")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Manage tickets using a TOML file."""
    settings = load_settings()
    try:
        configure_logging(settings)
    except OSError as exc:
        raise click.ClickException(f"Cannot open log file {settings.log_file}: {exc}") from exc
    ctx.obj = settings


@cli.command(name="new")
@click.argument("file_name")
def new_command(file_name: str) -> None:
    """Create FILE_NAME (".toml" is appended when it has no extension)."""
    path = resolve_store_path(file_name)
    try:
        created = create_template(path)
    except DiggerError as exc:
        raise click.ClickException(str(exc)) from exc
    if created:
        click.echo(f"Created new ticket file: {path}")
    else:
        click.echo(f"Ticket file already exists: {path}")


@cli.command(name="run")
@click.argument("file_name")
@click.pass_obj
def run_command(settings: Settings, file_name: str) -> None:
    """Browse the tickets stored in FILE_NAME."""
    path = resolve_store_path(file_name)
    repository = TomlTicketRepository(path)
    try:
        repository.ensure_exists()
        session = Session(repository)
        run_session(session, settings)
    except DiggerError as exc:
        raise click.ClickException(str(exc)) from exc
    except termios.error as exc:
        raise click.ClickException(f"An interactive terminal is required: {exc}") from exc
    except OSError as exc:
        raise click.ClickException(f"Terminal I/O failed: {exc}") from exc


def run_session(session: Session, settings: Settings) -> None:
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd, alt_screen=settings.alt_screen)
    presenter = AnsiPresenter(build_palette(settings.colors), sys.stdout)
    with terminal.raw_mode():
        CLI(session, presenter, StdinKeySource(stdin_fd)).run()


def main() -> None:
    cli(prog_name="digger")


if __name__ == "__main__":
    main()
