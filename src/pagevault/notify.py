"""User notifications on the terminal."""

from typing import Optional

import click


def show_info(message: str) -> None:
    click.echo(message)


def show_success(message: str) -> None:
    click.secho(message, fg="green")


def show_error(message: str, error: Optional[BaseException] = None) -> None:
    """Report a failure to the user on stderr."""
    text = f"{message}: {error}" if error else message
    click.secho(text, fg="red", err=True)
