"""Selection callbacks.

A callback receives the text the selector printed on exit. Callbacks return
nothing; anything they want to keep they store themselves.
"""

from collections.abc import Callable

import click

Callback = Callable[[str], None]


def print_output(output: str) -> None:
    """Print the captured selector output to stdout."""
    click.echo(output)


__all__ = ["Callback", "print_output"]
