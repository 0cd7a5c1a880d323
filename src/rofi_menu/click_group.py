"""Custom Click group with automatic help display on errors."""

from typing import Any

import click


class RofiMenuGroup(click.Group):
    """Click group that shows the failing command's help on usage errors."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except (
            click.exceptions.UsageError,
            click.exceptions.BadParameter,
            click.exceptions.MissingParameter,
        ) as e:
            click.echo(f"Error: {e.format_message()}", err=True)

            error_ctx = e.ctx if e.ctx else ctx

            click.echo("", err=True)
            click.echo(error_ctx.get_help(), err=True)

            error_ctx.exit(e.exit_code)
