"""rofi-menu command line interface.

Commands:
- select: Pick one line with rofi and print it
- config show: Show the configuration file and resolved executable
- config set-path: Store the rofi executable override
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rofi_menu import __version__
from rofi_menu.click_group import RofiMenuGroup
from rofi_menu.config_manager import ConfigError, ConfigManager
from rofi_menu.executable import ExecutableLocator
from rofi_menu.layout import BreakdownError, ColumnLayout
from rofi_menu.session import EXIT_SUCCESS, VALID_FORMATS, SelectorSession, SessionError

logger = logging.getLogger(__name__)
console = Console()


def _parse_breakdown(value: str) -> list[int]:
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as e:
        raise click.BadParameter(
            f"expected comma separated integers, got '{value}'", param_hint="--breakdown"
        ) from e


def _read_stdin_entries() -> list[str]:
    stdin = click.get_text_stream("stdin")
    if stdin.isatty():
        return []
    return [line.rstrip("\n") for line in stdin]


@click.group(name="rofi-menu", cls=RofiMenuGroup)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """Pick entries with rofi from scripts and the shell.

    \b
    CONFIGURATION:
        Config file: ~/.rofi_menu/config.toml
        Executable override: config.rofi
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s",
    )


@main.command(name="select")
@click.argument("entries", nargs=-1)
@click.option("--prompt", "-p", default="", help="Prompt shown left of the input bar")
@click.option("--message", "-m", default="", help="Message shown below the input bar")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(VALID_FORMATS)),
    help="rofi output format character",
)
@click.option("--columns", type=click.IntRange(min=1), help="Align entries into N columns")
@click.option("--width", type=click.IntRange(min=1), default=80, show_default=True)
@click.option("--separator", default=";", show_default=True, help="Column separator")
@click.option("--breakdown", help="Column widths in percent, e.g. 50,20,30")
@click.option("--kb", "keys", multiple=True, help="Custom keybinding (repeatable)")
@click.option("--config", help="Custom config file path")
def select(
    entries: tuple[str, ...],
    prompt: str,
    message: str,
    output_format: str | None,
    columns: int | None,
    width: int,
    separator: str,
    breakdown: str | None,
    keys: tuple[str, ...],
    config: str | None,
):
    """Show ENTRIES (or stdin lines) in rofi and print the chosen one.

    Exits with rofi's exit code: 1 when canceled, 10 + N when the N-th
    (0-based) --kb binding was used.

    \b
    EXAMPLES:
        $ git branch --format='%(refname:short)' | rofi-menu select -p branch
        $ rofi-menu select --columns 2 --breakdown 70,30 'main;2d ago' 'dev;1h ago'
        $ rofi-menu select --kb Alt+d a b c
    """
    lines = list(entries) or _read_stdin_entries()

    if breakdown and not columns:
        raise click.UsageError("--breakdown requires --columns")

    try:
        session = SelectorSession.new_instance(config)
    except SessionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    session.set_name(prompt).set_message(message).add_entries(lines)

    if output_format:
        session.set_format(output_format)

    if columns:
        try:
            layout = ColumnLayout(width=width, columns=columns, separator=separator)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--separator") from e
        if breakdown:
            try:
                layout.set_breakdown(_parse_breakdown(breakdown))
            except BreakdownError as e:
                raise click.BadParameter(str(e), param_hint="--breakdown") from e
        session.set_layout(layout)

    selected: list[str] = []
    session.set_success_callback(selected.append)
    session.set_canceled_callback(lambda output: None)
    session.set_default_callback(lambda output: None)
    for key in keys:
        session.add_keybinding(key, selected.append)

    try:
        result = session.start()
    except SessionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for output in selected:
        click.echo(output, nl=False)

    if result.returncode != EXIT_SUCCESS:
        sys.exit(result.returncode)


@main.group(name="config", cls=RofiMenuGroup)
def config_group():
    """Manage the rofi-menu configuration file."""
    pass


@config_group.command(name="show")
@click.option("--config", help="Custom config file path")
def show_config(config: str | None):
    """Show the configuration file and the executable that would be used."""
    config_path = ConfigManager.get_config_path(config)

    try:
        rofi_config = ConfigManager.load_config(config)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    resolved = rofi_config.rofi_path or ExecutableLocator.from_path()

    table = Table(title="rofi-menu Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Config file", escape(str(config_path)))
    table.add_row("File exists", "yes" if config_path.is_file() else "no")
    table.add_row("config.rofi", escape(rofi_config.rofi_path or "-"))
    table.add_row("Resolved executable", escape(resolved) if resolved else "[red]not found[/red]")

    console.print(table)


@config_group.command(name="set-path")
@click.argument("path")
@click.option("--config", help="Custom config file path")
def set_path(path: str, config: str | None):
    """Store PATH as the rofi executable override (config.rofi)."""
    try:
        saved_to = ConfigManager.set_rofi_path(path, config)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    console.print(f"[green]Saved config.rofi = {escape(path)}[/green] to {escape(str(saved_to))}")


if __name__ == "__main__":
    main()
