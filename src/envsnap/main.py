"""
envsnap CLI

Main entry point for the envsnap command-line tool.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Dict, Iterable, Set

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .core.differ import apply_diff, detect_local_only_keys, diff
from .core.errors import EnvFileError, EnvsnapError
from .core.formatters import OutputFormat, format_secrets
from .core.lexer import loads
from .core.presenter import DiffFormat, RenderOptions, format_diff


console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Send log records to stderr through rich; DEBUG when requested."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def read_env_file(path: str) -> Dict[str, str]:
    """
    Read a .env file into an ordered secret mapping.

    Raises:
        EnvFileError: If the file cannot be read
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise EnvFileError(f"Cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise EnvFileError(f"Cannot read {path}: not valid UTF-8 text",
                           hint="Save the file as UTF-8 and try again.") from e

    secrets = loads(content)
    logger.debug("Read %d keys from %s", len(secrets), path)
    return secrets


def should_colorize(no_color: bool) -> bool:
    """Colour only for an interactive terminal that hasn't opted out."""
    if no_color or os.getenv("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def collect_local_only(
    local: Dict[str, str],
    remote: Dict[str, str],
    explicit: Iterable[str]
) -> Set[str]:
    """Explicit --local-only keys plus LOCAL_* / *_LOCAL keys that only the local file has."""
    return set(explicit) | detect_local_only_keys(local, remote)


def render_env_file(secrets: Dict[str, str]) -> str:
    """
    Render secrets as .env content that reads back to the same values.

    Raises:
        EnvsnapError: If some value cannot be written losslessly
    """
    content = format_secrets(secrets, OutputFormat.ENV) + "\n"
    reread = loads(content)
    lossy = [key for key, value in secrets.items() if reread.get(key) != value]
    if lossy:
        raise EnvsnapError(
            f"Cannot write {', '.join(lossy)} to a .env file without changing the value",
            hint="Values wrapped in quotes, with a leading or trailing tab, or with a literal "
                 "\\n in a value that needs quoting do not survive the env format.",
        )
    return content


def report_error(error: EnvsnapError) -> None:
    err_console.print(f"[red]Error: {escape(error.message)}[/red]", highlight=False, soft_wrap=True)
    if error.hint:
        err_console.print(f"[dim]{escape(error.hint)}[/dim]", highlight=False, soft_wrap=True)
    sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="envsnap")
@click.option('--debug', is_flag=True, envvar='ENVSNAP_DEBUG', help='Enable debug logging')
def cli(debug):
    """
    envsnap - Render and compare secret snapshots
    """
    configure_logging(debug)


@cli.command()
@click.argument('file', type=click.Path(dir_okay=False))
@click.option('--format', '-f', 'output_format', default=OutputFormat.ENV.value,
              envvar='ENVSNAP_FORMAT', show_default=True,
              help='Output format (env, json, yaml, export)')
def show(file, output_format):
    """
    Print a .env file in another format.
    """
    try:
        secrets = read_env_file(file)
        click.echo(format_secrets(secrets, output_format))
    except EnvsnapError as e:
        report_error(e)


@cli.command(name="diff")
@click.argument('local', type=click.Path(dir_okay=False))
@click.argument('remote', type=click.Path(dir_okay=False))
@click.option('--format', '-f', 'diff_format', default=DiffFormat.INLINE.value,
              envvar='ENVSNAP_DIFF_FORMAT', show_default=True,
              help='Diff format (inline, side-by-side, summary)')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--local-only', 'local_only', multiple=True, metavar='KEY',
              help='Key that is intentionally only present locally (repeatable)')
def diff_command(local, remote, diff_format, no_color, local_only):
    """
    Show differences between LOCAL and REMOTE env files.

    LOCAL is the baseline: keys only in REMOTE are reported as added,
    keys only in LOCAL as removed.
    """
    try:
        options = RenderOptions(format=DiffFormat.parse(diff_format), colorize=should_colorize(no_color))
        local_secrets = read_env_file(local)
        remote_secrets = read_env_file(remote)
    except EnvsnapError as e:
        report_error(e)
        return

    local_only_keys = collect_local_only(local_secrets, remote_secrets, local_only)
    result = diff(local_secrets, remote_secrets, local_only_keys)
    formatted = format_diff(result, options)

    if formatted:
        click.echo(formatted)
    else:
        console.print("[green]✓ No differences found[/green]")


@cli.command()
@click.argument('local', type=click.Path(dir_okay=False))
@click.argument('remote', type=click.Path(dir_okay=False))
@click.option('--yes', '-y', is_flag=True, help='Apply without asking for confirmation')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--local-only', 'local_only', multiple=True, metavar='KEY',
              help='Key that is intentionally only present locally (repeatable)')
def sync(local, remote, yes, no_color, local_only):
    """
    Update LOCAL so it matches REMOTE, keeping local-only keys.
    """
    try:
        local_secrets = read_env_file(local)
        remote_secrets = read_env_file(remote)
    except EnvsnapError as e:
        report_error(e)
        return

    local_only_keys = collect_local_only(local_secrets, remote_secrets, local_only)
    result = diff(local_secrets, remote_secrets, local_only_keys)

    if not (result.added or result.modified or result.removed):
        console.print("[green]✓ Your environment is already up to date[/green]")
        return

    console.print("[cyan]Changes to be applied:[/cyan]")
    click.echo(format_diff(result, RenderOptions(format=DiffFormat.INLINE,
                                                 colorize=should_colorize(no_color))))

    if result.local_only:
        console.print("[yellow]⚠ Local-only variables will be preserved[/yellow]")

    merged = apply_diff(local_secrets, result)
    try:
        content = render_env_file(merged)
    except EnvsnapError as e:
        report_error(e)
        return

    if not yes and not click.confirm("Apply these changes?", default=False):
        console.print("[dim]Sync cancelled[/dim]")
        return

    Path(local).write_text(content, encoding="utf-8")
    logger.debug("Wrote %d keys to %s", len(merged), local)

    console.print(f"[green]✓ Updated {len(merged)} keys in {local}[/green]")


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
