from contextlib import contextmanager
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ctxman import __version__
from ctxman.config import LOG_LEVELS, ClientOptions, configure_logging
from ctxman.context_manager import ContextManager
from ctxman.errors import ContextError

LEGACY_CONTEXT_NAME = "ctxman.legacy_context_name"


@contextmanager
def handle_errors():
    """Report context and I/O errors as a failed command"""
    try:
        yield
    except (ContextError, OSError) as e:
        raise click.ClickException(str(e)) from e


class LegacyContextGroup(click.Group):
    """Group that also accepts a bare context name: `context NAME [--delete]`"""

    def parse_args(self, ctx, args):
        positional = [a for a in args if a == "-" or not a.startswith("-")]
        if positional and positional[0] not in self.commands:
            # Extra positional arguments after a legacy name are ignored.
            ctx.meta[LEGACY_CONTEXT_NAME] = positional[0]
            args = [a for a in args if a != "-" and a.startswith("-")]
        return super().parse_args(ctx, args)


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              envvar='CTXMAN_CONFIG', help='Path to the local config file')
@click.option('--loglevel', type=click.Choice(list(LOG_LEVELS)), default='info',
              show_default=True, help='Log level')
@click.pass_context
def cli(ctx, config_path, loglevel):
    """ctxman - manage the contexts of a remote service client"""
    configure_logging(loglevel)
    ctx.obj = ClientOptions(config_path=config_path, loglevel=loglevel)


def print_contexts(options: ClientOptions):
    with handle_errors():
        rows = ContextManager(options.config_path).list_contexts()
    table = Table(box=None, show_edge=False, pad_edge=False, header_style="bold")
    table.add_column("CURRENT", no_wrap=True)
    table.add_column("NAME", no_wrap=True)
    table.add_column("SERVER", no_wrap=True)
    for row in rows:
        table.add_row("*" if row.is_current else "", Text(row.name), Text(row.server))
    Console(highlight=False).print(table)


def use_context(options: ClientOptions, name: str):
    with handle_errors():
        result = ContextManager(options.config_path).switch_to(name)
    if result.switched:
        click.echo(f"Switched to context '{result.name}'")
    else:
        click.echo(f"Already at context '{result.name}'")


def delete_context(options: ClientOptions, name: str):
    with handle_errors():
        ContextManager(options.config_path).delete(name)
    click.echo(f"Context '{name}' deleted")


@cli.group(cls=LegacyContextGroup, invoke_without_command=True)
@click.option('--delete', 'delete_flag', is_flag=True,
              help='Delete the context instead of switching to it')
@click.pass_context
def context(ctx, delete_flag):
    """Manage contexts

    \b
    Examples:
      ctxman context list
      ctxman context use cd.example.com
      ctxman context delete cd.example.com
      ctxman context cd.example.com            (legacy switch)
      ctxman context cd.example.com --delete   (legacy delete)
    """
    if ctx.invoked_subcommand is not None:
        return
    options = ctx.obj
    name = ctx.meta.get(LEGACY_CONTEXT_NAME)

    if delete_flag:
        if name is None:
            click.echo(ctx.get_help())
            ctx.exit(1)
        delete_context(options, name)
        click.echo(f"Deleted context '{name}'")
        return

    if name is None:
        print_contexts(options)
        return

    use_context(options, name)


@context.command('list')
@click.pass_obj
def list_cmd(options):
    """List contexts"""
    print_contexts(options)


@context.command('use')
@click.argument('name')
@click.pass_obj
def use_cmd(options, name):
    """Switch to a context ("-" for the previous one)"""
    use_context(options, name)


@context.command('delete')
@click.argument('name')
@click.pass_obj
def delete_cmd(options, name):
    """Delete a context"""
    delete_context(options, name)
    click.echo(f"Deleted context '{name}'")


cli.add_command(context, name='ctx')


def main():
    cli()


if __name__ == '__main__':
    main()
