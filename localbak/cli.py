"""Command line interface implemented with click.

`localbak FILE...` is shorthand for `localbak backup FILE...`.
"""
import logging
from pathlib import Path

import click

from localbak import configure_logging
from localbak.config import VerboseConfig, get_config
from localbak.backup.compression import list_archive
from localbak.backup.errors import BackupError
from localbak.backup.executor import execute_backup
from localbak.backup.naming import ArtifactFormat, EntryKind, classify_artifact, entry_kind
from localbak.backup.restore import execute_restore

logger = logging.getLogger(__name__)


class AliasedGroup(click.Group):
    """Group that accepts short command aliases and defaults to `backup`."""

    aliases = {'b': 'backup', 'bak': 'backup', 'r': 'restore', 'res': 'restore'}

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def parse_args(self, ctx, args):
        if not args:
            click.echo(ctx.get_help())
            ctx.exit(1)
        return super().parse_args(ctx, args)

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith('-') and self.get_command(ctx, args[0]) is None:
            args = ['backup'] + list(args)
        return super().resolve_command(ctx, args)


@click.group(cls=AliasedGroup)
@click.option('-y', '--yes', 'assume_yes', is_flag=True, help='Do not confirm.')
@click.option('-v', '--verbose', is_flag=True, help='Print out every action.')
@click.version_option(package_name='localbak')
@click.pass_context
def cli(ctx, assume_yes, verbose):
    """Simple local backups with a bit of compression."""
    config = VerboseConfig if verbose else get_config()
    configure_logging(config)
    ctx.obj = {'assume_yes': assume_yes or config.ASSUME_YES, 'verbose': config.DEBUG}


@cli.command()
@click.argument('paths', nargs=-1, type=click.Path(path_type=Path))
@click.option('-z', '--compress', is_flag=True, help='Use zstd compression.')
@click.pass_context
def backup(ctx, paths, compress):
    """Create backup of files or directories, default action (aliases: b, bak)."""
    if not paths:
        click.echo(ctx.get_help())
        ctx.exit(1)

    outcomes = execute_backup(paths, compress)
    for outcome in outcomes:
        if outcome.succeeded:
            click.echo(f"Backup written: {outcome.artifact_path}")
        else:
            click.echo(f"Error backing up {outcome.source}: {outcome.error_message}", err=True)

    if not all(outcome.succeeded for outcome in outcomes):
        ctx.exit(1)


@cli.command()
@click.argument('path', type=click.Path(path_type=Path))
@click.option('-d', '--delete', is_flag=True, help='Delete backup after successful restore.')
@click.option('-o', '--output', type=click.Path(file_okay=False, path_type=Path), default=None,
    help='Directory to restore into (default: next to the backup).')
@click.option('-y', '--yes', 'assume_yes', is_flag=True, help='Do not confirm.')
@click.pass_context
def restore(ctx, path, delete, output, assume_yes):
    """Restore from backup (aliases: r, res)."""
    output_dir = output if output is not None else path.parent
    assume_yes = assume_yes or ctx.obj['assume_yes']

    def confirm():
        return assume_yes or click.confirm(f"delete {path}?", default=False)

    click.echo(f"Restoring from {path}")
    try:
        if ctx.obj['verbose'] and classify_artifact(path) is ArtifactFormat.ARCHIVE and entry_kind(path) is EntryKind.FILE:
            for name in list_archive(path):
                logger.debug(f"Archive member: {name}")
        outcome = execute_restore(path, output_dir, delete=delete, confirm=confirm)
    except BackupError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Restored {outcome.restored_path}")
    if outcome.deleted:
        click.echo(f"Deleted {path}")


def main():  # pragma: no cover - thin wrapper
    cli()
