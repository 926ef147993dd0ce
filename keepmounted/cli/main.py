"""Main CLI entry point"""

import functools
import sys

import click

from keepmounted.cli import commands
from keepmounted.config import KeepMountedConfig
from keepmounted.exceptions import KeepMountedException
from keepmounted.utils.logger import LOG_FORMATS
from keepmounted.version import version_string

_MOUNT_OPTIONS = [
    click.option('--source', help='The source device'),
    click.option('--target', help='Path to the target mount location'),
    click.option('--type', 'fs_type', help='Mount type (e.g. nfs, ext4)'),
    click.option('--options', help='Mount options'),
    click.option('--interval', help='How often the mount is checked (in seconds)'),
    click.option('--timeout', help='Timeout for each mount/umount call (in seconds)'),
]


def mount_options(func):
    """Options describing the mount; unset ones fall back to env/config file"""
    for option in reversed(_MOUNT_OPTIONS):
        func = option(func)
    return func


def _load_config(ctx, source, target, fs_type, options, interval, timeout) -> KeepMountedConfig:
    """Merge CLI values over env/config file and set up logging"""
    overrides = {
        'source': source,
        'target': target,
        'type': fs_type,
        'options': options,
        'interval': interval,
        'timeout': timeout,
        'log_level': ctx.obj.get('log_level'),
        'log_format': ctx.obj.get('log_format'),
    }
    config = KeepMountedConfig.load(ctx.obj.get('config_file'), overrides)
    commands.configure_logging(config)
    return config


def _exit_on_error(func):
    """Report startup errors on stderr and exit with their category code"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeepMountedException as e:
            click.echo(str(e), err=True)
            sys.exit(e.exit_code)
    return wrapper


@click.group()
@click.version_option(version_string(), prog_name='keepmounted')
@click.option('--config', 'config_file', type=click.Path(dir_okay=False),
              help='Configuration file path')
@click.option('--log-level',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                                case_sensitive=False),
              help='Log level')
@click.option('--log-format', type=click.Choice(LOG_FORMATS), help='Log output format')
@click.pass_context
def cli(ctx, config_file, log_level, log_format):
    """Keep a filesystem mounted and writable"""
    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config_file
    ctx.obj['log_level'] = log_level.upper() if log_level else None
    ctx.obj['log_format'] = log_format


@cli.command()
@mount_options
@click.pass_context
@_exit_on_error
def run(ctx, source, target, fs_type, options, interval, timeout):
    """
    Run the reconciliation loop (needs root)

    Example:
      keepmounted run --source server:/export --target /mnt/export --type nfs
    """
    config = _load_config(ctx, source, target, fs_type, options, interval, timeout)
    commands.run_daemon(config)


@cli.command()
@mount_options
@click.pass_context
@_exit_on_error
def check(ctx, source, target, fs_type, options, interval, timeout):
    """
    Probe the mount once without remounting (needs root)

    Exits 0 when the mount is healthy, 4 otherwise.

    Example:
      keepmounted check --source /dev/sdb1 --target /srv/data --type ext4
    """
    config = _load_config(ctx, source, target, fs_type, options, interval, timeout)
    commands.check_mount(config)


@cli.command('show-config')
@mount_options
@click.pass_context
@_exit_on_error
def show_config_cmd(ctx, source, target, fs_type, options, interval, timeout):
    """Show the effective configuration"""
    config = _load_config(ctx, source, target, fs_type, options, interval, timeout)
    commands.show_config(config)


@cli.command('generate-systemd')
@mount_options
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Output file (default: stdout)')
@click.pass_context
@_exit_on_error
def generate_systemd_cmd(ctx, source, target, fs_type, options, interval, timeout, output):
    """
    Generate a systemd service unit for the configured mount

    Example:
      keepmounted generate-systemd --source server:/export --target /mnt/export \\
          --type nfs -o /etc/systemd/system/keepmounted-export.service
    """
    config = _load_config(ctx, source, target, fs_type, options, interval, timeout)
    commands.generate_systemd_service(config, output)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == '__main__':
    main()
