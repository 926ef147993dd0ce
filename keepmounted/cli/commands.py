"""CLI command implementations"""

import shlex
import sys
from typing import Optional

import click
from tabulate import tabulate

from keepmounted.config import KeepMountedConfig
from keepmounted.drivers.system import SystemMountBackend
from keepmounted.exceptions import ConfigurationException, EXIT_UNHEALTHY
from keepmounted.models import MountSpec
from keepmounted.server.daemon import KeepMountedDaemon
from keepmounted.services.probe import ProbeService
from keepmounted.utils.logger import get_logger, setup_logging
from keepmounted.utils.validators import ensure_root, ensure_target_directory

LOG = get_logger(__name__)


def configure_logging(config: KeepMountedConfig):
    """Apply the configured log level and format"""
    try:
        setup_logging(config.log_level, config.log_format)
    except ValueError as e:
        raise ConfigurationException(str(e))


def load_mount_spec(config: KeepMountedConfig, privileged: bool = True) -> MountSpec:
    """
    Validate startup configuration and build the MountSpec.

    Checks run in order: required options, root privilege, target directory.

    Raises:
        KeepMountedException subclass with the exit code for the failure
    """
    spec = config.to_mount_spec()
    LOG.debug(f"Mount spec: {spec.to_dict()}")
    if privileged:
        ensure_root()
        ensure_target_directory(spec.target)
    return spec


def build_backend(config: KeepMountedConfig, spec: MountSpec) -> SystemMountBackend:
    return SystemMountBackend(
        mount_bin=config.mount_bin,
        umount_bin=config.umount_bin,
        timeout=spec.command_timeout
    )


def run_daemon(config: KeepMountedConfig):
    """Validate and run the reconciliation loop until a shutdown signal"""
    spec = load_mount_spec(config)
    daemon = KeepMountedDaemon(spec, build_backend(config, spec))
    daemon.start()


def check_mount(config: KeepMountedConfig):
    """Probe the mount once without remediation; exit non-zero if unhealthy"""
    spec = load_mount_spec(config)
    backend = build_backend(config, spec)
    report = ProbeService(spec, backend).probe()
    entry = backend.find_mount_entry(spec.source, spec.target)

    rows = [
        ['Source', spec.source],
        ['Target', spec.target],
        ['Type', spec.fs_type],
        ['Options', spec.options or '-'],
        ['Mount Entry', entry or '-'],
        ['Status', report.status.value],
        ['Stage', report.stage.value],
    ]
    if report.detail:
        rows.append(['Detail', report.detail])

    click.echo(tabulate(rows, tablefmt='grid'))

    if not report.healthy:
        sys.exit(EXIT_UNHEALTHY)


def show_config(config: KeepMountedConfig):
    """Display the effective configuration"""
    rows = [[key, value if value != '' else '-'] for key, value in config.as_dict().items()]
    click.echo(f"Config file: {config.config_file}")
    click.echo(tabulate(rows, headers=['Key', 'Value'], tablefmt='grid'))


def generate_systemd_service(config: KeepMountedConfig, output_file: Optional[str] = None,
                             executable: str = '/usr/local/bin/keepmounted'):
    """Generate a systemd unit running the daemon for the configured mount"""
    spec = load_mount_spec(config, privileged=False)

    args = [
        executable,
        '--log-level', config.log_level,
        '--log-format', config.log_format,
        'run',
        '--source', spec.source,
        '--target', spec.target,
        '--type', spec.fs_type,
        '--interval', str(spec.check_interval),
        '--timeout', str(spec.command_timeout),
    ]
    if spec.options:
        args.extend(['--options', spec.options])

    template = f"""[Unit]
Description=Keep {spec.target} mounted
After=network-online.target remote-fs.target
Wants=network-online.target

[Service]
Type=simple
User=root
Group=root
ExecStart={' '.join(shlex.quote(arg) for arg in args)}
Restart=always
RestartSec=10

[Install]
WantedBy=multi-user.target
"""

    if output_file is None:
        click.echo(template, nl=False)
        return

    with open(output_file, 'w') as f:
        f.write(template)

    click.echo(f"Service file created: {output_file}")
    click.echo("\nNext steps:")
    click.echo("  1. systemctl daemon-reload")
    click.echo("  2. systemctl enable <unit>")
    click.echo("  3. systemctl start <unit>")
