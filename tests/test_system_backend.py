"""
Tests for SystemMountBackend
"""

import subprocess
from unittest.mock import patch, call

import pytest

from keepmounted.drivers.system import SystemMountBackend
from keepmounted.models import MountSpec

MOUNT_TABLE = (
    "sysfs on /sys type sysfs (rw,nosuid,nodev,noexec,relatime)\n"
    "/dev/sda1 on / type ext4 (rw,relatime)\n"
    "nas:/export on /mnt/export type nfs (rw,soft,addr=10.0.0.2)\n"
)
EMPTY_TABLE = "/dev/sda1 on / type ext4 (rw,relatime)\n"


def completed(cmd, returncode=0, stdout=''):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout)


@pytest.fixture
def nfs_spec():
    return MountSpec(source='nas:/export', target='/mnt/export', fs_type='nfs',
                     options='soft,timeo=600')


@pytest.fixture
def backend():
    return SystemMountBackend(timeout=42)


class TestMountCommand:

    def test_with_options(self, backend, nfs_spec):
        assert backend.build_mount_command(nfs_spec) == [
            '/bin/mount', '-t', 'nfs', '-o', 'soft,timeo=600', 'nas:/export', '/mnt/export'
        ]

    def test_empty_options_omit_flag(self, backend):
        spec = MountSpec(source='/dev/sdb1', target='/srv/data', fs_type='ext4')
        assert backend.build_mount_command(spec) == [
            '/bin/mount', '-t', 'ext4', '/dev/sdb1', '/srv/data'
        ]

    def test_custom_binaries(self, nfs_spec):
        backend = SystemMountBackend(mount_bin='/usr/bin/mount', umount_bin='/usr/bin/umount')
        assert backend.build_mount_command(nfs_spec)[0] == '/usr/bin/mount'


@patch('keepmounted.drivers.system.subprocess.run')
class TestMount:

    def test_success_is_verified_against_mount_table(self, mock_run, backend, nfs_spec):
        mock_run.side_effect = [completed([]), completed([], stdout=MOUNT_TABLE)]

        assert backend.mount(nfs_spec) is True

        first, second = mock_run.call_args_list
        assert first.args[0] == backend.build_mount_command(nfs_spec)
        assert first.kwargs['timeout'] == 42
        assert first.kwargs['stderr'] == subprocess.STDOUT
        assert second.args[0] == ['/bin/mount']

    def test_nonzero_exit_fails(self, mock_run, backend, nfs_spec, caplog):
        mock_run.return_value = completed([], returncode=32,
                                          stdout='mount.nfs: Connection timed out')

        assert backend.mount(nfs_spec) is False
        assert mock_run.call_count == 1
        assert 'returned exit status 32' in caplog.text
        assert 'mount.nfs: Connection timed out' in caplog.text

    def test_success_without_table_entry_fails(self, mock_run, backend, nfs_spec, caplog):
        mock_run.side_effect = [completed([]), completed([], stdout=EMPTY_TABLE)]

        assert backend.mount(nfs_spec) is False
        assert 'not listed as active' in caplog.text

    def test_timeout_fails(self, mock_run, backend, nfs_spec, caplog):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd='mount', timeout=42)

        assert backend.mount(nfs_spec) is False
        assert 'timed out after 42 seconds' in caplog.text

    def test_missing_binary_fails(self, mock_run, backend, nfs_spec):
        mock_run.side_effect = FileNotFoundError(2, 'No such file or directory')

        assert backend.mount(nfs_spec) is False


@patch('keepmounted.drivers.system.subprocess.run')
class TestUnmount:

    def test_success(self, mock_run, backend, nfs_spec):
        mock_run.side_effect = [completed([]), completed([], stdout=EMPTY_TABLE)]

        assert backend.unmount(nfs_spec) is True
        assert mock_run.call_args_list[0] == call(
            ['/bin/umount', '/mnt/export'],
            stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, timeout=42
        )

    def test_still_listed_fails(self, mock_run, backend, nfs_spec, caplog):
        mock_run.side_effect = [completed([]), completed([], stdout=MOUNT_TABLE)]

        assert backend.unmount(nfs_spec) is False
        assert 'still listed as active' in caplog.text

    def test_busy_fails(self, mock_run, backend, nfs_spec):
        mock_run.return_value = completed([], returncode=32,
                                          stdout='umount: /mnt/export: target is busy.')

        assert backend.unmount(nfs_spec) is False

    def test_timeout_fails(self, mock_run, backend, nfs_spec):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd='umount', timeout=42,
                                                         output=b'partial')

        assert backend.unmount(nfs_spec) is False


@patch('keepmounted.drivers.system.subprocess.run')
class TestMountTable:

    def test_list_mounts(self, mock_run, backend):
        mock_run.return_value = completed([], stdout=MOUNT_TABLE)

        lines = backend.list_mounts()

        assert 'nas:/export on /mnt/export type nfs (rw,soft,addr=10.0.0.2)' in lines
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ['/bin/mount']

    def test_listing_failure(self, mock_run, backend):
        mock_run.return_value = completed([], returncode=1, stdout='mount: failed')

        assert backend.list_mounts() is None
        assert backend.is_mount_point('nas:/export', '/mnt/export') is False

    def test_membership(self, mock_run, backend):
        mock_run.return_value = completed([], stdout=MOUNT_TABLE)

        assert backend.is_mount_point('nas:/export', '/mnt/export') is True
        assert backend.is_mount_point('nas:/other', '/mnt/export') is False
        assert backend.is_mount_point('nas:/export', '/mnt/other') is False

    def test_membership_is_substring_based(self, mock_run, backend):
        # A longer source/target on the same line still matches
        mock_run.return_value = completed(
            [], stdout="nas:/export2 on /mnt/export2 type nfs (rw)\n")

        assert backend.is_mount_point('nas:/export', '/mnt/export') is True

    def test_find_mount_entry(self, mock_run, backend):
        mock_run.return_value = completed([], stdout=MOUNT_TABLE)

        assert backend.find_mount_entry('nas:/export', '/mnt/export') == \
            'nas:/export on /mnt/export type nfs (rw,soft,addr=10.0.0.2)'
        assert backend.find_mount_entry('/dev/sdz', '/nowhere') is None


class TestUndecodableOutput:

    @pytest.fixture
    def mount_script(self, tmp_path):
        script = tmp_path / 'mount'
        script.write_text(
            "#!/bin/sh\n"
            "printf '/dev/sdc1 on /media/caf\\351 type vfat (rw)\\n'\n"
            "printf 'nas:/export on /mnt/export type nfs (rw)\\n'\n"
        )
        script.chmod(0o755)
        return str(script)

    def test_non_utf8_mount_table(self, mount_script):
        backend = SystemMountBackend(mount_bin=mount_script, timeout=5)

        lines = backend.list_mounts()

        assert lines[0].startswith('/dev/sdc1 on /media/caf')
        assert lines[0].endswith(' type vfat (rw)')
        assert backend.is_mount_point('nas:/export', '/mnt/export') is True

    def test_output_decoded_with_replacement(self, backend):
        with patch('keepmounted.drivers.system.subprocess.run',
                   return_value=completed([], stdout='')) as mock_run:
            backend.list_mounts()

        assert mock_run.call_args.kwargs['errors'] == 'replace'
