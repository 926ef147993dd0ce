"""Mount backend driving the system mount/umount binaries"""

import subprocess
from typing import List, Optional, Tuple

from keepmounted.drivers.base import BaseMountBackend
from keepmounted.models import MountSpec, DEFAULT_COMMAND_TIMEOUT
from keepmounted.utils.logger import get_logger

LOG = get_logger(__name__)

DEFAULT_MOUNT_BIN = '/bin/mount'
DEFAULT_UMOUNT_BIN = '/bin/umount'


class SystemMountBackend(BaseMountBackend):
    """Backend for /bin/mount and /bin/umount."""

    def __init__(self, mount_bin: str = DEFAULT_MOUNT_BIN,
                 umount_bin: str = DEFAULT_UMOUNT_BIN,
                 timeout: int = DEFAULT_COMMAND_TIMEOUT):
        self.mount_bin = mount_bin
        self.umount_bin = umount_bin
        self.timeout = timeout

    def build_mount_command(self, spec: MountSpec) -> List[str]:
        """Build the mount command line; -o is left out when there are no options"""
        cmd = [self.mount_bin, '-t', spec.fs_type]
        if spec.options:
            cmd.extend(['-o', spec.options])
        cmd.extend([spec.source, spec.target])
        return cmd

    def mount(self, spec: MountSpec) -> bool:
        LOG.info(f"Mounting {spec.source} at {spec.target} (type={spec.fs_type})")

        ok, _ = self._run(self.build_mount_command(spec), spec.target)
        if not ok:
            return False

        # The command reporting success is not enough, the table must agree
        if not self.is_mount_point(spec.source, spec.target):
            LOG.error(f"{self.mount_bin} {spec.target} succeeded but mount not listed as active")
            return False

        LOG.info(f"Successfully mounted {spec.source} at {spec.target}")
        return True

    def unmount(self, spec: MountSpec) -> bool:
        LOG.info(f"Unmounting {spec.target}")

        ok, _ = self._run([self.umount_bin, spec.target], spec.target)
        if not ok:
            return False

        if self.is_mount_point(spec.source, spec.target):
            LOG.error(f"{self.umount_bin} {spec.target} succeeded but mount still listed as active")
            return False

        LOG.info(f"Successfully unmounted {spec.target}")
        return True

    def list_mounts(self) -> Optional[List[str]]:
        ok, output = self._run([self.mount_bin], None)
        if not ok:
            return None
        return output.split('\n')

    def _run(self, cmd: List[str], target: Optional[str]) -> Tuple[bool, str]:
        """
        Run a backend command with the per-call timeout.

        Args:
            cmd: Command as list of strings
            target: Path the command acts on, for log messages

        Returns:
            Tuple of (success, combined stdout/stderr)
        """
        label = f"{cmd[0]} {target}" if target else cmd[0]
        LOG.debug(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors='replace',
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            LOG.error(f"{label} timed out after {self.timeout} seconds")
            if e.output:
                LOG.error(f"{cmd[0]} output: {_decode(e.output)}")
            return False, _decode(e.output)
        except OSError as e:
            LOG.error(f"{label} could not be executed: {e}")
            return False, ''

        if result.returncode != 0:
            LOG.error(f"{label} returned exit status {result.returncode}")
            LOG.error(f"{cmd[0]} output: {result.stdout}")
            return False, result.stdout or ''

        return True, result.stdout or ''


def _decode(output) -> str:
    if output is None:
        return ''
    if isinstance(output, bytes):
        return output.decode(errors='replace')
    return output
