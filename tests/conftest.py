"""Shared fixtures for keepmounted tests"""

import logging

import pytest

from keepmounted.drivers.base import BaseMountBackend
from keepmounted.models import MountSpec


class FakeMountBackend(BaseMountBackend):
    """In-memory mount table; mount/unmount edit it when allowed to succeed."""

    def __init__(self, lines=None, mount_ok=True, unmount_ok=True):
        self.lines = list(lines or [])
        self.mount_ok = mount_ok
        self.unmount_ok = unmount_ok
        self.mount_calls = []
        self.unmount_calls = []
        self.list_calls = 0

    def mount(self, spec):
        self.mount_calls.append(spec)
        if not self.mount_ok:
            return False
        self.lines.append(f"{spec.source} on {spec.target} type {spec.fs_type} (rw)")
        return self.is_mount_point(spec.source, spec.target)

    def unmount(self, spec):
        self.unmount_calls.append(spec)
        if not self.unmount_ok:
            return False
        self.lines = [line for line in self.lines
                      if not (spec.source in line and spec.target in line)]
        return not self.is_mount_point(spec.source, spec.target)

    def list_mounts(self):
        self.list_calls += 1
        return list(self.lines)


@pytest.fixture
def target_dir(tmp_path):
    path = tmp_path / 'mnt'
    path.mkdir()
    return path


@pytest.fixture
def spec(target_dir):
    return MountSpec(
        source='nas:/export',
        target=str(target_dir),
        fs_type='nfs',
        options='soft',
        check_interval=30
    )


@pytest.fixture
def mounted_line(spec):
    return f"{spec.source} on {spec.target} type nfs (rw,soft)"


@pytest.fixture
def mounted_backend(mounted_line):
    return FakeMountBackend(lines=['/dev/sda1 on / type ext4 (rw)', mounted_line])


@pytest.fixture
def unmounted_backend():
    return FakeMountBackend(lines=['/dev/sda1 on / type ext4 (rw)'])


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger('keepmounted')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
