"""Data models for the mount reconciler"""

import enum
import os
from dataclasses import dataclass, asdict
from typing import Dict, Any


DEFAULT_CHECK_INTERVAL = 60
DEFAULT_COMMAND_TIMEOUT = 60
DEFAULT_MARKER_NAME = '.keepmounted'


class MountStatus(enum.Enum):
    """Result of a single probe cycle"""
    HEALTHY = 'healthy'
    UNMOUNTED = 'unmounted'
    UNWRITABLE = 'unwritable'


class ReconcilerState(enum.Enum):
    """States of the reconciliation loop"""
    CHECKING = 'checking'
    UNMOUNTING = 'unmounting'
    MOUNTING = 'mounting'
    SLEEPING = 'sleeping'


class ProbeStage(enum.Enum):
    """Probe step that decided the result"""
    STAT = 'stat'
    MOUNT_TABLE = 'mount_table'
    LEFTOVER_MARKER = 'leftover_marker'
    CREATE_MARKER = 'create_marker'
    DELETE_MARKER = 'delete_marker'
    OK = 'ok'


@dataclass(frozen=True)
class MountSpec:
    """The single mount owned by the reconciler"""
    source: str
    target: str
    fs_type: str
    options: str = ''
    check_interval: int = DEFAULT_CHECK_INTERVAL
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    marker_name: str = DEFAULT_MARKER_NAME

    @property
    def marker_path(self) -> str:
        return os.path.join(self.target, self.marker_name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProbeReport:
    """Probe outcome with the stage that produced it"""
    status: MountStatus
    stage: ProbeStage
    detail: str = ''

    @property
    def healthy(self) -> bool:
        return self.status is MountStatus.HEALTHY

    def to_dict(self) -> Dict[str, Any]:
        return {
            'status': self.status.value,
            'stage': self.stage.value,
            'detail': self.detail
        }
