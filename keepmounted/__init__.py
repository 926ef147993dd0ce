"""
keepmounted - keep a filesystem mounted and writable

A reconciliation daemon for a single mount. Every check interval it probes
the mount by creating and deleting a marker file; when the probe fails it
unmounts (if still listed as mounted) and mounts again, retrying forever.

Example:
    >>> from keepmounted import MountSpec, MountReconciler, SystemMountBackend
    >>>
    >>> spec = MountSpec(source='nas:/export', target='/mnt/export', fs_type='nfs')
    >>> MountReconciler(spec, SystemMountBackend()).run_forever()
"""

from .models import (
    MountSpec,
    MountStatus,
    ProbeReport,
    ReconcilerState
)

from .drivers import (
    BaseMountBackend,
    SystemMountBackend
)

from .services import (
    ProbeService,
    MountReconciler
)

from .version import version_string

__version__ = version_string()

__all__ = [
    # Models
    'MountSpec',
    'MountStatus',
    'ProbeReport',
    'ReconcilerState',

    # Backends
    'BaseMountBackend',
    'SystemMountBackend',

    # Services
    'ProbeService',
    'MountReconciler',

    # Version
    '__version__',
    'version_string',
]
