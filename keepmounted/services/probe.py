"""Write/delete probe for the target mount"""

import os

from keepmounted.drivers.base import BaseMountBackend
from keepmounted.models import MountSpec, MountStatus, ProbeReport, ProbeStage
from keepmounted.utils.logger import get_logger

LOG = get_logger(__name__)


class ProbeService:
    """
    Verifies that the target is mounted and writable.

    A mount counts as healthy only when it is listed in the mount table and
    a marker file can be created in it and removed again.
    """

    def __init__(self, spec: MountSpec, backend: BaseMountBackend):
        self.spec = spec
        self.backend = backend

    def probe(self) -> ProbeReport:
        """
        Run one probe.

        Returns:
            ProbeReport with HEALTHY, UNMOUNTED or UNWRITABLE
        """
        target = self.spec.target
        marker = self.spec.marker_path

        try:
            os.stat(target)
        except OSError as e:
            LOG.warning(f"mount dest path could not be stated: {e}")
            return ProbeReport(MountStatus.UNWRITABLE, ProbeStage.STAT, str(e))

        if not self.backend.is_mount_point(self.spec.source, target):
            LOG.warning(f"mount point is not active: {self.spec.source} on {target}")
            return ProbeReport(MountStatus.UNMOUNTED, ProbeStage.MOUNT_TABLE,
                               'no mount table entry for source and target')

        if os.path.lexists(marker):
            LOG.warning(f"{self.spec.marker_name} unexpectedly present, cleaning up: {marker}")
            error = self._delete_marker(marker)
            if error:
                return ProbeReport(MountStatus.UNWRITABLE, ProbeStage.LEFTOVER_MARKER, error)

        try:
            with open(marker, 'x'):
                pass
        except OSError as e:
            LOG.error(f"{self.spec.marker_name} file ({marker}) creation failed: {e}")
            return ProbeReport(MountStatus.UNWRITABLE, ProbeStage.CREATE_MARKER, str(e))

        error = self._delete_marker(marker)
        if error:
            return ProbeReport(MountStatus.UNWRITABLE, ProbeStage.DELETE_MARKER, error)

        LOG.debug(f"{target} is mounted and writable")
        return ProbeReport(MountStatus.HEALTHY, ProbeStage.OK)

    def _delete_marker(self, marker: str):
        """Remove the marker; return an error message, or None on success"""
        try:
            os.remove(marker)
        except OSError as e:
            LOG.error(f"{self.spec.marker_name} file ({marker}) could not be deleted, "
                      f"is the filesystem read-only? {e}")
            return str(e)

        if os.path.lexists(marker):
            message = (f"{self.spec.marker_name} file ({marker}) was reported as deleted "
                       f"by the os, but is still present!")
            LOG.error(message)
            return message

        return None
