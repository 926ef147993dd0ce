"""Reconciliation loop for the target mount"""

import time
from typing import Callable, Optional

from keepmounted.drivers.base import BaseMountBackend
from keepmounted.models import MountSpec, ProbeReport, ReconcilerState
from keepmounted.services.probe import ProbeService
from keepmounted.utils.logger import get_logger

LOG = get_logger(__name__)


class MountReconciler:
    """Drives the mount toward mounted-and-writable, forever"""

    def __init__(self, spec: MountSpec, backend: BaseMountBackend,
                 probe: Optional[ProbeService] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.spec = spec
        self.backend = backend
        self.probe_service = probe or ProbeService(spec, backend)
        self.sleep = sleep
        self.state = ReconcilerState.CHECKING
        self.last_report: Optional[ProbeReport] = None

    def run_forever(self):
        """Run the loop; only process termination ends it"""
        LOG.info(f"Keeping {self.spec.source} mounted at {self.spec.target} "
                 f"(check interval {self.spec.check_interval}s)")
        while True:
            try:
                self.step()
            except Exception as e:
                LOG.error(f"Error while {self.state.value}: {e}, retrying in "
                          f"{self.spec.check_interval}s", exc_info=True)
                self.state = ReconcilerState.SLEEPING

    def step(self) -> ReconcilerState:
        """
        Execute the current state's action and move to the next state.

        Returns:
            The new state
        """
        handler = {
            ReconcilerState.CHECKING: self._check,
            ReconcilerState.UNMOUNTING: self._unmount,
            ReconcilerState.MOUNTING: self._mount,
            ReconcilerState.SLEEPING: self._sleep,
        }[self.state]

        next_state = handler()
        if next_state is not self.state:
            LOG.debug(f"{self.state.value} -> {next_state.value}")
        self.state = next_state
        return next_state

    def _check(self) -> ReconcilerState:
        report = self.probe_service.probe()
        self.last_report = report

        if report.healthy:
            return ReconcilerState.SLEEPING

        LOG.warning(f"{self.spec.target} is {report.status.value} "
                    f"(stage={report.stage.value}): {report.detail}")

        if self.backend.is_mount_point(self.spec.source, self.spec.target):
            return ReconcilerState.UNMOUNTING
        return ReconcilerState.MOUNTING

    def _unmount(self) -> ReconcilerState:
        if self.backend.unmount(self.spec):
            return ReconcilerState.MOUNTING

        LOG.error(f"unable to unmount path: {self.spec.target}, retrying in "
                  f"{self.spec.check_interval}s")
        return ReconcilerState.SLEEPING

    def _mount(self) -> ReconcilerState:
        if not self.backend.mount(self.spec):
            LOG.error(f"unable to mount path: {self.spec.target}, retrying in "
                      f"{self.spec.check_interval}s")
        return ReconcilerState.SLEEPING

    def _sleep(self) -> ReconcilerState:
        self.sleep(self.spec.check_interval)
        return ReconcilerState.CHECKING
