"""keepmounted daemon - signal handling and the reconciliation loop"""

import signal
import sys

from keepmounted.drivers.base import BaseMountBackend
from keepmounted.models import MountSpec
from keepmounted.services.reconciler import MountReconciler
from keepmounted.utils.logger import get_logger

LOG = get_logger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGQUIT)


class KeepMountedDaemon:
    """Main keepmounted daemon"""

    def __init__(self, spec: MountSpec, backend: BaseMountBackend):
        self.spec = spec
        self.backend = backend
        self.reconciler = MountReconciler(spec, backend)

    def install_signal_handlers(self):
        """Exit immediately on SIGINT, SIGTERM or SIGQUIT"""
        for signum in SHUTDOWN_SIGNALS:
            signal.signal(signum, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals; no cleanup, the current cycle is abandoned"""
        LOG.info(f"received shutdown signal: {signal.Signals(signum).name}")
        sys.exit(0)

    def start(self):
        """Start the daemon; never returns"""
        LOG.info("=" * 60)
        LOG.info("Starting keepmounted")
        LOG.info("=" * 60)
        LOG.info(f"Source:    {self.spec.source}")
        LOG.info(f"Target:    {self.spec.target}")
        LOG.info(f"Type:      {self.spec.fs_type}")
        LOG.info(f"Options:   {self.spec.options or '(none)'}")
        LOG.info(f"Interval:  {self.spec.check_interval}s")
        LOG.info("=" * 60)

        self.install_signal_handlers()
        self.reconciler.run_forever()
