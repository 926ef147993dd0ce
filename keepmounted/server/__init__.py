"""Daemon package"""

from keepmounted.server.daemon import KeepMountedDaemon

__all__ = ['KeepMountedDaemon']
