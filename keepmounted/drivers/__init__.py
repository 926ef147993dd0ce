"""Mount backends package"""

from keepmounted.drivers.base import BaseMountBackend
from keepmounted.drivers.system import SystemMountBackend

__all__ = ['BaseMountBackend', 'SystemMountBackend']
