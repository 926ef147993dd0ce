"""Services package"""

from keepmounted.services.probe import ProbeService
from keepmounted.services.reconciler import MountReconciler

__all__ = ['ProbeService', 'MountReconciler']
