"""Base mount backend interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from keepmounted.models import MountSpec


class BaseMountBackend(ABC):
    """Abstract base class for mount backends"""

    @abstractmethod
    def mount(self, spec: MountSpec) -> bool:
        """
        Mount spec.source at spec.target.

        Args:
            spec: Mount to perform

        Returns:
            True if the mount succeeded and is listed as active, False otherwise
        """
        pass

    @abstractmethod
    def unmount(self, spec: MountSpec) -> bool:
        """
        Unmount spec.target.

        Args:
            spec: Mount to remove

        Returns:
            True if the unmount succeeded and is no longer listed, False otherwise
        """
        pass

    @abstractmethod
    def list_mounts(self) -> Optional[List[str]]:
        """
        List active mounts, one entry per line.

        Returns:
            Lines of the mount table, or None if it could not be read
        """
        pass

    def find_mount_entry(self, source: str, target: str) -> Optional[str]:
        """
        Find the first mount table line containing both source and target.

        Substring matching, not a parse of the entry: an unrelated line that
        happens to contain both strings also matches.
        """
        lines = self.list_mounts()
        if not lines:
            return None

        for line in lines:
            if source in line and target in line:
                return line
        return None

    def is_mount_point(self, source: str, target: str) -> bool:
        """Check if source is listed as mounted at target"""
        return self.find_mount_entry(source, target) is not None
