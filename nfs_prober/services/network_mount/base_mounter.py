"""Abstract Base Mounter - interface for platform mount operations."""

from abc import ABC, abstractmethod


class BaseMounter(ABC):
    """Abstract base class for platform-specific mount operations."""

    @abstractmethod
    async def attempt_mount(
        self, source: str, local_path: str, fs_type: str, options: str
    ) -> None:
        """Mount source at local_path. Raises MountError on failure."""

    @abstractmethod
    async def release(self, local_path: str) -> None:
        """Unmount local_path. Raises MountError on failure."""

    @abstractmethod
    def get_platform_name(self) -> str:
        """Get platform name for logging."""
