"""Platform Factory - platform detection and mounter creation."""

import platform

from .base_mounter import BaseMounter
from ...core.exceptions import UnsupportedPlatformError


class PlatformFactory:
    """Factory for creating platform-specific mount implementations."""

    def detect_platform(self) -> str:
        """Detect current platform. Only linux is supported."""
        system = platform.system().lower()
        if system != "linux":
            raise UnsupportedPlatformError(f"Platform {system} not supported for NFS probing")
        return system

    def create_mounter(self) -> BaseMounter:
        """Create platform-specific mounter instance."""
        self.detect_platform()

        from .linux_mounter import LinuxMounter
        return LinuxMounter()
