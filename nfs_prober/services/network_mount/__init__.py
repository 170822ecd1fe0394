"""
Network Mount Module

Components:
- NetworkMountService: unmount-then-mount of one target, bounded by a timeout
- BaseMounter: abstract base class for platform mount operations
- LinuxMounter: mount/umount through the system utilities
- PlatformFactory: platform detection and mounter creation
"""

from .base_mounter import BaseMounter
from .mount_service import NetworkMountService
from .platform_factory import PlatformFactory

__all__ = [
    "NetworkMountService",
    "BaseMounter",
    "PlatformFactory",
]
