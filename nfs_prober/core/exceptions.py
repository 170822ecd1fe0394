# nfs_prober/core/exceptions.py


class ProberError(Exception):
    """Base class for all prober errors."""


class ConfigError(ProberError):
    """Raised for malformed configuration. Fatal at startup."""


class MountError(ProberError):
    """Raised when an unmount or mount of a target fails."""

    def __init__(self, local_path: str, detail: str):
        self.local_path = local_path
        self.detail = detail
        super().__init__(f"{detail} ({local_path})")


class WriteError(ProberError):
    """Raised when a test file cannot be written or the payload is the wrong size."""


class ReadError(ProberError):
    """Raised when a test file cannot be read or has the wrong size."""


class UnsupportedPlatformError(ProberError):
    """Raised when the platform has no mounter implementation."""
