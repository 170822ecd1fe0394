import posixpath
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field

# Only mount the "prober" directory beneath each export. This should not be changed.
PROBER_SUBDIRECTORY = "prober"

_UNSAFE_SEGMENT_CHARS = re.compile(r"[^A-Za-z0-9._:\-\[\]]")


class OperationKind(str, Enum):
    MOUNT = "mount"
    WRITE = "write"
    READ = "read"


class ProbeState(str, Enum):
    """
    Per-target scheduler state.

    Idle -> Mounting -> (WriteVerify -> ReadVerify) -> Idle, and Cancelled
    once the scheduler has been stopped.
    """

    IDLE = "Idle"
    MOUNTING = "Mounting"
    WRITE_VERIFY = "WriteVerify"
    READ_VERIFY = "ReadVerify"
    CANCELLED = "Cancelled"


def local_path_segment(address: str) -> str:
    """Reduce an address to a single path component that cannot escape its parent."""
    segment = _UNSAFE_SEGMENT_CHARS.sub("_", address)
    if segment.strip(".") == "":
        segment = segment.replace(".", "_") or "_"
    return segment


def export_path(remote_mount_point: str) -> str:
    """Return the remote path actually mounted: always ``<remote>/prober``."""
    normalized = posixpath.normpath("/" + remote_mount_point.strip().lstrip("/"))
    return posixpath.join(normalized.rstrip("/") or "/", PROBER_SUBDIRECTORY)


@dataclass(frozen=True)
class Target:
    """One remote export to probe. Immutable for the life of the process."""

    address: str
    remote_mount_point: str
    local_root: str

    @property
    def remote_export_path(self) -> str:
        return export_path(self.remote_mount_point)

    @property
    def mount_source(self) -> str:
        # The host is passed through the addr= mount option
        return f":{self.remote_export_path}"

    @property
    def local_mount_path(self) -> str:
        return str(Path(self.local_root) / local_path_segment(self.address))

    def test_file_path(self, index: int) -> str:
        return str(Path(self.local_mount_path) / str(int(index)))

    @property
    def label(self) -> str:
        return f"{self.address}:{self.remote_export_path}"


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of one mount, write or read attempt within a single tick."""

    target: Target
    operation: OperationKind
    success: bool
    duration_seconds: float
    error_detail: Optional[str] = None
    file_index: Optional[int] = None
    file_path: Optional[str] = None
    observed_at: datetime = field(default_factory=datetime.now)


class OperationSnapshot(BaseModel):
    """Last recorded outcome of one operation kind, as served by the status API."""

    success: bool
    duration_seconds: float = Field(..., ge=0.0)
    error_detail: Optional[str] = None
    file_path: Optional[str] = None
    observed_at: datetime

    @classmethod
    def from_outcome(cls, outcome: ProbeOutcome) -> "OperationSnapshot":
        return cls(
            success=outcome.success,
            duration_seconds=max(outcome.duration_seconds, 0.0),
            error_detail=outcome.error_detail,
            file_path=outcome.file_path,
            observed_at=outcome.observed_at,
        )


class TargetStatus(BaseModel):
    """Current view of one target for GET /api/targets."""

    address: str
    mount_point: str
    local_mount_path: str
    state: ProbeState = ProbeState.IDLE
    mounted: Optional[bool] = Field(
        default=None, description="None until the first mount attempt completes"
    )
    tick_count: int = Field(default=0, ge=0)
    last_tick_at: Optional[datetime] = None
    last_outcomes: Dict[OperationKind, OperationSnapshot] = Field(default_factory=dict)
