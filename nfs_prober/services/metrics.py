"""
Prometheus metrics for NFS probes.

Exported per target (labelled by address and mount point):
- nfs_status: current mount status (1 = mounted, 0 = not mounted)
- nfs_mount_attempts: duration of mount attempts
- nfs_write_attempts / nfs_read_attempts: duration of test file writes/reads
"""

import logging
from typing import Optional

from prometheus_client import CollectorRegistry, Gauge, Histogram, generate_latest

from ..core.events.probe_events import ProbeOutcomeEvent
from ..models import OperationKind, ProbeOutcome


def _success_label(success: bool) -> str:
    return "true" if success else "false"


class ProbeMetrics:
    """Counter/histogram store for probe outcomes. Safe to call from every target."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.status = Gauge(
            "nfs_status",
            "current mount status of an NFS target",
            ["address", "mount_point"],
            registry=self.registry,
        )
        self.mount_attempts = Histogram(
            "nfs_mount_attempts",
            "attempts made to connect to an NFS target",
            ["address", "mount_point", "success"],
            registry=self.registry,
        )
        self.read_attempts = Histogram(
            "nfs_read_attempts",
            "attempts to read a file from a target NFS instance",
            ["address", "mount_point", "testFile", "success"],
            registry=self.registry,
        )
        self.write_attempts = Histogram(
            "nfs_write_attempts",
            "attempts to write a file to a target NFS instance",
            ["address", "mount_point", "testFile", "success"],
            registry=self.registry,
        )

    def record(self, outcome: ProbeOutcome) -> None:
        target = outcome.target
        address = target.address
        mount_point = target.remote_export_path
        success = _success_label(outcome.success)
        duration = max(outcome.duration_seconds, 0.0)

        if outcome.operation == OperationKind.MOUNT:
            self.status.labels(address, mount_point).set(1 if outcome.success else 0)
            self.mount_attempts.labels(address, mount_point, success).observe(duration)
        elif outcome.operation == OperationKind.WRITE:
            self.write_attempts.labels(
                address, mount_point, outcome.file_path or "", success
            ).observe(duration)
        elif outcome.operation == OperationKind.READ:
            self.read_attempts.labels(
                address, mount_point, outcome.file_path or "", success
            ).observe(duration)
        else:
            logging.warning(f"Unknown probe operation for metrics: {outcome.operation}")

    async def handle_outcome(self, event: ProbeOutcomeEvent) -> None:
        self.record(event.outcome)

    def expose(self) -> bytes:
        return generate_latest(self.registry)
