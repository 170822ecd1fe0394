import asyncio
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .directory_manager import DirectoryManager
from ..network_mount.mount_service import NetworkMountService
from ..reporting.status_registry import TargetStatusRegistry
from ..scheduler.probe_scheduler import ProbeScheduler
from ..verification.file_verifier import FileVerificationService
from ...core.readiness import ReadinessSignal
from ...models import Target


@dataclass
class ProbeConfiguration:
    """Configuration object to eliminate long parameter lists."""

    interval_seconds: float
    timeout_seconds: float
    read_write_enabled: bool
    startup_stagger_seconds: float = 30.0


class FleetLauncher:
    """
    Starts one independent ProbeScheduler per target.

    Each scheduler gets its own start delay drawn from a single shared random
    source so that many targets started together do not mount in lockstep.
    Readiness is signalled once every scheduler has been dispatched, not once
    they have completed a tick.
    """

    def __init__(
        self,
        targets: List[Target],
        config: ProbeConfiguration,
        mount_service: NetworkMountService,
        verifier: FileVerificationService,
        readiness: ReadinessSignal,
        status_registry: Optional[TargetStatusRegistry] = None,
        rng: Optional[random.Random] = None,
        directory_manager: Optional[DirectoryManager] = None,
    ):
        self._targets = list(targets)
        self._config = config
        self._mount_service = mount_service
        self._verifier = verifier
        self._readiness = readiness
        self._status_registry = status_registry
        # Seeded once from the OS entropy pool
        self._rng = rng or random.Random()
        self._directory_manager = directory_manager or DirectoryManager()

        self._schedulers: List[ProbeScheduler] = []

    @property
    def schedulers(self) -> List[ProbeScheduler]:
        return list(self._schedulers)

    @property
    def targets(self) -> List[Target]:
        return list(self._targets)

    def stagger_delay(self) -> float:
        """One delay in [0, startup_stagger_seconds)."""
        span = self._config.startup_stagger_seconds
        if span <= 0:
            return 0.0
        return self._rng.random() * span

    async def launch(self) -> List[ProbeScheduler]:
        if self._schedulers:
            logging.warning("Fleet already launched")
            return self.schedulers

        logging.info(
            f"Launching probes for {len(self._targets)} target(s) - "
            f"interval {self._config.interval_seconds:g}s, "
            f"mount timeout {self._config.timeout_seconds:g}s, "
            f"read/write tests {'enabled' if self._config.read_write_enabled else 'disabled'}"
        )

        # Make all local directories needed for mounting
        for target in self._targets:
            await self._directory_manager.ensure_directory_exists(target.local_mount_path)

        for target in self._targets:
            scheduler = ProbeScheduler(
                target=target,
                mount_service=self._mount_service,
                verifier=self._verifier,
                interval_seconds=self._config.interval_seconds,
                timeout_seconds=self._config.timeout_seconds,
                read_write_enabled=self._config.read_write_enabled,
                start_delay=self.stagger_delay(),
                status_registry=self._status_registry,
            )
            scheduler.start()
            self._schedulers.append(scheduler)

        self._readiness.mark_ready()
        return self.schedulers

    async def stop(self) -> None:
        if not self._schedulers:
            return
        await asyncio.gather(
            *(scheduler.stop() for scheduler in self._schedulers), return_exceptions=True
        )
        logging.info(f"Stopped {len(self._schedulers)} probe scheduler(s)")
