import asyncio
import logging
from datetime import datetime
from typing import Optional

from ..network_mount.mount_service import NetworkMountService
from ..reporting.status_registry import TargetStatusRegistry
from ..verification.file_verifier import FileVerificationService
from ...models import ProbeState, Target


class ProbeScheduler:
    """
    Probe loop for a single target.

    After the start delay the scheduler ticks on a fixed interval. Each tick
    mounts the target and, when read/write testing is enabled and the mount
    succeeded, writes and then reads the test files. A tick always runs to
    completion before the next one starts; ticks missed while a tick overran
    are dropped rather than queued.
    """

    def __init__(
        self,
        target: Target,
        mount_service: NetworkMountService,
        verifier: FileVerificationService,
        interval_seconds: float,
        timeout_seconds: float,
        read_write_enabled: bool,
        start_delay: float = 0.0,
        status_registry: Optional[TargetStatusRegistry] = None,
    ):
        self._target = target
        self._mount_service = mount_service
        self._verifier = verifier
        self._interval = interval_seconds
        self._timeout = timeout_seconds
        self._read_write_enabled = read_write_enabled
        self._start_delay = start_delay
        self._status_registry = status_registry

        self._state = ProbeState.IDLE
        self._tick_count = 0
        self._task: Optional[asyncio.Task] = None

        if status_registry is not None:
            status_registry.register(target)

    @property
    def target(self) -> Target:
        return self._target

    @property
    def state(self) -> ProbeState:
        return self._state

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def start_delay(self) -> float:
        return self._start_delay

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self.is_running:
            logging.warning(f"Probe scheduler for {self._target.label} already running")
            return self._task

        self._task = asyncio.create_task(
            self.run(), name=f"probe-{self._target.address}"
        )
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            self._set_state(ProbeState.CANCELLED)
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._set_state(ProbeState.CANCELLED)

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            if self._start_delay > 0:
                logging.info(
                    f"Probe for {self._target.label} starting in {self._start_delay:.1f}s"
                )
                await asyncio.sleep(self._start_delay)

            logging.info(
                f"Probe loop for {self._target.label} running - every {self._interval:g}s"
            )
            next_tick = loop.time() + self._interval
            while True:
                await asyncio.sleep(max(0.0, next_tick - loop.time()))
                await self.tick()

                next_tick += self._interval
                now = loop.time()
                if next_tick <= now:
                    dropped = int((now - next_tick) // self._interval) + 1
                    next_tick += dropped * self._interval
                    logging.warning(
                        f"Probe tick for {self._target.label} overran the interval, "
                        f"dropped {dropped} tick(s)"
                    )
        except asyncio.CancelledError:
            self._set_state(ProbeState.CANCELLED)
            logging.debug(f"Probe loop for {self._target.label} cancelled")
            raise

    async def tick(self) -> bool:
        """Run one probe tick. Returns True when the mount succeeded."""
        self._tick_count += 1
        if self._status_registry is not None:
            self._status_registry.record_tick(self._target, datetime.now())

        try:
            self._set_state(ProbeState.MOUNTING)
            outcome = await self._mount_service.mount_target(self._target, self._timeout)
            if not outcome.success:
                return False

            if self._read_write_enabled:
                self._set_state(ProbeState.WRITE_VERIFY)
                await self._verifier.write_test_files(self._target)
                self._set_state(ProbeState.READ_VERIFY)
                await self._verifier.read_test_files(self._target)
            return True

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logging.error(f"Error in probe tick for {self._target.label}: {e}", exc_info=True)
            return False
        finally:
            if self._state != ProbeState.CANCELLED:
                self._set_state(ProbeState.IDLE)

    def _set_state(self, state: ProbeState) -> None:
        self._state = state
        if self._status_registry is not None:
            self._status_registry.set_state(self._target, state)
