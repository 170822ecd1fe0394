"""Network Mount Service - idempotent unmount-then-mount of one target."""

import asyncio
import logging
import time

from .base_mounter import BaseMounter
from ..reporting.outcome_reporter import OutcomeReporter
from ...core.exceptions import MountError
from ...models import OperationKind, ProbeOutcome, Target


class NetworkMountService:
    """Mounts targets and reports one mount outcome per attempt."""

    def __init__(self, mounter: BaseMounter, reporter: OutcomeReporter, fs_type: str = "nfs"):
        self._mounter = mounter
        self._reporter = reporter
        self._fs_type = fs_type

    @staticmethod
    def mount_options(target: Target) -> str:
        return f"nolock,addr={target.address}"

    async def mount_target(self, target: Target, timeout: float) -> ProbeOutcome:
        """
        Unmount any previous mount, then mount the target's prober export.

        Only the mount call is timed and bounded by ``timeout``. On failure the
        local path is unmounted again so no partial mount is left behind.
        """
        await self.release_quietly(target)

        error_detail = None
        start_time = time.perf_counter()
        try:
            await asyncio.wait_for(
                self._mounter.attempt_mount(
                    target.mount_source,
                    target.local_mount_path,
                    self._fs_type,
                    self.mount_options(target),
                ),
                timeout=timeout,
            )
            duration = time.perf_counter() - start_time
        except asyncio.TimeoutError:
            # Loop timers may fire up to one clock tick early
            duration = max(time.perf_counter() - start_time, timeout)
            error_detail = f"mount timed out after {timeout:g}s"
        except MountError as e:
            duration = time.perf_counter() - start_time
            error_detail = e.detail
        except Exception as e:
            duration = time.perf_counter() - start_time
            error_detail = f"unexpected mount error: {e}"

        if error_detail is not None:
            await self.release_quietly(target)

        outcome = ProbeOutcome(
            target=target,
            operation=OperationKind.MOUNT,
            success=error_detail is None,
            duration_seconds=duration,
            error_detail=error_detail,
        )
        await self._reporter.report(outcome)
        return outcome

    async def release_quietly(self, target: Target) -> None:
        """Unmount the target's local path. Not being mounted is not an error."""
        try:
            await self._mounter.release(target.local_mount_path)
        except MountError as e:
            logging.debug(f"Ignoring unmount error for {target.local_mount_path}: {e.detail}")
        except Exception as e:
            logging.debug(f"Ignoring unexpected unmount error for {target.local_mount_path}: {e}")

    def get_platform_name(self) -> str:
        return self._mounter.get_platform_name()
