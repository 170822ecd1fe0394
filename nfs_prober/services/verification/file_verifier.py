import logging
import secrets
import time
from typing import Callable, List, Optional

import aiofiles

from ..reporting.outcome_reporter import OutcomeReporter
from ...core.exceptions import ReadError, WriteError
from ...models import OperationKind, ProbeOutcome, Target

PayloadFactory = Callable[[int], bytes]


def _size_mismatch(actual: int, expected: int) -> str:
    return f"got {actual} bytes from file, but expected {expected} bytes"


class FileVerificationService:
    """
    Writes and reads back test files on a mounted target.

    Every file index yields exactly one outcome per operation, and a failure
    on one index never stops the remaining indices. Random payloads keep
    compression and caching from skewing the timings; only their length is
    verified.
    """

    def __init__(
        self,
        reporter: OutcomeReporter,
        num_files: int,
        file_size_bytes: int,
        payload_factory: Optional[PayloadFactory] = None,
    ):
        self._reporter = reporter
        self._num_files = num_files
        self._file_size = file_size_bytes
        self._payload_factory = payload_factory or secrets.token_bytes

    @property
    def num_files(self) -> int:
        return self._num_files

    @property
    def file_size_bytes(self) -> int:
        return self._file_size

    async def write_test_files(self, target: Target) -> List[ProbeOutcome]:
        outcomes = []
        for index in range(self._num_files):
            outcomes.append(await self._write_one(target, index))
        return outcomes

    async def read_test_files(self, target: Target) -> List[ProbeOutcome]:
        outcomes = []
        for index in range(self._num_files):
            outcomes.append(await self._read_one(target, index))
        return outcomes

    async def _write_one(self, target: Target, index: int) -> ProbeOutcome:
        path = target.test_file_path(index)

        try:
            payload = self._payload_factory(self._file_size)
        except Exception as e:
            return await self._finish(
                target, OperationKind.WRITE, index, path, 0.0,
                f"could not create test file payload: {e}",
            )

        start_time = time.perf_counter()
        try:
            await self._write_file(path, payload)
        except WriteError as e:
            duration = time.perf_counter() - start_time
            return await self._finish(target, OperationKind.WRITE, index, path, duration, str(e))
        duration = time.perf_counter() - start_time

        # Checks the generator, not the filesystem
        error = None
        if len(payload) != self._file_size:
            error = _size_mismatch(len(payload), self._file_size)
        return await self._finish(target, OperationKind.WRITE, index, path, duration, error)

    async def _read_one(self, target: Target, index: int) -> ProbeOutcome:
        path = target.test_file_path(index)

        start_time = time.perf_counter()
        try:
            data = await self._read_file(path)
        except ReadError as e:
            duration = time.perf_counter() - start_time
            return await self._finish(target, OperationKind.READ, index, path, duration, str(e))
        duration = time.perf_counter() - start_time

        error = None
        if len(data) != self._file_size:
            error = _size_mismatch(len(data), self._file_size)
        return await self._finish(target, OperationKind.READ, index, path, duration, error)

    async def _write_file(self, path: str, payload: bytes) -> None:
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(payload)
        except OSError as e:
            raise WriteError(f"could not write {path}: {e}") from e

    async def _read_file(self, path: str) -> bytes:
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise ReadError(f"could not read {path}: {e}") from e

    async def _finish(
        self,
        target: Target,
        operation: OperationKind,
        index: int,
        path: str,
        duration: float,
        error: Optional[str],
    ) -> ProbeOutcome:
        if error:
            logging.debug(f"{operation.value} of test file {index} failed on {target.label}: {error}")
        outcome = ProbeOutcome(
            target=target,
            operation=operation,
            success=error is None,
            duration_seconds=duration,
            error_detail=error,
            file_index=index,
            file_path=path,
        )
        await self._reporter.report(outcome)
        return outcome
