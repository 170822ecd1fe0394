"""
Tests for the per-target ProbeScheduler state machine and loop.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from nfs_prober.models import OperationKind, ProbeOutcome, ProbeState
from nfs_prober.services.network_mount.mount_service import NetworkMountService
from nfs_prober.services.reporting.status_registry import TargetStatusRegistry
from nfs_prober.services.scheduler.probe_scheduler import ProbeScheduler
from nfs_prober.services.verification.file_verifier import FileVerificationService


def _mount_outcome(target, success=True):
    return ProbeOutcome(
        target=target,
        operation=OperationKind.MOUNT,
        success=success,
        duration_seconds=0.01,
        error_detail=None if success else "mount.nfs: No such file or directory",
    )


@pytest.fixture
def mock_mount_service(target):
    service = Mock(spec=NetworkMountService)
    service.mount_target = AsyncMock(return_value=_mount_outcome(target))
    return service


@pytest.fixture
def mock_verifier():
    verifier = Mock(spec=FileVerificationService)
    verifier.write_test_files = AsyncMock(return_value=[])
    verifier.read_test_files = AsyncMock(return_value=[])
    return verifier


def _scheduler(target, mount_service, verifier, **kwargs):
    options = dict(interval_seconds=60.0, timeout_seconds=0.25, read_write_enabled=True)
    options.update(kwargs)
    return ProbeScheduler(target=target, mount_service=mount_service, verifier=verifier, **options)


@pytest.mark.asyncio
async def test_tick_mounts_then_writes_then_reads(target, mock_mount_service, mock_verifier):
    order = []
    mock_mount_service.mount_target.side_effect = (
        lambda t, timeout: order.append("mount") or _mount_outcome(t)
    )
    mock_verifier.write_test_files.side_effect = lambda t: order.append("write") or []
    mock_verifier.read_test_files.side_effect = lambda t: order.append("read") or []
    scheduler = _scheduler(target, mock_mount_service, mock_verifier)

    assert await scheduler.tick() is True

    assert order == ["mount", "write", "read"]
    mock_mount_service.mount_target.assert_awaited_once_with(target, 0.25)
    assert scheduler.state == ProbeState.IDLE
    assert scheduler.tick_count == 1


@pytest.mark.asyncio
async def test_failed_mount_skips_verification(target, mock_mount_service, mock_verifier):
    mock_mount_service.mount_target.return_value = _mount_outcome(target, success=False)
    scheduler = _scheduler(target, mock_mount_service, mock_verifier)

    assert await scheduler.tick() is False

    mock_mount_service.mount_target.assert_awaited_once()
    mock_verifier.write_test_files.assert_not_awaited()
    mock_verifier.read_test_files.assert_not_awaited()
    assert scheduler.state == ProbeState.IDLE


@pytest.mark.asyncio
async def test_verification_disabled(target, mock_mount_service, mock_verifier):
    scheduler = _scheduler(target, mock_mount_service, mock_verifier, read_write_enabled=False)

    assert await scheduler.tick() is True

    mock_verifier.write_test_files.assert_not_awaited()
    mock_verifier.read_test_files.assert_not_awaited()


@pytest.mark.asyncio
async def test_states_during_tick(target, mock_mount_service, mock_verifier):
    seen = []
    scheduler = _scheduler(target, mock_mount_service, mock_verifier)

    async def record_mount(t, timeout):
        seen.append(scheduler.state)
        return _mount_outcome(t)

    async def record_write(t):
        seen.append(scheduler.state)
        return []

    async def record_read(t):
        seen.append(scheduler.state)
        return []

    mock_mount_service.mount_target.side_effect = record_mount
    mock_verifier.write_test_files.side_effect = record_write
    mock_verifier.read_test_files.side_effect = record_read

    await scheduler.tick()

    assert seen == [ProbeState.MOUNTING, ProbeState.WRITE_VERIFY, ProbeState.READ_VERIFY]
    assert scheduler.state == ProbeState.IDLE


@pytest.mark.asyncio
async def test_unexpected_error_in_tick_is_contained(target, mock_mount_service, mock_verifier):
    mock_verifier.write_test_files.side_effect = RuntimeError("boom")
    scheduler = _scheduler(target, mock_mount_service, mock_verifier)

    assert await scheduler.tick() is False
    assert scheduler.state == ProbeState.IDLE


@pytest.mark.asyncio
async def test_loop_ticks_on_interval_and_stops(target, mock_mount_service, mock_verifier):
    scheduler = _scheduler(target, mock_mount_service, mock_verifier, interval_seconds=0.05)

    scheduler.start()
    await asyncio.sleep(0.28)
    await scheduler.stop()

    assert 3 <= mock_mount_service.mount_target.await_count <= 6
    assert scheduler.state == ProbeState.CANCELLED
    assert scheduler.is_running is False


@pytest.mark.asyncio
async def test_first_tick_waits_for_start_delay(target, mock_mount_service, mock_verifier):
    scheduler = _scheduler(
        target, mock_mount_service, mock_verifier, interval_seconds=0.05, start_delay=0.3
    )

    scheduler.start()
    await asyncio.sleep(0.2)
    assert mock_mount_service.mount_target.await_count == 0
    await asyncio.sleep(0.3)
    await scheduler.stop()

    assert mock_mount_service.mount_target.await_count >= 1


@pytest.mark.asyncio
async def test_ticks_never_overlap_for_one_target(target, mock_mount_service, mock_verifier):
    in_flight = 0
    max_in_flight = 0

    async def slow_mount(t, timeout):
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0.12)
        in_flight -= 1
        return _mount_outcome(t)

    mock_mount_service.mount_target.side_effect = slow_mount
    scheduler = _scheduler(target, mock_mount_service, mock_verifier, interval_seconds=0.03)

    scheduler.start()
    await asyncio.sleep(0.5)
    await scheduler.stop()

    assert max_in_flight == 1
    assert mock_mount_service.mount_target.await_count >= 2


@pytest.mark.asyncio
async def test_failures_do_not_end_the_loop(target, mock_mount_service, mock_verifier):
    mock_mount_service.mount_target.side_effect = RuntimeError("unexpected")
    scheduler = _scheduler(target, mock_mount_service, mock_verifier, interval_seconds=0.03)

    scheduler.start()
    await asyncio.sleep(0.2)
    assert scheduler.is_running
    await scheduler.stop()

    assert mock_mount_service.mount_target.await_count >= 2


@pytest.mark.asyncio
async def test_start_twice_returns_same_task(target, mock_mount_service, mock_verifier):
    scheduler = _scheduler(target, mock_mount_service, mock_verifier)

    first = scheduler.start()
    second = scheduler.start()
    await scheduler.stop()

    assert first is second


@pytest.mark.asyncio
async def test_stop_before_start(target, mock_mount_service, mock_verifier):
    scheduler = _scheduler(target, mock_mount_service, mock_verifier)
    await scheduler.stop()
    assert scheduler.state == ProbeState.CANCELLED


@pytest.mark.asyncio
async def test_status_registry_tracks_ticks_and_state(target, mock_mount_service, mock_verifier):
    registry = TargetStatusRegistry()
    scheduler = _scheduler(target, mock_mount_service, mock_verifier, status_registry=registry)

    await scheduler.tick()
    await scheduler.tick()

    status = registry.get(target)
    assert status.tick_count == 2
    assert status.last_tick_at is not None
    assert status.state == ProbeState.IDLE

    await scheduler.stop()
    assert registry.get(target).state == ProbeState.CANCELLED
