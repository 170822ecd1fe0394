"""
Pytest configuration og shared fixtures.
"""

from typing import List
from unittest.mock import AsyncMock, Mock

import pytest

from nfs_prober.core.exceptions import MountError
from nfs_prober.dependencies import reset_singletons
from nfs_prober.models import ProbeOutcome, Target
from nfs_prober.services.network_mount.base_mounter import BaseMounter
from nfs_prober.services.reporting.outcome_reporter import OutcomeReporter


@pytest.fixture(autouse=True)
def clean_singletons():
    """Automatically reset singletons before each test."""
    reset_singletons()
    yield
    reset_singletons()


@pytest.fixture
def local_root(tmp_path) -> str:
    root = tmp_path / "mounts"
    root.mkdir()
    return str(root)


@pytest.fixture
def target(local_root) -> Target:
    return Target(address="10.0.0.1", remote_mount_point="/exportA", local_root=local_root)


@pytest.fixture
def mock_mounter():
    """Mounter whose unmount always fails (nothing mounted) and whose mount succeeds."""
    mounter = Mock(spec=BaseMounter)
    mounter.attempt_mount = AsyncMock(return_value=None)
    mounter.release = AsyncMock(side_effect=MountError("/mnt", "not mounted"))
    mounter.get_platform_name = Mock(return_value="Test")
    return mounter


@pytest.fixture
def mock_reporter():
    reporter = Mock(spec=OutcomeReporter)
    reporter.report = AsyncMock()
    return reporter


@pytest.fixture
def reported_outcomes(mock_reporter):
    """Callable returning all outcomes handed to the mocked reporter, in order."""

    def _outcomes() -> List[ProbeOutcome]:
        return [call.args[0] for call in mock_reporter.report.await_args_list]

    return _outcomes
