from typing import Any, Dict, Optional

from .config import Settings
from .core.events.event_bus import DomainEventBus
from .core.events.probe_events import ProbeOutcomeEvent
from .core.readiness import ReadinessSignal
from .services.fleet import FleetLauncher, ProbeConfiguration
from .services.metrics import ProbeMetrics
from .services.network_mount import NetworkMountService, PlatformFactory
from .services.reporting import OutcomeReporter, TargetStatusRegistry
from .services.verification import FileVerificationService

# Global singleton instances
_singletons: Dict[str, Any] = {}


def configure_settings(settings: Settings) -> None:
    """Install settings built outside the environment (e.g. from CLI flags)."""
    _singletons["settings"] = settings


def get_settings() -> Settings:
    if "settings" not in _singletons:
        _singletons["settings"] = Settings()
    return _singletons["settings"]


def get_event_bus() -> DomainEventBus:
    if "event_bus" not in _singletons:
        _singletons["event_bus"] = DomainEventBus()
    return _singletons["event_bus"]


def get_readiness() -> ReadinessSignal:
    if "readiness" not in _singletons:
        _singletons["readiness"] = ReadinessSignal()
    return _singletons["readiness"]


def get_metrics() -> ProbeMetrics:
    if "metrics" not in _singletons:
        _singletons["metrics"] = ProbeMetrics()
    return _singletons["metrics"]


def get_status_registry() -> TargetStatusRegistry:
    if "status_registry" not in _singletons:
        _singletons["status_registry"] = TargetStatusRegistry()
    return _singletons["status_registry"]


def get_reporter() -> OutcomeReporter:
    if "reporter" not in _singletons:
        _singletons["reporter"] = OutcomeReporter(get_event_bus())
    return _singletons["reporter"]


def get_mount_service() -> NetworkMountService:
    if "mount_service" not in _singletons:
        settings = get_settings()
        _singletons["mount_service"] = NetworkMountService(
            mounter=PlatformFactory().create_mounter(),
            reporter=get_reporter(),
            fs_type=settings.nfs_version,
        )
    return _singletons["mount_service"]


def get_verifier() -> FileVerificationService:
    if "verifier" not in _singletons:
        settings = get_settings()
        _singletons["verifier"] = FileVerificationService(
            reporter=get_reporter(),
            num_files=settings.effective_num_files,
            file_size_bytes=settings.file_size_bytes,
        )
    return _singletons["verifier"]


def get_fleet_launcher() -> FleetLauncher:
    if "fleet_launcher" not in _singletons:
        settings = get_settings()
        config = ProbeConfiguration(
            interval_seconds=settings.interval_seconds,
            timeout_seconds=settings.timeout_seconds,
            read_write_enabled=settings.rw_test_files,
            startup_stagger_seconds=settings.startup_stagger_seconds,
        )
        _singletons["fleet_launcher"] = FleetLauncher(
            targets=settings.target_list,
            config=config,
            mount_service=get_mount_service(),
            verifier=get_verifier(),
            readiness=get_readiness(),
            status_registry=get_status_registry(),
        )
    return _singletons["fleet_launcher"]


async def subscribe_outcome_handlers(settings: Optional[Settings] = None) -> None:
    """Wire the metrics store and status registry to probe outcome events."""
    settings = settings or get_settings()
    event_bus = get_event_bus()
    await event_bus.subscribe(ProbeOutcomeEvent, get_status_registry().handle_outcome)
    if settings.use_prometheus:
        await event_bus.subscribe(ProbeOutcomeEvent, get_metrics().handle_outcome)


def reset_singletons() -> None:
    """Reset all singletons. Used by tests."""
    _singletons.clear()
