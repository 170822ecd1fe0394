import logging

from ...core.events.event_bus import DomainEventBus
from ...core.events.probe_events import ProbeOutcomeEvent
from ...models import OperationKind, ProbeOutcome

_MESSAGES = {
    OperationKind.MOUNT: ("mount successful", "could not mount"),
    OperationKind.WRITE: ("write test file", "could not write test file"),
    OperationKind.READ: ("read test file", "could not read test file"),
}


class OutcomeReporter:
    """Single sink for probe outcomes: one log line, then one event on the bus."""

    def __init__(self, event_bus: DomainEventBus):
        self._event_bus = event_bus

    async def report(self, outcome: ProbeOutcome) -> None:
        self._log(outcome)
        try:
            await self._event_bus.publish(ProbeOutcomeEvent(outcome=outcome))
        except Exception as e:
            logging.error(f"Error publishing ProbeOutcomeEvent: {e}")

    def _log(self, outcome: ProbeOutcome) -> None:
        target = outcome.target
        fields = {
            "success": outcome.success,
            "address": target.address,
            "mountPoint": target.remote_export_path,
            "duration": round(outcome.duration_seconds, 6),
        }
        if outcome.error_detail:
            fields["err"] = outcome.error_detail
        if outcome.file_path:
            fields["file"] = outcome.file_path

        success_message, failure_message = _MESSAGES[outcome.operation]
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        extra = {"operation": f"nfs_{outcome.operation.value}", **fields}

        if outcome.success:
            logging.info(f"{success_message} {rendered}", extra=extra)
        else:
            logging.warning(f"{failure_message} {rendered}", extra=extra)
