from datetime import datetime
from typing import Dict, List, Optional

from ...core.events.probe_events import ProbeOutcomeEvent
from ...models import OperationKind, OperationSnapshot, ProbeState, Target, TargetStatus


class TargetStatusRegistry:
    """Latest known state of every target. Only touched from the event loop."""

    def __init__(self):
        self._statuses: Dict[Target, TargetStatus] = {}

    def register(self, target: Target) -> TargetStatus:
        if target not in self._statuses:
            self._statuses[target] = TargetStatus(
                address=target.address,
                mount_point=target.remote_export_path,
                local_mount_path=target.local_mount_path,
            )
        return self._statuses[target]

    def set_state(self, target: Target, state: ProbeState) -> None:
        self.register(target).state = state

    def record_tick(self, target: Target, started_at: Optional[datetime] = None) -> None:
        status = self.register(target)
        status.tick_count += 1
        status.last_tick_at = started_at or datetime.now()

    async def handle_outcome(self, event: ProbeOutcomeEvent) -> None:
        outcome = event.outcome
        status = self.register(outcome.target)
        status.last_outcomes[outcome.operation] = OperationSnapshot.from_outcome(outcome)
        if outcome.operation == OperationKind.MOUNT:
            status.mounted = outcome.success

    def get(self, target: Target) -> Optional[TargetStatus]:
        return self._statuses.get(target)

    def get_all(self) -> List[TargetStatus]:
        return sorted(self._statuses.values(), key=lambda s: (s.address, s.mount_point))
