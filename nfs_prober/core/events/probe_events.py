from dataclasses import dataclass

from nfs_prober.core.events.domain_event import DomainEvent
from nfs_prober.models import ProbeOutcome


@dataclass(frozen=True, kw_only=True)
class ProbeOutcomeEvent(DomainEvent):
    """Event published once for every mount, write and read outcome."""
    outcome: ProbeOutcome
