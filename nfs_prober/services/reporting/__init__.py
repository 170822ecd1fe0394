"""
Outcome reporting.

- OutcomeReporter: logs every probe outcome and publishes it on the event bus
- TargetStatusRegistry: keeps the latest state per target for the status API
"""

from .outcome_reporter import OutcomeReporter
from .status_registry import TargetStatusRegistry

__all__ = ["OutcomeReporter", "TargetStatusRegistry"]
