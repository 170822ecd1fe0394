import logging
import threading
from enum import Enum


class ReadinessState(str, Enum):
    NOT_READY = "not ready"
    READY = "ready"


class ReadinessSignal:
    """
    One-shot NOT_READY -> READY transition.

    Written once by the fleet launcher after every scheduler has been
    dispatched, read by the health endpoint. Never goes back to NOT_READY.
    """

    def __init__(self):
        self._event = threading.Event()

    def mark_ready(self) -> None:
        if self._event.is_set():
            return
        self._event.set()
        logging.info("Prober marked ready - all target schedulers dispatched")

    def is_ready(self) -> bool:
        return self._event.is_set()

    @property
    def state(self) -> ReadinessState:
        return ReadinessState.READY if self._event.is_set() else ReadinessState.NOT_READY
