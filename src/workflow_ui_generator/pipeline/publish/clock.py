"""Injectable time source for the publish polling loop."""

from __future__ import annotations

import threading
import time
from typing import Protocol


class Clock(Protocol):
    def wait(self, seconds: float, cancel_event: threading.Event | None = None) -> bool:
        """Block for ``seconds``. Return True if cancelled before the delay elapsed."""
        ...


class SystemClock:
    def wait(self, seconds: float, cancel_event: threading.Event | None = None) -> bool:
        if cancel_event is None:
            time.sleep(seconds)
            return False
        return cancel_event.wait(seconds)
