from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Hashable

from section_notes.settings import DELETE_CONFIRM_WINDOW_S


class ConfirmState(Enum):
    DISARMED = "disarmed"
    ARMED = "armed"


class DeleteConfirmTracker:
    """
    Two-step delete: the first press arms a key for `window_s` seconds,
    a second press inside the window confirms.

    Expiry is checked against `clock` on every query instead of relying on
    a timer callback, so tests can drive time by hand.
    """

    def __init__(
        self,
        *,
        window_s: float = DELETE_CONFIRM_WINDOW_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if window_s <= 0:
            raise ValueError("window_s must be > 0")
        self._window_s = float(window_s)
        self._clock = clock
        self._armed_until: dict[Hashable, float] = {}

    def state(self, key: Hashable) -> ConfirmState:
        expiry = self._armed_until.get(key)
        if expiry is None:
            return ConfirmState.DISARMED
        if self._clock() >= expiry:
            del self._armed_until[key]
            return ConfirmState.DISARMED
        return ConfirmState.ARMED

    def is_armed(self, key: Hashable) -> bool:
        return self.state(key) is ConfirmState.ARMED

    def press(self, key: Hashable) -> bool:
        """Returns True when this press confirms the delete."""
        if self.is_armed(key):
            del self._armed_until[key]
            return True
        self._armed_until[key] = self._clock() + self._window_s
        return False

    def expire(self) -> list[Hashable]:
        """Disarm everything past its window. Returns the keys that just disarmed."""
        now = self._clock()
        gone = [k for k, until in self._armed_until.items() if now >= until]
        for k in gone:
            del self._armed_until[k]
        return gone

    def forget(self, key: Hashable) -> None:
        self._armed_until.pop(key, None)

    @property
    def armed_count(self) -> int:
        return len(self._armed_until)
