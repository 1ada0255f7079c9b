from __future__ import annotations

import threading


class SequenceClock:
    """Monotonic sequence counter handed to the registry as `now`.

    Stands in for a block height: every mutating request takes one tick, reads
    observe the current value without advancing it.
    """

    def __init__(self, start: int = 0) -> None:
        if int(start) < 0:
            raise ValueError("start must be >= 0")
        self._lock = threading.Lock()
        self._value = int(start)

    def current(self) -> int:
        with self._lock:
            return self._value

    def tick(self) -> int:
        with self._lock:
            self._value += 1
            return self._value
