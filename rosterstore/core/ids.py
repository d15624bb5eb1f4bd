import time
from threading import Lock
from typing import Iterable


class IdGenerator:
    """Time-derived string ids, strictly increasing within one process.

    Ids already in the store are fed to ``observe`` on load, so a clock that
    is behind the stored data cannot hand out an id that is already taken.
    """

    def __init__(self, clock=None) -> None:
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = Lock()

    def next_id(self) -> str:
        with self._lock:
            current = max(self._clock(), self._last + 1)
            self._last = current
            return str(current)

    def observe(self, entity_ids: Iterable[str]) -> None:
        """Raise the floor above every numeric id (or ``<base>-<index>`` base) seen."""
        with self._lock:
            for entity_id in entity_ids:
                base = str(entity_id).split('-', 1)[0]
                if base.isdecimal():
                    self._last = max(self._last, int(base))


def member_id(base_id: str, index: int) -> str:
    return f'{base_id}-{index}'
