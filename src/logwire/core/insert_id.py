"""Insert id generation.

The ingestion API orders entries that share a timestamp by their insert
id, which must also be unique within the project. Ids are fixed width so
that comparing them as strings matches the order they were generated in.
"""

import secrets
import threading
import time
from collections.abc import Callable

_MILLIS_WIDTH = 15
_SALT_BYTES = 4
_COUNTER_WIDTH = 12


class InsertIdGenerator:
    """Thread-safe generator of unique, lexically ordered insert ids.

    Each id is ``<millis><salt><counter>``: milliseconds since the epoch,
    a random salt drawn once per generator, and a counter that increments
    on every call.

    Args:
        clock: Returns the current time in seconds (default: time.time).
        salt: Fixed salt, mainly for tests (default: random hex).
    """

    def __init__(
        self,
        clock: Callable[[], float] | None = None,
        salt: str | None = None,
    ) -> None:
        self._clock = clock or time.time
        self._salt = salt if salt is not None else secrets.token_hex(_SALT_BYTES)
        self._lock = threading.Lock()
        self._last_millis = 0
        self._counter = 0

    @property
    def salt(self) -> str:
        return self._salt

    def next(self) -> str:
        """Return the next insert id."""
        with self._lock:
            # Never step back when the wall clock is adjusted.
            millis = max(int(self._clock() * 1000), self._last_millis)
            self._last_millis = millis
            self._counter += 1
            counter = self._counter
        return f"{millis:0{_MILLIS_WIDTH}d}{self._salt}{counter:0{_COUNTER_WIDTH}d}"


_default_generator = InsertIdGenerator()


def new_insert_id() -> str:
    """Return an id from the process-wide default generator."""
    return _default_generator.next()
