"""Thread-safe scalar values for publishing readings.

A polling task stores the latest absolute reading (e.g. lifetime energy in
Wh) in a :class:`ConcurrentScalar`; a metrics exporter running in another
thread reads it through ``get`` without further synchronisation.

Example:
    total_wh = ConcurrentScalar()

    # polling task
    session = await client.fetch_session()
    total_wh.set(session.total_energy_wh)

    # exporter thread
    exporter.register_callback("energy_total_wh", total_wh.get)
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Lock allowing many concurrent readers or a single writer.

    Waiting writers block new readers, so a steady stream of reads cannot
    starve a writer.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True

    def release_write(self) -> None:
        with self._cond:
            self._writing = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class ConcurrentScalar:
    """A float guarded by a reader/writer lock.

    Readers never observe a partially written value. There is no ordering
    guarantee between a writer and a concurrent reader beyond that, and no
    atomicity across separate ConcurrentScalar instances.
    """

    def __init__(self, value: float = 0.0) -> None:
        self._value = float(value)
        self._lock = ReadWriteLock()

    def set(self, value: float) -> None:
        with self._lock.write_locked():
            self._value = float(value)

    def get(self) -> float:
        with self._lock.read_locked():
            return self._value

    def __repr__(self) -> str:
        return f"ConcurrentScalar({self.get()!r})"


__all__ = ["ConcurrentScalar", "ReadWriteLock"]
