"""
Identity generators.

The domain only needs a single capability from its identity source:
``create() -> UUID``. Two generators are provided:

- ``RandomIdentityGenerator``: plain ``uuid4`` values.
- ``SequentialIdentityGenerator``: UUIDs whose leading 48 bits are the
  current Unix time in milliseconds, so ids created later sort later.
  Relational primary key indexes fragment much less with these.
"""

import os
import threading
import time
from typing import Protocol
from uuid import UUID, uuid4


class IdentityGenerator(Protocol):
    """Supplies globally unique identifiers on demand."""

    def create(self) -> UUID: ...


class RandomIdentityGenerator:
    """Identity generator backed by ``uuid4``."""

    def create(self) -> UUID:
        return uuid4()


class SequentialIdentityGenerator:
    """
    Time-ordered identity generator.

    Layout follows UUIDv7: 48-bit millisecond timestamp, 4-bit version,
    12 bits of counter, 2-bit variant, 62 random bits. The counter keeps
    ids monotonic when several are created within the same millisecond.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_ms = 0
        self._counter = 0

    def _next_tick(self) -> tuple[int, int]:
        with self._lock:
            now_ms = time.time_ns() // 1_000_000
            if now_ms > self._last_ms:
                self._last_ms = now_ms
                self._counter = 0
            else:
                self._counter += 1
                if self._counter > 0xFFF:
                    # Counter exhausted: borrow the next millisecond
                    self._last_ms += 1
                    self._counter = 0
            return self._last_ms, self._counter

    def create(self) -> UUID:
        timestamp_ms, counter = self._next_tick()
        rand = int.from_bytes(os.urandom(8), "big") & ((1 << 62) - 1)

        value = (timestamp_ms & ((1 << 48) - 1)) << 80
        value |= 0x7 << 76
        value |= counter << 64
        value |= 0b10 << 62
        value |= rand
        return UUID(int=value)
