"""
Wall-clock timing of solver stages.

A Timer is created at the start of a solve and read once at the end;
the dict it returns becomes Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Per-solve stage timer. The clock starts on construction.

        timer = Timer()
        with timer.section('qr_decomposition'):
            ...
        timer.elapsed()
        # {'total_seconds': 0.004, 'qr_decomposition': 0.003}
    """

    def __init__(self):
        self._origin = time.perf_counter()
        self._stages: dict[str, float] = {}

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the block to stage `name`, even if it raises."""
        begin = time.perf_counter()
        try:
            yield
        finally:
            self._stages[name] = self._stages.get(name, 0.0) + time.perf_counter() - begin

    def stage(self, name: str) -> float:
        """Seconds recorded so far for one stage; 0.0 if it never ran."""
        return self._stages.get(name, 0.0)

    def elapsed(self) -> dict[str, float]:
        """Total seconds since construction plus the time of every stage."""
        return {'total_seconds': time.perf_counter() - self._origin, **self._stages}
