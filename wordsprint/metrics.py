import logging
import time
from collections import defaultdict
from contextlib import contextmanager

logger = logging.getLogger("wordsprint")


class StageTimer:
    """Wall-clock time per named stage, in milliseconds.

    Re-entering a stage adds to its total, so a loop can time every
    iteration under one name; ``counts`` records how often each ran.
    """

    def __init__(self, log_level: int = logging.INFO):
        self.timings: dict[str, float] = defaultdict(float)
        self.counts: dict[str, int] = defaultdict(int)
        self.log_level = log_level
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] += (time.perf_counter() - t0) * 1000
            self.counts[name] += 1

    def log(self, **extra):
        parts = " ".join(f"{name}={ms:.1f}ms" for name, ms in self.timings.items())
        details = "".join(f" {k}={v}" for k, v in extra.items())
        logger.log(self.log_level, "timings %s total=%.1fms%s", parts, self.total_ms, details)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**{k: round(v, 1) for k, v in self.timings.items()}, "total": self.total_ms}
