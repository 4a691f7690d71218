import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle")


class StageTimer:
    """Collects per-stage wall time (ms) for one solve request or test-file run.

    The server times "search" and "sort" per /solve call; the test runner
    times "index" (building the prefix index) and "solve" per file. Each stage
    is logged under `label` as it finishes, including stages that raise.
    """

    def __init__(self, label: str = "request"):
        self.label = label
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)
            logger.info("%s stage=%s elapsed=%.1fms", self.label, name, self.timings[name])

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}
