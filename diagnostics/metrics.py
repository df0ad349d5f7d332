# diagnostics/metrics.py
from __future__ import annotations

from collections import deque
import time
from typing import Deque, Dict, Any

import numpy as np


# -----------------------------
# Metric keys
# -----------------------------
CPI_LATENCY = "cpi_latency_s"
SMI_LATENCY = "smi_latency_s"
CFAR_DETECTIONS = "cfar_detections_total"
TARGETS_VISIBLE = "targets_visible_last_pulse"
SNAPSHOTS_DRAWN = "smi_snapshots_total"


def _latency_summary(samples: Deque[float]) -> Dict[str, float]:
    if not samples:
        return {"count": 0, "mean_s": 0.0, "p95_s": 0.0, "max_s": 0.0}
    arr = np.fromiter(samples, dtype=float)
    return {
        "count": arr.size,
        "mean_s": float(arr.mean()),
        "p95_s": float(np.percentile(arr, 95, method="lower")),
        "max_s": float(arr.max()),
    }


class MetricsRegistry:
    """
    Bookkeeping for simulation runs.

    counters: totals across runs (detections, snapshots drawn)
    gauges:   last observed value (targets visible in the last pulse)
    timers:   latency of the last ``window_size`` CPI / SMI runs
    """

    def __init__(self, window_size: int = 200):
        self.window_size = int(window_size)
        self._counters: Dict[str, int] = {}
        self._gauges: Dict[str, float] = {}
        self._timers: Dict[str, Deque[float]] = {}

    def inc(self, key: str, amount: int = 1) -> None:
        self._counters[key] = self.counter(key) + int(amount)

    def set_gauge(self, key: str, value: float) -> None:
        self._gauges[key] = float(value)

    def observe(self, key: str, value_s: float) -> None:
        window = self._timers.setdefault(key, deque(maxlen=self.window_size))
        window.append(float(value_s))

    def counter(self, key: str) -> int:
        return self._counters.get(key, 0)

    def gauge(self, key: str, default: float = 0.0) -> float:
        return self._gauges.get(key, default)

    def reset(self) -> None:
        self._counters.clear()
        self._gauges.clear()
        self._timers.clear()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
            "timers": {k: _latency_summary(v) for k, v in self._timers.items()},
        }


class Timer:
    """
    Times a processing stage into ``metrics`` under ``key``.

    With metrics=None the stage is still timed (``elapsed_s``) but nothing
    is recorded, so callers never need to branch on an optional registry.
    """

    def __init__(self, metrics: MetricsRegistry | None, key: str):
        self.metrics = metrics
        self.key = key
        self.elapsed_s = 0.0
        self._start = 0.0

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed_s = time.perf_counter() - self._start
        if self.metrics is not None:
            self.metrics.observe(self.key, self.elapsed_s)
        return False
