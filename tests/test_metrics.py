import logging

import pytest

from diagnostics.logger import configure_logging, logger
from diagnostics.metrics import MetricsRegistry, Timer, CPI_LATENCY, CFAR_DETECTIONS


def test_counters_and_gauges():
    metrics = MetricsRegistry()

    metrics.inc(CFAR_DETECTIONS)
    metrics.inc(CFAR_DETECTIONS, 4)
    metrics.set_gauge("targets", 3)

    assert metrics.counter(CFAR_DETECTIONS) == 5
    assert metrics.counter("missing") == 0
    assert metrics.gauge("targets") == 3.0
    assert metrics.gauge("missing", default=-1.0) == -1.0


def test_timer_window_and_summary():
    metrics = MetricsRegistry(window_size=3)
    for value in (1.0, 2.0, 3.0, 4.0):
        metrics.observe(CPI_LATENCY, value)

    summary = metrics.snapshot()["timers"][CPI_LATENCY]

    assert summary["count"] == 3
    assert summary["mean_s"] == pytest.approx(3.0)
    assert summary["max_s"] == 4.0


def test_timer_context_manager():
    metrics = MetricsRegistry()

    with Timer(metrics, CPI_LATENCY):
        pass
    with Timer(None, CPI_LATENCY):
        pass

    summary = metrics.snapshot()["timers"][CPI_LATENCY]
    assert summary["count"] == 1
    assert summary["max_s"] >= 0.0


def test_configure_logging_sets_level():
    configure_logging(logging.DEBUG)

    assert logger.level == logging.DEBUG
    assert logging.getLogger("matplotlib").level == logging.WARNING
    logger.setLevel(logging.NOTSET)


def test_timer_without_registry_still_measures():
    with Timer(None, CPI_LATENCY) as timer:
        sum(range(1000))

    assert timer.elapsed_s > 0.0


def test_reset_clears_everything():
    metrics = MetricsRegistry()
    metrics.inc(CFAR_DETECTIONS, 2)
    metrics.set_gauge("targets", 1)
    metrics.observe(CPI_LATENCY, 0.5)

    metrics.reset()

    assert metrics.snapshot() == {"counters": {}, "gauges": {}, "timers": {}}
