#!/usr/bin/env python3
"""Lightweight instrumentation for SpotiHooks.

``PerfMonitor`` keeps a bounded window of timings per label (one label per
Web API path or Flask route). ``ObservabilitySink`` bundles a logger and a
monitor so components receive their observability through a constructor
argument instead of reaching for module globals.
"""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Deque, Dict, Iterator, Optional

from .logger import log_structured


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


@dataclass
class BlockMetrics:
    """Timings for one label; ``window`` holds the most recent samples."""

    window: Deque[float]
    count: int = 0
    total: float = 0.0
    slowest: float = 0.0
    last_reported: float = 0.0
    lock: Lock = field(default_factory=Lock)

    def add(self, duration: float) -> None:
        self.count += 1
        self.total += duration
        self.slowest = max(self.slowest, duration)
        self.window.append(duration)

    def summary(self) -> Dict[str, float]:
        ordered = sorted(self.window)
        if not ordered:
            return {"count": 0, "avg_ms": 0.0, "p50_ms": 0.0, "p95_ms": 0.0, "slowest_ms": 0.0}
        # nearest-rank percentiles over the window
        p50 = ordered[max(0, round(0.50 * len(ordered)) - 1)]
        p95 = ordered[max(0, round(0.95 * len(ordered)) - 1)]
        return {
            "count": self.count,
            "avg_ms": self.total / self.count * 1000,
            "p50_ms": p50 * 1000,
            "p95_ms": p95 * 1000,
            "slowest_ms": self.slowest * 1000,
        }


class PerfMonitor:
    """Aggregate block timings and report them periodically."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("spotihooks.perf")
        self._blocks: Dict[str, BlockMetrics] = {}
        self._lock = Lock()
        self._report_every = _env_float("SPOTIHOOKS_PERF_LOG_INTERVAL", 30.0)
        self._slow_after = _env_float("SPOTIHOOKS_PERF_WARN_THRESHOLD", 1.5)
        self._window = max(20, int(_env_float("SPOTIHOOKS_PERF_MAX_SAMPLES", 200)))

    def _metrics_for(self, label: str) -> BlockMetrics:
        with self._lock:
            if label not in self._blocks:
                self._blocks[label] = BlockMetrics(window=deque(maxlen=self._window))
            return self._blocks[label]

    def record_block(self, label: str, duration: float) -> None:
        """Record one timing. Slow samples are reported immediately."""
        metrics = self._metrics_for(label)
        now = time.time()
        with metrics.lock:
            metrics.add(duration)
            slow = duration >= self._slow_after
            if not slow and now - metrics.last_reported < self._report_every:
                return
            metrics.last_reported = now
            stats = metrics.summary()

        level = logging.WARNING if slow else logging.DEBUG
        log_structured(
            self._logger, level, f"perf.{label}",
            latest_ms=round(duration * 1000, 1),
            **{k: round(v, 1) for k, v in stats.items()},
        )

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        """Return current metrics as a JSON-serialisable dict."""
        with self._lock:
            blocks = dict(self._blocks)
        result = {}
        for label, metrics in blocks.items():
            with metrics.lock:
                result[label] = metrics.summary()
        return result

    @contextmanager
    def time_block(self, label: str) -> Iterator[None]:
        """Context manager to measure arbitrary code blocks."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record_block(label, time.perf_counter() - start)


class ObservabilitySink:
    """Structured log and metric interface handed to components."""

    def __init__(self, logger: Optional[logging.Logger] = None, monitor: Optional[PerfMonitor] = None) -> None:
        self.logger = logger or logging.getLogger("spotihooks")
        self.monitor = monitor or PerfMonitor()

    def event(self, name: str, level: int = logging.INFO, /, **fields: Any) -> None:
        """Emit a named structured event.

        ``name`` and ``level`` are positional-only so fields may reuse those keys.
        """
        log_structured(self.logger, level, name, **fields)

    def time_block(self, label: str):
        return self.monitor.time_block(label)


__all__ = ["BlockMetrics", "ObservabilitySink", "PerfMonitor"]
