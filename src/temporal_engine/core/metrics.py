# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Simulation Metrics
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
In-process counters, histograms and gauges for the tick loop, rendered
in Prometheus text format on demand.

Usage::

    from temporal_engine.core.metrics import metrics

    metrics.inc("ticks_total")
    metrics.inc("readiness_status", label="charging")
    with metrics.timer("tick_duration_seconds"):
        ...
    print(metrics.prometheus_format())
"""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass, field

PREFIX = "temporal_engine"

TICK_DURATION_BUCKETS = (0.0001, 0.0005, 0.001, 0.0025, 0.005, 0.01, 0.016, 0.05, 0.1)
READINESS_SCORE_BUCKETS = (10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0, 100.0)
HISTOGRAM_MAX_SAMPLES = 50_000


@dataclass
class _Counter:
    value: float = 0.0
    labels: dict[str, float] = field(default_factory=dict)

    def inc(self, amount: float = 1.0, label: str = "") -> None:
        if label:
            self.labels[label] = self.labels.get(label, 0.0) + amount
        else:
            self.value += amount

    def total(self) -> float:
        return self.value + sum(self.labels.values())


@dataclass
class _Histogram:
    """Bounded histogram; once full the oldest samples fall off."""

    buckets: tuple[float, ...] = (0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
    samples: deque = field(default_factory=lambda: deque(maxlen=HISTOGRAM_MAX_SAMPLES))

    def observe(self, value: float) -> None:
        self.samples.append(value)

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def total(self) -> float:
        return float(sum(self.samples))

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0

    def quantile(self, q: float) -> float:
        if not self.samples:
            return 0.0
        ordered = sorted(self.samples)
        return ordered[int(q * (len(ordered) - 1))]

    def cumulative(self) -> list[tuple[str, int]]:
        rows = [(str(b), sum(1 for v in self.samples if v <= b)) for b in self.buckets]
        rows.append(("+Inf", len(self.samples)))
        return rows


class MetricsCollector:
    """Thread-safe collector; all writes are no-ops when disabled."""

    _HELP: dict[str, str] = {
        "ticks_total": "Engine ticks executed",
        "readiness_status": "Ticks ending in each readiness status",
        "numeric_recoveries_total": "Non-finite values replaced by a safe substitute",
        "cascade_records_total": "Cascade attempts recorded into predictor history",
        "tick_duration_seconds": "Wall time per engine tick",
        "readiness_score": "Readiness score distribution",
        "phase_coherence": "Kuramoto order parameter after the last tick",
        "tdf_value": "Temporal displacement factor after the last tick",
    }

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._lock = threading.Lock()
        self._counters: dict[str, _Counter] = {
            "ticks_total": _Counter(),
            "readiness_status": _Counter(),
            "numeric_recoveries_total": _Counter(),
            "cascade_records_total": _Counter(),
        }
        self._histograms: dict[str, _Histogram] = {
            "tick_duration_seconds": _Histogram(buckets=TICK_DURATION_BUCKETS),
            "readiness_score": _Histogram(buckets=READINESS_SCORE_BUCKETS),
        }
        self._gauges: dict[str, float] = {"phase_coherence": 0.0, "tdf_value": 0.0}

    def inc(self, name: str, amount: float = 1.0, label: str = "") -> None:
        if not self.enabled:
            return
        with self._lock:
            self._counters.setdefault(name, _Counter()).inc(amount, label)

    def observe(self, name: str, value: float) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._histograms.setdefault(name, _Histogram()).observe(value)

    def gauge_set(self, name: str, value: float) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._gauges[name] = value

    def timer(self, histogram_name: str) -> _Timer:
        """Context manager that records elapsed time to a histogram."""
        return _Timer(self, histogram_name)

    def get_metrics(self) -> dict:
        with self._lock:
            return {
                "counters": {
                    name: {"total": c.total(), "labels": dict(c.labels)}
                    for name, c in self._counters.items()
                },
                "histograms": {
                    name: {
                        "count": h.count,
                        "total": h.total,
                        "mean": h.mean,
                        "p50": h.quantile(0.5),
                        "p99": h.quantile(0.99),
                    }
                    for name, h in self._histograms.items()
                },
                "gauges": dict(self._gauges),
            }

    def prometheus_format(self) -> str:
        lines: list[str] = []

        def header(name: str, kind: str) -> str:
            fqn = f"{PREFIX}_{name}"
            lines.append(f"# HELP {fqn} {self._HELP.get(name, name)}")
            lines.append(f"# TYPE {fqn} {kind}")
            return fqn

        with self._lock:
            for name, c in self._counters.items():
                fqn = header(name, "counter")
                for label, val in c.labels.items():
                    lines.append(f'{fqn}{{status="{label}"}} {val}')
                if not c.labels:
                    lines.append(f"{fqn} {c.value}")
            for name, h in self._histograms.items():
                fqn = header(name, "histogram")
                for le, count in h.cumulative():
                    lines.append(f'{fqn}_bucket{{le="{le}"}} {count}')
                lines.append(f"{fqn}_count {h.count}")
                lines.append(f"{fqn}_sum {h.total}")
            for name, value in self._gauges.items():
                fqn = header(name, "gauge")
                lines.append(f"{fqn} {value}")
        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        with self._lock:
            for c in self._counters.values():
                c.value = 0.0
                c.labels.clear()
            for h in self._histograms.values():
                h.samples.clear()
            for name in self._gauges:
                self._gauges[name] = 0.0


class _Timer:
    def __init__(self, collector: MetricsCollector, name: str) -> None:
        self._collector = collector
        self._name = name
        self._start = 0.0

    def __enter__(self) -> _Timer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        self._collector.observe(self._name, time.perf_counter() - self._start)


# Module-level singleton
metrics = MetricsCollector()
