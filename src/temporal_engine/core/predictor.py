# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — History-Based Breakthrough Predictor
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Regression-free heuristic over a bounded rolling history of cascade
attempts.

The history is append-only with FIFO eviction. ``predict`` and
``statistics`` work on a snapshot taken under the lock, so a reader
never observes a half-applied append.

Usage::

    predictor = BreakthroughPredictor()
    predictor.record(30, 0.28, efficiency=97.0, q_ent=0.85)
    prediction = predictor.predict(30, 0.28)
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import asdict, dataclass
from typing import Iterable

import numpy as np

logger = logging.getLogger("TemporalEngine.Predictor")

HISTORY_CAPACITY = 100
MIN_HISTORY = 5
TREND_WINDOW = 10
SIMILAR_N = 2
SIMILAR_DELTA_PHASE = 0.05
BREAKTHROUGH_EFFICIENCY = 95.0
BREAKTHROUGH_Q_ENT = 0.8
DEFAULT_OPTIMAL_N = 29
DEFAULT_OPTIMAL_DELTA_PHASE = 0.27


@dataclass(frozen=True)
class CascadeHistoryRecord:
    n: int
    delta_phase: float
    efficiency: float  # 0-100
    q_ent: float
    timestamp: float

    @property
    def is_breakthrough(self) -> bool:
        return self.efficiency >= BREAKTHROUGH_EFFICIENCY and self.q_ent > BREAKTHROUGH_Q_ENT

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> CascadeHistoryRecord:
        return cls(
            n=int(data["n"]),
            delta_phase=float(data.get("delta_phase", data.get("deltaPhase"))),
            efficiency=float(data["efficiency"]),
            q_ent=float(data.get("q_ent", data.get("qEnt"))),
            timestamp=float(data.get("timestamp", 0.0)),
        )


@dataclass(frozen=True)
class Prediction:
    optimalN: int
    optimalDeltaPhase: float
    breakthroughProbability: float
    predictedEfficiency: float
    confidence: float
    recommendation: str

    def to_dict(self) -> dict:
        return asdict(self)


def _slope(values: list[float]) -> float:
    """Least-squares slope against sample index (oldest first)."""
    if len(values) < 2:
        return 0.0
    y = np.asarray(values, dtype=np.float64)
    x = np.arange(y.shape[0], dtype=np.float64)
    dx = x - x.mean()
    return float(np.dot(dx, y - y.mean()) / np.dot(dx, dx))


def _recommendation(probability: float, optimal_n: int, optimal_dp: float) -> str:
    target = f"n={optimal_n}, δφ={optimal_dp:.2f}"
    if probability > 0.8:
        return "Excellent breakthrough potential! Current parameters are optimal."
    if probability > 0.5:
        return f"Good breakthrough potential. Consider adjusting to {target} for better results."
    if probability > 0.2:
        return f"Moderate breakthrough potential. Recommend {target} for optimization."
    return f"Low breakthrough potential. Switch to {target} for best chance."


class BreakthroughPredictor:
    """Bounded cascade history with breakthrough prediction.

    Parameters
    ----------
    capacity : int — ring-buffer size; oldest records are evicted first.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._history: deque[CascadeHistoryRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._history)

    def record(
        self,
        n: int,
        delta_phase: float,
        efficiency: float,
        q_ent: float,
        timestamp: float | None = None,
    ) -> CascadeHistoryRecord:
        entry = CascadeHistoryRecord(
            n=int(n),
            delta_phase=float(delta_phase),
            efficiency=float(efficiency),
            q_ent=float(q_ent),
            timestamp=time.time() if timestamp is None else float(timestamp),
        )
        with self._lock:
            self._history.append(entry)
        logger.debug("Recorded cascade n=%d δφ=%.3f eff=%.2f", entry.n, entry.delta_phase, entry.efficiency)
        return entry

    def extend(self, records: Iterable[CascadeHistoryRecord]) -> None:
        with self._lock:
            self._history.extend(records)

    def history(self) -> tuple[CascadeHistoryRecord, ...]:
        """Snapshot of the current history, oldest first."""
        with self._lock:
            return tuple(self._history)

    def clear(self) -> None:
        with self._lock:
            self._history.clear()

    def predict(self, n: int, delta_phase: float) -> Prediction:
        snapshot = self.history()
        if len(snapshot) < MIN_HISTORY:
            return self._default_prediction(n, delta_phase)

        similar = [
            r
            for r in snapshot
            if abs(r.n - n) <= SIMILAR_N and abs(r.delta_phase - delta_phase) <= SIMILAR_DELTA_PHASE
        ]
        if similar:
            efficiency = sum(r.efficiency for r in similar) / len(similar)
            probability = sum(1 for r in similar if r.is_breakthrough) / len(similar)
            confidence = min(1.0, len(similar) / 10.0)
        else:
            probability, efficiency = self._trend(snapshot)
            confidence = 0.5

        optimal_n, optimal_dp = self._optimal(snapshot)
        return Prediction(
            optimalN=optimal_n,
            optimalDeltaPhase=optimal_dp,
            breakthroughProbability=probability,
            predictedEfficiency=efficiency,
            confidence=confidence,
            recommendation=_recommendation(probability, optimal_n, optimal_dp),
        )

    def statistics(self) -> dict:
        snapshot = self.history()
        if not snapshot:
            return {"total_runs": 0, "avg_efficiency": 0.0, "breakthrough_count": 0, "breakthrough_rate": 0.0}
        count = sum(1 for r in snapshot if r.is_breakthrough)
        return {
            "total_runs": len(snapshot),
            "avg_efficiency": sum(r.efficiency for r in snapshot) / len(snapshot),
            "breakthrough_count": count,
            "breakthrough_rate": count / len(snapshot),
        }

    # ── Internals ─────────────────────────────────────────────────────

    @staticmethod
    def _trend(snapshot: tuple[CascadeHistoryRecord, ...]) -> tuple[float, float]:
        recent = sorted(snapshot, key=lambda r: r.timestamp)[-TREND_WINDOW:]
        eff_slope = _slope([r.efficiency for r in recent])
        q_slope = _slope([r.q_ent for r in recent])
        efficiency = max(0.0, min(100.0, recent[-1].efficiency + eff_slope * 2.0))

        if efficiency >= 95.0 and q_slope > 0:
            probability = 0.7 + (efficiency - 95.0) * 0.05
        elif efficiency >= 90.0:
            probability = 0.5 + (efficiency - 90.0) * 0.04
        elif efficiency >= 80.0:
            probability = 0.3 + (efficiency - 80.0) * 0.02
        else:
            probability = 0.1
        return min(0.95, probability), efficiency

    @staticmethod
    def _optimal(snapshot: tuple[CascadeHistoryRecord, ...]) -> tuple[int, float]:
        if not snapshot:
            return DEFAULT_OPTIMAL_N, DEFAULT_OPTIMAL_DELTA_PHASE
        best = snapshot[0]
        for r in snapshot[1:]:
            if r.efficiency * r.q_ent > best.efficiency * best.q_ent:
                best = r
        return best.n, best.delta_phase

    @staticmethod
    def _default_prediction(n: int, delta_phase: float) -> Prediction:
        probability, efficiency = 0.3, 85.0
        if 25 <= n <= 34 and 0.25 <= delta_phase <= 0.3:
            probability, efficiency = 0.6, 92.0
            if 29 <= n <= 31 and 0.27 <= delta_phase <= 0.29:
                probability, efficiency = 0.8, 97.0
        return Prediction(
            optimalN=DEFAULT_OPTIMAL_N,
            optimalDeltaPhase=DEFAULT_OPTIMAL_DELTA_PHASE,
            breakthroughProbability=probability,
            predictedEfficiency=efficiency,
            confidence=0.3,
            recommendation=(
                "Insufficient historical data. Recommend "
                f"n={DEFAULT_OPTIMAL_N}, δφ={DEFAULT_OPTIMAL_DELTA_PHASE:.2f}."
            ),
        )
