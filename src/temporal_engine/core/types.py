# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Shared Types
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from enum import Enum

_finite_logger = logging.getLogger("TemporalEngine.Types")

# Largest magnitude any snapshot field may carry.
FINITE_CEILING = 1e300


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp *value* to [lo, hi], replacing NaN/Inf with boundary values."""
    if math.isnan(value):
        _finite_logger.warning("NaN detected in _clamp — replacing with %s", lo)
        return lo
    if math.isinf(value):
        replacement = hi if value > 0 else lo
        _finite_logger.warning("Inf detected in _clamp — replacing with %s", replacement)
        return replacement
    return max(lo, min(hi, value))


def _finite(value: float, default: float = 0.0, ceiling: float = FINITE_CEILING) -> float:
    """Return *value* if finite and within ±ceiling, else a safe substitute.

    NaN becomes *default*; ±Inf and out-of-range magnitudes saturate at
    ±ceiling.
    """
    value = float(value)
    if math.isnan(value):
        _finite_logger.warning("NaN detected — replacing with %s", default)
        return default
    if math.isinf(value) or abs(value) > ceiling:
        _finite_logger.warning("Non-finite magnitude %s saturated at ±%s", value, ceiling)
        return ceiling if value > 0 else -ceiling
    return value


class ReadinessStatus(str, Enum):
    """Discrete transport readiness states."""

    OFFLINE = "offline"
    INITIALIZING = "initializing"
    CHARGING = "charging"
    PREPARING = "preparing"
    READY = "ready"
    CRITICAL = "critical"


@dataclass(frozen=True)
class TDFComponents:
    """Second-order displacement metrics derived from tPTT."""

    TDF_value: float
    tau: float
    BlackHole_Seq: float
    S_L: float
    E_t_growth: float


@dataclass(frozen=True)
class SpectralComponents:
    """tPTT inputs and enhancement factors derived from a spectrum sample."""

    T_c: float
    P_s: float
    E_t: float
    W_c: float
    C_m: float
    K_l: float
    F_r: float
    S_l: float
    Syn_c: float
    Q_e: float
    Sp_g: float
    N_s: float
    G_r: float

    @property
    def factor(self) -> float:
        """Product of the enhancement factors applied on top of base tPTT."""
        return (
            self.W_c * self.C_m * self.K_l * self.F_r * self.S_l
            * self.Syn_c * self.Q_e * self.Sp_g * self.N_s * self.G_r
        )


@dataclass(frozen=True)
class TimeShiftMetrics:
    """Time-shift capability and breakthrough band check."""

    timeShiftCapable: bool
    hiddenLightRevealed: tuple[float, ...]
    oscillatorMode: str
    phaseSync: float
    breakthrough_validated: bool


@dataclass(frozen=True)
class DualSequenceSync:
    """Dual black-hole sequence pair with its synchronisation score."""

    seq1: int
    seq2: int
    syncEfficiency: float  # 0-1


@dataclass(frozen=True)
class CascadeResult:
    """Third-order cascade/entanglement metrics for one attempt."""

    cascade_index: int
    CTI: float
    Q_ent: float
    score: float  # 0-1
    efficiency: float  # 0-100
    status: str  # Approved | Pending | Failed
    n: int
    delta_phase: float


@dataclass(frozen=True)
class MetricSnapshot:
    """Full derived-value chain for one tick. Every field is finite."""

    T_c: float
    P_s: float
    E_t: float
    tPTT: float
    TDF_value: float
    tau: float
    BlackHole_Seq: float
    S_L: float
    E_t_growth: float
    CTI: float
    Q_ent: float
    cascade_index: int
    phase_coherence: float = 0.0
    transport_score: float = 0.0
    efficiency: float = 0.0
    mode: str = "pull"
    rippel: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ReadinessState:
    """Readiness evaluation for one tick (no independent identity)."""

    score: float  # 0-100
    status: ReadinessStatus
    threshold: float
    threshold_ratio: float = 0.0
    description: str = ""
