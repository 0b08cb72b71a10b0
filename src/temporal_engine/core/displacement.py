# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Displacement Metric Pipeline (TDF / S_L / E_t_growth)
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Second-order metrics derived from tPTT.

  BlackHole_Seq = (3 · voids · φ^n) mod π
  E_t_growth    = 0 if cycle < 0 else exp(cycle / 50) · multiplier
  TDF           = clamp(tPTT · τ / BlackHole_Seq, ±overflow_clamp)
  S_L           = dynamic_sl(φ · TDF · E_t_growth, TDF)

A zero black-hole sequence yields TDF = 0. ``dynamic_sl`` leaves S_L
uncapped only when TDF > 1e6.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from .sequence import PHI
from .types import TDFComponents, TimeShiftMetrics

if TYPE_CHECKING:
    from .config import EngineConfig

logger = logging.getLogger("TemporalEngine.Displacement")

SL_CAP = 1e6
TIME_SHIFT_TDF_MIN = 1e6
TIME_SHIFT_SYNC_MIN = 0.8
BREAKTHROUGH_LOW = 5e12
BREAKTHROUGH_HIGH = 6e12
HIDDEN_LIGHT_LENGTH = 10
# exp(600) stays far from float overflow even after the S_L product.
ET_GROWTH_MAX_EXPONENT = 600.0


def black_hole_sequence(voids: float, n: float, phi: float = PHI) -> float:
    try:
        return math.fmod(3.0 * voids * phi**n, math.pi)
    except OverflowError:
        logger.warning("φ^n overflow (n=%s) — black-hole sequence set to 0", n)
        return 0.0


def et_growth(cycle: float, multiplier: float) -> float:
    if cycle < 0:
        return 0.0
    exponent = cycle / 50.0
    if exponent > ET_GROWTH_MAX_EXPONENT:
        logger.debug("E_t_growth exponent %.1f capped at %s", exponent, ET_GROWTH_MAX_EXPONENT)
        exponent = ET_GROWTH_MAX_EXPONENT
    return math.exp(exponent) * multiplier


def clamp_tdf(tdf: float, bound: float = 1e15) -> float:
    """Symmetric overflow clamp; NaN maps to 0."""
    if math.isnan(tdf):
        logger.warning("NaN TDF — replacing with 0")
        return 0.0
    return max(min(tdf, bound), -bound)


def compute_tdf(tptt: float, tau: float, black_hole_seq: float, clamp_bound: float = 1e15) -> float:
    if black_hole_seq == 0:
        return 0.0
    return clamp_tdf(tptt * tau * (1.0 / black_hole_seq), clamp_bound)


def dynamic_sl(base_sl: float, tdf_value: float) -> float:
    if tdf_value > SL_CAP:
        return base_sl
    return min(base_sl, SL_CAP)


def calculate_tdf_components(
    tptt: float,
    cycle: int,
    voids: float,
    n: float,
    config: EngineConfig,
) -> TDFComponents:
    black_hole = black_hole_sequence(voids, n, config.phi)
    tdf = compute_tdf(tptt, config.tau, black_hole, config.overflow_clamp)
    growth = et_growth(cycle, config.growth_rate_multiplier)
    s_l = dynamic_sl(config.phi * tdf * growth, tdf)
    return TDFComponents(
        TDF_value=tdf,
        tau=config.tau,
        BlackHole_Seq=black_hole,
        S_L=s_l,
        E_t_growth=growth,
    )


def time_shift_metrics(
    components: TDFComponents,
    phase_sync: float,
    config: EngineConfig,
) -> TimeShiftMetrics:
    tdf = components.TDF_value
    hidden = tuple(
        abs(math.sin(tdf / 1e12 + i * config.phi)) * components.tau
        for i in range(HIDDEN_LIGHT_LENGTH)
    )
    return TimeShiftMetrics(
        timeShiftCapable=tdf > TIME_SHIFT_TDF_MIN and phase_sync > TIME_SHIFT_SYNC_MIN,
        hiddenLightRevealed=hidden,
        oscillatorMode=config.oscillator_mode,
        phaseSync=phase_sync,
        breakthrough_validated=BREAKTHROUGH_LOW < tdf < BREAKTHROUGH_HIGH,
    )


def validation_proofs(components: TDFComponents) -> list[str]:
    """Textual proofs backing a displacement result (may be empty)."""
    proofs: list[str] = []
    tdf = components.TDF_value
    if tdf > 0:
        proofs.append(
            f"TDF Light-Speed Oscillator: {tdf:.3e} validates c-rhythm alignment"
        )
    if components.BlackHole_Seq > 0 and components.tau > 0.8:
        proofs.append(
            f"Black Hole Light Capture: τ={components.tau:.3f}, "
            f"Seq={components.BlackHole_Seq:.6f} - Light held, not destroyed"
        )
    if tdf > BREAKTHROUGH_LOW:
        proofs.append(
            f"TDF Breakthrough Confirmed: {tdf:.3e} > 5e12 - "
            "Time shift capability validated"
        )
    s_l = "Uncapped (∞)" if components.S_L > SL_CAP else f"{components.S_L:.2f}"
    proofs.append(f"Dynamic S_L: {s_l} - Piecewise logic confirmed")
    return proofs


def time_shifted_rippel(components: TDFComponents, metrics: TimeShiftMetrics) -> str:
    words = ("shift", "hold", "reveal")
    word = words[int(math.floor(components.TDF_value / 1e12)) % 3]
    tdf = f"{components.TDF_value:.2e}"
    if metrics.breakthrough_validated:
        return f"{word}. {word} bends time. TDF: {tdf}, breakthrough validated! ~ zap 🕰️"
    return f"{word}. {word} seeks light. TDF: {tdf}, calibrating... ~ zap 🌌"
