# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Adaptive Readiness Evaluator
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Transport readiness state machine.

The evaluator is a pure function of the current tick's inputs. The only
carried value is the previous status, which decides the fallback branch
(charging / preparing) when no other transition fires. Flicker between
adjacent states near a boundary is left to consumers.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .spectrum import SpectrumSample, SpectrumSource, spectral_confidence, spectrum_description
from .types import ReadinessState, ReadinessStatus, _clamp

logger = logging.getLogger("TemporalEngine.Readiness")

DEFAULT_THRESHOLD = 1e10
NEARBY_STAR_THRESHOLD = 1e8
DISTANT_STAR_THRESHOLD = 5e8
SDSS_THRESHOLD = 2e9
SYNTHETIC_THRESHOLD = 1e9
NEARBY_DISTANCE_LY = 100.0

OFFLINE_RATIO = 0.01
INITIALIZING_RATIO = 0.5
CHARGING_RATIO = 1.0
PREPARING_SCORE = 80.0
READY_COHERENCE = 0.6
READY_NEURAL_SYNC = 0.7
CRITICAL_MULTIPLE = 100.0

_RETAINED = (ReadinessStatus.CHARGING, ReadinessStatus.PREPARING)


def base_threshold(spectrum: Optional[SpectrumSample]) -> float:
    """Spectrum-class threshold before the neural multiplier."""
    if spectrum is None or spectrum.metadata is None:
        return DEFAULT_THRESHOLD
    meta = spectrum.metadata
    if spectrum.source is SpectrumSource.STELLAR_LIBRARY and meta.distance and meta.emissionAge:
        if meta.distance < NEARBY_DISTANCE_LY:
            return NEARBY_STAR_THRESHOLD
        return DISTANT_STAR_THRESHOLD
    if spectrum.source is SpectrumSource.SDSS:
        return SDSS_THRESHOLD
    return SYNTHETIC_THRESHOLD


def neural_multiplier(confidence: float) -> float:
    return 0.5 + 0.5 * _clamp(confidence)


def adaptive_threshold(
    spectrum: Optional[SpectrumSample] = None,
    neural_confidence: Optional[float] = None,
) -> float:
    """Threshold for the readiness ratio.

    When no confidence is supplied it is derived from the spectrum via
    :func:`spectral_confidence`.
    """
    if neural_confidence is None:
        neural_confidence = spectral_confidence(spectrum)
    return base_threshold(spectrum) * neural_multiplier(neural_confidence)


def readiness_score(tptt: float, threshold: float) -> float:
    """Log remap crossing 50 exactly at ``tptt == threshold``."""
    if not math.isfinite(tptt) or tptt <= 0 or threshold <= 0:
        return 0.0
    return _clamp((math.log10(tptt) - math.log10(threshold)) * 20.0 + 50.0, 0.0, 100.0)


def evaluate_readiness(
    tptt: float,
    phase_coherence: float,
    neural_sync: float,
    spectrum: Optional[SpectrumSample] = None,
    neural_confidence: Optional[float] = None,
    previous: ReadinessStatus = ReadinessStatus.OFFLINE,
) -> ReadinessState:
    """Apply the readiness transitions in priority order; first match wins."""
    if math.isnan(tptt):
        logger.warning("NaN tPTT in readiness evaluation — treating as 0")
        tptt = 0.0
    threshold = adaptive_threshold(spectrum, neural_confidence)
    ratio = tptt / threshold
    score = readiness_score(tptt, threshold)

    if ratio < OFFLINE_RATIO:
        status = ReadinessStatus.OFFLINE
    elif ratio < INITIALIZING_RATIO:
        status = ReadinessStatus.INITIALIZING
    elif ratio < CHARGING_RATIO:
        status = ReadinessStatus.CHARGING
    elif score < PREPARING_SCORE:
        status = ReadinessStatus.PREPARING
    elif phase_coherence > READY_COHERENCE and neural_sync > READY_NEURAL_SYNC:
        status = ReadinessStatus.READY
    elif tptt > threshold * CRITICAL_MULTIPLE:
        status = ReadinessStatus.CRITICAL
    else:
        status = previous if previous in _RETAINED else ReadinessStatus.PREPARING

    return ReadinessState(
        score=score,
        status=status,
        threshold=threshold,
        threshold_ratio=ratio if math.isfinite(ratio) else 0.0,
        description=spectrum_description(spectrum),
    )
