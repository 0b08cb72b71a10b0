# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Cascade / Entanglement Metric Pipeline (CTI / Q_ent)
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Third-order metrics: cascade index, Chrono Transport Index (CTI),
entanglement metric Q_ent, transport score and dual-sequence sync.

CTI combines ``TDF · cascade_index`` and ``τ · φ^n`` with a bitwise XOR
over a bounded representation of both operands:

  u    = |x| / (|x| + CTI_CAP)                saturating map into [0, 1)
  q    = floor(u · 2^32)                       32-bit quantisation
  r    = (q_a XOR q_b) / 2^32
  CTI  = min(CTI_CAP, r · CTI_CAP / (1 - r))   inverse of the map

``CTI_SCALE`` (the half-saturation point of the map) is a fitted
constant; equal operands combine to 0 and a zero operand leaves the
other unchanged up to quantisation.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Sequence

import numpy as np

from .sequence import PHI
from .types import CascadeResult, DualSequenceSync

if TYPE_CHECKING:
    from .config import EngineConfig

logger = logging.getLogger("TemporalEngine.Cascade")

CTI_CAP = 1e6
CTI_SCALE = 1e6
QUANT_BITS = 32
_QUANT_LEVELS = 1 << QUANT_BITS

SEQ_DIVISOR = 1e10
PENDING_EFFICIENCY = 95.0
APPROVED_EFFICIENCY = 100.0


def cascade_index(voids: float, n: int) -> int:
    """``floor(π / voids) + n``; non-positive voids count as 1."""
    voids = voids if voids > 0 else 1
    return int(math.floor(math.pi / voids)) + int(n)


def _quantize(x: float) -> int:
    if math.isnan(x):
        logger.warning("NaN CTI operand — treating as 0")
        return 0
    mag = abs(x)
    if math.isinf(mag):
        return _QUANT_LEVELS - 1
    u = mag / (mag + CTI_SCALE)
    return min(int(u * _QUANT_LEVELS), _QUANT_LEVELS - 1)


def xor_combine(a: float, b: float) -> float:
    """Bitwise XOR of two magnitudes through the saturating 32-bit map."""
    r = (_quantize(a) ^ _quantize(b)) / _QUANT_LEVELS
    return r * CTI_SCALE / (1.0 - r)


def cti(
    tdf: float,
    cascade_idx: int,
    tau: float,
    phi: float = PHI,
    n: int = 29,
    cap: float = CTI_CAP,
) -> float:
    try:
        structural = tau * phi**n
    except OverflowError:
        structural = math.inf
    return min(cap, xor_combine(tdf * cascade_idx, structural))


def q_ent(cti_value: float, phi: float, n: int, delta_phase: float) -> float:
    cos_component = math.cos(phi * n / 2.0) / math.pi
    sin_component = math.sin(phi * n / 4.0)
    decay = math.exp(-n / 20.0)
    boost = (1.0 + delta_phase) * math.log(n + 1)
    return abs(cti_value * cos_component * sin_component * decay) * boost


def transport_score(q_ent_value: float, cti_value: float) -> float:
    return min(1.0, q_ent_value * 10.0 + (cti_value / CTI_CAP) * 0.3)


def sequence_pair(tdf: float, cascade_idx: int) -> tuple[int, int]:
    seq1 = int(math.floor(tdf / SEQ_DIVISOR)) if math.isfinite(tdf) else 0
    return seq1, seq1 + cascade_idx


def sync_efficiency(pairs: Sequence[tuple[int, int]]) -> float:
    """Correlation of the seq1 / seq2 trajectories, floored at 0.

    Both trajectories flat counts as perfectly in step; one flat
    trajectory against a moving one counts as 0.
    """
    if len(pairs) < 2:
        return 0.0
    data = np.asarray(pairs, dtype=np.float64)
    s1, s2 = data[:, 0], data[:, 1]
    d1, d2 = s1 - s1.mean(), s2 - s2.mean()
    n1, n2 = float(np.sqrt(np.dot(d1, d1))), float(np.sqrt(np.dot(d2, d2)))
    if n1 == 0.0 and n2 == 0.0:
        return 1.0
    if n1 == 0.0 or n2 == 0.0:
        return 0.0
    r = float(np.dot(d1, d2)) / (n1 * n2)
    return max(0.0, min(1.0, r))


def dual_sequence_sync(
    tdf: float,
    cascade_idx: int,
    history: Sequence[tuple[int, int]] = (),
    window: int = 20,
) -> DualSequenceSync:
    """Current sequence pair scored against the recent pair history."""
    seq1, seq2 = sequence_pair(tdf, cascade_idx)
    recent = list(history)[-(window - 1):] if window > 1 else []
    recent.append((seq1, seq2))
    return DualSequenceSync(seq1=seq1, seq2=seq2, syncEfficiency=sync_efficiency(recent))


def transport_status(efficiency: float, score: float, ethics_threshold: float = 0.8) -> str:
    if efficiency >= APPROVED_EFFICIENCY and score >= ethics_threshold:
        return "Approved"
    if efficiency >= PENDING_EFFICIENCY:
        return "Pending"
    return "Failed"


def chrono_transport(
    tdf: float,
    config: EngineConfig,
    voids: float | None = None,
    n: int | None = None,
    delta_phase: float | None = None,
) -> CascadeResult:
    """Full cascade evaluation for one attempt at ``(voids, n, δφ)``."""
    voids = config.cascade_voids if voids is None else voids
    n = config.cascade_n if n is None else n
    delta_phase = config.delta_phase if delta_phase is None else delta_phase

    idx = cascade_index(voids, n)
    cti_value = cti(tdf, idx, config.tau, config.phi, n)
    q = q_ent(cti_value, config.phi, n, delta_phase)
    score = transport_score(q, cti_value)
    efficiency = score * 100.0
    return CascadeResult(
        cascade_index=idx,
        CTI=cti_value,
        Q_ent=q,
        score=score,
        efficiency=efficiency,
        status=transport_status(efficiency, score, config.ethics_score_threshold),
        n=n,
        delta_phase=delta_phase,
    )
