# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Primary Metric Pipeline (tPTT)
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Temporal Photonic Transpondent Transporter metric.

  tPTT = T_c · (P_s / E_t) · φ · (C / Δt)

``E_t`` is clamped to [0.1, 1.0] by :func:`accumulate_energy`, so a zero
divisor here means an upstream guard failed. Strict mode raises
``InvariantViolation``; otherwise a large finite sentinel is returned.

When a spectrum sample is available the inputs come from the sample
instead of the wave field (:func:`spectral_components`) and the base value
is scaled by the product of the spectral enhancement factors:

  tPTT = T_c · (P_s / E_t) · φ · (C / Δt) · W_c·C_m·K_l·F_r·S_l·Syn_c·Q_e·Sp_g·N_s·G_r
"""

from __future__ import annotations

import logging
import math
import numpy as np

from .exceptions import InvariantViolation
from .sequence import PHI, seed
from .spectrum import SpectrumSample
from .types import SpectralComponents

logger = logging.getLogger("TemporalEngine.TPTT")

C = 3e8  # c-rhythm speed term
TPTT_ZERO_DIVISOR_SENTINEL = 1e15

E_T_MIN = 0.1
E_T_MAX = 1.0
E_T_DEFAULT = 0.5
E_T_STEP = 0.01
ENERGY_SEED_INDEX = 7

RIPPEL_WORDS = ("surge", "pivot", "chrono")

# Fixed spectral enhancement factors
COHERENCE_MATRIX = 0.5
KURAMOTO_LINKAGE = 0.7
FRACTAL_RESONANCE = 0.9
SPECTRAL_LINKAGE = 0.6
QUANTUM_ENTANGLEMENT = 0.4
GRANULARITY_REACTOR = 1.0
# Neural-fusion outputs when no model is attached
SYNC_COHERENCE_DEFAULT = 0.8
NEURAL_SPECTRA_DEFAULT = 0.5

SPECTRAL_ENERGY_SCALE = 1e15
SPECTRAL_ENERGY_CAP = 2.0
ANGSTROM = 1e-10
FALLBACK_WAVELENGTH = 3800.0  # Å, indexed upward for missing samples


def compute_tptt(
    T_c: float,
    P_s: float,
    E_t: float,
    delta_t: float,
    phi: float = PHI,
    c: float = C,
    strict: bool = False,
) -> float:
    """Primary energy metric. Zero ``E_t``/``delta_t`` is guarded."""
    for name, value in (("E_t", E_t), ("delta_t", delta_t)):
        if value == 0:
            if strict:
                raise InvariantViolation(name, value)
            logger.warning(
                "Zero %s reached compute_tptt — returning sentinel %s",
                name,
                TPTT_ZERO_DIVISOR_SENTINEL,
            )
            return TPTT_ZERO_DIVISOR_SENTINEL
    return T_c * (P_s / E_t) * phi * (c / delta_t)


def transponder_inputs(light_wave: float, phi: float = PHI) -> tuple[float, float]:
    """(T_c, P_s) from the mean band amplitude."""
    return light_wave * 0.1, (light_wave * phi) / 0.314


def accumulate_energy(E_t: float, cycle: int, phi: float = PHI) -> float:
    """Deterministic bounded walk of E_t inside [0.1, 1.0]."""
    if not math.isfinite(E_t):
        E_t = E_T_DEFAULT
    jitter = (seed(cycle, ENERGY_SEED_INDEX, phi) - 0.5) * E_T_STEP
    return max(E_T_MIN, min(E_T_MAX, E_t + jitter))


def generate_rippel(time: float, tptt_value: float, E_t: float) -> str:
    """Status phrase; the word is picked by ``floor(time) mod 3``."""
    index = int(math.floor(time)) % 3 if math.isfinite(time) else 0
    word = RIPPEL_WORDS[index]
    return (
        f"a {word}. {word} bends time. "
        f"tPTT: {tptt_value:.2f}, E_t: {E_t:.3f} ~ zap 🌠"
    )


def validate_phi(phi: float) -> bool:
    """TLM validation band for φ."""
    return 1.566 <= phi <= 1.766


def _spectral_energy(intensities: np.ndarray, wavelengths: np.ndarray, c: float) -> float:
    """Σ I·c/λ normalised by 1e15 and capped at 2."""
    fallback = FALLBACK_WAVELENGTH + np.arange(wavelengths.shape[0], dtype=np.float64)
    usable = np.isfinite(wavelengths) & (wavelengths != 0.0)
    lam = np.where(usable, wavelengths, fallback)
    energy = float(np.sum(intensities * (c / (lam * ANGSTROM))))
    return min(energy / SPECTRAL_ENERGY_SCALE, SPECTRAL_ENERGY_CAP)


def _granularity(wavelengths: np.ndarray) -> float:
    """Sample points per Ångström; 1.0 when the span is degenerate."""
    finite = wavelengths[np.isfinite(wavelengths)]
    if finite.shape[0] < 2:
        return 1.0
    span = float(np.max(finite) - np.min(finite))
    if span <= 0.0:
        return 1.0
    return wavelengths.shape[0] / span


def spectral_components(
    spectrum: SpectrumSample,
    c: float = C,
    syn_c: float = SYNC_COHERENCE_DEFAULT,
    n_s: float = NEURAL_SPECTRA_DEFAULT,
) -> SpectralComponents:
    """Derive tPTT inputs from a spectrum sample.

    - ``T_c`` is the mean intensity (1.0 for an empty sample).
    - ``P_s = exp(-variance / 2)`` of the raw intensities.
    - ``E_t`` is the spectral energy ``Σ I·c/λ / 1e15`` (capped at 2),
      then held inside the engine's [0.1, 1.0] band.
    - ``Sp_g`` is points per Ångström across the sampled range.

    ``W_c`` is 0 for an empty sample, which zeroes the enhanced tPTT.
    """
    intensities = np.asarray(spectrum.intensities, dtype=np.float64)
    wavelengths = np.asarray(spectrum.wavelengths, dtype=np.float64)

    if intensities.shape[0] == 0:
        T_c, P_s, raw_e_t, W_c = 1.0, 1.0, E_T_DEFAULT, 0.0
    else:
        T_c = float(np.mean(intensities))
        P_s = math.exp(-float(np.var(intensities)) / 2.0)
        raw_e_t = _spectral_energy(intensities, wavelengths, c)
        W_c = 1.0

    if not math.isfinite(raw_e_t):
        logger.warning("Non-finite spectral energy — using E_t=%s", E_T_DEFAULT)
        raw_e_t = E_T_DEFAULT
    E_t = max(E_T_MIN, min(E_T_MAX, raw_e_t))

    return SpectralComponents(
        T_c=T_c,
        P_s=P_s,
        E_t=E_t,
        W_c=W_c,
        C_m=COHERENCE_MATRIX,
        K_l=KURAMOTO_LINKAGE,
        F_r=FRACTAL_RESONANCE,
        S_l=SPECTRAL_LINKAGE,
        Syn_c=syn_c,
        Q_e=QUANTUM_ENTANGLEMENT,
        Sp_g=_granularity(wavelengths),
        N_s=n_s,
        G_r=GRANULARITY_REACTOR,
    )


def compute_spectral_tptt(
    spectrum: SpectrumSample,
    delta_t: float,
    phi: float = PHI,
    c: float = C,
    strict: bool = False,
) -> tuple[float, SpectralComponents]:
    """Spectrum-driven tPTT; returns the value with its components.

    ``c`` is the speed term of the formula. The spectral energy always
    converts wavelengths with the physical light speed.
    """
    components = spectral_components(spectrum)
    base = compute_tptt(
        components.T_c, components.P_s, components.E_t, delta_t, phi, c, strict=strict
    )
    return base * components.factor, components
