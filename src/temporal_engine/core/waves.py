# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Wave Field Generator
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Per-band scalar wave amplitudes from phase mode, isotope and wavelength.

  w = A · sin(2πx/λ - 2π · FREQ · t · φ^n + φ_mode) · isotope.factor
  A = min(1.2 if push else 0.8, 1.5)

The result is offset by +0.1 and hard-clamped to [-2, 2]. Bands form a
fixed UV-to-IR catalog; only the wavelength (µm) feeds the engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from .spectrum import SpectrumSample

WAVE_OFFSET = 0.1
WAVE_LIMIT = 2.0
BASE_AMPLITUDE = 1.0


@dataclass(frozen=True)
class Isotope:
    """Isotope value object; factor scales wave amplitude and coupling."""

    type: str
    factor: float

    def to_dict(self) -> dict:
        return {"type": self.type, "factor": self.factor}


ISOTOPES = (
    Isotope("C-12", 1.0),
    Isotope("C-14", 0.8),
)


@dataclass(frozen=True)
class SpectrumBand:
    """One catalog band. Only ``wavelength`` (µm) is consumed by the engine."""

    name: str
    wavelength: float
    color: str


SPECTRUM_BANDS = (
    SpectrumBand("UV-C", 0.250, "hsl(195, 100%, 50%)"),
    SpectrumBand("UV-B", 0.280, "hsl(225, 73%, 50%)"),
    SpectrumBand("UV-A", 0.350, "hsl(258, 100%, 50%)"),
    SpectrumBand("Violet", 0.380, "hsl(274, 100%, 50%)"),
    SpectrumBand("Blue", 0.450, "hsl(240, 100%, 50%)"),
    SpectrumBand("Cyan", 0.490, "hsl(180, 100%, 50%)"),
    SpectrumBand("Green", 0.530, "hsl(120, 100%, 50%)"),
    SpectrumBand("Yellow", 0.580, "hsl(60, 100%, 50%)"),
    SpectrumBand("Orange", 0.620, "hsl(30, 100%, 50%)"),
    SpectrumBand("Red", 0.700, "hsl(0, 100%, 50%)"),
    SpectrumBand("IR-A", 1.400, "hsl(15, 100%, 50%)"),
    SpectrumBand("IR-B", 2.500, "hsl(345, 100%, 27%)"),
)


def wave(
    x: float,
    t: float,
    harmonic_index: int,
    isotope: Isotope,
    wavelength: float,
    mode: str,
    freq: float = 528.0,
    phi: float = 1.666,
) -> float:
    """Clamped wave amplitude for one band."""
    phase_offset = math.pi / 4 if mode == "push" else -math.pi / 4
    amplitude = min(
        BASE_AMPLITUDE * 1.2 if mode == "push" else BASE_AMPLITUDE * 0.8,
        BASE_AMPLITUDE * 1.5,
    )
    spatial = 0.0
    if wavelength > 0 and math.isfinite(wavelength):
        spatial = 2.0 * math.pi * x / wavelength
    try:
        temporal = 2.0 * math.pi * freq * t * phi**harmonic_index
    except OverflowError:
        temporal = math.inf

    argument = spatial - temporal + phase_offset
    if not math.isfinite(argument):
        return WAVE_OFFSET
    value = amplitude * math.sin(argument) * isotope.factor + WAVE_OFFSET
    if math.isnan(value):
        return WAVE_OFFSET
    return max(-WAVE_LIMIT, min(WAVE_LIMIT, value))


def band_wavelengths(
    spectrum: Optional[SpectrumSample] = None,
    bands: Sequence[SpectrumBand] = SPECTRUM_BANDS,
) -> list[float]:
    """Wavelength (µm) per band.

    With a spectrum sample, band ``i`` reads sample wavelength
    ``i mod len(wavelengths)`` (Ångström, converted to µm).
    """
    if spectrum is None or not spectrum.wavelengths:
        return [b.wavelength for b in bands]
    samples = spectrum.wavelengths
    return [samples[i % len(samples)] * 1e-4 for i in range(len(bands))]


def wave_field(
    t: float,
    isotope: Isotope,
    mode: str,
    spectrum: Optional[SpectrumSample] = None,
    freq: float = 528.0,
    phi: float = 1.666,
    bands: Sequence[SpectrumBand] = SPECTRUM_BANDS,
) -> np.ndarray:
    """Evaluate :func:`wave` once per band at x = 0."""
    return np.array(
        [
            wave(0.0, t, i, isotope, lam, mode, freq=freq, phi=phi)
            for i, lam in enumerate(band_wavelengths(spectrum, bands))
        ],
        dtype=np.float64,
    )


def harmonic_oscillator(t: float, freq: float = 528.0, phi: float = 1.666) -> float:
    """Oscillator output P_o(t) = sin(2π · FREQ · t + π/φ)."""
    return math.sin(2.0 * math.pi * freq * t + math.pi / phi)
