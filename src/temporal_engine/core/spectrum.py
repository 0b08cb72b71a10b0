# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Spectrum Sample Contract
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Read-only spectrum samples handed to the engine by external providers.

Providers supply equal-length ``wavelengths`` (Å) and ``intensities``, a
granularity in Ångström, a source tag and optional metadata (``None`` when
the provider sent none). The engine never mutates a sample.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .exceptions import SpectrumError


class SpectrumSource(str, Enum):
    SYNTHETIC = "SYNTHETIC"
    SDSS = "SDSS"
    STELLAR_LIBRARY = "STELLAR_LIBRARY"


@dataclass(frozen=True)
class SpectrumMetadata:
    distance: Optional[float] = None  # light-years
    emissionAge: Optional[float] = None  # years
    redshift: Optional[float] = None
    spectral_class: Optional[str] = None
    objid: Optional[str] = None


@dataclass(frozen=True)
class SpectrumSample:
    wavelengths: tuple[float, ...]
    intensities: tuple[float, ...]
    granularity: float = 1.0
    source: SpectrumSource = SpectrumSource.SYNTHETIC
    metadata: Optional[SpectrumMetadata] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "wavelengths", tuple(float(w) for w in self.wavelengths))
        object.__setattr__(self, "intensities", tuple(float(i) for i in self.intensities))
        object.__setattr__(self, "source", SpectrumSource(self.source))
        if len(self.wavelengths) != len(self.intensities):
            raise SpectrumError(
                f"wavelengths ({len(self.wavelengths)}) and intensities "
                f"({len(self.intensities)}) must have equal length"
            )

    @classmethod
    def from_dict(cls, data: dict) -> SpectrumSample:
        """Build a sample from a provider payload (``class`` maps to spectral_class)."""
        metadata = None
        if data.get("metadata") is not None:
            meta = dict(data["metadata"])
            if "class" in meta:
                meta["spectral_class"] = meta.pop("class")
            known = SpectrumMetadata.__dataclass_fields__
            metadata = SpectrumMetadata(**{k: v for k, v in meta.items() if k in known})
        return cls(
            wavelengths=tuple(data.get("wavelengths", ())),
            intensities=tuple(data.get("intensities", ())),
            granularity=float(data.get("granularity", 1.0)),
            source=data.get("source", SpectrumSource.SYNTHETIC),
            metadata=metadata,
        )


def spectral_confidence(spectrum: Optional[SpectrumSample]) -> float:
    """Neural-confidence proxy in (0, 1].

    ``exp(-variance / 2)`` of the max-normalised intensities; 0.5 without
    a usable spectrum.
    """
    if spectrum is None or not spectrum.intensities:
        return 0.5
    values = np.asarray(spectrum.intensities, dtype=np.float64)
    values = values[np.isfinite(values)]
    if values.shape[0] == 0:
        return 0.5
    peak = float(np.max(np.abs(values)))
    if peak == 0.0:
        return 1.0
    variance = float(np.var(values / peak))
    return math.exp(-variance / 2.0)


def spectrum_description(spectrum: Optional[SpectrumSample]) -> str:
    if spectrum is None:
        return "No spectrum selected"
    distance = spectrum.metadata.distance if spectrum.metadata is not None else None
    if spectrum.source is SpectrumSource.STELLAR_LIBRARY and distance:
        if distance < 50:
            return "Nearby Star (High Energy)"
        if distance < 500:
            return "Local Star (Medium Energy)"
        return "Distant Star (Standard Energy)"
    if spectrum.source is SpectrumSource.SDSS:
        return "Cosmic Object (High Threshold)"
    return "Synthetic Spectrum (Standard)"
