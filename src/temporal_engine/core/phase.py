# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Phase Synchronization Model
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Kuramoto-style oscillator network with push/pull phase offsets.

For each oscillator i the coupling sum runs over j ≠ i:

  v_i = ω_i + K / max(N-1, 1) · Σ_j sin(θ_j - θ_i + φ_dark + φ_mode + f)

with φ_mode = +π/4 (push) or -π/4 (pull) and f = S · isotope.factor when
the fractal term is enabled. The new phase is θ_i + v_i · dt, wrapped to
[0, 2π). A non-finite velocity leaves that oscillator's previous phase
and velocity untouched.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .waves import Isotope

logger = logging.getLogger("TemporalEngine.Phase")

TWO_PI = 2.0 * math.pi
PUSH = "push"
PULL = "pull"


@dataclass(frozen=True, eq=False)
class PhaseState:
    """Ordered phase angles, natural frequencies and last velocities."""

    theta: np.ndarray  # (N,) phases in radians
    omega: np.ndarray  # (N,) natural frequencies
    velocity: Optional[np.ndarray] = field(default=None)  # (N,) last velocities

    @classmethod
    def create(cls, theta, omega) -> PhaseState:
        theta_arr = np.asarray(theta, dtype=np.float64).copy()
        omega_arr = np.asarray(omega, dtype=np.float64).copy()
        return cls(theta=theta_arr, omega=omega_arr, velocity=omega_arr.copy())

    @property
    def n(self) -> int:
        return int(self.theta.shape[0])

    def normalized(self, n: int) -> PhaseState:
        """Return a copy with exactly *n* oscillators.

        Short arrays are extended by reusing existing entries modulo their
        length; an empty phase array starts at zero.
        """
        n = max(n, 1)
        if self.n == n and self.omega.shape[0] == n:
            return self
        theta = _cycle_to(self.theta, n, fill=0.0)
        omega = _cycle_to(self.omega, n, fill=1.0)
        velocity = (
            _cycle_to(self.velocity, n, fill=1.0)
            if self.velocity is not None
            else omega.copy()
        )
        return PhaseState(theta=theta, omega=omega, velocity=velocity)


def _cycle_to(values: np.ndarray, n: int, fill: float) -> np.ndarray:
    if values.shape[0] == 0:
        return np.full(n, fill, dtype=np.float64)
    idx = np.arange(n) % values.shape[0]
    return values[idx].astype(np.float64)


def mode_offset(mode: str) -> float:
    """φ_mode: +π/4 for push, -π/4 otherwise."""
    return math.pi / 4 if mode == PUSH else -math.pi / 4


def phase_mode(cycle: int, phi: float) -> str:
    """Push when ``cycle mod φ`` lies in the upper half of [0, φ)."""
    return PUSH if math.fmod(cycle, phi) > phi / 2 else PULL


def advance(
    phases: PhaseState,
    dt: float,
    fractal: bool,
    isotope: Isotope,
    mode: str,
    coupling: float = 0.5,
    dark_offset: float = math.pi / 6,
    fractal_scaling: float = 0.1,
) -> PhaseState:
    """Advance every oscillator by one time step."""
    theta = phases.theta
    n = theta.shape[0]
    offset = dark_offset + mode_offset(mode)
    if fractal:
        offset += fractal_scaling * isotope.factor

    # diff[i, j] = θ_j - θ_i
    diff = theta[np.newaxis, :] - theta[:, np.newaxis] + offset
    with np.errstate(invalid="ignore", over="ignore"):
        sin_diff = np.sin(diff)
    np.fill_diagonal(sin_diff, 0.0)
    coupling_sum = np.sum(sin_diff, axis=1)

    velocity = phases.omega + (coupling / max(n - 1, 1)) * coupling_sum
    with np.errstate(invalid="ignore", over="ignore"):
        theta_new = theta + velocity * dt

    bad = ~(np.isfinite(velocity) & np.isfinite(theta_new))
    prev_velocity = phases.velocity if phases.velocity is not None else phases.omega
    if np.any(bad):
        logger.warning(
            "Non-finite velocity for %d oscillator(s) — retaining previous phase",
            int(np.count_nonzero(bad)),
        )
        velocity = np.where(bad, prev_velocity, velocity)
        theta_new = np.where(bad, theta, theta_new)

    with np.errstate(invalid="ignore"):
        theta_new = np.where(bad, theta_new, np.mod(theta_new, TWO_PI))
    return PhaseState(theta=theta_new, omega=phases.omega, velocity=velocity)


def phase_coherence(theta) -> float:
    """Kuramoto order parameter |mean(e^{iθ})| in [0, 1].

    Returns 0 for fewer than two oscillators; non-finite phases are ignored.
    """
    arr = np.asarray(theta, dtype=np.float64)
    arr = arr[np.isfinite(arr)]
    if arr.shape[0] < 2:
        return 0.0
    r = float(np.abs(np.mean(np.exp(1j * arr))))
    return min(1.0, max(0.0, r))
