# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Deterministic Sequence Generator
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Seed-to-scalar hashing used in place of nondeterministic randomness.

Every value is a pure function of ``(cycle, index, phi)``:

    seed = (|sin(cycle · index · φ)| · 1000 mod 999) / 999   ∈ [0, 1)

``generate_cycle`` is the only entry point for wall-clock time. Call it
at most once per logical tick and thread the result explicitly.
"""

from __future__ import annotations

import math
import time
from typing import Sequence, TypeVar

T = TypeVar("T")

PHI = 1.666  # TLM alignment factor
SEED_MODULUS = 999
CYCLE_MODULUS = 1_000_000


def raw_seed(cycle: int, index: int, phi: float = PHI) -> float:
    """Un-normalised seed in [0, 999)."""
    return math.fmod(abs(math.sin(cycle * index * phi) * 1000.0), SEED_MODULUS)


def seed(cycle: int, index: int, phi: float = PHI) -> float:
    """Deterministic pseudo-random scalar in [0, 1)."""
    return raw_seed(cycle, index, phi) / SEED_MODULUS


def seed_range(
    cycle: int, index: int, lo: float, hi: float, phi: float = PHI
) -> float:
    """Affine remap of :func:`seed` onto [lo, hi)."""
    return lo + seed(cycle, index, phi) * (hi - lo)


def select(items: Sequence[T], cycle: int, index: int) -> T:
    """Pick one element of *items* by remapped seed index."""
    if not items:
        raise IndexError("select() from an empty sequence")
    return items[int(seed(cycle, index) * len(items))]


def spherical(
    cycle: int, index: int, radius: float, depth: float
) -> tuple[float, float, float]:
    """Deterministic 3-D point in a spherical shell (visualiser input)."""
    r = radius + seed(cycle, index) * depth
    theta = seed(cycle, index + 1) * 2.0 * math.pi
    polar = math.acos(2.0 * seed(cycle, index + 2) - 1.0)
    return (
        r * math.sin(polar) * math.cos(theta),
        r * math.sin(polar) * math.sin(theta),
        r * math.cos(polar),
    )


def generate_cycle(timestamp: float | None = None) -> int:
    """Map a millisecond timestamp to a bounded cycle integer.

    ``None`` reads the wall clock.
    """
    ts = time.time() * 1000.0 if timestamp is None else timestamp
    return int(math.floor(ts / 1000.0)) % CYCLE_MODULUS
