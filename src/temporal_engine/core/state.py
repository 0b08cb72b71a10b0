# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Engine State & Flat JSON Import/Export
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Explicit simulation state threaded through every tick.

The serialized form is a flat JSON object::

    {"time": 1.25, "phases": [0.0, 2.09, 4.18], "fractalToggle": false,
     "timeline": 0.0, "isotope": {"type": "C-12", "factor": 1.0},
     "cycle": 12, "e_t": 0.5, "phi": 1.666, "delta_t": 1e-06}

Import accepts any subset of these keys. Each field is validated on its
own; malformed or unknown fields are dropped and the rest applied.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional

import numpy as np

from .exceptions import StateImportError
from .phase import PhaseState
from .tptt import E_T_DEFAULT, E_T_MAX, E_T_MIN, validate_phi
from .types import ReadinessStatus
from .waves import ISOTOPES, Isotope

if TYPE_CHECKING:
    from .config import EngineConfig

logger = logging.getLogger("TemporalEngine.State")

EXPORT_KEYS = (
    "time",
    "phases",
    "fractalToggle",
    "timeline",
    "isotope",
    "cycle",
    "e_t",
    "phi",
    "delta_t",
)


@dataclass(frozen=True)
class EngineState:
    """Immutable per-tick state; ``tick`` returns a new instance."""

    phases: PhaseState
    time: float = 0.0
    cycle: int = 0
    e_t: float = E_T_DEFAULT
    phi: float = 1.666
    delta_t: float = 1e-6
    fractal_toggle: bool = False
    timeline: float = 0.0
    isotope: Isotope = field(default_factory=lambda: ISOTOPES[0])
    readiness: ReadinessStatus = ReadinessStatus.OFFLINE
    sync_history: tuple[tuple[int, int], ...] = ()

    @classmethod
    def initial(cls, config: EngineConfig, phases=None, isotope: Optional[Isotope] = None) -> EngineState:
        """Fresh state; phases default to even spacing around the circle."""
        n = config.oscillator_count
        if phases is None:
            phases = np.arange(n, dtype=np.float64) * (2.0 * math.pi / n)
        return cls(
            phases=PhaseState.create(phases, config.omega()).normalized(n),
            phi=config.phi,
            delta_t=config.delta_t,
            isotope=isotope or ISOTOPES[0],
        )

    def with_updates(self, **changes) -> EngineState:
        return replace(self, **changes)


def _is_number(value) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # json.loads yields Python ints of any length
        return False


def export_state(state: EngineState) -> dict:
    return {
        "time": state.time,
        "phases": [float(p) for p in state.phases.theta],
        "fractalToggle": state.fractal_toggle,
        "timeline": state.timeline,
        "isotope": state.isotope.to_dict(),
        "cycle": state.cycle,
        "e_t": state.e_t,
        "phi": state.phi,
        "delta_t": state.delta_t,
    }


def _parse_isotope(value) -> Optional[Isotope]:
    if not isinstance(value, dict):
        return None
    kind, factor = value.get("type"), value.get("factor")
    if not isinstance(kind, str) or not _is_number(factor):
        return None
    return Isotope(kind, float(factor))


def import_state(payload, base: EngineState) -> EngineState:
    """Apply a partial flat-JSON override onto *base*.

    Raises
    ------
    StateImportError
        If *payload* is not a JSON object at all.
    """
    if not isinstance(payload, dict):
        raise StateImportError(
            f"State payload must be a JSON object, got {type(payload).__name__}"
        )

    changes: dict = {}
    rejected: list[str] = []

    def accept(key, ok, name, value):
        if key not in payload:
            return
        if ok:
            changes[name] = value
        else:
            rejected.append(key)

    time_ = payload.get("time")
    accept("time", _is_number(time_), "time", float(time_) if _is_number(time_) else None)

    phases = payload.get("phases")
    phases_ok = isinstance(phases, list) and len(phases) > 0 and all(_is_number(p) for p in phases)
    if phases_ok:
        theta = np.asarray(phases, dtype=np.float64)
        new_phases = PhaseState(
            theta=theta, omega=base.phases.omega, velocity=base.phases.velocity
        ).normalized(base.phases.n)
        accept("phases", True, "phases", new_phases)
    else:
        accept("phases", False, "phases", None)

    fractal = payload.get("fractalToggle")
    accept("fractalToggle", isinstance(fractal, bool), "fractal_toggle", fractal)

    timeline = payload.get("timeline")
    accept("timeline", _is_number(timeline), "timeline", float(timeline) if _is_number(timeline) else None)

    isotope = _parse_isotope(payload.get("isotope"))
    accept("isotope", isotope is not None, "isotope", isotope)

    cycle = payload.get("cycle")
    cycle_ok = _is_number(cycle) and float(cycle).is_integer() and cycle >= 0
    accept("cycle", cycle_ok, "cycle", int(cycle) if cycle_ok else None)

    e_t = payload.get("e_t")
    e_t_ok = _is_number(e_t) and E_T_MIN <= e_t <= E_T_MAX
    accept("e_t", e_t_ok, "e_t", float(e_t) if e_t_ok else None)

    phi = payload.get("phi")
    phi_ok = _is_number(phi) and validate_phi(phi)
    accept("phi", phi_ok, "phi", float(phi) if phi_ok else None)

    delta_t = payload.get("delta_t")
    delta_ok = _is_number(delta_t) and delta_t > 0
    accept("delta_t", delta_ok, "delta_t", float(delta_t) if delta_ok else None)

    unknown = sorted(set(payload) - set(EXPORT_KEYS))
    if rejected:
        logger.warning("Dropped malformed state fields: %s", ", ".join(rejected))
    if unknown:
        logger.debug("Ignored unknown state fields: %s", ", ".join(unknown))
    return base.with_updates(**changes)


def state_to_json(state: EngineState, indent: Optional[int] = 2) -> str:
    return json.dumps(export_state(state), indent=indent)


def state_from_json(text: str, base: EngineState) -> EngineState:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StateImportError(f"Invalid state JSON: {exc}") from exc
    return import_state(payload, base)
