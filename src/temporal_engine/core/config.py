# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Configuration Manager
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Frozen dataclass configuration with env var, YAML, and profile support.

Usage::

    config = EngineConfig.from_env()
    config = EngineConfig.from_yaml("engine.yaml")
    config = EngineConfig.from_profile("detuned")
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, replace

import numpy as np
import yaml

from .exceptions import ConfigError

OSCILLATOR_FREQUENCIES = {"c_rhythm": 3e8, "528hz": 528.0}

# Valid TLM alignment band for phi
PHI_MIN = 1.566
PHI_MAX = 1.766


@dataclass(frozen=True)
class EngineConfig:
    """Immutable engine constants. Created once at startup.

    Parameters
    ----------
    coupling_strength : float — Kuramoto coupling K.
    oscillator_count : int — number of phase oscillators N.
    phi : float — TLM alignment constant PHI (not the golden ratio).
    freq : float — harmonic base frequency FREQ (Hz).
    delta_t : float — tPTT time step DELTA_T.
    dark_phase_offset : float — coupling phase offset φ_dark.
    fractal_scaling : float — fractal coupling term S.
    tau : float — time-dilation factor.
    oscillator_mode : str — "c_rhythm" (C = 3e8) or "528hz" (C = 528).
    overflow_clamp : float — symmetric TDF clamp bound.
    growth_rate_multiplier : float — E_t_growth multiplier.
    natural_frequencies : tuple — ω_i, reused modulo N when shorter.
    voids, displacement_n : int — black-hole sequence inputs for TDF.
    cascade_voids, cascade_n : int — cascade-index inputs for CTI.
    delta_phase : float — cascade phase adjustment δφ.
    sync_window : int — dual-sequence sync history length.
    history_capacity : int — predictor ring buffer size.
    ethics_score_threshold : float — minimum score for an Approved cascade.
    debug : bool — strict mode; invariant violations raise.
    record_cascades : bool — feed each tick's cascade into the predictor.
    metrics_enabled : bool — enable in-process metrics collection.
    log_level : str — logging level.
    log_json : bool — structured JSON logging.
    """

    # Phase synchronisation
    coupling_strength: float = 0.5
    oscillator_count: int = 3
    natural_frequencies: tuple[float, ...] = (1.0, 1.0, 1.0)
    dark_phase_offset: float = math.pi / 6
    fractal_scaling: float = 0.1

    # Waves / tPTT
    phi: float = 1.666
    freq: float = 528.0
    delta_t: float = 1e-6
    oscillator_mode: str = "c_rhythm"

    # Displacement
    tau: float = 0.865
    overflow_clamp: float = 1e15
    growth_rate_multiplier: float = 1.0
    voids: int = 1
    displacement_n: int = 1

    # Cascade
    cascade_voids: int = 7
    cascade_n: int = 29
    delta_phase: float = 0.27
    sync_window: int = 20
    history_capacity: int = 100
    ethics_score_threshold: float = 0.8

    # Behaviour
    debug: bool = False
    record_cascades: bool = True

    # Observability
    metrics_enabled: bool = True
    log_level: str = "INFO"
    log_json: bool = False

    # Profile name (informational)
    profile: str = "default"

    def __post_init__(self) -> None:
        if not isinstance(self.natural_frequencies, tuple):
            object.__setattr__(
                self,
                "natural_frequencies",
                tuple(float(w) for w in self.natural_frequencies),
            )
        if self.oscillator_count < 1:
            raise ConfigError(
                f"oscillator_count must be >= 1, got {self.oscillator_count}"
            )
        if not self.natural_frequencies:
            raise ConfigError("natural_frequencies must not be empty")
        if not (PHI_MIN <= self.phi <= PHI_MAX):
            raise ConfigError(
                f"phi must be in [{PHI_MIN}, {PHI_MAX}], got {self.phi}"
            )
        if self.delta_t <= 0:
            raise ConfigError(f"delta_t must be > 0, got {self.delta_t}")
        if self.oscillator_mode not in OSCILLATOR_FREQUENCIES:
            raise ConfigError(
                f"oscillator_mode must be one of {sorted(OSCILLATOR_FREQUENCIES)}, "
                f"got {self.oscillator_mode!r}"
            )
        if self.overflow_clamp <= 0:
            raise ConfigError(
                f"overflow_clamp must be > 0, got {self.overflow_clamp}"
            )
        if self.growth_rate_multiplier < 0:
            raise ConfigError(
                f"growth_rate_multiplier must be >= 0, got {self.growth_rate_multiplier}"
            )
        if self.cascade_voids < 1:
            raise ConfigError(f"cascade_voids must be >= 1, got {self.cascade_voids}")
        if self.cascade_n < 0:
            raise ConfigError(f"cascade_n must be >= 0, got {self.cascade_n}")
        if self.sync_window < 2:
            raise ConfigError(f"sync_window must be >= 2, got {self.sync_window}")
        if self.history_capacity < 1:
            raise ConfigError(
                f"history_capacity must be >= 1, got {self.history_capacity}"
            )
        if not (0.0 <= self.ethics_score_threshold <= 1.0):
            raise ConfigError(
                "ethics_score_threshold must be in [0, 1], "
                f"got {self.ethics_score_threshold}"
            )

    @property
    def oscillator_frequency(self) -> float:
        """Speed term C of the tPTT formula for the configured mode."""
        return OSCILLATOR_FREQUENCIES[self.oscillator_mode]

    def omega(self) -> np.ndarray:
        """Natural frequencies as an (N,) array, reused modulo their length."""
        base = self.natural_frequencies
        return np.array(
            [base[i % len(base)] for i in range(self.oscillator_count)],
            dtype=np.float64,
        )

    def with_overrides(self, **changes) -> EngineConfig:
        """Return a copy with *changes* applied (validated again)."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "TEMPORAL_") -> EngineConfig:
        """Load configuration from environment variables.

        Reads ``TEMPORAL_<FIELD>`` env vars (case-insensitive field matching).
        Example: ``TEMPORAL_COUPLING_STRENGTH=0.7``
        """
        kwargs: dict = {}
        field_map = {f.name.upper(): f for f in cls.__dataclass_fields__.values()}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            field_name = key[len(prefix) :]
            if field_name in field_map:
                fld = field_map[field_name]
                try:
                    kwargs[fld.name] = _coerce(value, fld.type)  # type: ignore[arg-type]
                except (ValueError, TypeError) as exc:
                    raise ConfigError(
                        f"Invalid value for env var {key}={value!r}: {exc}"
                    ) from exc

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str) -> EngineConfig:
        """Load configuration from a YAML file. Unknown keys are ignored."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return cls()
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_profile(cls, name: str) -> EngineConfig:
        """Load a predefined profile.

        Profiles
        --------
        - ``"default"`` — canonical constants.
        - ``"realtime"`` — ~16 ms cadence; quieter logging.
        - ``"observation"`` — slow cadence; short sync window.
        - ``"detuned"`` — non-identical natural frequencies (1.0, 1.1, 0.9).
        - ``"harmonic"`` — 528 Hz oscillator instead of the c-rhythm.
        - ``"breakthrough"`` — boosted growth and sweet-spot cascade.
        - ``"analysis"`` — strict mode, no cascade recording.
        """
        profiles: dict[str, dict] = {
            "default": {"profile": "default"},
            "realtime": {
                "log_level": "WARNING",
                "sync_window": 60,
                "profile": "realtime",
            },
            "observation": {
                "sync_window": 5,
                "profile": "observation",
            },
            "detuned": {
                "natural_frequencies": (1.0, 1.1, 0.9),
                "profile": "detuned",
            },
            "harmonic": {
                "oscillator_mode": "528hz",
                "profile": "harmonic",
            },
            "breakthrough": {
                "growth_rate_multiplier": 10.0,
                "cascade_n": 30,
                "delta_phase": 0.28,
                "profile": "breakthrough",
            },
            "analysis": {
                "debug": True,
                "record_cascades": False,
                "metrics_enabled": False,
                "profile": "analysis",
            },
        }
        if name not in profiles:
            raise ConfigError(
                f"Unknown profile '{name}'. Choose from: {list(profiles.keys())}"
            )
        return cls(**profiles[name])

    def configure_logging(self) -> None:
        """Apply log_level and log_json to the TemporalEngine logger hierarchy."""
        root = logging.getLogger("TemporalEngine")
        root.setLevel(getattr(logging, self.log_level.upper(), logging.INFO))

        if self.log_json:
            handler = logging.StreamHandler()
            handler.setFormatter(_JsonFormatter())
            root.handlers = [handler]

    def to_dict(self) -> dict:
        """Serialize to a plain dict (safe for JSON)."""
        d = {}
        for fld in self.__dataclass_fields__:
            val = getattr(self, fld)
            d[fld] = list(val) if isinstance(val, tuple) else val
        return d


class _JsonFormatter(logging.Formatter):
    """Structured JSON log formatter for production use."""

    def format(self, record: logging.LogRecord) -> str:
        import time as _time

        entry = {
            "ts": _time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        cycle = getattr(record, "cycle", None)
        if cycle is not None:
            entry["cycle"] = cycle
        return json.dumps(entry)


def _coerce(value: str, type_hint: str) -> object:
    """Coerce a string env var to the target type."""
    if type_hint == "bool":
        low = value.lower()
        if low in ("true", "1", "yes"):
            return True
        if low in ("false", "0", "no"):
            return False
        raise ValueError(
            f"invalid bool value: {value!r} (expected true/false/1/0/yes/no)"
        )
    if type_hint == "int":
        return int(value)
    if type_hint == "float":
        return float(value)
    if type_hint.startswith("tuple"):
        return tuple(float(s) for s in value.split(",") if s.strip())
    return value
