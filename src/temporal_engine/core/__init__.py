# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Core Package (Simulation Pipeline)
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Deterministic temporal simulation pipeline.

Quick start::

    from temporal_engine.core import EngineConfig, EngineState, tick

    config = EngineConfig()
    state = EngineState.initial(config)
    state, snapshot, readiness = tick(state, 0.016, config)
    print(snapshot.tPTT, readiness.status)
"""

from .cascade import (
    cascade_index,
    chrono_transport,
    cti,
    dual_sequence_sync,
    q_ent,
    transport_score,
)
from .config import EngineConfig
from .displacement import (
    black_hole_sequence,
    calculate_tdf_components,
    compute_tdf,
    dynamic_sl,
    et_growth,
    time_shift_metrics,
    time_shifted_rippel,
    validation_proofs,
)
from .engine import ExperimentLog, TemporalEngine, TickOutcome, run_tick, tick
from .exceptions import (
    ConfigError,
    InvariantViolation,
    NumericalError,
    SpectrumError,
    StateImportError,
    TemporalEngineError,
)
from .metrics import MetricsCollector, metrics
from .phase import PhaseState, advance, phase_coherence, phase_mode
from .predictor import BreakthroughPredictor, CascadeHistoryRecord, Prediction
from .readiness import adaptive_threshold, evaluate_readiness, readiness_score
from .sequence import PHI, generate_cycle, seed, seed_range, select, spherical
from .spectrum import (
    SpectrumMetadata,
    SpectrumSample,
    SpectrumSource,
    spectral_confidence,
    spectrum_description,
)
from .state import EngineState, export_state, import_state, state_from_json, state_to_json
from .tptt import (
    compute_spectral_tptt,
    compute_tptt,
    generate_rippel,
    spectral_components,
    validate_phi,
)
from .types import (
    CascadeResult,
    DualSequenceSync,
    MetricSnapshot,
    ReadinessState,
    ReadinessStatus,
    SpectralComponents,
    TDFComponents,
    TimeShiftMetrics,
)
from .waves import ISOTOPES, SPECTRUM_BANDS, Isotope, SpectrumBand, wave, wave_field

__all__ = [
    "EngineConfig",
    "EngineState",
    "TemporalEngine",
    "ExperimentLog",
    "TickOutcome",
    "tick",
    "run_tick",
    "export_state",
    "import_state",
    "state_to_json",
    "state_from_json",
    # Sequence / phase / waves
    "PHI",
    "seed",
    "seed_range",
    "select",
    "spherical",
    "generate_cycle",
    "PhaseState",
    "advance",
    "phase_coherence",
    "phase_mode",
    "Isotope",
    "ISOTOPES",
    "SpectrumBand",
    "SPECTRUM_BANDS",
    "wave",
    "wave_field",
    # Metric chain
    "compute_tptt",
    "generate_rippel",
    "validate_phi",
    "spectral_components",
    "compute_spectral_tptt",
    "black_hole_sequence",
    "et_growth",
    "compute_tdf",
    "dynamic_sl",
    "calculate_tdf_components",
    "time_shift_metrics",
    "validation_proofs",
    "time_shifted_rippel",
    "cascade_index",
    "cti",
    "q_ent",
    "transport_score",
    "dual_sequence_sync",
    "chrono_transport",
    # Readiness / prediction
    "SpectrumSample",
    "SpectrumSource",
    "SpectrumMetadata",
    "spectral_confidence",
    "spectrum_description",
    "adaptive_threshold",
    "readiness_score",
    "evaluate_readiness",
    "BreakthroughPredictor",
    "CascadeHistoryRecord",
    "Prediction",
    # Types
    "MetricSnapshot",
    "ReadinessState",
    "ReadinessStatus",
    "TDFComponents",
    "SpectralComponents",
    "TimeShiftMetrics",
    "CascadeResult",
    "DualSequenceSync",
    # Errors / observability
    "TemporalEngineError",
    "ConfigError",
    "StateImportError",
    "NumericalError",
    "InvariantViolation",
    "SpectrumError",
    "MetricsCollector",
    "metrics",
]
