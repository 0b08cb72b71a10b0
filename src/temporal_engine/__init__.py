# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Package Initialisation
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# Contact: www.anulum.li | protoscience@anulum.li
# ORCID: https://orcid.org/0009-0009-3560-0851
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Temporal Engine: deterministic phase/wave/metric simulation core.

::

    from temporal_engine import TemporalEngine

    engine = TemporalEngine()
    outcome = engine.step(0.016)
"""

__version__ = "1.0.0"

from .core import (
    BreakthroughPredictor,
    EngineConfig,
    EngineState,
    Isotope,
    MetricSnapshot,
    ReadinessState,
    ReadinessStatus,
    SpectrumSample,
    TemporalEngine,
    TemporalEngineError,
    export_state,
    import_state,
    tick,
)

__all__ = [
    "__version__",
    "TemporalEngine",
    "EngineConfig",
    "EngineState",
    "Isotope",
    "SpectrumSample",
    "MetricSnapshot",
    "ReadinessState",
    "ReadinessStatus",
    "BreakthroughPredictor",
    "TemporalEngineError",
    "tick",
    "export_state",
    "import_state",
]
