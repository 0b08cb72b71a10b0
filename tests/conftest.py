# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Shared Test Fixtures
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import math

import pytest

from temporal_engine.core import (
    BreakthroughPredictor,
    EngineConfig,
    EngineState,
    Isotope,
    MetricsCollector,
    SpectrumSample,
)


@pytest.fixture
def config():
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def c12():
    """Carbon-12 isotope (factor 1.0)."""
    return Isotope("C-12", 1.0)


@pytest.fixture
def thirds():
    """Three phases at exact thirds of the circle."""
    return [0.0, 2.0 * math.pi / 3.0, 4.0 * math.pi / 3.0]


@pytest.fixture
def state(config, thirds):
    """Initial engine state with evenly spaced phases."""
    return EngineState.initial(config, phases=thirds)


@pytest.fixture
def predictor():
    """Empty breakthrough predictor (capacity 100)."""
    return BreakthroughPredictor()


@pytest.fixture
def collector():
    """Fresh MetricsCollector for each test."""
    return MetricsCollector()


@pytest.fixture
def nearby_star():
    """Stellar-library spectrum 50 ly away."""
    return SpectrumSample.from_dict(
        {
            "wavelengths": [3000.0, 4500.0, 6000.0, 7500.0],
            "intensities": [0.9, 1.0, 0.8, 0.6],
            "granularity": 1.0,
            "source": "STELLAR_LIBRARY",
            "metadata": {"distance": 50.0, "emissionAge": 50.0, "class": "B2V"},
        }
    )
