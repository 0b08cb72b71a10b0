# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Shared Types Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import math

import pytest

from temporal_engine.core.types import (
    FINITE_CEILING,
    MetricSnapshot,
    ReadinessStatus,
    _clamp,
    _finite,
)


class TestClamp:
    def test_in_range(self):
        assert _clamp(0.4) == 0.4

    def test_bounds(self):
        assert _clamp(-3.0) == 0.0
        assert _clamp(3.0, 0.0, 2.0) == 2.0

    def test_nan(self):
        assert _clamp(math.nan, 0.0, 100.0) == 0.0

    def test_inf(self):
        assert _clamp(math.inf, 0.0, 100.0) == 100.0
        assert _clamp(-math.inf, 0.0, 100.0) == 0.0


class TestFinite:
    def test_passthrough(self):
        assert _finite(12.5) == 12.5

    def test_nan_default(self):
        assert _finite(math.nan) == 0.0
        assert _finite(math.nan, default=7.0) == 7.0

    def test_infinities_saturate(self):
        assert _finite(math.inf) == FINITE_CEILING
        assert _finite(-math.inf) == -FINITE_CEILING

    def test_custom_ceiling(self):
        assert _finite(5e6, ceiling=1e6) == 1e6


class TestReadinessStatus:
    def test_values(self):
        assert [s.value for s in ReadinessStatus] == [
            "offline",
            "initializing",
            "charging",
            "preparing",
            "ready",
            "critical",
        ]

    def test_string_comparable(self):
        assert ReadinessStatus.READY == "ready"


def test_snapshot_to_dict():
    snap = MetricSnapshot(
        T_c=0.1, P_s=0.5, E_t=0.5, tPTT=1e9, TDF_value=4.6e8, tau=0.865,
        BlackHole_Seq=1.856, S_L=7.7e8, E_t_growth=1.0, CTI=1e6, Q_ent=0.08,
        cascade_index=29,
    )
    d = snap.to_dict()
    assert d["cascade_index"] == 29
    assert d["mode"] == "pull"
    assert d["tPTT"] == pytest.approx(1e9)
