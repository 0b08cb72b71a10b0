# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Displacement Metric Pipeline Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import math

import pytest

from temporal_engine.core.config import EngineConfig
from temporal_engine.core.displacement import (
    black_hole_sequence,
    calculate_tdf_components,
    clamp_tdf,
    compute_tdf,
    dynamic_sl,
    et_growth,
    time_shift_metrics,
    time_shifted_rippel,
    validation_proofs,
)
from temporal_engine.core.types import TDFComponents


def _components(tdf, s_l=0.0, black_hole=1.85, tau=0.865):
    return TDFComponents(
        TDF_value=tdf, tau=tau, BlackHole_Seq=black_hole, S_L=s_l, E_t_growth=1.0
    )


@pytest.mark.physics
class TestBlackHoleSequence:
    def test_single_void(self):
        assert black_hole_sequence(1, 1, 1.666) == pytest.approx(4.998 - math.pi, abs=1e-6)

    def test_below_pi(self):
        for n in range(0, 40):
            assert 0.0 <= black_hole_sequence(7, n) < math.pi

    def test_overflow_guarded(self):
        assert black_hole_sequence(1, 10_000) == 0.0


@pytest.mark.physics
class TestTDF:
    @pytest.mark.parametrize("tptt", [0.0, 1.0, 1e20, -5e9])
    def test_zero_sequence_gives_zero(self, tptt):
        assert compute_tdf(tptt, 0.865, 0.0) == 0.0

    def test_formula(self):
        assert compute_tdf(1e9, 0.865, 2.0) == pytest.approx(1e9 * 0.865 / 2.0)

    def test_clamped(self):
        assert compute_tdf(1e20, 1.0, 1.0, 1e15) == 1e15
        assert compute_tdf(-1e20, 1.0, 1.0, 1e15) == -1e15

    def test_clamp_nan(self):
        assert clamp_tdf(math.nan) == 0.0


class TestDynamicSL:
    def test_uncapped_above_threshold(self):
        assert dynamic_sl(5e7, 1_000_001) == 5e7

    def test_capped_below_threshold(self):
        assert dynamic_sl(5e7, 999_999) == 1e6
        assert dynamic_sl(10.0, 999_999) == 10.0

    def test_boundary_is_capped(self):
        assert dynamic_sl(5e7, 1e6) == 1e6


class TestGrowth:
    def test_negative_cycle(self):
        assert et_growth(-1, 3.0) == 0.0

    def test_values(self):
        assert et_growth(0, 2.0) == 2.0
        assert et_growth(50, 1.0) == pytest.approx(math.e)

    def test_huge_cycle_finite(self):
        assert math.isfinite(et_growth(10**9, 1.0))


class TestComponents:
    def test_composition(self):
        cfg = EngineConfig()
        comp = calculate_tdf_components(1e9, 0, 1, 1, cfg)
        seq = 4.998 - math.pi
        assert comp.BlackHole_Seq == pytest.approx(seq, abs=1e-9)
        assert comp.TDF_value == pytest.approx(1e9 * 0.865 / seq)
        assert comp.E_t_growth == 1.0
        # TDF > 1e6, so S_L is left uncapped
        assert comp.S_L == pytest.approx(1.666 * comp.TDF_value)
        assert comp.tau == 0.865

    def test_small_tdf_caps_sl(self):
        cfg = EngineConfig(growth_rate_multiplier=1e9)
        comp = calculate_tdf_components(100.0, 0, 1, 1, cfg)
        assert comp.TDF_value < 1e6
        assert comp.S_L == 1e6


class TestTimeShift:
    def test_capable_requires_sync(self):
        cfg = EngineConfig()
        assert time_shift_metrics(_components(5e6), 0.9, cfg).timeShiftCapable
        assert not time_shift_metrics(_components(5e6), 0.8, cfg).timeShiftCapable
        assert not time_shift_metrics(_components(1e6), 0.99, cfg).timeShiftCapable

    @pytest.mark.parametrize(
        "tdf, validated", [(5.5e12, True), (5e12, False), (6e12, False), (7e12, False), (1e9, False)]
    )
    def test_breakthrough_band(self, tdf, validated):
        metrics = time_shift_metrics(_components(tdf), 0.5, EngineConfig())
        assert metrics.breakthrough_validated is validated

    def test_hidden_light(self):
        comp = _components(5.5e12)
        metrics = time_shift_metrics(comp, 0.5, EngineConfig())
        assert len(metrics.hiddenLightRevealed) == 10
        assert metrics.hiddenLightRevealed[0] == pytest.approx(abs(math.sin(5.5)) * 0.865)
        assert all(0.0 <= v <= 0.865 for v in metrics.hiddenLightRevealed)
        assert metrics.oscillatorMode == "c_rhythm"


class TestProofsAndRippel:
    def test_all_four_proofs(self):
        proofs = validation_proofs(_components(5.5e12, s_l=2e13))
        assert len(proofs) == 4
        assert "Uncapped" in proofs[-1]
        assert proofs[2].startswith("TDF Breakthrough Confirmed")

    def test_minimal_proofs(self):
        proofs = validation_proofs(_components(0.0, s_l=0.0, black_hole=0.0))
        assert proofs == ["Dynamic S_L: 0.00 - Piecewise logic confirmed"]

    def test_rippel_breakthrough(self):
        comp = _components(5.5e12)
        metrics = time_shift_metrics(comp, 0.5, EngineConfig())
        text = time_shifted_rippel(comp, metrics)
        assert text.startswith("reveal. reveal bends time.")
        assert "breakthrough validated" in text

    def test_rippel_calibrating(self):
        comp = _components(0.0)
        metrics = time_shift_metrics(comp, 0.5, EngineConfig())
        assert time_shifted_rippel(comp, metrics).startswith("shift. shift seeks light.")
