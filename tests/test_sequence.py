# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Deterministic Sequence Generator Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import math

import pytest

from temporal_engine.core.sequence import (
    PHI,
    generate_cycle,
    raw_seed,
    seed,
    seed_range,
    select,
    spherical,
)


class TestSeed:
    def test_pure(self):
        for cycle in (0, 1, 17, 999_999):
            for index in (0, 1, 7, 42):
                assert seed(cycle, index) == seed(cycle, index)

    def test_range(self):
        for cycle in range(0, 500, 7):
            for index in range(0, 20):
                value = seed(cycle, index)
                assert 0.0 <= value < 1.0

    def test_zero_argument_gives_zero(self):
        assert seed(0, 5) == 0.0
        assert seed(5, 0) == 0.0

    def test_matches_formula(self):
        expected = math.fmod(abs(math.sin(3 * 4 * PHI) * 1000.0), 999) / 999
        assert seed(3, 4) == pytest.approx(expected, abs=1e-15)
        assert raw_seed(3, 4) == pytest.approx(expected * 999, abs=1e-12)

    def test_phi_changes_output(self):
        assert seed(3, 4, phi=1.7) != seed(3, 4)


class TestDerivedHelpers:
    def test_seed_range_bounds(self):
        for i in range(50):
            v = seed_range(i, 3, -2.0, 5.0)
            assert -2.0 <= v < 5.0

    def test_select_deterministic(self):
        items = ["a", "b", "c", "d"]
        assert select(items, 10, 2) == select(items, 10, 2)
        assert select(items, 10, 2) in items

    def test_select_empty_raises(self):
        with pytest.raises(IndexError):
            select([], 1, 1)

    def test_spherical_shell(self):
        for i in range(20):
            x, y, z = spherical(i, 1, radius=10.0, depth=5.0)
            r = math.sqrt(x * x + y * y + z * z)
            assert 10.0 - 1e-9 <= r < 15.0 + 1e-9


class TestGenerateCycle:
    def test_bounded(self):
        assert generate_cycle(1_234_567_890_000) == 567_890

    def test_small_timestamp(self):
        assert generate_cycle(999) == 0
        assert generate_cycle(1000) == 1

    def test_wall_clock(self):
        value = generate_cycle()
        assert isinstance(value, int)
        assert 0 <= value < 1_000_000
