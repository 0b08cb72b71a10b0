# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — State Import/Export Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import json
import math

import numpy as np
import pytest

from temporal_engine.core.engine import tick
from temporal_engine.core.exceptions import StateImportError
from temporal_engine.core.state import (
    EXPORT_KEYS,
    EngineState,
    export_state,
    import_state,
    state_from_json,
    state_to_json,
)
from temporal_engine.core.types import ReadinessStatus
from temporal_engine.core.waves import Isotope


class TestExport:
    def test_flat_keys(self, state):
        data = export_state(state)
        assert tuple(data) == EXPORT_KEYS
        assert data["isotope"] == {"type": "C-12", "factor": 1.0}
        assert isinstance(data["phases"], list)

    def test_json_serialisable(self, state):
        text = state_to_json(state)
        assert json.loads(text)["cycle"] == 0


class TestImport:
    def test_partial_override(self, state):
        out = import_state({"cycle": 5}, state)
        assert out.cycle == 5
        assert out.time == state.time
        np.testing.assert_array_equal(out.phases.theta, state.phases.theta)

    def test_full_override(self, state):
        payload = {
            "time": 3.5,
            "phases": [0.1, 0.2, 0.3],
            "fractalToggle": True,
            "timeline": 42.0,
            "isotope": {"type": "C-14", "factor": 0.8},
            "cycle": 12,
            "e_t": 0.7,
            "phi": 1.7,
            "delta_t": 2e-6,
        }
        out = import_state(payload, state)
        assert out.time == 3.5
        np.testing.assert_array_equal(out.phases.theta, [0.1, 0.2, 0.3])
        assert out.fractal_toggle is True
        assert out.timeline == 42.0
        assert out.isotope == Isotope("C-14", 0.8)
        assert (out.cycle, out.e_t, out.phi, out.delta_t) == (12, 0.7, 1.7, 2e-6)

    def test_malformed_fields_dropped(self, state):
        payload = {
            "time": 3.0,
            "cycle": -1,
            "phases": [1.0, "x"],
            "isotope": {"type": 5},
            "fractalToggle": "yes",
            "delta_t": 0,
            "e_t": 5.0,
            "phi": 3.0,
            "timeline": None,
            "unknown": {"a": 1},
        }
        out = import_state(payload, state)
        assert out.time == 3.0
        assert out.cycle == state.cycle
        np.testing.assert_array_equal(out.phases.theta, state.phases.theta)
        assert out.isotope == state.isotope
        assert out.fractal_toggle is False
        assert out.delta_t == state.delta_t
        assert out.e_t == state.e_t
        assert out.phi == state.phi
        assert out.timeline == state.timeline

    def test_bool_is_not_a_number(self, state):
        assert import_state({"time": True}, state).time == state.time

    def test_nan_rejected(self, state):
        out = state_from_json('{"time": NaN, "cycle": 3}', state)
        assert out.time == state.time
        assert out.cycle == 3

    @pytest.mark.parametrize(
        "field, attr",
        [
            ('"cycle": {big}', "cycle"),
            ('"time": {big}', "time"),
            ('"e_t": {big}', "e_t"),
            ('"timeline": {big}', "timeline"),
            ('"delta_t": {big}', "delta_t"),
            ('"phases": [{big}]', "phases"),
        ],
    )
    def test_oversized_integer_dropped(self, state, field, attr):
        big = "9" * 400
        text = "{" + field.format(big=big) + ', "fractalToggle": true}'
        out = state_from_json(text, state)
        assert out.fractal_toggle is True
        assert getattr(out, attr) is getattr(state, attr)

    def test_oversized_isotope_factor_dropped(self, state):
        text = '{"isotope": {"type": "C-14", "factor": ' + "7" * 400 + '}, "cycle": 4}'
        out = state_from_json(text, state)
        assert out.isotope == state.isotope
        assert out.cycle == 4

    def test_short_phases_extended(self, state):
        out = import_state({"phases": [0.5]}, state)
        np.testing.assert_array_equal(out.phases.theta, [0.5, 0.5, 0.5])

    def test_empty_phases_rejected(self, state):
        out = import_state({"phases": []}, state)
        assert out.phases is state.phases

    @pytest.mark.parametrize("payload", [[1, 2], "state", 3, None])
    def test_non_object_raises(self, state, payload):
        with pytest.raises(StateImportError):
            import_state(payload, state)

    def test_invalid_json_raises(self, state):
        with pytest.raises(StateImportError):
            state_from_json("{not json", state)

    def test_error_is_value_error(self, state):
        with pytest.raises(ValueError):
            import_state([], state)


class TestRoundTrip:
    @pytest.mark.physics
    def test_identical_next_snapshot(self, config, state, c12):
        for _ in range(7):
            state, _, _ = tick(state, 0.016, config)
        state = state.with_updates(fractal_toggle=True, isotope=Isotope("C-14", 0.8))

        restored = state_from_json(state_to_json(state), EngineState.initial(config))
        _, snap_a, _ = tick(state, 0.016, config)
        _, snap_b, _ = tick(restored, 0.016, config)
        assert snap_a == snap_b

    def test_initial_state(self, config):
        s = EngineState.initial(config)
        assert s.phases.n == 3
        assert s.cycle == 0
        assert s.readiness is ReadinessStatus.OFFLINE
        np.testing.assert_allclose(
            s.phases.theta, [0.0, 2 * math.pi / 3, 4 * math.pi / 3]
        )
