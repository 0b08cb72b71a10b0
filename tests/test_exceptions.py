# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Exception Hierarchy Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import pytest

from temporal_engine.core.exceptions import (
    ConfigError,
    InvariantViolation,
    NumericalError,
    SpectrumError,
    StateImportError,
    TemporalEngineError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [ConfigError, StateImportError, NumericalError, InvariantViolation, SpectrumError],
    )
    def test_all_descend_from_base(self, exc_type):
        assert issubclass(exc_type, TemporalEngineError)

    @pytest.mark.parametrize("exc_type", [ConfigError, StateImportError, SpectrumError])
    def test_input_errors_are_value_errors(self, exc_type):
        assert issubclass(exc_type, ValueError)

    def test_numerical_errors_are_not_value_errors(self):
        assert not issubclass(NumericalError, ValueError)


class TestInvariantViolation:
    def test_message(self):
        exc = InvariantViolation("E_t", 0.0)
        assert str(exc) == "Invariant violated: E_t=0.0"
        assert exc.quantity == "E_t"
        assert exc.value == 0.0

    def test_catchable_as_base(self):
        with pytest.raises(TemporalEngineError):
            raise InvariantViolation("delta_t", 0)
