# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Exception Hierarchy
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Structured exception hierarchy for the Temporal Engine.

All library-specific exceptions descend from ``TemporalEngineError`` so
callers can catch the entire family with a single except clause.

Numeric degeneracy is recovered locally by the pipeline; the numeric
exceptions below are raised only in strict (``debug``) mode.
"""


class TemporalEngineError(Exception):
    """Base exception for all Temporal Engine errors."""


class ConfigError(TemporalEngineError, ValueError):
    """Raised for invalid engine configuration values."""


class StateImportError(TemporalEngineError, ValueError):
    """Raised when an imported state payload is not a JSON object."""


class NumericalError(TemporalEngineError):
    """Raised when a numerical computation produces NaN/Inf in strict mode."""


class InvariantViolation(NumericalError):
    """Raised in strict mode when an upstream guard failed to hold.

    Example: a zero ``E_t`` reaching the tPTT formula even though the
    energy-accumulation step clamps it to ``[0.1, 1.0]``.
    """

    def __init__(self, quantity: str, value: float):
        self.quantity = quantity
        self.value = value
        super().__init__(f"Invariant violated: {quantity}={value!r}")


class SpectrumError(TemporalEngineError, ValueError):
    """Raised when a spectrum provider breaks the sample contract."""
