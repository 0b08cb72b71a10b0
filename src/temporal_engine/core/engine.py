# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Tick Composition & Driver Facade
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
One tick = advance phases → wave field → tPTT → TDF → cascade →
readiness → optional predictor record.

``tick`` is a pure transform over an explicit :class:`EngineState` (the
predictor being the only mutable collaborator). :class:`TemporalEngine`
wraps it for drivers that prefer an object holding the current state.

Usage::

    engine = TemporalEngine(EngineConfig.from_profile("default"))
    for _ in range(100):
        outcome = engine.step(0.016)
    print(engine.report())
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .cascade import chrono_transport, dual_sequence_sync
from .config import EngineConfig
from .displacement import (
    calculate_tdf_components,
    time_shift_metrics,
    time_shifted_rippel,
    validation_proofs,
)
from .metrics import MetricsCollector, metrics
from .phase import advance, phase_coherence, phase_mode
from .predictor import BreakthroughPredictor
from .readiness import evaluate_readiness
from .spectrum import SpectrumSample
from .state import EngineState, export_state, import_state
from .tptt import (
    accumulate_energy,
    compute_spectral_tptt,
    compute_tptt,
    generate_rippel,
    transponder_inputs,
)
from .types import (
    CascadeResult,
    DualSequenceSync,
    MetricSnapshot,
    ReadinessState,
    SpectralComponents,
    TDFComponents,
    TimeShiftMetrics,
    _finite,
)
from .waves import Isotope, wave_field

logger = logging.getLogger("TemporalEngine.Engine")

_FLOAT_FIELDS = (
    "T_c",
    "P_s",
    "E_t",
    "tPTT",
    "TDF_value",
    "tau",
    "BlackHole_Seq",
    "S_L",
    "E_t_growth",
    "CTI",
    "Q_ent",
    "phase_coherence",
    "transport_score",
    "efficiency",
)


@dataclass(frozen=True)
class TickOutcome:
    """Everything one tick derived, beyond the (state, snapshot, readiness) triple."""

    state: EngineState
    snapshot: MetricSnapshot
    readiness: ReadinessState
    components: TDFComponents
    time_shift: TimeShiftMetrics
    cascade: CascadeResult
    sync: DualSequenceSync
    light_wave: float
    numeric_recoveries: int = 0
    spectral: Optional[SpectralComponents] = None


def _sanitize(raw: dict) -> tuple[dict, int]:
    """Force every float field finite; returns the number of substitutions."""
    clean = dict(raw)
    recoveries = 0
    for name in _FLOAT_FIELDS:
        value = float(raw[name])
        fixed = _finite(value)
        if fixed != value:
            recoveries += 1
        clean[name] = fixed
    return clean, recoveries


def run_tick(
    state: EngineState,
    elapsed_time: float,
    config: EngineConfig,
    isotope: Optional[Isotope] = None,
    spectrum: Optional[SpectrumSample] = None,
    predictor: Optional[BreakthroughPredictor] = None,
    neural_confidence: Optional[float] = None,
    collector: Optional[MetricsCollector] = None,
) -> TickOutcome:
    """Execute one tick and return every intermediate result.

    With ``metrics_enabled`` the whole tick is timed into
    ``tick_duration_seconds``.
    """
    collector = collector if collector is not None else metrics
    args = (state, elapsed_time, config, isotope, spectrum, predictor, neural_confidence, collector)
    if not config.metrics_enabled:
        return _run_tick(*args)
    with collector.timer("tick_duration_seconds"):
        return _run_tick(*args)


def _run_tick(
    state: EngineState,
    elapsed_time: float,
    config: EngineConfig,
    isotope: Optional[Isotope],
    spectrum: Optional[SpectrumSample],
    predictor: Optional[BreakthroughPredictor],
    neural_confidence: Optional[float],
    collector: MetricsCollector,
) -> TickOutcome:
    record_metrics = config.metrics_enabled

    dt = float(elapsed_time)
    if not math.isfinite(dt) or dt < 0:
        logger.warning("Invalid elapsed_time %r — using 0", elapsed_time)
        dt = 0.0
    isotope = isotope or state.isotope
    cfg = config if state.phi == config.phi else config.with_overrides(phi=state.phi)

    cycle = state.cycle + 1
    now = state.time + dt
    mode = phase_mode(cycle, cfg.phi)

    phases = advance(
        state.phases.normalized(cfg.oscillator_count),
        dt,
        state.fractal_toggle,
        isotope,
        mode,
        coupling=cfg.coupling_strength,
        dark_offset=cfg.dark_phase_offset,
        fractal_scaling=cfg.fractal_scaling,
    )
    coherence = phase_coherence(phases.theta)

    field_values = wave_field(now, isotope, mode, spectrum, freq=cfg.freq, phi=cfg.phi)
    light_wave = float(np.mean(field_values))
    e_t = accumulate_energy(state.e_t, cycle, cfg.phi)
    spectral = None
    if spectrum is not None and spectrum.intensities:
        tptt, spectral = compute_spectral_tptt(
            spectrum, state.delta_t, cfg.phi, cfg.oscillator_frequency, strict=cfg.debug
        )
        T_c, P_s, tptt_e_t = spectral.T_c, spectral.P_s, spectral.E_t
    else:
        T_c, P_s = transponder_inputs(light_wave, cfg.phi)
        tptt_e_t = e_t
        tptt = compute_tptt(
            T_c, P_s, e_t, state.delta_t, cfg.phi, cfg.oscillator_frequency, strict=cfg.debug
        )

    components = calculate_tdf_components(
        tptt, cycle, cfg.voids, cfg.displacement_n, cfg
    )
    cascade = chrono_transport(components.TDF_value, cfg)
    sync = dual_sequence_sync(
        components.TDF_value, cascade.cascade_index, state.sync_history, cfg.sync_window
    )
    readiness = evaluate_readiness(
        _finite(tptt),
        coherence,
        sync.syncEfficiency,
        spectrum=spectrum,
        neural_confidence=neural_confidence,
        previous=state.readiness,
    )
    time_shift = time_shift_metrics(components, coherence, cfg)

    raw = {
        "T_c": T_c,
        "P_s": P_s,
        "E_t": tptt_e_t,
        "tPTT": tptt,
        "TDF_value": components.TDF_value,
        "tau": components.tau,
        "BlackHole_Seq": components.BlackHole_Seq,
        "S_L": components.S_L,
        "E_t_growth": components.E_t_growth,
        "CTI": cascade.CTI,
        "Q_ent": cascade.Q_ent,
        "phase_coherence": coherence,
        "transport_score": cascade.score,
        "efficiency": cascade.efficiency,
    }
    clean, recoveries = _sanitize(raw)
    snapshot = MetricSnapshot(
        cascade_index=cascade.cascade_index,
        mode=mode,
        rippel=generate_rippel(now, clean["tPTT"], tptt_e_t),
        **clean,
    )

    if predictor is not None and cfg.record_cascades:
        predictor.record(
            cascade.n, cascade.delta_phase, clean["efficiency"], clean["Q_ent"], timestamp=now
        )
        if record_metrics:
            collector.inc("cascade_records_total")

    history = (state.sync_history + ((sync.seq1, sync.seq2),))[-cfg.sync_window:]
    new_state = state.with_updates(
        phases=phases,
        time=now,
        cycle=cycle,
        e_t=e_t,
        isotope=isotope,
        readiness=readiness.status,
        sync_history=history,
    )

    if record_metrics:
        collector.inc("ticks_total")
        collector.inc("readiness_status", label=readiness.status.value)
        if recoveries:
            collector.inc("numeric_recoveries_total", recoveries)
        collector.observe("readiness_score", readiness.score)
        collector.gauge_set("phase_coherence", coherence)
        collector.gauge_set("tdf_value", clean["TDF_value"])

    logger.debug(
        "tick mode=%s tPTT=%.3e TDF=%.3e status=%s",
        mode,
        clean["tPTT"],
        clean["TDF_value"],
        readiness.status.value,
        extra={"cycle": cycle},
    )
    return TickOutcome(
        state=new_state,
        snapshot=snapshot,
        readiness=readiness,
        components=components,
        time_shift=time_shift,
        cascade=cascade,
        sync=sync,
        light_wave=light_wave,
        numeric_recoveries=recoveries,
        spectral=spectral,
    )


def tick(
    state: EngineState,
    elapsed_time: float,
    config: EngineConfig,
    isotope: Optional[Isotope] = None,
    spectrum: Optional[SpectrumSample] = None,
    predictor: Optional[BreakthroughPredictor] = None,
    neural_confidence: Optional[float] = None,
) -> tuple[EngineState, MetricSnapshot, ReadinessState]:
    """Advance the simulation by one tick.

    Returns ``(new_state, snapshot, readiness)``. *state* is not modified.
    """
    outcome = run_tick(
        state, elapsed_time, config, isotope, spectrum, predictor, neural_confidence
    )
    return outcome.state, outcome.snapshot, outcome.readiness


# ── Experiment log & facade ───────────────────────────────────────────


@dataclass(frozen=True)
class ExperimentLog:
    timestamp: float
    cycle: int
    TDF_value: float
    S_L: float
    tau: float
    BlackHole_Seq: float
    validated: bool
    status: str
    proofs: tuple[str, ...] = ()
    notes: str = ""


@dataclass
class TemporalEngine:
    """Stateful driver wrapper around :func:`run_tick`.

    Holds the current :class:`EngineState`, a predictor and a bounded
    experiment log. Not safe for concurrent ``step`` calls.
    """

    config: EngineConfig = field(default_factory=EngineConfig)
    predictor: Optional[BreakthroughPredictor] = None
    state: Optional[EngineState] = None
    log_capacity: int = 100
    last: Optional[TickOutcome] = field(default=None, init=False)
    experiments: deque = field(default_factory=deque, init=False)

    def __post_init__(self) -> None:
        if self.predictor is None:
            self.predictor = BreakthroughPredictor(self.config.history_capacity)
        if self.state is None:
            self.state = EngineState.initial(self.config)
        self.experiments = deque(maxlen=self.log_capacity)

    def step(
        self,
        elapsed_time: float,
        isotope: Optional[Isotope] = None,
        spectrum: Optional[SpectrumSample] = None,
        neural_confidence: Optional[float] = None,
    ) -> TickOutcome:
        outcome = run_tick(
            self.state,
            elapsed_time,
            self.config,
            isotope=isotope,
            spectrum=spectrum,
            predictor=self.predictor,
            neural_confidence=neural_confidence,
        )
        self.state = outcome.state
        self.last = outcome
        return outcome

    def run(self, ticks: int, dt: float, **kwargs) -> list[TickOutcome]:
        return [self.step(dt, **kwargs) for _ in range(ticks)]

    def export_state(self) -> dict:
        return export_state(self.state)

    def import_state(self, payload) -> EngineState:
        self.state = import_state(payload, self.state)
        return self.state

    def log_experiment(self, notes: str = "") -> ExperimentLog:
        """Snapshot the last tick's displacement result into the log."""
        if self.last is None:
            raise RuntimeError("No tick has run yet")
        c = self.last.components
        entry = ExperimentLog(
            timestamp=self.state.time,
            cycle=self.state.cycle,
            TDF_value=self.last.snapshot.TDF_value,
            S_L=self.last.snapshot.S_L,
            tau=c.tau,
            BlackHole_Seq=c.BlackHole_Seq,
            validated=self.last.time_shift.breakthrough_validated,
            status=self.last.cascade.status,
            proofs=tuple(validation_proofs(c)),
            notes=notes,
        )
        self.experiments.append(entry)
        return entry

    def report(self) -> str:
        """Markdown experiment report over the log and predictor history."""
        lines = ["# Temporal Engine Experiment Report", ""]
        lines.append(f"- Profile: `{self.config.profile}`")
        lines.append(f"- Oscillator mode: `{self.config.oscillator_mode}`")
        lines.append(f"- Cycle: {self.state.cycle}  Time: {self.state.time:.4f}s")
        if self.last is not None:
            s = self.last.snapshot
            lines += [
                "",
                "## Last tick",
                "",
                "| Metric | Value |",
                "|---|---|",
                f"| tPTT | {s.tPTT:.3e} |",
                f"| TDF | {s.TDF_value:.3e} |",
                f"| S_L | {s.S_L:.3e} |",
                f"| Q_ent | {s.Q_ent:.4f} |",
                f"| Phase coherence | {s.phase_coherence:.3f} |",
                f"| Readiness | {self.last.readiness.status.value} ({self.last.readiness.score:.1f}) |",
                "",
                f"> {time_shifted_rippel(self.last.components, self.last.time_shift)}",
            ]
        stats = self.predictor.statistics()
        lines += [
            "",
            "## Cascade history",
            "",
            f"- Runs: {stats['total_runs']}",
            f"- Mean efficiency: {stats['avg_efficiency']:.2f}%",
            f"- Breakthroughs: {stats['breakthrough_count']} ({stats['breakthrough_rate']:.0%})",
        ]
        if self.experiments:
            lines += ["", "## Experiments", ""]
            lines += ["| Cycle | TDF | S_L | Validated | Status | Notes |", "|---|---|---|---|---|---|"]
            for e in self.experiments:
                mark = "yes" if e.validated else "no"
                lines.append(
                    f"| {e.cycle} | {e.TDF_value:.3e} | {e.S_L:.3e} | {mark} | {e.status} | {e.notes} |"
                )
        return "\n".join(lines) + "\n"
