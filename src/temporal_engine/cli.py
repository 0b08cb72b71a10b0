# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Command Line Interface
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
CLI entry point for the Temporal Engine.

Usage::

    temporal-engine version
    temporal-engine simulate --ticks 100 --dt 0.016 --profile detuned
    temporal-engine config --profile harmonic
    temporal-engine predict 30 0.28 --history cascades.jsonl
    temporal-engine export --ticks 10
"""

from __future__ import annotations

import json
import sys

_HISTORY_MAX_LINES = 10_000


def main(argv: list[str] | None = None) -> None:
    """CLI entry point — dispatches to subcommands."""
    args = argv if argv is not None else sys.argv[1:]

    if not args or args[0] in ("-h", "--help", "help"):
        _print_help()
        return

    cmd = args[0]
    rest = args[1:]

    commands = {
        "version": _cmd_version,
        "simulate": _cmd_simulate,
        "config": _cmd_config,
        "predict": _cmd_predict,
        "export": _cmd_export,
    }

    if cmd not in commands:
        print(f"Unknown command: {cmd}")
        _print_help()
        sys.exit(1)

    commands[cmd](rest)


def _print_help() -> None:
    print(
        "Temporal Engine CLI\n"
        "\n"
        "Usage: temporal-engine <command> [options]\n"
        "\n"
        "Commands:\n"
        "  version                 Show version info\n"
        "  simulate [--ticks N]    Run N ticks and print the final metrics\n"
        "  config [--profile X]    Show configuration\n"
        "  predict <n> <dphi>      Predict breakthrough for cascade parameters\n"
        "  export [--ticks N]      Print the flat JSON state after N ticks\n"
        "\n"
        "Common options: --profile NAME, --config FILE.yaml, --dt SECONDS, --json\n"
    )


def _option(args: list[str], name: str, default: str | None = None) -> str | None:
    if name in args:
        idx = args.index(name)
        if idx + 1 < len(args):
            return args[idx + 1]
        print(f"Missing value for {name}")
        sys.exit(1)
    return default


def _number(raw: str, kind, name: str):
    try:
        return kind(raw)
    except ValueError:
        print(f"Error: {name} must be a number, got {raw!r}")
        sys.exit(1)


def _load_config(args: list[str]):
    from temporal_engine.core.config import EngineConfig
    from temporal_engine.core.exceptions import ConfigError

    try:
        path = _option(args, "--config")
        if path:
            cfg = EngineConfig.from_yaml(path)
        elif "--profile" in args:
            cfg = EngineConfig.from_profile(_option(args, "--profile"))
        else:
            cfg = EngineConfig.from_env()
    except (ConfigError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    cfg.configure_logging()
    return cfg


def _run(args: list[str]):
    from temporal_engine.core.engine import TemporalEngine

    cfg = _load_config(args)
    ticks = _number(_option(args, "--ticks", "100"), int, "--ticks")
    dt = _number(_option(args, "--dt", "0.016"), float, "--dt")
    engine = TemporalEngine(cfg)
    engine.run(max(ticks, 0), dt)
    return engine


def _cmd_version(args: list[str]) -> None:
    import temporal_engine

    print(f"temporal-engine {temporal_engine.__version__}")


def _cmd_simulate(args: list[str]) -> None:
    engine = _run(args)
    last = engine.last
    if last is None:
        print("No ticks executed")
        return

    if "--json" in args:
        payload = {
            "cycle": engine.state.cycle,
            "snapshot": last.snapshot.to_dict(),
            "readiness": {
                "score": last.readiness.score,
                "status": last.readiness.status.value,
                "threshold": last.readiness.threshold,
            },
            "cascade_status": last.cascade.status,
        }
        print(json.dumps(payload, indent=2))
        return

    s = last.snapshot
    print(f"Cycle:      {engine.state.cycle}")
    print(f"Mode:       {s.mode}")
    print(f"tPTT:       {s.tPTT:.4e}")
    print(f"TDF:        {s.TDF_value:.4e}")
    print(f"S_L:        {s.S_L:.4e}")
    print(f"CTI:        {s.CTI:.4f}")
    print(f"Q_ent:      {s.Q_ent:.4f}")
    print(f"Coherence:  {s.phase_coherence:.4f}")
    print(f"Readiness:  {last.readiness.status.value} ({last.readiness.score:.1f})")
    print(f"Transport:  {last.cascade.status} ({s.efficiency:.2f}%)")
    print(s.rippel)


def _cmd_config(args: list[str]) -> None:
    cfg = _load_config(args)
    for key, value in cfg.to_dict().items():
        print(f"  {key}: {value}")


def _cmd_predict(args: list[str]) -> None:
    positional = [a for a in args if not a.startswith("--")]
    history_path = _option(args, "--history")
    if history_path in positional:
        positional.remove(history_path)
    if len(positional) < 2:
        print("Usage: temporal-engine predict <n> <delta_phase> [--history file.jsonl]")
        sys.exit(1)

    n = _number(positional[0], int, "n")
    delta_phase = _number(positional[1], float, "delta_phase")

    from temporal_engine.core.predictor import BreakthroughPredictor, CascadeHistoryRecord

    predictor = BreakthroughPredictor()
    if history_path:
        records = []
        try:
            with open(history_path, encoding="utf-8") as f:
                for line_no, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    if line_no > _HISTORY_MAX_LINES:
                        print(f"Warning: truncated at {_HISTORY_MAX_LINES} lines")
                        break
                    try:
                        records.append(CascadeHistoryRecord.from_dict(json.loads(line)))
                    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                        print(f"Warning: skipping malformed record on line {line_no}: {e}")
        except OSError as e:
            print(f"Error: {e}")
            sys.exit(1)
        predictor.extend(records)

    p = predictor.predict(n, delta_phase)
    if "--json" in args:
        print(json.dumps(p.to_dict(), indent=2, ensure_ascii=False))
        return
    print(f"Optimal n:       {p.optimalN}")
    print(f"Optimal δφ:      {p.optimalDeltaPhase:.3f}")
    print(f"Probability:     {p.breakthroughProbability:.2f}")
    print(f"Efficiency:      {p.predictedEfficiency:.2f}%")
    print(f"Confidence:      {p.confidence:.2f}")
    print(p.recommendation)


def _cmd_export(args: list[str]) -> None:
    if "--ticks" not in args:
        args = [*args, "--ticks", "0"]
    engine = _run(args)
    print(json.dumps(engine.export_state(), indent=2))


if __name__ == "__main__":
    main()
