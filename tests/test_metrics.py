# ─────────────────────────────────────────────────────────────────────
# Temporal Engine — Metrics Collector Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import threading
import time

from temporal_engine.core.metrics import MetricsCollector, metrics


class TestCounters:
    def test_increment(self, collector):
        collector.inc("ticks_total")
        collector.inc("ticks_total")
        assert collector.get_metrics()["counters"]["ticks_total"]["total"] == 2.0

    def test_increment_by_amount(self, collector):
        collector.inc("numeric_recoveries_total", 3.0)
        assert collector.get_metrics()["counters"]["numeric_recoveries_total"]["total"] == 3.0

    def test_labeled_counter(self, collector):
        collector.inc("readiness_status", label="charging")
        collector.inc("readiness_status", label="charging")
        collector.inc("readiness_status", label="ready")
        c = collector.get_metrics()["counters"]["readiness_status"]
        assert c["labels"] == {"charging": 2.0, "ready": 1.0}
        assert c["total"] == 3.0

    def test_auto_create(self, collector):
        collector.inc("custom_total")
        assert "custom_total" in collector.get_metrics()["counters"]


class TestHistograms:
    def test_observe(self, collector):
        for v in (10.0, 50.0, 90.0):
            collector.observe("readiness_score", v)
        h = collector.get_metrics()["histograms"]["readiness_score"]
        assert h["count"] == 3
        assert h["mean"] == 50.0
        assert h["p50"] == 50.0

    def test_timer(self, collector):
        with collector.timer("tick_duration_seconds"):
            time.sleep(0.001)
        h = collector.get_metrics()["histograms"]["tick_duration_seconds"]
        assert h["count"] == 1
        assert h["total"] > 0.0

    def test_empty_quantile(self, collector):
        assert collector.get_metrics()["histograms"]["readiness_score"]["p99"] == 0.0


class TestGauges:
    def test_set(self, collector):
        collector.gauge_set("phase_coherence", 0.42)
        assert collector.get_metrics()["gauges"]["phase_coherence"] == 0.42


class TestPrometheus:
    def test_format(self, collector):
        collector.inc("ticks_total")
        collector.inc("readiness_status", label="offline")
        collector.observe("readiness_score", 55.0)
        text = collector.prometheus_format()
        assert "# TYPE temporal_engine_ticks_total counter" in text
        assert "temporal_engine_ticks_total 1.0" in text
        assert 'temporal_engine_readiness_status{status="offline"} 1.0' in text
        assert 'temporal_engine_readiness_score_bucket{le="60.0"} 1' in text
        assert 'temporal_engine_readiness_score_bucket{le="50.0"} 0' in text
        assert "# TYPE temporal_engine_tdf_value gauge" in text
        assert text.endswith("\n")


class TestLifecycle:
    def test_disabled_is_noop(self):
        c = MetricsCollector(enabled=False)
        c.inc("ticks_total")
        c.observe("readiness_score", 1.0)
        c.gauge_set("tdf_value", 5.0)
        m = c.get_metrics()
        assert m["counters"]["ticks_total"]["total"] == 0.0
        assert m["histograms"]["readiness_score"]["count"] == 0
        assert m["gauges"]["tdf_value"] == 0.0

    def test_reset(self, collector):
        collector.inc("ticks_total")
        collector.inc("readiness_status", label="ready")
        collector.observe("readiness_score", 1.0)
        collector.gauge_set("tdf_value", 5.0)
        collector.reset()
        m = collector.get_metrics()
        assert m["counters"]["ticks_total"]["total"] == 0.0
        assert m["counters"]["readiness_status"]["labels"] == {}
        assert m["histograms"]["readiness_score"]["count"] == 0
        assert m["gauges"]["tdf_value"] == 0.0

    def test_thread_safety(self, collector):
        def worker():
            for _ in range(500):
                collector.inc("ticks_total")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert collector.get_metrics()["counters"]["ticks_total"]["total"] == 2000.0

    def test_singleton(self):
        assert isinstance(metrics, MetricsCollector)
