"""Telemetry 测试"""

from stacklauncher.telemetry import Metrics, metrics, truncate


class TestMetrics:
    def test_inc_counter(self):
        m = Metrics()
        m.inc("bootstrap.retry")
        m.inc("bootstrap.retry")
        assert m.get_counter("bootstrap.retry") == 2

    def test_inc_with_labels(self):
        m = Metrics()
        m.inc("stack.status", {"status": "ready"})
        m.inc("stack.status", {"status": "runtime_not_running"})
        assert m.get_counter("stack.status", {"status": "ready"}) == 1
        assert m.get_counter("stack.status", {"status": "runtime_not_running"}) == 1
        assert m.get_counter("stack.status") == 0

    def test_label_order_does_not_matter(self):
        m = Metrics()
        m.inc("x", {"a": "1", "b": "2"})
        assert m.get_counter("x", {"b": "2", "a": "1"}) == 1

    def test_gauge(self):
        m = Metrics()
        m.gauge("readiness.elapsed", 1.5)
        m.gauge("readiness.elapsed", 2.5)
        assert m.get_gauge("readiness.elapsed") == 2.5

    def test_reset(self):
        m = Metrics()
        m.inc("a")
        m.gauge("b", 1.0)
        m.reset()
        assert m.get_all_counters() == {}
        assert m.get_gauge("b") == 0.0

    def test_global_instance_reset_between_tests(self):
        assert metrics.get_all_counters() == {}


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("  error  ", 10) == "error"

    def test_long_text_truncated(self):
        result = truncate("x" * 30, 10)
        assert result.startswith("x" * 10)
        assert "20 more chars" in result
