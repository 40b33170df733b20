from __future__ import annotations

import pytest

from thorpe.util.live_vars import (
    MetricSpec,
    MostRecentNVar,
    live_variable_registry,
    record_time_live_variable,
)


def test_register_and_get_variable() -> None:
    live_variable_registry.register_metric("test.var", "A test metric")
    var = live_variable_registry.get_variable("test.var")
    assert var is not None
    assert var.description == "A test metric"
    assert var.get_stats_summary() == "No samples"


def test_register_duplicate_raises() -> None:
    live_variable_registry.register_metric("dup.var")
    with pytest.raises(ValueError):
        live_variable_registry.register_metric("dup.var")


def test_register_metrics_skips_existing() -> None:
    live_variable_registry.register_metric("a.var")
    live_variable_registry.register_metrics(
        [MetricSpec("a.var", "again"), MetricSpec("b.var", "new")]
    )
    names = [v.name for v in live_variable_registry.get_all_variables()]
    assert names == ["a.var", "b.var"]


def test_record_unregistered_metric_raises() -> None:
    with pytest.raises(KeyError):
        live_variable_registry.record_metric("missing.var", 1.0)


def test_record_time_records_one_sample() -> None:
    live_variable_registry.register_metric("time.test_ms")
    with record_time_live_variable("time.test_ms"):
        pass
    var = live_variable_registry.get_variable("time.test_ms")
    assert var is not None
    assert var.stats_var.sample_count == 1
    assert var.stats_var.mean >= 0.0


def test_record_time_non_strict_skips_unregistered() -> None:
    live_variable_registry.strict = False
    try:
        with record_time_live_variable("time.unknown_ms"):
            pass
    finally:
        live_variable_registry.strict = True
    assert live_variable_registry.get_variable("time.unknown_ms") is None


def test_record_time_strict_raises_for_unregistered() -> None:
    with pytest.raises(KeyError), record_time_live_variable("time.unknown_ms"):
        pass


class TestMostRecentNVar:
    """Tests for the ring-buffer statistics variable."""

    def test_keeps_only_most_recent_samples(self) -> None:
        """Older samples fall out once the buffer is full."""
        var = MostRecentNVar(num_samples=3)
        for value in (100.0, 1.0, 2.0, 3.0):
            var.record(value)
        assert var.sample_count == 3
        assert var.mean == pytest.approx(2.0)

    def test_empty_percentiles_are_zero(self) -> None:
        """No samples reports zeros rather than failing."""
        assert MostRecentNVar(5).get_percentiles() == (0.0, 0.0, 0.0)

    def test_rejects_non_positive_size(self) -> None:
        """A zero-sized buffer is a programming error."""
        with pytest.raises(ValueError):
            MostRecentNVar(0)
