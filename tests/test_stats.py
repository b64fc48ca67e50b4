from __future__ import annotations

from datetime import timedelta

from services.stats import StatsTracker


def test_average_interval_uses_reading_count(clock) -> None:
    tracker = StatsTracker(clock=clock)
    start = clock.now

    tracker.record_reading(start)
    tracker.record_reading(start + timedelta(milliseconds=1000))

    assert tracker.get_stats().average_interval_ms == 500


def test_average_interval_is_zero_without_two_readings(clock) -> None:
    tracker = StatsTracker(clock=clock)
    assert tracker.get_stats().average_interval_ms == 0

    tracker.record_reading()
    stats = tracker.get_stats()
    assert stats.total_readings == 1
    assert stats.average_interval_ms == 0


def test_uptime_and_alert_counts(clock) -> None:
    tracker = StatsTracker(clock=clock)

    tracker.record_alert()
    tracker.record_alert()
    clock.advance(minutes=3)

    stats = tracker.get_stats()
    assert stats.total_alerts == 2
    assert stats.total_readings == 0
    assert stats.uptime_minutes == 3
    assert stats.start_time == clock.now - timedelta(minutes=3)


def test_history_is_bounded_but_totals_cover_the_run(clock) -> None:
    tracker = StatsTracker(history_size=2, clock=clock)
    start = clock.now

    for second in range(4):
        tracker.record_reading(start + timedelta(seconds=second))

    stats = tracker.get_stats()
    assert stats.total_readings == 4
    assert stats.recent_readings == (start + timedelta(seconds=2), start + timedelta(seconds=3))
    assert stats.average_interval_ms == 750
