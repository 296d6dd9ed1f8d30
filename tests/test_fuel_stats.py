"""Tests for fuel economy statistics."""
from types import SimpleNamespace

import pytest

from app.services.fuel_stats import (
    PriceTrend,
    annotate_fuel_records,
    summarize_fuel_records,
)


def record(mileage, liters, price_paid):
    return SimpleNamespace(mileage=mileage, liters=liters, price_paid=price_paid)


class TestAnnotateFuelRecords:
    """Tests for annotate_fuel_records."""

    @pytest.fixture
    def records(self):
        # Given oldest first; the function sorts newest first
        return [
            record(10000, 40.0, 240.0),
            record(10500, 35.0, 227.5),
            record(11200, 49.0, 294.0),
        ]

    def test_sorted_by_mileage_descending(self, records):
        mileages = [s.record.mileage for s in annotate_fuel_records(records)]
        assert mileages == [11200, 10500, 10000]

    def test_consumption_between_readings(self, records):
        """Distance 500 km between the first two fill-ups."""
        stats = annotate_fuel_records(records)[1]
        assert stats.distance == 500
        assert stats.avg_consumption == pytest.approx(35.0 / 500 * 100)
        assert stats.avg_price_per_km == pytest.approx(227.5 / 500)
        assert stats.avg_price_per_100km == pytest.approx(227.5 / 500 * 100)

    def test_latest_record(self, records):
        stats = annotate_fuel_records(records)[0]
        assert stats.distance == 700
        assert stats.avg_consumption == pytest.approx(7.0)

    def test_earliest_record_not_applicable(self, records):
        stats = annotate_fuel_records(records)[-1]
        assert stats.distance is None
        assert stats.avg_consumption is None
        assert stats.avg_price_per_km is None
        assert stats.avg_price_per_100km is None
        assert stats.price_trend is None
        assert stats.price_per_liter == pytest.approx(6.0)

    def test_zero_distance_not_applicable(self):
        stats = annotate_fuel_records([record(500, 10.0, 60.0), record(500, 20.0, 120.0)])[0]
        assert stats.distance is None
        assert stats.avg_consumption is None
        assert stats.avg_price_per_km is None

    def test_price_trend(self, records):
        """6.00 -> 6.50 -> 6.00 per liter."""
        latest, middle, _ = annotate_fuel_records(records)
        assert middle.price_trend == PriceTrend.INCREASE
        assert middle.price_diff == pytest.approx(0.5)
        assert latest.price_trend == PriceTrend.DECREASE
        assert latest.price_diff == pytest.approx(-0.5)

    def test_price_unchanged(self):
        stats = annotate_fuel_records([record(100, 10.0, 60.0), record(200, 20.0, 120.0)])[0]
        assert stats.price_trend == PriceTrend.UNCHANGED
        assert stats.price_diff == 0.0

    def test_empty(self):
        assert annotate_fuel_records([]) == []


class TestSummarizeFuelRecords:
    """Tests for summarize_fuel_records."""

    def test_totals(self):
        summary = summarize_fuel_records([
            record(10000, 40.0, 240.0),
            record(10500, 35.0, 227.5),
            record(11200, 49.0, 294.0),
        ])
        assert summary.record_count == 3
        assert summary.total_liters == pytest.approx(124.0)
        assert summary.total_spent == pytest.approx(761.5)
        assert summary.distance == 1200
        # The first fill-up's fuel is excluded
        assert summary.avg_consumption == pytest.approx(84.0 / 1200 * 100)
        assert summary.avg_price_per_km == pytest.approx(521.5 / 1200)

    def test_single_record(self):
        summary = summarize_fuel_records([record(10000, 40.0, 240.0)])
        assert summary.distance == 0
        assert summary.avg_consumption is None
        assert summary.avg_price_per_liter == pytest.approx(6.0)

    def test_no_records(self):
        summary = summarize_fuel_records([])
        assert summary.record_count == 0
        assert summary.avg_price_per_liter is None
