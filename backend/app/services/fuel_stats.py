"""Fuel economy statistics computed at read time.

Everything here works on plain sequences of records (anything exposing
``mileage``, ``liters`` and ``price_paid``) and never touches the database.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional


class PriceTrend(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    UNCHANGED = "unchanged"


@dataclass
class FuelStats:
    record: Any
    price_per_liter: Optional[float]
    distance: Optional[int] = None
    avg_consumption: Optional[float] = None
    avg_price_per_km: Optional[float] = None
    avg_price_per_100km: Optional[float] = None
    price_trend: Optional[PriceTrend] = None
    price_diff: Optional[float] = None


@dataclass
class FuelSummary:
    record_count: int
    total_liters: float
    total_spent: float
    distance: int
    avg_consumption: Optional[float]
    avg_price_per_km: Optional[float]
    avg_price_per_liter: Optional[float]


def sort_by_mileage(records: Iterable[Any]) -> List[Any]:
    """Newest reading first."""
    return sorted(records, key=lambda r: r.mileage, reverse=True)


def unit_price(record: Any) -> Optional[float]:
    if not record.liters:
        return None
    return record.price_paid / record.liters


def consumption_between(current: Any, previous: Any) -> dict:
    """Consumption figures for ``current`` given the next-lower reading."""
    distance = current.mileage - previous.mileage
    if distance <= 0:
        return {}
    per_km = current.price_paid / distance
    return {
        "distance": distance,
        "avg_consumption": current.liters / distance * 100,
        "avg_price_per_km": per_km,
        "avg_price_per_100km": per_km * 100,
    }


def price_trend(current: Any, previous: Any):
    """Compare unit prices of a record and the record right before it."""
    now, before = unit_price(current), unit_price(previous)
    if now is None or before is None:
        return None, None
    diff = now - before
    if diff > 0:
        return PriceTrend.INCREASE, diff
    if diff < 0:
        return PriceTrend.DECREASE, diff
    return PriceTrend.UNCHANGED, 0.0


def annotate_fuel_records(records: Iterable[Any]) -> List[FuelStats]:
    """Attach derived stats to each record, ordered by mileage descending.

    The lowest-mileage record has nothing to compare against, so all of its
    derived values stay None.
    """
    ordered = sort_by_mileage(records)
    annotated = []
    for index, record in enumerate(ordered):
        stats = FuelStats(record=record, price_per_liter=unit_price(record))
        if index < len(ordered) - 1:
            previous = ordered[index + 1]
            for key, value in consumption_between(record, previous).items():
                setattr(stats, key, value)
            stats.price_trend, stats.price_diff = price_trend(record, previous)
        annotated.append(stats)
    return annotated


def summarize_fuel_records(records: Iterable[Any]) -> FuelSummary:
    """Totals across all fill-ups of one car.

    The first fill-up only establishes the starting odometer reading, so its
    fuel is left out of the overall consumption.
    """
    ordered = sort_by_mileage(records)
    total_liters = sum(r.liters for r in ordered)
    total_spent = sum(r.price_paid for r in ordered)
    summary = FuelSummary(
        record_count=len(ordered),
        total_liters=total_liters,
        total_spent=total_spent,
        distance=0,
        avg_consumption=None,
        avg_price_per_km=None,
        avg_price_per_liter=total_spent / total_liters if total_liters else None,
    )
    if len(ordered) < 2:
        return summary

    summary.distance = ordered[0].mileage - ordered[-1].mileage
    if summary.distance > 0:
        counted = ordered[:-1]
        summary.avg_consumption = sum(r.liters for r in counted) / summary.distance * 100
        summary.avg_price_per_km = sum(r.price_paid for r in counted) / summary.distance
    return summary
