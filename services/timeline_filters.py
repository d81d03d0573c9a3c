"""
Timeline table filters: pure functions over API-shaped dicts.

Items are the camelCase dicts the timeline endpoints return (``locationName``,
``stayDuration``, ``movementType``, ...). Each table has a processor that adds
derived fields and a pipeline that applies the filters relevant to it:

    stays    : search (locationName, address) + duration (stayDuration)
    trips    : search (origin/destination names, movementType)
                + transport mode + distance
    data gaps: duration (derived ``duration``)

Range options treat a zero bound as "no bound", and items whose measured
value is zero or missing never match a range filter.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional, Sequence

from shared.datetime_utils import ensure_utc

Item = dict[str, Any]


@dataclass(frozen=True)
class RangeOption:
    value: str
    label: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    def matches(self, amount: float) -> bool:
        if self.min_value and amount < self.min_value:
            return False
        if self.max_value and amount > self.max_value:
            return False
        return True


DURATION_OPTIONS: tuple[RangeOption, ...] = (
    RangeOption("short", "Less than 1 hour", max_value=3600),
    RangeOption("medium", "1-6 hours", min_value=3600, max_value=21600),
    RangeOption("long", "6+ hours", min_value=21600),
)

DISTANCE_OPTIONS: tuple[RangeOption, ...] = (
    RangeOption("short", "Less than 1 km", max_value=1000),
    RangeOption("medium", "1-10 km", min_value=1000, max_value=10000),
    RangeOption("long", "10+ km", min_value=10000),
)

STAY_SEARCH_FIELDS = ("locationName", "address")
TRIP_SEARCH_FIELDS = ("origin.locationName", "destination.locationName", "movementType")


def _find_option(options: Sequence[RangeOption], key: Optional[str]) -> Optional[RangeOption]:
    if not key:
        return None
    return next((opt for opt in options if opt.value == key), None)


def get_nested(obj: Any, path: str) -> Any:
    """Resolve a dotted *path* (``"origin.locationName"``); None when any hop is missing."""
    current = obj
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


# ── Filters ───────────────────────────────────────────────────────────────────


def apply_search_filter(
    items: list[Item], search_term: Optional[str], fields: Iterable[str]
) -> list[Item]:
    if not search_term or not search_term.strip():
        return items
    needle = search_term.strip().lower()
    fields = tuple(fields)

    def _matches(item: Item) -> bool:
        for field in fields:
            value = get_nested(item, field)
            if value and needle in str(value).lower():
                return True
        return False

    return [item for item in items if _matches(item)]


def apply_duration_filter(
    items: list[Item],
    option_key: Optional[str],
    duration_field: str,
    options: Sequence[RangeOption] = DURATION_OPTIONS,
) -> list[Item]:
    option = _find_option(options, option_key)
    if option is None:
        return items
    return [
        item
        for item in items
        if item.get(duration_field) and option.matches(item[duration_field])
    ]


def apply_transport_mode_filter(items: list[Item], mode: Optional[str]) -> list[Item]:
    if not mode:
        return items
    return [item for item in items if item.get("movementType") == mode]


def apply_distance_filter(
    items: list[Item],
    option_key: Optional[str],
    options: Sequence[RangeOption] = DISTANCE_OPTIONS,
) -> list[Item]:
    option = _find_option(options, option_key)
    if option is None:
        return items

    def _distance(item: Item) -> float:
        return item.get("distanceMeters") or item.get("distance") or 0

    return [item for item in items if _distance(item) and option.matches(_distance(item))]


# ── Processors ────────────────────────────────────────────────────────────────


def process_stays(stays: list[Item]) -> list[Item]:
    processed = []
    for stay in stays:
        if stay.get("timestamp") and stay.get("stayDuration"):
            end_time = ensure_utc(stay["timestamp"]) + timedelta(seconds=stay["stayDuration"])
            stay = {**stay, "endTime": end_time}
        processed.append(stay)
    return processed


def find_origin_stay(stays: list[Item], trip_start: datetime) -> Optional[Item]:
    """Latest stay starting at or before *trip_start*."""
    start = ensure_utc(trip_start)
    candidates = [s for s in stays if s.get("timestamp") and ensure_utc(s["timestamp"]) <= start]
    return max(candidates, key=lambda s: ensure_utc(s["timestamp"]), default=None)


def find_destination_stay(stays: list[Item], trip_end: datetime) -> Optional[Item]:
    """Earliest stay starting at or after *trip_end*."""
    end = ensure_utc(trip_end)
    candidates = [s for s in stays if s.get("timestamp") and ensure_utc(s["timestamp"]) >= end]
    return min(candidates, key=lambda s: ensure_utc(s["timestamp"]), default=None)


def process_trips(trips: list[Item], stays: list[Item]) -> list[Item]:
    processed = []
    for trip in trips:
        start = ensure_utc(trip["timestamp"])
        end = start + timedelta(seconds=trip.get("tripDuration") or 0)
        processed.append(
            {
                **trip,
                "endTime": end,
                "origin": find_origin_stay(stays, start),
                "destination": find_destination_stay(stays, end),
            }
        )
    return processed


def process_data_gaps(gaps: list[Item]) -> list[Item]:
    processed = []
    for gap in gaps:
        if gap.get("startTime") and gap.get("endTime"):
            seconds = (ensure_utc(gap["endTime"]) - ensure_utc(gap["startTime"])).total_seconds()
            gap = {**gap, "duration": int(seconds)}
        processed.append(gap)
    return processed


# ── Pipelines ─────────────────────────────────────────────────────────────────


def filter_stays(
    stays: list[Item], search: Optional[str] = None, duration: Optional[str] = None
) -> list[Item]:
    filtered = process_stays(stays)
    filtered = apply_search_filter(filtered, search, STAY_SEARCH_FIELDS)
    return apply_duration_filter(filtered, duration, "stayDuration")


def filter_trips(
    trips: list[Item],
    stays: list[Item],
    search: Optional[str] = None,
    transport_mode: Optional[str] = None,
    distance: Optional[str] = None,
) -> list[Item]:
    filtered = process_trips(trips, stays)
    filtered = apply_search_filter(filtered, search, TRIP_SEARCH_FIELDS)
    filtered = apply_transport_mode_filter(filtered, transport_mode)
    return apply_distance_filter(filtered, distance)


def filter_data_gaps(gaps: list[Item], duration: Optional[str] = None) -> list[Item]:
    return apply_duration_filter(process_data_gaps(gaps), duration, "duration")
