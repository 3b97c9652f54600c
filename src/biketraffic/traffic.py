"""Per-station arrival and departure aggregation."""

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, List

from .models import Station, Trip
from .time_filter import (
    DEFAULT_WINDOW_MINUTES,
    MINUTES_PER_DAY,
    NO_FILTER,
    minutes_since_midnight,
)

logger = logging.getLogger(__name__)


def count_departures(trips: Iterable[Trip]) -> Dict[str, int]:
    """Number of trips per start_station_id."""
    return Counter(trip.start_station_id for trip in trips)


def count_arrivals(trips: Iterable[Trip]) -> Dict[str, int]:
    """Number of trips per end_station_id."""
    return Counter(trip.end_station_id for trip in trips)


def compute_station_traffic(stations: Iterable[Station], trips: Iterable[Trip]) -> List[Station]:
    """
    Recompute arrivals and departures for every station.

    The input stations are left untouched; copies carrying the new counts are
    returned in the same order. Trips pointing at unknown stations are ignored
    and stations without trips get zero counts.

    Args:
        stations: Stations to aggregate for.
        trips: Trip subset to count (already time-filtered by the caller).

    Returns:
        List of new Station objects.
    """
    trips = list(trips)
    departures = count_departures(trips)
    arrivals = count_arrivals(trips)

    result = [
        replace(
            station,
            arrivals=arrivals.get(station.short_name, 0),
            departures=departures.get(station.short_name, 0),
        )
        for station in stations
    ]
    logger.debug(f"Computed traffic for {len(result)} stations from {len(trips)} trips")
    return result


class TripIndex:
    """
    Buckets trips by start and end minute so time-filtered subsets can be
    pulled without scanning the whole trip log.

    trips_near() returns the same trips, in the same order, as
    filter_trips_by_time().
    """

    def __init__(self, trips: Iterable[Trip]):
        self.trips: List[Trip] = list(trips)
        self._by_start_minute: List[List[int]] = [[] for _ in range(MINUTES_PER_DAY)]
        self._by_end_minute: List[List[int]] = [[] for _ in range(MINUTES_PER_DAY)]

        for position, trip in enumerate(self.trips):
            self._by_start_minute[minutes_since_midnight(trip.started_at)].append(position)
            self._by_end_minute[minutes_since_midnight(trip.ended_at)].append(position)

        logger.debug(f"Indexed {len(self.trips)} trips by minute")

    def __len__(self) -> int:
        return len(self.trips)

    def trips_near(self, time_filter: int, window_minutes: int = DEFAULT_WINDOW_MINUTES) -> List[Trip]:
        """Trips starting or ending within window_minutes of time_filter."""
        if time_filter == NO_FILTER:
            return list(self.trips)

        # No wraparound: the window is clipped at both ends of the day
        first = max(0, time_filter - window_minutes)
        last = min(MINUTES_PER_DAY - 1, time_filter + window_minutes)

        positions = set()
        for minute in range(first, last + 1):
            positions.update(self._by_start_minute[minute])
            positions.update(self._by_end_minute[minute])

        return [self.trips[position] for position in sorted(positions)]
