"""Main TrafficMap class."""

import logging
from typing import Iterable, List, Optional

from .loader import DataLoader
from .models import Station, TrafficView, Trip
from .scales import FlowScale, size_scale_for
from .time_filter import (
    DEFAULT_WINDOW_MINUTES,
    NO_FILTER,
    time_filter_label,
    validate_time_filter,
)
from .traffic import TripIndex, compute_station_traffic

logger = logging.getLogger(__name__)


class TrafficMap:
    """
    Holds the station list and trip log for one map session.

    This class provides methods to:
    - Recompute per-station traffic for a time-of-day slider value
    - Derive the circle size and flow color scales for the renderer
    - Look up stations by short name
    """

    def __init__(
        self,
        stations: Iterable[Station],
        trips: Iterable[Trip],
        window_minutes: int = DEFAULT_WINDOW_MINUTES,
    ):
        """
        Initialize the map session.

        Args:
            stations: Stations to show. Their own traffic fields are never modified.
            trips: Full trip log for the session.
            window_minutes: Tolerance used when a time of day is selected.
        """
        self.stations: List[Station] = list(stations)
        self.trip_index = TripIndex(trips)
        self.window_minutes = window_minutes
        self.flow_scale = FlowScale()
        self.view: Optional[TrafficView] = None

        logger.info(f"Traffic map ready with {len(self.stations)} stations and {len(self.trip_index)} trips")

    @classmethod
    def from_files(cls, stations_path: str, trips_path: str, **kwargs) -> "TrafficMap":
        """
        Build a map session from local stations JSON and trips CSV files.

        Raises:
            ValueError: If either file is malformed.
        """
        loader = DataLoader()
        try:
            stations = loader.load_stations_from_file(stations_path)
            trips = loader.load_trips_from_file(trips_path)
        except Exception as e:
            logger.error(f"Failed to load traffic data: {e}")
            raise
        return cls(stations, trips, **kwargs)

    @property
    def trips(self) -> List[Trip]:
        return self.trip_index.trips

    def update(self, time_filter: int = NO_FILTER) -> TrafficView:
        """
        Recompute station traffic for a slider value.

        Args:
            time_filter: Minutes since midnight, or NO_FILTER (-1) for all trips.

        Returns:
            TrafficView with recomputed stations and display scales.

        Raises:
            ValueError: If time_filter is outside [-1, 1439].
        """
        time_filter = validate_time_filter(time_filter)

        trips = self.trip_index.trips_near(time_filter, self.window_minutes)
        stations = compute_station_traffic(self.stations, trips)

        self.view = TrafficView(
            stations=stations,
            time_filter=time_filter,
            time_label=time_filter_label(time_filter),
            size_scale=size_scale_for(stations, time_filter),
            flow_scale=self.flow_scale,
            trip_count=len(trips),
        )
        logger.debug(f"Updated traffic for {self.view.time_label}: {len(trips)} trips")
        return self.view

    def get_station(self, short_name: str) -> Station:
        """
        Get a station by short name.

        Raises:
            ValueError: If station not found.
        """
        for station in self.stations:
            if station.short_name == short_name:
                return station
        raise ValueError(f"Station {short_name} not found")

    @staticmethod
    def busiest_stations(view: TrafficView, limit: int = 10) -> List[Station]:
        """Stations with the most traffic first, ties broken by short name."""
        ranked = sorted(view.stations, key=lambda s: (-s.total_traffic, s.short_name))
        return ranked[:limit]
