"""BikeTraffic - Station traffic aggregation for a Bluebikes time-of-day map."""

__version__ = "0.1.0"

from .models import Station, Trip, TrafficView
from .time_filter import (
    NO_FILTER,
    filter_trips_by_time,
    format_clock_label,
    is_within_window,
    minutes_since_midnight,
)
from .traffic import TripIndex, compute_station_traffic
from .scales import FlowScale, SizeScale, flow_ratio, size_scale_for
from .loader import DataLoader
from .traffic_map import TrafficMap

__all__ = [
    "TrafficMap",
    "DataLoader",
    "Station",
    "Trip",
    "TrafficView",
    "NO_FILTER",
    "filter_trips_by_time",
    "format_clock_label",
    "is_within_window",
    "minutes_since_midnight",
    "TripIndex",
    "compute_station_traffic",
    "FlowScale",
    "SizeScale",
    "flow_ratio",
    "size_scale_for",
]
