"""Size and color scales for the station circles."""

import bisect
import math
from typing import Iterable, Sequence, Tuple

from .models import Station
from .time_filter import NO_FILTER

# Circle radius presets (pixels)
UNFILTERED_RADIUS_RANGE = (0, 25)
FILTERED_RADIUS_RANGE = (3, 50)

FLOW_BUCKETS = (0, 0.5, 1)
BALANCED_FLOW = 0.5


class SizeScale:
    """Square-root scale from total traffic to circle radius."""

    def __init__(self, max_traffic: int, radius_range: Tuple[float, float]):
        if max_traffic < 0:
            raise ValueError(f"max_traffic must be non-negative, got {max_traffic}")
        self.max_traffic = max_traffic
        self.radius_range = radius_range

    def __call__(self, traffic: float) -> float:
        if traffic < 0:
            raise ValueError(f"Traffic must be non-negative, got {traffic}")

        low, high = self.radius_range
        if self.max_traffic == 0:
            return low
        return low + (high - low) * math.sqrt(traffic / self.max_traffic)

    def __repr__(self) -> str:
        return f"SizeScale(max_traffic={self.max_traffic}, radius_range={self.radius_range})"


def radius_range_for(time_filter: int) -> Tuple[float, float]:
    """Small circles when showing all trips, larger ones for a selected time."""
    if time_filter == NO_FILTER:
        return UNFILTERED_RADIUS_RANGE
    return FILTERED_RADIUS_RANGE


def size_scale_for(stations: Iterable[Station], time_filter: int) -> SizeScale:
    max_traffic = max((station.total_traffic for station in stations), default=0)
    return SizeScale(max_traffic, radius_range_for(time_filter))


def flow_ratio(station: Station) -> float:
    """Share of a station's traffic that departs from it (0.5 when idle)."""
    if station.total_traffic == 0:
        return BALANCED_FLOW
    return station.departures / station.total_traffic


class FlowScale:
    """
    Quantize scale over [0, 1].

    The domain is split into equal-width buckets, one per output value. Inputs
    are clamped to the domain and a value on a boundary falls in the upper
    bucket.
    """

    def __init__(self, outputs: Sequence[float] = FLOW_BUCKETS):
        if not outputs:
            raise ValueError("FlowScale needs at least one output value")
        self.outputs = tuple(outputs)
        n = len(self.outputs)
        self.thresholds = [i / n for i in range(1, n)]

    def __call__(self, ratio: float) -> float:
        ratio = min(1.0, max(0.0, ratio))
        return self.outputs[bisect.bisect_right(self.thresholds, ratio)]

    def for_station(self, station: Station) -> float:
        if station.total_traffic == 0:
            return BALANCED_FLOW
        return self(flow_ratio(station))
