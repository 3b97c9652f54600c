"""Data models for the bike traffic map."""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Mapping, Optional
from datetime import datetime

import pandas as pd

if TYPE_CHECKING:
    from .scales import FlowScale, SizeScale


@dataclass
class Station:
    """Represents a bike-share dock with its traffic counts."""
    short_name: str
    latitude: float
    longitude: float
    name: str = ""
    arrivals: int = 0
    departures: int = 0

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Station":
        """
        Build a station from a raw stations.json record.

        Args:
            record: Mapping with at least short_name, lat and lon.

        Raises:
            ValueError: If the record isn't a mapping, a required field is missing,
                or coordinates aren't finite numbers.
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"Station record must be a mapping, got {type(record).__name__}")

        try:
            short_name = record["short_name"]
            latitude = float(record["lat"])
            longitude = float(record["lon"])
        except KeyError as e:
            raise ValueError(f"Station record missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid coordinates for station {record.get('short_name')}: {e}") from e

        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValueError(f"Non-finite coordinates for station {short_name}")

        if short_name is None or str(short_name) == "":
            raise ValueError("Station record has an empty short_name")

        return cls(
            short_name=str(short_name),
            latitude=latitude,
            longitude=longitude,
            name=str(record.get("name") or ""),
        )

    def tooltip_text(self) -> str:
        return f"{self.total_traffic} trips ({self.departures} departures, {self.arrivals} arrivals)"


@dataclass(frozen=True)
class Trip:
    """Represents one rental from a start station to an end station."""
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime
    ride_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Trip":
        """
        Build a trip from a raw trip log record.

        Timestamp strings are parsed with pandas; datetime values pass through.

        Raises:
            ValueError: If a required field is missing or a timestamp can't be parsed.
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"Trip record must be a mapping, got {type(record).__name__}")

        try:
            start_station_id = record["start_station_id"]
            end_station_id = record["end_station_id"]
            started_at = _to_datetime(record["started_at"])
            ended_at = _to_datetime(record["ended_at"])
        except KeyError as e:
            raise ValueError(f"Trip record missing field {e}") from e

        ride_id = record.get("ride_id") or None
        return cls(
            start_station_id=str(start_station_id),
            end_station_id=str(end_station_id),
            started_at=started_at,
            ended_at=ended_at,
            ride_id=str(ride_id) if ride_id is not None else None,
        )


def _to_datetime(value: Any) -> datetime:
    if value is pd.NaT:
        raise ValueError("Missing timestamp")
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    try:
        timestamp = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timestamp {value!r}: {e}") from e
    if pd.isna(timestamp):
        raise ValueError(f"Invalid timestamp {value!r}")
    return timestamp.to_pydatetime()


@dataclass
class TrafficView:
    """Station traffic and display scales for one time filter setting."""
    stations: List[Station]
    time_filter: int
    time_label: str
    size_scale: "SizeScale"
    flow_scale: "FlowScale"
    trip_count: int
    last_updated: datetime = field(default_factory=datetime.now)

    def get_station(self, short_name: str) -> Station:
        """Get a recomputed station by short_name."""
        for station in self.stations:
            if station.short_name == short_name:
                return station
        raise ValueError(f"Station {short_name} not found")

    def radius(self, station: Station) -> float:
        return self.size_scale(station.total_traffic)

    def departure_ratio(self, station: Station) -> float:
        return self.flow_scale.for_station(station)
