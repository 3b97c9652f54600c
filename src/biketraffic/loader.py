"""Loader for Bluebikes station lists and trip logs."""

import io
import json
import logging
from typing import Any, Dict, List, Union

import pandas as pd

from .models import Station, Trip

logger = logging.getLogger(__name__)

TRIP_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]
TIMESTAMP_COLUMNS = ["started_at", "ended_at"]


class DataLoader:
    """Loads and indexes stations and trips from already-downloaded files."""

    def __init__(self):
        """Initialize the loader."""
        self.stations: Dict[str, Station] = {}
        self.trips: List[Trip] = []

    def load_stations_from_file(self, stations_path: str) -> List[Station]:
        """Load stations from a local JSON file."""
        logger.info(f"Loading stations from {stations_path}")
        with open(stations_path, "r", encoding="utf-8") as f:
            return self.load_stations(f.read())

    def load_trips_from_file(self, trips_path: str) -> List[Trip]:
        """Load trips from a local CSV file."""
        logger.info(f"Loading trips from {trips_path}")
        return self.load_trips(trips_path)

    def load_stations(self, json_content: str) -> List[Station]:
        """
        Parse a stations JSON document.

        Accepts a plain list of station records or the GBFS-style envelope
        {"data": {"stations": [...]}}. Records that can't be parsed are skipped.

        Raises:
            ValueError: If the document isn't valid JSON or has no station list.
        """
        try:
            document = json.loads(json_content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid stations JSON: {e}") from e

        records = self._station_records(document)

        self.stations = {}
        skipped = 0
        for record in records:
            try:
                station = Station.from_record(record)
            except ValueError as e:
                logger.warning(f"Skipping station record: {e}")
                skipped += 1
                continue
            self.stations[station.short_name] = station

        if skipped:
            logger.warning(f"Skipped {skipped} malformed station records")
        logger.info(f"Loaded {len(self.stations)} stations")
        return list(self.stations.values())

    @staticmethod
    def _station_records(document: Any) -> List[dict]:
        if isinstance(document, list):
            return document
        if isinstance(document, dict):
            data = document.get("data", document)
            if isinstance(data, dict) and isinstance(data.get("stations"), list):
                return data["stations"]
        raise ValueError("Stations JSON has no station list")

    def load_trips(self, source: Union[str, io.IOBase]) -> List[Trip]:
        """
        Parse a trips CSV with pandas.

        Args:
            source: Path or file-like object. Literal CSV text is accepted too
                (anything containing a newline).

        Raises:
            ValueError: If required columns are missing.
        """
        if isinstance(source, str) and "\n" in source:
            source = io.StringIO(source)

        frame = pd.read_csv(source, dtype=str, keep_default_na=False)

        missing = [column for column in TRIP_COLUMNS if column not in frame.columns]
        if missing:
            raise ValueError(f"Trips CSV missing columns: {', '.join(missing)}")

        for column in TIMESTAMP_COLUMNS:
            frame[column] = pd.to_datetime(frame[column], errors="coerce", format="mixed")

        valid = (
            (frame["start_station_id"] != "")
            & (frame["end_station_id"] != "")
            & frame["started_at"].notna()
            & frame["ended_at"].notna()
        )
        dropped = int((~valid).sum())
        if dropped:
            logger.warning(f"Dropped {dropped} trips with missing station ids or timestamps")
        frame = frame[valid]

        self.trips = [Trip.from_record(record) for record in frame.to_dict("records")]
        logger.info(f"Loaded {len(self.trips)} trips")
        return list(self.trips)

    def get_station(self, short_name: str) -> Station:
        """Get station by short_name."""
        if short_name not in self.stations:
            raise ValueError(f"Station {short_name} not found")
        return self.stations[short_name]

    def clear(self) -> None:
        """Clear all loaded data to free memory."""
        self.stations.clear()
        self.trips.clear()
        logger.info("Cleared station and trip data from memory")
