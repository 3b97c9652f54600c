"""Example usage of TrafficMap."""

import logging
import sys
from pathlib import Path

# Add src to path so we can import biketraffic
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from biketraffic.time_filter import NO_FILTER
from biketraffic.traffic_map import TrafficMap

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def parse_clock(text: str) -> int:
    """Turn "HH:MM" (24-hour) into minutes since midnight."""
    hours, _, minutes = text.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def print_traffic(traffic_map: TrafficMap, time_filter: int, limit: int = 10):
    """
    Display the busiest stations for a time filter.

    Args:
        traffic_map: Loaded map session.
        time_filter: Minutes since midnight, or NO_FILTER for all trips.
        limit: Number of stations to show.
    """
    view = traffic_map.update(time_filter)

    print(f"\n{'='*70}")
    print(f"Traffic at: {view.time_label} ({view.trip_count} trips)")
    print(f"{'='*70}\n")

    for station in TrafficMap.busiest_stations(view, limit):
        radius = view.radius(station)
        ratio = view.departure_ratio(station)
        print(f"{station.short_name:>8}  r={radius:5.1f}  flow={ratio:.1f}  {station.tooltip_text()}  {station.name}")

    print("\n" + "=" * 70 + "\n")


def interactive_mode(traffic_map: TrafficMap):
    """
    Run in interactive mode, allowing user to move the time slider.
    """
    print("Bike Traffic Map - Interactive Mode")
    print("Enter a time as HH:MM, or 'all' for any time")
    print("(Type 'quit' to exit)\n")

    while True:
        try:
            user_input = input("Time (or 'quit'): ").strip()

            if user_input.lower() in ["quit", "q", "exit"]:
                print("Goodbye!")
                break

            if not user_input:
                continue

            try:
                time_filter = NO_FILTER if user_input.lower() == "all" else parse_clock(user_input)
                print_traffic(traffic_map, time_filter)
            except ValueError as e:
                print(f"Invalid time: {e}")

        except KeyboardInterrupt:
            print("\n\nGoodbye!")
            break


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python example.py STATIONS_JSON TRIPS_CSV [HH:MM]")
        sys.exit(1)

    try:
        traffic_map = TrafficMap.from_files(sys.argv[1], sys.argv[2])
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load data: {e}")
        print(f"Error loading data: {e}")
        sys.exit(1)

    if len(sys.argv) > 3:
        try:
            print_traffic(traffic_map, parse_clock(sys.argv[3]))
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        interactive_mode(traffic_map)
