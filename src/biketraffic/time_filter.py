"""Time-of-day filtering of trips and clock label formatting."""

import logging
from datetime import datetime
from typing import Iterable, List

from .models import Trip

logger = logging.getLogger(__name__)

# Slider value meaning "show all trips"
NO_FILTER = -1
DEFAULT_WINDOW_MINUTES = 60
MINUTES_PER_DAY = 24 * 60


def minutes_since_midnight(moment: datetime) -> int:
    """Clock time of a timestamp in minutes; the date is ignored."""
    return moment.hour * 60 + moment.minute


def is_within_window(trip: Trip, target_minute: int, window_minutes: int = DEFAULT_WINDOW_MINUTES) -> bool:
    """
    Check whether a trip starts or ends near a time of day.

    Distances are plain absolute differences in minutes, so a trip at 23:59 is
    not considered close to a target of 00:01.

    Args:
        trip: Trip to test.
        target_minute: Minutes since midnight, or NO_FILTER to accept every trip.
        window_minutes: Inclusive tolerance on either side of the target.

    Returns:
        True if the start or end minute is within the window.
    """
    if target_minute == NO_FILTER:
        return True

    start_minute = minutes_since_midnight(trip.started_at)
    end_minute = minutes_since_midnight(trip.ended_at)
    return (
        abs(start_minute - target_minute) <= window_minutes
        or abs(end_minute - target_minute) <= window_minutes
    )


def filter_trips_by_time(
    trips: Iterable[Trip],
    time_filter: int,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
) -> List[Trip]:
    """
    Select the trips considered for a slider value.

    With NO_FILTER every trip is returned in its original order.
    """
    if time_filter == NO_FILTER:
        return list(trips)

    selected = [trip for trip in trips if is_within_window(trip, time_filter, window_minutes)]
    logger.debug(f"{len(selected)} trips within {window_minutes} min of minute {time_filter}")
    return selected


def validate_time_filter(value) -> int:
    """
    Coerce a slider value to an int in [NO_FILTER, MINUTES_PER_DAY - 1].

    Raises:
        ValueError: If the value isn't an integer in range.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid time filter {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid time filter {value!r}")
        value = int(value)
    try:
        minute = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid time filter {value!r}") from e

    if minute < NO_FILTER or minute >= MINUTES_PER_DAY:
        raise ValueError(f"Time filter {minute} out of range [{NO_FILTER}, {MINUTES_PER_DAY - 1}]")
    return minute


def format_clock_label(minutes: int) -> str:
    """Render minutes since midnight as a 12-hour label, e.g. "2:35 PM"."""
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise ValueError(f"Minutes {minutes} out of range [0, {MINUTES_PER_DAY - 1}]")

    hour, minute = divmod(int(minutes), 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def time_filter_label(time_filter: int) -> str:
    if time_filter == NO_FILTER:
        return "(any time)"
    return format_clock_label(time_filter)
