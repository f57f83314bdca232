"""
Travel time estimation between locations.

This module estimates how long a customer needs to reach a venue, from the
great-circle distance, the travel mode and the time of day. The result feeds
the leave time advisor and the notification planner, which both work in
seconds.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional, Union

from ..conf import resolve
from ..enums import TravelMode
from ..exceptions import UnsupportedTravelModeError
from ..utils.converters import to_enum
from ..utils.time_utils import to_local
from .constants import TRAFFIC_FACTORS, TRAFFIC_SENSITIVE_MODES, TRAVEL_SPEEDS
from .distance import PointLike, calculate_distance

logger = logging.getLogger(__name__)


def get_traffic_factor(hour_of_day: Optional[int]) -> float:
    """
    Multiplier applied to road travel time for an hour of day (0-23).

    Returns 1.0 when the hour is unknown.
    """
    if hour_of_day is None:
        return 1.0

    hour = hour_of_day % 24
    if 5 <= hour < 7:
        return TRAFFIC_FACTORS["early_morning"]
    elif 7 <= hour < 9:
        return TRAFFIC_FACTORS["morning_rush"]
    elif 9 <= hour < 16:
        return TRAFFIC_FACTORS["mid_day"]
    elif 16 <= hour < 19:
        return TRAFFIC_FACTORS["evening_rush"]
    elif 19 <= hour < 23:
        return TRAFFIC_FACTORS["evening"]
    else:  # 23-5
        return TRAFFIC_FACTORS["night"]


def estimate_travel_time(
    origin: PointLike,
    destination: PointLike,
    travel_mode: Union[TravelMode, str, None] = None,
    hour_of_day: Optional[int] = None,
    average_speed: Optional[float] = None,
    with_traffic: Optional[bool] = None,
) -> int:
    """
    Estimate travel time between two geographic points.

    Args:
        origin: Starting point
        destination: Ending point
        travel_mode: 'walking', 'cycling', 'driving' or 'transit'
                     (defaults to the DEFAULT_TRAVEL_MODE setting)
        hour_of_day: Optional hour of day (0-23) used to pick a traffic factor
        average_speed: Optional override for the average speed in km/h
        with_traffic: Whether to account for traffic on driving and transit
                      trips (defaults to the APPLY_TRAFFIC setting)

    Returns:
        Estimated travel time in whole seconds, rounded up
    """
    mode = to_enum(
        TravelMode,
        resolve(travel_mode, "DEFAULT_TRAVEL_MODE"),
        UnsupportedTravelModeError,
    ).value
    with_traffic = resolve(with_traffic, "APPLY_TRAFFIC")

    distance_km = calculate_distance(origin, destination, "km")

    if average_speed is not None and average_speed <= 0:
        logger.warning(
            f"Ignoring non-positive average speed {average_speed}, using {mode} speed"
        )
        average_speed = None

    speed = average_speed if average_speed is not None else TRAVEL_SPEEDS[mode]
    travel_hours = distance_km / speed

    if with_traffic and mode in TRAFFIC_SENSITIVE_MODES:
        travel_hours *= get_traffic_factor(hour_of_day)

    return math.ceil(travel_hours * 3600)


def estimate_arrival_time(
    origin: PointLike,
    destination: PointLike,
    departure_time: datetime,
    travel_mode: Union[TravelMode, str, None] = None,
    average_speed: Optional[float] = None,
) -> datetime:
    """
    Estimate arrival time based on departure time and travel time.

    The local departure hour selects the traffic factor.
    """
    travel_seconds = estimate_travel_time(
        origin,
        destination,
        travel_mode=travel_mode,
        hour_of_day=to_local(departure_time).hour,
        average_speed=average_speed,
    )

    return departure_time + timedelta(seconds=travel_seconds)
