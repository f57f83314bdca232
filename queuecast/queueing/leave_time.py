"""
Leave time advice.

Combines the wait estimate with the customer's travel time and a safety
buffer to tell them when to set off for the venue.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Optional, Union

from django.utils import timezone

from ..conf import resolve
from ..enums import TravelMode
from ..geo.distance import PointLike
from ..geo.travel_time import estimate_travel_time
from ..utils.converters import clamp, round_half_up
from ..utils.time_utils import to_local
from ..values import LeaveTimeRecommendation
from .wait_time import calculate_wait_time, confidence_for_position

logger = logging.getLogger(__name__)


def calculate_buffer_time(
    estimated_wait_time: float,
    buffer_fraction: Optional[float] = None,
    min_buffer_time: Optional[float] = None,
    max_buffer_time: Optional[float] = None,
) -> int:
    """
    Safety margin in seconds: a fraction of the wait, bounded on both sides.

    When the bounds cross, the maximum wins.
    """
    buffer_fraction = resolve(buffer_fraction, "BUFFER_FRACTION")
    min_buffer_time = resolve(min_buffer_time, "MIN_BUFFER_TIME")
    max_buffer_time = resolve(max_buffer_time, "MAX_BUFFER_TIME")

    return clamp(
        round_half_up(estimated_wait_time * buffer_fraction),
        min_buffer_time,
        max_buffer_time,
    )


def calculate_recommended_leave_time(
    position: int,
    average_service_time: float,
    travel_time: float,
    variance_service_time: Optional[float] = None,
    buffer_fraction: Optional[float] = None,
    min_buffer_time: Optional[float] = None,
    max_buffer_time: Optional[float] = None,
    current_time: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> LeaveTimeRecommendation:
    """
    Calculate when a customer should leave to reach the venue in time.

    Args:
        position: Current position in the queue
        average_service_time: Average service time per party in seconds
        travel_time: Time to reach the venue in seconds
        variance_service_time: Spread of the wait estimate (default 0.2)
        buffer_fraction: Buffer as a fraction of the wait (default 0.2)
        min_buffer_time: Lower bound of the buffer in seconds (default 300)
        max_buffer_time: Upper bound of the buffer in seconds (default 1800)
        current_time: Moment the advice is computed for (default now)
        rng: Random source for the wait variance

    Returns:
        LeaveTimeRecommendation
    """
    if current_time is None:
        current_time = timezone.now()

    estimated_wait_time = calculate_wait_time(
        position, average_service_time, variance_service_time, rng=rng
    )
    buffer_time = calculate_buffer_time(
        estimated_wait_time, buffer_fraction, min_buffer_time, max_buffer_time
    )

    recommended_leave_in = max(0, estimated_wait_time - travel_time - buffer_time)

    return LeaveTimeRecommendation(
        position=position,
        estimated_wait_time=estimated_wait_time,
        travel_time=travel_time,
        buffer_time=buffer_time,
        recommended_leave_in_seconds=recommended_leave_in,
        leave_at=current_time + timedelta(seconds=recommended_leave_in),
        confidence=confidence_for_position(position),
    )


def calculate_leave_time_from_locations(
    position: int,
    average_service_time: float,
    origin: PointLike,
    venue: PointLike,
    travel_mode: Union[TravelMode, str, None] = None,
    current_time: Optional[datetime] = None,
    **options,
) -> LeaveTimeRecommendation:
    """
    Calculate leave time advice from the customer's and the venue's location.

    Travel time is estimated for the local hour of ``current_time``; remaining
    keyword arguments go to ``calculate_recommended_leave_time``.
    """
    if current_time is None:
        current_time = timezone.now()

    travel_time = estimate_travel_time(
        origin,
        venue,
        travel_mode=travel_mode,
        hour_of_day=to_local(current_time).hour,
    )
    logger.debug(f"Estimated {travel_time}s travel to venue for position {position}")

    return calculate_recommended_leave_time(
        position,
        average_service_time,
        travel_time,
        current_time=current_time,
        **options,
    )
