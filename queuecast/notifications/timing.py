"""
Notification fire-time planning.

Decides when the "your turn is coming" notification should go out so that a
customer who leaves on receiving it arrives with ``notification_offset``
seconds to spare.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from django.utils import timezone

from ..conf import resolve
from ..values import ScheduledNotification
from .payloads import create_your_turn_now_notification, create_your_turn_soon_notification

logger = logging.getLogger(__name__)


def calculate_notification_time(
    current_position: int,
    average_service_time: float,
    travel_time: float,
    notification_offset: Optional[float] = None,
) -> float:
    """
    Seconds from now at which to notify a customer.

    Args:
        current_position: Current position in the queue
        average_service_time: Average service time per party in seconds
        travel_time: Time to reach the venue in seconds
        notification_offset: Extra lead time in seconds (defaults to the
            NOTIFICATION_OFFSET setting, 300)

    Returns:
        Delay in seconds, 0 meaning notify immediately
    """
    notification_offset = resolve(notification_offset, "NOTIFICATION_OFFSET")

    estimated_time = current_position * average_service_time
    return max(0, estimated_time - travel_time - notification_offset)


def plan_turn_soon_notification(
    position: int,
    average_service_time: float,
    travel_time: float,
    queue_name: str,
    notification_offset: Optional[float] = None,
    now: Optional[datetime] = None,
    data: Optional[Dict[str, Any]] = None,
) -> ScheduledNotification:
    """
    Plan the notification that tells a customer their turn is approaching.

    A customer already at the front (position 0 or less) gets the turn-now
    notification immediately. Otherwise the turn-soon notification carries
    the wait remaining at fire time, in whole minutes (at least 1).
    """
    if now is None:
        now = timezone.now()

    if position <= 0:
        payload = create_your_turn_now_notification(queue_name, data=data, now=now)
        return ScheduledNotification(fire_in_seconds=0, fire_at=now, payload=payload)

    fire_in = calculate_notification_time(
        position, average_service_time, travel_time, notification_offset
    )
    remaining = max(0, position * average_service_time - fire_in)
    minutes_until_turn = max(1, math.ceil(remaining / 60))

    payload = create_your_turn_soon_notification(
        queue_name, minutes_until_turn, data={"position": position, **(data or {})}
    )

    logger.debug(
        f"Turn-soon notification for position {position} in {queue_name} "
        f"scheduled in {fire_in}s"
    )

    return ScheduledNotification(
        fire_in_seconds=fire_in,
        fire_at=now + timedelta(seconds=fire_in),
        payload=payload,
    )
