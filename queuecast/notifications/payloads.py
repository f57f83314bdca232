"""
Notification payload builders.

Each builder maps a queue or appointment event to the title, message and
priority the delivery transport sends. Extra ``data`` passed by the caller
is merged last, so it can override the generated keys.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional, Union

from django.utils import timezone

from ..enums import NotificationPriority, NotificationType, QueueState
from ..exceptions import UnsupportedQueueStateError
from ..utils.converters import to_enum
from ..utils.time_utils import to_local
from ..values import NotificationPayload

QUEUE_STATE_NOTIFICATION_TYPES = {
    QueueState.PAUSED: NotificationType.QUEUE_PAUSED,
    QueueState.RESUMED: NotificationType.QUEUE_RESUMED,
    QueueState.CLOSED: NotificationType.QUEUE_CLOSED,
}

QUEUE_STATE_TITLES = {
    QueueState.PAUSED: "Queue Paused",
    QueueState.RESUMED: "Queue Resumed",
    QueueState.CLOSED: "Queue Closed",
}


def _timestamp(now: Optional[datetime]) -> str:
    return (now or timezone.now()).isoformat()


def _plural(count) -> str:
    return "" if count == 1 else "s"


def create_position_update_notification(
    position: int,
    queue_name: str,
    estimated_wait_time: Optional[float] = None,
    data: Optional[Dict[str, Any]] = None,
) -> NotificationPayload:
    """
    Notification for a change of queue position.

    Positions beyond the first mention the minutes remaining when an
    estimated wait (in seconds) is given.
    """
    if position <= 0:
        message = f"You're next in line for {queue_name}!"
    elif position == 1:
        message = f"You're #1 in line for {queue_name}. Get ready!"
    else:
        message = f"You're now #{position} in line for {queue_name}"

        if estimated_wait_time:
            minutes = math.ceil(estimated_wait_time / 60)
            message += f" ({minutes} min{_plural(minutes)} remaining)"

    return NotificationPayload(
        type=NotificationType.POSITION_CHANGED,
        title="Queue Update",
        message=message,
        data={
            "queue_name": queue_name,
            "position": position,
            "estimated_wait_time": estimated_wait_time,
            **(data or {}),
        },
        priority=NotificationPriority.HIGH,
    )


def create_your_turn_soon_notification(
    queue_name: str, minutes_until_turn: int, data: Optional[Dict[str, Any]] = None
) -> NotificationPayload:
    """Notification sent ahead of the customer's turn."""
    return NotificationPayload(
        type=NotificationType.YOUR_TURN_SOON,
        title="Heads Up!",
        message=(
            f"Your turn for {queue_name} is coming up in about "
            f"{minutes_until_turn} minute{_plural(minutes_until_turn)}."
        ),
        data={
            "queue_name": queue_name,
            "minutes_until_turn": minutes_until_turn,
            **(data or {}),
        },
        priority=NotificationPriority.HIGH,
    )


def create_your_turn_now_notification(
    queue_name: str,
    data: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> NotificationPayload:
    """Notification sent when the customer is called."""
    return NotificationPayload(
        type=NotificationType.YOUR_TURN_NOW,
        title="It's Your Turn!",
        message=f"Please proceed to {queue_name}.",
        data={
            "queue_name": queue_name,
            "timestamp": _timestamp(now),
            **(data or {}),
        },
        priority=NotificationPriority.MAX,
        sound=True,
    )


def create_queue_status_notification(
    status: Union[QueueState, str],
    queue_name: str,
    reason: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> NotificationPayload:
    """
    Notification for a queue being paused, resumed or closed.

    Only a pause carries its reason in the message.
    """
    status = to_enum(QueueState, status, UnsupportedQueueStateError)

    if status == QueueState.PAUSED and reason:
        message = f"The queue for {queue_name} has been paused: {reason}"
    else:
        message = f"The queue for {queue_name} has been {status.value.lower()}."

    return NotificationPayload(
        type=QUEUE_STATE_NOTIFICATION_TYPES[status],
        title=QUEUE_STATE_TITLES[status],
        message=message,
        data={
            "queue_name": queue_name,
            "status": status.value,
            "reason": reason,
            "timestamp": _timestamp(now),
            **(data or {}),
        },
        priority=NotificationPriority.HIGH,
    )


def create_custom_notification(
    title: str,
    message: str,
    data: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> NotificationPayload:
    return NotificationPayload(
        type=NotificationType.CUSTOM_MESSAGE,
        title=title,
        message=message,
        data={"timestamp": _timestamp(now), **(data or {})},
        priority=NotificationPriority.DEFAULT,
    )


def create_appointment_reminder(
    title: str,
    appointment_time: datetime,
    location: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
) -> NotificationPayload:
    """
    Reminder for an upcoming appointment, e.g.
    "Reminder: You have an appointment at 02:30 PM at Main Branch".
    """
    local_time = to_local(appointment_time)
    message = f"Reminder: You have an appointment at {local_time:%I:%M %p}"

    if location:
        message += f" at {location}"

    return NotificationPayload(
        type=NotificationType.APPOINTMENT_REMINDER,
        title=f"🔔 {title}",
        message=message,
        data={
            "appointment_time": appointment_time.isoformat(),
            "location": location,
            **(data or {}),
        },
        priority=NotificationPriority.HIGH,
    )
